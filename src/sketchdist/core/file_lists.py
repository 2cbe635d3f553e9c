"""
Filesystem expansion of indirect inputs.

Provides:
- expand_file_list: read a path-list file, one input per line
- list_sketch_database: list the pre-built sketches in a search database folder

List-file expansion keeps file order and duplicates, and keeps blank lines
as empty strings, so downstream code can pair every listed input with its
output positionally.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from sketchdist.core.constants import TRACE_LEVEL
from sketchdist.core.exceptions import (
    DirectoryUnreadableError,
    FileListNotFoundError,
    FileListUnreadableError,
)

logger = logging.getLogger(__name__)


def expand_file_list(path: str | Path) -> list[str]:
    """
    Read a path-list file into an ordered list of trimmed lines.

    Args:
        path: Path to a UTF-8 text file with one entry per line.

    Returns:
        One string per line, surrounding whitespace removed.

    Raises:
        FileListNotFoundError: If the file does not exist.
        FileListUnreadableError: If the file cannot be opened or decoded.

    Example:
        >>> expand_file_list("genomes.txt")  # doctest: +SKIP
        ['a.fa', 'b.fa', '']
    """
    list_path = Path(path)
    try:
        with list_path.open(encoding="utf-8") as handle:
            entries = [line.strip() for line in handle]
    except FileNotFoundError:
        raise FileListNotFoundError(str(path)) from None
    except (OSError, UnicodeDecodeError) as e:
        raise FileListUnreadableError(str(path), str(e)) from e

    logger.debug("Expanded %s into %d entries", list_path, len(entries))
    return entries


def list_sketch_database(folder: str | Path) -> list[str]:
    """
    List every entry of a search database folder as a reference path.

    Entries are not filtered: the folder is expected to hold only the
    output of a previous sketch run. Paths are sorted so that repeated
    runs see the references in the same order.

    Args:
        folder: Directory of pre-built sketches.

    Returns:
        Path strings of the folder entries, joined onto ``folder`` exactly
        as it was spelled (a leading ``./`` is kept).

    Raises:
        DirectoryUnreadableError: If the folder is missing, not a
            directory, or cannot be listed.
    """
    db_path = os.fspath(folder)
    try:
        with os.scandir(db_path) as it:
            entries = sorted(entry.path for entry in it)
    except OSError as e:
        raise DirectoryUnreadableError(str(folder), e.strerror or str(e)) from e

    logger.debug("Found %d entries in sketch database %s", len(entries), db_path)
    for entry in entries:
        logger.log(TRACE_LEVEL, "Database entry: %s", entry)
    return entries

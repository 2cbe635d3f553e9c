"""
Shared pytest fixtures for sketchdist tests.

Provides temporary list files, sketch database folders and an invocation
factory for unit and integration testing.
"""

from __future__ import annotations

import logging
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest
from rich.logging import RichHandler

from sketchdist.core.resolver import Invocation


# =============================================================================
# Filesystem Fixtures
# =============================================================================


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Temporary directory that is cleaned up after tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def genome_list_file(temp_dir: Path) -> Path:
    """List file with padded entries and a blank line."""
    path = temp_dir / "genomes.txt"
    path.write_text("  a.fa\nb.fa  \n\n")
    return path


@pytest.fixture
def sketch_list_file(temp_dir: Path) -> Path:
    """List file naming only sketch artifacts."""
    path = temp_dir / "sketches.txt"
    path.write_text("db/a.sketch\ndb/b.sketch\n")
    return path


@pytest.fixture
def sketch_db(temp_dir: Path) -> Path:
    """Search database folder with two sketches and a marker file."""
    db = temp_dir / "db"
    db.mkdir()
    for name in ("b.sketch", "a.sketch", "markers.bin"):
        (db / name).write_bytes(b"")
    return db


# =============================================================================
# Invocation Fixtures
# =============================================================================


@pytest.fixture
def make_invocation() -> Callable[..., Invocation]:
    """Factory for invocations with threads preset to 4."""

    def _make(subcommand: str | None, **options: Any) -> Invocation:
        options.setdefault("threads", "4")
        return Invocation(subcommand=subcommand, options=options)

    return _make


# =============================================================================
# Logging Isolation
# =============================================================================


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    """Undo handlers, level and propagation set on the sketchdist logger by a test."""
    package_logger = logging.getLogger("sketchdist")
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = propagate

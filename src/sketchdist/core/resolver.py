"""
Resolution of a command-line invocation into sketchdist configuration.

The resolver runs once per process:

1. select the mode from the subcommand name
2. resolve worker threads and log level
3. resolve mode-specific inputs, numeric parameters and toggles
4. classify reference and query sets as sketches or raw sequence
5. assemble the frozen configuration models

Every logical input field has an ordered list of candidate sources; the
first one that is present wins. Missing required inputs and unparsable
numbers raise immediately instead of falling back to guessed values.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from sketchdist.core.assembler import (
    assemble,
    assemble_command_params,
    assemble_runtime,
    assemble_sketch_params,
)
from sketchdist.core.classify import inputs_are_sketch
from sketchdist.core.constants import (
    DEFAULT_C,
    DEFAULT_C_AAI,
    DEFAULT_K,
    DEFAULT_K_AAI,
    DEFAULT_MAX_RESULTS,
    DEFAULT_SEARCH_SCREEN,
    DEFAULT_TRIANGLE_SCREEN,
    DIST_STRING,
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_INFO,
    LOG_LEVEL_TRACE,
    SEARCH_QUERY_MARKERS,
    SEARCH_STRING,
    SKETCH_MARKERS,
    SKETCH_STRING,
    TRIANGLE_STRING,
    UNBOUNDED_MAX_RESULTS,
)
from sketchdist.core.exceptions import (
    InvalidNumberError,
    MissingInputError,
    UnrecognizedModeError,
)
from sketchdist.core.file_lists import expand_file_list, list_sketch_database
from sketchdist.models.params import (
    CommandParams,
    Mode,
    ResolvedConfig,
    RuntimeSettings,
    SketchParams,
)

logger = logging.getLogger(__name__)


_MODES: dict[str, Mode] = {
    SKETCH_STRING: Mode.SKETCH,
    DIST_STRING: Mode.DIST,
    TRIANGLE_STRING: Mode.TRIANGLE,
    SEARCH_STRING: Mode.SEARCH,
}


@dataclass(frozen=True)
class Invocation:
    """
    Raw parsed command line: the subcommand name and its option values.

    Option values are what the argument parser produced, before any
    interpretation: strings for numeric flags, sequences for repeatable
    inputs, booleans for toggles. An option counts as present when it is
    neither None, False, nor an empty sequence.
    """

    subcommand: str | None
    options: Mapping[str, Any] = field(default_factory=dict)

    def get(self, name: str) -> Any:
        """Value of an option, or None when it was not given."""
        value = self.options.get(name)
        if value is None or value is False:
            return None
        if isinstance(value, (list, tuple)) and not value:
            return None
        return value

    def is_present(self, name: str) -> bool:
        return self.get(name) is not None

    def flag(self, name: str) -> bool:
        return bool(self.options.get(name, False))


@dataclass(frozen=True)
class InputSource:
    """
    One way of supplying a list of input paths.

    Attributes:
        option: Key of the option in the invocation.
        flag: How the user spells it, for error messages.
        is_list_file: The option names a path-list file to expand rather
            than the paths themselves.
    """

    option: str
    flag: str
    is_list_file: bool = False

    def read(self, invocation: Invocation) -> list[str] | None:
        value = invocation.get(self.option)
        if value is None:
            return None
        if self.is_list_file:
            logger.debug("Reading %s list file %s", self.flag, value)
            return expand_file_list(value)
        if isinstance(value, str):
            return [value]
        return [str(item) for item in value]


def first_present(
    invocation: Invocation,
    sources: Sequence[InputSource],
) -> list[str] | None:
    """
    Resolve a logical input field from its candidate sources.

    Sources are tried in priority order and the first one present in the
    invocation wins; later sources are not read at all, so a list file
    that is shadowed by direct values is never opened.

    Args:
        invocation: Parsed command line.
        sources: Candidate sources, highest priority first.

    Returns:
        The input paths from the winning source, or None if no source
        was given.
    """
    for source in sources:
        values = source.read(invocation)
        if values is not None:
            return values
    return None


_FASTA_SOURCES: tuple[InputSource, ...] = (
    InputSource("fasta_files", "FASTA_FILES"),
    InputSource("fasta_list", "-l", is_list_file=True),
)

REFERENCE_SOURCES: dict[Mode, tuple[InputSource, ...]] = {
    Mode.SKETCH: _FASTA_SOURCES,
    Mode.TRIANGLE: _FASTA_SOURCES,
    Mode.DIST: (
        InputSource("reference", "REFERENCE"),
        InputSource("references", "-r"),
        InputSource("reference_list", "--rl", is_list_file=True),
    ),
}

QUERY_SOURCES: tuple[InputSource, ...] = (
    InputSource("query", "QUERY"),
    InputSource("queries", "-q"),
    InputSource("query_list", "--ql", is_list_file=True),
)


# Plain ASCII literals only; no whitespace, digit separators or other scripts
_INT_PATTERN = re.compile(r"\+?[0-9]+")
_FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def select_mode(subcommand: str | None) -> Mode:
    """
    Map the invoked subcommand name to its Mode.

    Raises:
        UnrecognizedModeError: If no known subcommand was invoked.
    """
    try:
        return _MODES[subcommand]  # type: ignore[index]
    except KeyError:
        raise UnrecognizedModeError(subcommand) from None


def parse_int(
    invocation: Invocation,
    option: str,
    flag: str,
    default: str | None = None,
    minimum: int = 0,
) -> int | None:
    """Parse an integer option, falling back to ``default`` when absent."""
    raw = invocation.get(option)
    if raw is None:
        raw = default
    if raw is None:
        return None

    expected = "a positive integer" if minimum == 1 else f"an integer >= {minimum}"
    if isinstance(raw, bool) or not _INT_PATTERN.fullmatch(str(raw)):
        raise InvalidNumberError(flag, raw, expected)
    value = int(str(raw))
    if value < minimum:
        raise InvalidNumberError(flag, raw, expected)
    return value


def parse_float(
    invocation: Invocation,
    option: str,
    flag: str,
    default: str | float | None = None,
) -> float | None:
    """
    Parse a float option, falling back to ``default`` when absent.

    Any decimal or scientific literal is accepted, including negative values,
    ``inf`` and ``nan``; callers decide what such values mean.
    """
    raw = invocation.get(option)
    if raw is None:
        raw = default
    if raw is None:
        return None

    if isinstance(raw, bool) or not _FLOAT_PATTERN.fullmatch(str(raw)):
        raise InvalidNumberError(flag, raw, "a number")
    return float(str(raw))


def resolve_runtime(invocation: Invocation) -> RuntimeSettings:
    """
    Resolve worker threads (-t) and log level (-v, --trace).

    --trace wins over -v; without either the level is INFO.
    """
    threads = parse_int(invocation, "threads", "-t", minimum=1)
    if threads is None:
        raise MissingInputError("thread count", ["-t"])

    if invocation.flag("trace"):
        log_level = LOG_LEVEL_TRACE
    elif invocation.flag("verbose"):
        log_level = LOG_LEVEL_DEBUG
    else:
        log_level = LOG_LEVEL_INFO

    return assemble_runtime(threads=threads, log_level=log_level)


def _resolve_output(invocation: Invocation) -> str:
    value = invocation.get("output")
    return "" if value is None else str(value)


def _resolve_references(mode: Mode, invocation: Invocation) -> list[str]:
    sources = REFERENCE_SOURCES[mode]
    ref_files = first_present(invocation, sources)
    if ref_files is None:
        raise MissingInputError(
            "reference inputs",
            [source.flag for source in sources],
            message="No reference inputs found.",
        )
    return ref_files


def _resolve_sequence_mode(
    mode: Mode,
    invocation: Invocation,
) -> tuple[SketchParams, CommandParams]:
    """Resolve sketch, triangle and dist invocations."""
    amino_acid = invocation.flag("aai")

    ref_files = _resolve_references(mode, invocation)
    logger.debug("Resolved %d reference inputs", len(ref_files))

    query_files: list[str] = []
    max_results = UNBOUNDED_MAX_RESULTS
    if mode == Mode.DIST:
        query_files = first_present(invocation, QUERY_SOURCES) or []
        logger.debug("Resolved %d query inputs", len(query_files))
        max_results = parse_int(invocation, "n", "-n", DEFAULT_MAX_RESULTS)

    # Alphabet defaults first so explicit -k/-c always win
    def_k = DEFAULT_K_AAI if amino_acid else DEFAULT_K
    def_c = DEFAULT_C_AAI if amino_acid else DEFAULT_C
    k = parse_int(invocation, "k", "-k", def_k, minimum=1)
    c = parse_int(invocation, "c", "-c", def_c, minimum=1)

    out_file_name = _resolve_output(invocation)

    screen_val = DEFAULT_TRIANGLE_SCREEN
    if mode == Mode.TRIANGLE:
        screen_val = parse_float(invocation, "screen", "-s", DEFAULT_TRIANGLE_SCREEN)

    robust = False
    median = False
    if mode in (Mode.TRIANGLE, Mode.DIST):
        robust = invocation.flag("robust")
        median = invocation.flag("median")

    sparse = mode == Mode.TRIANGLE and invocation.flag("sparse")

    sketch_params = assemble_sketch_params(k=k, c=c, amino_acid=amino_acid)
    command_params = assemble_command_params(
        mode,
        ref_files=ref_files,
        query_files=query_files,
        refs_are_sketch=inputs_are_sketch(ref_files, SKETCH_MARKERS),
        queries_are_sketch=inputs_are_sketch(query_files, SKETCH_MARKERS),
        out_file_name=out_file_name,
        max_results=max_results,
        screen=screen_val > 0,
        screen_val=screen_val,
        robust=robust,
        median=median,
        sparse=sparse,
    )
    return sketch_params, command_params


def _resolve_search(invocation: Invocation) -> tuple[SketchParams, CommandParams]:
    """
    Resolve a search invocation.

    The reference side is a database folder of pre-built sketches rather
    than a file list, so references are always sketches and the sketch
    parameters are the defaults (the real ones live in the database).
    Screening is always on in search, whatever the -s value.
    """
    out_file_name = _resolve_output(invocation)
    max_results = parse_int(invocation, "n", "-n", DEFAULT_MAX_RESULTS)

    query_files = first_present(invocation, QUERY_SOURCES) or []
    logger.debug("Resolved %d query inputs", len(query_files))

    folder = invocation.get("database")
    if folder is None:
        raise MissingInputError(
            "sketch database folder",
            ["-d"],
            message="No sketch database folder given.",
        )
    ref_files = list_sketch_database(folder)

    screen_val = parse_float(invocation, "screen", "-s", DEFAULT_SEARCH_SCREEN)

    command_params = assemble_command_params(
        Mode.SEARCH,
        ref_files=ref_files,
        query_files=query_files,
        refs_are_sketch=True,
        queries_are_sketch=inputs_are_sketch(query_files, SEARCH_QUERY_MARKERS),
        out_file_name=out_file_name,
        max_results=max_results,
        screen=True,
        screen_val=screen_val,
        robust=invocation.flag("robust"),
        median=invocation.flag("median"),
        sparse=False,
    )
    return SketchParams(), command_params


def resolve_invocation(invocation: Invocation) -> ResolvedConfig:
    """
    Resolve an invocation into its full configuration.

    Args:
        invocation: Parsed command line.

    Returns:
        ResolvedConfig with sketch parameters, command parameters and
        runtime settings.

    Raises:
        UnrecognizedModeError: If no known subcommand was invoked.
        MissingInputError: If a required input has no source.
        InvalidNumberError: If a numeric flag does not parse.
        FileListError: If a list file cannot be read.
        DirectoryUnreadableError: If the search database cannot be listed.
    """
    mode = select_mode(invocation.subcommand)
    runtime = resolve_runtime(invocation)

    if mode == Mode.SEARCH:
        sketch_params, command_params = _resolve_search(invocation)
    else:
        sketch_params, command_params = _resolve_sequence_mode(mode, invocation)

    logger.debug("Sketch parameters: %s", sketch_params)
    logger.debug("Command parameters: %s", command_params)
    logger.info(
        "Resolved %s: %d references, %d queries, k=%d, c=%d, threads=%d",
        mode.value,
        len(command_params.ref_files),
        len(command_params.query_files),
        sketch_params.k,
        sketch_params.c,
        runtime.threads,
    )
    return assemble(sketch_params, command_params, runtime)


def resolve_params(invocation: Invocation) -> tuple[SketchParams, CommandParams]:
    """Resolve an invocation into the (SketchParams, CommandParams) pair."""
    return resolve_invocation(invocation).pair

"""
Unit tests for invocation resolution.

Tests mode selection, first-present-wins input resolution, alphabet
defaults, per-mode toggles, the search path and fatal error handling.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from pathlib import Path

import pytest

from sketchdist.core.constants import UNBOUNDED_MAX_RESULTS
from sketchdist.core.exceptions import (
    DirectoryUnreadableError,
    FileListNotFoundError,
    InvalidNumberError,
    MissingInputError,
    UnrecognizedModeError,
)
from sketchdist.core.resolver import (
    QUERY_SOURCES,
    InputSource,
    Invocation,
    first_present,
    parse_float,
    parse_int,
    resolve_invocation,
    resolve_params,
    resolve_runtime,
    select_mode,
)
from sketchdist.models.params import CommandParams, Mode, SketchParams

MakeInvocation = Callable[..., Invocation]


class TestSelectMode:
    """Tests for select_mode."""

    @pytest.mark.parametrize(
        ("name", "mode"),
        [
            ("sketch", Mode.SKETCH),
            ("dist", Mode.DIST),
            ("triangle", Mode.TRIANGLE),
            ("search", Mode.SEARCH),
        ],
    )
    def test_known_modes(self, name: str, mode: Mode) -> None:
        assert select_mode(name) is mode

    @pytest.mark.parametrize("name", ["compare", "Sketch", "", None])
    def test_unknown_modes(self, name: str | None) -> None:
        with pytest.raises(UnrecognizedModeError):
            select_mode(name)

    def test_resolve_rejects_unknown_mode(self, make_invocation: MakeInvocation) -> None:
        with pytest.raises(UnrecognizedModeError):
            resolve_params(make_invocation("merge", fasta_files=["a.fa"]))


class TestInvocation:
    """Tests for option presence rules."""

    def test_absent_values(self) -> None:
        invocation = Invocation(
            "sketch",
            {"a": None, "b": [], "c": (), "d": False},
        )
        for name in ("a", "b", "c", "d", "missing"):
            assert not invocation.is_present(name)

    def test_present_values(self) -> None:
        invocation = Invocation("sketch", {"a": "x", "b": ["y"], "c": True, "d": ""})
        for name in ("a", "b", "c", "d"):
            assert invocation.is_present(name)

    def test_flag(self) -> None:
        invocation = Invocation("triangle", {"sparse": True, "robust": False})
        assert invocation.flag("sparse")
        assert not invocation.flag("robust")
        assert not invocation.flag("median")


class TestFirstPresent:
    """Tests for the first-present-wins helper."""

    def test_direct_values_win_over_list_file(self, genome_list_file: Path) -> None:
        invocation = Invocation(
            "dist",
            {"queries": ["q1.fa", "q2.fa"], "query_list": str(genome_list_file)},
        )
        assert first_present(invocation, QUERY_SOURCES) == ["q1.fa", "q2.fa"]

    def test_shadowed_list_file_is_not_read(self, temp_dir: Path) -> None:
        """A missing list file does not matter when direct values win."""
        invocation = Invocation(
            "dist",
            {"query": "q.fa", "query_list": str(temp_dir / "missing.txt")},
        )
        assert first_present(invocation, QUERY_SOURCES) == ["q.fa"]

    def test_falls_back_to_list_file(self, genome_list_file: Path) -> None:
        invocation = Invocation("dist", {"query_list": str(genome_list_file)})
        assert first_present(invocation, QUERY_SOURCES) == ["a.fa", "b.fa", ""]

    def test_priority_order(self) -> None:
        invocation = Invocation("dist", {"query": "pos.fa", "queries": ["flag.fa"]})
        assert first_present(invocation, QUERY_SOURCES) == ["pos.fa"]

    def test_nothing_present(self) -> None:
        assert first_present(Invocation("dist", {}), QUERY_SOURCES) is None

    def test_empty_sequence_is_absent(self) -> None:
        invocation = Invocation("dist", {"query": None, "queries": [], "query_list": None})
        assert first_present(invocation, QUERY_SOURCES) is None

    def test_single_string_becomes_one_path(self) -> None:
        source = InputSource("query", "QUERY")
        assert source.read(Invocation("dist", {"query": "q.fa"})) == ["q.fa"]


class TestNumberParsing:
    """Tests for parse_int and parse_float."""

    def test_default_used_when_absent(self) -> None:
        assert parse_int(Invocation("sketch", {}), "k", "-k", "15", minimum=1) == 15

    def test_no_default(self) -> None:
        assert parse_int(Invocation("sketch", {}), "k", "-k") is None

    def test_override(self) -> None:
        assert parse_int(Invocation("sketch", {"k": "21"}), "k", "-k", "15", minimum=1) == 21

    @pytest.mark.parametrize("raw", ["abc", "1.5", "", "0", "-3"])
    def test_invalid_positive_int(self, raw: str) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            parse_int(Invocation("sketch", {"k": raw}), "k", "-k", "15", minimum=1)
        assert exc_info.value.flag == "-k"

    def test_zero_allowed_for_non_negative(self) -> None:
        assert parse_int(Invocation("dist", {"n": "0"}), "n", "-n", "10") == 0

    def test_float(self) -> None:
        assert parse_float(Invocation("triangle", {"screen": "0.8"}), "screen", "-s") == 0.8

    @pytest.mark.parametrize("raw", ["high", "", "0.5x", "1_0.5", " 0.5", "0.5\n", "٠.٥", "0x1p-2"])
    def test_invalid_float(self, raw: str) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            parse_float(Invocation("triangle", {"screen": raw}), "screen", "-s", 0.0)
        assert exc_info.value.flag == "-s"

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("-0.5", -0.5), ("+.25", 0.25), ("1e-3", 0.001), ("5.", 5.0), ("-inf", -math.inf)],
    )
    def test_signed_and_scientific_floats(self, raw: str, expected: float) -> None:
        assert parse_float(Invocation("triangle", {"screen": raw}), "screen", "-s") == expected

    @pytest.mark.parametrize("raw", ["nan", "NaN", "inf", "Infinity"])
    def test_non_finite_floats_parse(self, raw: str) -> None:
        value = parse_float(Invocation("triangle", {"screen": raw}), "screen", "-s")
        assert value is not None
        assert math.isnan(value) or math.isinf(value)

    @pytest.mark.parametrize("raw", ["1_5", "١٢", "１５", " 15", "15 ", "15\n", "0x0f", "1e2"])
    def test_int_rejects_non_plain_digits(self, raw: str) -> None:
        with pytest.raises(InvalidNumberError):
            parse_int(Invocation("sketch", {"k": raw}), "k", "-k", "15", minimum=1)

    def test_int_accepts_plus_sign(self) -> None:
        assert parse_int(Invocation("sketch", {"k": "+21"}), "k", "-k", "15", minimum=1) == 21

    @pytest.mark.parametrize(
        ("mode", "option", "flag"),
        [
            ("sketch", "threads", "-t"),
            ("sketch", "k", "-k"),
            ("triangle", "c", "-c"),
            ("dist", "n", "-n"),
            ("triangle", "screen", "-s"),
        ],
    )
    def test_digit_separator_rejected_for_every_numeric_flag(
        self, make_invocation: MakeInvocation, mode: str, option: str, flag: str
    ) -> None:
        options = {option: "1_5"}
        if mode == "dist":
            options["references"] = ["r.fa"]
        else:
            options["fasta_files"] = ["a.fa"]
        with pytest.raises(InvalidNumberError) as exc_info:
            resolve_params(make_invocation(mode, **options))
        assert exc_info.value.flag == flag


class TestResolveRuntime:
    """Tests for thread count and log level resolution."""

    def test_defaults_to_info(self, make_invocation: MakeInvocation) -> None:
        runtime = resolve_runtime(make_invocation("sketch", threads="8"))
        assert runtime.threads == 8
        assert runtime.log_level == "INFO"

    def test_verbose(self, make_invocation: MakeInvocation) -> None:
        assert resolve_runtime(make_invocation("sketch", verbose=True)).log_level == "DEBUG"

    def test_trace_wins_over_verbose(self, make_invocation: MakeInvocation) -> None:
        runtime = resolve_runtime(make_invocation("sketch", verbose=True, trace=True))
        assert runtime.log_level == "TRACE"

    @pytest.mark.parametrize("threads", ["zero", "0", "-2"])
    def test_invalid_threads(self, threads: str) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            resolve_runtime(Invocation("sketch", {"threads": threads}))
        assert exc_info.value.flag == "-t"

    def test_missing_threads(self) -> None:
        with pytest.raises(MissingInputError):
            resolve_runtime(Invocation("sketch", {"fasta_files": ["a.fa"]}))


class TestSketchParamDefaults:
    """Alphabet defaults and -k/-c overrides."""

    @pytest.mark.parametrize("mode", ["sketch", "triangle"])
    def test_nucleotide_defaults(self, make_invocation: MakeInvocation, mode: str) -> None:
        sketch, _ = resolve_params(make_invocation(mode, fasta_files=["a.fa"]))
        assert (sketch.k, sketch.c) == (15, 125)
        assert not sketch.amino_acid
        assert not sketch.use_syncmers

    @pytest.mark.parametrize("mode", ["sketch", "triangle"])
    def test_amino_acid_defaults(self, make_invocation: MakeInvocation, mode: str) -> None:
        sketch, _ = resolve_params(make_invocation(mode, fasta_files=["a.faa"], aai=True))
        assert (sketch.k, sketch.c) == (6, 15)
        assert sketch.amino_acid

    def test_dist_amino_acid_defaults(self, make_invocation: MakeInvocation) -> None:
        sketch, _ = resolve_params(make_invocation("dist", reference=["r.faa"], aai=True))
        assert (sketch.k, sketch.c) == (6, 15)

    @pytest.mark.parametrize("aai", [False, True])
    def test_explicit_values_override_defaults(
        self, make_invocation: MakeInvocation, aai: bool
    ) -> None:
        sketch, _ = resolve_params(
            make_invocation("sketch", fasta_files=["a.fa"], aai=aai, k="19", c="200")
        )
        assert (sketch.k, sketch.c) == (19, 200)
        assert sketch.amino_acid is aai

    def test_only_k_overridden(self, make_invocation: MakeInvocation) -> None:
        sketch, _ = resolve_params(make_invocation("sketch", fasta_files=["a.fa"], k="12"))
        assert (sketch.k, sketch.c) == (12, 125)

    def test_unparsable_c(self, make_invocation: MakeInvocation) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            resolve_params(make_invocation("sketch", fasta_files=["a.fa"], c="many"))
        assert exc_info.value.flag == "-c"


class TestSketchAndTriangle:
    """Tests for the FASTA-input modes."""

    def test_sketch_from_files(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation("sketch", fasta_files=["a.fa", "b.fa"], output="out")
        )
        assert command.mode is Mode.SKETCH
        assert command.ref_files == ("a.fa", "b.fa")
        assert command.query_files == ()
        assert command.out_file_name == "out"
        assert not command.refs_are_sketch
        assert not command.screen
        assert command.max_results == UNBOUNDED_MAX_RESULTS

    def test_sketch_from_list_file(
        self, make_invocation: MakeInvocation, genome_list_file: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation("sketch", fasta_list=str(genome_list_file))
        )
        assert command.ref_files == ("a.fa", "b.fa", "")

    def test_files_win_over_list_file(
        self, make_invocation: MakeInvocation, genome_list_file: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation("triangle", fasta_files=["x.fa"], fasta_list=str(genome_list_file))
        )
        assert command.ref_files == ("x.fa",)

    @pytest.mark.parametrize("mode", ["sketch", "triangle"])
    def test_missing_references(self, make_invocation: MakeInvocation, mode: str) -> None:
        with pytest.raises(MissingInputError) as exc_info:
            resolve_params(make_invocation(mode))
        assert "No reference inputs found" in exc_info.value.message

    def test_missing_list_file(self, make_invocation: MakeInvocation, temp_dir: Path) -> None:
        with pytest.raises(FileListNotFoundError):
            resolve_params(make_invocation("sketch", fasta_list=str(temp_dir / "none.txt")))

    def test_output_defaults_to_empty(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(make_invocation("sketch", fasta_files=["a.fa"]))
        assert command.out_file_name == ""
        assert not command.has_output

    def test_sketch_ignores_triangle_toggles(self, make_invocation: MakeInvocation) -> None:
        """Sketch mode never reads screening, estimator or sparse options."""
        _, command = resolve_params(
            make_invocation(
                "sketch",
                fasta_files=["a.fa"],
                screen="0.9",
                sparse=True,
                robust=True,
                median=True,
            )
        )
        assert not command.screen
        assert command.screen_val == 0.0
        assert not command.sparse
        assert not command.robust
        assert not command.median

    def test_triangle_end_to_end(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation(
                "triangle",
                fasta_files=["a.sketch", "b.sketch"],
                sparse=True,
                screen="0.5",
            )
        )
        assert command.mode is Mode.TRIANGLE
        assert command.refs_are_sketch
        assert command.sparse
        assert command.screen
        assert command.screen_val == 0.5

    @pytest.mark.parametrize(
        ("screen", "expected"),
        [
            (None, False),
            ("0", False),
            ("0.0", False),
            ("-0.5", False),
            ("nan", False),
            ("0.01", True),
            ("0.95", True),
        ],
    )
    def test_triangle_screen_follows_value(
        self, make_invocation: MakeInvocation, screen: str | None, expected: bool
    ) -> None:
        _, command = resolve_params(
            make_invocation("triangle", fasta_files=["a.fa"], screen=screen)
        )
        assert command.screen is expected
        assert command.screen == (command.screen_val > 0)

    def test_triangle_estimators(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation("triangle", fasta_files=["a.fa"], robust=True, median=True)
        )
        assert command.robust
        assert command.median

    def test_marker_references_are_sketches(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation("triangle", fasta_files=["a.sketch", "b.marker"])
        )
        assert command.refs_are_sketch

    def test_mixed_references_are_not_sketches(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation("triangle", fasta_files=["a.sketch", "b.fa"])
        )
        assert not command.refs_are_sketch


class TestDist:
    """Tests for dist mode."""

    def test_end_to_end(self, make_invocation: MakeInvocation) -> None:
        sketch, command = resolve_params(
            make_invocation("dist", reference=["r.fa"], query="q.fa")
        )
        assert sketch == SketchParams(k=15, c=125, use_syncmers=False, amino_acid=False)
        assert command.mode is Mode.DIST
        assert command.ref_files == ("r.fa",)
        assert command.query_files == ("q.fa",)
        assert not command.refs_are_sketch
        assert not command.queries_are_sketch
        assert command.max_results == UNBOUNDED_MAX_RESULTS

    def test_no_queries_is_not_an_error(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(make_invocation("dist", references=["r.fa"]))
        assert command.query_files == ()
        assert not command.queries_are_sketch

    def test_reference_spellings(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(make_invocation("dist", references=["r1.fa", "r2.fa"]))
        assert command.ref_files == ("r1.fa", "r2.fa")

    def test_positional_references_win(
        self, make_invocation: MakeInvocation, genome_list_file: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation(
                "dist",
                reference=["pos.fa"],
                references=["flag.fa"],
                reference_list=str(genome_list_file),
            )
        )
        assert command.ref_files == ("pos.fa",)

    def test_direct_references_win_over_list(
        self, make_invocation: MakeInvocation, genome_list_file: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation(
                "dist", references=["flag.fa"], reference_list=str(genome_list_file)
            )
        )
        assert command.ref_files == ("flag.fa",)

    def test_reference_and_query_lists(
        self,
        make_invocation: MakeInvocation,
        genome_list_file: Path,
        sketch_list_file: Path,
    ) -> None:
        _, command = resolve_params(
            make_invocation(
                "dist",
                reference_list=str(sketch_list_file),
                query_list=str(genome_list_file),
            )
        )
        assert command.ref_files == ("db/a.sketch", "db/b.sketch")
        assert command.refs_are_sketch
        assert command.query_files == ("a.fa", "b.fa", "")
        assert not command.queries_are_sketch

    def test_marker_queries_are_sketches(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation("dist", references=["r.fa"], queries=["q.marker"])
        )
        assert command.queries_are_sketch

    def test_missing_references(self, make_invocation: MakeInvocation) -> None:
        with pytest.raises(MissingInputError) as exc_info:
            resolve_params(make_invocation("dist", query="q.fa"))
        assert exc_info.value.flags == ("REFERENCE", "-r", "--rl")

    def test_max_results(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(make_invocation("dist", references=["r.fa"], n="5"))
        assert command.max_results == 5

    def test_invalid_max_results(self, make_invocation: MakeInvocation) -> None:
        with pytest.raises(InvalidNumberError) as exc_info:
            resolve_params(make_invocation("dist", references=["r.fa"], n="five"))
        assert exc_info.value.flag == "-n"

    def test_dist_never_screens(self, make_invocation: MakeInvocation) -> None:
        _, command = resolve_params(
            make_invocation("dist", references=["r.fa"], screen="0.9", robust=True)
        )
        assert not command.screen
        assert command.robust
        assert not command.sparse


class TestSearch:
    """Tests for the search path."""

    def test_references_come_from_database(
        self, make_invocation: MakeInvocation, sketch_db: Path
    ) -> None:
        sketch, command = resolve_params(
            make_invocation("search", database=str(sketch_db), query=["q.fa"])
        )
        assert command.mode is Mode.SEARCH
        assert command.ref_files == (
            str(sketch_db / "a.sketch"),
            str(sketch_db / "b.sketch"),
            str(sketch_db / "markers.bin"),
        )
        assert command.refs_are_sketch
        assert sketch == SketchParams()

    def test_refs_are_sketch_even_for_empty_database(
        self, make_invocation: MakeInvocation, temp_dir: Path
    ) -> None:
        db = temp_dir / "empty_db"
        db.mkdir()
        _, command = resolve_params(make_invocation("search", database=str(db)))
        assert command.ref_files == ()
        assert command.refs_are_sketch

    def test_screen_always_on(self, make_invocation: MakeInvocation, sketch_db: Path) -> None:
        _, command = resolve_params(make_invocation("search", database=str(sketch_db)))
        assert command.screen
        assert command.screen_val == 0.0

    def test_screen_value(self, make_invocation: MakeInvocation, sketch_db: Path) -> None:
        _, command = resolve_params(
            make_invocation("search", database=str(sketch_db), screen="0.8")
        )
        assert command.screen
        assert command.screen_val == 0.8

    def test_ignores_sketch_overrides(
        self, make_invocation: MakeInvocation, sketch_db: Path
    ) -> None:
        sketch, command = resolve_params(
            make_invocation("search", database=str(sketch_db), k="21", c="50", aai=True)
        )
        assert sketch == SketchParams()
        assert not command.sparse

    def test_marker_queries_are_not_sketches(
        self, make_invocation: MakeInvocation, sketch_db: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation("search", database=str(sketch_db), queries=["q.marker"])
        )
        assert not command.queries_are_sketch

    def test_sketch_queries(self, make_invocation: MakeInvocation, sketch_db: Path) -> None:
        _, command = resolve_params(
            make_invocation("search", database=str(sketch_db), query=["q.sketch"])
        )
        assert command.queries_are_sketch

    def test_query_list(
        self, make_invocation: MakeInvocation, sketch_db: Path, genome_list_file: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation(
                "search", database=str(sketch_db), query_list=str(genome_list_file)
            )
        )
        assert command.query_files == ("a.fa", "b.fa", "")

    def test_max_results_and_estimators(
        self, make_invocation: MakeInvocation, sketch_db: Path
    ) -> None:
        _, command = resolve_params(
            make_invocation(
                "search", database=str(sketch_db), n="3", robust=True, median=True, output="hits.tsv"
            )
        )
        assert command.max_results == 3
        assert command.robust
        assert command.median
        assert command.out_file_name == "hits.tsv"

    def test_default_max_results(self, make_invocation: MakeInvocation, sketch_db: Path) -> None:
        _, command = resolve_params(make_invocation("search", database=str(sketch_db)))
        assert command.max_results == UNBOUNDED_MAX_RESULTS

    def test_missing_database_option(self, make_invocation: MakeInvocation) -> None:
        with pytest.raises(MissingInputError) as exc_info:
            resolve_params(make_invocation("search", query=["q.fa"]))
        assert exc_info.value.flags == ("-d",)

    def test_unreadable_database(self, make_invocation: MakeInvocation, temp_dir: Path) -> None:
        with pytest.raises(DirectoryUnreadableError) as exc_info:
            resolve_params(make_invocation("search", database=str(temp_dir / "missing")))
        assert "Issue with folder specified by -d option" in exc_info.value.message


class TestResolveInvocation:
    """Tests for the full resolution result."""

    def test_bundles_runtime(self, make_invocation: MakeInvocation) -> None:
        config = resolve_invocation(
            make_invocation("sketch", fasta_files=["a.fa"], threads="12", verbose=True)
        )
        assert config.runtime.threads == 12
        assert config.runtime.log_level == "DEBUG"
        assert isinstance(config.command, CommandParams)
        assert config.pair == (config.sketch, config.command)

    def test_invalid_threads_are_fatal(self, make_invocation: MakeInvocation) -> None:
        with pytest.raises(InvalidNumberError):
            resolve_invocation(make_invocation("sketch", fasta_files=["a.fa"], threads="x"))

    def test_thread_error_before_search(self, temp_dir: Path) -> None:
        """Thread count is resolved before the search path reads the database."""
        invocation = Invocation(
            "search", {"threads": "0", "database": str(temp_dir / "missing")}
        )
        with pytest.raises(InvalidNumberError):
            resolve_invocation(invocation)

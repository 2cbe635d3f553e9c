"""
Pydantic models for resolved sketchdist configuration.

These models are the output of parameter resolution: the algorithmic
sketch parameters, the mode-specific command parameters, and the runtime
settings (worker threads, log level) applied at the CLI boundary. All of
them are frozen; they are built once per invocation and handed read-only
to the sketching/distance engine.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, Literal, Self

from pydantic import BaseModel, Field, model_validator

from sketchdist.core.constants import (
    DEFAULT_C,
    DEFAULT_K,
    LOG_LEVEL_DEBUG,
    LOG_LEVEL_INFO,
    LOG_LEVEL_TRACE,
    UNBOUNDED_MAX_RESULTS,
)

logger = logging.getLogger(__name__)


class Mode(str, Enum):
    """Operating mode selected by the subcommand."""

    SKETCH = "sketch"
    DIST = "dist"
    TRIANGLE = "triangle"
    SEARCH = "search"


class SketchParams(BaseModel):
    """
    Algorithmic parameters shared by every mode that builds sketches.

    Defaults are the nucleotide pair; amino-acid runs get their own pair
    from the resolver before any -k/-c override is applied.
    """

    k: int = Field(default=int(DEFAULT_K), gt=0, description="k-mer length")
    c: int = Field(
        default=int(DEFAULT_C),
        gt=0,
        description="Subsampling (compression) factor; roughly 1/c of k-mers are kept",
    )
    use_syncmers: bool = Field(
        default=False,
        description="Reserved toggle for syncmer seeding; never enabled from the CLI",
    )
    amino_acid: bool = Field(
        default=False,
        description="Amino-acid alphabet (--aai) instead of nucleotides",
    )

    model_config = {"frozen": True}


class CommandParams(BaseModel):
    """
    Fully resolved execution configuration for one invocation.

    Invariants (checked on construction):
        - Outside search, ``screen`` is exactly ``screen_val > 0``.
          Search always screens, whatever the threshold.
        - Only dist and search carry query files.
        - Only triangle produces sparse output.
    """

    mode: Mode
    ref_files: tuple[str, ...] = Field(
        default=(),
        description="Reference inputs in command-line or list-file order",
    )
    query_files: tuple[str, ...] = Field(
        default=(),
        description="Query inputs (dist and search only)",
    )
    refs_are_sketch: bool = False
    queries_are_sketch: bool = False
    out_file_name: str = Field(default="", description="Output path; empty means unset")
    max_results: int = Field(default=UNBOUNDED_MAX_RESULTS, ge=0)
    screen: bool = False
    screen_val: float = 0.0
    robust: bool = False
    median: bool = False
    sparse: bool = False

    @model_validator(mode="after")
    def validate_mode_consistency(self) -> Self:
        """Cross-field rules that depend on the mode."""
        if self.mode != Mode.SEARCH and self.screen != (self.screen_val > 0):
            msg = (
                f"screen must equal screen_val > 0 in {self.mode.value} mode "
                f"(screen={self.screen}, screen_val={self.screen_val})"
            )
            raise ValueError(msg)
        if self.query_files and self.mode not in (Mode.DIST, Mode.SEARCH):
            msg = f"query files are not accepted in {self.mode.value} mode"
            raise ValueError(msg)
        if self.sparse and self.mode != Mode.TRIANGLE:
            msg = f"sparse output is only available in triangle mode, not {self.mode.value}"
            raise ValueError(msg)
        return self

    @property
    def has_output(self) -> bool:
        """Whether an output file name was given."""
        return self.out_file_name != ""

    model_config = {"frozen": True}


class RuntimeSettings(BaseModel):
    """Process-wide settings handed to the logging sink and the worker pool."""

    threads: int = Field(ge=1, description="Worker threads for sketching/distance work")
    log_level: Literal["INFO", "DEBUG", "TRACE"] = Field(default=LOG_LEVEL_INFO)

    @property
    def is_verbose(self) -> bool:
        return self.log_level in (LOG_LEVEL_DEBUG, LOG_LEVEL_TRACE)

    model_config = {"frozen": True}


class ResolvedConfig(BaseModel):
    """
    Everything one invocation resolves to.

    ``sketch`` and ``command`` go to the engine; ``runtime`` configures
    logging and the worker pool before any work starts. Can be written to
    and read back from YAML so a run's configuration can be inspected or
    replayed.
    """

    sketch: SketchParams
    command: CommandParams
    runtime: RuntimeSettings

    model_config = {"frozen": True}

    @property
    def pair(self) -> tuple[SketchParams, CommandParams]:
        """The (SketchParams, CommandParams) pair consumed by the engine."""
        return self.sketch, self.command

    @classmethod
    def from_yaml(cls, path: Path) -> ResolvedConfig:
        """
        Load a resolved configuration from a YAML file.

        The YAML file uses the nested layout written by :meth:`to_yaml`.
        Unknown keys are ignored.

        Args:
            path: Path to YAML configuration file.

        Returns:
            ResolvedConfig populated from the YAML values.

        Raises:
            FileNotFoundError: If YAML file does not exist.
            ValueError: If YAML is not a mapping or violates model rules.
        """
        import yaml

        raw = yaml.safe_load(path.read_text())
        if not isinstance(raw, dict):
            msg = f"YAML config must be a mapping, got {type(raw).__name__}"
            raise ValueError(msg)

        return cls(**_flatten_yaml_config(raw))

    def to_yaml(self, path: Path) -> None:
        """
        Write the resolved configuration to a YAML file.

        Args:
            path: Output file path.
        """
        path.write_text(self.to_yaml_str())
        logger.debug("Wrote resolved configuration to %s", path)

    def to_yaml_str(self) -> str:
        """Render the resolved configuration as a YAML string."""
        import yaml

        data = _build_yaml_structure(self)
        return yaml.dump(data, default_flow_style=False, sort_keys=False)


def _flatten_yaml_config(raw: dict[str, Any]) -> dict[str, Any]:
    """
    Map the nested YAML layout onto ResolvedConfig keyword arguments.

    Maps:
        mode -> command.mode
        sketch.* -> sketch.*
        inputs.references -> command.ref_files
        screening.threshold -> command.screen_val
        runtime.* -> runtime.*
    """
    sketch: dict[str, Any] = {}
    command: dict[str, Any] = {}
    runtime: dict[str, Any] = {}

    _map_if_present(raw, "mode", command, "mode")

    sketch_sec = raw.get("sketch", {})
    _map_if_present(sketch_sec, "k", sketch, "k")
    _map_if_present(sketch_sec, "c", sketch, "c")
    _map_if_present(sketch_sec, "use_syncmers", sketch, "use_syncmers")
    _map_if_present(sketch_sec, "amino_acid", sketch, "amino_acid")

    inputs = raw.get("inputs", {})
    _map_if_present(inputs, "references", command, "ref_files")
    _map_if_present(inputs, "queries", command, "query_files")
    _map_if_present(inputs, "references_are_sketch", command, "refs_are_sketch")
    _map_if_present(inputs, "queries_are_sketch", command, "queries_are_sketch")

    screening = raw.get("screening", {})
    _map_if_present(screening, "enabled", command, "screen")
    _map_if_present(screening, "threshold", command, "screen_val")

    estimators = raw.get("estimators", {})
    _map_if_present(estimators, "robust", command, "robust")
    _map_if_present(estimators, "median", command, "median")

    output = raw.get("output", {})
    _map_if_present(output, "file", command, "out_file_name")
    _map_if_present(output, "max_results", command, "max_results")
    _map_if_present(output, "sparse", command, "sparse")

    runtime_sec = raw.get("runtime", {})
    _map_if_present(runtime_sec, "threads", runtime, "threads")
    _map_if_present(runtime_sec, "log_level", runtime, "log_level")

    return {
        "sketch": SketchParams(**sketch),
        "command": CommandParams(**command),
        "runtime": RuntimeSettings(**runtime),
    }


def _map_if_present(
    source: dict[str, Any],
    source_key: str,
    target: dict[str, Any],
    target_key: str,
) -> None:
    """Copy value from source dict to target dict if key exists."""
    if source_key in source and source[source_key] is not None:
        target[target_key] = source[source_key]


def _build_yaml_structure(config: ResolvedConfig) -> dict[str, Any]:
    """Build nested YAML dict from a ResolvedConfig instance."""
    command = config.command
    return {
        "mode": command.mode.value,
        "sketch": {
            "k": config.sketch.k,
            "c": config.sketch.c,
            "use_syncmers": config.sketch.use_syncmers,
            "amino_acid": config.sketch.amino_acid,
        },
        "inputs": {
            "references": list(command.ref_files),
            "queries": list(command.query_files),
            "references_are_sketch": command.refs_are_sketch,
            "queries_are_sketch": command.queries_are_sketch,
        },
        "screening": {
            "enabled": command.screen,
            "threshold": command.screen_val,
        },
        "estimators": {
            "robust": command.robust,
            "median": command.median,
        },
        "output": {
            "file": command.out_file_name,
            "max_results": command.max_results,
            "sparse": command.sparse,
        },
        "runtime": {
            "threads": config.runtime.threads,
            "log_level": config.runtime.log_level,
        },
    }

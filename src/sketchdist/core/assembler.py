"""
Packaging of resolved values into the frozen configuration models.

Model validation failures are turned into ConfigurationError here, so that
callers of the resolver only ever see the sketchdist error hierarchy.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from sketchdist.core.exceptions import ConfigurationError
from sketchdist.models.params import (
    CommandParams,
    Mode,
    ResolvedConfig,
    RuntimeSettings,
    SketchParams,
)

ModelT = TypeVar("ModelT", bound=BaseModel)


def _build(model: type[ModelT], **values: Any) -> ModelT:
    try:
        return model(**values)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or model.__name__}: {err['msg']}"
            for err in e.errors()
        )
        raise ConfigurationError(
            message=f"Invalid {model.__name__}: {problems}",
        ) from e


def assemble_sketch_params(
    *,
    k: int,
    c: int,
    amino_acid: bool,
    use_syncmers: bool = False,
) -> SketchParams:
    """Build SketchParams from resolved k, c and alphabet."""
    return _build(SketchParams, k=k, c=c, amino_acid=amino_acid, use_syncmers=use_syncmers)


def assemble_command_params(
    mode: Mode,
    *,
    ref_files: Sequence[str],
    query_files: Sequence[str],
    refs_are_sketch: bool,
    queries_are_sketch: bool,
    out_file_name: str,
    max_results: int,
    screen: bool,
    screen_val: float,
    robust: bool,
    median: bool,
    sparse: bool,
) -> CommandParams:
    """
    Build CommandParams from resolved values.

    Args:
        mode: Selected mode.
        ref_files: Reference inputs, in order.
        query_files: Query inputs, in order (empty outside dist/search).
        refs_are_sketch: Classifier result for ``ref_files``.
        queries_are_sketch: Classifier result for ``query_files``.
        out_file_name: Output path, empty string when unset.
        max_results: Result cap per query.
        screen: Whether screening is active.
        screen_val: Screening threshold.
        robust: Robust estimator toggle.
        median: Median estimator toggle.
        sparse: Sparse triangle output toggle.

    Returns:
        Frozen CommandParams.

    Raises:
        ConfigurationError: If the values violate a model rule.
    """
    return _build(
        CommandParams,
        mode=mode,
        ref_files=tuple(ref_files),
        query_files=tuple(query_files),
        refs_are_sketch=refs_are_sketch,
        queries_are_sketch=queries_are_sketch,
        out_file_name=out_file_name,
        max_results=max_results,
        screen=screen,
        screen_val=screen_val,
        robust=robust,
        median=median,
        sparse=sparse,
    )


def assemble_runtime(*, threads: int, log_level: str) -> RuntimeSettings:
    """Build RuntimeSettings for the logging sink and worker pool."""
    return _build(RuntimeSettings, threads=threads, log_level=log_level)


def assemble(
    sketch: SketchParams,
    command: CommandParams,
    runtime: RuntimeSettings,
) -> ResolvedConfig:
    """Bundle the three resolved models for one invocation."""
    return ResolvedConfig(sketch=sketch, command=command, runtime=runtime)

"""
Pydantic data models for sketchdist.

Provides the frozen configuration models produced by parameter resolution.
"""

from sketchdist.models.params import (
    CommandParams,
    Mode,
    ResolvedConfig,
    RuntimeSettings,
    SketchParams,
)

__all__ = [
    "CommandParams",
    "Mode",
    "ResolvedConfig",
    "RuntimeSettings",
    "SketchParams",
]

"""
Sketchdist: parameter resolution for genomic sketching and distance estimation.

Turns a sketch, dist, triangle or search invocation into the validated,
immutable configuration consumed by the sketching/distance engine.
"""

__version__ = "0.1.0"
__author__ = "Sketchdist Team"

from sketchdist.core.resolver import Invocation, resolve_invocation, resolve_params
from sketchdist.models.params import CommandParams, Mode, SketchParams

__all__ = [
    "CommandParams",
    "Invocation",
    "Mode",
    "SketchParams",
    "__version__",
    "resolve_invocation",
    "resolve_params",
]

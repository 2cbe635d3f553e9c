"""
Core parameter resolution for sketchdist.

This module contains the resolver that turns a parsed command line into
the frozen sketch and command configuration, together with its
collaborators for list-file expansion and sketch-set classification.
"""

from sketchdist.core.classify import inputs_are_sketch
from sketchdist.core.file_lists import expand_file_list, list_sketch_database
from sketchdist.core.resolver import (
    Invocation,
    resolve_invocation,
    resolve_params,
    select_mode,
)

__all__ = [
    "Invocation",
    "expand_file_list",
    "inputs_are_sketch",
    "list_sketch_database",
    "resolve_invocation",
    "resolve_params",
    "select_mode",
]

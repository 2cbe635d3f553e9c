"""
Classification of input sets as raw sequence files or pre-built sketches.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sketchdist.core.constants import SKETCH_MARKERS


def is_sketch_path(path: str, markers: Iterable[str] = SKETCH_MARKERS) -> bool:
    """Whether a path carries one of the sketch markers anywhere in it."""
    return any(marker in path for marker in markers)


def inputs_are_sketch(
    paths: Sequence[str],
    markers: Sequence[str] = SKETCH_MARKERS,
) -> bool:
    """
    Decide whether a whole input set should be treated as sketches.

    The rule is all-or-nothing: a single path without a marker makes the
    whole set raw sequence input. Markers are matched by substring
    containment, not as strict suffixes, so ``x.sketch.gz`` still counts.
    An empty set is never a sketch set.

    Args:
        paths: Input paths in command-line order.
        markers: Recognized marker substrings.

    Returns:
        True if ``paths`` is non-empty and every path carries a marker.

    Example:
        >>> inputs_are_sketch(["x.sketch", "y.marker"])
        True
        >>> inputs_are_sketch(["x.marker"], markers=(".sketch",))
        False
    """
    if not paths:
        return False
    return all(is_sketch_path(path, markers) for path in paths)

"""
CLI commands for sketchdist.

Provides the command-line interface for the sketch, dist, triangle and
search modes.
"""

__all__ = ["dist", "main", "search", "sketch", "triangle"]

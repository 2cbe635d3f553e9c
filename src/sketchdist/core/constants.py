"""
Constants used throughout the sketchdist package.

Centralizes subcommand names, alphabet-dependent sketch defaults and
file naming conventions so the resolver and the CLI agree on them.
"""

from __future__ import annotations

# =============================================================================
# Subcommand Names
# =============================================================================

SKETCH_STRING = "sketch"
DIST_STRING = "dist"
TRIANGLE_STRING = "triangle"
SEARCH_STRING = "search"

# =============================================================================
# Sketch Parameter Defaults
#
# Defaults are chosen by alphabet before any -k/-c override is applied.
# Values are kept as strings because they stand in for raw CLI values and
# go through the same parsing path as user input.
# =============================================================================

# Nucleotide alphabet
DEFAULT_K = "15"
DEFAULT_C = "125"

# Amino-acid alphabet (--aai)
DEFAULT_K_AAI = "6"
DEFAULT_C_AAI = "15"

# =============================================================================
# Result and Screening Defaults
# =============================================================================

# -n default, large enough to behave as "no limit"
DEFAULT_MAX_RESULTS = "1000000000"
UNBOUNDED_MAX_RESULTS = int(DEFAULT_MAX_RESULTS)

# -s default for search; screening is always active in that mode
DEFAULT_SEARCH_SCREEN = "0.00"

# Triangle screening is off unless -s is given
DEFAULT_TRIANGLE_SCREEN = 0.0

# =============================================================================
# File Naming Conventions
# =============================================================================

SKETCH_SUFFIX = ".sketch"
MARKER_SUFFIX = ".marker"

# Reference/query sets outside search accept either artifact
SKETCH_MARKERS: tuple[str, ...] = (SKETCH_SUFFIX, MARKER_SUFFIX)

# Search queries are only treated as sketches when they are .sketch files
SEARCH_QUERY_MARKERS: tuple[str, ...] = (SKETCH_SUFFIX,)

# =============================================================================
# Logging
# =============================================================================

# Finer than DEBUG, enabled with --trace
TRACE_LEVEL = 5

LOG_LEVEL_INFO = "INFO"
LOG_LEVEL_DEBUG = "DEBUG"
LOG_LEVEL_TRACE = "TRACE"

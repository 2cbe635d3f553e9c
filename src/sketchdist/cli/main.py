"""
Main CLI entry point for sketchdist.

Provides one subcommand per operating mode:
- sketch: Build sketches from FASTA files
- dist: Query-vs-reference distances
- triangle: All-vs-all distances within one set
- search: Query a pre-built sketch database
"""

from __future__ import annotations

import typer
from rich import print as rprint

from sketchdist import __version__
from sketchdist.core.constants import DIST_STRING, SEARCH_STRING, SKETCH_STRING, TRIANGLE_STRING

app = typer.Typer(
    name="sketchdist",
    help="Sketch genomes and estimate distances between them",
    add_completion=False,
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        rprint(f"sketchdist version {__version__}")
        raise typer.Exit


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    Sketchdist: sketch genomes and estimate distances between them.

    Every subcommand resolves its options into a validated configuration
    before any sketching or distance work starts.
    """


# Import subcommands
from sketchdist.cli import dist, search, sketch, triangle

# Register subcommands
app.command(name=SKETCH_STRING)(sketch.sketch)
app.command(name=DIST_STRING)(dist.dist)
app.command(name=TRIANGLE_STRING)(triangle.triangle)
app.command(name=SEARCH_STRING)(search.search)


if __name__ == "__main__":
    app()

"""
Triangle command for all-vs-all distances within one set of genomes.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from sketchdist.cli.utils import finish_command, resolve_or_exit

console = Console()


def triangle(
    ctx: typer.Context,
    fasta_files: list[str] | None = typer.Argument(
        None,
        help="FASTA or sketch files to compare all-vs-all",
        show_default=False,
    ),
    fasta_list: str | None = typer.Option(
        None,
        "--fasta-list",
        "-l",
        help="File listing one input path per line (used when no inputs are given)",
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file [default: stdout]",
        show_default=False,
    ),
    k: str | None = typer.Option(
        None,
        "-k",
        help="k-mer size [default: 15, or 6 with --aai]",
        show_default=False,
    ),
    c: str | None = typer.Option(
        None,
        "-c",
        help="Compression factor [default: 125, or 15 with --aai]",
        show_default=False,
    ),
    aai: bool = typer.Option(
        False,
        "--aai",
        help="Use the amino-acid alphabet",
    ),
    screen: str | None = typer.Option(
        None,
        "-s",
        "--screen",
        help="Screen out pairs below this identity before computing distances [default: off]",
        show_default=False,
    ),
    sparse: bool = typer.Option(
        False,
        "--sparse",
        help="Write an edge list instead of a matrix",
    ),
    robust: bool = typer.Option(
        False,
        "--robust",
        help="Use the robust estimator",
    ),
    median: bool = typer.Option(
        False,
        "--median",
        help="Use the median estimator",
    ),
    threads: str = typer.Option(
        ...,
        "--threads",
        "-t",
        help="Number of threads",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    trace: bool = typer.Option(
        False,
        "--trace",
        help="Enable trace logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress the configuration summary",
    ),
    save_config: Path | None = typer.Option(
        None,
        "--save-config",
        help="Write the resolved configuration to this YAML file",
        dir_okay=False,
    ),
) -> None:
    """
    Compute all-vs-all distances within one set of genomes.

    Examples:

        # Full matrix
        sketchdist triangle sketches/*.sketch -o matrix.txt -t 16

        # Sparse edge list, screening pairs below 0.8
        sketchdist triangle -l genomes.txt --sparse -s 0.8 -t 16
    """
    config = resolve_or_exit(ctx)
    finish_command(ctx, config, console, quiet=quiet, save_config=save_config)

"""
Sketch command for building sketches from sequence files.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from sketchdist.cli.utils import finish_command, resolve_or_exit

console = Console()


def sketch(
    ctx: typer.Context,
    fasta_files: list[str] | None = typer.Argument(
        None,
        help="FASTA files to sketch",
        show_default=False,
    ),
    fasta_list: str | None = typer.Option(
        None,
        "--fasta-list",
        "-l",
        help="File listing one FASTA path per line (used when no FASTA files are given)",
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output folder for the sketches",
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
    Sketch genomes.

    Examples:

        # Sketch three genomes into sketches/
        sketchdist sketch a.fa b.fa c.fa -o sketches -t 8

        # Sketch every genome listed in genomes.txt, amino-acid mode
        sketchdist sketch -l genomes.txt -o sketches --aai -t 8
    """
    config = resolve_or_exit(ctx)
    finish_command(ctx, config, console, quiet=quiet, save_config=save_config)

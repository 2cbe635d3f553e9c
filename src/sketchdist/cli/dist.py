"""
Dist command for distances between a query set and a reference set.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from sketchdist.cli.utils import finish_command, resolve_or_exit

console = Console()


def dist(
    ctx: typer.Context,
    query: str | None = typer.Argument(
        None,
        help="Query FASTA or sketch",
        show_default=False,
    ),
    reference: list[str] | None = typer.Argument(
        None,
        help="Reference FASTA or sketch files",
        show_default=False,
    ),
    queries: list[str] | None = typer.Option(
        None,
        "--queries",
        "-q",
        help="Query file (repeatable; used when no positional query is given)",
    ),
    query_list: str | None = typer.Option(
        None,
        "--ql",
        help="File listing one query path per line",
    ),
    references: list[str] | None = typer.Option(
        None,
        "--references",
        "-r",
        help="Reference file (repeatable; used when no positional references are given)",
    ),
    reference_list: str | None = typer.Option(
        None,
        "--rl",
        help="File listing one reference path per line",
    ),
    n: str | None = typer.Option(
        None,
        "-n",
        help="Maximum number of results per query [default: unlimited]",
        show_default=False,
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
    Compute distances from queries to references.

    Examples:

        # One query against two references
        sketchdist dist query.fa ref1.fa ref2.fa -t 4

        # Query and reference lists, top 5 hits per query
        sketchdist dist --ql queries.txt --rl refs.txt -n 5 -t 16
    """
    config = resolve_or_exit(ctx)
    finish_command(ctx, config, console, quiet=quiet, save_config=save_config)

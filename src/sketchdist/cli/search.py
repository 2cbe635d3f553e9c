"""
Search command for querying a pre-built sketch database.
"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from sketchdist.cli.utils import finish_command, resolve_or_exit

console = Console()


def search(
    ctx: typer.Context,
    query: list[str] | None = typer.Argument(
        None,
        help="Query FASTA or sketch files",
        show_default=False,
    ),
    queries: list[str] | None = typer.Option(
        None,
        "--queries",
        "-q",
        help="Query file (repeatable; used when no positional queries are given)",
    ),
    query_list: str | None = typer.Option(
        None,
        "--ql",
        help="File listing one query path per line",
    ),
    database: str | None = typer.Option(
        None,
        "--database",
        "-d",
        help="Folder of sketches built with the sketch command",
    ),
    n: str | None = typer.Option(
        None,
        "-n",
        help="Maximum number of results per query [default: unlimited]",
        show_default=False,
    ),
    screen: str | None = typer.Option(
        None,
        "-s",
        "--screen",
        help="Screening threshold; screening is always on for search [default: 0.00]",
        show_default=False,
    ),
    output: str | None = typer.Option(
        None,
        "--output",
        "-o",
        help="Output file [default: stdout]",
        show_default=False,
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
    Search queries against a sketch database.

    Sketch parameters come from the database, so -k, -c and --aai are not
    accepted here.

    Examples:

        sketchdist search -d sketches/ query.fa -t 8

        sketchdist search -d sketches/ --ql queries.txt -n 10 -t 8
    """
    config = resolve_or_exit(ctx)
    finish_command(ctx, config, console, quiet=quiet, save_config=save_config)

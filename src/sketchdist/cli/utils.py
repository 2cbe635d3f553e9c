"""
Shared CLI utilities for sketchdist commands.

Provides the error boundary every subcommand goes through, the resolved
configuration summary, and quiet-mode console handling.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from sketchdist.core.exceptions import SketchdistError
from sketchdist.core.resolver import Invocation, resolve_invocation, resolve_runtime
from sketchdist.core.runtime import ExecutionRuntime, configure_logging, configure_runtime
from sketchdist.models.params import ResolvedConfig

err_console = Console(stderr=True)


class QuietConsole:
    """Console wrapper that suppresses output in quiet mode.

    This class wraps a Rich Console instance and conditionally suppresses
    print output when quiet mode is enabled. All other console methods
    are delegated to the wrapped instance.

    Example:
        >>> console = Console()
        >>> qc = QuietConsole(console, quiet=True)
        >>> qc.print("This won't be shown")  # Suppressed
    """

    def __init__(self, console: Console, quiet: bool = False):
        self._console = console
        self._quiet = quiet

    @property
    def console(self) -> Console:
        """Access the underlying Rich Console instance."""
        return self._console

    def print(self, *args: Any, **kwargs: Any) -> None:
        """Print to console unless quiet mode is enabled."""
        if not self._quiet:
            self._console.print(*args, **kwargs)

    def __getattr__(self, name: str) -> Any:
        return getattr(self._console, name)


def report_error(error: SketchdistError, console: Console | None = None) -> None:
    """Print an error and its suggestion without interpreting rich markup."""
    console = console or err_console
    console.print(f"Error: {error.message}", style="red", markup=False, soft_wrap=True)
    if error.suggestion:
        console.print(error.suggestion, style="dim", markup=False, soft_wrap=True)


def resolve_or_exit(ctx: typer.Context) -> ResolvedConfig:
    """Resolve the current subcommand, exiting with code 1 on any error.

    Logging is configured from the runtime settings before the rest of the
    invocation is resolved, so resolution itself is logged at the
    requested level.

    Args:
        ctx: Typer context of the invoked subcommand.

    Returns:
        The resolved configuration.

    Raises:
        typer.Exit: With code 1 if resolution fails.
    """
    invocation = Invocation(subcommand=ctx.info_name, options=dict(ctx.params))
    try:
        configure_logging(resolve_runtime(invocation))
        return resolve_invocation(invocation)
    except SketchdistError as e:
        report_error(e)
        raise typer.Exit(code=1) from None


def build_summary_table(config: ResolvedConfig) -> Table:
    """Build a two-column table describing a resolved configuration."""
    command = config.command
    sketch = config.sketch

    table = Table(title=f"Resolved {command.mode.value} configuration", show_header=False)
    table.add_column("Parameter", style="bold")
    table.add_column("Value")

    table.add_row("References", f"{len(command.ref_files)} ({_kind(command.refs_are_sketch)})")
    if command.query_files:
        table.add_row(
            "Queries", f"{len(command.query_files)} ({_kind(command.queries_are_sketch)})"
        )
    table.add_row("k / c", f"{sketch.k} / {sketch.c}")
    table.add_row("Alphabet", "amino acid" if sketch.amino_acid else "nucleotide")
    table.add_row("Output", command.out_file_name or "-")
    table.add_row("Screening", f"{command.screen_val}" if command.screen else "off")
    estimators = [name for name, on in (("robust", command.robust), ("median", command.median)) if on]
    table.add_row("Estimator", ", ".join(estimators) or "mean")
    if command.sparse:
        table.add_row("Sparse output", "yes")
    table.add_row("Threads", str(config.runtime.threads))
    return table


def _kind(is_sketch: bool) -> str:
    return "sketches" if is_sketch else "sequences"


def finish_command(
    ctx: typer.Context,
    config: ResolvedConfig,
    console: Console,
    *,
    quiet: bool = False,
    save_config: Path | None = None,
) -> ExecutionRuntime:
    """Report the resolved configuration and start the worker pool.

    The pool stays up for the rest of the command: it is stored on
    ``ctx.obj`` and shut down when the Typer context closes.

    Args:
        ctx: Typer context of the invoked subcommand.
        config: Resolved configuration.
        console: Console for the summary.
        quiet: Suppress the summary table.
        save_config: If given, write the configuration as YAML here.

    Returns:
        The started execution runtime.
    """
    out = QuietConsole(console, quiet=quiet)
    out.print(build_summary_table(config))

    if save_config is not None:
        save_config.parent.mkdir(parents=True, exist_ok=True)
        config.to_yaml(save_config)
        out.print(f"[bold]Configuration saved:[/bold] {save_config}")

    runtime = configure_runtime(config.runtime)
    ctx.call_on_close(runtime.close)
    runtime.start()
    ctx.obj = runtime
    out.print(f"[dim]Worker pool started: {runtime.threads} threads[/dim]")
    return runtime

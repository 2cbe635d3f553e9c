"""
Runtime configuration applied from resolved settings.

Provides:
- configure_logging: install a rich handler on the sketchdist logger
- ExecutionRuntime: worker pool sized from the resolved thread count

Both take RuntimeSettings explicitly; nothing here reads the command line.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from types import TracebackType

from rich.console import Console
from rich.logging import RichHandler

from sketchdist.core.constants import LOG_LEVEL_TRACE, TRACE_LEVEL
from sketchdist.models.params import RuntimeSettings

logger = logging.getLogger(__name__)

PACKAGE_LOGGER = "sketchdist"

logging.addLevelName(TRACE_LEVEL, LOG_LEVEL_TRACE)


def _level_number(name: str) -> int:
    if name == LOG_LEVEL_TRACE:
        return TRACE_LEVEL
    return logging.getLevelName(name)


def configure_logging(
    settings: RuntimeSettings,
    console: Console | None = None,
) -> logging.Logger:
    """
    Point the sketchdist logger at stderr with the resolved level.

    Calling it again replaces the handler installed by the previous call,
    so the level can be changed without duplicating output. Records do not
    propagate to the root logger, so a handler installed there by the host
    application does not print them a second time.

    Args:
        settings: Resolved runtime settings.
        console: Console to write to. Defaults to a stderr console.

    Returns:
        The configured package logger.
    """
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        if isinstance(handler, RichHandler):
            package_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(_level_number(settings.log_level))
    package_logger.propagate = False
    return package_logger


class ExecutionRuntime:
    """
    Worker pool for sketching and distance work.

    The pool is created on first use with exactly ``settings.threads``
    workers and shut down when the runtime is closed.

    Example:
        >>> with configure_runtime(settings) as runtime:  # doctest: +SKIP
        ...     results = list(runtime.executor.map(work, items))
    """

    def __init__(self, settings: RuntimeSettings):
        self.settings = settings
        self._executor: ThreadPoolExecutor | None = None

    @property
    def threads(self) -> int:
        return self.settings.threads

    @property
    def executor(self) -> ThreadPoolExecutor:
        if self._executor is None:
            logger.debug("Starting worker pool with %d threads", self.threads)
            self._executor = ThreadPoolExecutor(
                max_workers=self.threads,
                thread_name_prefix="sketchdist",
            )
        return self._executor

    @property
    def started(self) -> bool:
        return self._executor is not None

    def start(self) -> ThreadPoolExecutor:
        """Create the worker pool now instead of on first submission."""
        return self.executor

    def close(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> ExecutionRuntime:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


def configure_runtime(settings: RuntimeSettings) -> ExecutionRuntime:
    """Create the execution runtime for the resolved thread count."""
    return ExecutionRuntime(settings)

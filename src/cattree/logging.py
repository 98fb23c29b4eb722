"""Opt-in loguru logging for cattree.

Every cattree module logs through the shared loguru ``logger``; the package is
disabled on import and switched on by ``enable_logging()``. Pipeline stages
(load, split, fit, evaluate, save, restore, export) are logged at the custom
``STAGE`` level through ``log_stage``, which tags each record with a ``stage``
extra that the console format renders in brackets.

Note:
    Importing this module removes loguru's default stderr handler (ID 0) so
    ``enable_logging()`` does not print every record twice.
"""

from __future__ import annotations

import contextlib
import sys
from typing import TYPE_CHECKING, Any, Final, Literal, TextIO

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

# Between INFO=20 and WARNING=30
STAGE_LEVEL: Final[str] = "STAGE"
STAGE_LEVEL_NUMBER: Final[int] = 25

try:
    logger.level(STAGE_LEVEL)
except ValueError:
    logger.level(STAGE_LEVEL, no=STAGE_LEVEL_NUMBER, icon="🌳")

type LogLevel = Literal[
    "TRACE",
    "DEBUG",
    "INFO",
    "STAGE",
    "WARNING",
    "ERROR",
    "CRITICAL",
]

type LogFormat = Literal["short", "full"]

type Stage = Literal["load", "split", "fit", "evaluate", "export", "save", "restore"]

_LOCATION_FORMATS: Final[dict[LogFormat, str]] = {
    "short": "<cyan>{function}</cyan>",
    "full": "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>",
}

# Handler ids added by enable_logging and not yet removed
_open_handler_ids: set[int] = set()


def log_stage(stage: Stage, message: str, **fields: Any) -> None:
    """Log a pipeline stage at STAGE level on behalf of the calling function.

    Args:
        stage (Stage): Pipeline stage the record belongs to; stored as the
            ``stage`` extra.
        message (str): Log message.
        **fields (Any): Structured values stored in the record's extras.
    """
    logger.bind(stage=stage).opt(depth=1).log(STAGE_LEVEL, message, **fields)


class LoggingHandle:
    """A console handler added by `enable_logging`.

    Disable it explicitly or use it as a context manager. Once every handle is
    disabled the cattree logger is switched off again.

    Examples:
        >>> with enable_logging(level="DEBUG"):  # doctest: +SKIP
        ...     fit_tree(rows, attribute_names, "PlayTennis", metric="info")
    """

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        _open_handler_ids.add(handler_id)

    @property
    def is_active(self) -> bool:
        """Whether the handler is still attached."""
        return self.handler_id is not None

    def disable(self) -> None:
        """Detach the handler; calling it again does nothing."""
        if self.handler_id is None:
            return
        _open_handler_ids.discard(self.handler_id)
        with contextlib.suppress(ValueError):
            logger.remove(self.handler_id)
        self.handler_id = None
        if not _open_handler_ids:
            logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()


def enable_logging(
    *,
    level: LogLevel = STAGE_LEVEL,
    log_format: LogFormat = "short",
    sink: TextIO | None = None,
) -> LoggingHandle:
    """Send cattree log records to a text stream.

    Args:
        level (LogLevel): Minimum level to display. Defaults to "STAGE", which
            shows one record per pipeline stage. "DEBUG" adds every chosen
            split and "TRACE" adds leaf formation.
        log_format (LogFormat): "short" (default) names the emitting function;
            "full" adds the module and line number.
        sink (TextIO | None): Stream to write to. Defaults to ``sys.stderr``.

    Returns:
        LoggingHandle: Handle that removes the handler again.
    """
    logger.enable(PACKAGE_NAME)
    location = _LOCATION_FORMATS[log_format]

    def _format(record: Record) -> str:
        stage = "[{extra[stage]}] " if "stage" in record["extra"] else ""
        return (
            "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
            "<level>{level: <8}</level> | "  # noqa: RUF027 - loguru format string
            f"{location} - {stage}"
            "<level>{message}</level> {extra}\n{exception}"
        )

    handler_id = logger.add(
        sys.stderr if sink is None else sink,
        level=level,
        filter=PACKAGE_NAME,
        format=_format,
    )
    return LoggingHandle(handler_id)

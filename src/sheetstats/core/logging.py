"""Structured logging for the statistics engine.

Two output modes:
- ``console``: human readable lines for local runs and notebooks
- ``json``: one JSON object per line for services that ship logs

Usage:
    from sheetstats.core.logging import get_logger, log_context, timed

    logger = get_logger(__name__)

    with log_context(sheet="Sales", request_id="req-123"):
        logger.info("pivot_built", rows=4)

    with timed(logger, "sheet_profiled", sheet="Sales") as fields:
        ...
        fields["columns"] = 12
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator, MutableMapping
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, cast

import structlog
from structlog.typing import FilteringBoundLogger

# Key/value pairs attached to every event emitted inside a log_context block
_scope: ContextVar[dict[str, Any] | None] = ContextVar("sheetstats_log_scope", default=None)


def _merge_scope(
    logger: Any, method_name: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    """Processor copying the active log_context values into the event."""
    scope = _scope.get()
    if scope:
        for key, value in scope.items():
            event_dict.setdefault(key, value)
    return event_dict


def _level(name: str) -> int:
    return cast(int, getattr(logging, name.upper(), logging.INFO))


def _renderer(log_format: str, color: bool) -> list[structlog.types.Processor]:
    if log_format == "json":
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [
        structlog.dev.ConsoleRenderer(
            colors=color,
            exception_formatter=structlog.dev.plain_traceback,
        )
    ]


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "console",
    show_timestamps: bool = True,
    color: bool = True,
) -> None:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: DEBUG, INFO, WARNING or ERROR
        log_format: "console" or "json"
        show_timestamps: Prefix events with an ISO UTC timestamp
        color: Colorize console output
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _merge_scope,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if show_timestamps:
        processors.insert(0, structlog.processors.TimeStamper(fmt="iso", utc=True))

    level = _level(log_level)
    structlog.configure(
        processors=processors + _renderer(log_format, color),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )

    # stdlib loggers (numpy, scipy) share the stream
    logging.basicConfig(
        format="%(message)s",
        level=level,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def configure_from_settings() -> None:
    """Configure logging from ``SHEETSTATS_LOG_LEVEL`` / ``SHEETSTATS_LOG_FORMAT``."""
    from sheetstats.core.config import get_settings

    settings = get_settings()
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    """Get a structured logger (typically ``get_logger(__name__)``)."""
    return cast(FilteringBoundLogger, structlog.get_logger(name))


class LogContext:
    """Scope extra key/value pairs onto every event logged inside a block.

    Nested scopes stack; the inner value wins for a repeated key.
    """

    def __init__(self, **context: Any):
        self.context = context
        self._token: Any = None

    def __enter__(self) -> LogContext:
        outer = _scope.get() or {}
        self._token = _scope.set({**outer, **self.context})
        return self

    def __exit__(self, *args: Any) -> None:
        if self._token is not None:
            _scope.reset(self._token)
            self._token = None


def log_context(**context: Any) -> LogContext:
    """Create a LogContext.

    Usage:
        with log_context(sheet="Sales"):
            logger.info("pair_analyzed_on_demand")  # includes sheet="Sales"
    """
    return LogContext(**context)


@contextmanager
def timed(
    logger: FilteringBoundLogger,
    event: str,
    **context: Any,
) -> Iterator[dict[str, Any]]:
    """Log ``event`` with ``duration_seconds`` when the block finishes.

    The yielded dict is merged into the event, so the block can report counts
    it only knows at the end. Setting ``log_level`` in it picks the logger
    method (default "info"). Nothing is logged when the block raises.
    """
    fields: dict[str, Any] = dict(context)
    start = time.monotonic()
    yield fields
    fields["duration_seconds"] = round(time.monotonic() - start, 4)
    level = fields.pop("log_level", "info")
    getattr(logger, level)(event, **fields)


# Console output at INFO until the host application configures logging
configure_logging()

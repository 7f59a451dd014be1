"""
Structured JSON logging for the pulse kernel.

Every record under the ``pulse_kernel`` logger hierarchy is written as one
JSON object per line.  The object always carries ``ts``, ``level``,
``logger`` and ``message``; request-scoped fields bound through
``LogContext`` and anything passed as ``extra=`` are merged in.  Exceptions
add ``exc_type``, ``exc_message``, ``exc_code`` (for ``PulseError``) and one
``exc_<attr>`` entry per public attribute of the exception.

Usage:
    logger = get_logger("modules.analytics.service")
    with LogContext.bind(actor_id=user_id, project_id=project_id):
        logger.info("dashboard_snapshot_started", extra={"role": role})
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "LogContext",
    "get_logger",
    "configure_logging",
    "reset_logging",
]

import json
import logging
import sys
import threading
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Any
from uuid import UUID

_LOGGER_PREFIX = "pulse_kernel"

_EMPTY: Mapping[str, str] = MappingProxyType({})
_context: ContextVar[Mapping[str, str]] = ContextVar("pulse_log_context", default=_EMPTY)


class LogContext:
    """Request-scoped fields merged into every log line.

    Backed by a single ``ContextVar`` holding an immutable mapping, so it is
    safe across threads and asyncio tasks.  Values are stored as strings.
    """

    FIELDS = ("correlation_id", "actor_id", "project_id", "resource_id", "trace_id")

    @classmethod
    def _merged(cls, values: Mapping[str, Any]) -> Mapping[str, str]:
        unknown = set(values) - set(cls.FIELDS)
        if unknown:
            raise TypeError(f"Unknown log context fields: {', '.join(sorted(unknown))}")
        current = dict(_context.get())
        current.update({k: str(v) for k, v in values.items() if v is not None})
        return MappingProxyType(current)

    @classmethod
    def set(cls, **values: Any) -> None:
        """Set fields for the rest of the current context; None values are skipped."""
        _context.set(cls._merged(values))

    @classmethod
    def get_all(cls) -> dict[str, str]:
        return dict(_context.get())

    @classmethod
    def clear(cls) -> None:
        _context.set(_EMPTY)

    @classmethod
    @contextmanager
    def bind(cls, **values: Any) -> Iterator[type[LogContext]]:
        """Set fields for the duration of a ``with`` block, then restore."""
        token = _context.set(cls._merged(values))
        try:
            yield cls
        finally:
            _context.reset(token)


# Attributes every LogRecord has; anything else on a record came from ``extra=``.
_RECORD_ATTRS = frozenset(
    vars(logging.LogRecord("", 0, "", 0, "", (), None))
) | {"message", "taskName"}


def _json_default(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    return repr(value)


class StructuredFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context.get(),
        }
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRS:
                payload.setdefault(key, value)

        if record.exc_info and record.exc_info[1] is not None:
            payload.update(self._exception_fields(record.exc_info[1]))
            payload["traceback"] = self.formatException(record.exc_info)

        return json.dumps(payload, default=_json_default)

    @staticmethod
    def _exception_fields(exc: BaseException) -> dict[str, Any]:
        fields: dict[str, Any] = {
            "exc_type": type(exc).__name__,
            "exc_message": str(exc),
        }
        code = getattr(exc, "code", None)
        if code is not None:
            fields["exc_code"] = code
        for name, value in vars(exc).items():
            if not name.startswith("_"):
                fields[f"exc_{name}"] = value
        return fields


def get_logger(name: str) -> logging.Logger:
    """Logger named ``pulse_kernel.<name>``."""
    return logging.getLogger(f"{_LOGGER_PREFIX}.{name}")


_state_lock = threading.Lock()
_configured = False


def configure_logging(
    *,
    level: int | str = logging.INFO,
    stream: Any = None,
    handler: logging.Handler | None = None,
) -> None:
    """Attach one JSON handler to the ``pulse_kernel`` logger.

    Only the first call has an effect; later calls return immediately, so
    library code may call it defensively without clobbering a level the
    application chose.
    """
    global _configured
    with _state_lock:
        if _configured:
            return
        _configured = True

    root = logging.getLogger(_LOGGER_PREFIX)
    root.setLevel(level.upper() if isinstance(level, str) else level)
    root.propagate = False

    target = handler if handler is not None else logging.StreamHandler(stream or sys.stderr)
    target.setFormatter(StructuredFormatter())
    root.addHandler(target)


def reset_logging() -> None:
    """Drop handlers and allow ``configure_logging`` to run again.  Tests only."""
    global _configured
    with _state_lock:
        _configured = False
    root = logging.getLogger(_LOGGER_PREFIX)
    root.handlers.clear()
    root.setLevel(logging.WARNING)

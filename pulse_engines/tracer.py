"""
pulse_engines.tracer -- PULSE_ENGINE_TRACE for pure rollup calls.

Every pure reduction (dashboard rollups, utilization) is wrapped in
``@traced_engine`` so an operator can see which calculation ran, against
which evaluation instant and thresholds, and how long it took, without the
calculation itself doing any I/O.

The fingerprint covers keyword arguments only.  Record collections are
passed positionally and are summarized as ``record_count`` instead, which
keeps the hash cheap for large task lists.

Usage:
    @traced_engine("upcoming_deadlines", "1.0", fingerprint_fields=("now", "limit"))
    def upcoming_deadlines(tasks, *, now, at_risk_days, limit):
        ...
"""

from __future__ import annotations

import functools
import hashlib
import json
import logging
import time
from collections.abc import Callable, Sized
from typing import Any

_logger = logging.getLogger("pulse_kernel.engines.tracer")

FINGERPRINT_LENGTH = 16


def compute_input_fingerprint(
    fingerprint_fields: tuple[str, ...],
    kwargs: dict[str, Any],
) -> str:
    """SHA-256 prefix of the named keyword arguments.

    A field missing from ``kwargs`` hashes the same as an explicit None.
    Mapping order does not matter.
    """
    selected = {name: kwargs.get(name) for name in fingerprint_fields}
    canonical = json.dumps(selected, sort_keys=True, default=str, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:FINGERPRINT_LENGTH]


def _record_count(args: tuple[Any, ...]) -> int | None:
    if args and isinstance(args[0], Sized) and not isinstance(args[0], (str, bytes)):
        return len(args[0])
    return None


def traced_engine(
    engine_name: str,
    engine_version: str,
    fingerprint_fields: tuple[str, ...] = (),
) -> Callable:
    """Wrap a pure function so each call logs one PULSE_ENGINE_TRACE record."""

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            started = time.perf_counter()
            result = func(*args, **kwargs)
            elapsed_ms = (time.perf_counter() - started) * 1000

            _logger.info(
                "PULSE_ENGINE_TRACE",
                extra={
                    "trace_type": "PULSE_ENGINE_TRACE",
                    "engine_name": engine_name,
                    "engine_version": engine_version,
                    "input_fingerprint": (
                        compute_input_fingerprint(fingerprint_fields, kwargs)
                        if fingerprint_fields else ""
                    ),
                    "record_count": _record_count(args),
                    "duration_ms": round(elapsed_ms, 3),
                    "function": func.__qualname__,
                },
            )
            return result

        return wrapper

    return decorator

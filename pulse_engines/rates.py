"""
Module: pulse_engines.rates
Responsibility:
    Zero-safe percentages, half-up rounding, minute-to-hour conversion,
    closed-enum distributions and calendar anchors shared by every rollup.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - ``percentage(n, 0) == 0`` for every n.
    - Rounding is half-up (2.5 -> 3), never banker's rounding.
    - ``zero_filled_distribution`` always has exactly one key per enum
      member, so its values sum to the number of inputs.

Failure modes:
    - ValueError from ``zero_filled_distribution`` when a value is not a
      member of the closed domain.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)

HOURS_QUANTUM = Decimal("0.01")

Number = int | float | Decimal


def _to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_half_up(value: Number) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(_to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def percentage(numerator: Number, denominator: Number) -> int:
    """``numerator / denominator * 100`` rounded half-up; 0 when denominator is 0."""
    denom = _to_decimal(denominator)
    if denom == 0:
        return 0
    return round_half_up(_to_decimal(numerator) / denom * 100)


def mean_rounded(values: Iterable[Number]) -> int:
    """Arithmetic mean rounded half-up; 0 for an empty input."""
    items = [_to_decimal(v) for v in values]
    if not items:
        return 0
    return round_half_up(sum(items, Decimal("0")) / len(items))


def minutes_to_hours(minutes: Number) -> Decimal:
    """Convert minutes to hours, quantized to hundredths."""
    return (_to_decimal(minutes) / 60).quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def zero_filled_distribution(values: Iterable[E | str], domain: type[E]) -> dict[E, int]:
    """Count occurrences of each member of a closed enum.

    Every member of ``domain`` is present in the result, initialised to 0
    before counting, regardless of which members appear in ``values``.
    Raw strings are coerced through ``domain(value)``.
    """
    counts: dict[E, int] = {member: 0 for member in domain}
    for value in values:
        member = value if isinstance(value, domain) else domain(value)
        counts[member] += 1
    return counts


def start_of_day(instant: datetime) -> datetime:
    """Midnight at the start of ``instant``'s day, same timezone."""
    return instant.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(instant: datetime) -> datetime:
    """Monday 00:00 of the week containing ``instant``, same timezone."""
    return start_of_day(instant) - timedelta(days=instant.weekday())

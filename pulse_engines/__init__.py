"""
Module: pulse_engines
Responsibility:
    Package entrypoint that re-exports the shared pure calculation helpers
    used by the analytics and resources modules.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    MUST NOT import pulse_modules.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()``.  The evaluation instant
      is always passed in by the caller.
    - Zero-safe ratios: every percentage helper returns 0 for a zero
      denominator instead of raising or producing NaN.
    - Determinism: identical inputs always produce identical outputs.

Usage:
    from pulse_engines import percentage, minutes_to_hours
    from pulse_engines.tracer import traced_engine
"""

from pulse_engines.rates import (
    HOURS_QUANTUM,
    mean_rounded,
    minutes_to_hours,
    percentage,
    round_half_up,
    start_of_day,
    start_of_week,
    zero_filled_distribution,
)

__all__ = [
    "HOURS_QUANTUM",
    "mean_rounded",
    "minutes_to_hours",
    "percentage",
    "round_half_up",
    "start_of_day",
    "start_of_week",
    "zero_filled_distribution",
]

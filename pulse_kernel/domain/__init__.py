"""
Pure domain layer.

Nothing in here touches the ORM, the database, or I/O.  The one exception is
``SystemClock``, the sanctioned boundary for reading wall-clock time.
"""

from pulse_kernel.domain.clock import Clock, DeterministicClock, SystemClock

__all__ = [
    "Clock",
    "DeterministicClock",
    "SystemClock",
]

"""
Resource Utilization Calculations -- Pure Functions.

All functions are pure: no I/O, no clock, no database.  The evaluation
instant is always passed in by the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from pulse_engines.rates import mean_rounded
from pulse_engines.tracer import traced_engine
from pulse_modules.resources.models import (
    DEFAULT_ROLE_LABEL,
    Resource,
    ResourceUtilization,
    TeamStats,
    UtilizationStatus,
)

UTILIZATION_QUANTUM = Decimal("0.01")
FULL = Decimal("100")

_UNDER_CAPACITY = frozenset(
    {UtilizationStatus.AVAILABLE, UtilizationStatus.PARTIALLY_ALLOCATED}
)


def classify_utilization(utilization: Decimal | int) -> UtilizationStatus:
    """Label a utilization value; checks run from most to least loaded."""
    value = Decimal(utilization)
    if value < 0:
        raise ValueError(f"Utilization cannot be negative: {utilization}")
    if value > FULL:
        return UtilizationStatus.OVERLOADED
    if value == FULL:
        return UtilizationStatus.BUSY
    if value > 0:
        return UtilizationStatus.PARTIALLY_ALLOCATED
    return UtilizationStatus.AVAILABLE


@traced_engine("utilization", "1.0", fingerprint_fields=("as_of",))
def calculate_utilization(resource: Resource, *, as_of: datetime) -> ResourceUtilization:
    """Sum the resource's allocations that are active at ``as_of``.

    Utilization is not clamped: 140 means the resource is booked 40% over
    capacity.  The status is taken from the exact sum; only the reported
    figure is rounded (half-up, to 0.01), so 100.004 is still OVERLOADED.
    Project names are de-duplicated in allocation order, and
    allocations whose project name is unknown contribute no name.
    """
    active = [a for a in resource.allocations if a.is_active(as_of)]
    exact = sum((a.percentage for a in active), Decimal("0"))

    names: list[str] = []
    for allocation in active:
        if allocation.project_name is not None and allocation.project_name not in names:
            names.append(allocation.project_name)

    return ResourceUtilization(
        resource_id=resource.id,
        name=resource.name,
        type=resource.type,
        role=resource.role or DEFAULT_ROLE_LABEL,
        utilization=exact.quantize(UTILIZATION_QUANTUM, rounding=ROUND_HALF_UP),
        status=classify_utilization(exact),
        active_project_names=tuple(names),
        active_task_count=sum(1 for a in active if a.task_id is not None),
    )


@traced_engine("team_stats", "1.0")
def summarize_team(utilizations: Sequence[ResourceUtilization]) -> TeamStats:
    """Aggregate per-resource utilization into team counts.

    Counts follow each resource's status rather than the rounded figure.
    """
    return TeamStats(
        total_resources=len(utilizations),
        available=sum(1 for u in utilizations if u.status in _UNDER_CAPACITY),
        overallocated=sum(1 for u in utilizations if u.status is UtilizationStatus.OVERLOADED),
        avg_utilization=mean_rounded(u.utilization for u in utilizations),
    )

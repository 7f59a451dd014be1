"""
Resource Domain Models (``pulse_modules.resources.models``).

Responsibility
--------------
Frozen dataclass value objects for resources, their allocations and the
computed utilization views.  ZERO I/O.

Invariants enforced
-------------------
* ``ResourceAllocation.percentage`` is a non-negative ``Decimal``.
* An allocation is active at instant ``t`` iff ``start_date <= t <= end_date``
  (both ends inclusive).
* ``UtilizationStatus`` labels are mutually exclusive and cover every
  non-negative utilization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID

DEFAULT_ROLE_LABEL = "Team Member"


class ResourceType(str, Enum):
    """What kind of thing a resource is."""
    HUMAN = "human"
    EQUIPMENT = "equipment"
    MATERIAL = "material"


class UtilizationStatus(str, Enum):
    """Load label derived from summed active allocation percentages."""
    AVAILABLE = "AVAILABLE"
    PARTIALLY_ALLOCATED = "PARTIALLY_ALLOCATED"
    BUSY = "BUSY"
    OVERLOADED = "OVERLOADED"


@dataclass(frozen=True)
class ResourceAllocation:
    """A share of a resource committed to a project (optionally a task)."""
    id: UUID
    resource_id: UUID
    project_id: UUID
    percentage: Decimal
    start_date: datetime
    end_date: datetime
    project_name: str | None = None
    task_id: UUID | None = None

    def __post_init__(self) -> None:
        if self.percentage < 0:
            raise ValueError("Allocation percentage cannot be negative")

    def is_active(self, as_of: datetime) -> bool:
        return self.start_date <= as_of <= self.end_date


@dataclass(frozen=True)
class Resource:
    """A person, piece of equipment or material stock that can be allocated."""
    id: UUID
    name: str
    type: ResourceType = ResourceType.HUMAN
    role: str | None = None
    cost_per_hour: Decimal | None = None
    allocations: tuple[ResourceAllocation, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ResourceUtilization:
    """Computed load of one resource at one instant."""
    resource_id: UUID
    name: str
    type: ResourceType
    role: str
    utilization: Decimal
    status: UtilizationStatus
    active_project_names: tuple[str, ...] = ()
    active_task_count: int = 0


@dataclass(frozen=True)
class TeamStats:
    """Team-level aggregates over every resource's utilization."""
    total_resources: int
    available: int
    overallocated: int
    avg_utilization: int

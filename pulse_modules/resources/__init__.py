"""
Resources Module (``pulse_modules.resources``).

Resource utilization: which resources are booked, by how much, and on what.
"""

from pulse_modules.resources.models import (
    Resource,
    ResourceAllocation,
    ResourceType,
    ResourceUtilization,
    TeamStats,
    UtilizationStatus,
)
from pulse_modules.resources.service import ResourceService
from pulse_modules.resources.utilization import (
    calculate_utilization,
    classify_utilization,
    summarize_team,
)

__all__ = [
    "Resource",
    "ResourceAllocation",
    "ResourceService",
    "ResourceType",
    "ResourceUtilization",
    "TeamStats",
    "UtilizationStatus",
    "calculate_utilization",
    "classify_utilization",
    "summarize_team",
]

"""
Resource Utilization Service (``pulse_modules.resources.service``).

Responsibility
--------------
Read-side entry point for resource utilization: fetches resources with
their active allocations and delegates the arithmetic to the pure
functions in ``utilization.py``.

Architecture position
---------------------
**Modules layer** -- thin glue between ``ResourceSelector`` and the pure
utilization calculations.  Never writes.

Invariants enforced
-------------------
* One clock reading per call: selection and classification use the same
  instant.
* The caller owns the session and its transaction.

Failure modes
-------------
* Unknown resource id -> ``ResourceNotFoundError``.
* Fetch failure -> ``DataUnavailableError`` (from the selector).
"""

from __future__ import annotations

from uuid import UUID

from sqlalchemy.orm import Session

from pulse_kernel.domain.clock import Clock, SystemClock
from pulse_kernel.exceptions import ResourceNotFoundError
from pulse_kernel.logging_config import LogContext, get_logger
from pulse_modules.resources.models import ResourceUtilization, TeamStats
from pulse_modules.resources.selector import ResourceSelector
from pulse_modules.resources.utilization import calculate_utilization, summarize_team

logger = get_logger("modules.resources.service")


class ResourceService:
    """
    Resource utilization read service.

    Usage:
        service = ResourceService(session, clock)
        stats = service.get_team_stats()
    """

    def __init__(self, session: Session, clock: Clock | None = None):
        self._session = session
        self._clock = clock or SystemClock()
        self._selector = ResourceSelector(session)

    def list_resources(self) -> list[ResourceUtilization]:
        """Utilization of every resource at the current instant."""
        as_of = self._clock.now_utc()
        logger.info("resource_list_started", extra={"as_of": as_of})

        resources = self._selector.fetch_resources_with_active_allocations(as_of)
        result = [calculate_utilization(r, as_of=as_of) for r in resources]

        logger.info("resource_list_completed", extra={"resource_count": len(result)})
        return result

    def get_resource(self, resource_id: UUID) -> ResourceUtilization:
        """Utilization of a single resource.

        Raises:
            ResourceNotFoundError: If no resource has this id.
        """
        as_of = self._clock.now_utc()
        with LogContext.bind(resource_id=resource_id):
            resource = self._selector.fetch_resource(resource_id, as_of)
            if resource is None:
                logger.warning("resource_not_found")
                raise ResourceNotFoundError(resource_id)
            return calculate_utilization(resource, as_of=as_of)

    def get_team_stats(self) -> TeamStats:
        """Team-level availability and overallocation counts."""
        stats = summarize_team(self.list_resources())
        logger.info(
            "team_stats_completed",
            extra={
                "total_resources": stats.total_resources,
                "overallocated": stats.overallocated,
                "avg_utilization": stats.avg_utilization,
            },
        )
        return stats

"""
Module: pulse_modules.resources.selector
Responsibility: Read-only queries for resources and their allocations.
    Returns ``Resource`` DTOs with allocations nested, each carrying its
    project's name.
Architecture position: Modules > Resources.  Subclasses the kernel
    ``BaseSelector``; imported only by ``ResourceService``.

Invariants enforced:
    - Only allocations active at ``as_of`` (inclusive window) are attached.
    - Resources with no active allocation are still returned.
    - Resources are ordered by name, then id.  Allocations are ordered by
      start date, then project name, then id, so output is deterministic.

Failure modes:
    - DataUnavailableError on any driver or SQL failure.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import and_, select

from pulse_kernel.selectors.base import BaseSelector
from pulse_modules.projects.orm import ProjectModel
from pulse_modules.resources.models import Resource
from pulse_modules.resources.orm import ResourceAllocationModel, ResourceModel


class ResourceSelector(BaseSelector[ResourceModel]):
    """Selector for resource and allocation queries."""

    def fetch_resources_with_active_allocations(self, as_of: datetime) -> list[Resource]:
        """All resources, each with only its allocations active at ``as_of``."""

        def run() -> list[Resource]:
            resources = list(
                self.session.scalars(
                    select(ResourceModel).order_by(ResourceModel.name, ResourceModel.id)
                )
            )
            by_resource = self._active_allocations([r.id for r in resources], as_of)
            return [r.to_dto(by_resource.get(r.id, [])) for r in resources]

        return self._fetch("resources", run)

    def fetch_resource(self, resource_id: UUID, as_of: datetime) -> Resource | None:
        """One resource with its allocations active at ``as_of``, or None."""

        def run() -> Resource | None:
            resource = self.session.get(ResourceModel, resource_id)
            if resource is None:
                return None
            by_resource = self._active_allocations([resource.id], as_of)
            return resource.to_dto(by_resource.get(resource.id, []))

        return self._fetch("resources", run)

    def _active_allocations(
        self,
        resource_ids: list[UUID],
        as_of: datetime,
    ) -> dict[UUID, list[ResourceAllocationModel]]:
        if not resource_ids:
            return {}
        stmt = (
            select(ResourceAllocationModel)
            .join(ProjectModel, ResourceAllocationModel.project_id == ProjectModel.id)
            .where(
                and_(
                    ResourceAllocationModel.resource_id.in_(resource_ids),
                    ResourceAllocationModel.start_date <= as_of,
                    ResourceAllocationModel.end_date >= as_of,
                )
            )
            .order_by(
                ResourceAllocationModel.start_date,
                ProjectModel.name,
                ResourceAllocationModel.id,
            )
        )
        grouped: dict[UUID, list[ResourceAllocationModel]] = {}
        for allocation in self.session.scalars(stmt):
            grouped.setdefault(allocation.resource_id, []).append(allocation)
        return grouped

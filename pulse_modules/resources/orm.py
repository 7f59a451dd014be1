"""
SQLAlchemy ORM persistence models for the Resources module.

Responsibility
--------------
Persistence for resources and their time-boxed allocations to projects and
tasks.

Invariants enforced
-------------------
* ``allocation_percentage`` is Numeric(38, 9); utilization is a sum of these.
* Allocations are never filtered here; activity against an instant is
  decided by the selector and the utilization calculation.
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from pulse_kernel.db.base import TrackedBase
from pulse_modules.projects.orm import ProjectModel


class ResourceModel(TrackedBase):
    """
    Something that can be allocated to project work.

    Maps to the ``Resource`` DTO in ``pulse_modules.resources.models``.
    """

    __tablename__ = "resources"

    __table_args__ = (
        Index("idx_resource_type", "type"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    type: Mapped[str] = mapped_column(String(20), nullable=False, default="human")
    role: Mapped[str | None] = mapped_column(String(100), nullable=True)
    cost_per_hour: Mapped[Decimal | None] = mapped_column(nullable=True)

    # Relationships
    allocations: Mapped[list["ResourceAllocationModel"]] = relationship(
        "ResourceAllocationModel",
        back_populates="resource",
        cascade="all, delete-orphan",
    )

    def to_dto(self, allocations=None):
        """Convert to DTO; ``allocations`` overrides the loaded collection."""
        from pulse_modules.resources.models import Resource, ResourceType

        rows = self.allocations if allocations is None else allocations
        return Resource(
            id=self.id,
            name=self.name,
            type=ResourceType(self.type),
            role=self.role,
            cost_per_hour=self.cost_per_hour,
            allocations=tuple(a.to_dto() for a in rows),
        )

    def __repr__(self) -> str:
        return f"<ResourceModel {self.name} [{self.type}]>"


class ResourceAllocationModel(TrackedBase):
    """A time-boxed share of a resource committed to a project."""

    __tablename__ = "resource_allocations"

    __table_args__ = (
        Index("idx_allocation_resource", "resource_id"),
        Index("idx_allocation_window", "start_date", "end_date"),
    )

    resource_id: Mapped[UUID] = mapped_column(ForeignKey("resources.id"), nullable=False)
    project_id: Mapped[UUID] = mapped_column(ForeignKey("projects.id"), nullable=False)
    task_id: Mapped[UUID | None] = mapped_column(ForeignKey("tasks.id"), nullable=True)
    allocation_percentage: Mapped[Decimal] = mapped_column(nullable=False)
    start_date: Mapped[datetime] = mapped_column(nullable=False)
    end_date: Mapped[datetime] = mapped_column(nullable=False)

    # Relationships
    resource: Mapped["ResourceModel"] = relationship(
        "ResourceModel",
        back_populates="allocations",
    )
    project: Mapped[ProjectModel] = relationship(ProjectModel, lazy="joined")

    def to_dto(self):
        from pulse_modules.resources.models import ResourceAllocation

        return ResourceAllocation(
            id=self.id,
            resource_id=self.resource_id,
            project_id=self.project_id,
            percentage=self.allocation_percentage,
            start_date=self.start_date,
            end_date=self.end_date,
            project_name=self.project.name if self.project else None,
            task_id=self.task_id,
        )

    def __repr__(self) -> str:
        return (
            f"<ResourceAllocationModel resource={self.resource_id} "
            f"project={self.project_id} {self.allocation_percentage}%>"
        )

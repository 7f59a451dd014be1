"""Activity Module (``pulse_modules.activity``)."""

from pulse_modules.activity.models import ActivityAction, ActivityEntry, EntityType

__all__ = [
    "ActivityAction",
    "ActivityEntry",
    "EntityType",
]

"""Tasks Module (``pulse_modules.tasks``)."""

from pulse_modules.tasks.models import Task, TaskPriority, TaskStatus

__all__ = [
    "Task",
    "TaskPriority",
    "TaskStatus",
]

"""
Central ORM model registry.

``create_tables()`` calls ``import_all_orm_models()`` so that every table
is registered on ``Base.metadata`` before ``create_all`` runs, whichever
modules the caller happened to import.
"""


def import_all_orm_models() -> None:
    """Import every ORM module so their tables register on Base.metadata."""
    import pulse_kernel.models.user  # noqa: F401
    import pulse_modules.activity.orm  # noqa: F401
    import pulse_modules.budget.orm  # noqa: F401
    import pulse_modules.projects.orm  # noqa: F401
    import pulse_modules.resources.orm  # noqa: F401
    import pulse_modules.tasks.orm  # noqa: F401
    import pulse_modules.time_tracking.orm  # noqa: F401

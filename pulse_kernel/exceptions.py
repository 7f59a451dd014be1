"""
Typed Exception Hierarchy for the Pulse Kernel.

===============================================================================
WHY TYPED EXCEPTIONS
===============================================================================

Callers of the analytics layer (the REST controllers, scripts, tests) must be
able to tell "the database is down" from "that resource does not exist"
without parsing message strings.  Every error here:

  1. Has a TYPED exception class (catch by type, not message)
  2. Has a CODE attribute (machine-readable, API-safe)
  3. Carries structured DATA as attributes (not just a message string)

Example:
    try:
        snapshot = service.get_dashboard_snapshot(ctx, filters)
    except DataUnavailableError as e:
        api_response(status=503, code=e.code, source=e.source)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    PulseError (base)
    |
    +-- DataUnavailableError
    |
    +-- NotFoundError
    |   +-- ProjectNotFoundError
    |   +-- ResourceNotFoundError
    |
    +-- AccessDeniedError
    |
    +-- InvalidDateRangeError
    |
    +-- ConfigurationError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Code                 | When Raised
---------------------|----------------------------------------------------
DATA_UNAVAILABLE     | An underlying record fetch failed
PROJECT_NOT_FOUND    | Project-scoped analytics for an unknown project
RESOURCE_NOT_FOUND   | Utilization lookup for an unknown resource
ACCESS_DENIED        | Caller is not a member of the requested project
INVALID_DATE_RANGE   | Filter start date is after its end date
CONFIGURATION_ERROR  | Configuration file missing keys or holding bad values

===============================================================================
DESIGN DECISIONS
===============================================================================

1. Dashboard-level scoping to a nonexistent project is NOT an error: it
   yields an empty snapshot.  Only lookups of a single named entity raise
   NotFoundError subclasses.

2. DataUnavailableError always chains the original driver exception
   (``raise ... from exc``) so the traceback keeps the SQL failure.

===============================================================================
"""

from uuid import UUID


class PulseError(Exception):
    """
    Base exception for all pulse errors.

    All subclasses must have a `code` class attribute for machine-readable
    error identification.
    """

    code: str = "PULSE_ERROR"


class DataUnavailableError(PulseError):
    """An underlying record fetch failed; no partial result is returned."""

    code: str = "DATA_UNAVAILABLE"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Data unavailable from {source}: {reason}")


class NotFoundError(PulseError):
    """Base exception for single-entity lookups that found nothing."""

    code: str = "NOT_FOUND"


class ProjectNotFoundError(NotFoundError):
    """Project with given ID was not found."""

    code: str = "PROJECT_NOT_FOUND"

    def __init__(self, project_id: UUID | str):
        self.project_id = str(project_id)
        super().__init__(f"Project not found: {project_id}")


class ResourceNotFoundError(NotFoundError):
    """Resource with given ID was not found."""

    code: str = "RESOURCE_NOT_FOUND"

    def __init__(self, resource_id: UUID | str):
        self.resource_id = str(resource_id)
        super().__init__(f"Resource not found: {resource_id}")


class AccessDeniedError(PulseError):
    """Caller may not read the requested project."""

    code: str = "ACCESS_DENIED"

    def __init__(self, user_id: UUID | str, project_id: UUID | str):
        self.user_id = str(user_id)
        self.project_id = str(project_id)
        super().__init__(f"User {user_id} has no access to project {project_id}")


class InvalidDateRangeError(PulseError):
    """Filter window start is after its end."""

    code: str = "INVALID_DATE_RANGE"

    def __init__(self, start: object, end: object):
        self.start = str(start)
        self.end = str(end)
        super().__init__(f"Start date {start} is after end date {end}")


class ConfigurationError(PulseError):
    """Configuration could not be parsed into a valid settings object."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration at {path}: {reason}")

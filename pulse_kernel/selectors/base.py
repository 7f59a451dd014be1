"""
Module: pulse_kernel.selectors.base
Responsibility: Abstract base class for all read-only query selectors.  Selectors
    are the fetch boundary of the analytics layer: services ask them for
    records, they run the SQL and hand back frozen DTOs.
Architecture position: Kernel > Selectors.  May import from db/ and models/.
    Module selectors (``pulse_modules.*.selector``) subclass this.

Invariants enforced:
    - Read-only access: selectors accept a Session from the caller but MUST NOT
      call session.add(), session.delete(), session.commit(), or session.flush().
    - DTO return convention: selectors return frozen dataclasses, NOT raw ORM
      model instances.
    - Failure translation: any SQLAlchemyError raised while fetching is
      re-raised as DataUnavailableError, chained to the original.

Failure modes:
    - DataUnavailableError on any driver or SQL failure.
"""

from abc import ABC
from collections.abc import Callable
from typing import Generic, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from pulse_kernel.db.base import Base
from pulse_kernel.exceptions import DataUnavailableError
from pulse_kernel.logging_config import get_logger

ModelType = TypeVar("ModelType", bound=Base)
T = TypeVar("T")

logger = get_logger("selectors.base")


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Contract:
        Selectors accept a Session from the caller, perform read-only queries,
        and return DTOs or computed results.  They MUST NOT mutate any data.

    Non-goals:
        - BaseSelector does NOT define any domain query methods; subclasses
          implement them on top of ``_fetch``.
    """

    def __init__(self, session: Session):
        """
        Initialize the selector.

        Args:
            session: SQLAlchemy session for database operations.
        """
        self.session = session

    def _fetch(self, source: str, run: Callable[[], T]) -> T:
        """Run a query callable, translating driver failures.

        Args:
            source: Name of the record set being fetched (used in the error
                and the log line).
            run: Zero-argument callable performing the query.

        Raises:
            DataUnavailableError: If the query raised SQLAlchemyError.
        """
        try:
            return run()
        except SQLAlchemyError as exc:
            logger.error(
                "fetch_failed",
                extra={"source": source, "error_type": type(exc).__name__},
                exc_info=True,
            )
            raise DataUnavailableError(source, str(exc)) from exc

"""
Module: pulse_kernel.db.base
Responsibility: Declarative base and column types shared by every ORM model.
Architecture position: Kernel > DB.  Lowest import target in the kernel; it
    imports nothing from the rest of the project.

Invariants enforced:
    - Primary keys are uuid4 values stored as 36-character strings, so the
      schema is identical on SQLite and PostgreSQL.
    - ``Decimal`` columns are Numeric(38, 9): budgets, expense amounts and
      allocation percentages never pass through float.
    - ``datetime`` columns only accept aware values and always load as UTC.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import ClassVar
from uuid import UUID as PyUUID, uuid4

from sqlalchemy import DateTime, Numeric, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class UUIDString(TypeDecorator):
    """``uuid.UUID`` in Python, ``VARCHAR(36)`` in the database."""

    impl = String(36)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        return None if value is None else str(value)

    def process_result_value(self, value, dialect):
        return None if value is None else PyUUID(str(value))


class UTCDateTime(TypeDecorator):
    """
    Aware datetime column that always loads as UTC.

    SQLite stores no offset and PostgreSQL returns the session zone; both
    come back from this type as UTC so comparisons against
    ``Clock.now_utc()`` never mix naive and aware values.  Binding a naive
    datetime raises ``ValueError`` (wrapped by SQLAlchemy in
    ``StatementError``).
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"Naive datetime not allowed: {value!r}")
        return value.astimezone(timezone.utc)

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class Base(DeclarativeBase):
    """Declarative base; every table gets a uuid4 ``id``."""

    type_annotation_map: ClassVar[dict] = {
        Decimal: Numeric(38, 9),
        datetime: UTCDateTime(),
        PyUUID: UUIDString(),
    }

    id: Mapped[PyUUID] = mapped_column(UUIDString(), primary_key=True, default=uuid4)


class TrackedBase(Base):
    """
    Base for domain tables: adds audit columns.

    ``created_at`` and ``updated_at`` are filled by the database.
    ``created_by_id`` is required so every row names who wrote it.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    created_by_id: Mapped[PyUUID] = mapped_column(UUIDString(), nullable=False)
    updated_by_id: Mapped[PyUUID | None] = mapped_column(UUIDString(), nullable=True)


UUID = PyUUID

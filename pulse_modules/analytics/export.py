"""
Plain-data export of analytics results (``pulse_modules.analytics.export``).

Turns the frozen result records into JSON-safe structures for the
presentation layer: dataclass field names become camelCase, ``Decimal`` and
``UUID`` become strings, dates become ISO-8601 and enums become their
values.  Mapping keys that are data (statuses, categories, names) keep
their value and are not re-cased.
"""

from __future__ import annotations

import json
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any
from uuid import UUID


def camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _key(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def to_plain_data(obj: Any) -> Any:
    """Recursively convert a result record into JSON-safe data."""
    if isinstance(obj, Enum):
        return obj.value
    if obj is None or isinstance(obj, (bool, int, str)):
        return obj
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, UUID):
        return str(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, float):
        return obj
    if is_dataclass(obj) and not isinstance(obj, type):
        return {camel_case(f.name): to_plain_data(getattr(obj, f.name)) for f in fields(obj)}
    if isinstance(obj, dict):
        return {_key(k): to_plain_data(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_plain_data(item) for item in obj]
    raise TypeError(f"Cannot export {type(obj).__name__}")


def dumps(obj: Any, *, indent: int | None = None) -> str:
    """JSON text of ``to_plain_data(obj)``."""
    return json.dumps(to_plain_data(obj), indent=indent)

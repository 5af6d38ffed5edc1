"""Shared serialization utilities for sinks."""

from dataclasses import fields, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Any

from paydone.dates import to_local_iso
from paydone.models.debt import EncodedStepUp, StructuredStepUp


def to_dict(obj: Any) -> dict:
    """Convert object to dictionary."""
    if is_dataclass(obj) and not isinstance(obj, type):
        return dataclass_to_dict(obj)
    elif isinstance(obj, dict):
        return {k: serialize_value(v) for k, v in obj.items()}
    else:
        return {"value": str(obj)}


def dataclass_to_dict(obj: Any) -> dict:
    """Convert a dataclass to a dict of JSON-ready values.

    Private fields (leading underscore) such as cached parsed dates are
    skipped. Uses ``fields()`` + ``getattr`` rather than ``asdict()`` so
    step-up schedules are rendered through ``serialize_value``.
    """
    return {
        f.name: serialize_value(getattr(obj, f.name))
        for f in fields(obj)
        if not f.name.startswith("_")
    }


def serialize_value(value: Any) -> Any:
    """Serialize a value for JSON output.

    Money stays exact as a string; dates use local calendar components.
    """
    if isinstance(value, Decimal):
        return str(value)
    elif isinstance(value, Enum):
        return value.value
    elif isinstance(value, datetime):
        return value.isoformat()
    elif isinstance(value, date):
        return to_local_iso(value)
    elif isinstance(value, (StructuredStepUp, EncodedStepUp)):
        return [serialize_value(r) for r in value.ranges]
    elif is_dataclass(value) and not isinstance(value, type):
        return dataclass_to_dict(value)
    elif isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    elif isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    return value

"""Serialization utilities."""

from dataclasses import asdict
from datetime import datetime


def serialize_dataclass(obj, drop_none: bool = False) -> dict:
    """Serialize a dataclass to dict, converting datetimes to ISO strings.

    With ``drop_none`` set, top-level fields whose value is None are left out
    so optional fields are absent from the JSON rather than null.
    """
    data = asdict(obj)
    for key, value in list(data.items()):
        if value is None and drop_none:
            del data[key]
        elif isinstance(value, datetime):
            data[key] = value.isoformat()
        elif isinstance(value, dict):
            for k, v in value.items():
                if isinstance(v, datetime):
                    value[k] = v.isoformat()
    return data

# turfbook/services/records.py
"""
Field access over partially-loaded upstream records.

Venue and slot records arrive either as plain dicts (camelCase or
snake_case keys) or as pydantic models; absent and None fields are
treated the same way.
"""

import math
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel


def get_field(record: Any, *names: str, default: Any = None) -> Any:
    """First non-None value among `names`, looked up as key or attribute."""
    if record is None:
        return default
    for name in names:
        if isinstance(record, Mapping):
            value = record.get(name)
        else:
            value = getattr(record, name, None)
        if value is not None:
            return value
    return default


def as_number(value: Any, default: float = 0) -> float:
    """Numeric value or `default` for None / NaN / non-numeric input."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number):
        return default
    if isinstance(value, int):
        return value
    return number


def is_record(value: Any) -> bool:
    return isinstance(value, Mapping) or isinstance(value, BaseModel)


def is_sequence(value: Any) -> bool:
    """Lists and tuples only; strings, dicts and generators do not count."""
    return isinstance(value, (list, tuple))

"""
Cell value coercion for series-convert.

A record cell can hold almost anything once it has been through a CSV or
JSON decoder. Each series value is normalized to one of four shapes:

- ``float``: a finite number (numeric strings are parsed).
- ``RangeValue``: a mapping with a truthy ``high`` (plus ``low``/``mid``).
- ``list``: a raw array, passed through untouched.
- ``None``: anything else, including empty strings.

The absent marker ``MISSING`` is distinct from ``None``: a ``None`` cell
means "this series has no value here", while ``MISSING`` means "the cell
was never there at all".
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Union


class _Missing:
    """Sentinel type for an absent cell / unresolved path."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


@dataclass(frozen=True)
class RangeValue:
    """A high/low range cell (e.g. for area-range series)."""

    high: Any
    low: Any = None
    mid: Any = None


SeriesValue = Union[float, RangeValue, list, None]


def to_number(raw: Any) -> float | None:
    """Coerce *raw* to a finite float, or return ``None``.

    Booleans and blank strings are not treated as numbers.
    """
    if raw is None or raw is MISSING or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        number = float(raw)
    elif isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def coerce_value(raw: Any) -> SeriesValue:
    """Normalize one record cell into a series value."""
    number = to_number(raw)
    if number is not None:
        return number
    if isinstance(raw, RangeValue):
        return raw
    if isinstance(raw, (list, tuple)):
        return list(raw)
    if isinstance(raw, Mapping) and raw.get("high"):
        return RangeValue(high=raw["high"], low=raw.get("low"), mid=raw.get("mid"))
    return None


def is_value(raw: Any) -> bool:
    """True when *raw* is neither ``None`` nor ``MISSING``."""
    return raw is not None and raw is not MISSING

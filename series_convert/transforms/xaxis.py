"""
X-axis helpers for series-convert.

Predicates derived from ``ConvertConfig``:
- ``is_timeseries`` / ``is_categorized``: from ``config.x_type``.
- ``is_custom_x``: x values come from data (``x`` or ``xs`` configured)
  and are not time-series.
- ``get_x_key`` / ``is_x`` / ``is_not_x``: which fields hold x values.

``generate_target_x`` is the per-record x rule shared by the x-source
resolution pass and the value pass of the target builder:

- time-series: parse the raw x (or the cached x at this index when the
  raw x is empty) into a ``pandas.Timestamp``;
- custom, non-categorized: the raw x as a number (or the cached x);
- otherwise: the record index.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping

import pandas as pd

from series_convert.config import ConvertConfig
from series_convert.values import is_value, to_number

logger = logging.getLogger(__name__)


def is_timeseries(config: ConvertConfig) -> bool:
    return config.x_type == "timeseries"


def is_categorized(config: ConvertConfig) -> bool:
    return config.x_type == "category"


def is_custom_x(config: ConvertConfig) -> bool:
    return not is_timeseries(config) and bool(config.x or config.xs)


def get_x_key(config: ConvertConfig, series_id: str) -> str | None:
    """Field name holding x values for *series_id* (``None`` if unconfigured)."""
    if config.x:
        return config.x
    if config.xs:
        return config.xs.get(series_id)
    return None


def is_x(config: ConvertConfig, key: str) -> bool:
    """True when *key* is a field that supplies x values."""
    if config.x and key == config.x:
        return True
    return bool(config.xs) and key in config.xs.values()


def is_not_x(config: ConvertConfig, key: str) -> bool:
    return not is_x(config, key)


def get_x_value(xs: Mapping[str, list[Any]], series_id: str, index: int) -> Any:
    """Cached x at *index* for *series_id*, falling back to *index* itself."""
    values = xs.get(series_id)
    if values and index < len(values) and is_value(values[index]):
        return values[index]
    return index


def parse_date(raw: Any, fmt: str) -> pd.Timestamp | None:
    """Parse a time-series x value.

    Timestamps/datetimes pass through, numbers are epoch milliseconds and
    strings are parsed with *fmt*. Unparseable values (NaN included)
    yield ``None``.
    """
    parsed = None
    try:
        if isinstance(raw, (pd.Timestamp, datetime, date)):
            parsed = pd.Timestamp(raw)
        elif isinstance(raw, (int, float)) and not isinstance(raw, bool):
            parsed = pd.Timestamp(raw, unit="ms")
        elif isinstance(raw, str):
            parsed = pd.to_datetime(raw, format=fmt)
        else:
            logger.warning("Failed to parse x %r: unsupported type %s", raw, type(raw).__name__)
            return None
    except (ValueError, TypeError) as e:
        logger.warning("Failed to parse x %r with format %r: %s", raw, fmt, e)
        return None
    # NaN input parses to NaT, which compares False with everything.
    if pd.isna(parsed):
        logger.warning("Failed to parse x %r: no time value", raw)
        return None
    return parsed


def generate_target_x(
    config: ConvertConfig,
    xs: Mapping[str, list[Any]],
    raw_x: Any,
    series_id: str,
    index: int,
) -> Any:
    """Resolve one record's x for *series_id* (see module docstring)."""
    if is_timeseries(config):
        source = raw_x if is_value(raw_x) and raw_x != "" else get_x_value(xs, series_id, index)
        return parse_date(source, config.x_format)

    if is_custom_x(config) and not is_categorized(config):
        number = to_number(raw_x) if is_value(raw_x) else None
        return number if number is not None else get_x_value(xs, series_id, index)

    return index

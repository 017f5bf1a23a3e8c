"""
JSON input handling for series-convert.

Two JSON shapes are accepted:

- **Object of arrays** (``{"x": [1, 2], "a": [10, 20]}``): each key is a
  field name and its array the column values. Converted via the column
  pivot.
- **Array of objects** plus explicit ``JsonKeys``: each key path is
  resolved per object with ``find_value_in_json`` (dotted/bracketed paths
  such as ``"stats.values[0]"``), then converted via the row pivot.

A path that resolves to nothing becomes ``None`` rather than ``MISSING``
so the row pivot keeps the object; the target builder later keeps the
entry with a null value.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Mapping, Sequence

from series_convert.config import JsonKeys
from series_convert.parsers.base import Record
from series_convert.transforms.pivot import convert_columns_to_data, convert_rows_to_data
from series_convert.values import MISSING

logger = logging.getLogger(__name__)

_INDEX_PATTERN = re.compile(r"\[(\w+)\]")


def _step(target: Any, key: str) -> Any:
    """Descend one path segment, returning ``MISSING`` when absent."""
    if isinstance(target, Mapping):
        return target[key] if key in target else MISSING
    if isinstance(target, Sequence) and not isinstance(target, str):
        if key.isdecimal() and int(key) < len(target):
            return target[int(key)]
    return MISSING


def find_value_in_json(obj: Any, path: str) -> Any:
    """Resolve a dotted/bracketed key *path* against *obj*.

    A key literally present on *obj* wins over path traversal, so keys
    that contain dots or brackets still resolve.

    Returns:
        The value found, or ``MISSING`` when any segment is absent.
        A stored ``None`` is returned as ``None``.
    """
    if isinstance(obj, Mapping) and path in obj:
        return obj[path]

    converted = _INDEX_PATTERN.sub(r".\1", path)
    segments = converted[1:].split(".") if converted.startswith(".") else converted.split(".")

    target = obj
    for key in segments:
        target = _step(target, key)
        if target is MISSING:
            return MISSING
    return target


def convert_json_to_data(json: Any, keys: JsonKeys | None = None) -> list[Record]:
    """Convert a decoded JSON payload into records.

    Args:
        json: Either a list of objects (requires *keys*) or a mapping of
            field name -> list of values.
        keys: Key paths to extract. ``keys.x`` (when set) is appended to
            the field list after the value keys.

    Returns:
        List of records.
    """
    if keys is not None:
        target_keys = list(keys.value)
        if keys.x:
            target_keys.append(keys.x)

        rows: list[list[Any]] = [target_keys]
        for obj in json:
            row = []
            for key in target_keys:
                value = find_value_in_json(obj, key)
                row.append(None if value is MISSING else value)
            rows.append(row)

        logger.info("Converting %d JSON objects via keys %s", len(json), target_keys)
        return convert_rows_to_data(rows)

    columns = [[key, *values] for key, values in json.items()]
    logger.info("Converting JSON object with %d columns", len(columns))
    return convert_columns_to_data(columns)

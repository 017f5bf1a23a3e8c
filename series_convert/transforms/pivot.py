"""
Row/column pivot transforms for series-convert.

Both entry points produce the same record shape: one record per data row,
keyed by the field names from the header row (row form) or from the first
element of each column (column form).

Shared failure rule: every cell after the header must be present. A
``MISSING`` cell (or a row shorter than the header) raises
``MalformedTabularData`` with the cell's coordinate in the input. A
``None`` cell is a present, null value and is kept.
"""

from __future__ import annotations

from typing import Any, Sequence

from series_convert.exceptions import MalformedTabularData
from series_convert.parsers.base import Record
from series_convert.values import MISSING


def convert_rows_to_data(rows: Sequence[Sequence[Any]]) -> list[Record]:
    """Pivot ``[header, row1, row2, ...]`` into records.

    Example::

        >>> convert_rows_to_data([["x", "a"], [1, 10], [2, 20]])
        [{'x': 1, 'a': 10}, {'x': 2, 'a': 20}]

    Raises:
        MalformedTabularData: At the first absent cell, as ``(row, column)``.
    """
    if not rows:
        return []

    keys = list(rows[0])
    records: list[Record] = []

    for i in range(1, len(rows)):
        row = rows[i]
        record: Record = {}
        for j, key in enumerate(keys):
            if j >= len(row) or row[j] is MISSING:
                raise MalformedTabularData(i, j)
            record[key] = row[j]
        records.append(record)

    return records


def convert_columns_to_data(columns: Sequence[Sequence[Any]]) -> list[Record]:
    """Pivot ``[[name, v1, v2, ...], ...]`` into records.

    Records are allocated as positions are first seen, so a shorter
    column simply leaves its field off the trailing records.

    Raises:
        MalformedTabularData: At the first absent cell, as ``(column, position)``.
    """
    records: list[Record] = []

    for i, column in enumerate(columns):
        key = column[0]
        for j in range(1, len(column)):
            if len(records) < j:
                records.append({})
            if column[j] is MISSING:
                raise MalformedTabularData(i, j)
            records[j - 1][key] = column[j]

    return records

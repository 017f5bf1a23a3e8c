"""
Custom exception hierarchy for series-convert.

Why a custom hierarchy:
- Callers can tell a failed retrieval, a malformed table, and a series
  without an x source apart by type, without parsing messages.
- Each error carries the structured fields that identify the failure
  (URL/status, cell coordinate, series id) as attributes.
"""

from __future__ import annotations


class SeriesConvertError(Exception):
    """Base exception for all series-convert errors."""


class RetrievalFailure(SeriesConvertError):
    """Raised when the data fetcher returned no body for a URL."""

    def __init__(self, url: str | None, status: int | None, status_text: str | None) -> None:
        self.url = url
        self.status = status
        self.status_text = status_text
        super().__init__(f"{url} {status} ({status_text})")


class MalformedTabularData(SeriesConvertError):
    """Raised when a pivoted row/column is missing a cell after the header.

    ``row`` and ``column`` are the zero-based coordinates in the input
    as it was handed to the pivoter (header included).
    """

    def __init__(self, row: int, column: int) -> None:
        self.row = row
        self.column = column
        super().__init__(f"Source data is missing a component at ({row}, {column})!")


class UndefinedXAxis(SeriesConvertError):
    """Raised when a series never resolved an x source during a build."""

    def __init__(self, series_id: str) -> None:
        self.series_id = series_id
        super().__init__(f'x is not defined for id = "{series_id}".')


class UnsupportedMimeTypeError(SeriesConvertError):
    """Raised when a load is requested for a mime type we cannot decode."""


class ConfigValidationError(SeriesConvertError):
    """Raised when a config YAML file is empty or structurally unusable."""

"""
Base delimited-text parser protocol for series-convert.

Every delimited strategy exposes the same two operations:
1. rows(text) -> list of raw rows (header row included), cells as strings.
2. parse(text) -> records, using the first row as field names.

Why an ABC:
- The header-only fast path in ``convert_xsv_to_data`` only needs this
  shape, so a new delimiter is one small subclass.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

Record = dict[str, Any]


class DelimitedParser(ABC):
    """Abstract base class for delimited-text strategies."""

    #: Human-readable name used in log messages.
    name: str = ""

    @abstractmethod
    def rows(self, text: str) -> list[list[str]]:
        """Split *text* into rows of cells without interpreting a header."""

    @abstractmethod
    def parse(self, text: str) -> list[Record]:
        """Parse *text* into records keyed by the header row.

        Raises:
            Whatever the underlying reader raises for malformed input.
        """

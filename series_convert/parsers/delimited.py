"""
Comma- and tab-delimited text parsers for series-convert.

Both strategies read through ``pandas.read_csv`` with every cell kept as
a string (``dtype=str``, ``keep_default_na=False``), so numeric coercion
happens later in one place (``values.coerce_value``) for every input
shape.

Header-only documents:
  A document with exactly one row is a header with no data. It becomes a
  single record whose every field is ``None``: "these series exist but
  carry no values yet", which is different from an empty result.

Repeated header names:
  The header row is read as plain cells (no pandas column renaming), so a
  repeated name stays one field and the later column wins: ``"a,a\n1,2"``
  gives ``[{"a": "2"}]``, never an extra ``a.1`` series.
"""

from __future__ import annotations

import io
import logging

import pandas as pd

from series_convert.parsers.base import DelimitedParser, Record

logger = logging.getLogger(__name__)


class _PandasDelimitedParser(DelimitedParser):
    """Shared pandas-backed implementation; subclasses set ``sep``."""

    sep: str = ","

    def _read(self, text: str) -> pd.DataFrame:
        return pd.read_csv(
            io.StringIO(text),
            sep=self.sep,
            header=None,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
        )

    def rows(self, text: str) -> list[list[str]]:
        if not text.strip():
            return []
        df = self._read(text).fillna("")
        return df.values.tolist()

    def parse(self, text: str) -> list[Record]:
        rows = self.rows(text)
        if not rows:
            return []
        header = rows[0]
        return [dict(zip(header, row)) for row in rows[1:]]


class CsvParser(_PandasDelimitedParser):
    """Comma-delimited strategy."""

    name = "csv"
    sep = ","


class TsvParser(_PandasDelimitedParser):
    """Tab-delimited strategy."""

    name = "tsv"
    sep = "\t"


def convert_xsv_to_data(parser: DelimitedParser, text: str) -> list[Record]:
    """Parse delimited *text* with *parser*, honoring the header-only rule.

    Args:
        parser: The delimiter strategy to use.
        text: The raw document.

    Returns:
        List of records. A single-row document yields exactly one record
        with every header field set to ``None``.
    """
    rows = parser.rows(text)

    if len(rows) == 1:
        logger.info("%s document has a header only (%d fields)", parser.name, len(rows[0]))
        return [{field: None for field in rows[0]}]

    records = parser.parse(text)
    logger.info("Parsed %s document: %d records", parser.name, len(records))
    return records


def convert_csv_to_data(text: str) -> list[Record]:
    """Parse a comma-delimited document into records."""
    return convert_xsv_to_data(CsvParser(), text)


def convert_tsv_to_data(text: str) -> list[Record]:
    """Parse a tab-delimited document into records."""
    return convert_xsv_to_data(TsvParser(), text)

"""
Unit tests for delimited-text parsing (series_convert.parsers.delimited).

Covers the comma/tab strategies and the header-only fast path.
"""

from __future__ import annotations

import pytest

from series_convert.parsers.delimited import (
    CsvParser,
    TsvParser,
    convert_csv_to_data,
    convert_tsv_to_data,
    convert_xsv_to_data,
)


class TestRows:
    """Tests for DelimitedParser.rows()."""

    def test_csv_rows_include_header(self):
        rows = CsvParser().rows("x,a\n1,10\n2,20\n")
        assert rows == [["x", "a"], ["1", "10"], ["2", "20"]]

    def test_tsv_rows(self):
        rows = TsvParser().rows("x\ta\n1\t10\n")
        assert rows == [["x", "a"], ["1", "10"]]

    def test_blank_text_has_no_rows(self):
        assert CsvParser().rows("") == []
        assert CsvParser().rows("  \n") == []


class TestConvertCsv:
    """Tests for convert_csv_to_data()."""

    def test_records_keyed_by_header(self):
        records = convert_csv_to_data("x,a\n1,10\n2,20\n")
        assert records == [{"x": "1", "a": "10"}, {"x": "2", "a": "20"}]

    def test_cells_stay_strings(self, prices_csv):
        records = convert_csv_to_data(prices_csv)
        assert records[0] == {"date": "2024-01-03", "open": "103", "close": "104"}

    def test_empty_cell_is_empty_string(self, prices_csv):
        records = convert_csv_to_data(prices_csv)
        assert records[2]["close"] == ""

    def test_quoted_cells(self):
        records = convert_csv_to_data('name,value\n"a,b",1\n')
        assert records == [{"name": "a,b", "value": "1"}]

    def test_repeated_header_name_is_one_field(self):
        """A repeated header name does not produce an extra renamed field."""
        assert convert_csv_to_data("a,a\n1,2\n") == [{"a": "2"}]

    def test_header_only_yields_single_null_record(self):
        """A header-only file means 'these series exist with no values yet'."""
        assert convert_csv_to_data("a,b,c\n") == [{"a": None, "b": None, "c": None}]

    def test_header_only_without_trailing_newline(self):
        assert convert_csv_to_data("a,b") == [{"a": None, "b": None}]

    def test_empty_document(self):
        assert convert_csv_to_data("") == []


class TestConvertTsv:
    """Tests for convert_tsv_to_data()."""

    def test_records(self, prices_tsv):
        records = convert_tsv_to_data(prices_tsv)
        assert len(records) == 2
        assert records[1] == {"date": "2024-01-02", "open": "102", "close": "103"}

    def test_header_only(self):
        assert convert_tsv_to_data("a\tb\n") == [{"a": None, "b": None}]

    def test_commas_are_data_in_tsv(self):
        records = convert_tsv_to_data("label\tv\nx,y\t1\n")
        assert records == [{"label": "x,y", "v": "1"}]


class TestConvertXsv:
    """Tests for the strategy dispatch in convert_xsv_to_data()."""

    def test_uses_given_strategy(self):
        class RecordingParser(CsvParser):
            name = "recording"
            parsed = False

            def parse(self, text):
                RecordingParser.parsed = True
                return super().parse(text)

        records = convert_xsv_to_data(RecordingParser(), "x\n1\n")
        assert RecordingParser.parsed
        assert records == [{"x": "1"}]

    def test_header_only_skips_full_parse(self):
        class NoParse(CsvParser):
            def parse(self, text):
                pytest.fail("parse() must not run for a header-only document")

        assert convert_xsv_to_data(NoParse(), "a,b\n") == [{"a": None, "b": None}]

"""
Unit tests for JSON path resolution and JSON conversion
(series_convert.parsers.json_path).
"""

from __future__ import annotations

from series_convert.config import JsonKeys
from series_convert.parsers.json_path import convert_json_to_data, find_value_in_json
from series_convert.values import MISSING


class TestFindValueInJson:
    """Tests for find_value_in_json()."""

    def test_flat_key(self):
        assert find_value_in_json({"a": 1}, "a") == 1

    def test_dotted_path(self):
        assert find_value_in_json({"a": {"b": {"c": 3}}}, "a.b.c") == 3

    def test_bracket_index(self):
        obj = {"a": {"b": [{"c": 1}, {"c": 2}]}}
        assert find_value_in_json(obj, "a.b[1].c") == 2

    def test_leading_dot_is_stripped(self):
        assert find_value_in_json({"a": {"b": 2}}, ".a.b") == 2

    def test_top_level_list(self):
        assert find_value_in_json([10, 20], "[1]") == 20

    def test_literal_key_with_dot_wins(self):
        """A key literally present is returned without path traversal."""
        obj = {"a.b": 5, "a": {"b": 6}}
        assert find_value_in_json(obj, "a.b") == 5

    def test_missing_segment(self):
        assert find_value_in_json({"a": {"b": 1}}, "a.c") is MISSING

    def test_missing_below_scalar(self):
        assert find_value_in_json({"a": 1}, "a.b") is MISSING

    def test_index_out_of_range(self):
        assert find_value_in_json({"a": [1]}, "a[3]") is MISSING

    def test_non_ascii_digit_segment(self):
        """Digit-like characters that are not decimal indices resolve to nothing."""
        assert find_value_in_json({"a": [1, 2]}, "a.\u00b2") is MISSING

    def test_stored_none_is_not_missing(self):
        assert find_value_in_json({"a": {"b": None}}, "a.b") is None

    def test_literal_none_value(self):
        assert find_value_in_json({"a": None}, "a") is None


class TestConvertJsonToData:
    """Tests for convert_json_to_data()."""

    def test_object_of_arrays(self, columns_json):
        records = convert_json_to_data(columns_json)
        assert records == [
            {"x": 1, "a": 10, "b": -1},
            {"x": 2, "a": 20, "b": 0},
            {"x": 3, "a": 30, "b": 1},
        ]

    def test_keys_with_x_appended_last(self, nested_json):
        keys = JsonKeys(value=["stats.views"], x="date")
        records = convert_json_to_data(nested_json, keys)
        assert records == [
            {"stats.views": 5, "date": "2024-01-01"},
            {"stats.views": 7, "date": "2024-01-02"},
        ]
        assert list(records[0]) == ["stats.views", "date"]

    def test_unresolved_path_becomes_none(self, nested_json):
        keys = JsonKeys(value=["stats.clicks[1]"])
        records = convert_json_to_data(nested_json, keys)
        assert records == [{"stats.clicks[1]": 2}, {"stats.clicks[1]": None}]

    def test_keys_without_x(self, nested_json):
        keys = JsonKeys(value=["stats.views"])
        records = convert_json_to_data(nested_json, keys)
        assert records == [{"stats.views": 5}, {"stats.views": 7}]

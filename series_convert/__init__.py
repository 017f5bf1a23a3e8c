"""
series-convert: normalize tabular/hierarchical data into chart target series.

Public API surface:

- ``Converter`` -- **recommended entry point**. Holds a ``ConvertConfig``
  and the ``DataStore`` every build updates; converts CSV/TSV/JSON/URL
  sources to records and records to ``TargetSeries``.

- ``convert_csv_to_data`` / ``convert_tsv_to_data`` / ``convert_json_to_data``
  / ``find_value_in_json`` / ``convert_rows_to_data`` /
  ``convert_columns_to_data`` -- stateless source -> records helpers.

- ``convert_data_to_targets(records, config=..., store=...)`` -- one-shot
  build against an explicit store.

Examples::

    conv = series_convert.Converter(ConvertConfig(x="date", x_type="timeseries"))
    targets = conv.load_text(open("prices.csv").read())
    conv.store.xs["close"]          # sorted Timestamps
    conv.get_from_cache("close")    # the finished series
"""

from __future__ import annotations

import logging

from series_convert.config import ConvertConfig, JsonKeys, load_config, save_config
from series_convert.converter import Converter
from series_convert.exceptions import (
    MalformedTabularData,
    RetrievalFailure,
    SeriesConvertError,
    UndefinedXAxis,
)
from series_convert.loader import FetchResponse
from series_convert.parsers.delimited import convert_csv_to_data, convert_tsv_to_data
from series_convert.parsers.json_path import convert_json_to_data, find_value_in_json
from series_convert.store import DataStore
from series_convert.transforms.pivot import convert_columns_to_data, convert_rows_to_data
from series_convert.transforms.targets import DataPoint, TargetBuilder, TargetSeries
from series_convert.values import MISSING, RangeValue

__all__ = [
    "Converter",
    "ConvertConfig",
    "JsonKeys",
    "DataStore",
    "DataPoint",
    "TargetSeries",
    "TargetBuilder",
    "FetchResponse",
    "RangeValue",
    "MISSING",
    "SeriesConvertError",
    "RetrievalFailure",
    "MalformedTabularData",
    "UndefinedXAxis",
    "load_config",
    "save_config",
    "convert_csv_to_data",
    "convert_tsv_to_data",
    "convert_json_to_data",
    "find_value_in_json",
    "convert_rows_to_data",
    "convert_columns_to_data",
    "convert_data_to_targets",
]

logger = logging.getLogger(__name__)


def convert_data_to_targets(
    records: list[dict],
    config: ConvertConfig | None = None,
    store: DataStore | None = None,
    append_xs: bool = False,
) -> list[TargetSeries]:
    """Build targets from *records* in one call.

    Args:
        records: Records as produced by the converters above.
        config: Build options; defaults to ``ConvertConfig()``.
        store: Store to update. Pass the same store to every build of a
            chart; a fresh one is used when omitted.
        append_xs: Extend cached x values instead of replacing them.

    Returns:
        The target series, in discovery order.
    """
    config = config or ConvertConfig()
    if store is None:
        store = DataStore(categories=list(config.categories))
    return TargetBuilder(config, store).build(records, append_xs=append_xs)

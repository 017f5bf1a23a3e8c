"""
Converter handle for series-convert.

The ``Converter`` class bundles a ``ConvertConfig`` with the
``DataStore`` it builds into, so callers never pass the store around
by hand. It exposes every conversion step:

- ``convert_csv_to_data`` / ``convert_tsv_to_data`` / ``convert_json_to_data``
  and ``convert_url_to_data``: source -> records.
- ``convert_data_to_targets``: records -> target series (store updated).
- ``load_text`` / ``load_json``: both steps in one call.

Design rationale:
- **Handle pattern**: one converter per chart; its store is the cross-build
  state (x values, cached series, categories).
- **Config mutation on JSON keys**: converting JSON with ``keys.x`` makes
  that field the shared x field for later builds, mirroring how the
  field list was extended.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping

from series_convert.config import ConvertConfig, JsonKeys
from series_convert.loader import Fetcher, decode_body, fetch_records
from series_convert.parsers import delimited, json_path
from series_convert.parsers.base import Record
from series_convert.store import DataStore
from series_convert.transforms.targets import TargetBuilder, TargetSeries

logger = logging.getLogger(__name__)


class Converter:
    """Handle object tying a config to its data store.

    Attributes:
        config: The ``ConvertConfig`` in effect.
        store: The ``DataStore`` mutated by every build.
        fetcher: Optional data-fetch collaborator for ``convert_url_to_data``.
    """

    def __init__(
        self,
        config: ConvertConfig | None = None,
        store: DataStore | None = None,
        fetcher: Fetcher | None = None,
    ) -> None:
        self.config = config or ConvertConfig()
        self.store = store if store is not None else DataStore(categories=list(self.config.categories))
        self.fetcher = fetcher

    def __repr__(self) -> str:
        return (
            f"Converter(x={self.config.x!r}, x_type={self.config.x_type!r}, "
            f"cached={list(self.store.cache)})"
        )

    # -- Source -> records --------------------------------------------------

    def convert_csv_to_data(self, text: str) -> list[Record]:
        return delimited.convert_csv_to_data(text)

    def convert_tsv_to_data(self, text: str) -> list[Record]:
        return delimited.convert_tsv_to_data(text)

    def convert_json_to_data(self, json: Any, keys: JsonKeys | None = None) -> list[Record]:
        """Convert JSON to records; ``keys.x`` becomes ``config.x``."""
        if keys is not None and keys.x:
            self.config.x = keys.x
        return json_path.convert_json_to_data(json, keys)

    def convert_url_to_data(
        self,
        url: str,
        mime_type: str = "csv",
        headers: Mapping[str, str] | None = None,
        keys: JsonKeys | None = None,
        done: Callable[[list[Record]], Any] | None = None,
    ) -> None:
        """Fetch *url* through the fetcher and pass the records to *done*.

        Raises:
            ValueError: If the converter has no fetcher.
            RetrievalFailure: If the fetcher delivered no body.
        """
        if self.fetcher is None:
            raise ValueError("Converter has no fetcher; pass fetcher= to load URLs.")
        if mime_type == "json" and keys is not None and keys.x:
            self.config.x = keys.x
        fetch_records(self.fetcher, url, mime_type, headers, keys, done or (lambda records: None))

    # -- Records -> targets -------------------------------------------------

    def convert_data_to_targets(
        self, records: list[Record], append_xs: bool = False
    ) -> list[TargetSeries]:
        return TargetBuilder(self.config, self.store).build(records, append_xs=append_xs)

    def load_text(self, text: str | bytes, mime_type: str = "csv", append_xs: bool = False) -> list[TargetSeries]:
        """Decode a csv/tsv/json document and build its targets."""
        records = decode_body(text, mime_type)
        return self.convert_data_to_targets(records, append_xs=append_xs)

    def load_json(
        self, json: Any, keys: JsonKeys | None = None, append_xs: bool = False
    ) -> list[TargetSeries]:
        """Convert already-decoded JSON and build its targets."""
        records = self.convert_json_to_data(json, keys)
        return self.convert_data_to_targets(records, append_xs=append_xs)

    # -- Store access -------------------------------------------------------

    def get_from_cache(self, id_org: str) -> TargetSeries | None:
        return self.store.get_from_cache(id_org)

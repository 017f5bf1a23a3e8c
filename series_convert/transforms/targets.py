"""
Target builder for series-convert.

Converts records (``field name -> cell`` mappings) into target series,
the per-series ``(x, value, index)`` sequences a renderer consumes, and
updates the ``DataStore`` the build is bound to.

Build steps:

1. **Discovery**: fields of the first record are split into x fields and
   series ids using the configured x keys.
2. **X-source resolution**, per series, first match wins:
   a. no custom/time-series x: synthetic x ``0..n-1``;
   b. the series' x field is in the data: generate x from that column
      (appended to the cached x values in append mode);
   c. a global ``x`` is configured but absent here: borrow the x values
      already cached for another series;
   d. ``xs`` is configured: take the x values of a cached series that
      declared the same x field;
   e. otherwise keep whatever x values are already cached; with none,
      the build fails with ``UndefinedXAxis``.
3. **Values**: each cell is coerced (``values.coerce_value``). For the
   first series of a categorized custom-x build the raw x labels are
   mapped onto the category registry. An absent cell, or a record index
   beyond the series' x values, leaves x unresolved.
4. **Filter**: entries with unresolved x are dropped (a null value is kept).
5. **Sort & index**: optional stable sort by x (null x last), then
   ``index`` is renumbered ``0..k-1``. Each series' cached x values are
   sorted too.
6. **Flags, types and cache** are written to the store.

Atomicity: x values and categories are staged locally and committed to
the store only after step 2's check passes, so a failed build leaves the
store as it was.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

from series_convert.config import ConvertConfig
from series_convert.exceptions import UndefinedXAxis
from series_convert.store import DataStore
from series_convert.transforms.xaxis import (
    generate_target_x,
    get_x_key,
    is_categorized,
    is_custom_x,
    is_not_x,
    is_timeseries,
    is_x,
)
from series_convert.values import MISSING, SeriesValue, coerce_value, is_value

logger = logging.getLogger(__name__)

Record = Mapping[str, Any]


@dataclass
class DataPoint:
    """One entry of a target series."""

    x: Any
    value: SeriesValue
    id: str
    index: int = 0


@dataclass
class TargetSeries:
    """A normalized series.

    Attributes:
        id: Public id (after ``config.id_converter``).
        id_org: Original field name; the store's cache key.
        values: Entries in final order with ``index`` 0..k-1.
    """

    id: str
    id_org: str
    values: list[DataPoint] = field(default_factory=list)


def _x_sort_key(x: Any) -> tuple[bool, Any]:
    # None sorts last; 0 is an ordinary value.
    return (x is None, 0 if x is None else x)


class TargetBuilder:
    """Builds target series from records against a shared ``DataStore``.

    The builder is cheap to create; all cross-build state lives in the
    store, so several builders may share one store as long as their
    builds are serialized.
    """

    def __init__(self, config: ConvertConfig, store: DataStore) -> None:
        self.config = config
        self.store = store

    # -- Public API ---------------------------------------------------------

    def build(self, records: Sequence[Record], append_xs: bool = False) -> list[TargetSeries]:
        """Convert *records* into target series and update the store.

        Args:
            records: Normalized records; field names are taken from the
                first record.
            append_xs: Extend cached x values for these ids instead of
                replacing them (incremental loads).

        Returns:
            Target series in discovery order.

        Raises:
            UndefinedXAxis: If a series has no x source. The store is not
                modified in that case.
        """
        if not records:
            logger.info("No records to convert")
            return []

        config = self.config
        fields = list(records[0].keys())
        ids = [key for key in fields if is_not_x(config, key)]
        x_fields = [key for key in fields if is_x(config, key)]
        logger.info(
            "Building targets: %d records, ids=%s, x fields=%s, append=%s",
            len(records), ids, x_fields, append_xs,
        )

        # -- Step 2: x sources ------------------------------------------
        staged = self._resolve_xs(records, ids, x_fields, append_xs)
        for series_id in ids:
            if staged.get(series_id) is None:
                raise UndefinedXAxis(series_id)
        xs_view = {**self.store.xs, **staged}

        # -- Steps 3-4: values ------------------------------------------
        categories: list[Any] | None = None
        if is_custom_x(config) and is_categorized(config):
            seed = self.store.categories if append_xs else config.categories
            categories = list(seed)

        targets = [
            self._build_series(
                records,
                series_id,
                xs_view,
                categories if position == 0 else None,
            )
            for position, series_id in enumerate(ids)
        ]

        # -- Step 5: sort & index ---------------------------------------
        for target in targets:
            self._finish_series(target)
        for series_id in ids:
            staged[series_id].sort(key=_x_sort_key)

        # -- Commit -----------------------------------------------------
        self.store.xs.update(staged)
        if categories is not None:
            self.store.categories[:] = categories
        self._update_flags(targets)
        self._apply_default_type(targets)
        for target in targets:
            self.store.add_cache(target.id_org, target)

        logger.info("Built %d targets", len(targets))
        return targets

    # -- X resolution -------------------------------------------------------

    def _resolve_xs(
        self,
        records: Sequence[Record],
        ids: list[str],
        x_fields: list[str],
        append_xs: bool,
    ) -> dict[str, list[Any] | None]:
        config = self.config
        staged: dict[str, list[Any] | None] = {}

        for series_id in ids:
            x_key = get_x_key(config, series_id)

            if not (is_custom_x(config) or is_timeseries(config)):
                staged[series_id] = list(range(len(records)))
                source = "index"
            elif x_key in x_fields:
                view = {**self.store.xs, **staged}
                raw_xs = [r.get(x_key, MISSING) for r in records]
                generated = [
                    generate_target_x(config, view, raw_x, series_id, i)
                    for i, raw_x in enumerate(x for x in raw_xs if is_value(x))
                ]
                previous = self.store.xs.get(series_id) if append_xs else None
                staged[series_id] = list(previous or []) + generated
                source = f"column {x_key!r}"
            elif config.x:
                staged[series_id] = self._get_other_target_xs(staged)
                source = "other series"
            elif config.xs:
                staged[series_id] = self._get_x_values_of_x_key(x_key, staged)
                source = f"cached series with x {x_key!r}"
            else:
                staged[series_id] = None
                source = "none"

            if staged[series_id] is None and series_id in self.store.xs:
                staged[series_id] = list(self.store.xs[series_id])
                source = "previous load"

            logger.debug("x source for %r: %s", series_id, source)

        return staged

    def _get_other_target_xs(self, staged: Mapping[str, list[Any] | None]) -> list[Any] | None:
        """X values of the first series that has any."""
        merged = {**self.store.xs, **staged}
        for xs in merged.values():
            if xs is not None:
                return list(xs)
        return None

    def _get_x_values_of_x_key(
        self, key: str | None, staged: Mapping[str, list[Any] | None]
    ) -> list[Any] | None:
        """X values of the last cached series whose x field is *key*."""
        if key is None:
            return None
        merged = {**self.store.xs, **staged}
        found = None
        for target in self.store.cache.values():
            if get_x_key(self.config, target.id_org) == key and merged.get(target.id_org) is not None:
                found = list(merged[target.id_org])
        return found

    # -- Values -------------------------------------------------------------

    def _build_series(
        self,
        records: Sequence[Record],
        series_id: str,
        xs_view: Mapping[str, list[Any]],
        categories: list[Any] | None,
    ) -> TargetSeries:
        """Build one series' entries, dropping those with unresolved x.

        When *categories* is given, raw x labels are looked up in (and
        appended to) it and the label position becomes x.
        """
        config = self.config
        converted_id = config.convert_id(series_id)
        x_key = get_x_key(config, series_id)
        series_xs = xs_view[series_id]

        values: list[DataPoint] = []
        for i, record in enumerate(records):
            raw_x = record.get(x_key, MISSING) if x_key is not None else MISSING
            cell = record.get(series_id, MISSING)

            if categories is not None and raw_x is not MISSING:
                if raw_x in categories:
                    x = categories.index(raw_x)
                else:
                    x = len(categories)
                    categories.append(raw_x)
            else:
                x = generate_target_x(config, xs_view, raw_x, series_id, i)

            if cell is MISSING or len(series_xs) <= i:
                x = MISSING

            values.append(DataPoint(x=x, value=coerce_value(cell), id=converted_id))

        return TargetSeries(
            id=converted_id,
            id_org=series_id,
            values=[v for v in values if v.x is not MISSING],
        )

    def _finish_series(self, target: TargetSeries) -> None:
        if self.config.x_sort:
            target.values.sort(key=lambda v: _x_sort_key(v.x))
        for i, v in enumerate(target.values):
            v.index = i

    # -- Store updates ------------------------------------------------------

    def _update_flags(self, targets: list[TargetSeries]) -> None:
        numbers = [
            v.value
            for t in targets
            for v in t.values
            if isinstance(v.value, float)
        ]
        self.store.has_negative_value = any(n < 0 for n in numbers)
        self.store.has_positive_value = any(n > 0 for n in numbers)

    def _apply_default_type(self, targets: list[TargetSeries]) -> None:
        if not self.config.type:
            return
        for target in targets:
            self.store.types[target.id] = self.config.types.get(target.id, self.config.type)

"""
Data store handle for series-convert.

``DataStore`` owns the state that survives across builds:

- ``xs``: series id (original field name) -> resolved x values. Append
  loads extend an entry, other loads replace it.
- ``cache``: ``id_org`` -> last finished ``TargetSeries``; later
  incremental operations re-fetch a series by its original key.
- ``categories``: the category label registry; a label's position is its
  numeric x.
- ``types``: resolved series type per public id.
- ``has_negative_value`` / ``has_positive_value``: derived from the last
  build, consumed by axis scaling.

Single-writer discipline: the store has no locking. Builds that touch
overlapping series ids (or the same category domain) must be serialized
by the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from series_convert.transforms.targets import TargetSeries

logger = logging.getLogger(__name__)


@dataclass
class DataStore:
    """Explicitly owned cross-build state. Pass the same instance to every build."""

    xs: dict[str, list[Any]] = field(default_factory=dict)
    cache: dict[str, TargetSeries] = field(default_factory=dict)
    categories: list[Any] = field(default_factory=list)
    types: dict[str, str] = field(default_factory=dict)
    has_negative_value: bool = False
    has_positive_value: bool = False

    def add_cache(self, id_org: str, target: TargetSeries) -> None:
        self.cache[id_org] = target

    def get_from_cache(self, id_org: str) -> TargetSeries | None:
        """Return the last finished series for *id_org*, or ``None``."""
        return self.cache.get(id_org)

    def clear(self) -> None:
        """Drop every cached series, x sequence and category."""
        self.xs.clear()
        self.cache.clear()
        self.categories.clear()
        self.types.clear()
        self.has_negative_value = False
        self.has_positive_value = False
        logger.info("Data store cleared")

"""
Configuration models and YAML I/O for series-convert.

This module defines the Pydantic models consumed by the converter, plus
helpers for loading and saving them.

Key models:
- ConvertConfig: x-axis semantics, sorting, categories and series typing.
- JsonKeys: explicit key paths used when converting an array of JSON objects.

Key functions:
- load_config(path) -> ConvertConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Why Pydantic + YAML:
- Pydantic gives us strict validation and clear error messages.
- YAML is human-editable for chart definitions kept next to data files.
- ``id_converter`` is a callable and therefore never written to YAML; it is
  attached in code after loading.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Literal

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from series_convert.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)


class ConvertConfig(BaseModel):
    """Options recognized by the target builder.

    ``x_type`` carries two flags at once: ``"category"`` turns on
    categorization and ``"timeseries"`` turns on time-series x parsing.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    x: str | None = Field(None, description="Field name shared as x by every series")
    xs: dict[str, str] = Field(
        default_factory=dict,
        description="Per-series x field override: series id -> x field name",
    )
    x_type: Literal["indexed", "category", "timeseries"] = Field(
        "indexed", description="How x values are interpreted"
    )
    x_format: str = Field("%Y-%m-%d", description="strptime format for time-series x")
    x_sort: bool = Field(True, description="Sort each series' values by x")
    categories: list[Any] = Field(
        default_factory=list, description="Explicit category labels (seed registry)"
    )
    type: str | None = Field(None, description="Default series type")
    types: dict[str, str] = Field(
        default_factory=dict, description="Explicit per-id series type overrides"
    )
    id_converter: Callable[[str], str] | None = Field(None, exclude=True)

    @model_validator(mode="after")
    def _check_xs_not_self_referencing(self) -> ConvertConfig:
        """A series cannot use its own column as its x source."""
        for series_id, x_key in self.xs.items():
            if series_id == x_key:
                raise ValueError(
                    f"Series '{series_id}' is mapped to itself in 'xs'. "
                    "Each series must take x from a different field."
                )
        return self

    def convert_id(self, series_id: str) -> str:
        """Apply ``id_converter`` (identity when unset)."""
        if self.id_converter is None:
            return series_id
        return self.id_converter(series_id)


class JsonKeys(BaseModel):
    """Key paths selecting series (and optionally x) from JSON objects."""

    value: list[str] = Field(..., min_length=1)
    x: str | None = None


def load_config(path: str | Path) -> ConvertConfig:
    """Load and validate a YAML config into a ConvertConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded config from %s", path)
    return ConvertConfig.model_validate(raw)


def save_config(config: ConvertConfig, path: str | Path) -> None:
    """Serialize a ConvertConfig to YAML (``id_converter`` is omitted)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# series-convert configuration\n\n")
        yaml.dump(
            data,
            f,
            allow_unicode=True,
            default_flow_style=False,
            sort_keys=False,
        )
    logger.info("Saved config to %s", path)

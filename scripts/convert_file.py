"""
Demo script: convert a local CSV/TSV/JSON file into target series.

Usage:
    uv run python scripts/convert_file.py data.csv
    uv run python scripts/convert_file.py data.tsv chart.yaml

The mime type is taken from the file extension. An optional YAML config
(see ``series_convert.config``) selects x fields, x type and sorting.
Each resulting series is summarized in the log.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("convert_file")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> None:
    import series_convert

    if len(sys.argv) < 2:
        log.error("usage: convert_file.py <data file> [config.yaml]")
        sys.exit(2)

    data_path = Path(sys.argv[1])
    mime_type = data_path.suffix.lower().lstrip(".") or "csv"

    config = series_convert.ConvertConfig()
    if len(sys.argv) > 2:
        config = series_convert.load_config(sys.argv[2])

    conv = series_convert.Converter(config)
    targets = conv.load_text(data_path.read_bytes(), mime_type=mime_type)

    log.info("=" * 70)
    for t in targets:
        xs = [v.x for v in t.values]
        log.info(
            "  %-20s %4d values  x: %s .. %s",
            t.id, len(t.values), xs[0] if xs else None, xs[-1] if xs else None,
        )
    log.info("=" * 70)
    log.info(
        "has_negative_value=%s has_positive_value=%s categories=%s",
        conv.store.has_negative_value,
        conv.store.has_positive_value,
        conv.store.categories,
    )


if __name__ == "__main__":
    main()

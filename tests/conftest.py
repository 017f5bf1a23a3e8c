"""
Shared test fixtures and sample documents for series-convert tests.

Sample sources are small inline strings/objects so every test is
self-contained. If a sample changes, update it here.
"""

from __future__ import annotations

import pytest

from series_convert.config import ConvertConfig
from series_convert.loader import FetchResponse
from series_convert.store import DataStore

# ---------------------------------------------------------------------------
# Sample documents
# ---------------------------------------------------------------------------
PRICES_CSV = """\
date,open,close
2024-01-03,103,104
2024-01-01,100,-101
2024-01-02,102,
"""

PRICES_TSV = "date\topen\tclose\n2024-01-01\t100\t101\n2024-01-02\t102\t103\n"

HEADER_ONLY_CSV = "a,b,c\n"

WEEKDAY_RECORDS = [
    {"day": "Mon", "visits": "10"},
    {"day": "Tue", "visits": "20"},
    {"day": "Mon", "visits": "30"},
]

NESTED_JSON = [
    {"date": "2024-01-01", "stats": {"views": 5, "clicks": [1, 2]}},
    {"date": "2024-01-02", "stats": {"views": 7}},
]

COLUMNS_JSON = {"x": [1, 2, 3], "a": [10, 20, 30], "b": [-1, 0, 1]}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> DataStore:
    return DataStore()


@pytest.fixture
def timeseries_config() -> ConvertConfig:
    return ConvertConfig(x="date", x_type="timeseries")


class FakeFetcher:
    """Fetcher collaborator that answers from a dict of url -> body."""

    def __init__(self, bodies: dict[str, str | bytes | None]) -> None:
        self.bodies = bodies
        self.requests: list[tuple[str, dict | None]] = []

    def __call__(self, url, headers, callback):
        self.requests.append((url, headers))
        body = self.bodies.get(url)
        if body is None:
            error = FetchResponse(url=url, status=404, status_text="Not Found")
            callback(error, None)
        else:
            callback(None, FetchResponse(url=url, status=200, status_text="OK", body=body))


@pytest.fixture
def fake_fetcher():
    return FakeFetcher


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: end-to-end tests that go through the Converter handle",
    )


# ---------------------------------------------------------------------------
# Sample fixtures (tests request samples by name instead of importing)
# ---------------------------------------------------------------------------

@pytest.fixture
def prices_csv() -> str:
    return PRICES_CSV


@pytest.fixture
def prices_tsv() -> str:
    return PRICES_TSV


@pytest.fixture
def weekday_records() -> list[dict]:
    return [dict(r) for r in WEEKDAY_RECORDS]


@pytest.fixture
def nested_json() -> list[dict]:
    return [dict(o) for o in NESTED_JSON]


@pytest.fixture
def columns_json() -> dict[str, list]:
    return {k: list(v) for k, v in COLUMNS_JSON.items()}

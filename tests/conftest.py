from __future__ import annotations

from datetime import datetime, timezone

import pytest

from trendline.data_model import Record, Series


def day(n: int) -> float:
    """Unix timestamp of 2023-01-n (UTC)."""
    return datetime(2023, 1, n, tzinfo=timezone.utc).timestamp()


def make_series(category: str, points) -> Series:
    return Series(category=category, records=tuple(Record(day(d), float(p), category) for d, p in points))


@pytest.fixture
def aal():
    return make_series("AAL", [(1, 10), (5, 20), (10, 30)])


@pytest.fixture(autouse=True)
def _no_env_overrides(monkeypatch):
    monkeypatch.delenv("TRENDLINE_DATA", raising=False)

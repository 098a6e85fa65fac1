"""Shared fixtures for the bookshelf tests."""

from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from bookshelf.catalog import Catalog
from bookshelf.main import create_app


class FakeClock:
    """A clock that moves forward one second each time it is read."""

    def __init__(self) -> None:
        self.now = datetime(2022, 5, 1, 8, 30, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        current = self.now
        self.now += timedelta(seconds=1)
        return current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def catalog(clock: FakeClock) -> Catalog:
    return Catalog(clock=clock)


@pytest.fixture
def client(catalog: Catalog) -> TestClient:
    return TestClient(create_app(catalog=catalog))


@pytest.fixture
def book_fields() -> dict:
    return {
        "name": "Bumi Manusia",
        "year": 1980,
        "author": "Pramoedya Ananta Toer",
        "summary": "Kisah Minke di masa kolonial",
        "publisher": "Hasta Mitra",
        "pageCount": 535,
        "readPage": 120,
        "reading": True,
    }

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from entries.router import get_entry_store
from entries.schemas import Entry
from main import create_app


class InMemoryEntryStore:
    """EntryStore double that records inserts and can be told to fail."""

    def __init__(self, entries: list[Entry] | None = None) -> None:
        self.entries = list(entries or [])
        self.inserted: list[tuple] = []
        self.fetch_error: Exception | None = None
        self.insert_error: Exception | None = None

    async def fetch_all_entries(self) -> list[Entry]:
        if self.fetch_error is not None:
            raise self.fetch_error
        return list(self.entries)

    async def insert_entry(self, created, title, author, text) -> None:
        if self.insert_error is not None:
            raise self.insert_error
        self.inserted.append((created, title, author, text))
        self.entries.append(Entry(created=created, title=title, author=author, text=text))


def build_client(store: InMemoryEntryStore, *, raise_server_exceptions: bool = True) -> TestClient:
    # Not entered as a context manager, so the lifespan (and its database) never runs.
    app = create_app()
    app.dependency_overrides[get_entry_store] = lambda: store
    return TestClient(app, raise_server_exceptions=raise_server_exceptions)


@pytest.fixture
def store() -> InMemoryEntryStore:
    return InMemoryEntryStore()


@pytest.fixture
def valid_entry() -> Entry:
    return Entry(
        created=datetime(2024, 5, 1, 10, 30, 15, 123456, tzinfo=timezone.utc),
        title="Twenty chars title!!",
        author="a@b.com",
        text="Fifteen chars!!",
    )


@pytest.fixture
def make_client():
    return build_client


@pytest.fixture
def client(store: InMemoryEntryStore) -> TestClient:
    return build_client(store)

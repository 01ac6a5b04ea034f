"""Shared pytest configuration and fixtures."""

from __future__ import annotations

import pytest

from f1_rag.ingestion.models import IngestRecord
from f1_rag.store.base import VectorStoreBase


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


class FakeVectorStore(VectorStoreBase):
    """In-memory store that records every call.

    ``fail_on`` holds 1-based insert attempt numbers that should raise.
    """

    def __init__(self, fail_on: set[int] | None = None) -> None:
        super().__init__("test-collection")
        self.fail_on = fail_on or set()
        self.records: list[IngestRecord] = []
        self.attempts = 0
        self.calls: list[str] = []

    def create_collection(self, dimension: int, metric: str = "cosine") -> None:
        self.calls.append(f"create:{dimension}:{metric}")

    def drop_collection(self) -> None:
        self.calls.append("drop")

    def insert_one(self, record: IngestRecord) -> None:
        self.attempts += 1
        if self.attempts in self.fail_on:
            raise RuntimeError(f"insert {self.attempts} rejected")
        self.records.append(record)


@pytest.fixture()
def fake_store() -> FakeVectorStore:
    return FakeVectorStore()


@pytest.fixture()
def make_store() -> type[FakeVectorStore]:
    """Return the fake class so tests can configure failing inserts."""
    return FakeVectorStore

"""Domain models flowing through the ingestion pipeline."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field


class SourceDocument(BaseModel):
    """One fetched page, alive only until it has been chunked."""

    url: str
    text: str = ""


class Chunk(BaseModel):
    """A contiguous slice of a document's normalised text.

    Attributes
    ----------
    source_url:
        URL of the page the chunk was cut from.
    index:
        Ordinal position of the chunk within the page.
    text:
        The chunk content, an exact substring of the page text.
    start_index:
        Character offset of ``text`` within the page text.
    """

    model_config = ConfigDict(frozen=True)

    source_url: str
    index: int = Field(ge=0)
    text: str
    start_index: int = Field(default=0, ge=0)


class IngestRecord(BaseModel):
    """The persisted unit: one embedded chunk plus its provenance."""

    model_config = ConfigDict(frozen=True)

    record_id: str = Field(default_factory=lambda: uuid4().hex)
    vector: list[float]
    text: str
    source_url: str
    chunk_index: int
    inserted_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_chunk(cls, chunk: Chunk, vector: list[float]) -> IngestRecord:
        return cls(
            vector=vector,
            text=chunk.text,
            source_url=chunk.source_url,
            chunk_index=chunk.index,
        )

    def metadata(self) -> dict[str, Any]:
        """Flat provenance metadata stored next to the vector."""
        return {
            "source_url": self.source_url,
            "inserted_at": self.inserted_at.isoformat(),
            "chunk_index": self.chunk_index,
        }

    def to_document(self) -> dict[str, Any]:
        """Return the wire shape ``{vector, text, source_url, inserted_at, chunk_index}``."""
        return {"vector": list(self.vector), "text": self.text, **self.metadata()}


@dataclass
class RunStats:
    """Run-scoped counters, owned by the orchestrator.

    Only ever incremented; a new instance is created for every run.
    """

    success_count: int = 0
    error_count: int = 0
    skipped_urls: int = 0
    skipped_chunks: int = 0
    tier_counts: Counter = field(default_factory=Counter)

    def record_success(self) -> None:
        self.success_count += 1

    def record_error(self) -> None:
        self.error_count += 1

    def summary(self) -> str:
        return f"Success: {self.success_count}, Errors: {self.error_count}"

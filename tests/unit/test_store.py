"""Unit tests for the vector-store layer — Chroma backend and StoreWriter."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from f1_rag.ingestion.models import IngestRecord, RunStats
from f1_rag.store.writer import StoreWriter


def _record(chunk_index: int = 0) -> IngestRecord:
    return IngestRecord(
        vector=[0.1, 0.2, 0.3],
        text="Oscar Piastri took pole.",
        source_url="https://f1.example/bahrain",
        chunk_index=chunk_index,
    )


# ── IngestRecord ────────────────────────────────────────────────────────


class TestIngestRecord:
    def test_wire_shape(self) -> None:
        doc = _record(4).to_document()
        assert set(doc) == {"vector", "text", "source_url", "inserted_at", "chunk_index"}
        assert doc["chunk_index"] == 4
        assert doc["inserted_at"].endswith("+00:00")

    def test_record_ids_are_unique(self) -> None:
        assert _record().record_id != _record().record_id

    def test_record_is_immutable(self) -> None:
        rec = _record()
        with pytest.raises(Exception):
            rec.text = "changed"  # type: ignore[misc]


# ── StoreWriter ─────────────────────────────────────────────────────────


class TestStoreWriter:
    def test_success_increments_success_count(self, fake_store) -> None:
        stats = RunStats()
        assert StoreWriter(fake_store).insert(_record(), stats) is True
        assert stats.success_count == 1
        assert stats.error_count == 0
        assert len(fake_store.records) == 1

    def test_failure_is_counted_not_raised(self, make_store) -> None:
        store = make_store(fail_on={1})
        stats = RunStats()
        assert StoreWriter(store).insert(_record(), stats) is False
        assert stats.success_count == 0
        assert stats.error_count == 1
        assert store.records == []

    def test_counts_accumulate_across_inserts(self, make_store) -> None:
        store = make_store(fail_on={2})
        writer = StoreWriter(store)
        stats = RunStats()
        outcomes = [writer.insert(_record(i), stats) for i in range(3)]
        assert outcomes == [True, False, True]
        assert (stats.success_count, stats.error_count) == (2, 1)


# ── VectorStoreBase ─────────────────────────────────────────────────────


def test_recreate_drops_then_creates(fake_store) -> None:
    fake_store.recreate_collection(1536, "cosine")
    assert fake_store.calls == ["drop", "create:1536:cosine"]


# ── ChromaVectorStore ───────────────────────────────────────────────────


@pytest.fixture()
def chroma():
    """A ChromaVectorStore wired to a mocked ``chromadb`` module."""
    mock_client = MagicMock()
    mock_chromadb = MagicMock()
    mock_chromadb.HttpClient.return_value = mock_client

    with patch.dict("sys.modules", {"chromadb": mock_chromadb}):
        from f1_rag.store.chroma_store import ChromaVectorStore

        store = ChromaVectorStore(
            "f1_pages",
            host="chroma.example",
            port=8443,
            token="secret",
            tenant="default_tenant",
            database="f1",
            ssl=True,
        )
    return store, mock_chromadb, mock_client


class TestChromaVectorStore:
    def test_client_configuration(self, chroma) -> None:
        _, mock_chromadb, _ = chroma
        mock_chromadb.HttpClient.assert_called_once_with(
            host="chroma.example",
            port=8443,
            ssl=True,
            headers={"Authorization": "Bearer secret"},
            tenant="default_tenant",
            database="f1",
        )

    def test_create_collection(self, chroma) -> None:
        store, _, client = chroma
        store.create_collection(1536, "cosine")
        client.create_collection.assert_called_once_with(
            name="f1_pages",
            metadata={"hnsw:space": "cosine", "dimension": 1536},
        )

    def test_create_existing_collection_is_success(self, chroma) -> None:
        store, _, client = chroma
        client.create_collection.side_effect = Exception("Collection f1_pages already exists")
        store.create_collection(1536)
        client.get_collection.assert_called_once_with("f1_pages")

    def test_create_other_error_propagates(self, chroma) -> None:
        store, _, client = chroma
        client.create_collection.side_effect = Exception("unauthorized")
        with pytest.raises(Exception, match="unauthorized"):
            store.create_collection(1536)

    @pytest.mark.parametrize(
        "message",
        ["Collection f1_pages does not exist.", "Collection [f1_pages] does not exists",
         "Collection f1_pages not found"],
    )
    def test_drop_missing_collection_is_not_an_error(self, chroma, message: str) -> None:
        store, _, client = chroma
        client.delete_collection.side_effect = ValueError(message)
        store.drop_collection()
        client.delete_collection.assert_called_once_with("f1_pages")

    def test_drop_other_error_propagates(self, chroma) -> None:
        store, _, client = chroma
        client.delete_collection.side_effect = ConnectionError("refused")
        with pytest.raises(ConnectionError):
            store.drop_collection()

    def test_insert_one_adds_single_record(self, chroma) -> None:
        store, _, client = chroma
        store.create_collection(3)
        collection = client.create_collection.return_value
        rec = _record(2)

        store.insert_one(rec)

        collection.add.assert_called_once()
        kwargs = collection.add.call_args.kwargs
        assert kwargs["ids"] == [rec.record_id]
        assert kwargs["embeddings"] == [[0.1, 0.2, 0.3]]
        assert kwargs["documents"] == ["Oscar Piastri took pole."]
        assert kwargs["metadatas"] == [rec.metadata()]
        assert kwargs["metadatas"][0]["source_url"] == "https://f1.example/bahrain"

    def test_insert_without_create_uses_existing_collection(self, chroma) -> None:
        store, _, client = chroma
        store.insert_one(_record())
        client.get_collection.assert_called_once_with("f1_pages")
        client.get_collection.return_value.add.assert_called_once()

    def test_insert_error_propagates(self, chroma) -> None:
        store, _, client = chroma
        client.get_collection.return_value.add.side_effect = RuntimeError("dimension mismatch")
        with pytest.raises(RuntimeError):
            store.insert_one(_record())

"""Store writer — one insert per chunk with success / error bookkeeping."""

from __future__ import annotations

import logging

from f1_rag.ingestion.models import IngestRecord, RunStats
from f1_rag.store.base import VectorStoreBase

logger = logging.getLogger(__name__)


class StoreWriter:
    """Persist records one at a time and record each outcome on a :class:`RunStats`.

    A rejected insert is logged and counted; it never aborts the run and is
    not retried.
    """

    def __init__(self, store: VectorStoreBase) -> None:
        self._store = store

    def insert(self, record: IngestRecord, stats: RunStats) -> bool:
        try:
            self._store.insert_one(record)
        except Exception as exc:
            logger.error("Insert failed for %s chunk %d: %s",
                         record.source_url, record.chunk_index, exc)
            stats.record_error()
            return False
        stats.record_success()
        return True

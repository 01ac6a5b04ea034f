"""Ingestion orchestrator — drives fetch → chunk → embed → reconcile → store.

Processing is strictly sequential: one URL, one chunk and one request at a
time.  Per-URL and per-chunk failures are contained and counted; only an
unexpected error outside the loops reaches the caller.

Usage::

    orchestrator = IngestionOrchestrator(
        fetcher=PageFetcher(),
        chunker=TextChunker(),
        embedder=Embedder(),
        writer=StoreWriter(ChromaVectorStore()),
    )
    stats = orchestrator.run(F1_SOURCE_URLS)
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable

from f1_rag.config import settings
from f1_rag.ingestion.chunker import TextChunker
from f1_rag.ingestion.embedder import Embedder
from f1_rag.ingestion.models import Chunk, IngestRecord, RunStats, SourceDocument
from f1_rag.ingestion.reconcile import reconcile_dimension
from f1_rag.store.writer import StoreWriter

logger = logging.getLogger(__name__)


class IngestionOrchestrator:
    """Run a full re-ingestion over a list of URLs.

    Parameters
    ----------
    fetcher:
        Callable returning the normalised text of a URL (``""`` on failure).
    chunker:
        Splits page text into ordered chunks.
    embedder:
        Fallback-chain embedder; never raises for provider failures.
    writer:
        Store writer recording insert outcomes.
    dimension:
        Vector length the store expects.
    min_chunk_length:
        Chunks whose trimmed text is shorter are skipped before embedding.
    pacing_interval:
        Seconds to sleep after every successful insert.
    """

    def __init__(
        self,
        fetcher: Callable[[str], str],
        chunker: TextChunker,
        embedder: Embedder,
        writer: StoreWriter,
        *,
        dimension: int = settings.vector_dimension,
        min_chunk_length: int = settings.min_chunk_length,
        pacing_interval: float = settings.pacing_interval,
    ) -> None:
        self.fetcher = fetcher
        self.chunker = chunker
        self.embedder = embedder
        self.writer = writer
        self.dimension = dimension
        self.min_chunk_length = min_chunk_length
        self.pacing_interval = pacing_interval

    def run(self, urls: Iterable[str]) -> RunStats:
        """Ingest every URL in order and return the run's counters."""
        stats = RunStats()
        for url in urls:
            self.ingest_url(url, stats)
            logger.info("URL completed. %s", stats.summary())
        logger.info("Final results - %s (skipped urls: %d, skipped chunks: %d, tiers: %s)",
                    stats.summary(), stats.skipped_urls, stats.skipped_chunks,
                    dict(stats.tier_counts))
        return stats

    def ingest_url(self, url: str, stats: RunStats) -> None:
        logger.info("Scraping URL: %s", url)
        document = SourceDocument(url=url, text=self.fetcher(url))
        if not document.text:
            logger.warning("Skipping URL due to empty content: %s", url)
            stats.skipped_urls += 1
            return

        chunks = self.chunker.split_document(document)
        logger.info("Processing %d chunks from %s", len(chunks), url)

        for chunk in chunks:
            if len(chunk.text.strip()) < self.min_chunk_length:
                logger.info("Skipping very short chunk %d", chunk.index + 1)
                stats.skipped_chunks += 1
                continue
            try:
                inserted = self.process_chunk(chunk, stats)
            except Exception:
                logger.exception("Error processing chunk %d of %s", chunk.index + 1, url)
                stats.record_error()
                continue
            if inserted:
                time.sleep(self.pacing_interval)

    def process_chunk(self, chunk: Chunk, stats: RunStats) -> bool:
        """Embed, reconcile and persist one chunk; ``True`` when inserted."""
        tier, vector = self.embedder.embed_with_tier(chunk.text)
        stats.tier_counts[tier] += 1

        vector = reconcile_dimension(vector, self.dimension)
        if len(vector) != self.dimension:
            logger.error("Vector dimension mismatch: expected %d, got %d",
                         self.dimension, len(vector))
            stats.record_error()
            return False

        record = IngestRecord.from_chunk(chunk, vector)
        if not self.writer.insert(record, stats):
            return False
        logger.info("Inserted chunk %d (%s embedding)", chunk.index + 1, tier)
        return True

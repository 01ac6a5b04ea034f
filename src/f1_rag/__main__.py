"""Entry point — ``python -m f1_rag`` or ``f1-rag-ingest``.

Takes no arguments.  Exits 0 when the run completes and 1 on a fatal
error (missing configuration or an exception escaping the run).
"""

from __future__ import annotations

import logging
import sys

from f1_rag.config import ConfigurationError, Settings, require_settings, settings
from f1_rag.ingestion.chunker import TextChunker
from f1_rag.ingestion.embedder import Embedder
from f1_rag.ingestion.loader import PageFetcher
from f1_rag.ingestion.orchestrator import IngestionOrchestrator
from f1_rag.ingestion.sources import F1_SOURCE_URLS
from f1_rag.store.base import VectorStoreBase
from f1_rag.store.writer import StoreWriter

logger = logging.getLogger("f1_rag")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def build_orchestrator(cfg: Settings, store: VectorStoreBase) -> IngestionOrchestrator:
    """Wire the pipeline components from *cfg*."""
    return IngestionOrchestrator(
        fetcher=PageFetcher(headless=cfg.browser_headless, timeout_ms=cfg.page_timeout_ms),
        chunker=TextChunker(chunk_size=cfg.chunk_size, chunk_overlap=cfg.chunk_overlap),
        embedder=Embedder(
            cfg.huggingface_api_key,
            dimension=cfg.vector_dimension,
            primary_url=cfg.primary_embedding_url,
            secondary_url=cfg.secondary_embedding_url,
            timeout=cfg.embedding_timeout,
            max_retries=cfg.embedding_max_retries,
            retry_delay=cfg.embedding_retry_delay,
            input_limit=cfg.embedding_input_limit,
        ),
        writer=StoreWriter(store),
        dimension=cfg.vector_dimension,
        min_chunk_length=cfg.min_chunk_length,
        pacing_interval=cfg.pacing_interval,
    )


def create_store(cfg: Settings) -> VectorStoreBase:
    from f1_rag.store.chroma_store import ChromaVectorStore

    return ChromaVectorStore(
        cfg.chroma_collection,
        host=cfg.chroma_host,
        port=cfg.chroma_port,
        token=cfg.chroma_token,
        tenant=cfg.chroma_tenant,
        database=cfg.chroma_database,
        ssl=cfg.chroma_ssl,
    )


def main(cfg: Settings = settings) -> int:
    configure_logging(cfg.log_level)
    try:
        require_settings(cfg)
        logger.info("Starting data loading process")

        store = create_store(cfg)
        if cfg.recreate_collection:
            store.recreate_collection(cfg.vector_dimension, cfg.similarity_metric)
        else:
            store.create_collection(cfg.vector_dimension, cfg.similarity_metric)

        stats = build_orchestrator(cfg, store).run(F1_SOURCE_URLS)
    except ConfigurationError as exc:
        logger.error("Fatal error: %s", exc)
        return 1
    except Exception:
        logger.exception("Fatal error")
        return 1

    logger.info("All data loaded. %s", stats.summary())
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""Chroma implementation of the vector-store abstraction."""

from __future__ import annotations

import logging

from f1_rag.config import settings
from f1_rag.ingestion.models import IngestRecord
from f1_rag.store.base import VectorStoreBase

logger = logging.getLogger(__name__)


class ChromaVectorStore(VectorStoreBase):
    """Chroma-backed vector store.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    token:
        Bearer token sent with every request.
    tenant / database:
        Chroma tenant and database (the store namespace).
    ssl:
        Connect over HTTPS.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        token: str = settings.chroma_token,
        tenant: str = settings.chroma_tenant,
        database: str = settings.chroma_database,
        ssl: bool = settings.chroma_ssl,
    ) -> None:
        super().__init__(collection_name)
        import chromadb

        self._client = chromadb.HttpClient(
            host=host,
            port=port,
            ssl=ssl,
            headers={"Authorization": f"Bearer {token}"} if token else None,
            tenant=tenant,
            database=database,
        )
        self._collection = None

    @property
    def collection(self):
        if self._collection is None:
            self._collection = self._client.get_collection(self.collection_name)
        return self._collection

    # -- VectorStoreBase overrides --------------------------------------------

    def create_collection(self, dimension: int, metric: str = "cosine") -> None:
        try:
            self._collection = self._client.create_collection(
                name=self.collection_name,
                metadata={"hnsw:space": metric, "dimension": dimension},
            )
            logger.info("Collection %r created (dimension=%d, metric=%s)",
                        self.collection_name, dimension, metric)
        except Exception as exc:
            if "already exists" not in str(exc):
                raise
            logger.info("Collection %r already exists. Skipping creation.", self.collection_name)
            self._collection = self._client.get_collection(self.collection_name)

    def drop_collection(self) -> None:
        try:
            self._client.delete_collection(self.collection_name)
            logger.info("Collection %r dropped", self.collection_name)
        except Exception as exc:
            message = str(exc).lower()
            if "does not exist" not in message and "not found" not in message:
                raise
            logger.info("Collection %r does not exist. Nothing to drop.", self.collection_name)
        self._collection = None

    def insert_one(self, record: IngestRecord) -> None:
        self.collection.add(
            ids=[record.record_id],
            embeddings=[record.vector],
            documents=[record.text],
            metadatas=[record.metadata()],
        )

"""
Store — vector-store backends and the single-record writer.

Public surface
--------------
- :class:`VectorStoreBase` — abstract backend.
- :class:`ChromaVectorStore` — default Chroma backend.
- :class:`StoreWriter` — insert with success / error accounting.
"""

from f1_rag.store.base import VectorStoreBase
from f1_rag.store.writer import StoreWriter

__all__ = [
    "ChromaVectorStore",
    "StoreWriter",
    "VectorStoreBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorStore to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorStore":
        from f1_rag.store.chroma_store import ChromaVectorStore

        return ChromaVectorStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

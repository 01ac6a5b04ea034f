"""Abstract base class for vector-store backends.

Adding a new backend only requires subclassing :class:`VectorStoreBase`
and implementing the three abstract methods.  The ingestion pipeline is
backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from f1_rag.ingestion.models import IngestRecord


class VectorStoreBase(ABC):
    """Backend-agnostic vector-store interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    """

    def __init__(self, collection_name: str) -> None:
        self.collection_name = collection_name

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def create_collection(self, dimension: int, metric: str = "cosine") -> None:
        """Create the collection; an existing collection counts as success."""
        ...

    @abstractmethod
    def drop_collection(self) -> None:
        """Drop the collection; a missing collection is not an error."""
        ...

    @abstractmethod
    def insert_one(self, record: IngestRecord) -> None:
        """Persist a single record.  Raises on rejection."""
        ...

    # -- provided -------------------------------------------------------------

    def recreate_collection(self, dimension: int, metric: str = "cosine") -> None:
        """Drop and re-create the collection so a run starts from empty."""
        self.drop_collection()
        self.create_collection(dimension, metric)

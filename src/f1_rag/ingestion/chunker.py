"""Text chunking strategies."""

from __future__ import annotations

from langchain_text_splitters import RecursiveCharacterTextSplitter

from f1_rag.config import settings
from f1_rag.ingestion.models import Chunk, SourceDocument

DEFAULT_SEPARATORS: list[str] = ["\n\n", "\n", ". ", " ", ""]


class TextChunker:
    """Split page text into overlapping, ordered chunks.

    Whitespace is never stripped, so every chunk is an exact substring of
    the input and its ``start_index`` locates it.

    Parameters
    ----------
    chunk_size:
        Maximum number of characters per chunk.
    chunk_overlap:
        Maximum number of characters shared by consecutive chunks.
    """

    def __init__(
        self,
        chunk_size: int = settings.chunk_size,
        chunk_overlap: int = settings.chunk_overlap,
        separators: list[str] | None = None,
    ) -> None:
        if chunk_overlap >= chunk_size:
            raise ValueError(
                f"chunk_overlap ({chunk_overlap}) must be < chunk_size ({chunk_size})"
            )
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
            length_function=len,
            separators=separators or DEFAULT_SEPARATORS,
            keep_separator=True,
            strip_whitespace=False,
            add_start_index=True,
        )

    def split(self, text: str, source_url: str = "") -> list[Chunk]:
        """Return the chunks of *text* in left-to-right order."""
        if not text:
            return []
        docs = self._splitter.create_documents([text])
        return [
            Chunk(
                source_url=source_url,
                index=idx,
                text=doc.page_content,
                start_index=doc.metadata["start_index"],
            )
            for idx, doc in enumerate(docs)
        ]

    def split_document(self, document: SourceDocument) -> list[Chunk]:
        return self.split(document.text, source_url=document.url)

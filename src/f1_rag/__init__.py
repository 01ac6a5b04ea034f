"""F1 knowledge-base ingestion: web pages to embedded chunks in a vector store."""

__version__ = "0.1.0"

"""
Ingestion — page loading, chunking, embedding and orchestration.

This package turns a fixed list of web pages into embedded chunks
persisted in the vector store.
"""

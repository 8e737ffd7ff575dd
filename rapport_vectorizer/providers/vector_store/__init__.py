"""Vector store provider adapters."""

from rapport_vectorizer.providers.vector_store.chromadb_provider import ChromaDBProvider

__all__ = ["ChromaDBProvider"]

"""Embedding provider adapters."""

from rapport_vectorizer.providers.embedding.openai_embedding_provider import (
    OpenAIEmbeddingProvider,
)

__all__ = ["OpenAIEmbeddingProvider"]

"""Abstract base class for text-embedding service providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAIEmbeddingProvider
# Located in: rapport_vectorizer/providers/embedding/
class IEmbeddingProvider(ABC):
    """Contract for text-embedding services.

    The vectors produced here are written once to the
    :class:`~rapport_vectorizer.interfaces.vector_store_provider.IVectorStoreProvider`
    and never inspected locally; their dimension is not checked.
    """

    @abstractmethod
    async def embed_single(self, text: str) -> list[float]:
        """Generate the embedding vector for *text*.

        Returns
        -------
        list[float]
            A non-empty vector.

        Raises
        ------
        rapport_vectorizer.utils.errors.EmbeddingError
            If the embedding API call fails or the response carries no
            vector.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this embedding provider."""

"""Abstract base class for vector-store service providers.

Defines the contract for persisting a report resume together with its
embedding.  The concrete adapter wraps ChromaDB; another vector database
can be swapped in through this interface.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rapport_vectorizer.models.report import VectorRecord


# Concrete implementation: ChromaDBProvider (rapport_vectorizer/providers/vector_store/)
class IVectorStoreProvider(ABC):
    """Contract for the vector database that stores report resumes."""

    @abstractmethod
    async def insert_record(self, record: VectorRecord) -> None:
        """Write one ``{project_id, object_id, vector, content}`` record.

        Writing the same ``(project_id, object_id)`` twice replaces the
        earlier record.

        Raises
        ------
        rapport_vectorizer.utils.errors.VectorStoreError
            If the database rejects the write.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier (e.g. ``"chromadb"``)."""

"""Abstract base class for object-storage providers (read-only)."""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: S3ObjectStorageProvider (rapport_vectorizer/providers/storage/)
class IObjectStorageProvider(ABC):
    """Contract for fetching the uploaded report object."""

    @abstractmethod
    async def get_object(self, bucket: str, key: str) -> bytes:
        """Return the full body of ``bucket/key``.

        Raises
        ------
        rapport_vectorizer.utils.errors.StorageError
            If the object does not exist or cannot be read.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier (e.g. ``"s3"``)."""

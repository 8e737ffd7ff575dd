"""Object storage provider adapters."""

from rapport_vectorizer.providers.storage.s3_provider import S3ObjectStorageProvider

__all__ = ["S3ObjectStorageProvider"]

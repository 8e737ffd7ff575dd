"""Abstract interfaces for every external service the pipeline talks to.

Concrete adapters live in :mod:`rapport_vectorizer.providers`; the pipeline
only ever depends on these contracts.
"""

from rapport_vectorizer.interfaces.embedding_provider import IEmbeddingProvider
from rapport_vectorizer.interfaces.llm_provider import ILLMProvider
from rapport_vectorizer.interfaces.object_storage_provider import IObjectStorageProvider
from rapport_vectorizer.interfaces.project_repository import IProjectRepository
from rapport_vectorizer.interfaces.vector_store_provider import IVectorStoreProvider

__all__ = [
    "IEmbeddingProvider",
    "ILLMProvider",
    "IObjectStorageProvider",
    "IProjectRepository",
    "IVectorStoreProvider",
]

"""Already-constructed service clients handed to the pipeline.

The handler builds real providers from :class:`Settings`; tests pass fakes.
Nothing in the pipeline reads environment variables.
"""

from __future__ import annotations

from dataclasses import dataclass

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.interfaces.embedding_provider import IEmbeddingProvider
from rapport_vectorizer.interfaces.llm_provider import ILLMProvider
from rapport_vectorizer.interfaces.object_storage_provider import IObjectStorageProvider
from rapport_vectorizer.interfaces.project_repository import IProjectRepository
from rapport_vectorizer.interfaces.vector_store_provider import IVectorStoreProvider


@dataclass(frozen=True)
class PipelineDependencies:
    """Service clients plus the analysis knobs for one invocation."""

    storage: IObjectStorageProvider
    llm: ILLMProvider
    embedding: IEmbeddingProvider
    vector_store: IVectorStoreProvider
    repository: IProjectRepository
    temperature: float = 0.3
    summary_max_tokens: int = 1000
    max_input_chars: int = 0


def build_dependencies(settings: Settings) -> PipelineDependencies:
    """Construct the production providers from *settings*.

    Imports are deferred so that the SDKs load only when real clients are
    needed, not when tests inject fakes.
    """
    from rapport_vectorizer.providers.database.postgres_repository import (
        PostgresProjectRepository,
    )
    from rapport_vectorizer.providers.embedding.openai_embedding_provider import (
        OpenAIEmbeddingProvider,
    )
    from rapport_vectorizer.providers.llm.openai_provider import OpenAILLMProvider
    from rapport_vectorizer.providers.storage.s3_provider import S3ObjectStorageProvider
    from rapport_vectorizer.providers.vector_store.chromadb_provider import ChromaDBProvider

    return PipelineDependencies(
        storage=S3ObjectStorageProvider(settings=settings),
        llm=OpenAILLMProvider(settings=settings),
        embedding=OpenAIEmbeddingProvider(settings=settings),
        vector_store=ChromaDBProvider.from_settings(settings),
        repository=PostgresProjectRepository.from_settings(settings),
        temperature=settings.llm_temperature,
        summary_max_tokens=settings.summary_max_tokens,
        max_input_chars=settings.llm_max_input_chars,
    )

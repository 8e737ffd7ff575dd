"""Embedding adapter for OpenAI and OpenAI-compatible gateways.

A response that does not carry a non-empty vector is an
:class:`EmbeddingError`.  Callers never receive an empty vector in place of
a missing one.
"""

from __future__ import annotations

import openai
import structlog

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.interfaces.embedding_provider import IEmbeddingProvider
from rapport_vectorizer.providers.openai_client import build_async_client, provider_label
from rapport_vectorizer.utils.errors import EmbeddingError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_EMBEDDING_MODEL = "text-embedding-3-small"


class OpenAIEmbeddingProvider(IEmbeddingProvider):
    """IEmbeddingProvider over ``embeddings.create``, model ``OPENAI_EMBEDDING_MODEL``."""

    def __init__(self, settings: Settings) -> None:
        self._client = build_async_client(settings)
        self._model = settings.openai_embedding_model or DEFAULT_EMBEDDING_MODEL
        self._label = provider_label(settings, "embedding")

    async def embed_single(self, text: str) -> list[float]:
        try:
            response = await self._client.embeddings.create(input=[text], model=self._model)
        except openai.APIError as exc:
            raise EmbeddingError(
                message=f"{self._model}: API error: {exc}",
                provider_name=self._label,
            ) from exc

        items = list(getattr(response, "data", None) or [])
        embedding = getattr(items[0], "embedding", None) if items else None
        if not embedding:
            raise EmbeddingError(provider_name=self._label)

        usage = getattr(response, "usage", None)
        logger.info(
            "openai_embedding",
            model=self._model,
            provider=self._label,
            dimension=len(embedding),
            tokens=usage.total_tokens if usage else None,
        )
        return list(embedding)

    def get_provider_name(self) -> str:
        return self._label

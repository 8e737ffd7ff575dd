"""Shared construction of the ``openai`` async client.

The chat and embedding adapters talk to the same account (or the same
OpenAI-compatible gateway), so they are configured from the same settings:
API key, optional base URL, request timeout and SDK-level retry count.
"""

from __future__ import annotations

from typing import Any

import openai

from rapport_vectorizer.config.settings import Settings


def build_async_client(settings: Settings) -> openai.AsyncOpenAI:
    """Return an ``AsyncOpenAI`` client configured from *settings*."""
    client_kwargs: dict[str, Any] = {
        "api_key": settings.openai_api_key,
        "timeout": openai.Timeout(settings.openai_timeout_seconds, connect=5.0),
        "max_retries": settings.openai_max_retries,
    }
    if settings.openai_base_url:
        client_kwargs["base_url"] = settings.openai_base_url
    return openai.AsyncOpenAI(**client_kwargs)


def provider_label(settings: Settings, suffix: str = "") -> str:
    """Name used in logs and errors, e.g. ``openai`` or ``openai-compatible_embedding``."""
    base = "openai-compatible" if settings.openai_base_url else "openai"
    return f"{base}_{suffix}" if suffix else base

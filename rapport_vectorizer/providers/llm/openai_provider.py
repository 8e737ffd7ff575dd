"""Chat-completion adapter for OpenAI and OpenAI-compatible gateways.

Each call is one blocking request: a system message with the instruction
and a user message with the report text.  SDK failures surface as
:class:`LLMError`; the analyzer turns those into explicit ``FAILED``
results.
"""

from __future__ import annotations

from typing import Any

import openai
import structlog

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.interfaces.llm_provider import ILLMProvider
from rapport_vectorizer.providers.openai_client import build_async_client, provider_label
from rapport_vectorizer.utils.errors import LLMError

logger = structlog.get_logger(logger_name=__name__)

DEFAULT_TEXT_MODEL = "gpt-4-turbo-preview"


class OpenAILLMProvider(ILLMProvider):
    """ILLMProvider over ``chat.completions``, model ``OPENAI_TEXT_MODEL``."""

    def __init__(self, settings: Settings) -> None:
        self._client = build_async_client(settings)
        self._model = settings.openai_text_model or DEFAULT_TEXT_MODEL
        self._label = provider_label(settings)

    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int | None = None,
    ) -> str:
        params: dict[str, Any] = {
            "model": self._model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            "temperature": temperature,
        }
        # Unbounded unless the caller sets a limit.
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        try:
            response = await self._client.chat.completions.create(**params)
        except openai.APITimeoutError as exc:
            raise self._error("request timed out") from exc
        except openai.APIError as exc:
            raise self._error(f"API error: {exc}") from exc

        content = response.choices[0].message.content if response.choices else None
        if content is None:
            raise self._error("response carried no message content")

        usage = response.usage
        logger.info(
            "openai_completion",
            model=self._model,
            provider=self._label,
            prompt_tokens=usage.prompt_tokens if usage else None,
            completion_tokens=usage.completion_tokens if usage else None,
        )
        return content

    def get_provider_name(self) -> str:
        return self._label

    def _error(self, detail: str) -> LLMError:
        return LLMError(message=f"{self._model}: {detail}", provider_name=self._label)

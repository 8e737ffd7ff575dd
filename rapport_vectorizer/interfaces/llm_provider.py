"""Abstract base class for LLM service providers.

Defines the contract for the text-generation backend used to summarize a
report and to list the technologies it mentions.  Keeping the pipeline on
this interface lets tests substitute a fake without patching the SDK.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# Concrete implementation: OpenAILLMProvider
# Located in: rapport_vectorizer/providers/llm/
class ILLMProvider(ABC):
    """Contract for chat-completion services."""

    @abstractmethod
    async def complete(
        self,
        system_prompt: str,
        user_prompt: str,
        temperature: float = 0.3,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a text completion from the model.

        Parameters
        ----------
        system_prompt:
            The system/instruction message that sets the model's behaviour.
        user_prompt:
            The user message; here, the extracted report text.
        temperature:
            Sampling temperature (0.0 = deterministic, 1.0 = creative).
        max_tokens:
            Upper bound on the number of tokens in the response, or ``None``
            to leave it to the service.

        Returns
        -------
        str
            The model's text response.

        Raises
        ------
        rapport_vectorizer.utils.errors.LLMError
            If the API call fails or returns no content.
        """

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a human-readable identifier for this LLM provider."""

"""LLM provider adapters.

OpenAILLMProvider implements ILLMProvider (rapport_vectorizer/interfaces/llm_provider.py)
for OpenAI and any OpenAI-compatible endpoint set through OPENAI_BASE_URL.
"""

from rapport_vectorizer.providers.llm.openai_provider import OpenAILLMProvider

__all__ = ["OpenAILLMProvider"]

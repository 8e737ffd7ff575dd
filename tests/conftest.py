"""Shared pytest fixtures for the rapport-vectorizer test suite."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import fitz
import pytest

from rapport_vectorizer.interfaces.embedding_provider import IEmbeddingProvider
from rapport_vectorizer.interfaces.llm_provider import ILLMProvider
from rapport_vectorizer.interfaces.object_storage_provider import IObjectStorageProvider
from rapport_vectorizer.interfaces.project_repository import IProjectRepository
from rapport_vectorizer.interfaces.vector_store_provider import IVectorStoreProvider
from rapport_vectorizer.pipeline.dependencies import PipelineDependencies
from rapport_vectorizer.pipeline.events import build_s3_event

SAMPLE_REPORT_TEXT = "We built a web scraper using Python and Redis."

SAMPLE_RESUME = (
    "## Project Overview\n"
    "A web scraper that collects pages and caches them.\n\n"
    "## Technologies Used\n"
    "- Python\n"
    "- Redis\n"
)


# ---------------------------------------------------------------------------
# PDF helpers
# ---------------------------------------------------------------------------


def make_pdf_bytes(*pages: str) -> bytes:
    """Build an in-memory PDF with one page per argument.

    An empty string produces a blank page with no text layer.
    """
    doc = fitz.open()
    try:
        for text in pages or ("",):
            page = doc.new_page()
            if text:
                page.insert_text((72, 72), text, fontsize=11)
        return doc.tobytes()
    finally:
        doc.close()


@pytest.fixture
def pdf_factory() -> Callable[..., bytes]:
    return make_pdf_bytes


@pytest.fixture
def sample_report_text() -> str:
    return SAMPLE_REPORT_TEXT


@pytest.fixture
def sample_resume() -> str:
    return SAMPLE_RESUME


@pytest.fixture
def sample_pdf() -> bytes:
    return make_pdf_bytes(SAMPLE_REPORT_TEXT)


@pytest.fixture
def sample_event() -> dict[str, Any]:
    return build_s3_event("pfe-rapports", "reports/42_7.pdf")


# ---------------------------------------------------------------------------
# Mock provider fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_storage(sample_pdf: bytes) -> IObjectStorageProvider:
    mock = MagicMock(spec=IObjectStorageProvider)
    mock.get_provider_name.return_value = "mock-storage"
    mock.get_object = AsyncMock(return_value=sample_pdf)
    return mock


@pytest.fixture
def mock_llm_provider() -> ILLMProvider:
    """Mock ILLMProvider answering the resume and the technology prompts.

    The answer depends on the system prompt, so call order does not matter.
    Override ``mock_llm_provider.complete.side_effect`` for specific tests.
    """

    def _answer(system_prompt: str, user_prompt: str, **_: Any) -> str:
        if "technical analyzer" in system_prompt:
            return "PYTHON,REDIS"
        return SAMPLE_RESUME

    mock = MagicMock(spec=ILLMProvider)
    mock.get_provider_name.return_value = "mock-llm"
    mock.complete = AsyncMock(side_effect=_answer)
    return mock


@pytest.fixture
def mock_embedding_provider() -> IEmbeddingProvider:
    mock = MagicMock(spec=IEmbeddingProvider)
    mock.get_provider_name.return_value = "mock-embedding"
    mock.embed_single = AsyncMock(return_value=[0.1, 0.2, 0.3, 0.4, 0.5])
    return mock


@pytest.fixture
def mock_vector_store() -> IVectorStoreProvider:
    mock = MagicMock(spec=IVectorStoreProvider)
    mock.get_provider_name.return_value = "mock-vectors"
    mock.insert_record = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_repository() -> IProjectRepository:
    mock = MagicMock(spec=IProjectRepository)
    mock.get_provider_name.return_value = "mock-postgres"
    mock.mark_processed = AsyncMock(return_value=None)
    mock.clear_processing = AsyncMock(return_value=None)
    mock.close = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def dependencies(
    mock_storage: IObjectStorageProvider,
    mock_llm_provider: ILLMProvider,
    mock_embedding_provider: IEmbeddingProvider,
    mock_vector_store: IVectorStoreProvider,
    mock_repository: IProjectRepository,
) -> PipelineDependencies:
    return PipelineDependencies(
        storage=mock_storage,
        llm=mock_llm_provider,
        embedding=mock_embedding_provider,
        vector_store=mock_vector_store,
        repository=mock_repository,
    )

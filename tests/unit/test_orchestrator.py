"""Unit tests for RapportProcessingPipeline.

All providers are mocks built on the interfaces; the PDF extractor is the
real PyMuPDF-backed one fed with in-memory documents.
"""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from rapport_vectorizer.models.report import ReportLocation, VectorRecord
from rapport_vectorizer.pipeline.dependencies import PipelineDependencies
from rapport_vectorizer.pipeline.orchestrator import RapportProcessingPipeline
from rapport_vectorizer.utils.errors import (
    DatabaseError,
    DocumentExtractionError,
    EmbeddingError,
    LLMError,
    PipelineError,
    StorageError,
    VectorStoreError,
)


@pytest.fixture
def location() -> ReportLocation:
    return ReportLocation(
        bucket="pfe-rapports",
        key="reports/42_7.pdf",
        project_id="42",
        object_id="7",
    )


@pytest.fixture
def pipeline(dependencies: PipelineDependencies) -> RapportProcessingPipeline:
    return RapportProcessingPipeline.from_dependencies(dependencies)


class TestSuccessfulRun:
    @pytest.mark.asyncio
    async def test_end_to_end(
        self,
        pipeline,
        location,
        mock_storage,
        mock_vector_store,
        mock_repository,
        sample_resume,
    ) -> None:
        result = await pipeline.process(location)

        mock_storage.get_object.assert_awaited_once_with("pfe-rapports", "reports/42_7.pdf")

        mock_vector_store.insert_record.assert_awaited_once()
        record = mock_vector_store.insert_record.call_args.args[0]
        assert isinstance(record, VectorRecord)
        assert record.project_id == "42"
        assert record.object_id == "7"
        assert record.vector == [0.1, 0.2, 0.3, 0.4, 0.5]
        assert record.content == sample_resume.strip()

        mock_repository.mark_processed.assert_awaited_once_with(
            "42", ["PYTHON", "REDIS"], sample_resume.strip()
        )
        mock_repository.clear_processing.assert_not_awaited()
        mock_repository.close.assert_awaited_once()

        assert result.technologies == ["PYTHON", "REDIS"]
        assert result.resume == sample_resume.strip()
        assert result.status_code == 200

    @pytest.mark.asyncio
    async def test_report_text_reaches_both_llm_calls(
        self, pipeline, location, mock_llm_provider, sample_report_text
    ) -> None:
        await pipeline.process(location)

        assert mock_llm_provider.complete.await_count == 2
        for call in mock_llm_provider.complete.await_args_list:
            assert sample_report_text in call.kwargs["user_prompt"]

    @pytest.mark.asyncio
    async def test_resume_is_what_gets_embedded(
        self, pipeline, location, mock_embedding_provider, sample_resume
    ) -> None:
        await pipeline.process(location)

        mock_embedding_provider.embed_single.assert_awaited_once_with(sample_resume.strip())

    @pytest.mark.asyncio
    async def test_tag_failure_is_not_fatal(
        self, pipeline, location, mock_llm_provider, mock_repository, sample_resume
    ) -> None:
        def _answer(system_prompt: str, user_prompt: str, **_):
            if "technical analyzer" in system_prompt:
                raise LLMError(message="Rate limit exceeded", provider_name="openai")
            return sample_resume

        mock_llm_provider.complete.side_effect = _answer

        result = await pipeline.process(location)

        assert result.technologies == []
        mock_repository.mark_processed.assert_awaited_once_with("42", [], sample_resume.strip())
        mock_repository.clear_processing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_empty_tag_answer_gives_empty_list(
        self, pipeline, location, mock_llm_provider, mock_repository, sample_resume
    ) -> None:
        mock_llm_provider.complete.side_effect = lambda system_prompt, user_prompt, **_: (
            "" if "technical analyzer" in system_prompt else sample_resume
        )

        result = await pipeline.process(location)

        assert result.technologies == []
        assert mock_repository.mark_processed.await_args.args[1] == []


class TestFailurePaths:
    @pytest.mark.asyncio
    async def test_whitespace_only_pdf_stops_before_summarize(
        self,
        pipeline,
        location,
        mock_storage,
        mock_llm_provider,
        mock_vector_store,
        mock_repository,
        pdf_factory,
    ) -> None:
        mock_storage.get_object.return_value = pdf_factory("")

        with pytest.raises(DocumentExtractionError):
            await pipeline.process(location)

        mock_llm_provider.complete.assert_not_awaited()
        mock_vector_store.insert_record.assert_not_awaited()
        mock_repository.mark_processed.assert_not_awaited()
        mock_repository.clear_processing.assert_awaited_once_with("42")
        mock_repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_storage_failure_clears_flag(
        self, pipeline, location, mock_storage, mock_repository
    ) -> None:
        mock_storage.get_object.side_effect = StorageError(
            message="Cannot fetch s3://pfe-rapports/reports/42_7.pdf (NoSuchKey)",
            provider_name="s3",
        )

        with pytest.raises(StorageError):
            await pipeline.process(location)

        mock_repository.clear_processing.assert_awaited_once_with("42")
        mock_repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_summarize_failure_aborts(
        self,
        pipeline,
        location,
        mock_llm_provider,
        mock_embedding_provider,
        mock_vector_store,
        mock_repository,
    ) -> None:
        mock_llm_provider.complete.side_effect = LLMError(
            message="Service unavailable", provider_name="openai"
        )

        with pytest.raises(PipelineError, match="resume"):
            await pipeline.process(location)

        mock_embedding_provider.embed_single.assert_not_awaited()
        mock_vector_store.insert_record.assert_not_awaited()
        mock_repository.mark_processed.assert_not_awaited()
        mock_repository.clear_processing.assert_awaited_once_with("42")

    @pytest.mark.asyncio
    async def test_blank_resume_aborts(
        self, pipeline, location, mock_llm_provider, mock_vector_store, mock_repository
    ) -> None:
        mock_llm_provider.complete.side_effect = None
        mock_llm_provider.complete.return_value = "   \n"

        with pytest.raises(PipelineError, match="empty"):
            await pipeline.process(location)

        mock_vector_store.insert_record.assert_not_awaited()
        mock_repository.clear_processing.assert_awaited_once_with("42")

    @pytest.mark.asyncio
    async def test_missing_vector_aborts_without_insert(
        self,
        pipeline,
        location,
        mock_embedding_provider,
        mock_vector_store,
        mock_repository,
    ) -> None:
        mock_embedding_provider.embed_single.return_value = []

        with pytest.raises(EmbeddingError):
            await pipeline.process(location)

        mock_vector_store.insert_record.assert_not_awaited()
        mock_repository.mark_processed.assert_not_awaited()
        mock_repository.clear_processing.assert_awaited_once_with("42")

    @pytest.mark.asyncio
    async def test_vector_insert_failure_skips_success_update(
        self, pipeline, location, mock_vector_store, mock_repository
    ) -> None:
        mock_vector_store.insert_record.side_effect = VectorStoreError(
            message="collection unavailable", provider_name="chromadb"
        )

        with pytest.raises(VectorStoreError):
            await pipeline.process(location)

        mock_repository.mark_processed.assert_not_awaited()
        mock_repository.clear_processing.assert_awaited_once_with("42")

    @pytest.mark.asyncio
    async def test_success_update_failure_attempts_compensation(
        self, pipeline, location, mock_repository
    ) -> None:
        mock_repository.mark_processed.side_effect = DatabaseError(
            message="connection reset", provider_name="postgres"
        )

        with pytest.raises(DatabaseError, match="connection reset"):
            await pipeline.process(location)

        mock_repository.clear_processing.assert_awaited_once_with("42")
        mock_repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_compensation_failure_does_not_mask_original_error(
        self, pipeline, location, mock_embedding_provider, mock_repository
    ) -> None:
        mock_embedding_provider.embed_single.side_effect = EmbeddingError(
            message="quota exceeded", provider_name="openai_embedding"
        )
        mock_repository.clear_processing.side_effect = DatabaseError(
            message="database is down", provider_name="postgres"
        )

        with pytest.raises(EmbeddingError, match="quota exceeded"):
            await pipeline.process(location)

        mock_repository.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_close_failure_does_not_hide_result(
        self, pipeline, location, mock_repository
    ) -> None:
        mock_repository.close = AsyncMock(side_effect=OSError("socket closed"))

        result = await pipeline.process(location)

        assert result.technologies == ["PYTHON", "REDIS"]

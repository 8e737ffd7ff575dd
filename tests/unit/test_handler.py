"""Unit tests for the platform entry point."""

from __future__ import annotations

import json
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

from rapport_vectorizer.config.settings import Settings
from rapport_vectorizer.handler import handle_event, handler
from rapport_vectorizer.pipeline.dependencies import PipelineDependencies
from rapport_vectorizer.pipeline.events import build_s3_event
from rapport_vectorizer.providers.vector_store.chromadb_provider import ChromaDBProvider
from rapport_vectorizer.utils.errors import (
    ConfigurationError,
    LLMError,
    PipelineError,
    VectorStoreError,
)


class TestHandleEvent:
    @pytest.mark.asyncio
    async def test_success_response_shape(
        self, sample_event, dependencies, sample_resume
    ) -> None:
        response = await handle_event(sample_event, dependencies=dependencies)

        assert response["statusCode"] == 200
        body = json.loads(response["body"])
        assert body == {
            "message": "Rapport processed successfully",
            "technologies": ["PYTHON", "REDIS"],
            "resume": sample_resume.strip(),
        }

    @pytest.mark.asyncio
    async def test_url_encoded_key_is_decoded(
        self, dependencies, mock_storage, mock_repository
    ) -> None:
        event = build_s3_event("pfe-rapports", "my+reports/42_7.pdf")

        await handle_event(event, dependencies=dependencies)

        mock_storage.get_object.assert_awaited_once_with("pfe-rapports", "my reports/42_7.pdf")
        assert mock_repository.mark_processed.await_args.args[0] == "42"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "key",
        ["reports/42.pdf", "42_7.pdf", "a/b/42_7.pdf", "reports/_7.pdf", "reports/42_.pdf"],
    )
    async def test_malformed_key_is_a_no_op(
        self,
        key,
        dependencies,
        mock_storage,
        mock_llm_provider,
        mock_embedding_provider,
        mock_vector_store,
        mock_repository,
    ) -> None:
        response = await handle_event(build_s3_event("pfe-rapports", key), dependencies=dependencies)

        assert response is None
        mock_storage.get_object.assert_not_awaited()
        mock_llm_provider.complete.assert_not_awaited()
        mock_embedding_provider.embed_single.assert_not_awaited()
        mock_vector_store.insert_record.assert_not_awaited()
        mock_repository.mark_processed.assert_not_awaited()
        mock_repository.clear_processing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_key_never_builds_clients(self) -> None:
        with patch("rapport_vectorizer.handler.build_dependencies") as mock_build, patch(
            "rapport_vectorizer.handler.load_settings"
        ) as mock_load:
            response = await handle_event(build_s3_event("pfe-rapports", "reports/oops.pdf"))

        assert response is None
        mock_build.assert_not_called()
        mock_load.assert_not_called()

    @pytest.mark.asyncio
    async def test_event_without_records_is_a_no_op(self, dependencies, mock_storage) -> None:
        assert await handle_event({"Records": []}, dependencies=dependencies) is None
        mock_storage.get_object.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_configuration_raises(self, sample_event) -> None:
        settings = Settings(_env_file=None, openai_api_key="", database_url="")

        with patch("rapport_vectorizer.handler.build_dependencies") as mock_build:
            with pytest.raises(ConfigurationError) as exc_info:
                await handle_event(sample_event, settings=settings)

        assert exc_info.value.missing == ["OPENAI_API_KEY", "DATABASE_URL"]
        mock_build.assert_not_called()

    @pytest.mark.asyncio
    async def test_builds_dependencies_from_settings(self, sample_event, dependencies) -> None:
        settings = Settings(
            _env_file=None,
            openai_api_key="sk-test",
            database_url="postgresql://u:p@localhost/pfe",
        )

        with patch(
            "rapport_vectorizer.handler.build_dependencies", return_value=dependencies
        ) as mock_build:
            response = await handle_event(sample_event, settings=settings)

        mock_build.assert_called_once_with(settings)
        assert response["statusCode"] == 200

    @pytest.mark.asyncio
    async def test_pipeline_failure_propagates(
        self, sample_event, dependencies, mock_llm_provider, mock_repository
    ) -> None:
        mock_llm_provider.complete.side_effect = LLMError(message="boom", provider_name="openai")

        with pytest.raises(PipelineError):
            await handle_event(sample_event, dependencies=dependencies)

        mock_repository.clear_processing.assert_awaited_once_with("42")

    @pytest.mark.asyncio
    async def test_unreachable_vector_store_clears_processing_flag(
        self,
        sample_event,
        mock_storage,
        mock_llm_provider,
        mock_embedding_provider,
        mock_repository,
    ) -> None:
        with patch(
            "rapport_vectorizer.providers.vector_store.chromadb_provider.chromadb.HttpClient",
            side_effect=ValueError("Could not connect to a Chroma server."),
        ):
            dependencies = PipelineDependencies(
                storage=mock_storage,
                llm=mock_llm_provider,
                embedding=mock_embedding_provider,
                vector_store=ChromaDBProvider(host="127.0.0.1", port=1),
                repository=mock_repository,
            )
            with pytest.raises(VectorStoreError):
                await handle_event(sample_event, dependencies=dependencies)

        mock_embedding_provider.embed_single.assert_awaited_once()
        mock_repository.mark_processed.assert_not_awaited()
        mock_repository.clear_processing.assert_awaited_once_with("42")
        mock_repository.close.assert_awaited_once()


class TestHandler:
    def test_sync_entry_point_runs_event(self, sample_event) -> None:
        settings = Settings(_env_file=None, openai_api_key="sk-test", database_url="postgresql://x")
        expected = {"statusCode": 200, "body": "{}"}

        with patch("rapport_vectorizer.handler.load_settings", return_value=settings), patch(
            "rapport_vectorizer.handler.configure_logging"
        ), patch(
            "rapport_vectorizer.handler.handle_event", new=AsyncMock(return_value=expected)
        ) as mock_handle:
            response = handler(sample_event, SimpleNamespace(aws_request_id="req-1"))

        assert response == expected
        mock_handle.assert_awaited_once_with(sample_event, settings=settings)

    def test_bad_environment_ignored_for_malformed_key(self, monkeypatch) -> None:
        monkeypatch.setenv("CHROMADB_PORT", "abc")

        with patch("rapport_vectorizer.handler.configure_logging"), patch(
            "rapport_vectorizer.handler.build_dependencies"
        ) as mock_build:
            response = handler(build_s3_event("pfe-rapports", "reports/oops.pdf"))

        assert response is None
        mock_build.assert_not_called()

    def test_bad_environment_raises_for_valid_key(self, sample_event, monkeypatch) -> None:
        monkeypatch.setenv("CHROMADB_PORT", "abc")

        with patch("rapport_vectorizer.handler.configure_logging"), patch(
            "rapport_vectorizer.handler.build_dependencies"
        ) as mock_build:
            with pytest.raises(ConfigurationError) as exc_info:
                handler(sample_event)

        assert exc_info.value.missing == ["CHROMADB_PORT"]
        mock_build.assert_not_called()

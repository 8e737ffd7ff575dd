"""Orchestrator for processing one uploaded project report.

Runs the stages in a fixed sequence, each awaited before the next starts:

    FETCH → EXTRACT → SUMMARIZE → TAG → EMBED → STORE_VECTOR → UPDATE_RECORD

There are two terminal states.  On success the project row receives the
technologies and resume and its processing flag is cleared.  On any
failure the orchestrator makes one best-effort update that clears only the
processing flag, then re-raises the original exception to the platform.
Technology extraction is the one stage whose failure is not fatal.  The
relational connection pool is closed on every exit path.
"""

from __future__ import annotations

import structlog

from rapport_vectorizer.interfaces.embedding_provider import IEmbeddingProvider
from rapport_vectorizer.interfaces.object_storage_provider import IObjectStorageProvider
from rapport_vectorizer.interfaces.project_repository import IProjectRepository
from rapport_vectorizer.interfaces.vector_store_provider import IVectorStoreProvider
from rapport_vectorizer.models.pipeline import ProcessingStage
from rapport_vectorizer.models.report import (
    ProcessingResult,
    ReportLocation,
    VectorRecord,
)
from rapport_vectorizer.pipeline.dependencies import PipelineDependencies
from rapport_vectorizer.services.pdf_extractor import PDFTextExtractor
from rapport_vectorizer.services.report_analyzer import ReportAnalyzer
from rapport_vectorizer.utils.errors import (
    DocumentExtractionError,
    EmbeddingError,
    PipelineError,
    RapportVectorizerError,
)
from rapport_vectorizer.utils.logging import get_logger


class RapportProcessingPipeline:
    """Turns an uploaded report into a stored vector and an updated project row.

    All service dependencies are injected at construction time; the
    orchestrator never creates clients itself.
    """

    def __init__(
        self,
        storage: IObjectStorageProvider,
        pdf_extractor: PDFTextExtractor,
        analyzer: ReportAnalyzer,
        embedding: IEmbeddingProvider,
        vector_store: IVectorStoreProvider,
        repository: IProjectRepository,
    ) -> None:
        self._storage = storage
        self._pdf_extractor = pdf_extractor
        self._analyzer = analyzer
        self._embedding = embedding
        self._vector_store = vector_store
        self._repository = repository
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @classmethod
    def from_dependencies(cls, deps: PipelineDependencies) -> RapportProcessingPipeline:
        return cls(
            storage=deps.storage,
            pdf_extractor=PDFTextExtractor(),
            analyzer=ReportAnalyzer(
                llm=deps.llm,
                temperature=deps.temperature,
                summary_max_tokens=deps.summary_max_tokens,
                max_input_chars=deps.max_input_chars,
            ),
            embedding=deps.embedding,
            vector_store=deps.vector_store,
            repository=deps.repository,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def process(self, location: ReportLocation) -> ProcessingResult:
        """Run every stage for the report at *location*.

        Raises
        ------
        Exception
            Whatever the failing stage raised, after the compensating
            project update has been attempted.
        """
        log = self._logger.bind(
            project_id=location.project_id,
            object_id=location.object_id,
            bucket=location.bucket,
            key=location.key,
        )
        log.info("rapport_processing_started")

        stage = ProcessingStage.FETCH
        try:
            try:
                data = await self._storage.get_object(location.bucket, location.key)

                stage = ProcessingStage.EXTRACT
                text = await self._pdf_extractor.extract_text(data)
                if not text.strip():
                    raise DocumentExtractionError()

                stage = ProcessingStage.SUMMARIZE
                resume_result = await self._analyzer.summarize(text)
                if not resume_result.ok or resume_result.resume is None:
                    raise PipelineError(
                        message=(
                            "Failed to generate project resume "
                            f"({resume_result.outcome.value.lower()})"
                        )
                    )
                resume = resume_result.resume

                stage = ProcessingStage.TAG
                technologies_result = await self._analyzer.extract_technologies(text)
                technologies = technologies_result.technologies
                if not technologies_result.ok:
                    log.warning(
                        "technologies_unavailable",
                        outcome=technologies_result.outcome.value,
                        error=technologies_result.error,
                    )

                stage = ProcessingStage.EMBED
                vector = await self._embedding.embed_single(resume)
                if not vector:
                    raise EmbeddingError(provider_name=self._embedding.get_provider_name())

                stage = ProcessingStage.STORE_VECTOR
                await self._vector_store.insert_record(
                    VectorRecord(
                        project_id=location.project_id,
                        object_id=location.object_id,
                        vector=vector,
                        content=resume,
                    )
                )

                stage = ProcessingStage.UPDATE_RECORD
                await self._repository.mark_processed(
                    location.project_id,
                    technologies,
                    resume,
                )
            except Exception as exc:
                log.error(
                    "rapport_processing_failed",
                    stage=stage.value,
                    error=str(exc),
                    error_type=type(exc).__name__,
                    provider=exc.provider_name if isinstance(exc, RapportVectorizerError) else None,
                )
                await self._mark_failed(location.project_id, log)
                raise
        finally:
            await self._close_repository(log)

        log.info("rapport_processing_completed", technologies=technologies)
        return ProcessingResult(technologies=technologies, resume=resume)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _mark_failed(self, project_id: str, log: structlog.BoundLogger) -> None:
        """Clear the processing flag; a failure here must not mask the original error."""
        try:
            await self._repository.clear_processing(project_id)
        except Exception as exc:  # noqa: BLE001
            log.error("processing_status_update_failed", error=str(exc))

    async def _close_repository(self, log: structlog.BoundLogger) -> None:
        try:
            await self._repository.close()
        except Exception as exc:  # noqa: BLE001
            log.warning("repository_close_failed", error=str(exc))

"""Report processing pipeline: event parsing, dependency wiring, orchestration."""

from rapport_vectorizer.pipeline.dependencies import PipelineDependencies, build_dependencies
from rapport_vectorizer.pipeline.events import (
    build_s3_event,
    parse_report_key,
    parse_report_location,
)
from rapport_vectorizer.pipeline.orchestrator import RapportProcessingPipeline

__all__ = [
    "PipelineDependencies",
    "RapportProcessingPipeline",
    "build_dependencies",
    "build_s3_event",
    "parse_report_key",
    "parse_report_location",
]

"""Pydantic models for rapport-vectorizer."""

from rapport_vectorizer.models.pipeline import ProcessingStage
from rapport_vectorizer.models.report import (
    CallOutcome,
    ProcessingResult,
    ReportLocation,
    ResumeResult,
    TechnologiesResult,
    VectorRecord,
)

__all__ = [
    "CallOutcome",
    "ProcessingResult",
    "ProcessingStage",
    "ReportLocation",
    "ResumeResult",
    "TechnologiesResult",
    "VectorRecord",
]

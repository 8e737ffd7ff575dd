"""Data models for a single report-processing invocation.

Defines Pydantic v2 models for the triggering report location, the record
written to the vector database, the explicit result types returned by the
LLM-backed analysis calls, and the response handed back to the platform.
All models use frozen config; nothing here outlives one invocation.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# ReportLocation -- where the uploaded report lives and whose it is.
# ---------------------------------------------------------------------------
class ReportLocation(BaseModel):
    """Bucket, decoded key, and the identifiers encoded in the key.

    Keys have the form ``<prefix>/<projectId>_<objectId>[.ext]``; see
    :func:`rapport_vectorizer.pipeline.events.parse_report_location`.
    """

    model_config = ConfigDict(frozen=True)

    bucket: str = Field(description="Object storage bucket name.")
    key: str = Field(description="URL-decoded object key.")
    project_id: str = Field(min_length=1, description="Project (relational row) identifier.")
    object_id: str = Field(min_length=1, description="Identifier of the uploaded report object.")


# ---------------------------------------------------------------------------
# VectorRecord -- one row per invocation in the vector database.
# ---------------------------------------------------------------------------
class VectorRecord(BaseModel):
    """The resume and its embedding, keyed by project and object id."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    object_id: str
    vector: list[float]
    content: str

    @property
    def record_id(self) -> str:
        return f"{self.project_id}_{self.object_id}"


# ---------------------------------------------------------------------------
# Analysis results -- distinguish "call failed" from "call returned nothing".
# ---------------------------------------------------------------------------
class CallOutcome(str, Enum):  # noqa: UP042
    """How a delegated text-generation call ended."""

    OK = "OK"          # The service answered with usable content
    EMPTY = "EMPTY"    # The service answered, but with nothing usable
    FAILED = "FAILED"  # The service call itself raised


class ResumeResult(BaseModel):
    """Outcome of the summarization call."""

    model_config = ConfigDict(frozen=True)

    outcome: CallOutcome
    resume: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CallOutcome.OK


class TechnologiesResult(BaseModel):
    """Outcome of the technology-extraction call."""

    model_config = ConfigDict(frozen=True)

    outcome: CallOutcome
    technologies: list[str] = Field(default_factory=list)
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CallOutcome.OK


# ---------------------------------------------------------------------------
# ProcessingResult -- the success response.
# ---------------------------------------------------------------------------
class ProcessingResult(BaseModel):
    """Structured success result returned to the invoking platform."""

    model_config = ConfigDict(frozen=True)

    status_code: int = 200
    message: str = "Rapport processed successfully"
    technologies: list[str] = Field(default_factory=list)
    resume: str

    def to_response(self) -> dict[str, Any]:
        """Render as the platform's ``{"statusCode", "body"}`` response shape."""
        return {
            "statusCode": self.status_code,
            "body": json.dumps(
                {
                    "message": self.message,
                    "technologies": self.technologies,
                    "resume": self.resume,
                }
            ),
        }

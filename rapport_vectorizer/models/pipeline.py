"""Processing stages of the report pipeline.

The orchestrator binds the current stage into its log context so a failure
line always says which external step broke.
"""

from __future__ import annotations

from enum import Enum


class ProcessingStage(str, Enum):  # noqa: UP042
    """Stages of the report pipeline, in execution order.

        FETCH → EXTRACT → SUMMARIZE → TAG → EMBED → STORE_VECTOR → UPDATE_RECORD
    """

    FETCH = "FETCH"                   # Read the report object from storage
    EXTRACT = "EXTRACT"               # PDF bytes to plain text
    SUMMARIZE = "SUMMARIZE"           # LLM resume generation
    TAG = "TAG"                       # LLM technology extraction (non-fatal)
    EMBED = "EMBED"                   # Resume to vector
    STORE_VECTOR = "STORE_VECTOR"     # Vector database insert
    UPDATE_RECORD = "UPDATE_RECORD"   # Relational project row update

"""Utility modules for rapport-vectorizer.

- **errors** -- Domain-specific exception hierarchy rooted at
  RapportVectorizerError; each processing stage raises its own subclass so
  the orchestrator can log which external service failed.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
"""

# -- Domain exception hierarchy --------------------------------------------
from rapport_vectorizer.utils.errors import (
    ConfigurationError,
    DatabaseError,
    DocumentExtractionError,
    EmbeddingError,
    InvalidReportKeyError,
    LLMError,
    PipelineError,
    RapportVectorizerError,
    StorageError,
    VectorStoreError,
)

# -- Structured logging setup ----------------------------------------------
from rapport_vectorizer.utils.logging import bind_invocation, configure_logging, get_logger

__all__ = [
    "ConfigurationError",
    "DatabaseError",
    "DocumentExtractionError",
    "EmbeddingError",
    "InvalidReportKeyError",
    "LLMError",
    "PipelineError",
    "RapportVectorizerError",
    "StorageError",
    "VectorStoreError",
    "bind_invocation",
    "configure_logging",
    "get_logger",
]

"""Exception hierarchy for rapport-vectorizer.

Every application error derives from :class:`RapportVectorizerError` and may
name the external service involved (``"openai"``, ``"s3"``, ``"chromadb"``,
``"postgres"``, ...).  ``str(exc)`` puts that name in brackets, e.g.
``[s3] Cannot fetch s3://pfe-rapports/reports/42_7.pdf (NoSuchKey)``.

    RapportVectorizerError
    +-- ConfigurationError       required settings missing or unparseable
    +-- InvalidReportKeyError    key is not <prefix>/<projectId>_<objectId>
    +-- StorageError             report object could not be fetched
    +-- DocumentExtractionError  no text could be read from the PDF
    +-- LLMError                 chat-completion call failed
    +-- EmbeddingError           embedding call failed or returned no vector
    +-- VectorStoreError         vector record could not be written
    +-- DatabaseError            project row could not be updated
    +-- PipelineError            a required step produced nothing usable

Subclasses only differ in their default message.
"""


class RapportVectorizerError(Exception):
    """Base class; carries ``message`` and an optional ``provider_name``."""

    default_message = "An unexpected error occurred"

    def __init__(self, message: str | None = None, provider_name: str | None = None) -> None:
        self._message = message or self.default_message
        self._provider_name = provider_name
        super().__init__(self._message)

    @property
    def message(self) -> str:
        return self._message

    @property
    def provider_name(self) -> str | None:
        return self._provider_name

    def __str__(self) -> str:
        if self._provider_name:
            return f"[{self._provider_name}] {self._message}"
        return self._message


class ConfigurationError(RapportVectorizerError):
    """Configuration is missing or invalid; ``missing`` lists the variables."""

    default_message = "Invalid or missing configuration"

    def __init__(
        self,
        message: str | None = None,
        provider_name: str | None = None,
        missing: list[str] | None = None,
    ) -> None:
        super().__init__(message=message, provider_name=provider_name)
        self._missing = list(missing or [])

    @property
    def missing(self) -> list[str]:
        return list(self._missing)


class InvalidReportKeyError(RapportVectorizerError):
    """The notification key does not identify a project report.

    The handler logs it and returns without calling any external service.
    """

    default_message = "Invalid key format"


class StorageError(RapportVectorizerError):
    default_message = "Object storage fetch failed"


class DocumentExtractionError(RapportVectorizerError):
    default_message = "Failed to extract text from PDF"


class LLMError(RapportVectorizerError):
    default_message = "LLM API call failed"


class EmbeddingError(RapportVectorizerError):
    default_message = "Failed to generate embedding for resume"


class VectorStoreError(RapportVectorizerError):
    default_message = "Vector store insert failed"


class DatabaseError(RapportVectorizerError):
    default_message = "Project record update failed"


class PipelineError(RapportVectorizerError):
    default_message = "Rapport processing failed"

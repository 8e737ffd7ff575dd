"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ────────────────────────────────────────────────
#
# Settings are read from TWO sources (in priority order):
#
#   1. **Environment variables** -- e.g., OPENAI_API_KEY=sk-abc123
#      (the function's configuration in the hosting platform)
#   2. **.env file** -- key=value lines in the working directory
#      (local development and CLI runs)
#
# Field `openai_api_key` maps to env var `OPENAI_API_KEY`.  The relational
# connection string also accepts the legacy NEON_CONNECTION_STRING name.
#
# Nothing here raises at import time.  Required values are checked by
# validate_settings(), which the handler calls on each invocation and which
# returns a ConfigurationError instead of throwing.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from rapport_vectorizer.utils.errors import ConfigurationError


class Settings(BaseSettings):
    """rapport-vectorizer settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # === Text generation / embeddings ===
    openai_api_key: str = ""
    openai_base_url: str = ""  # Custom base URL for OpenAI-compatible APIs
    openai_text_model: str = "gpt-4-turbo-preview"
    openai_embedding_model: str = "text-embedding-3-small"
    openai_timeout_seconds: float = 60.0
    openai_max_retries: int = 0  # SDK-level retries; off by default
    llm_temperature: float = 0.3
    summary_max_tokens: int = 1000
    # 0 sends the whole document; a positive value truncates the LLM input
    # at a word boundary to at most this many characters.
    llm_max_input_chars: int = 0

    # === Object storage ===
    aws_region: str = ""
    s3_endpoint_url: str = ""  # S3-compatible stores (MinIO, LocalStack)

    # === Vector database ===
    chromadb_host: str = ""  # Empty = local PersistentClient at chromadb_persist_dir
    chromadb_port: int = 8000
    chromadb_ssl: bool = False
    chromadb_token: str = ""
    chromadb_persist_dir: str = "./data/chromadb"
    chromadb_collection: str = "pfe_rapports"

    # === Relational database ===
    database_url: str = Field(
        default="",
        validation_alias=AliasChoices("database_url", "DATABASE_URL", "NEON_CONNECTION_STRING"),
    )
    database_pool_size: int = 2

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def missing_required_settings(self) -> list[str]:
        """Return the environment variable names of required settings that are empty."""
        missing: list[str] = []
        if not self.openai_api_key:
            missing.append("OPENAI_API_KEY")
        if not self.database_url:
            missing.append("DATABASE_URL")
        return missing


def load_settings() -> Settings:
    """Read :class:`Settings` from the environment.

    Raises
    ------
    ConfigurationError
        If a variable is set but cannot be parsed (e.g. a non-numeric port).
    """
    try:
        return Settings()
    except ValidationError as exc:
        fields = sorted({str(err["loc"][0]).upper() for err in exc.errors() if err.get("loc")})
        raise ConfigurationError(
            message=f"Invalid environment variables: {', '.join(fields) or exc}",
            missing=fields,
        ) from exc


def validate_settings(settings: Settings) -> ConfigurationError | None:
    """Check that every setting the pipeline cannot run without is present.

    Returns
    -------
    ConfigurationError | None
        An error naming every missing variable, or ``None`` when the
        configuration is usable.  The caller decides whether to raise it.
    """
    missing = settings.missing_required_settings()
    if not missing:
        return None
    return ConfigurationError(
        message=f"Missing required environment variables: {', '.join(missing)}",
        missing=missing,
    )

"""Structured logging for rapport-vectorizer, built on structlog.

Every event goes through one shared processor chain (merged context vars,
level, ISO timestamp, stack/exception info).  The last step renders either
coloured console lines, for the CLI and local runs, or one JSON object per
line for the function's log stream.  JSON is chosen when ``json_output`` is
set or when ``APP_ENV`` is ``"production"``.

Records emitted through the standard ``logging`` module by boto3, openai,
chromadb or SQLAlchemy reuse the same formatter, so the log stream has a
single format.  Per-invocation fields such as the platform request id are
bound with :func:`bind_invocation` and appear on every line of that run.
"""

import logging
import os
import sys

import structlog

# Libraries that log every HTTP round-trip or pool checkout at INFO/DEBUG.
_CHATTY_LIBRARIES = (
    "botocore",
    "boto3",
    "urllib3",
    "httpx",
    "openai",
    "chromadb",
    "sqlalchemy.engine",
)


def configure_logging(log_level: str = "INFO", json_output: bool = False) -> structlog.BoundLogger:
    """Configure structlog and the stdlib root logger.

    Args:
        log_level: Minimum level name (DEBUG, INFO, WARNING, ERROR).
        json_output: Render JSON regardless of ``APP_ENV``.

    Returns:
        The root structlog logger.
    """
    level = log_level.upper()
    use_json = json_output or os.environ.get("APP_ENV", "development") == "production"

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    renderer: structlog.types.Processor
    if use_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*shared_processors, renderer],
        wrapper_class=structlog.make_filtering_bound_logger(logging.getLevelName(level)),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    stdlib_handler = logging.StreamHandler(sys.stdout)
    stdlib_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *shared_processors,
                renderer,
            ],
        )
    )

    # The function runtime installs its own root handler; replace it so
    # each record is written once.
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(stdlib_handler)
    root_logger.setLevel(level)

    if level != "DEBUG":
        for name in _CHATTY_LIBRARIES:
            logging.getLogger(name).setLevel(logging.WARNING)

    return structlog.get_logger()


def bind_invocation(request_id: str | None = None, **fields: object) -> None:
    """Reset invocation-scoped context and bind *request_id* and *fields*.

    Warm function containers reuse the interpreter, so context left by the
    previous invocation is cleared first.
    """
    structlog.contextvars.clear_contextvars()
    if request_id:
        fields["request_id"] = request_id
    if fields:
        structlog.contextvars.bind_contextvars(**fields)


def get_logger(name: str) -> structlog.BoundLogger:
    """Return a structlog logger tagged with *name*.

    Configures logging with defaults if nothing has configured it yet.
    """
    if not structlog.is_configured():
        configure_logging()

    return structlog.get_logger(logger_name=name)

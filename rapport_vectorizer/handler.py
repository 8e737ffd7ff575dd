"""Platform entry point for the "report uploaded" storage notification.

The hosting platform calls :func:`handler` once per notification.  Each call
parses the event, checks the configuration, builds fresh service clients and
runs :class:`RapportProcessingPipeline` to completion inside its own event
loop.  No client or connection pool is kept in module globals.

:func:`handle_event` is the async core and accepts pre-built
:class:`PipelineDependencies`, which is how tests and the CLI drive it.
"""

from __future__ import annotations

import asyncio
from typing import Any

import structlog

from rapport_vectorizer.config.settings import Settings, load_settings, validate_settings
from rapport_vectorizer.pipeline.dependencies import PipelineDependencies, build_dependencies
from rapport_vectorizer.pipeline.events import parse_report_location
from rapport_vectorizer.pipeline.orchestrator import RapportProcessingPipeline
from rapport_vectorizer.utils.errors import ConfigurationError, InvalidReportKeyError
from rapport_vectorizer.utils.logging import bind_invocation, configure_logging, get_logger

_logger: structlog.BoundLogger = get_logger(__name__)


async def handle_event(
    event: dict[str, Any],
    dependencies: PipelineDependencies | None = None,
    settings: Settings | None = None,
) -> dict[str, Any] | None:
    """Process one storage notification.

    Parameters
    ----------
    event:
        The object-storage notification.
    dependencies:
        Pre-built service clients.  When omitted they are built from
        *settings* (or from the environment) after the event has been
        validated.
    settings:
        Configuration used to build clients when *dependencies* is omitted.

    Returns
    -------
    dict | None
        ``{"statusCode": 200, "body": ...}`` on success, or ``None`` when the
        event key is malformed and nothing was done.

    Raises
    ------
    ConfigurationError
        If required configuration is missing.
    Exception
        Any pipeline failure, after the project's processing flag has been
        cleared.
    """
    try:
        location = parse_report_location(event)
    except InvalidReportKeyError as exc:
        _logger.error("invalid_report_key", error=str(exc))
        return None

    if dependencies is None:
        settings = settings or load_settings()
        config_error = validate_settings(settings)
        if config_error is not None:
            _logger.error("configuration_invalid", missing=config_error.missing)
            raise config_error
        dependencies = build_dependencies(settings)

    pipeline = RapportProcessingPipeline.from_dependencies(dependencies)
    result = await pipeline.process(location)
    return result.to_response()


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any] | None:
    """Synchronous entry point invoked by the function runtime."""
    settings: Settings | None
    try:
        settings = load_settings()
    except ConfigurationError:
        # Reloaded by handle_event, which raises only once the key is valid.
        settings = None
    configure_logging(
        log_level=settings.log_level if settings else "INFO",
        json_output=settings is not None and settings.app_env == "production",
    )
    bind_invocation(request_id=getattr(context, "aws_request_id", None))
    return asyncio.run(handle_event(event, settings=settings))

"""Sentry error tracking integration."""

import logging
from typing import Any

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

logger = logging.getLogger(__name__)


def init_sentry(
    dsn: str | None,
    environment: str = "production",
    release: str | None = None,
    traces_sample_rate: float = 0.2,
) -> None:
    """Initialize Sentry SDK with FastAPI integration.

    Args:
        dsn: Sentry DSN. If None or empty, Sentry is not initialized.
        environment: Deployment environment (e.g., "production", "development")
        release: Optional release version string
        traces_sample_rate: Fraction of requests traced for performance monitoring
    """
    if not dsn:
        logger.info("Sentry DSN not configured, skipping initialization")
        return

    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        integrations=[
            FastApiIntegration(),
        ],
        traces_sample_rate=traces_sample_rate,
        sample_rate=1.0,
    )

    logger.info(f"Sentry initialized (environment: {environment})")


def add_upstream_breadcrumb(
    upstream: str,
    operation: str,
    data: dict[str, Any] | None = None,
    level: str = "info",
) -> None:
    """Record a breadcrumb for an upstream API call.

    Args:
        upstream: Upstream service name ("spotify", "qqmusic")
        operation: Name of the operation (e.g., "search_tracks", "fetch_lyrics")
        data: Optional dictionary of contextual data
        level: Severity level ("debug", "info", "warning", "error")
    """
    sentry_sdk.add_breadcrumb(
        category=upstream,
        message=operation,
        data=data or {},
        level=level,
    )


def capture_exception(
    error: Exception,
    context: dict[str, Any] | None = None,
    context_name: str = "pipeline",
) -> None:
    """Capture an exception and send it to Sentry.

    Args:
        error: The exception to capture
        context: Optional dictionary of contextual data to attach
        context_name: Sentry context key the data is attached under
    """
    if context:
        sentry_sdk.set_context(context_name, context)

    sentry_sdk.capture_exception(error)

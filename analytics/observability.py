"""
Error tracking setup.

The analytics core is advisory: a failure to persist a record must never
block the user's workout from being saved, so persistence errors are
reported here and surfaced to callers as a failed result instead.
"""

import logging

import sentry_sdk

from analytics.settings import Settings

logger = logging.getLogger(__name__)


def init_sentry(settings: Settings) -> None:
    """Initialize Sentry SDK if DSN is configured."""
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.environment,
            traces_sample_rate=0.1,  # 10% of transactions for performance monitoring
        )
        logger.info("Sentry initialized for training analytics")


def report_persistence_failure(operation: str, error: Exception) -> None:
    """Log and forward a store failure to Sentry."""
    logger.error("Persistence failed during %s: %s", operation, error)
    sentry_sdk.capture_exception(error)

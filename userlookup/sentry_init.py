"""
Minimal Sentry bootstrap.

Central place to configure Sentry (error monitoring). No-op if
SENTRY_DSN is not set, so local use is unaffected.
"""
from __future__ import annotations

from .config import settings


def init_sentry() -> bool:
    """
    Initialize Sentry only if a DSN is provided.

    Settings used:
    - SENTRY_DSN: project DSN (empty -> no-op)
    - SENTRY_ENV: environment name (e.g., 'development', 'production')
    - SENTRY_TRACES: traces sample rate (default 0.0)

    Returns:
        True if Sentry was initialized.
    """
    if not settings.SENTRY_DSN:
        return False

    import sentry_sdk
    from sentry_sdk.integrations.excepthook import ExcepthookIntegration
    from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration

    sentry_sdk.init(
        dsn=settings.SENTRY_DSN,
        environment=settings.SENTRY_ENV,
        traces_sample_rate=settings.SENTRY_TRACES,
        integrations=[
            ExcepthookIntegration(),   # capture unexpected exceptions
            SqlalchemyIntegration(),   # capture DB-level errors
            LoggingIntegration(level=None, event_level=None),
        ],
    )
    return True

"""Error reporting for the RallyRank API.

Sentry stays off unless ``SENTRY_DSN`` is set. Expected failures (rejected
submissions, forbidden responders, lost races) are answered as problem
responses and never reported; only unhandled exceptions are.
"""

import logging
import os

import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration

from ..config import API_VERSION, _env_float

logger = logging.getLogger(__name__)

SERVICE_NAME = "rallyrank"


def release_name() -> str:
    return (os.getenv("SENTRY_RELEASE") or "").strip() or f"{SERVICE_NAME}@{API_VERSION}"


def init_sentry() -> bool:
    """Initialise Sentry from the environment; return whether it is enabled."""
    dsn = (os.getenv("SENTRY_DSN") or "").strip()
    if not dsn:
        logger.info("SENTRY_DSN not provided; error reporting disabled.")
        return False

    environment = (os.getenv("SENTRY_ENVIRONMENT") or "").strip() or None
    release = release_name()
    sentry_sdk.init(
        dsn=dsn,
        integrations=[FastApiIntegration()],
        environment=environment,
        release=release,
        # Bearer tokens identify players; keep them out of reports.
        send_default_pii=False,
        traces_sample_rate=_env_float("SENTRY_TRACES_SAMPLE_RATE", 0.0),
        profiles_sample_rate=_env_float("SENTRY_PROFILES_SAMPLE_RATE", 0.0),
    )
    sentry_sdk.set_tag("service", SERVICE_NAME)
    logger.info("Sentry error reporting enabled for %s (environment=%s)", release, environment)
    return True


def report_unhandled(exc: BaseException, *, path: str) -> None:
    """Send an exception that escaped every domain handler to Sentry."""
    with sentry_sdk.new_scope() as scope:
        scope.set_tag("request_path", path)
        sentry_sdk.capture_exception(exc)

"""Error tracking and monitoring setup."""
import os
import logging
from typing import Optional

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

_SENTRY_ENABLED = False

SENSITIVE_KEYS = ['password', 'secret', 'api_key', 'token', 'auth', 'phone_number', 'otp']


def filter_sensitive_data(event, hint):
    """Filter sensitive data from Sentry events."""
    if event.get('request'):
        if 'headers' in event.get('request', {}):
            sensitive_headers = ['authorization', 'api-key', 'x-api-key', 'x-auth-token',
                                 'cookie', 'set-cookie', 'password', 'secret']
            event['request']['headers'] = {
                k: '***REDACTED***' if k.lower() in sensitive_headers else v
                for k, v in event['request']['headers'].items()
            }

        if 'data' in event.get('request', {}):
            data = event['request']['data']
            if isinstance(data, dict):
                for key in SENSITIVE_KEYS:
                    if key in data:
                        data[key] = '***REDACTED***'

    # Contexts are attached by capture_exception from caller-supplied dicts
    contexts = event.get('contexts')
    if isinstance(contexts, dict):
        for key in list(contexts.keys()):
            if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
                contexts[key] = {"value": '***REDACTED***'}

    return event


def setup_error_tracking(
    dsn: Optional[str] = None,
    environment: Optional[str] = None,
    release: Optional[str] = None,
    traces_sample_rate: float = 0.1
) -> bool:
    """
    Setup Sentry error tracking.

    Args:
        dsn: Sentry DSN (if None, will try to get from SENTRY_DSN env var)
        environment: Environment name (development, staging, production)
        release: Release version
        traces_sample_rate: Percentage of transactions to trace (0.0 to 1.0)

    Returns:
        True if Sentry was initialized, False otherwise
    """
    global _SENTRY_ENABLED

    dsn = dsn or os.getenv("SENTRY_DSN")
    if not dsn:
        logging.info("Sentry DSN not provided. Error tracking disabled.")
        return False

    environment = environment or os.getenv("ENVIRONMENT", "development")
    release = release or os.getenv("RELEASE", "unknown")

    try:
        sentry_sdk.init(
            dsn=dsn,
            environment=environment,
            release=release,
            integrations=[
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=traces_sample_rate,
            before_send=filter_sensitive_data,
            attach_stacktrace=True,
            send_default_pii=False,
            debug=os.getenv("SENTRY_DEBUG", "false").lower() == "true",
        )
    except Exception as e:
        logging.error(f"Failed to initialize Sentry: {e}")
        return False

    _SENTRY_ENABLED = True
    logging.info(f"Sentry error tracking initialized for environment: {environment}")
    return True


def capture_exception(error: Exception, context: Optional[dict] = None) -> bool:
    """Capture exception and send to Sentry if it has been initialized."""
    if not _SENTRY_ENABLED:
        return False

    with sentry_sdk.new_scope() as scope:
        if context:
            for key, value in context.items():
                scope.set_context(key, {"value": str(value)})
        sentry_sdk.capture_exception(error)
    return True


def capture_message(message: str, level: str = "error", context: Optional[dict] = None) -> bool:
    """Capture message and send to Sentry if it has been initialized."""
    if not _SENTRY_ENABLED:
        return False

    with sentry_sdk.new_scope() as scope:
        if context:
            for key, value in context.items():
                scope.set_context(key, {"value": str(value)})
        sentry_sdk.capture_message(message, level=level)
    return True

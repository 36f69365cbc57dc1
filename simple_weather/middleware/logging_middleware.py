"""Redaction of secrets from URLs before they reach the logs."""

import re

# Query parameters whose values never appear in logs
SENSITIVE_PARAMS = (
    "appid",
    "api_key",
    "apikey",
    "key",
    "token",
    "secret",
)

_SENSITIVE_PATTERN = re.compile(rf"(?i)\b({'|'.join(SENSITIVE_PARAMS)})=([^&\s\"]+)")


def redact_sensitive_data(url: str) -> str:
    """Replace the value of every sensitive query parameter with ``***REDACTED***``."""
    return _SENSITIVE_PATTERN.sub(r"\1=***REDACTED***", url)

"""Logging helpers with sensitive data redaction."""

import re

# Sensitive parameters to redact from URLs (HG Brasil takes its key as ?key=)
SENSITIVE_PARAMS = [
    "key",
    "api_key",
    "token",
    "password",
    "secret",
]


def redact_sensitive_data(url: str) -> str:
    """Redact sensitive query parameters from URL."""
    redacted = url
    for param in SENSITIVE_PARAMS:
        pattern = rf"([?&]){param}=([^&\s\"]+)"
        redacted = re.sub(pattern, rf"\g<1>{param}=***REDACTED***", redacted)
    return redacted

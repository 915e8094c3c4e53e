"""Secrets redaction for ICWS traffic logs.

Request and response traces are logged at DEBUG. Before they reach a log
record, the values that grant access to a session are replaced:

- the connect password
- CSRF tokens (body field and header)
- session cookies (Cookie / Set-Cookie headers and the injected body field)
"""

import re
from typing import Any

REDACTED = "[REDACTED]"

# Keys whose values are always replaced, compared case-insensitively
SECRET_KEYS = frozenset({
    "password",
    "csrftoken",
    "cookie",
    "set-cookie",
    "inin-icws-csrf-token",
})

# Secret patterns for free text: name -> (regex_pattern, replacement)
SECRET_PATTERNS: dict[str, tuple[re.Pattern[str], str]] = {
    # "password": "...", password=..., etc.
    "password_assignment": (
        re.compile(
            r'(["\']?(?:password|passwd|pwd)["\']?[\s]*[=:][\s]*["\']?)'
            r'([^\s"\',;\}]+)',
            re.IGNORECASE,
        ),
        f"\\1{REDACTED}",
    ),
    # "csrfToken": "..." in raw JSON
    "csrf_token": (
        re.compile(r'(["\']?csrfToken["\']?[\s]*[=:][\s]*["\']?)([^\s"\',;\}]+)'),
        f"\\1{REDACTED}",
    ),
    # ININ-ICWS-CSRF-Token: ... header lines
    "csrf_header": (
        re.compile(r"(ININ-ICWS-CSRF-Token:\s*)(\S+)", re.IGNORECASE),
        f"\\1{REDACTED}",
    ),
    # icws_<session>=<value> cookie pairs
    "session_cookie": (
        re.compile(r"\b(icws_[A-Za-z0-9]+=)([^;\s\"']+)"),
        f"\\1{REDACTED}",
    ),
}


def redact_secrets(text: str) -> str:
    """Redact secrets from a text string.

    Example:
        >>> redact_secrets('{"password": "1234"}')
        '{"password": "[REDACTED]"}'
    """
    result = text
    for pattern, replacement in SECRET_PATTERNS.values():
        result = pattern.sub(replacement, result)
    return result


def redact_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively redact secrets from a dictionary.

    Values under SECRET_KEYS are replaced outright; other string values are
    scanned with SECRET_PATTERNS. Returns a new dict; the original is not
    modified.
    """
    return _redact_value(data)  # type: ignore[return-value]


def _redact_value(value: Any) -> Any:
    if isinstance(value, str):
        return redact_secrets(value)
    elif isinstance(value, dict):
        return {
            k: REDACTED if str(k).lower() in SECRET_KEYS else _redact_value(v)
            for k, v in value.items()
        }
    elif isinstance(value, (list, tuple)):
        return type(value)(_redact_value(item) for item in value)
    else:
        return value

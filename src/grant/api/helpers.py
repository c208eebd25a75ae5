"""
Helper functions for identity API operations.

Provides redaction of secrets in log output and header construction for
downstream calls that carry the bearer token.
"""

from typing import Dict, Any, Mapping

REDACTED = "[REDACTED]"

_SECRET_PAYLOAD_KEYS = {"Answer"}
_SECRET_HEADER_KEYS = {"authorization", "cookie", "set-cookie"}


def redact_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Return a copy of a request body with password and OTP answers masked."""
    return {
        key: (REDACTED if key in _SECRET_PAYLOAD_KEYS else value)
        for key, value in payload.items()
    }


def redact_headers(headers: Mapping[str, str]) -> Dict[str, str]:
    """
    Return a copy of headers with credential-bearing values masked.

    Authorization keeps its scheme so logs still show which kind of
    credential was sent.
    """
    redacted = {}
    for key, value in headers.items():
        lowered = key.lower()
        if lowered == "authorization":
            scheme = value.split(" ", 1)[0] if " " in value else ""
            redacted[key] = f"{scheme} {REDACTED}".strip()
        elif lowered in _SECRET_HEADER_KEYS:
            redacted[key] = REDACTED
        else:
            redacted[key] = value
    return redacted


def bearer_headers(token: str) -> Dict[str, str]:
    """
    Build request headers for a downstream API call.

    Public helper for code that calls tenant services (for example the
    access service at the URL from ``build_service_url``) with the token
    returned by ``authenticate()``. The login flow itself never sends it.

    Args:
        token: Bearer token returned by a successful login

    Returns:
        Headers with Authorization, Content-Type and Accept set

    Raises:
        ValueError: If token is empty
    """
    if not token:
        raise ValueError("Bearer token is required")

    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
        "Accept": "*/*",
    }

"""
API layer for the CyberArk Identity provider.

Provides the HTTP client, the challenge-response login flow and the
header helpers callers use with the token it returns.
"""

from .client import APIClient
from .auth import IdentityAuthAPI, authenticate
from . import helpers
from .helpers import bearer_headers, redact_headers, redact_payload


__all__ = [
    "APIClient",
    "IdentityAuthAPI",
    "authenticate",
    "helpers",
    "bearer_headers",
    "redact_headers",
    "redact_payload",
]

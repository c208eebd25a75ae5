"""
Service layer for grant.

Resolves tenant details from bearer tokens and builds service base URLs.
"""

from .claims import decode_claims, decode_payload, require_subdomain
from .service_url import (
    KNOWN_SERVICE_PATTERNS,
    build_service_url,
    extract_subdomain,
    extract_platform_domain,
    resolve_tenant,
    resolve_base_url,
)

__all__ = [
    "decode_claims",
    "decode_payload",
    "require_subdomain",
    "KNOWN_SERVICE_PATTERNS",
    "build_service_url",
    "extract_subdomain",
    "extract_platform_domain",
    "resolve_tenant",
    "resolve_base_url",
]

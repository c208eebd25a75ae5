"""
Service URL resolution.

Composes per-tenant API base URLs of the form
https://{subdomain}{separator}{service}.{platform_domain}.
"""

from typing import List, Optional, Tuple

from ..core import constants
from ..models import JWTClaims, ServiceEndpoint
from .claims import decode_claims, require_subdomain

# Host naming conventions seen for the access service
KNOWN_SERVICE_PATTERNS: List[ServiceEndpoint] = [
    ServiceEndpoint("sca", ".", "SDK pattern (<tenant>.sca.<domain>)"),
    ServiceEndpoint("", "", "No service (<tenant>.<domain>)"),
    ServiceEndpoint("access", ".", "Access service (<tenant>.access.<domain>)"),
    ServiceEndpoint("sca", "-", "Dash separator (<tenant>-sca.<domain>)"),
]


def build_service_url(
    subdomain: str,
    platform_domain: str,
    service_name: str = "",
    separator: str = ""
) -> str:
    """
    Compose a service base URL.

    >>> build_service_url("abz4452", "cyberark.cloud", "sca", ".")
    'https://abz4452.sca.cyberark.cloud'
    >>> build_service_url("abz4452", "cyberark.cloud")
    'https://abz4452.cyberark.cloud'
    """
    if not service_name:
        return f"https://{subdomain}.{platform_domain}"
    return f"https://{subdomain}{separator}{service_name}.{platform_domain}"


def _strip_scheme(url: str) -> str:
    for scheme in ("https://", "http://"):
        if url.startswith(scheme):
            return url[len(scheme):]
    return url


def extract_subdomain(identity_url: str) -> str:
    """https://abz4452.id.cyberark.cloud -> abz4452"""
    return _strip_scheme(identity_url).split(".")[0]


def extract_platform_domain(identity_url: str, subdomain: Optional[str] = None) -> str:
    """https://abz4452.id.cyberark.cloud -> cyberark.cloud"""
    if subdomain is None:
        subdomain = extract_subdomain(identity_url)
    host = _strip_scheme(identity_url).rstrip("/")
    prefix = subdomain + "."
    if host.startswith(prefix):
        host = host[len(prefix):]
    if host.startswith(constants.IDENTITY_HOST_LABEL):
        host = host[len(constants.IDENTITY_HOST_LABEL):]
    return host


def resolve_tenant(claims: JWTClaims, identity_url: Optional[str] = None) -> Tuple[str, str]:
    """
    Pick subdomain and platform domain, preferring token claims.

    The identity URL only fills in values the claims do not carry.

    Raises:
        UnresolvableSubdomainError: If no subdomain can be determined
        ValueError: If no platform domain can be determined
    """
    fallback_subdomain = extract_subdomain(identity_url) if identity_url else None
    subdomain = require_subdomain(claims, fallback_subdomain)

    platform_domain = claims.platform_domain
    if not platform_domain and identity_url:
        platform_domain = extract_platform_domain(identity_url, fallback_subdomain)
    if not platform_domain:
        raise ValueError("platform domain missing from token claims and no identity URL given")
    return subdomain, platform_domain


def resolve_base_url(
    token: str,
    identity_url: Optional[str] = None,
    endpoint: Optional[ServiceEndpoint] = None
) -> str:
    """
    Resolve the base URL of a downstream service from a bearer token.

    Args:
        token: Bearer token from a successful login
        identity_url: Identity provider URL used as fallback
        endpoint: Service naming convention (default: sca with '.')

    Returns:
        Base URL such as https://abz4452.sca.cyberark.cloud
    """
    if endpoint is None:
        endpoint = ServiceEndpoint(constants.DEFAULT_SERVICE_NAME, constants.DEFAULT_SERVICE_SEPARATOR)
    subdomain, platform_domain = resolve_tenant(decode_claims(token), identity_url)
    return build_service_url(subdomain, platform_domain, endpoint.name, endpoint.separator)

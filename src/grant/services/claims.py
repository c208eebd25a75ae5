"""
Bearer token claims resolution.

Reads the unverified payload of the identity provider's JWT to find the
tenant subdomain and platform domain. The signature is not checked: the
token is only used to locate services, and the provider validates it on
every downstream call.
"""

import binascii
import json
import logging
from typing import Any, Dict, Optional, Tuple

from jwt.utils import base64url_decode  # PyJWT

from ..core import constants
from ..core.exceptions import TokenFormatError, UnresolvableSubdomainError
from ..models import JWTClaims

logger = logging.getLogger(__name__)

# Accepted spellings per claim, in order of precedence
SUBDOMAIN_KEYS: Tuple[str, ...] = (constants.CLAIM_SUBDOMAIN,)
PLATFORM_DOMAIN_KEYS: Tuple[str, ...] = (constants.CLAIM_PLATFORM_DOMAIN, "platformDomain")
UNIQUE_NAME_KEYS: Tuple[str, ...] = (constants.CLAIM_UNIQUE_NAME, "uniqueName")


def decode_payload(token: str) -> Dict[str, Any]:
    """
    Decode the payload segment of a JWT without verifying it.

    Only the middle segment is read; header and signature are never parsed.

    Raises:
        TokenFormatError: If the token is not three dot-separated segments or
                          the payload is not base64url-encoded JSON object
    """
    if not token or token.count(".") != 2:
        raise TokenFormatError("token must have exactly 3 dot-separated segments")

    payload_segment = token.split(".")[1]
    try:
        payload = json.loads(base64url_decode(payload_segment))
    except (binascii.Error, ValueError, UnicodeDecodeError) as e:
        raise TokenFormatError(f"cannot decode token payload: {e}") from e

    if not isinstance(payload, dict):
        raise TokenFormatError("token payload is not a JSON object")
    return payload


def _first_claim(payload: Dict[str, Any], keys: Tuple[str, ...]) -> str:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value:
            return value
    return ""


def strip_internal_prefix(platform_domain: str) -> str:
    """Turn an internal routing domain like shell.cyberark.cloud into cyberark.cloud."""
    if platform_domain.startswith(constants.INTERNAL_DOMAIN_PREFIX):
        return platform_domain[len(constants.INTERNAL_DOMAIN_PREFIX):]
    return platform_domain


def subdomain_from_unique_name(unique_name: str) -> str:
    """
    Derive the tenant subdomain from a login name.

    admin@mytenant.cyberark.cloud -> mytenant
    """
    if "@" not in unique_name:
        return ""
    host = unique_name.split("@", 1)[1]
    return host.split(".", 1)[0]


def claims_from_payload(payload: Dict[str, Any]) -> JWTClaims:
    """
    Build JWTClaims from a decoded payload.

    The subdomain claim always wins; the unique name is only used when the
    token carries no subdomain claim at all.
    """
    unique_name = _first_claim(payload, UNIQUE_NAME_KEYS)
    subdomain = _first_claim(payload, SUBDOMAIN_KEYS)
    if not subdomain:
        subdomain = subdomain_from_unique_name(unique_name)

    return JWTClaims(
        subdomain=subdomain,
        platform_domain=strip_internal_prefix(_first_claim(payload, PLATFORM_DOMAIN_KEYS)),
        unique_name=unique_name,
    )


def decode_claims(token: str) -> JWTClaims:
    """
    Decode the tenant claims from a bearer token.

    Args:
        token: JWT returned by a successful login

    Returns:
        Claims; subdomain is empty when it cannot be determined

    Raises:
        TokenFormatError: If the token cannot be decoded
    """
    claims = claims_from_payload(decode_payload(token))
    logger.debug(
        f"Token claims: subdomain={claims.subdomain!r}, "
        f"platform_domain={claims.platform_domain!r}"
    )
    return claims


def require_subdomain(claims: JWTClaims, fallback: Optional[str] = None) -> str:
    """
    Return the claims' subdomain, or the fallback, refusing an empty result.

    Raises:
        UnresolvableSubdomainError: If neither yields a subdomain
    """
    subdomain = claims.subdomain or fallback or ""
    if not subdomain:
        raise UnresolvableSubdomainError(
            "token carries neither a subdomain nor a unique_name with a tenant host"
        )
    return subdomain

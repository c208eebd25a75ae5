"""
Token claim and service endpoint data models.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class JWTClaims:
    """Unverified bearer token claims used to locate tenant services."""

    subdomain: str = ""
    platform_domain: str = ""
    unique_name: str = ""

    @property
    def is_resolvable(self) -> bool:
        return bool(self.subdomain)


@dataclass(frozen=True)
class ServiceEndpoint:
    """Naming convention for one downstream service host."""

    name: str = ""
    separator: str = ""
    description: str = ""

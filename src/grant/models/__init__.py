"""
Data models for grant.

Contains DTOs for authentication envelopes, token claims and service endpoints.
"""

from .auth import (
    Mechanism,
    Challenge,
    AuthSession,
    StartAuthResponse,
    StepResult,
    TokenBundle,
    AuthOutcome,
)
from .claims import JWTClaims, ServiceEndpoint

__all__ = [
    "Mechanism",
    "Challenge",
    "AuthSession",
    "StartAuthResponse",
    "StepResult",
    "TokenBundle",
    "AuthOutcome",
    "JWTClaims",
    "ServiceEndpoint",
]

"""
Authentication data models.

Contains DTOs for the identity provider's challenge-response envelopes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from ..core import constants


def _text(data: Dict[str, Any], key: str) -> str:
    """Read an optional string field; null and missing read as empty."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _result_of(envelope: Dict[str, Any]) -> Dict[str, Any]:
    result = envelope.get("Result")
    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ValueError("Result must be a JSON object")
    return result


@dataclass(frozen=True)
class Mechanism:
    """One concrete way to satisfy an authentication factor."""

    name: str
    mechanism_id: str
    prompt_mech_chosen: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Mechanism":
        return cls(
            name=_text(data, "Name"),
            mechanism_id=_text(data, "MechanismId"),
            prompt_mech_chosen=_text(data, "PromptMechChosen"),
        )


@dataclass(frozen=True)
class Challenge:
    """A set of interchangeable mechanisms for one authentication factor."""

    mechanisms: List[Mechanism] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Challenge":
        return cls(mechanisms=[Mechanism.from_dict(m) for m in data.get("Mechanisms") or []])

    def find_mechanism(self, name: str) -> Optional[Mechanism]:
        """Return the mechanism with the given name (case-insensitive), if offered."""
        target = name.upper()
        for mechanism in self.mechanisms:
            if mechanism.name.upper() == target:
                return mechanism
        return None


@dataclass(frozen=True)
class AuthSession:
    """In-progress login created by StartAuthentication."""

    session_id: str
    challenges: List[Challenge] = field(default_factory=list)
    tenant_id: str = ""

    @classmethod
    def from_dict(cls, result: Dict[str, Any]) -> "AuthSession":
        return cls(
            session_id=_text(result, "SessionId"),
            challenges=[Challenge.from_dict(c) for c in result.get("Challenges") or []],
            tenant_id=_text(result, "TenantId"),
        )


@dataclass(frozen=True)
class StartAuthResponse:
    """StartAuthentication envelope."""

    success: bool
    message: str
    session: AuthSession

    @classmethod
    def from_dict(cls, envelope: Dict[str, Any]) -> "StartAuthResponse":
        return cls(
            success=bool(envelope.get("Success")),
            message=_text(envelope, "Message"),
            session=AuthSession.from_dict(_result_of(envelope)),
        )


@dataclass(frozen=True)
class StepResult:
    """Non-terminal AdvanceAuthentication answer; only Summary is read."""

    success: bool
    message: str
    summary: str

    @property
    def is_login_success(self) -> bool:
        return self.summary == constants.SUMMARY_LOGIN_SUCCESS

    @classmethod
    def from_dict(cls, envelope: Dict[str, Any]) -> "StepResult":
        return cls(
            success=bool(envelope.get("Success")),
            message=_text(envelope, "Message"),
            summary=_text(_result_of(envelope), "Summary"),
        )


@dataclass(frozen=True)
class TokenBundle:
    """Successful login result."""

    token: str
    refresh_token: str = ""
    token_lifetime: int = 0
    customer_id: str = ""
    user_id: str = ""
    pod_fqdn: str = ""
    auth: str = ""

    @classmethod
    def from_dict(cls, envelope: Dict[str, Any]) -> "TokenBundle":
        result = _result_of(envelope)
        return cls(
            token=_text(result, "Token"),
            refresh_token=_text(result, "RefreshToken"),
            token_lifetime=int(result.get("TokenLifetime") or 0),
            customer_id=_text(result, "CustomerID"),
            user_id=_text(result, "UserId"),
            pod_fqdn=_text(result, "PodFqdn"),
            auth=_text(result, "Auth"),
        )


# Outcome of an AdvanceAuthentication call: narrow step result or full token.
AuthOutcome = Union[StepResult, TokenBundle]

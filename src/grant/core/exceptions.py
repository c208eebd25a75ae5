"""
Exception types for the login flow and token handling.

Every error raised by the authentication flow records the step that failed
so a failed login can be diagnosed from the message alone.
"""

from typing import Optional

from . import constants


def preview_body(body: Optional[str], limit: int = constants.MAX_BODY_PREVIEW) -> str:
    """Shorten a response body for inclusion in messages."""
    if not body:
        return ""
    if len(body) > limit:
        return body[:limit] + "..."
    return body


class GrantError(Exception):
    """Base error type."""

    def __init__(self, message: str, step: Optional[str] = None):
        self.message = message
        self.step = step
        super().__init__(f"{step} failed: {message}" if step else message)


class IdentityTransportError(GrantError):
    """Connection, DNS, TLS or timeout failure talking to the identity provider."""


class IdentityHTTPError(GrantError):
    """Identity provider answered with a non-200 status."""

    def __init__(self, status_code: int, body: str = "", step: Optional[str] = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"HTTP {status_code}: {preview_body(body)}", step)


class MalformedResponseError(GrantError):
    """Response body is not JSON or does not have the expected envelope."""

    def __init__(self, message: str, body: str = "", step: Optional[str] = None):
        self.body = body
        if body:
            message = f"{message} (body: {preview_body(body)})"
        super().__init__(message, step)


class AuthenticationError(GrantError):
    """
    Protocol violation reported by or detected in the provider's answers.

    Covers Success=false envelopes, missing challenges or mechanisms and
    unexpected summaries. ``provider_message`` keeps the provider's own
    Message field when one was sent.
    """

    def __init__(
        self,
        message: str,
        step: Optional[str] = None,
        provider_message: Optional[str] = None,
        body: str = ""
    ):
        self.provider_message = provider_message
        self.body = body
        super().__init__(message, step)


class OTPSecretError(GrantError, ValueError):
    """TOTP secret is empty or not valid base32."""


class TokenFormatError(GrantError, ValueError):
    """Bearer token is not a decodable three-segment JWT."""


class UnresolvableSubdomainError(GrantError):
    """Neither token claims nor the identity URL yield a tenant subdomain."""

"""
Time-based one-time password generation.

Produces the 6-digit SHA-1 codes (RFC 6238, 30 second step) the identity
provider expects for the OATH mechanism.
"""

import binascii
import hashlib
from datetime import datetime
from typing import Union

import pyotp
import pytz

from ..core import constants
from ..core.exceptions import OTPSecretError


def _build_totp(secret: str) -> pyotp.TOTP:
    """
    Create a TOTP generator after checking the secret decodes as base32.

    Surrounding whitespace is dropped, so secrets read from files with a
    trailing newline still decode.
    """
    secret = (secret or "").strip()
    if not secret:
        raise OTPSecretError("TOTP secret cannot be empty")

    totp = pyotp.TOTP(
        secret,
        digits=constants.TOTP_DIGITS,
        digest=hashlib.sha1,
        interval=constants.TOTP_INTERVAL
    )
    try:
        totp.byte_secret()
    except (binascii.Error, ValueError) as e:
        raise OTPSecretError(f"TOTP secret is not valid base32: {e}") from e
    return totp


def _as_utc(when: Union[datetime, int, float]) -> datetime:
    """Normalize a timestamp to an aware UTC datetime. Naive datetimes are taken as UTC."""
    if isinstance(when, datetime):
        if when.tzinfo is None:
            return pytz.UTC.localize(when)
        return when.astimezone(pytz.UTC)
    return datetime.fromtimestamp(when, tz=pytz.UTC)


def generate_totp_at(secret: str, when: Union[datetime, int, float]) -> str:
    """
    Generate the TOTP code for a specific point in time.

    Args:
        secret: Base32-encoded shared secret
        when: Datetime (naive means UTC) or Unix timestamp in seconds

    Returns:
        Zero-padded 6-digit code

    Raises:
        OTPSecretError: If the secret is empty or not valid base32
    """
    totp = _build_totp(secret)
    return totp.generate_otp(totp.timecode(_as_utc(when)))


def generate_totp(secret: str) -> str:
    """Generate the TOTP code for the current time."""
    return generate_totp_at(secret, datetime.now(pytz.UTC))


def validate_secret(secret: str) -> None:
    """
    Check a TOTP secret without generating a code.

    Raises:
        OTPSecretError: If the secret is empty or not valid base32
    """
    _build_totp(secret)

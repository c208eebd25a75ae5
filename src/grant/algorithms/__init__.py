"""
Code generation algorithms.

Provides the time-based one-time password generator used for the OATH factor.
"""

from .totp import generate_totp, generate_totp_at, validate_secret

__all__ = [
    "generate_totp",
    "generate_totp_at",
    "validate_secret",
]

"""
Core utilities for grant.

Provides configuration management, logging, constants and error types.
"""

from .config import Config
from .logger import setup_logger, timed
from . import constants
from .exceptions import (
    GrantError,
    IdentityTransportError,
    IdentityHTTPError,
    MalformedResponseError,
    AuthenticationError,
    OTPSecretError,
    TokenFormatError,
    UnresolvableSubdomainError,
)

__all__ = [
    "Config",
    "setup_logger",
    "timed",
    "constants",
    "GrantError",
    "IdentityTransportError",
    "IdentityHTTPError",
    "MalformedResponseError",
    "AuthenticationError",
    "OTPSecretError",
    "TokenFormatError",
    "UnresolvableSubdomainError",
]

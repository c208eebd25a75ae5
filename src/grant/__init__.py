"""
grant

Logs in to CyberArk Identity with password and TOTP, and resolves the
tenant service URLs the resulting bearer token is valid for.
"""

__version__ = "0.1.0"
__description__ = "CyberArk Identity login and tenant service URL resolution"


def __getattr__(name):
    """Lazy import to avoid importing dependencies when not needed."""
    if name == "authenticate":
        from .api import authenticate
        return authenticate
    if name == "decode_claims":
        from .services import decode_claims
        return decode_claims
    if name == "build_service_url":
        from .services import build_service_url
        return build_service_url
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    "authenticate",
    "decode_claims",
    "build_service_url",
]

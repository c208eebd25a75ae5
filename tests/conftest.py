"""
Pytest configuration and shared fixtures for all tests.
"""

import base64
import json
import sys
from pathlib import Path

import pytest

# Add the project root to sys.path so we can import from src
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


def _b64url(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def build_token(payload, header=None, signature=b"signature") -> str:
    """Build an unsigned-looking JWT with the given payload."""
    header = header or {"alg": "RS256", "typ": "JWT"}
    return ".".join([
        _b64url(json.dumps(header).encode("utf-8")),
        _b64url(json.dumps(payload).encode("utf-8")),
        _b64url(signature),
    ])


@pytest.fixture
def make_token():
    """Factory building JWTs from payload dicts."""
    return build_token


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the configuration reads."""
    for name in (
        "SCA_IDENTITY_URL",
        "SCA_USERNAME",
        "SCA_PASSWORD",
        "SCA_TOTP_SECRET",
        "GRANT_CONFIG_FILE",
        "GRANT_LOG_LEVEL",
        "GRANT_LOG_FILE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line(
        "markers", "integration: mark test as integration test requiring identity provider access"
    )
    config.addinivalue_line(
        "markers", "unit: mark test as unit test (no external dependencies)"
    )

"""
Base HTTP client for the identity provider.

Owns the requests session whose cookie jar carries the provider's session
state, posts JSON and maps transport, status and decoding failures onto
the grant error types.
"""

import logging
import time
from typing import Dict, Any, Optional

import requests  # type: ignore
from requests.adapters import HTTPAdapter  # type: ignore
from urllib3.util.retry import Retry  # type: ignore

from ..core import constants
from ..core.exceptions import (
    IdentityTransportError,
    IdentityHTTPError,
    MalformedResponseError,
)
from .helpers import redact_headers, redact_payload


class APIClient:
    """Base client for posting JSON to the identity provider."""

    def __init__(
        self,
        base_url: str,
        timeout: int = constants.DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize API client.

        Args:
            base_url: Identity provider URL
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            session: Session to reuse; a new one is created when omitted.
                     Never share one session between two users' logins.
            logger: Logger instance
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.verify_ssl = verify_ssl
        self.logger = logger or logging.getLogger(__name__)

        # Disable SSL warnings when verify_ssl is False
        if not verify_ssl:
            import urllib3
            urllib3.disable_warnings(urllib3.exceptions.InsecureRequestWarning)

        self.session = session if session is not None else requests.Session()

        # Each step is one-shot against provider session state; never retry
        no_retries = Retry(total=0, raise_on_status=False)
        adapter = HTTPAdapter(max_retries=no_retries)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({
            "Content-Type": "application/json",
            "Accept": "application/json",
            constants.NATIVE_CLIENT_HEADER: "true",
        })

    @property
    def cookies(self) -> requests.cookies.RequestsCookieJar:
        """Cookie jar shared by every call of this client."""
        return self.session.cookies

    def _make_request(
        self,
        method: str,
        endpoint: str,
        step: str,
        **kwargs
    ) -> requests.Response:
        """
        Make HTTP request to the identity provider.

        Args:
            method: HTTP method
            endpoint: API endpoint (without base URL)
            step: Flow step name used in log lines and errors
            **kwargs: Additional arguments for requests

        Returns:
            Response object with status 200

        Raises:
            IdentityTransportError: On connection, DNS, TLS or timeout failure
            IdentityHTTPError: On any status other than 200
        """
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        kwargs.setdefault("verify", self.verify_ssl)
        kwargs.setdefault("timeout", self.timeout)

        self.logger.debug(f"{method} {url}")
        if "json" in kwargs:
            self.logger.debug(f"Request body: {redact_payload(kwargs['json'])}")

        start = time.monotonic()
        try:
            response = self.session.request(method=method, url=url, **kwargs)
        except requests.exceptions.RequestException as e:
            self.logger.error(f"{method} {url} failed: {e}")
            raise IdentityTransportError(str(e), step=step) from e

        elapsed_ms = int((time.monotonic() - start) * 1000)
        self.logger.debug(f"{method} {url} -> {response.status_code} ({elapsed_ms}ms)")
        if response.headers:
            self.logger.debug(f"Response headers: {redact_headers(response.headers)}")

        if response.status_code != 200:
            self.logger.error(f"{method} {url} returned HTTP {response.status_code}")
            raise IdentityHTTPError(response.status_code, response.text, step=step)

        return response

    def post_json(self, endpoint: str, payload: Dict[str, Any], step: str) -> Dict[str, Any]:
        """
        POST a JSON payload and decode the JSON object answer.

        Raises:
            MalformedResponseError: If the body is not a JSON object
        """
        response = self._make_request("POST", endpoint, step, json=payload)
        try:
            data = response.json()
        except ValueError as e:
            raise MalformedResponseError(f"invalid JSON: {e}", response.text, step=step) from e

        if not isinstance(data, dict):
            raise MalformedResponseError("expected a JSON object", response.text, step=step)
        return data

    def close(self) -> None:
        """Close the session."""
        self.session.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

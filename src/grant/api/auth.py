"""
Challenge-response login against the CyberArk Identity provider.

Runs StartAuthentication, answers the password (UP) mechanism, then starts
and answers the OATH mechanism with a TOTP code. Every step is a single
blocking call; any failure ends the whole flow and a new login must start
again from StartAuthentication.
"""

import json
import logging
import os
from typing import Any, Dict, Optional, Tuple

import requests  # type: ignore

from ..algorithms import generate_totp, validate_secret
from ..core import constants
from ..core.exceptions import (
    AuthenticationError,
    MalformedResponseError,
    OTPSecretError,
)
from ..models import (
    AuthOutcome,
    AuthSession,
    Challenge,
    Mechanism,
    StartAuthResponse,
    StepResult,
    TokenBundle,
)
from .client import APIClient

STEP_START = "StartAuthentication"
STEP_PASSWORD = "AdvanceAuthentication(password)"
STEP_START_OOB = "AdvanceAuthentication(StartOOB)"
STEP_TOTP = "AdvanceAuthentication(TOTP)"


class IdentityAuthAPI(APIClient):
    """
    Login flow for one user.

    The instance owns the requests session, so its cookie jar lives exactly
    as long as one login. Do not reuse an instance for a second user.
    """

    logger: logging.Logger

    def __init__(
        self,
        identity_url: Optional[str] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        totp_secret: Optional[str] = None,
        timeout: int = constants.DEFAULT_TIMEOUT,
        verify_ssl: bool = True,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None
    ):
        """
        Initialize the login flow.

        Args:
            identity_url: Identity provider URL, e.g. https://abz4452.id.cyberark.cloud
            username: Login name
            password: Password answered to the UP mechanism
            totp_secret: Base32 secret used to produce the OATH answer
            timeout: Request timeout in seconds
            verify_ssl: Whether to verify SSL certificates
            session: Session whose cookie jar the flow will use
            logger: Logger instance

        Missing values fall back to SCA_IDENTITY_URL, SCA_USERNAME,
        SCA_PASSWORD and SCA_TOTP_SECRET.
        """
        identity_url = identity_url or os.getenv("SCA_IDENTITY_URL", "")
        super().__init__(identity_url, timeout, verify_ssl, session, logger)

        self.username = username or os.getenv("SCA_USERNAME")
        self.password = password or os.getenv("SCA_PASSWORD")
        self.totp_secret = totp_secret or os.getenv("SCA_TOTP_SECRET")

        self.auth_session: Optional[AuthSession] = None
        self.token_bundle: Optional[TokenBundle] = None

    def start_authentication(self) -> AuthSession:
        """
        Open a login session and fetch the challenges to satisfy.

        Returns:
            Session id and ordered challenges

        Raises:
            AuthenticationError: If the provider rejects the user or sends no challenges
        """
        payload = {
            "User": self.username,
            "Version": constants.AUTH_VERSION,
            "PlatformTokenResponse": True,
            "AssociatedEntityType": constants.ASSOCIATED_ENTITY_TYPE,
            "MfaRequestor": constants.MFA_REQUESTOR,
        }
        data = self.post_json(constants.START_AUTHENTICATION_PATH, payload, STEP_START)
        response = _decode(StartAuthResponse, data, STEP_START)

        if not response.success:
            raise AuthenticationError(
                f"provider rejected login: {response.message}",
                step=STEP_START,
                provider_message=response.message,
            )
        if not response.session.challenges:
            raise AuthenticationError("no challenges returned", step=STEP_START)

        session = response.session
        self.logger.info(f"SessionID: {session.session_id}")
        self.logger.info(f"Challenges: {len(session.challenges)}")
        for index, challenge in enumerate(session.challenges):
            for mechanism in challenge.mechanisms:
                self.logger.info(
                    f"  Challenge[{index}]: {mechanism.name} (id={mechanism.mechanism_id})"
                )
        return session

    def advance_authentication(
        self,
        session_id: str,
        mechanism: Mechanism,
        action: str,
        step: str,
        answer: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Send one AdvanceAuthentication action for a mechanism.

        Returns:
            Decoded response envelope
        """
        payload: Dict[str, Any] = {
            "SessionId": session_id,
            "MechanismId": mechanism.mechanism_id,
            "Action": action,
        }
        if answer is not None:
            payload["Answer"] = answer
        return self.post_json(constants.ADVANCE_AUTHENTICATION_PATH, payload, step)

    def _answer(
        self,
        session_id: str,
        mechanism: Mechanism,
        answer: str,
        step: str
    ) -> Tuple[AuthOutcome, Dict[str, Any]]:
        """
        Answer a mechanism.

        The envelope is read as a StepResult first and re-read as a
        TokenBundle only when Summary is LoginSuccess.

        Returns:
            Outcome and the decoded envelope it came from
        """
        data = self.advance_authentication(
            session_id, mechanism, constants.ACTION_ANSWER, step, answer=answer
        )
        result = _decode(StepResult, data, step)
        if not result.is_login_success:
            return result, data

        bundle = _decode(TokenBundle, data, step)
        if not bundle.token:
            raise MalformedResponseError(
                "LoginSuccess without a token", json.dumps(data), step=step
            )
        return bundle, data

    def login(self, totp_code: Optional[str] = None) -> TokenBundle:
        """
        Run the full login flow.

        Args:
            totp_code: Ready OATH code. When omitted, a code is generated
                       from the TOTP secret right before it is submitted.

        Returns:
            Token bundle from the LoginSuccess answer

        Raises:
            ValueError: If username or password is missing
            OTPSecretError: If the TOTP secret is invalid
            GrantError: On any transport, status, decoding or protocol failure
        """
        if not self.base_url:
            raise ValueError("Identity URL is required for authentication")
        if not self.username:
            raise ValueError("Username is required for authentication")
        if not self.password:
            raise ValueError("Password is required for authentication")
        if totp_code is None and self.totp_secret:
            validate_secret(self.totp_secret)

        self.token_bundle = None
        self.auth_session = session = self.start_authentication()

        password_mech = _require_mechanism(
            session.challenges[constants.PRIMARY_CHALLENGE_INDEX],
            constants.MECHANISM_PASSWORD,
            "first",
            STEP_PASSWORD,
        )
        self.logger.info(f"Advancing with password (mechanismId={password_mech.mechanism_id})...")
        outcome, _ = self._answer(session.session_id, password_mech, self.password, STEP_PASSWORD)

        if isinstance(outcome, TokenBundle):
            self.logger.info("Login successful after password, no second factor required")
            return self._finish(outcome)

        if not outcome.success:
            raise AuthenticationError(
                outcome.message or "password rejected",
                step=STEP_PASSWORD,
                provider_message=outcome.message,
            )
        self.logger.info(f"Password accepted, summary: {outcome.summary}")

        if len(session.challenges) < 2:
            raise AuthenticationError(
                f"expected at least 2 challenges for MFA, got {len(session.challenges)}",
                step=STEP_START_OOB,
            )
        oath_mech = _require_mechanism(
            session.challenges[constants.SECOND_FACTOR_CHALLENGE_INDEX],
            constants.MECHANISM_OATH,
            "second",
            STEP_START_OOB,
        )
        if totp_code is None and not self.totp_secret:
            raise OTPSecretError("a TOTP code or secret is required for OATH", step=STEP_TOTP)

        self.logger.info(f"Starting OOB for OATH (mechanismId={oath_mech.mechanism_id})...")
        data = self.advance_authentication(
            session.session_id, oath_mech, constants.ACTION_START_OOB, STEP_START_OOB
        )
        started = _decode(StepResult, data, STEP_START_OOB)
        if not started.success:
            raise AuthenticationError(
                started.message or "StartOOB rejected",
                step=STEP_START_OOB,
                provider_message=started.message,
            )

        code = totp_code if totp_code is not None else generate_totp(self.totp_secret)
        self.logger.info("Submitting TOTP code...")
        outcome, data = self._answer(session.session_id, oath_mech, code, STEP_TOTP)

        if isinstance(outcome, TokenBundle):
            self.logger.info(f"Login successful! Token length: {len(outcome.token)}")
            return self._finish(outcome)

        raise AuthenticationError(
            f"unexpected summary after TOTP: {outcome.summary!r} "
            f"(message: {outcome.message!r})",
            step=STEP_TOTP,
            provider_message=outcome.message or None,
            body=json.dumps(data),
        )

    def _finish(self, bundle: TokenBundle) -> TokenBundle:
        self.token_bundle = bundle
        self.auth_session = None
        return bundle

    def authenticate(self, totp_code: Optional[str] = None) -> Tuple[str, requests.cookies.RequestsCookieJar]:
        """
        Run the login flow and return the bearer token with the session's cookie jar.
        """
        bundle = self.login(totp_code)
        return bundle.token, self.cookies


def _decode(model, data: Dict[str, Any], step: str):
    try:
        return model.from_dict(data)
    except (TypeError, ValueError, AttributeError) as e:
        raise MalformedResponseError(
            f"unexpected {model.__name__} shape: {e}", json.dumps(data), step=step
        ) from e


def _require_mechanism(challenge: Challenge, name: str, position: str, step: str) -> Mechanism:
    mechanism = challenge.find_mechanism(name)
    if mechanism is None:
        offered = ", ".join(m.name for m in challenge.mechanisms) or "none"
        raise AuthenticationError(
            f"no {name} mechanism in {position} challenge (offered: {offered})",
            step=step,
        )
    return mechanism


def authenticate(
    identity_url: str,
    username: str,
    password: str,
    totp_code: Optional[str] = None,
    totp_secret: Optional[str] = None,
    session: Optional[requests.Session] = None,
    timeout: int = constants.DEFAULT_TIMEOUT,
    verify_ssl: bool = True,
    logger: Optional[logging.Logger] = None
) -> Tuple[str, requests.cookies.RequestsCookieJar]:
    """
    Log in and return ``(token, cookie_jar)``.

    Either ``totp_code`` or ``totp_secret`` must be given when the tenant
    requires the OATH factor. Pass ``session`` to keep using the same cookie
    jar for follow-up calls.
    """
    flow = IdentityAuthAPI(
        identity_url=identity_url,
        username=username,
        password=password,
        totp_secret=totp_secret,
        timeout=timeout,
        verify_ssl=verify_ssl,
        session=session,
        logger=logger,
    )
    return flow.authenticate(totp_code)

"""HTTP client for the account backend.

Three endpoints: login, sign-up, and a liveness check.  Every status code
is mapped to an :class:`AuthOutcome`; transport failures never escape as
exceptions.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from rescli.domain.outcomes import AuthOutcome, HealthCheck
from rescli.domain.types import AuthFailure

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://server.resilientdb.com"


class AuthClient:
    """Talks to the account backend over HTTPS.

    Passwords are sent as typed; hashing and storage are the backend's job.

    Args:
        base_url: Backend root, e.g. ``https://server.resilientdb.com``.
        timeout: Seconds per request, or None to wait indefinitely.
        transport: Optional httpx transport (tests pass ``httpx.MockTransport``).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        login_path: str = "/getUser",
        signup_path: str = "/setUser",
        test_path: str = "/test",
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._login_path = login_path
        self._signup_path = signup_path
        self._test_path = test_path
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(
            base_url=self._base_url,
            timeout=self._timeout,
            transport=self._transport,
        )

    def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response:
        with self._client() as client:
            return client.post(path, json=payload)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> AuthOutcome:
        """Check credentials against the backend."""
        try:
            response = self._post(self._login_path, {"email": username, "password": password})
        except httpx.HTTPError as exc:
            logger.debug("Login request failed: %s", exc)
            return AuthOutcome.failure(
                AuthFailure.TRANSPORT_ERROR, f"Login failed. {_error_text(exc)}"
            )

        logger.debug("Login returned HTTP %s", response.status_code)
        if response.status_code == 200:
            if _success_flag(response):
                return AuthOutcome.success(username, f"Login successful. Welcome, {username}!")
            return _invalid_credentials()
        if response.status_code == 500:
            return AuthOutcome.failure(
                AuthFailure.SERVER_ERROR,
                "Login failed. The authentication server encountered an error.",
            )
        return _invalid_credentials()

    def sign_up(self, email: str, password: str) -> AuthOutcome:
        """Register a new account."""
        try:
            response = self._post(self._signup_path, {"email": email, "password": password})
        except httpx.HTTPError as exc:
            logger.debug("Sign-up request failed: %s", exc)
            return AuthOutcome.failure(
                AuthFailure.TRANSPORT_ERROR, f"Sign up failed. {_error_text(exc)}"
            )

        logger.debug("Sign-up returned HTTP %s", response.status_code)
        if response.status_code == 200:
            return AuthOutcome.success(email, f"Sign up successful. Welcome, {email}!")
        if response.status_code == 409:
            return AuthOutcome.failure(
                AuthFailure.CONFLICT,
                f"Sign up failed. User with email {email} already exists.",
            )
        return AuthOutcome.failure(
            AuthFailure.SERVER_ERROR,
            f"Sign up failed. Error registering user with email {email}.",
        )

    def health_check(self) -> HealthCheck:
        """GET the test endpoint and return its raw body."""
        try:
            with self._client() as client:
                response = client.get(self._test_path)
        except httpx.HTTPError as exc:
            logger.debug("Health check failed: %s", exc)
            return HealthCheck(ok=False, error=_error_text(exc))

        if response.status_code == 200:
            return HealthCheck(ok=True, status_code=200, body=response.text)
        return HealthCheck(
            ok=False,
            status_code=response.status_code,
            error=f"Error: {response.status_code}",
        )


def _success_flag(response: httpx.Response) -> bool:
    """True only for a JSON object whose ``success`` field is literally true."""
    try:
        payload = response.json()
    except ValueError:
        return False
    return isinstance(payload, dict) and payload.get("success") is True


def _error_text(exc: Exception) -> str:
    return str(exc) or type(exc).__name__


def _invalid_credentials() -> AuthOutcome:
    return AuthOutcome.failure(
        AuthFailure.INVALID_CREDENTIALS,
        "Login failed. Invalid username or password.",
    )

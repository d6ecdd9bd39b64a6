"""AuthService: login, sign-up, logout, whoami, and backend health.

Remote calls go through :class:`AuthClient`; on success the identity is
handed to :class:`SessionManager`.  Persisting is the only side effect.
"""

from __future__ import annotations

import logging

from rescli.domain.outcomes import AuthOutcome
from rescli.domain.types import AuthFailure
from rescli.infrastructure.auth_client import AuthClient
from rescli.services.result import ServiceResult, failure
from rescli.services.session import SessionManager

logger = logging.getLogger(__name__)

# AuthFailure -> ServiceError.code
_FAILURE_CODES: dict[AuthFailure, str] = {
    AuthFailure.INVALID_CREDENTIALS: "INVALID_CREDENTIALS",
    AuthFailure.CONFLICT: "CONFLICT",
    AuthFailure.SERVER_ERROR: "SERVER_ERROR",
    AuthFailure.TRANSPORT_ERROR: "TRANSPORT_ERROR",
}


class AuthService:
    """Account operations for the CLI."""

    def __init__(self, client: AuthClient, session: SessionManager) -> None:
        self._client = client
        self._session = session

    def _apply(self, op: str, outcome: AuthOutcome) -> ServiceResult:
        if not outcome.ok or outcome.identity is None:
            reason = outcome.reason or AuthFailure.SERVER_ERROR
            logger.debug("%s failed: %s", op, reason)
            return failure(op, _FAILURE_CODES[reason], outcome.message, reason=str(reason))

        self._session.set_identity(outcome.identity)
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "identity": outcome.identity,
                "user": self._session.display_name(),
                "message": outcome.message,
            },
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def login(self, username: str, password: str) -> ServiceResult:
        """Authenticate and remember *username* as the current user."""
        return self._apply("login", self._client.login(username, password))

    def sign_up(self, email: str, password: str) -> ServiceResult:
        """Register *email* and log in as it."""
        return self._apply("sign_up", self._client.sign_up(email, password))

    def logout(self) -> ServiceResult:
        """Forget the current user.  Logging out twice is not an error."""
        was_logged_in = self._session.is_logged_in
        self._session.clear_identity()
        return ServiceResult(
            ok=True,
            op="logout",
            data={
                "was_logged_in": was_logged_in,
                "message": "Logout successful. Goodbye!",
            },
        )

    def whoami(self) -> ServiceResult:
        op = "whoami"
        identity = self._session.current_identity()
        if identity is None:
            return failure(op, "NOT_LOGGED_IN", "No user is logged in. Run 'rescli login' first.")
        user = self._session.display_name()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "user": user,
                "identity": identity,
                "message": f"Current logged-in user: {user}",
            },
        )

    def health_check(self) -> ServiceResult:
        """Call the backend test endpoint."""
        op = "health_check"
        check = self._client.health_check()
        if check.ok:
            return ServiceResult(
                ok=True,
                op=op,
                data={"status_code": check.status_code, "body": check.body},
            )
        if check.status_code is None:
            return failure(op, "TRANSPORT_ERROR", f"HTTP error: {check.error}")
        return failure(
            op,
            "HTTP_ERROR",
            check.error or f"Error: {check.status_code}",
            status_code=check.status_code,
        )

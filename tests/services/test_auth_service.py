"""Tests for AuthService: outcome to ServiceResult and session updates."""

from __future__ import annotations

import httpx
import pytest

from rescli.infrastructure.auth_client import AuthClient
from rescli.services.auth import AuthService
from rescli.services.session import SessionManager


def _service(session: SessionManager, status: int, **kwargs: object) -> AuthService:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, **kwargs)  # type: ignore[arg-type]

    client = AuthClient("https://auth.test", transport=httpx.MockTransport(handler))
    return AuthService(client, session)


def _refusing_service(session: SessionManager) -> AuthService:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    client = AuthClient("https://auth.test", transport=httpx.MockTransport(handler))
    return AuthService(client, session)


class TestLogin:
    def test_success_persists_identity(self, session: SessionManager) -> None:
        result = _service(session, 200, json={"success": True}).login("bob@example.com", "pw")
        assert result.ok
        assert result.op == "login"
        assert result.data["user"] == "bob"
        assert session.current_identity() == "bob@example.com"

    def test_invalid_credentials_leaves_session(self, session: SessionManager) -> None:
        session.set_identity("alice@example.com")
        result = _service(session, 200, json={"success": False}).login("bob@example.com", "pw")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_CREDENTIALS"
        assert session.current_identity() == "alice@example.com"

    def test_server_error(self, session: SessionManager) -> None:
        result = _service(session, 500).login("bob@example.com", "pw")
        assert result.error is not None
        assert result.error.code == "SERVER_ERROR"
        assert session.current_identity() is None

    def test_transport_error(self, session: SessionManager) -> None:
        result = _refusing_service(session).login("bob@example.com", "pw")
        assert result.error is not None
        assert result.error.code == "TRANSPORT_ERROR"
        assert result.error.detail == {"reason": "transport_error"}


class TestSignUp:
    def test_success_logs_in(self, session: SessionManager) -> None:
        result = _service(session, 200).sign_up("new@example.com", "pw")
        assert result.ok
        assert result.data["message"] == "Sign up successful. Welcome, new@example.com!"
        assert session.display_name() == "new"

    @pytest.mark.parametrize(("status", "code"), [(409, "CONFLICT"), (500, "SERVER_ERROR")])
    def test_failures(self, session: SessionManager, status: int, code: str) -> None:
        result = _service(session, status).sign_up("new@example.com", "pw")
        assert result.error is not None
        assert result.error.code == code
        assert "new@example.com" in result.error.message
        assert session.current_identity() is None

    def test_transport_error(self, session: SessionManager) -> None:
        result = _refusing_service(session).sign_up("new@example.com", "pw")
        assert result.error is not None
        assert result.error.code == "TRANSPORT_ERROR"
        assert "Connection refused" in result.error.message


class TestLogoutWhoami:
    def test_logout(self, session: SessionManager) -> None:
        session.set_identity("alice@example.com")
        result = _service(session, 200).logout()
        assert result.ok
        assert result.data["was_logged_in"] is True
        assert result.data["message"] == "Logout successful. Goodbye!"
        assert session.current_identity() is None

    def test_logout_twice(self, session: SessionManager) -> None:
        result = _service(session, 200).logout()
        assert result.ok
        assert result.data["was_logged_in"] is False

    def test_whoami(self, session: SessionManager) -> None:
        session.set_identity("alice@example.com")
        result = _service(session, 200).whoami()
        assert result.ok
        assert result.data["user"] == "alice"
        assert result.data["message"] == "Current logged-in user: alice"

    def test_whoami_logged_out(self, session: SessionManager) -> None:
        result = _service(session, 200).whoami()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_LOGGED_IN"


class TestHealthCheck:
    def test_ok(self, session: SessionManager) -> None:
        result = _service(session, 200, text="alive").health_check()
        assert result.ok
        assert result.data == {"status_code": 200, "body": "alive"}

    def test_http_error(self, session: SessionManager) -> None:
        result = _service(session, 404).health_check()
        assert result.error is not None
        assert result.error.code == "HTTP_ERROR"
        assert result.error.message == "Error: 404"
        assert result.error.detail["status_code"] == 404

    def test_transport_error(self, session: SessionManager) -> None:
        result = _refusing_service(session).health_check()
        assert result.error is not None
        assert result.error.code == "TRANSPORT_ERROR"
        assert "Connection refused" in result.error.message

"""Outcome models for remote calls.

These are consumed immediately by the service layer and never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel

from rescli.domain.types import AuthFailure


class AuthOutcome(BaseModel):
    """Result of a login or sign-up call.

    Attributes:
        ok: Whether the backend accepted the credentials.
        identity: The identity to persist on success.
        reason: Failure classification when ``ok`` is False.
        message: Human-readable summary for the terminal.
    """

    model_config = {"frozen": True}

    ok: bool
    identity: str | None = None
    reason: AuthFailure | None = None
    message: str = ""

    @classmethod
    def success(cls, identity: str, message: str) -> AuthOutcome:
        return cls(ok=True, identity=identity, message=message)

    @classmethod
    def failure(cls, reason: AuthFailure, message: str) -> AuthOutcome:
        return cls(ok=False, reason=reason, message=message)


class HealthCheck(BaseModel):
    """Result of a GET against the backend test endpoint."""

    model_config = {"frozen": True}

    ok: bool
    status_code: int | None = None
    body: str = ""
    error: str | None = None

"""ServiceResult and ServiceError, the contract between services and the CLI.

Every service operation returns a ServiceResult.  The CLI formats it and
picks the exit code from ``ok``; nothing below the command layer prints.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class ServiceError(BaseModel):
    """Structured error payload within a ServiceResult.

    ``code`` is a stable upper-snake identifier (``TRANSPORT_ERROR``,
    ``STOP_FAILED``...); ``message`` is what the user reads.
    """

    model_config = {"frozen": True}

    code: str
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ServiceResult(BaseModel):
    """Return type for all service operations.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"instance_create"``).
        data: Operation-specific payload on success.
        warnings: Non-fatal issues encountered during the operation.
        error: Structured error if ``ok`` is False.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None


def failure(op: str, code: str, message: str, **detail: Any) -> ServiceResult:
    """Shorthand for a failed ServiceResult."""
    return ServiceResult(
        ok=False,
        op=op,
        error=ServiceError(code=code, message=message, detail=detail),
    )

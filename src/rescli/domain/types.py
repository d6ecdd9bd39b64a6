"""Instance types and auth failure reasons."""

from __future__ import annotations

from enum import StrEnum


class InstanceType(StrEnum):
    """Images the CLI knows how to launch."""

    RESDB = "resdb"
    SDK = "sdk"


class AuthFailure(StrEnum):
    """Why a remote auth call did not succeed."""

    INVALID_CREDENTIALS = "invalid_credentials"
    CONFLICT = "conflict"
    SERVER_ERROR = "server_error"
    TRANSPORT_ERROR = "transport_error"

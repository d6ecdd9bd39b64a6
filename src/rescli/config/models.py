"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, rescli.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel

DEFAULT_LIST_FORMAT = "table {{.ID}}\t{{.Image}}\t{{.Names}}"


class ApiConfig(BaseModel):
    """[api] section."""

    model_config = {"frozen": True}

    base_url: str = "https://server.resilientdb.com"
    login_path: str = "/getUser"
    signup_path: str = "/setUser"
    test_path: str = "/test"
    # None blocks until the server answers.
    timeout: float | None = None


class RuntimeConfig(BaseModel):
    """[runtime] section."""

    model_config = {"frozen": True}

    binary: str = "docker"
    image_repo: str = "expolab"
    arch_tag: str = "arm64"
    list_format: str = DEFAULT_LIST_FORMAT


class StateConfig(BaseModel):
    """[state] section: where the logged-in identity is persisted."""

    model_config = {"frozen": True}

    path: str = "config.ini"
    section: str = "User"
    key: str = "Current_User"

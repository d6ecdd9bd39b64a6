"""Unified settings: CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  (CLI flags passed by Click)
  2. Env vars     (``RESCLI_*`` prefix)
  3. TOML file    (``--config``, ``RESCLI_CONFIG``, or the nearest ``rescli.toml``)
  4. Code defaults baked into the section models
"""

from __future__ import annotations

import os
import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from rescli.config.models import ApiConfig, RuntimeConfig, StateConfig

CONFIG_FILENAME = "rescli.toml"
CONFIG_ENV_VAR = "RESCLI_CONFIG"


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``rescli.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class ResSettings(BaseSettings):
    """Unified settings for the rescli CLI.

    Stored on the :class:`~rescli.commands._context.AppContext` created by
    the root command group.

    Attributes:
        work_dir: Directory that relative state paths resolve against.
        config_path: The TOML file that was loaded, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "RESCLI_",
        "env_nested_delimiter": "__",
    }

    work_dir: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    api: ApiConfig = Field(default_factory=ApiConfig)
    runtime: RuntimeConfig = Field(default_factory=RuntimeConfig)
    state: StateConfig = Field(default_factory=StateConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @property
    def state_path(self) -> Path:
        """Absolute path of the INI file holding the session.

        A relative ``[state] path`` is anchored at the directory of the
        loaded ``rescli.toml``, or at *work_dir* when no file was loaded.
        """
        path = Path(self.state.path).expanduser()
        if not path.is_absolute():
            anchor = self.config_path.parent if self.config_path else self.work_dir
            path = anchor / path
        return path

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        work_dir: Path | None = None,
        **cli_flags: Any,
    ) -> ResSettings:
        """Construct settings from a CLI invocation.

        Uses the explicit *config_path* when given, otherwise
        :func:`locate_config` from *work_dir*.
        """
        work_dir = work_dir or Path.cwd()
        toml_path = locate_config(work_dir, config_path)

        _tls.toml_path = toml_path
        try:
            return cls(
                work_dir=work_dir,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None


def locate_config(work_dir: Path, explicit: str | None = None) -> Path | None:
    """Pick the ``rescli.toml`` for one invocation.

    ``--config`` beats ``RESCLI_CONFIG``; a path named either way must exist.
    Otherwise the nearest ``rescli.toml`` at or above *work_dir* wins, and
    None means code defaults only.
    """
    overrides = ((explicit, "--config"), (os.environ.get(CONFIG_ENV_VAR), CONFIG_ENV_VAR))
    for raw, origin in overrides:
        if raw:
            path = Path(raw).expanduser().absolute()
            if not path.is_file():
                raise click.ClickException(f"Config file not found: {path} (from {origin})")
            return path

    directory = work_dir.resolve()
    for candidate_dir in (directory, *directory.parents):
        candidate = candidate_dir / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None

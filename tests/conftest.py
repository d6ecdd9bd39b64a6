"""Shared pytest fixtures and test helpers for rescli tests."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

import pytest
import structlog
from click.testing import CliRunner

from rescli.infrastructure.config_store import ConfigStore
from rescli.infrastructure.runtime import CommandRun
from rescli.services.session import SessionManager


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def _restore_logging() -> Iterator[None]:
    """Undo configure_logging() so handlers never outlive CliRunner streams."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    res = logging.getLogger("rescli")
    res_level = res.level
    yield
    structlog.contextvars.clear_contextvars()
    root.handlers = original_handlers
    root.setLevel(original_level)
    res.setLevel(res_level)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's RESCLI_* environment out of the tests."""
    for name in list(os.environ):
        if name.startswith("RESCLI_"):
            monkeypatch.delenv(name)


@pytest.fixture
def _isolated_workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run the CLI from a temp directory so config.ini lands there.

    Use via ``@pytest.mark.usefixtures("_isolated_workdir")``.
    """
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def store(tmp_path: Path) -> ConfigStore:
    return ConfigStore(tmp_path / "config.ini")


@pytest.fixture
def session(store: ConfigStore) -> SessionManager:
    return SessionManager(store)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class FakeRunner:
    """Stand-in for ProcessRunner that records argv and replays scripted results.

    ``results`` maps the first runtime argument (``run``, ``stop``...) to the
    ``(output, returncode)`` pair to return; unlisted commands succeed.
    """

    binary = "docker"

    def __init__(self, results: dict[str, tuple[str, int]] | None = None) -> None:
        self.results = results or {}
        self.calls: list[tuple[str, ...]] = []
        self.interactive_calls: list[tuple[str, ...]] = []

    def _result(self, args: Sequence[str]) -> CommandRun:
        output, code = self.results.get(args[0], ("", 0))
        return CommandRun(args=(self.binary, *args), output=output, returncode=code)

    def run_capturing(self, args: Sequence[str]) -> CommandRun:
        self.calls.append(tuple(args))
        return self._result(args)

    def run_interactive(self, args: Sequence[str]) -> CommandRun:
        self.interactive_calls.append(tuple(args))
        _, code = self.results.get(args[0], ("", 0))
        return CommandRun(args=(self.binary, *args), returncode=code)


def write_state(directory: Path, identity: str) -> Path:
    """Write a config.ini with ``[User] Current_User`` set to *identity*."""
    path = directory / "config.ini"
    path.write_text(f"[User]\nCurrent_User = {identity}\n", encoding="utf-8")
    return path

"""Tests for SessionManager identity persistence."""

from __future__ import annotations

from pathlib import Path

import pytest

from rescli.infrastructure.config_store import ConfigStore
from rescli.services.session import SessionManager
from tests.conftest import write_state


class TestIdentity:
    def test_no_prior_identity(self, session: SessionManager) -> None:
        assert session.current_identity() is None
        assert session.display_name() == ""
        assert session.is_logged_in is False

    def test_set_then_display_name(self, session: SessionManager) -> None:
        session.set_identity("bob@example.com")
        assert session.current_identity() == "bob@example.com"
        assert session.display_name() == "bob"
        assert session.is_logged_in is True

    @pytest.mark.parametrize(
        ("identity", "name"),
        [("local@domain", "local"), ("x.y@z.w", "x.y"), ("noat", "noat")],
    )
    def test_display_name(self, session: SessionManager, identity: str, name: str) -> None:
        session.set_identity(identity)
        assert session.display_name() == name

    def test_set_overwrites(self, session: SessionManager) -> None:
        session.set_identity("alice@example.com")
        session.set_identity("bob@example.com")
        assert session.current_identity() == "bob@example.com"

    def test_clear(self, session: SessionManager) -> None:
        session.set_identity("alice@example.com")
        session.clear_identity()
        assert session.current_identity() is None
        assert session.display_name() == ""

    def test_clear_when_logged_out(self, session: SessionManager) -> None:
        session.clear_identity()
        assert session.current_identity() is None

    def test_empty_value_is_absent(self, tmp_path: Path) -> None:
        write_state(tmp_path, "")
        session = SessionManager(ConfigStore(tmp_path / "config.ini"))
        assert session.current_identity() is None

    def test_persists_across_instances(self, tmp_path: Path) -> None:
        path = tmp_path / "config.ini"
        SessionManager(ConfigStore(path)).set_identity("carol@example.com")
        assert SessionManager(ConfigStore(path)).display_name() == "carol"

    def test_reads_legacy_file(self, tmp_path: Path) -> None:
        write_state(tmp_path, "dave@example.com")
        session = SessionManager(ConfigStore(tmp_path / "config.ini"))
        assert session.display_name() == "dave"

    def test_custom_section_and_key(self, store: ConfigStore) -> None:
        session = SessionManager(store, section="Auth", key="Identity")
        session.set_identity("eve@example.com")
        assert store.get("Auth", "Identity") == "eve@example.com"
        assert store.get("User", "Current_User") is None

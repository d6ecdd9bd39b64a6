"""Tests for structlog configuration."""

from __future__ import annotations

import json
import logging

import pytest
import structlog

from rescli.config.logging import configure_logging


class TestConfigureLogging:
    def test_verbose_enables_debug(self) -> None:
        configure_logging(verbose=True, log_json=False)
        assert logging.getLogger("rescli").level == logging.DEBUG
        assert logging.getLogger().level == logging.WARNING

    def test_non_verbose_sets_warning(self) -> None:
        configure_logging(verbose=False, log_json=False)
        assert logging.getLogger("rescli").level == logging.WARNING

    def test_json_mode_output(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        log = structlog.get_logger("rescli.test")
        log.warning("json test", answer=42)
        captured = capfd.readouterr()
        parsed = json.loads(captured.err.strip())
        assert parsed["event"] == "json test"
        assert parsed["answer"] == 42
        assert parsed["level"] == "warning"
        assert parsed["logger"] == "rescli.test"
        assert "timestamp" in parsed

    def test_stdlib_logger_gets_structured_fields(
        self, capfd: pytest.CaptureFixture[str]
    ) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("rescli.infrastructure.runtime").debug("Running docker ps")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["event"] == "Running docker ps"
        assert parsed["level"] == "debug"

    def test_httpx_info_is_suppressed(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("httpx").info("HTTP Request: POST https://example")
        assert capfd.readouterr().err == ""

    def test_verbose_binds_context(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(
            verbose=True, log_json=True, context={"runtime": "podman", "state_file": "/x.ini"}
        )
        logging.getLogger("rescli.infrastructure.runtime").debug("Running podman ps")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert parsed["runtime"] == "podman"
        assert parsed["state_file"] == "/x.ini"

    def test_context_ignored_without_verbose(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=False, log_json=True, context={"runtime": "podman"})
        logging.getLogger("rescli.services").warning("careful")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert "runtime" not in parsed

    def test_reconfigure_clears_context(self, capfd: pytest.CaptureFixture[str]) -> None:
        configure_logging(verbose=True, log_json=True, context={"runtime": "podman"})
        configure_logging(verbose=True, log_json=True)
        logging.getLogger("rescli.services").warning("again")
        parsed = json.loads(capfd.readouterr().err.strip())
        assert "runtime" not in parsed

    def test_idempotent_calls(self) -> None:
        configure_logging(verbose=False)
        configure_logging(verbose=True)
        assert len(logging.getLogger().handlers) == 1

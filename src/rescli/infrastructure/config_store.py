"""INI-backed key-value store for persisted CLI state.

The file holds a handful of scalars (today only ``[User] Current_User``).
Every ``set`` rewrites the whole file through a temp file + ``os.replace``
so a crash mid-write never leaves a truncated config behind.  Concurrent
invocations are not coordinated: last writer wins.
"""

from __future__ import annotations

import configparser
import logging
import os
import tempfile
from pathlib import Path

logger = logging.getLogger(__name__)


class ConfigIOError(OSError):
    """The state file could not be read or written."""


class ConfigFormatError(ValueError):
    """The state file exists but is not valid UTF-8 INI."""


class ConfigStore:
    """Read and write single values in an INI file.

    The file is created empty on first use.  Keys keep their case so
    ``Current_User`` round-trips exactly.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def get(self, section: str, key: str) -> str | None:
        """Return the stored value, or None when the section or key is absent."""
        parser = self._load()
        if not parser.has_option(section, key):
            return None
        return parser.get(section, key)

    def set(self, section: str, key: str, value: str | None) -> None:
        """Persist *value* under ``[section] key``.

        ``None`` removes the key.  The write is flushed and fsynced before
        this returns.
        """
        parser = self._load()
        if value is None:
            if parser.has_section(section):
                parser.remove_option(section, key)
        else:
            if not parser.has_section(section):
                parser.add_section(section)
            parser.set(section, key, value)
        self._write(parser)
        logger.debug("Wrote [%s] %s to %s", section, key, self._path)

    # ------------------------------------------------------------------
    # File I/O
    # ------------------------------------------------------------------

    def _new_parser(self) -> configparser.ConfigParser:
        # Identities may contain '%', so interpolation stays off.
        parser = configparser.ConfigParser(interpolation=None)
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        return parser

    def _load(self) -> configparser.ConfigParser:
        parser = self._new_parser()
        if not self._path.exists():
            self._initialize()
            return parser
        try:
            raw = self._path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            msg = f"Malformed config file {self._path}: not valid UTF-8 ({exc.reason})"
            raise ConfigFormatError(msg) from exc
        except OSError as exc:
            msg = f"Cannot read config file {self._path}: {exc.strerror or exc}"
            raise ConfigIOError(msg) from exc
        try:
            parser.read_string(raw, source=str(self._path))
        except configparser.Error as exc:
            msg = f"Malformed config file {self._path}: {exc}"
            raise ConfigFormatError(msg) from exc
        return parser

    def _initialize(self) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.touch()
        except OSError as exc:
            msg = f"Cannot create config file {self._path}: {exc.strerror or exc}"
            raise ConfigIOError(msg) from exc
        logger.debug("Initialized empty config file at %s", self._path)

    def _write(self, parser: configparser.ConfigParser) -> None:
        tmp_name: str | None = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=self._path.parent, prefix=f".{self._path.name}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                parser.write(fh)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_name, self._path)
            tmp_name = None
        except OSError as exc:
            msg = f"Cannot write config file {self._path}: {exc.strerror or exc}"
            raise ConfigIOError(msg) from exc
        finally:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)

"""Container runtime subprocess wrapper.

Two invocation styles:

* ``run_capturing``: stdout and stderr merged into one captured string,
  used by create / list / stop / rm.  Bytes that are not UTF-8 decode to
  U+FFFD instead of raising.
* ``run_interactive``: stdio inherited from the terminal, used by
  ``exec -it`` so the user gets a live shell.

Neither raises on a non-zero exit or a missing binary; both return a
:class:`CommandRun` the service layer classifies.
"""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandRun:
    """Outcome of one runtime invocation."""

    args: tuple[str, ...]
    output: str = ""
    returncode: int | None = None
    spawn_error: str | None = None

    @property
    def ok(self) -> bool:
        return self.spawn_error is None and self.returncode == 0

    @property
    def diagnostic(self) -> str:
        """Text explaining a failure: spawn error, else captured output."""
        if self.spawn_error is not None:
            return self.spawn_error
        text = self.output.strip()
        if text:
            return text
        return f"{' '.join(self.args)} exited with status {self.returncode}"


class ProcessRunner:
    """Invoke the runtime binary (``docker`` by default) as a child process."""

    def __init__(self, binary: str = "docker") -> None:
        self._binary = binary

    @property
    def binary(self) -> str:
        return self._binary

    def run_capturing(self, args: Sequence[str]) -> CommandRun:
        """Run and wait, capturing combined stdout+stderr."""
        argv = (self._binary, *args)
        logger.debug("Running %s", " ".join(argv))
        try:
            proc = subprocess.run(
                list(argv),
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            logger.debug("Failed to spawn %s: %s", self._binary, exc)
            return CommandRun(args=argv, spawn_error=f"Cannot run {self._binary}: {exc}")
        logger.debug("%s exited with %s", argv[1] if len(argv) > 1 else argv[0], proc.returncode)
        return CommandRun(args=argv, output=proc.stdout or "", returncode=proc.returncode)

    def run_interactive(self, args: Sequence[str]) -> CommandRun:
        """Run attached to the invoking terminal and wait for the child to exit."""
        argv = (self._binary, *args)
        logger.debug("Running interactively %s", " ".join(argv))
        try:
            proc = subprocess.run(list(argv), check=False)
        except OSError as exc:
            logger.debug("Failed to spawn %s: %s", self._binary, exc)
            return CommandRun(args=argv, spawn_error=f"Cannot run {self._binary}: {exc}")
        logger.debug("Interactive session exited with %s", proc.returncode)
        return CommandRun(args=argv, returncode=proc.returncode)

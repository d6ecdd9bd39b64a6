"""InstanceService: container lifecycle on top of the runtime CLI.

No local record of instances is kept.  Names are derived from the
logged-in user at creation time, and listing always asks the runtime.
"""

from __future__ import annotations

import logging

from rescli.config.models import RuntimeConfig
from rescli.domain.identity import container_name, image_ref
from rescli.domain.types import InstanceType
from rescli.infrastructure.runtime import CommandRun, ProcessRunner
from rescli.services.result import ServiceResult, failure
from rescli.services.session import SessionManager

logger = logging.getLogger(__name__)

_RUNTIME_EXEC_STATUSES = frozenset({125, 126, 127})


def _runtime_failure(op: str, code: str, prefix: str, run: CommandRun) -> ServiceResult:
    return failure(
        op,
        code,
        f"{prefix}: {run.diagnostic}",
        args=list(run.args),
        exit_status=run.returncode,
    )


class InstanceService:
    """Create, list, exec into, and delete runtime instances."""

    def __init__(
        self,
        runner: ProcessRunner,
        session: SessionManager,
        config: RuntimeConfig | None = None,
    ) -> None:
        self._runner = runner
        self._session = session
        self._config = config or RuntimeConfig()

    def create(self, instance_type: str) -> ServiceResult:
        """Launch a detached instance named ``{user}-{type}_instance``."""
        op = "instance_create"
        try:
            kind = InstanceType(instance_type)
        except ValueError:
            choices = ", ".join(t.value for t in InstanceType)
            return failure(
                op, "UNKNOWN_TYPE", f"Unknown instance type {instance_type!r} (expected {choices})"
            )

        warnings: list[str] = []
        owner = self._session.display_name()
        if not owner:
            warnings.append("No user logged in; the container name has no owner prefix")

        name = container_name(owner, kind)
        image = image_ref(self._config.image_repo, kind, self._config.arch_tag)
        logger.debug("Creating %s instance %s from %s", kind, name, image)

        run = self._runner.run_capturing(["run", "--name", name, "-d", image])
        if not run.ok:
            return _runtime_failure(
                op, "RUNTIME_INVOCATION_FAILED", "Error creating instance", run
            )

        container_id = run.output.strip().splitlines()[-1] if run.output.strip() else ""
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "type": kind.value,
                "container_name": name,
                "container_id": container_id,
                "image": image,
            },
            warnings=warnings,
        )

    def list(self) -> ServiceResult:
        """Running instances, as the runtime's own table."""
        op = "instance_list"
        run = self._runner.run_capturing(
            ["container", "ls", "--format", self._config.list_format]
        )
        if not run.ok:
            return _runtime_failure(
                op, "RUNTIME_INVOCATION_FAILED", "Error running runtime command", run
            )
        return ServiceResult(ok=True, op=op, data={"output": run.output.rstrip("\n")})

    def delete(self, instance_id: str) -> ServiceResult:
        """Stop then remove *instance_id*.

        Fails fast: when ``stop`` fails, ``rm`` is never attempted.
        """
        op = "instance_delete"
        stop = self._runner.run_capturing(["stop", instance_id])
        if not stop.ok:
            return _runtime_failure(op, "STOP_FAILED", "Error stopping instance", stop)

        rm = self._runner.run_capturing(["rm", instance_id])
        if not rm.ok:
            return _runtime_failure(op, "REMOVE_FAILED", "Error removing instance", rm)

        return ServiceResult(
            ok=True,
            op=op,
            data={"instance_id": instance_id, "stopped": True, "removed": True},
        )

    def exec_into(self, instance_id: str) -> ServiceResult:
        """Open an interactive bash shell inside *instance_id*.

        Docker reserves 125-127 for its own failures (daemon error, command
        not runnable, command not found); any other non-zero status is
        whatever the shell's last command returned.
        """
        op = "instance_exec"
        run = self._runner.run_interactive(["exec", "-it", instance_id, "bash"])
        if run.spawn_error is not None or run.returncode in _RUNTIME_EXEC_STATUSES:
            return _runtime_failure(
                op, "RUNTIME_INVOCATION_FAILED", "Error executing command", run
            )
        if run.returncode != 0:
            return failure(
                op,
                "SHELL_EXIT_STATUS",
                f"Shell in {instance_id} exited with status {run.returncode}",
                instance_id=instance_id,
                exit_status=run.returncode,
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"instance_id": instance_id, "exit_status": run.returncode},
        )

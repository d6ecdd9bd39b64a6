"""AppContext: shared Click context for all commands.

Created once by the root CLI group and passed to commands via
``@click.pass_obj``.  Collaborators are built lazily so ``--help`` and
``--version`` never touch the state file or the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rescli.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from rescli.config.settings import ResSettings
    from rescli.services.auth import AuthService
    from rescli.services.instance import InstanceService
    from rescli.services.result import ServiceResult
    from rescli.services.session import SessionManager


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: ResSettings) -> None:
        self.settings = settings
        self._session: SessionManager | None = None

        from rescli.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            log_json=settings.log_json,
            context={
                "runtime": settings.runtime.binary,
                "state_file": str(settings.state_path),
                "api": settings.api.base_url,
            },
        )

    @property
    def session(self) -> SessionManager:
        """Session bound to the configured state file (created lazily)."""
        if self._session is None:
            from rescli.infrastructure.config_store import ConfigStore
            from rescli.services.session import SessionManager

            state = self.settings.state
            self._session = SessionManager(
                ConfigStore(self.settings.state_path),
                section=state.section,
                key=state.key,
            )
        return self._session

    def auth_service(self) -> AuthService:
        from rescli.infrastructure.auth_client import AuthClient
        from rescli.services.auth import AuthService

        api = self.settings.api
        client = AuthClient(
            api.base_url,
            login_path=api.login_path,
            signup_path=api.signup_path,
            test_path=api.test_path,
            timeout=api.timeout,
        )
        return AuthService(client, self.session)

    def instance_service(self) -> InstanceService:
        from rescli.infrastructure.runtime import ProcessRunner
        from rescli.services.instance import InstanceService

        runtime = self.settings.runtime
        return InstanceService(ProcessRunner(runtime.binary), self.session, runtime)

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            if output:
                click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

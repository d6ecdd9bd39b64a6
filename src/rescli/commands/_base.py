"""Custom Click base classes with --examples support.

When ``--examples`` is passed, the command prints usage examples and exits.
This keeps ``--help`` concise while making examples available on demand.
"""

from __future__ import annotations

from typing import Any

import click


def _add_examples_option(cmd: click.Command, examples: str) -> None:
    """Attach an eager ``--examples`` flag to a Click command or group."""

    def show_examples(ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(examples)
        ctx.exit(0)

    cmd.params.append(
        click.Option(
            ["--examples"],
            is_flag=True,
            expose_value=False,
            is_eager=True,
            callback=show_examples,
            help="Show usage examples.",
        )
    )


class ResCommand(click.Command):
    """Click Command subclass that supports an ``--examples`` flag."""

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)


class ResGroup(click.Group):
    """Click Group whose subcommands accept ``examples`` and report state errors.

    Errors reading or writing the local state file are converted to a
    ``ClickException`` so they print a clear message and exit 1 instead of
    a traceback.
    """

    command_class = ResCommand

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            _add_examples_option(self, examples)

    def invoke(self, ctx: click.Context) -> Any:
        from rescli.infrastructure.config_store import ConfigFormatError, ConfigIOError

        try:
            return super().invoke(ctx)
        except (ConfigIOError, ConfigFormatError) as exc:
            raise click.ClickException(str(exc)) from exc

"""Subcommand modules for rescli.

Provides register_commands() which uses deferred imports to keep
``rescli --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register every standalone command on the root CLI group."""
    # --- Instances ---
    from rescli.commands.instance import create, delete, exec_into, view_instances

    cli.add_command(create)
    cli.add_command(exec_into)
    cli.add_command(view_instances)
    cli.add_command(delete)

    # --- Account ---
    from rescli.commands.auth import login, logout, sign_up, test_api, whoami

    cli.add_command(test_api)
    cli.add_command(login)
    cli.add_command(sign_up)
    cli.add_command(whoami)
    cli.add_command(logout)

"""Account commands: login, sign-up, logout, whoami, test-api."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rescli.commands._base import ResCommand

if TYPE_CHECKING:
    from rescli.commands._context import AppContext


@click.command(
    cls=ResCommand,
    examples="""\
  rescli login
  rescli login --email alice@example.com""",
)
@click.option("--email", "username", prompt="Enter your username", help="Account email.")
@click.option(
    "--password",
    prompt="Enter your password",
    hide_input=True,
    help="Account password (prompted without echo when omitted).",
)
@click.pass_obj
def login(app: AppContext, username: str, password: str) -> None:
    """Login with username and password."""
    app.emit(app.auth_service().login(username, password))


@click.command(
    "sign-up",
    cls=ResCommand,
    examples="""\
  rescli sign-up
  rescli sign-up --email alice@example.com""",
)
@click.option("--email", prompt="Enter your email", help="Email to register.")
@click.option(
    "--password",
    prompt="Enter your password",
    hide_input=True,
    confirmation_prompt=True,
    help="Password for the new account (prompted without echo when omitted).",
)
@click.pass_obj
def sign_up(app: AppContext, email: str, password: str) -> None:
    """Sign up with email and password."""
    app.emit(app.auth_service().sign_up(email, password))


@click.command(cls=ResCommand)
@click.pass_obj
def logout(app: AppContext) -> None:
    """Logout."""
    app.emit(app.auth_service().logout())


@click.command(cls=ResCommand)
@click.pass_obj
def whoami(app: AppContext) -> None:
    """Display the current logged-in user."""
    app.emit(app.auth_service().whoami())


@click.command(
    "test-api",
    cls=ResCommand,
    examples="""\
  rescli test-api
  RESCLI_API__BASE_URL=http://localhost:8000 rescli test-api""",
)
@click.pass_obj
def test_api(app: AppContext) -> None:
    """Test API."""
    app.emit(app.auth_service().health_check())

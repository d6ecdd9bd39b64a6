"""Instance commands: create, exec-into, view-instances, delete."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from rescli.commands._base import ResCommand
from rescli.domain.types import InstanceType

if TYPE_CHECKING:
    from rescli.commands._context import AppContext


@click.command(
    cls=ResCommand,
    examples="""\
  rescli create resdb
  rescli create sdk
  rescli --json create resdb""",
)
@click.argument(
    "instance_type",
    metavar="TYPE",
    type=click.Choice([t.value for t in InstanceType]),
)
@click.pass_obj
def create(app: AppContext, instance_type: str) -> None:
    """Create a new ResDB (resdb) or PythonSDK (sdk) instance."""
    app.emit(app.instance_service().create(instance_type))


@click.command(
    "exec-into",
    cls=ResCommand,
    examples="""\
  rescli exec-into 3f2a9c1b7d4e
  rescli exec-into alice-resdb_instance""",
)
@click.argument("instance_id")
@click.pass_obj
def exec_into(app: AppContext, instance_id: str) -> None:
    """Bash into a running ResDB or PythonSDK instance."""
    app.emit(app.instance_service().exec_into(instance_id))


@click.command(
    "view-instances",
    cls=ResCommand,
    examples="""\
  rescli view-instances
  rescli --json view-instances""",
)
@click.pass_obj
def view_instances(app: AppContext) -> None:
    """View details about running instances."""
    app.emit(app.instance_service().list())


@click.command(
    cls=ResCommand,
    examples="""\
  rescli delete 3f2a9c1b7d4e
  rescli delete alice-sdk_instance""",
)
@click.argument("instance_id")
@click.pass_obj
def delete(app: AppContext, instance_id: str) -> None:
    """Delete a running ResDB or PythonSDK instance (stop, then remove)."""
    app.emit(app.instance_service().delete(instance_id))

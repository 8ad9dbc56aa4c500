"""Command group: authenticated orgs."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sfmcp.commands._base import SfGroup
from sfmcp.services.org import OrgService

if TYPE_CHECKING:
    from sfmcp.commands._context import AppContext


@click.group(
    cls=SfGroup,
    examples="""\
  sfmcp org list
  sfmcp org display dev
  sfmcp --json org limits dev""",
)
@click.pass_obj
def org(app: AppContext) -> None:
    """Inspect authenticated orgs."""


@org.command("list")
@click.pass_obj
def list_cmd(app: AppContext) -> None:
    """List orgs the CLI is authenticated with."""
    app.emit(OrgService(app.project).list_orgs())


@org.command()
@click.argument("target_org")
@click.pass_obj
def display(app: AppContext, target_org: str) -> None:
    """Show details of one org."""
    app.emit(OrgService(app.project).display(target_org))


@org.command()
@click.argument("target_org")
@click.pass_obj
def limits(app: AppContext, target_org: str) -> None:
    """Show API and storage limits of one org."""
    app.emit(OrgService(app.project).limits(target_org))

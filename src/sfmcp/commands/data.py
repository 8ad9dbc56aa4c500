"""Command group: SOQL queries and record CRUD."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sfmcp.commands._base import SfGroup
from sfmcp.services.data import DataService

if TYPE_CHECKING:
    from sfmcp.commands._context import AppContext

_org_option = click.option("--org", "target_org", required=True, help="Org alias or username.")


@click.group(
    cls=SfGroup,
    examples="""\
  sfmcp data query Account "Id, Name" --org dev --where "Name LIKE 'A%'" --limit 10
  sfmcp data create Account "Name='Acme'" --org dev
  sfmcp data update Account 001xx000003DGb2 "Phone='555'" --org dev
  sfmcp data delete Account 001xx000003DGb2 --org dev""",
)
@click.pass_obj
def data(app: AppContext) -> None:
    """Query and modify records."""


@data.command()
@click.argument("sobject")
@click.argument("fields")
@_org_option
@click.option("--where", default=None, help="WHERE clause.")
@click.option("--order-by", default=None, help="ORDER BY clause.")
@click.option("--limit", type=int, default=None, help="LIMIT clause.")
@click.pass_obj
def query(
    app: AppContext,
    sobject: str,
    fields: str,
    target_org: str,
    where: str | None,
    order_by: str | None,
    limit: int | None,
) -> None:
    """Run a SOQL query against SOBJECT selecting FIELDS."""
    result = DataService(app.project).query(
        target_org, sobject, fields, where=where, order_by=order_by, limit=limit
    )
    app.emit(result)


@data.command()
@click.argument("sobject")
@click.argument("values")
@_org_option
@click.pass_obj
def create(app: AppContext, sobject: str, values: str, target_org: str) -> None:
    """Create a record from "Field='value'" pairs."""
    app.emit(DataService(app.project).create_record(target_org, sobject, values))


@data.command()
@click.argument("sobject")
@click.argument("record_id")
@click.argument("values")
@_org_option
@click.pass_obj
def update(app: AppContext, sobject: str, record_id: str, values: str, target_org: str) -> None:
    """Update fields of one record."""
    app.emit(DataService(app.project).update_record(target_org, sobject, record_id, values))


@data.command()
@click.argument("sobject")
@click.argument("record_id")
@_org_option
@click.pass_obj
def delete(app: AppContext, sobject: str, record_id: str, target_org: str) -> None:
    """Delete one record."""
    app.emit(DataService(app.project).delete_record(target_org, sobject, record_id))

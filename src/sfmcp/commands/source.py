"""Command group: source deploy/retrieve and object describe."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sfmcp.commands._base import SfGroup
from sfmcp.services.source import TEST_LEVELS, SourceService

if TYPE_CHECKING:
    from sfmcp.commands._context import AppContext

_org_option = click.option("--org", "target_org", required=True, help="Org alias or username.")


@click.group(
    cls=SfGroup,
    examples="""\
  sfmcp source deploy force-app --org dev --check-only
  sfmcp source retrieve --org dev -m ApexClass -m LightningComponentBundle
  sfmcp source describe Account --org dev""",
)
@click.pass_obj
def source(app: AppContext) -> None:
    """Move source between the project and an org."""


@source.command()
@click.argument("source_dir")
@_org_option
@click.option("--check-only", is_flag=True, help="Validate without saving.")
@click.option(
    "--test-level",
    type=click.Choice(TEST_LEVELS),
    default="RunLocalTests",
    help="Tests to run during deployment.",
)
@click.option("--ignore-warnings", is_flag=True, help="Deploy despite warnings.")
@click.pass_obj
def deploy(
    app: AppContext,
    source_dir: str,
    target_org: str,
    check_only: bool,
    test_level: str,
    ignore_warnings: bool,
) -> None:
    """Deploy SOURCE_DIR to an org."""
    result = SourceService(app.project).deploy(
        target_org,
        source_dir,
        check_only=check_only,
        test_level=test_level,
        ignore_warnings=ignore_warnings,
    )
    app.emit(result)


@source.command()
@_org_option
@click.option("-m", "--metadata", multiple=True, required=True, help="Metadata type (repeatable).")
@click.option("--target-dir", default=None, help="Directory for retrieved source.")
@click.pass_obj
def retrieve(
    app: AppContext,
    target_org: str,
    metadata: tuple[str, ...],
    target_dir: str | None,
) -> None:
    """Retrieve metadata by type."""
    app.emit(SourceService(app.project).retrieve(target_org, list(metadata), target_dir=target_dir))


@source.command()
@click.argument("sobject")
@_org_option
@click.pass_obj
def describe(app: AppContext, sobject: str, target_org: str) -> None:
    """Describe an SObject and its fields."""
    app.emit(SourceService(app.project).describe_object(target_org, sobject))

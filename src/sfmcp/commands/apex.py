"""Command group: Apex execution and tests."""

from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

from sfmcp.commands._base import SfGroup
from sfmcp.services.apex import ApexService

if TYPE_CHECKING:
    from sfmcp.commands._context import AppContext

_org_option = click.option("--org", "target_org", required=True, help="Org alias or username.")


@click.group(
    cls=SfGroup,
    examples="""\
  sfmcp apex run --org dev --file scripts/cleanup.apex
  echo "System.debug('hi');" | sfmcp apex run --org dev
  sfmcp apex test --org dev -c AccountServiceTest
  sfmcp apex view AccountService --org dev""",
)
@click.pass_obj
def apex(app: AppContext) -> None:
    """Run anonymous Apex and Apex tests."""


@apex.command()
@_org_option
@click.option(
    "--file",
    "code_file",
    type=click.File("r", encoding="utf-8"),
    default="-",
    help="Apex source (default: stdin).",
)
@click.pass_obj
def run(app: AppContext, target_org: str, code_file: TextIO) -> None:
    """Execute anonymous Apex."""
    app.emit(ApexService(app.project).execute_anonymous(target_org, code_file.read()))


@apex.command()
@_org_option
@click.option("-c", "--class-name", "class_names", multiple=True, help="Test class (repeatable).")
@click.option(
    "--test-level",
    type=click.Choice(["RunLocalTests", "RunAllTestsInOrg", "RunSpecifiedTests"]),
    default="RunLocalTests",
    help="Test level when no classes are named.",
)
@click.pass_obj
def test(app: AppContext, target_org: str, class_names: tuple[str, ...], test_level: str) -> None:
    """Run Apex tests."""
    result = ApexService(app.project).run_tests(
        target_org, class_names=list(class_names), test_level=test_level
    )
    app.emit(result)


@apex.command()
@click.argument("class_name")
@_org_option
@click.pass_obj
def view(app: AppContext, class_name: str, target_org: str) -> None:
    """Print the body of an Apex class."""
    app.emit(ApexService(app.project).view_class(target_org, class_name))

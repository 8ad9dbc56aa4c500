"""Command group: quota-aware package.xml management."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sfmcp.commands._base import SfGroup
from sfmcp.services.manifest import ManifestService

if TYPE_CHECKING:
    from sfmcp.commands._context import AppContext

_MANIFEST_EXAMPLES = """\
  sfmcp manifest generate --org dev --metadata ApexClass --metadata CustomObject
  sfmcp manifest summary manifest/package.xml
  sfmcp manifest filter manifest/package.xml -t ApexClass --max-per-type 50
  sfmcp manifest retrieve manifest/package-filtered-ApexClass.xml
  sfmcp manifest apex --org dev --max-classes 25"""


@click.group(cls=SfGroup, examples=_MANIFEST_EXAMPLES)
@click.pass_obj
def manifest(app: AppContext) -> None:
    """Generate, summarize, filter, and retrieve manifests."""


@manifest.command(
    examples="""\
  sfmcp manifest summary manifest/package.xml
  sfmcp --json manifest summary manifest/package.xml"""
)
@click.argument("manifest_path", type=click.Path(dir_okay=False))
@click.pass_obj
def summary(app: AppContext, manifest_path: str) -> None:
    """Show per-type counts and sample members."""
    app.emit(ManifestService(app.project).summary(manifest_path))


@manifest.command(
    "filter",
    examples="""\
  sfmcp manifest filter manifest/package.xml -t ApexClass -t ApexTrigger
  sfmcp manifest filter manifest/package.xml -t CustomObject -o out.xml --max-per-type 10""",
)
@click.argument("manifest_path", type=click.Path(dir_okay=False))
@click.option(
    "-t",
    "--type",
    "metadata_types",
    multiple=True,
    help="Metadata type to keep (repeatable).",
)
@click.option("-o", "--output", "output_path", default=None, help="Output path.")
@click.option(
    "--max-per-type",
    type=int,
    default=None,
    help="Maximum members per type (default from [manifest] config).",
)
@click.pass_obj
def filter_cmd(
    app: AppContext,
    manifest_path: str,
    metadata_types: tuple[str, ...],
    output_path: str | None,
    max_per_type: int | None,
) -> None:
    """Write a manifest restricted to the given types."""
    result = ManifestService(app.project).filter(
        manifest_path,
        list(metadata_types),
        output_path=output_path,
        max_members_per_type=max_per_type,
    )
    app.emit(result)


@manifest.command(
    examples="""\
  sfmcp manifest generate --org dev
  sfmcp manifest generate --org dev --metadata ApexClass --max-items 200"""
)
@click.option("--org", "target_org", required=True, help="Org alias or username.")
@click.option("--output-dir", default=None, help="Manifest directory.")
@click.option("--metadata", "metadata_types", multiple=True, help="Pre-filter type (repeatable).")
@click.option("--max-items", type=int, default=None, help="Maximum members per type.")
@click.pass_obj
def generate(
    app: AppContext,
    target_org: str,
    output_dir: str | None,
    metadata_types: tuple[str, ...],
    max_items: int | None,
) -> None:
    """Generate package.xml from an org and cap every type."""
    result = ManifestService(app.project).generate(
        target_org,
        output_dir=output_dir,
        metadata_types=list(metadata_types),
        max_members=max_items,
    )
    app.emit(result)


@manifest.command(
    examples="""\
  sfmcp manifest retrieve manifest/package-filtered-ApexClass.xml"""
)
@click.argument("manifest_path", type=click.Path(dir_okay=False))
@click.option("--target-dir", default=None, help="Package directory for sfdx-project.json.")
@click.pass_obj
def retrieve(app: AppContext, manifest_path: str, target_dir: str | None) -> None:
    """Retrieve the components listed in a manifest."""
    app.emit(ManifestService(app.project).retrieve(manifest_path, target_dir=target_dir))


@manifest.command(
    examples="""\
  sfmcp manifest apex --org dev
  sfmcp manifest apex --org dev --max-classes 10"""
)
@click.option("--org", "target_org", required=True, help="Org alias or username.")
@click.option("--output-dir", default=None, help="Manifest directory.")
@click.option("--max-classes", type=int, default=None, help="Maximum classes to retrieve.")
@click.pass_obj
def apex(
    app: AppContext,
    target_org: str,
    output_dir: str | None,
    max_classes: int | None,
) -> None:
    """Generate, cap, and retrieve Apex classes in one step."""
    result = ManifestService(app.project).retrieve_apex_classes(
        target_org, output_dir=output_dir, max_classes=max_classes
    )
    app.emit(result)

"""MCP tool definitions — 18 tools across 5 categories.

Categories: Manifest (5), Org (3), Data (4), Source (3), Apex (3).
Each tool has a ``*_impl`` function testable without a running server;
``register_tools()`` wraps them with FastMCP decorators as coroutines that
run the blocking ``sf`` call on a worker thread, so concurrent tool calls
overlap. Every tool returns one text payload (see :func:`format_tool_text`).
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

import anyio.to_thread

from sfmcp.infrastructure.project import Project
from sfmcp.output.formatters import format_tool_text

# ---------------------------------------------------------------------------
# Manifest tools (5)
# ---------------------------------------------------------------------------


def get_manifest_summary_impl(project: Project, manifest_path: str) -> str:
    """Summarize a manifest without loading its full content."""
    from sfmcp.services.manifest import ManifestService

    return format_tool_text(ManifestService(project).summary(manifest_path))


def generate_manifest_impl(
    project: Project,
    org_alias: str,
    *,
    output_dir: str | None = None,
    metadata_types: list[str] | None = None,
    max_items: int | None = None,
) -> str:
    from sfmcp.services.manifest import ManifestService

    result = ManifestService(project).generate(
        org_alias, output_dir=output_dir, metadata_types=metadata_types, max_members=max_items
    )
    return format_tool_text(result)


def filter_manifest_impl(
    project: Project,
    manifest_path: str,
    metadata_types: list[str],
    *,
    output_path: str | None = None,
    max_items_per_type: int | None = None,
) -> str:
    from sfmcp.services.manifest import ManifestService

    result = ManifestService(project).filter(
        manifest_path,
        metadata_types,
        output_path=output_path,
        max_members_per_type=max_items_per_type,
    )
    return format_tool_text(result)


def retrieve_filtered_metadata_impl(
    project: Project,
    manifest_path: str,
    *,
    target_dir: str | None = None,
) -> str:
    from sfmcp.services.manifest import ManifestService

    return format_tool_text(ManifestService(project).retrieve(manifest_path, target_dir=target_dir))


def retrieve_apex_classes_impl(
    project: Project,
    org_alias: str,
    *,
    output_dir: str | None = None,
    max_classes: int | None = None,
) -> str:
    from sfmcp.services.manifest import ManifestService

    result = ManifestService(project).retrieve_apex_classes(
        org_alias, output_dir=output_dir, max_classes=max_classes
    )
    return format_tool_text(result)


# ---------------------------------------------------------------------------
# Org tools (3)
# ---------------------------------------------------------------------------


def list_orgs_impl(project: Project) -> str:
    from sfmcp.services.org import OrgService

    return format_tool_text(OrgService(project).list_orgs())


def get_org_info_impl(project: Project, target_org: str) -> str:
    from sfmcp.services.org import OrgService

    return format_tool_text(OrgService(project).display(target_org))


def get_org_limits_impl(project: Project, target_org: str) -> str:
    from sfmcp.services.org import OrgService

    return format_tool_text(OrgService(project).limits(target_org))


# ---------------------------------------------------------------------------
# Data tools (4)
# ---------------------------------------------------------------------------


def query_records_impl(
    project: Project,
    target_org: str,
    sobject: str,
    fields: str,
    *,
    where: str | None = None,
    order_by: str | None = None,
    limit: int | None = None,
) -> str:
    from sfmcp.services.data import DataService

    result = DataService(project).query(
        target_org, sobject, fields, where=where, order_by=order_by, limit=limit
    )
    if result.ok:
        # Callers want the rows, not the query envelope.
        rows = result.model_copy(update={"data": {"records": result.data["records"]}})
        return format_tool_text(rows)
    return format_tool_text(result)


def create_record_impl(project: Project, target_org: str, sobject: str, values: str) -> str:
    from sfmcp.services.data import DataService

    return format_tool_text(DataService(project).create_record(target_org, sobject, values))


def update_record_impl(
    project: Project, target_org: str, sobject: str, record_id: str, values: str
) -> str:
    from sfmcp.services.data import DataService

    return format_tool_text(
        DataService(project).update_record(target_org, sobject, record_id, values)
    )


def delete_record_impl(project: Project, target_org: str, sobject: str, record_id: str) -> str:
    from sfmcp.services.data import DataService

    return format_tool_text(DataService(project).delete_record(target_org, sobject, record_id))


# ---------------------------------------------------------------------------
# Source tools (3)
# ---------------------------------------------------------------------------


def deploy_source_impl(
    project: Project,
    target_org: str,
    source_dir: str,
    *,
    check_only: bool = False,
    test_level: str = "RunLocalTests",
    ignore_warnings: bool = False,
) -> str:
    from sfmcp.services.source import SourceService

    result = SourceService(project).deploy(
        target_org,
        source_dir,
        check_only=check_only,
        test_level=test_level,
        ignore_warnings=ignore_warnings,
    )
    return format_tool_text(result)


def retrieve_source_impl(
    project: Project,
    target_org: str,
    metadata: list[str],
    *,
    target_dir: str | None = None,
) -> str:
    from sfmcp.services.source import SourceService

    return format_tool_text(
        SourceService(project).retrieve(target_org, metadata, target_dir=target_dir)
    )


def describe_object_impl(project: Project, target_org: str, object_name: str) -> str:
    from sfmcp.services.source import SourceService

    return format_tool_text(SourceService(project).describe_object(target_org, object_name))


# ---------------------------------------------------------------------------
# Apex tools (3)
# ---------------------------------------------------------------------------


def execute_anonymous_apex_impl(project: Project, target_org: str, apex_code: str) -> str:
    from sfmcp.services.apex import ApexService

    return format_tool_text(ApexService(project).execute_anonymous(target_org, apex_code))


def run_apex_tests_impl(
    project: Project,
    target_org: str,
    *,
    test_classes: list[str] | None = None,
    test_level: str = "RunLocalTests",
) -> str:
    from sfmcp.services.apex import ApexService

    return format_tool_text(
        ApexService(project).run_tests(target_org, class_names=test_classes, test_level=test_level)
    )


def view_apex_class_impl(project: Project, target_org: str, class_name: str) -> str:
    from sfmcp.services.apex import ApexService

    result = ApexService(project).view_class(target_org, class_name)
    if result.ok:
        return f"Apex Class '{class_name}':\n\n{result.data['body']}"
    return format_tool_text(result)


# ---------------------------------------------------------------------------
# Registration — wraps *_impl functions with FastMCP decorators
# ---------------------------------------------------------------------------


async def _in_thread(fn: Callable[..., str], *args: Any, **kwargs: Any) -> str:
    """Run a blocking tool body on a worker thread."""
    return await anyio.to_thread.run_sync(functools.partial(fn, *args, **kwargs))



def register_tools(server: Any, project: Project) -> None:
    """Register all 18 MCP tools on the FastMCP server."""

    @server.tool()  # type: ignore[untyped-decorator]
    async def get_manifest_summary(manifest_path: str) -> str:
        """Summarize a package.xml (type counts and samples) without loading every member."""
        return await _in_thread(get_manifest_summary_impl, project, manifest_path)

    @server.tool()  # type: ignore[untyped-decorator]
    async def generate_manifest(
        org_alias: str,
        output_dir: str | None = None,
        metadata_types: list[str] | None = None,
        max_items: int | None = None,
    ) -> str:
        """Generate package.xml from an org, capping members per type (default 1000)."""
        return await _in_thread(
            generate_manifest_impl,
            project,
            org_alias,
            output_dir=output_dir,
            metadata_types=metadata_types,
            max_items=max_items,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def filter_manifest(
        manifest_path: str,
        metadata_types: list[str],
        output_path: str | None = None,
        max_items_per_type: int | None = None,
    ) -> str:
        """Write a manifest limited to the given types and per-type cap (default 500)."""
        return await _in_thread(
            filter_manifest_impl,
            project,
            manifest_path,
            metadata_types,
            output_path=output_path,
            max_items_per_type=max_items_per_type,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def retrieve_filtered_metadata(manifest_path: str, target_dir: str | None = None) -> str:
        """Retrieve metadata listed in a (filtered) manifest."""
        return await _in_thread(
            retrieve_filtered_metadata_impl, project, manifest_path, target_dir=target_dir
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def retrieve_apex_classes(
        org_alias: str,
        output_dir: str | None = None,
        max_classes: int | None = None,
    ) -> str:
        """Generate, cap (default 100), and retrieve Apex classes in one step."""
        return await _in_thread(
            retrieve_apex_classes_impl,
            project,
            org_alias,
            output_dir=output_dir,
            max_classes=max_classes,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def list_connected_salesforce_orgs() -> str:
        """List all orgs the Salesforce CLI is authenticated with."""
        return await _in_thread(list_orgs_impl, project)

    @server.tool()  # type: ignore[untyped-decorator]
    async def get_org_info(target_org: str) -> str:
        """Show details of an org."""
        return await _in_thread(get_org_info_impl, project, target_org)

    @server.tool()  # type: ignore[untyped-decorator]
    async def get_org_limits(target_org: str) -> str:
        """Show API and storage limits of an org."""
        return await _in_thread(get_org_limits_impl, project, target_org)

    @server.tool()  # type: ignore[untyped-decorator]
    async def query_records(
        target_org: str,
        sobject: str,
        fields: str,
        where: str | None = None,
        order_by: str | None = None,
        limit: int | None = None,
    ) -> str:
        """Run a SOQL query (read operation)."""
        return await _in_thread(
            query_records_impl,
            project,
            target_org,
            sobject,
            fields,
            where=where,
            order_by=order_by,
            limit=limit,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def create_record(target_org: str, sobject: str, values: str) -> str:
        """Create a record from "Field='value'" pairs."""
        return await _in_thread(create_record_impl, project, target_org, sobject, values)

    @server.tool()  # type: ignore[untyped-decorator]
    async def update_record(target_org: str, sobject: str, record_id: str, values: str) -> str:
        """Update fields of an existing record."""
        return await _in_thread(update_record_impl, project, target_org, sobject, record_id, values)

    @server.tool()  # type: ignore[untyped-decorator]
    async def delete_record(target_org: str, sobject: str, record_id: str) -> str:
        """Delete a record."""
        return await _in_thread(delete_record_impl, project, target_org, sobject, record_id)

    @server.tool()  # type: ignore[untyped-decorator]
    async def deploy_source(
        target_org: str,
        source_dir: str,
        check_only: bool = False,
        test_level: str = "RunLocalTests",
        ignore_warnings: bool = False,
    ) -> str:
        """Deploy a local source directory to an org."""
        return await _in_thread(
            deploy_source_impl,
            project,
            target_org,
            source_dir,
            check_only=check_only,
            test_level=test_level,
            ignore_warnings=ignore_warnings,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def retrieve_source(
        target_org: str,
        metadata: list[str],
        target_dir: str | None = None,
    ) -> str:
        """Retrieve source for the given metadata types."""
        return await _in_thread(
            retrieve_source_impl, project, target_org, metadata, target_dir=target_dir
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def describe_object(target_org: str, object_name: str) -> str:
        """Describe an SObject and its fields."""
        return await _in_thread(describe_object_impl, project, target_org, object_name)

    @server.tool()  # type: ignore[untyped-decorator]
    async def execute_anonymous_apex(target_org: str, apex_code: str) -> str:
        """Execute a block of anonymous Apex."""
        return await _in_thread(execute_anonymous_apex_impl, project, target_org, apex_code)

    @server.tool()  # type: ignore[untyped-decorator]
    async def run_apex_tests(
        target_org: str,
        test_classes: list[str] | None = None,
        test_level: str = "RunLocalTests",
    ) -> str:
        """Run Apex tests in an org."""
        return await _in_thread(
            run_apex_tests_impl,
            project,
            target_org,
            test_classes=test_classes,
            test_level=test_level,
        )

    @server.tool()  # type: ignore[untyped-decorator]
    async def view_apex_class(target_org: str, class_name: str) -> str:
        """Show the source of an existing Apex class."""
        return await _in_thread(view_apex_class_impl, project, target_org, class_name)

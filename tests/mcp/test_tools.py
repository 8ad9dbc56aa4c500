"""Tests for MCP tool _impl functions and registration."""

from __future__ import annotations

import asyncio
import inspect
import json
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

from sfmcp.infrastructure.filesystem import read_manifest
from sfmcp.infrastructure.sf_cli import CommandFailure, CommandSuccess
from sfmcp.mcp.tools import (
    create_record_impl,
    delete_record_impl,
    deploy_source_impl,
    describe_object_impl,
    execute_anonymous_apex_impl,
    filter_manifest_impl,
    generate_manifest_impl,
    get_manifest_summary_impl,
    get_org_info_impl,
    get_org_limits_impl,
    list_orgs_impl,
    query_records_impl,
    register_tools,
    retrieve_apex_classes_impl,
    retrieve_filtered_metadata_impl,
    retrieve_source_impl,
    run_apex_tests_impl,
    update_record_impl,
    view_apex_class_impl,
)

EXPECTED_TOOLS = {
    "get_manifest_summary",
    "generate_manifest",
    "filter_manifest",
    "retrieve_filtered_metadata",
    "retrieve_apex_classes",
    "list_connected_salesforce_orgs",
    "get_org_info",
    "get_org_limits",
    "query_records",
    "create_record",
    "update_record",
    "delete_record",
    "deploy_source",
    "retrieve_source",
    "describe_object",
    "execute_anonymous_apex",
    "run_apex_tests",
    "view_apex_class",
}


class FakeServer:
    """Collects functions registered through ``@server.tool()``."""

    def __init__(self) -> None:
        self.tools: dict[str, Callable[..., Any]] = {}

    def tool(self) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self.tools[fn.__name__] = fn
            return fn

        return decorator


class TestManifestTools:
    def test_summary_report(self, project) -> None:
        text = get_manifest_summary_impl(project, "manifest/package.xml")
        lines = text.splitlines()
        assert lines[0].startswith("Manifest Summary (")
        assert "Total Metadata Types: 5" in lines
        assert "Total Items: 12" in lines
        assert "ApexClass: 5 items (samples: A, B, C)" in lines
        assert lines[-1] == (
            "Use filter_manifest with specific metadata types to avoid quota issues."
        )

    def test_summary_error(self, project) -> None:
        text = get_manifest_summary_impl(project, "nowhere.xml")
        assert text.startswith("ERROR: manifest_summary — Manifest file not found at:")

    def test_filter_with_warning(self, project, project_root: Path) -> None:
        text = filter_manifest_impl(
            project, "manifest/package.xml", ["Layout", "Workflow"], max_items_per_type=1
        )
        assert text.startswith("Manifest filtered successfully!")
        assert "- Metadata type not found in manifest: Workflow" in text
        doc = read_manifest(project_root / "manifest" / "package-filtered-Layout-Workflow.xml")
        assert doc.get("Layout").members == ("Account-Account Layout",)

    def test_filter_invalid_quota(self, project) -> None:
        text = filter_manifest_impl(
            project, "manifest/package.xml", ["Layout"], max_items_per_type=-1
        )
        assert text.startswith("ERROR: manifest_filter — ")

    def test_generate(self, project, fake_runner, manifest_writer, sample_package_xml) -> None:
        fake_runner.queue(manifest_writer(sample_package_xml))
        text = generate_manifest_impl(project, "dev", max_items=4)
        assert "Manifest generated successfully at:" in text
        assert "- ApexClass: kept 4 of 5 members" in text

    def test_retrieve(self, project) -> None:
        text = retrieve_filtered_metadata_impl(project, "manifest/package.xml")
        assert text.startswith("Metadata retrieval completed using manifest:")

    def test_retrieve_apex_classes(
        self, project, fake_runner, manifest_writer, sample_package_xml
    ) -> None:
        fake_runner.queue(manifest_writer(sample_package_xml))
        text = retrieve_apex_classes_impl(project, "dev", max_classes=10)
        assert text.startswith("Apex Classes Retrieved Successfully!")
        assert "Retrieved 5 of 5 classes" in text
        assert len(fake_runner.calls) == 2


class TestOrgTools:
    def test_list_orgs_json(self, project, fake_runner) -> None:
        fake_runner.queue(CommandSuccess({"status": 0, "result": {"other": []}}))
        assert json.loads(list_orgs_impl(project)) == {"status": 0, "result": {"other": []}}

    def test_org_info_error_verbatim(self, project, fake_runner) -> None:
        fake_runner.queue(CommandFailure("No authorization information found for dev."))
        assert get_org_info_impl(project, "dev") == (
            "ERROR: org_display — No authorization information found for dev."
        )

    def test_limits(self, project, fake_runner) -> None:
        payload = json.loads(get_org_limits_impl(project, "dev"))
        assert payload["target_org"] == "dev"


class TestDataTools:
    def test_query_returns_only_records(self, project, fake_runner) -> None:
        records = [{"Id": "001A", "Name": "Acme"}]
        fake_runner.queue(CommandSuccess({"status": 0, "result": {"records": records}}))
        text = query_records_impl(project, "dev", "Account", "Id, Name", where="Name = 'Acme'")
        assert json.loads(text) == {"records": records}

    def test_query_error(self, project, fake_runner) -> None:
        fake_runner.queue(CommandFailure("MALFORMED_QUERY"))
        assert query_records_impl(project, "dev", "Account", "Id") == (
            "ERROR: data_query — MALFORMED_QUERY"
        )

    def test_crud(self, project, fake_runner) -> None:
        create_record_impl(project, "dev", "Account", "Name='A'")
        update_record_impl(project, "dev", "Account", "001A", "Name='B'")
        delete_record_impl(project, "dev", "Account", "001A")
        assert [argv[1:3] for argv in fake_runner.argv] == [
            ["data", "create"],
            ["data", "update"],
            ["data", "delete"],
        ]


class TestSourceTools:
    def test_deploy_validate_only(self, project, fake_runner) -> None:
        payload = json.loads(deploy_source_impl(project, "dev", "force-app", check_only=True))
        assert payload["check_only"] is True
        assert "--dry-run" in fake_runner.argv[0]

    def test_retrieve_and_describe(self, project, fake_runner) -> None:
        retrieve_source_impl(project, "dev", ["ApexClass"])
        describe_object_impl(project, "dev", "Account")
        assert fake_runner.argv[1][fake_runner.argv[1].index("--sobject") + 1] == "Account"


class TestApexTools:
    def test_execute_anonymous(self, project, fake_runner) -> None:
        fake_runner.queue(CommandSuccess({"status": 0, "result": {"logs": "DEBUG|hi"}}))
        payload = json.loads(execute_anonymous_apex_impl(project, "dev", "System.debug('hi');"))
        assert payload["result"] == {"logs": "DEBUG|hi"}

    def test_run_tests(self, project, fake_runner) -> None:
        run_apex_tests_impl(project, "dev", test_classes=["FooTest"])
        assert "RunSpecifiedTests" in fake_runner.argv[0]

    def test_view_class(self, project, fake_runner) -> None:
        record = {"Name": "Foo", "Body": "public class Foo {}"}
        fake_runner.queue(CommandSuccess({"status": 0, "result": {"records": [record]}}))
        assert view_apex_class_impl(project, "dev", "Foo") == (
            "Apex Class 'Foo':\n\npublic class Foo {}"
        )

    def test_view_class_missing(self, project, fake_runner) -> None:
        fake_runner.queue(CommandSuccess({"status": 0, "result": {"records": []}}))
        assert view_apex_class_impl(project, "dev", "Nope") == (
            "ERROR: apex_view — Apex class not found: Nope"
        )


class TestRegisterTools:
    def test_registers_every_tool(self, project) -> None:
        server = FakeServer()
        register_tools(server, project)
        assert set(server.tools) == EXPECTED_TOOLS

    def test_registered_tool_uses_project(self, project, fake_runner) -> None:
        server = FakeServer()
        register_tools(server, project)
        text = asyncio.run(server.tools["get_org_info"]("dev"))
        assert isinstance(text, str)
        assert fake_runner.argv[0][:3] == ["sf", "org", "display"]

    def test_registered_tools_are_coroutines(self, project) -> None:
        server = FakeServer()
        register_tools(server, project)
        assert all(inspect.iscoroutinefunction(fn) for fn in server.tools.values())

    def test_tool_calls_overlap(self, project, fake_runner) -> None:
        # Each sf call waits for the other; run one at a time they would time out.
        barrier = threading.Barrier(2, timeout=5)

        def respond(command_line: str, cwd: Path | None) -> CommandSuccess:
            barrier.wait()
            return CommandSuccess({"status": 0, "result": {"alias": "dev"}})

        fake_runner.queue(respond, respond)
        server = FakeServer()
        register_tools(server, project)

        async def call_both() -> list[str]:
            tool = server.tools["get_org_info"]
            return list(await asyncio.gather(tool("dev"), tool("qa")))

        texts = asyncio.run(call_both())
        assert len(texts) == 2
        assert not any(text.startswith("ERROR") for text in texts)
        assert len(fake_runner.calls) == 2

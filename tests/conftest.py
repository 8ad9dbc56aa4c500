"""Shared pytest fixtures and test helpers for sfmcp tests."""

from __future__ import annotations

import shlex
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner

from sfmcp.config.settings import SfmcpSettings
from sfmcp.infrastructure.project import Project
from sfmcp.infrastructure.sf_cli import CommandOutcome, CommandSuccess, SfCli

SAMPLE_PACKAGE_XML = """\
<?xml version="1.0" encoding="UTF-8"?>
<Package xmlns="http://soap.sforce.com/2006/04/metadata">
    <types>
        <members>A</members>
        <members>B</members>
        <members>C</members>
        <members>D</members>
        <members>E</members>
        <name>ApexClass</name>
    </types>
    <types>
        <members>Account.Region__c</members>
        <members>Contact.Tier__c</members>
        <name>CustomField</name>
    </types>
    <types>
        <members>Invoice__c</members>
        <name>CustomObject</name>
    </types>
    <types>
        <name>ApexTrigger</name>
    </types>
    <types>
        <members>Account-Account Layout</members>
        <members>Case-Case Layout</members>
        <members>Lead-Lead Layout</members>
        <members>Opportunity-Opportunity Layout</members>
        <name>Layout</name>
    </types>
    <version>59.0</version>
</Package>
"""

Response = CommandOutcome | Callable[[str, Path | None], CommandOutcome]


class FakeRunner:
    """Stands in for ``execute``: records command lines, replays responses.

    Responses are consumed in order; a callable response is invoked with
    ``(command_line, cwd)`` so it can write files the way ``sf`` would.
    When the queue is empty a generic success is returned.
    """

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.cwds: list[Path | None] = []
        self.responses: list[Response] = []

    def queue(self, *responses: Response) -> None:
        self.responses.extend(responses)

    def __call__(self, command_line: str, *, cwd: Path | None = None) -> CommandOutcome:
        self.calls.append(command_line)
        self.cwds.append(cwd)
        if not self.responses:
            return CommandSuccess({"status": 0, "result": {}})
        response = self.responses.pop(0)
        if callable(response):
            return response(command_line, cwd)
        return response

    @property
    def argv(self) -> list[list[str]]:
        return [shlex.split(call) for call in self.calls]


def option_value(argv: list[str], flag: str) -> str:
    """Value following *flag* in a split command line."""
    return argv[argv.index(flag) + 1]


def writes_manifest(text: str) -> Callable[[str, Path | None], CommandOutcome]:
    """Response that writes *text* to ``<--output-dir>/package.xml``, like sf does."""

    def respond(command_line: str, cwd: Path | None) -> CommandOutcome:
        out_dir = Path(option_value(shlex.split(command_line), "--output-dir"))
        (out_dir / "package.xml").write_text(text, encoding="utf-8")
        return CommandSuccess({"status": 0, "result": {"name": "package.xml"}})

    return respond


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory holding ``manifest/package.xml``."""
    manifest_dir = tmp_path / "manifest"
    manifest_dir.mkdir()
    (manifest_dir / "package.xml").write_text(SAMPLE_PACKAGE_XML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def fake_runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def project(project_root: Path, fake_runner: FakeRunner) -> Project:
    """Project whose ``sf`` calls go to *fake_runner*."""
    settings = SfmcpSettings.from_cli(project_root=project_root)
    return Project(settings, cli=SfCli("sf", cwd=project_root, runner=fake_runner))


@pytest.fixture
def _isolated_project(
    project_root: Path,
    fake_runner: FakeRunner,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Run CLI commands inside *project_root* with ``sf`` replaced by *fake_runner*.

    Use via ``@pytest.mark.usefixtures("_isolated_project")``.
    """
    monkeypatch.chdir(project_root)
    monkeypatch.delenv("SFMCP_CONFIG", raising=False)
    monkeypatch.setattr("sfmcp.infrastructure.sf_cli.execute", fake_runner)


@pytest.fixture
def sample_package_xml() -> str:
    """Five types: ApexClass(5), CustomField(2), CustomObject(1), ApexTrigger(0), Layout(4)."""
    return SAMPLE_PACKAGE_XML


@pytest.fixture
def manifest_writer() -> Callable[[str], Callable[[str, Path | None], CommandOutcome]]:
    """Factory for fake ``sf project generate manifest`` responses."""
    return writes_manifest

"""AppContext — shared Click context for all commands.

Created once by the root CLI group and passed to subcommands via
``@click.pass_obj``. Configures logging, builds the Project lazily, and
centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sfmcp.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from sfmcp.config.settings import SfmcpSettings
    from sfmcp.infrastructure.project import Project
    from sfmcp.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy."""

    def __init__(self, settings: SfmcpSettings) -> None:
        self.settings = settings
        self._project: Project | None = None

        from sfmcp.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

        if settings.verbose:
            from sfmcp.services.telemetry import enable_telemetry

            enable_telemetry()

    @property
    def project(self) -> Project:
        """The project context (created on first access)."""
        if self._project is None:
            from sfmcp.infrastructure.project import Project

            self._project = Project(self.settings)
        return self._project

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success: stdout; warnings go to stderr unless in JSON mode.
        * Failure: stderr, exit code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)

"""BaseService — shared foundation for all sfmcp services.

Every service receives a :class:`Project` at construction time. The
project carries the frozen settings and the ``sf`` adapter; services
never spawn processes or touch settings any other way.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sfmcp.domain.errors import SfmcpError
from sfmcp.infrastructure.sf_cli import CommandFailure
from sfmcp.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from sfmcp.config.settings import SfmcpSettings
    from sfmcp.infrastructure.project import Project

logger = logging.getLogger(__name__)


class BaseService:
    """Base for all service-layer classes.

    Usage::

        class OrgService(BaseService):
            def list_orgs(self) -> ServiceResult:
                return self._run_sf("org_list", "org", "list")
    """

    def __init__(self, project: Project) -> None:
        self._project = project

    @property
    def settings(self) -> SfmcpSettings:
        return self._project.settings

    @staticmethod
    def _failure(op: str, exc: SfmcpError) -> ServiceResult:
        """Convert a domain/infrastructure error into a failed result."""
        logger.debug("%s failed: %s: %s", op, type(exc).__name__, exc)
        return ServiceResult(
            ok=False,
            op=op,
            error=ServiceError(code=exc.code, message=str(exc)),
        )

    def _run_sf(self, op: str, *args: str, **extra: Any) -> ServiceResult:
        """Run one ``sf`` command and wrap its payload as the result data.

        Non-dict payloads are placed under ``result``. *extra* is merged
        into the data for context (e.g. the target org).
        """
        outcome = self._project.cli.run(*args)
        if isinstance(outcome, CommandFailure):
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(code="EXTERNAL_COMMAND_FAILURE", message=outcome.message),
            )
        payload = outcome.payload
        data: dict[str, Any] = payload if isinstance(payload, dict) else {"result": payload}
        return ServiceResult(ok=True, op=op, data={**extra, **data})

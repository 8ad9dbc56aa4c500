"""OrgService — authenticated org listing and org details."""

from __future__ import annotations

from sfmcp.services.base import BaseService
from sfmcp.services.result import ServiceResult
from sfmcp.services.telemetry import traced


class OrgService(BaseService):
    """Read-only org operations."""

    @traced
    def list_orgs(self) -> ServiceResult:
        """Orgs the CLI is currently authenticated with."""
        return self._run_sf("org_list", "org", "list")

    @traced
    def display(self, target_org: str) -> ServiceResult:
        return self._run_sf(
            "org_display", "org", "display", "--target-org", target_org, target_org=target_org
        )

    @traced
    def limits(self, target_org: str) -> ServiceResult:
        """API and storage limits of the org."""
        return self._run_sf(
            "org_limits", "org", "list", "limits", "--target-org", target_org, target_org=target_org
        )

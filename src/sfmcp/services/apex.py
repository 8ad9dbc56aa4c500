"""ApexService — anonymous Apex, test runs, and class source lookup."""

from __future__ import annotations

import tempfile
from collections.abc import Sequence
from pathlib import Path

from sfmcp.domain.errors import FileSystemError
from sfmcp.services.base import BaseService
from sfmcp.services.data import build_soql, soql_quote
from sfmcp.services.result import ServiceError, ServiceResult
from sfmcp.services.telemetry import traced


class ApexService(BaseService):
    """Apex execution against a target org."""

    @traced
    def execute_anonymous(self, target_org: str, apex_code: str) -> ServiceResult:
        """Run *apex_code* via a temporary ``.apex`` file, removed afterwards."""
        op = "apex_execute"
        with tempfile.TemporaryDirectory(prefix="sfmcp_apex_") as tmp:
            script = Path(tmp) / "anonymous.apex"
            try:
                script.write_text(apex_code, encoding="utf-8")
            except OSError as exc:
                return self._failure(op, FileSystemError(f"Cannot write {script}: {exc}"))
            return self._run_sf(
                op, "apex", "run", "--file", str(script), "--target-org", target_org
            )

    @traced
    def run_tests(
        self,
        target_org: str,
        *,
        class_names: Sequence[str] | None = None,
        test_level: str = "RunLocalTests",
    ) -> ServiceResult:
        """Run Apex tests; naming classes implies ``RunSpecifiedTests``."""
        if class_names:
            test_level = "RunSpecifiedTests"
        args = ["apex", "run", "test", "--target-org", target_org, "--test-level", test_level]
        for name in class_names or []:
            args += ["--class-names", name]
        return self._run_sf("apex_test", *args)

    @traced
    def view_class(self, target_org: str, class_name: str) -> ServiceResult:
        """Fetch the body of one Apex class."""
        op = "apex_view"
        soql = build_soql(
            "ApexClass", "Name, Body", where=f"Name = {soql_quote(class_name)}", limit=1
        )
        result = self._run_sf(op, "data", "query", "--target-org", target_org, "--query", soql)
        if not result.ok:
            return result
        body = result.data.get("result") or {}
        records = body.get("records", []) if isinstance(body, dict) else []
        if not records:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="NOT_FOUND",
                    message=f"Apex class not found: {class_name}",
                ),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={"name": class_name, "body": records[0].get("Body", "")},
        )

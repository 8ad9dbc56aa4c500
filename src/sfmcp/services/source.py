"""SourceService — source deploy/retrieve and object describe."""

from __future__ import annotations

from collections.abc import Sequence

from sfmcp.services.base import BaseService
from sfmcp.services.result import ServiceResult
from sfmcp.services.telemetry import traced

TEST_LEVELS = ("NoTestRun", "RunLocalTests", "RunAllTestsInOrg", "RunSpecifiedTests")


class SourceService(BaseService):
    """Operations that move source between the project and an org."""

    @traced
    def deploy(
        self,
        target_org: str,
        source_dir: str,
        *,
        check_only: bool = False,
        test_level: str = "RunLocalTests",
        ignore_warnings: bool = False,
    ) -> ServiceResult:
        """Deploy *source_dir*; ``check_only`` validates without saving."""
        args = [
            "project",
            "deploy",
            "start",
            "--source-dir",
            str(self._project.resolve(source_dir)),
            "--target-org",
            target_org,
            "--test-level",
            test_level,
        ]
        if check_only:
            args.append("--dry-run")
        if ignore_warnings:
            args.append("--ignore-warnings")
        return self._run_sf("source_deploy", *args, check_only=check_only)

    @traced
    def retrieve(
        self,
        target_org: str,
        metadata: Sequence[str],
        *,
        target_dir: str | None = None,
    ) -> ServiceResult:
        args = ["project", "retrieve", "start", "--target-org", target_org]
        for name in metadata:
            args += ["--metadata", name]
        if target_dir:
            args += ["--target-dir", str(self._project.resolve(target_dir))]
        return self._run_sf("source_retrieve", *args)

    @traced
    def describe_object(self, target_org: str, sobject: str) -> ServiceResult:
        return self._run_sf(
            "describe_object",
            "sobject",
            "describe",
            "--sobject",
            sobject,
            "--target-org",
            target_org,
        )

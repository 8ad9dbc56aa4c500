"""ManifestService — quota-aware manifest summary, filtering, and retrieval.

Every operation reads or produces a ``package.xml`` through the domain
codec and keeps member lists under configured per-type quotas, so the
text handed back to an LLM stays bounded.

Multi-step workflows (generate -> limit -> retrieve) run strictly in
sequence; each step consumes the file the previous step wrote, and the
first failure aborts the rest.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

from sfmcp.domain.errors import FileSystemError, SfmcpError
from sfmcp.domain.filtering import (
    FilterSpec,
    filter_manifest,
    limit_manifest,
    missing_type_names,
    validate_quota,
)
from sfmcp.domain.summary import render_summary_report, summarize_manifest
from sfmcp.infrastructure.filesystem import (
    default_filtered_path,
    ensure_directory,
    ensure_project_config,
    read_manifest,
    write_manifest,
)
from sfmcp.services.base import BaseService
from sfmcp.services.contracts import (
    ApexRetrieveData,
    ManifestFilterData,
    ManifestGenerateData,
    ManifestRetrieveData,
    ManifestSummaryData,
    dump_validated,
)
from sfmcp.services.result import ServiceResult
from sfmcp.services.telemetry import trace_span, traced

PACKAGE_FILENAME = "package.xml"
APEX_LIMITED_FILENAME = "package-apex-limited.xml"
APEX_CLASS_TYPE = "ApexClass"
NO_TYPES_WARNING = "No requested metadata types found; no manifest written"


class ManifestService(BaseService):
    """Summaries, filters, generation, and retrieval driven by manifests."""

    # ------------------------------------------------------------------
    # Read-only
    # ------------------------------------------------------------------

    @traced
    def summary(self, manifest_path: str | Path) -> ServiceResult:
        """Counts and samples per type, without exposing full member lists."""
        op = "manifest_summary"
        path = self._project.resolve(manifest_path)
        try:
            doc = read_manifest(path)
        except SfmcpError as exc:
            return self._failure(op, exc)

        summary = summarize_manifest(doc)
        data = {
            "path": str(path),
            "version": doc.version,
            "total_types": summary.total_types,
            "total_items": summary.total_items,
            "types": [item.model_dump() for item in summary.items],
            "report": render_summary_report(summary, str(path)),
        }
        return ServiceResult(ok=True, op=op, data=dump_validated(ManifestSummaryData, data))

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    @traced
    def filter(
        self,
        manifest_path: str | Path,
        metadata_types: Sequence[str],
        *,
        output_path: str | Path | None = None,
        max_members_per_type: int | None = None,
    ) -> ServiceResult:
        """Write a manifest holding only *metadata_types*, each under the quota.

        The quota defaults to ``[manifest] max_members_per_type``. Requested
        types missing from the source are reported as warnings. When none of
        them are present nothing is written and ``output_path`` is None, since
        a package.xml without <types> cannot be read back.
        """
        op = "manifest_filter"
        if max_members_per_type is None:
            max_members_per_type = self.settings.manifest.max_members_per_type
        path = self._project.resolve(manifest_path)
        target = (
            self._project.resolve(output_path)
            if output_path
            else default_filtered_path(path, metadata_types)
        )

        try:
            spec = FilterSpec.of(metadata_types, max_members_per_type)
            doc = read_manifest(path)
            filtered = filter_manifest(doc, spec)
            if filtered.types:
                write_manifest(target, filtered)
        except SfmcpError as exc:
            return self._failure(op, exc)

        missing = missing_type_names(metadata_types, doc)
        warnings = [f"Metadata type not found in manifest: {name}" for name in missing]
        if not filtered.types:
            warnings.append(NO_TYPES_WARNING)
            report_lines = [
                "No requested metadata types found in the manifest.",
                "",
                f"Requested: {', '.join(metadata_types) or '(none)'}",
                f"Available: {', '.join(doc.type_names)}",
                "",
                "No manifest was written.",
            ]
        else:
            report_lines = [
                "Manifest filtered successfully!",
                "",
                f"Included: {', '.join(filtered.type_names)}",
            ]
            if missing:
                report_lines.append(f"Not found: {', '.join(missing)}")
            report_lines += [
                f"Total items: {filtered.total_members}",
                f"Max per type: {max_members_per_type}",
                "",
                f"Saved to: {target}",
                "",
                "Use retrieve_filtered_metadata to retrieve these components.",
            ]
        data = {
            "path": str(path),
            "output_path": str(target) if filtered.types else None,
            "included": filtered.type_names,
            "missing": missing,
            "total_items": filtered.total_members,
            "max_members_per_type": max_members_per_type,
            "report": "\n".join(report_lines),
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ManifestFilterData, data),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Org-backed workflows
    # ------------------------------------------------------------------

    @traced
    def generate(
        self,
        target_org: str,
        *,
        output_dir: str | Path | None = None,
        metadata_types: Sequence[str] | None = None,
        max_members: int | None = None,
    ) -> ServiceResult:
        """Generate ``package.xml`` from an org, then auto-limit every type.

        The file is rewritten only when at least one type was truncated.
        """
        op = "manifest_generate"
        cfg = self.settings.manifest
        if max_members is None:
            max_members = cfg.generate_max_members
        out_dir = self._project.resolve(output_dir or cfg.output_dir)
        types = list(metadata_types or [])

        try:
            validate_quota(max_members)
            package_path = self._generate(target_org, out_dir, types)
            with trace_span("auto_limit") as span:
                result = limit_manifest(read_manifest(package_path), max_members)
                if result.modified:
                    write_manifest(package_path, result.document)
                if span is not None:
                    span.annotate("modified", result.modified)
        except SfmcpError as exc:
            return self._failure(op, exc)

        truncated = result.truncated
        warnings = [
            f"{entry.name}: kept {entry.kept_count} of {entry.original_count} members"
            for entry in truncated
        ]
        report_lines = [f"Manifest generated successfully at: {package_path}", ""]
        if types:
            report_lines.append(f"Pre-filtered for: {', '.join(types)}")
        if truncated:
            report_lines.append(
                f"Limited to {max_members} items per type "
                f"({', '.join(entry.name for entry in truncated)} truncated)"
            )
        report_lines += ["", "Use get_manifest_summary to see what's included."]
        data = {
            "path": str(package_path),
            "target_org": target_org,
            "metadata_types": types,
            "max_members": max_members,
            "total_types": len(result.document.types),
            "total_items": result.document.total_members,
            "modified": result.modified,
            "truncated": [
                {"name": e.name, "original_count": e.original_count, "kept_count": e.kept_count}
                for e in truncated
            ],
            "report": "\n".join(report_lines),
        }
        return ServiceResult(
            ok=True,
            op=op,
            data=dump_validated(ManifestGenerateData, data),
            warnings=warnings,
        )

    @traced
    def retrieve(
        self,
        manifest_path: str | Path,
        *,
        target_dir: str | None = None,
    ) -> ServiceResult:
        """Retrieve the components listed in a (filtered) manifest."""
        op = "manifest_retrieve"
        path = self._project.resolve(manifest_path)
        try:
            created, payload = self._retrieve(path, target_dir)
        except SfmcpError as exc:
            return self._failure(op, exc)

        data = {
            "manifest_path": str(path),
            "project_config_created": created,
            "result": payload,
            "report": (
                f"Metadata retrieval completed using manifest: {path}\n\n"
                "Retrieved metadata has been saved to the default package directory."
            ),
        }
        return ServiceResult(ok=True, op=op, data=dump_validated(ManifestRetrieveData, data))

    @traced
    def retrieve_apex_classes(
        self,
        target_org: str,
        *,
        output_dir: str | Path | None = None,
        max_classes: int | None = None,
    ) -> ServiceResult:
        """Generate an ApexClass-only manifest, cap it, and retrieve it."""
        op = "retrieve_apex_classes"
        cfg = self.settings.manifest
        if max_classes is None:
            max_classes = cfg.apex_max_classes
        out_dir = self._project.resolve(output_dir or cfg.output_dir)
        limited_path = out_dir / APEX_LIMITED_FILENAME

        try:
            spec = FilterSpec.of([APEX_CLASS_TYPE], max_classes)
            package_path = self._generate(target_org, out_dir, [APEX_CLASS_TYPE])
            doc = read_manifest(package_path)
            limited = filter_manifest(doc, spec)
            apex_entry = doc.get(APEX_CLASS_TYPE)
            total = apex_entry.member_count if apex_entry else 0
            if not limited.types:
                report = (
                    f"No Apex classes found in org {target_org}; nothing was retrieved.\n\n"
                    f"Manifest: {package_path}"
                )
                data = self._apex_data(
                    target_org, package_path, 0, 0, max_classes, None, report=report
                )
                return ServiceResult(
                    ok=True,
                    op=op,
                    data=data,
                    warnings=[f"No Apex classes found in org {target_org}"],
                )
            write_manifest(limited_path, limited)
            _created, payload = self._retrieve(limited_path, None)
        except SfmcpError as exc:
            return self._failure(op, exc)

        kept = limited.total_members
        warnings = []
        if kept < total:
            warnings.append(f"Limited to {kept} of {total} Apex classes")
        return ServiceResult(
            ok=True,
            op=op,
            data=self._apex_data(target_org, limited_path, total, kept, max_classes, payload),
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Steps (raise SfmcpError; callers convert at the boundary)
    # ------------------------------------------------------------------

    def _generate(self, target_org: str, out_dir: Path, metadata_types: Sequence[str]) -> Path:
        args = [
            "project",
            "generate",
            "manifest",
            "--output-dir",
            str(out_dir),
            "--from-org",
            target_org,
        ]
        for name in metadata_types:
            args += ["--metadata", name]

        ensure_directory(out_dir)
        with trace_span("sf_generate_manifest"):
            self._project.cli.run(*args).unwrap()

        package_path = out_dir / PACKAGE_FILENAME
        if not package_path.is_file():
            msg = f"Failed to generate {PACKAGE_FILENAME} in {out_dir}"
            raise FileSystemError(msg)
        return package_path

    def _retrieve(self, manifest_path: Path, target_dir: str | None) -> tuple[bool, Any]:
        if not manifest_path.is_file():
            msg = f"Manifest file not found at: {manifest_path}"
            raise FileSystemError(msg)
        sf = self.settings.sf
        created = ensure_project_config(
            self._project.root,
            package_dir=target_dir or self.settings.manifest.retrieve_target_dir,
            api_version=sf.source_api_version,
            login_url=sf.login_url,
        )
        with trace_span("sf_retrieve_start"):
            payload = self._project.cli.run(
                "project", "retrieve", "start", "--manifest", str(manifest_path)
            ).unwrap()
        return created, payload

    @staticmethod
    def _apex_data(
        target_org: str,
        manifest_path: Path,
        total: int,
        kept: int,
        max_classes: int,
        payload: Any,
        *,
        report: str | None = None,
    ) -> dict[str, Any]:
        if report is None:
            report = (
                f"Apex Classes Retrieved Successfully!\n\n"
                f"Retrieved {kept} of {total} classes (limit {max_classes})\n"
                f"Manifest: {manifest_path}\n"
                f"Retrieved from org: {target_org}\n\n"
                "Increase max_classes if you need more classes."
            )
        data = {
            "target_org": target_org,
            "manifest_path": str(manifest_path),
            "total_classes": total,
            "retrieved_classes": kept,
            "max_classes": max_classes,
            "result": payload,
            "report": report,
        }
        return dump_validated(ApexRetrieveData, data)

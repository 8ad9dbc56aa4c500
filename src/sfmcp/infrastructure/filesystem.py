"""Manifest file I/O and project scaffolding on disk.

Parsing and rendering live in :mod:`sfmcp.domain.package_xml`; this
module owns the reads and writes and maps ``OSError`` to
:class:`FileSystemError`. Writes are not atomic.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from pathlib import Path

from sfmcp.domain.errors import FileSystemError
from sfmcp.domain.manifest import ManifestDocument
from sfmcp.domain.package_xml import parse_package_xml, serialize_package_xml

logger = logging.getLogger(__name__)

PROJECT_CONFIG_FILENAME = "sfdx-project.json"


def read_manifest(path: Path) -> ManifestDocument:
    """Read and parse the manifest at *path*.

    Raises:
        FileSystemError: the file does not exist or cannot be read.
        ParseError: the content is not a valid package.xml.
    """
    if not path.is_file():
        msg = f"Manifest file not found at: {path}"
        raise FileSystemError(msg)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read manifest {path}: {exc}"
        raise FileSystemError(msg) from exc
    return parse_package_xml(text)


def write_manifest(path: Path, doc: ManifestDocument) -> None:
    """Serialize *doc* to *path*, creating parent directories."""
    rendered = serialize_package_xml(doc)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(rendered, encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write manifest {path}: {exc}"
        raise FileSystemError(msg) from exc
    logger.debug("Wrote manifest %s (%d types)", path, len(doc.types))


def ensure_directory(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        msg = f"Cannot create directory {path}: {exc}"
        raise FileSystemError(msg) from exc


def ensure_project_config(
    root: Path,
    *,
    package_dir: str,
    api_version: str,
    login_url: str,
) -> bool:
    """Write a minimal ``sfdx-project.json`` in *root* if none exists.

    Returns True when the file was created.
    """
    config_path = root / PROJECT_CONFIG_FILENAME
    if config_path.exists():
        return False
    config = {
        "packageDirectories": [{"path": package_dir, "default": True}],
        "namespace": "",
        "sfdcLoginUrl": login_url,
        "sourceApiVersion": api_version,
    }
    try:
        config_path.write_text(json.dumps(config, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot write {config_path}: {exc}"
        raise FileSystemError(msg) from exc
    return True


def default_filtered_path(manifest_path: Path, type_names: Sequence[str]) -> Path:
    """``<dir>/<stem>-filtered-<T1>-<T2>.xml`` next to the source manifest."""
    suffix = "-".join(["filtered", *type_names])
    return manifest_path.with_name(f"{manifest_path.stem}-{suffix}.xml")

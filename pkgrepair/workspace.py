"""Scratch workspace setup — stage a manifest into the project the repair runs in."""

from __future__ import annotations

import shutil
from pathlib import Path

import structlog

from pkgrepair.exceptions import ManifestError, PersistenceFailure

log = structlog.get_logger("pkgrepair.engine")


def prepare_workspace(
    source_manifest: Path, project_root: Path, manifest_name: str = "package.json"
) -> Path:
    """Copy *source_manifest* into *project_root* (created if needed).

    Returns the path of the staged manifest.
    """
    if not source_manifest.is_file():
        raise ManifestError(source_manifest, "source manifest not found")

    target = project_root / manifest_name
    try:
        project_root.mkdir(parents=True, exist_ok=True)
        shutil.copyfile(source_manifest, target)
    except OSError as exc:
        raise PersistenceFailure(target, str(exc)) from exc

    log.info("workspace.prepared", source=str(source_manifest), target=str(target))
    return target

"""Audit exporter — write every removal decision of a run to JSON documents."""

from __future__ import annotations

from pathlib import Path

import structlog

from pkgrepair.manifest import write_json
from pkgrepair.models import RemovalRecord

log = structlog.get_logger("pkgrepair.engine")

DETAILS_DIR = "details"
SUMMARY_FILE = "allRemovedItems.json"

# (file name, origin, kind) for each per-bucket document under details/
_BUCKET_FILES = (
    ("removedLocalPackages.json", "local", "dependencies"),
    ("removedLocalDevPackages.json", "local", "devDependencies"),
    ("removedLockedPackages.json", "locked", "dependencies"),
    ("removedLockedDevPackages.json", "locked", "devDependencies"),
)
SCRIPTS_FILE = "removedScripts.json"


def build_summary(record: RemovalRecord) -> dict[str, dict[str, str]]:
    """Combined view: scripts plus local+locked removals merged per kind."""
    return {
        "scripts": dict(record.scripts),
        "dependencies": record.combined("dependencies"),
        "devDependencies": record.combined("devDependencies"),
    }


def export_removals(record: RemovalRecord, export_root: Path) -> list[Path]:
    """Write the removal record under *export_root* and return the written paths.

    Always writes every document, even when the record is empty.
    Raises :class:`~pkgrepair.exceptions.PersistenceFailure` on write errors.
    """
    details = export_root / DETAILS_DIR
    written: list[Path] = []

    for file_name, origin, kind in _BUCKET_FILES:
        path = details / file_name
        write_json(path, record.bucket(origin, kind))
        written.append(path)

    scripts_path = details / SCRIPTS_FILE
    write_json(scripts_path, record.scripts)
    written.append(scripts_path)

    summary_path = export_root / SUMMARY_FILE
    write_json(summary_path, build_summary(record))
    written.append(summary_path)

    log.info(
        "export.written",
        export_root=str(export_root),
        files=len(written),
        empty=record.is_empty,
    )
    return written

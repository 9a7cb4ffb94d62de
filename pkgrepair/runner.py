"""Repair runner — pre-filter, retry loop, and audit export for one project."""

from __future__ import annotations

import asyncio
from pathlib import Path

import structlog

from pkgrepair.controller import RetryController
from pkgrepair.core.config import Settings
from pkgrepair.diagnostics import DiagnosticGrammar
from pkgrepair.exceptions import PersistenceFailure
from pkgrepair.exporter import export_removals
from pkgrepair.installer import CommandInstaller, Installer
from pkgrepair.manifest import load_manifest, save_manifest
from pkgrepair.models import LockedDependencySet, RemovalRecord, RepairResult
from pkgrepair.prefilter import pre_filter

log = structlog.get_logger("pkgrepair.engine")


async def repair(
    project_root: Path,
    locked: LockedDependencySet,
    export_root: Path,
    *,
    installer: Installer | None = None,
    grammar: DiagnosticGrammar | str | None = None,
    settings: Settings | None = None,
) -> RepairResult:
    """Repair the manifest in *project_root* until its install succeeds.

    1. Load the manifest.
    2. Strip scripts and locked dependencies, persist.
    3. Run the :class:`RetryController` loop.
    4. Export the removal record to *export_root*, whatever the outcome.

    A fresh :class:`RemovalRecord` is created per call. Errors raised by the
    loop (``UnclassifiableFailure``, ``RetryBudgetExhausted``,
    ``PersistenceFailure``) propagate after the export is attempted; if the
    export itself fails it is logged and the loop error still wins.
    """
    settings = settings or Settings()
    installer = installer or CommandInstaller(settings.install_command)
    grammar = grammar or settings.grammar

    manifest_path = project_root / settings.manifest_name
    manifest = load_manifest(manifest_path)
    record = RemovalRecord()

    try:
        pre_filter(manifest, locked, record)
        save_manifest(manifest, manifest_path)

        controller = RetryController(manifest, manifest_path, record, installer, grammar)
        result = await controller.run()
    except Exception as exc:
        _export_after_failure(record, export_root, exc)
        raise

    export_removals(record, export_root)

    log.info(
        "repair.complete",
        state=result.state.value,
        attempts=result.attempts,
        remaining=manifest.dependency_count(),
    )
    return result


def _export_after_failure(record: RemovalRecord, export_root: Path, error: Exception) -> None:
    try:
        export_removals(record, export_root)
    except PersistenceFailure as export_error:
        log.error(
            "export.failed",
            error=str(export_error),
            run_error=type(error).__name__,
        )


def repair_sync(
    project_root: Path,
    locked: LockedDependencySet,
    export_root: Path,
    **kwargs,
) -> RepairResult:
    """Blocking wrapper around :func:`repair`."""
    return asyncio.run(repair(project_root, locked, export_root, **kwargs))

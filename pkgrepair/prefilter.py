"""Locked-set pre-filter — strip known-bad entries before the first install."""

from __future__ import annotations

import structlog

from pkgrepair.models import LockedDependencySet, Manifest, RemovalRecord
from pkgrepair.pruner import remove_locked, remove_scripts

log = structlog.get_logger("pkgrepair.engine")


def pre_filter(
    manifest: Manifest,
    locked: LockedDependencySet,
    record: RemovalRecord,
) -> list[str]:
    """Remove scripts and locked dependencies from *manifest* in place.

    Runs once per repair, before any install attempt. Returns the names of
    the dependencies removed.
    """
    scripts = remove_scripts(manifest, record)
    if scripts:
        log.info("prefilter.scripts_removed", count=len(scripts), scripts=scripts)

    removed = remove_locked(manifest, locked, record)
    if removed:
        log.info("prefilter.locked_removed", count=len(removed), packages=removed)
    else:
        log.debug("prefilter.no_locked_matches", locked=len(locked))

    return removed

"""Manifest pruner — move matching entries out of a manifest into a RemovalRecord."""

from __future__ import annotations

from collections.abc import Callable, Mapping

from pkgrepair.models import (
    DEPENDENCY_KINDS,
    DependencyKind,
    Manifest,
    Origin,
    RemovalRecord,
)

NamePredicate = Callable[[str], bool]


def alias_predicate(alias: str) -> NamePredicate:
    """Match *alias* itself and anything under ``alias/``.

    The two tests are kept separate: ``foo`` matches ``foo`` and ``foo/x``
    but never ``foobar``.
    """
    prefix = f"{alias}/"

    def _matches(name: str) -> bool:
        return name == alias or name.startswith(prefix)

    return _matches


def locked_predicate(locked: Mapping[str, object]) -> NamePredicate:
    """Match names that are keys of the locked dependency set."""

    def _matches(name: str) -> bool:
        return name in locked

    return _matches


def prune(
    dependencies: dict[str, str] | None,
    predicate: NamePredicate,
    bucket: dict[str, str],
) -> list[str]:
    """Remove every entry of *dependencies* matching *predicate* into *bucket*.

    Returns the removed names in manifest order. A missing mapping is a no-op.
    """
    if not dependencies:
        return []

    removed = [name for name in dependencies if predicate(name)]
    for name in removed:
        bucket[name] = dependencies.pop(name)
    return removed


def prune_manifest(
    manifest: Manifest,
    predicate: NamePredicate,
    record: RemovalRecord,
    origin: Origin,
    kinds: tuple[DependencyKind, ...] = DEPENDENCY_KINDS,
) -> dict[DependencyKind, list[str]]:
    """Apply :func:`prune` to each dependency section of *manifest*."""
    return {
        kind: prune(manifest.section(kind), predicate, record.bucket(origin, kind))
        for kind in kinds
    }


def remove_alias(manifest: Manifest, alias: str, record: RemovalRecord) -> list[str]:
    """Prune every dependency implicated by *alias* (origin ``local``)."""
    removed = prune_manifest(manifest, alias_predicate(alias), record, "local")
    return [name for names in removed.values() for name in names]


def remove_locked(
    manifest: Manifest, locked: Mapping[str, object], record: RemovalRecord
) -> list[str]:
    """Prune every dependency listed in the locked set (origin ``locked``)."""
    removed = prune_manifest(manifest, locked_predicate(locked), record, "locked")
    return [name for names in removed.values() for name in names]


def remove_scripts(manifest: Manifest, record: RemovalRecord) -> list[str]:
    """Strip the whole ``scripts`` mapping, recording each script."""
    scripts = manifest.data.pop("scripts", None)
    if not scripts:
        return []
    record.scripts.update(scripts)
    return list(scripts)

"""Read and write manifest and locked-dependency documents."""

from __future__ import annotations

import json
from pathlib import Path

import structlog
from pydantic import TypeAdapter, ValidationError

from pkgrepair.exceptions import ManifestError, PersistenceFailure
from pkgrepair.models import DEPENDENCY_KINDS, LockedDependency, Manifest

log = structlog.get_logger("pkgrepair.engine")

_LOCKED_ADAPTER = TypeAdapter(dict[str, LockedDependency])


def load_manifest(path: Path) -> Manifest:
    """Decode the manifest at *path*.

    Raises :class:`ManifestError` if the file is unreadable, is not a JSON
    object, or holds a non-object ``dependencies``/``devDependencies``/``scripts``.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ManifestError(path, str(exc)) from exc

    try:
        data = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"invalid JSON: {exc}") from exc

    if not isinstance(data, dict):
        raise ManifestError(path, "top level must be a JSON object")

    for key in (*DEPENDENCY_KINDS, "scripts"):
        section = data.get(key)
        if section is not None and not isinstance(section, dict):
            raise ManifestError(path, f"'{key}' must be a JSON object")

    return Manifest(data=data)


def save_manifest(manifest: Manifest, path: Path) -> None:
    """Overwrite *path* with the current manifest contents."""
    write_json(path, manifest.data)
    log.debug("manifest.saved", path=str(path), dependencies=manifest.dependency_count())


def write_json(path: Path, data: object) -> None:
    """Write *data* as indented JSON, creating parent directories.

    Raises :class:`PersistenceFailure` on any OS error.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    except OSError as exc:
        raise PersistenceFailure(path, str(exc)) from exc


def load_locked_dependencies(path: Path) -> dict[str, LockedDependency]:
    """Load the locked dependency set (name -> {name, version}).

    A missing file is not an error: the run simply has nothing to pre-filter.
    """
    if not path.exists():
        log.warning("locked.missing", path=str(path))
        return {}

    try:
        return _LOCKED_ADAPTER.validate_json(path.read_bytes())
    except OSError as exc:
        raise ManifestError(path, str(exc)) from exc
    except ValidationError as exc:
        raise ManifestError(path, f"invalid locked dependency set: {exc}") from exc

"""Tests for manifest / locked-set I/O, data models and workspace setup."""

from __future__ import annotations

import json

import pytest

from pkgrepair.exceptions import ManifestError, PersistenceFailure
from pkgrepair.manifest import load_locked_dependencies, load_manifest, save_manifest
from pkgrepair.models import (
    DEPENDENCY_KINDS,
    ORIGINS,
    LockedDependency,
    Manifest,
    RemovalRecord,
    RepairState,
)
from pkgrepair.workspace import prepare_workspace

# ── load / save ──────────────────────────────────────────────────────────


class TestLoadManifest:
    def test_roundtrip_preserves_unknown_keys(self, tmp_path):
        path = tmp_path / "package.json"
        data = {
            "name": "app",
            "version": "1.0.0",
            "private": True,
            "resolutions": {"minimist": "1.2.8"},
            "dependencies": {"lodash": "4"},
        }
        path.write_text(json.dumps(data))

        manifest = load_manifest(path)
        manifest.dependencies.pop("lodash")
        save_manifest(manifest, path)

        saved = json.loads(path.read_text())
        assert saved == {**data, "dependencies": {}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="package.json"):
            load_manifest(tmp_path / "package.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("{not json")
        with pytest.raises(ManifestError, match="invalid JSON"):
            load_manifest(path)

    def test_top_level_must_be_object(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text("[]")
        with pytest.raises(ManifestError, match="JSON object"):
            load_manifest(path)

    def test_dependencies_must_be_object(self, tmp_path):
        path = tmp_path / "package.json"
        path.write_text(json.dumps({"devDependencies": ["jest"]}))
        with pytest.raises(ManifestError, match="devDependencies"):
            load_manifest(path)

    def test_save_failure(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("x")
        with pytest.raises(PersistenceFailure):
            save_manifest(Manifest({}), blocker / "package.json")


class TestLoadLockedDependencies:
    def test_loads_descriptors(self, tmp_path):
        path = tmp_path / "locked.json"
        path.write_text(
            json.dumps(
                {
                    "@acme/internal-lib": {
                        "name": "@acme/internal-lib",
                        "version": "2.3.4",
                        "registry": "internal",
                    }
                }
            )
        )
        locked = load_locked_dependencies(path)
        assert locked == {
            "@acme/internal-lib": LockedDependency(name="@acme/internal-lib", version="2.3.4")
        }

    def test_missing_file_is_empty(self, tmp_path):
        assert load_locked_dependencies(tmp_path / "absent.json") == {}

    def test_invalid_descriptor(self, tmp_path):
        path = tmp_path / "locked.json"
        path.write_text(json.dumps({"x": {"name": "x"}}))
        with pytest.raises(ManifestError, match="locked dependency set"):
            load_locked_dependencies(path)

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "locked.json"
        path.write_text("module.exports = {}")
        with pytest.raises(ManifestError):
            load_locked_dependencies(path)


# ── models ───────────────────────────────────────────────────────────────


class TestModels:
    def test_kinds_and_origins_are_manifest_keys(self):
        assert DEPENDENCY_KINDS == ("dependencies", "devDependencies")
        assert ORIGINS == ("local", "locked")
        record = RemovalRecord()
        for origin in ORIGINS:
            for kind in DEPENDENCY_KINDS:
                assert record.bucket(origin, kind) == {}

    def test_dependency_count(self):
        manifest = Manifest({"dependencies": {"a": "1", "b": "2"}, "devDependencies": {"c": "3"}})
        assert manifest.dependency_count() == 3
        assert Manifest({}).dependency_count() == 0

    def test_record_bucket_unknown_origin(self):
        with pytest.raises(ValueError):
            RemovalRecord().bucket("remote", "dependencies")  # type: ignore[arg-type]

    def test_record_removed_names(self):
        record = RemovalRecord(local_dependencies={"a": "1"}, locked_dependencies={"b": "2"})
        assert record.removed_names("dependencies") == {"a", "b"}
        assert record.removed_names("devDependencies") == set()
        assert not record.is_empty

    def test_terminal_states(self):
        assert {s for s in RepairState if s.is_terminal} == {
            RepairState.SUCCESS,
            RepairState.ABORTED,
            RepairState.EXHAUSTED,
        }

    def test_locked_dependency_is_frozen(self):
        dep = LockedDependency(name="a", version="1")
        with pytest.raises(Exception):
            dep.version = "2"  # type: ignore[misc]


# ── workspace ────────────────────────────────────────────────────────────


class TestPrepareWorkspace:
    def test_copies_into_new_directory(self, tmp_path):
        source = tmp_path / "input" / "package.json"
        source.parent.mkdir()
        source.write_text('{"dependencies": {"a": "1"}}')
        target_root = tmp_path / "scratch" / "project"

        staged = prepare_workspace(source, target_root, "package.json")

        assert staged == target_root / "package.json"
        assert staged.read_text() == source.read_text()

    def test_missing_source(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            prepare_workspace(tmp_path / "nope.json", tmp_path / "p", "package.json")

    def test_default_and_custom_manifest_name(self, tmp_path):
        source = tmp_path / "input.json"
        source.write_text("{}")

        assert prepare_workspace(source, tmp_path / "a").name == "package.json"
        assert prepare_workspace(source, tmp_path / "b", "manifest.json").name == "manifest.json"

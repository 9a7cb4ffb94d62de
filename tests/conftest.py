"""Shared pytest fixtures for pkgrepair tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
import structlog

from pkgrepair.models import InstallOutcome


class ScriptedInstaller:
    """Fake installer that replays a fixed list of outcomes.

    Plain strings are treated as failure diagnostics. Once the script runs
    out, the last outcome repeats. Every call records the manifest as it
    was on disk at that moment.
    """

    def __init__(self, *outcomes: InstallOutcome | str, manifest_name: str = "package.json"):
        self.outcomes = [
            InstallOutcome.failure(o) if isinstance(o, str) else o for o in outcomes
        ] or [InstallOutcome.success()]
        self.manifest_name = manifest_name
        self.calls: list[Path] = []
        self.seen: list[dict] = []

    async def install(self, cwd: Path) -> InstallOutcome:
        self.calls.append(cwd)
        self.seen.append(json.loads((cwd / self.manifest_name).read_text()))
        index = min(len(self.calls), len(self.outcomes)) - 1
        return self.outcomes[index]


@pytest.fixture(autouse=True)
def _restore_logging():
    """Undo handlers installed by setup_logging (the CLI calls it per invocation)."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def project(tmp_path):
    """Scratch project directory."""
    root = tmp_path / "project"
    root.mkdir()
    return root


@pytest.fixture
def write_manifest(project):
    """Write a package.json into the scratch project and return its path."""

    def _write(data: dict, name: str = "package.json") -> Path:
        path = project / name
        path.write_text(json.dumps(data, indent=2))
        return path

    return _write


@pytest.fixture
def export_root(tmp_path):
    return tmp_path / "export"


@pytest.fixture
def scripted():
    """The :class:`ScriptedInstaller` factory."""
    return ScriptedInstaller

"""Tests for CommandInstaller — real subprocesses, no package manager needed."""

from __future__ import annotations

import sys

import pytest

from pkgrepair.installer import CommandInstaller, Installer


class TestCommandInstaller:
    @pytest.mark.asyncio
    async def test_success(self, tmp_path):
        installer = CommandInstaller([sys.executable, "-c", "print('done')"])
        outcome = await installer.install(tmp_path)
        assert outcome.ok
        assert outcome.exit_code == 0
        assert "done" in outcome.diagnostic

    @pytest.mark.asyncio
    async def test_failure_merges_stderr(self, tmp_path):
        script = (
            "import sys\n"
            "print('[1/4] Resolving packages...')\n"
            "sys.stderr.write('error Couldn\\'t find package \"left-pad\"\\n')\n"
            "sys.exit(1)\n"
        )
        installer = CommandInstaller([sys.executable, "-c", script])
        outcome = await installer.install(tmp_path)
        assert not outcome.ok
        assert outcome.exit_code == 1
        assert "Resolving packages" in outcome.diagnostic
        assert 'error Couldn\'t find package "left-pad"' in outcome.diagnostic

    @pytest.mark.asyncio
    async def test_runs_in_project_root(self, tmp_path):
        installer = CommandInstaller([sys.executable, "-c", "import os; print(os.getcwd())"])
        outcome = await installer.install(tmp_path)
        assert tmp_path.resolve().as_posix() in outcome.diagnostic.replace("\\", "/")

    @pytest.mark.asyncio
    async def test_missing_executable_is_failure(self, tmp_path):
        installer = CommandInstaller(["pkgrepair-no-such-package-manager", "install"])
        outcome = await installer.install(tmp_path)
        assert not outcome.ok
        assert outcome.exit_code is None
        assert "failed to start" in outcome.diagnostic

    def test_command_string_is_split(self):
        assert CommandInstaller("yarn install --frozen-lockfile").command == [
            "yarn",
            "install",
            "--frozen-lockfile",
        ]

    def test_default_command(self):
        assert CommandInstaller().command == ["yarn", "install"]

    def test_empty_command(self):
        with pytest.raises(ValueError):
            CommandInstaller("")

    def test_satisfies_protocol(self):
        assert isinstance(CommandInstaller(), Installer)

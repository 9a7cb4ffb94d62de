"""Install capability — run the package manager and report a tagged outcome."""

from __future__ import annotations

import asyncio
import shlex
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

import structlog

from pkgrepair.models import InstallOutcome

log = structlog.get_logger("pkgrepair.engine")


@runtime_checkable
class Installer(Protocol):
    """Interface every install backend must satisfy."""

    async def install(self, cwd: Path) -> InstallOutcome: ...


class CommandInstaller:
    """Run an install command (``yarn install`` by default) in the project root.

    stderr is merged into stdout so the classifier sees the whole diagnostic.
    No timeout is applied; the command's own exit is the only completion
    signal.
    """

    def __init__(self, command: Sequence[str] | str = ("yarn", "install")) -> None:
        if isinstance(command, str):
            command = shlex.split(command)
        if not command:
            raise ValueError("install command must not be empty")
        self.command = list(command)

    async def install(self, cwd: Path) -> InstallOutcome:
        log.debug("install.start", command=self.command, cwd=str(cwd))
        try:
            proc = await asyncio.create_subprocess_exec(
                *self.command,
                cwd=str(cwd),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except OSError as exc:
            # Missing executable or bad cwd: report it as a failed attempt.
            return InstallOutcome.failure(
                f"failed to start {shlex.join(self.command)}: {exc}", exit_code=None
            )

        stdout, _ = await proc.communicate()
        output = stdout.decode("utf-8", errors="replace")
        if proc.returncode != 0:
            return InstallOutcome.failure(output, exit_code=proc.returncode)
        return InstallOutcome.success(output)

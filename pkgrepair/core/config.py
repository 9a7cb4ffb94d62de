"""Runtime settings read from ``PKGREPAIR_*`` environment variables."""

from __future__ import annotations

import os
import shlex
from dataclasses import dataclass, field

PACKAGE_MANAGERS = ("yarn", "npm")


@dataclass(frozen=True)
class Settings:
    """Resolved configuration for one process.

    Environment variables:
        PKGREPAIR_PACKAGE_MANAGER — yarn | npm (default: yarn)
        PKGREPAIR_INSTALL_COMMAND — install command line (default: "<pm> install")
        PKGREPAIR_MANIFEST_NAME   — manifest file name (default: package.json)
        PKGREPAIR_LOG_LEVEL       — log level (default: INFO)
        PKGREPAIR_LOG_FORMAT      — console | json (default: console)
    """

    package_manager: str = "yarn"
    install_command: tuple[str, ...] = field(default=("yarn", "install"))
    manifest_name: str = "package.json"
    log_level: str = "INFO"
    log_format: str = "console"

    @property
    def grammar(self) -> str:
        """Diagnostic grammar matching the package manager."""
        return self.package_manager

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> Settings:
        env = os.environ if environ is None else environ

        package_manager = env.get("PKGREPAIR_PACKAGE_MANAGER", "yarn").strip().lower()
        if package_manager not in PACKAGE_MANAGERS:
            raise ValueError(
                f"PKGREPAIR_PACKAGE_MANAGER must be one of {', '.join(PACKAGE_MANAGERS)}, "
                f"got '{package_manager}'"
            )

        raw_command = env.get("PKGREPAIR_INSTALL_COMMAND")
        if raw_command:
            install_command = tuple(shlex.split(raw_command))
        else:
            install_command = (package_manager, "install")

        return cls(
            package_manager=package_manager,
            install_command=install_command,
            manifest_name=env.get("PKGREPAIR_MANIFEST_NAME", "package.json"),
            log_level=env.get("PKGREPAIR_LOG_LEVEL", "INFO").upper(),
            log_format=env.get("PKGREPAIR_LOG_FORMAT", "console").lower(),
        )

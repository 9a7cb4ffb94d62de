"""Data models for the manifest repair loop."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

Origin = Literal["local", "locked"]
DependencyKind = Literal["dependencies", "devDependencies"]

DEPENDENCY_KINDS: tuple[DependencyKind, ...] = ("dependencies", "devDependencies")
ORIGINS: tuple[Origin, ...] = ("local", "locked")


class LockedDependency(BaseModel):
    """A package known in advance to be unresolvable in the scratch install."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    name: str
    version: str


LockedDependencySet = Mapping[str, LockedDependency]


@dataclass
class Manifest:
    """A decoded package manifest.

    Only ``dependencies``, ``devDependencies`` and ``scripts`` are touched by
    the repair loop; every other key is carried through unchanged.
    """

    data: dict[str, Any] = field(default_factory=dict)

    def section(self, kind: DependencyKind) -> dict[str, str] | None:
        return self.data.get(kind)

    @property
    def dependencies(self) -> dict[str, str] | None:
        return self.data.get("dependencies")

    @property
    def dev_dependencies(self) -> dict[str, str] | None:
        return self.data.get("devDependencies")

    @property
    def scripts(self) -> dict[str, str] | None:
        return self.data.get("scripts")

    def dependency_count(self) -> int:
        return sum(len(self.section(kind) or {}) for kind in DEPENDENCY_KINDS)


@dataclass
class RemovalRecord:
    """Every entry pruned during one run, bucketed by origin and kind.

    Buckets are only ever added to. A name lands in at most one bucket
    because pruning deletes it from the manifest first.
    """

    local_dependencies: dict[str, str] = field(default_factory=dict)
    local_dev_dependencies: dict[str, str] = field(default_factory=dict)
    locked_dependencies: dict[str, str] = field(default_factory=dict)
    locked_dev_dependencies: dict[str, str] = field(default_factory=dict)
    scripts: dict[str, str] = field(default_factory=dict)

    def bucket(self, origin: Origin, kind: DependencyKind) -> dict[str, str]:
        dev = kind == "devDependencies"
        if origin == "local":
            return self.local_dev_dependencies if dev else self.local_dependencies
        if origin == "locked":
            return self.locked_dev_dependencies if dev else self.locked_dependencies
        raise ValueError(f"unknown origin: {origin!r}")

    def combined(self, kind: DependencyKind) -> dict[str, str]:
        """Local and locked removals of one kind merged into a single mapping."""
        return {**self.bucket("local", kind), **self.bucket("locked", kind)}

    def removed_names(self, kind: DependencyKind) -> set[str]:
        return set(self.combined(kind))

    @property
    def is_empty(self) -> bool:
        return not any(
            (
                self.local_dependencies,
                self.local_dev_dependencies,
                self.locked_dependencies,
                self.locked_dev_dependencies,
                self.scripts,
            )
        )


@dataclass(frozen=True)
class InstallOutcome:
    """Tagged result of one install attempt."""

    ok: bool
    diagnostic: str = ""  # combined stdout + stderr
    exit_code: int | None = 0

    @classmethod
    def success(cls, output: str = "") -> InstallOutcome:
        return cls(ok=True, diagnostic=output, exit_code=0)

    @classmethod
    def failure(cls, diagnostic: str, exit_code: int | None = 1) -> InstallOutcome:
        return cls(ok=False, diagnostic=diagnostic, exit_code=exit_code)


class RepairState(Enum):
    """Retry controller states. SUCCESS, ABORTED and EXHAUSTED are terminal."""

    IDLE = "idle"
    ATTEMPTING = "attempting"
    PRUNING = "pruning"
    SUCCESS = "success"
    ABORTED = "aborted"
    EXHAUSTED = "exhausted"

    @property
    def is_terminal(self) -> bool:
        return self in (RepairState.SUCCESS, RepairState.ABORTED, RepairState.EXHAUSTED)


@dataclass
class AttemptLog:
    """What happened during a single install attempt."""

    number: int  # 1-based
    ok: bool
    alias: str | None = None
    removed: list[str] = field(default_factory=list)


@dataclass
class RepairResult:
    """Summary of a completed repair run."""

    state: RepairState
    budget: int
    record: RemovalRecord
    history: list[AttemptLog] = field(default_factory=list)

    @property
    def attempts(self) -> int:
        return len(self.history)

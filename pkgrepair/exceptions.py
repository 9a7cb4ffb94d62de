"""Custom exceptions for pkgrepair."""

from __future__ import annotations

from pathlib import Path


class RepairError(Exception):
    """Base exception for all repair errors."""


class ManifestError(RepairError):
    """Raised when a manifest or locked-dependency document cannot be decoded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Invalid document {self.path}: {reason}")


class UnclassifiableFailure(RepairError):
    """Raised when an install failure cannot be attributed to a package."""

    def __init__(self, diagnostic: str, attempt: int):
        self.diagnostic = diagnostic
        self.attempt = attempt
        super().__init__(f"Install attempt {attempt} failed with an unrecognized diagnostic")


class RetryBudgetExhausted(RepairError):
    """Raised when an install keeps failing and no further prune is possible.

    Either the retry budget ran out or the implicated alias matched nothing.
    """

    def __init__(self, budget: int, attempts: int, diagnostic: str):
        self.budget = budget
        self.attempts = attempts
        self.diagnostic = diagnostic
        super().__init__(
            f"Install still failing after {attempts} attempts (retry budget {budget})"
        )


class PersistenceFailure(RepairError):
    """Raised when a manifest or export document cannot be written."""

    def __init__(self, path: Path | str, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {self.path}: {reason}")

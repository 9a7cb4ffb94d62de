"""pkgrepair — prune unresolvable packages from a manifest until it installs."""

from pkgrepair.controller import RetryController
from pkgrepair.diagnostics import classify
from pkgrepair.exceptions import (
    ManifestError,
    PersistenceFailure,
    RepairError,
    RetryBudgetExhausted,
    UnclassifiableFailure,
)
from pkgrepair.exporter import export_removals
from pkgrepair.models import (
    InstallOutcome,
    LockedDependency,
    Manifest,
    RemovalRecord,
    RepairResult,
    RepairState,
)
from pkgrepair.prefilter import pre_filter
from pkgrepair.runner import repair, repair_sync

__version__ = "0.1.0"

__all__ = [
    "InstallOutcome",
    "LockedDependency",
    "Manifest",
    "ManifestError",
    "PersistenceFailure",
    "RemovalRecord",
    "RepairError",
    "RepairResult",
    "RepairState",
    "RetryBudgetExhausted",
    "RetryController",
    "UnclassifiableFailure",
    "classify",
    "export_removals",
    "pre_filter",
    "repair",
    "repair_sync",
]

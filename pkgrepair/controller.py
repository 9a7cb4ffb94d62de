"""RetryController — install, classify, prune, persist, retry."""

from __future__ import annotations

from pathlib import Path

import structlog

from pkgrepair.diagnostics import DEFAULT_GRAMMAR, DiagnosticGrammar, classify, get_grammar
from pkgrepair.exceptions import RetryBudgetExhausted, UnclassifiableFailure
from pkgrepair.installer import Installer
from pkgrepair.manifest import save_manifest
from pkgrepair.models import (
    AttemptLog,
    Manifest,
    RemovalRecord,
    RepairResult,
    RepairState,
)
from pkgrepair.pruner import remove_alias

log = structlog.get_logger("pkgrepair.engine")


class RetryController:
    """Drive install attempts until one succeeds or no progress is possible.

    State machine::

        IDLE -> ATTEMPTING -> SUCCESS
                           -> ABORTED    (diagnostic names no package)
                           -> PRUNING -> ATTEMPTING
                                      -> EXHAUSTED (budget spent or nothing to prune)

    The budget is the dependency + devDependency count at entry and at most
    ``budget + 1`` attempts are made. A prune that matches nothing (the
    alias is a transitive package) ends the run as EXHAUSTED, since the
    next install would see the same manifest.

    The controller owns *manifest* and *record* for the whole run; both are
    mutated in place and the manifest is written to *manifest_path* after
    every prune.
    """

    def __init__(
        self,
        manifest: Manifest,
        manifest_path: Path,
        record: RemovalRecord,
        installer: Installer,
        grammar: DiagnosticGrammar | str = DEFAULT_GRAMMAR,
    ) -> None:
        self.manifest = manifest
        self.manifest_path = manifest_path
        self.record = record
        self.installer = installer
        self.grammar = get_grammar(grammar) if isinstance(grammar, str) else grammar
        self.state = RepairState.IDLE
        self.history: list[AttemptLog] = []

    @property
    def project_root(self) -> Path:
        return self.manifest_path.parent

    async def run(self) -> RepairResult:
        """Run the loop to a terminal state.

        Returns the result on SUCCESS. Raises :class:`UnclassifiableFailure`
        (ABORTED) or :class:`RetryBudgetExhausted` (EXHAUSTED); the manifest
        on disk reflects the last prune in either case.
        """
        if self.state is not RepairState.IDLE:
            raise RuntimeError(f"controller already used (state={self.state.value})")

        budget = self.manifest.dependency_count()
        log.info("repair.start", budget=budget, project_root=str(self.project_root))

        diagnostic = ""
        for number in range(1, budget + 2):
            self.state = RepairState.ATTEMPTING
            log.info("repair.attempt", attempt=number, max_attempts=budget + 1)
            outcome = await self.installer.install(self.project_root)

            if outcome.ok:
                self.history.append(AttemptLog(number=number, ok=True))
                self.state = RepairState.SUCCESS
                log.info("repair.success", attempts=number, budget=budget)
                return RepairResult(
                    state=self.state, budget=budget, record=self.record, history=self.history
                )

            diagnostic = outcome.diagnostic
            alias = classify(outcome, self.grammar)
            if alias is None:
                self.history.append(AttemptLog(number=number, ok=False))
                self.state = RepairState.ABORTED
                log.error("repair.unclassifiable", attempt=number, exit_code=outcome.exit_code)
                raise UnclassifiableFailure(diagnostic, number)

            self.state = RepairState.PRUNING
            removed = remove_alias(self.manifest, alias, self.record)
            self.history.append(AttemptLog(number=number, ok=False, alias=alias, removed=removed))
            if not removed:
                # Transitive or unknown package: the next install would repeat this one.
                self.state = RepairState.EXHAUSTED
                log.error("repair.prune_noop", attempt=number, alias=alias, budget=budget)
                raise RetryBudgetExhausted(budget, number, diagnostic)

            save_manifest(self.manifest, self.manifest_path)
            log.info("repair.pruned", attempt=number, alias=alias, packages=removed)

        self.state = RepairState.EXHAUSTED
        log.error("repair.exhausted", attempts=len(self.history), budget=budget)
        raise RetryBudgetExhausted(budget, len(self.history), diagnostic)

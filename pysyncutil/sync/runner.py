"""Batch execution of every stored rule."""

import logging
from typing import Optional

from ..output import OutputFormatter
from .engine import SyncEngine
from .modes import RunMode
from .results import ChangeAccountant, RuleOutcome, RuleStatus, RunSummary
from .rule import SyncRule

logger = logging.getLogger(__name__)


class BatchRunner:
    """Runs every rule through the sync engine, one at a time, in order.

    A failing rule is counted and the batch moves on to the next one.
    """

    def __init__(self, engine: SyncEngine, output: Optional[OutputFormatter] = None):
        """Initialize batch runner.

        Args:
            engine: Engine reconciling individual rules
            output: Output formatter; defaults to the engine's
        """
        self.engine = engine
        self.output = output or engine.output

    def run_all(
        self,
        rules: list[SyncRule],
        mode: RunMode,
        accountant: Optional[ChangeAccountant] = None,
    ) -> RunSummary:
        """Reconcile all rules and summarize the run.

        Args:
            rules: Rules in storage order
            mode: Run mode flags applied to every rule
            accountant: Change counter for this invocation; may already hold
                changes made before the run (e.g. creating the rules file)

        Returns:
            RunSummary with success/failure counts and the change total
        """
        accountant = accountant or ChangeAccountant()
        summary = RunSummary()

        if not rules:
            self.output.info("No synchronization rules defined.")
            summary.total_changes = accountant.total
            return summary

        prefix = mode.label_prefix
        self.output.info(f"{prefix}Starting synchronization...")

        for rule in rules:
            self.output.info(f"{prefix}Processing: {rule.label}")
            outcome = self._run_rule(rule, mode)
            summary.record(outcome)
            accountant.add(outcome.change_count)
            logger.debug(
                "Rule %d finished with %s (%d change(s))",
                rule.position,
                outcome.status.value,
                outcome.change_count,
            )

        summary.total_changes = accountant.total
        self._display_summary(summary, mode)
        return summary

    def _run_rule(self, rule: SyncRule, mode: RunMode) -> RuleOutcome:
        try:
            return self.engine.reconcile(rule, mode)
        except KeyboardInterrupt:
            raise
        except Exception as e:
            # The engine contains per-rule errors; anything else still must
            # not stop the remaining rules.
            logger.debug("Unexpected error for %s", rule.label, exc_info=True)
            self.output.error(f"Error syncing {rule.label}: {e}")
            return RuleOutcome(rule, RuleStatus.FAILURE, 0)

    def _display_summary(self, summary: RunSummary, mode: RunMode) -> None:
        self.output.success(f"{mode.label_prefix}Synchronization complete")

        if summary.failure_count > 0:
            self.output.warning(
                f"{summary.success_count} succeeded, {summary.failure_count} failed"
            )
        else:
            self.output.info(
                f"All {summary.success_count} rules processed successfully"
            )

        self.output.info(f"Total updates: {summary.total_changes}")

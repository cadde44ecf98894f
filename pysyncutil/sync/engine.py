"""Core sync engine for reconciling a single rule."""

import logging
import os
from typing import Optional

from ..exceptions import MirrorError, SourceMissingError, SyncFilesystemError
from ..output import OutputFormatter
from .mirror import Mirror, MirrorResult, RsyncMirror, mirror_arguments
from .modes import RunMode
from .negotiator import DeletionNegotiator
from .results import RuleOutcome, RuleStatus
from .rule import SyncRule

logger = logging.getLogger(__name__)


class SyncEngine:
    """Makes one rule's destination mirror its source.

    Every reconciliation starts with a simulated pass that has deletions
    enabled. Its report is used to find destructive changes before anything
    is touched. Only then is the real pass run, with deletions enabled only
    if the operator (or ``--force``) allowed them.
    """

    def __init__(
        self,
        mirror: Optional[Mirror] = None,
        output: Optional[OutputFormatter] = None,
        negotiator: Optional[DeletionNegotiator] = None,
    ):
        """Initialize sync engine.

        Args:
            mirror: File-mirroring primitive; defaults to rsync
            output: Output formatter for displaying progress/status
            negotiator: Decides on deletions; defaults to an interactive one
        """
        self.mirror = mirror or RsyncMirror()
        self.output = output or OutputFormatter()
        self.negotiator = negotiator or DeletionNegotiator(self.output)

    def reconcile(self, rule: SyncRule, mode: RunMode) -> RuleOutcome:
        """Reconcile a single rule.

        Per-rule errors are reported and turned into a failed outcome; they
        never propagate to the caller.

        Args:
            rule: Rule to reconcile
            mode: Run mode flags

        Returns:
            RuleOutcome with the status and number of changes

        Examples:
            >>> engine = SyncEngine()
            >>> rule = SyncRule("/home/user/docs", "/backup/docs")
            >>> outcome = engine.reconcile(rule, RunMode(simulate=True))
            >>> print(f"{outcome.change_count} change(s) pending")
        """
        try:
            return self._reconcile(rule, mode)
        except SourceMissingError as e:
            self.output.warning(str(e))
        except MirrorError as e:
            self.output.error(str(e))
            if e.stderr:
                logger.debug("Mirror stderr for %s: %s", rule.label, e.stderr.strip())
        except SyncFilesystemError as e:
            self.output.error(str(e))
        return RuleOutcome(rule, RuleStatus.FAILURE, 0)

    def _reconcile(self, rule: SyncRule, mode: RunMode) -> RuleOutcome:
        # Step 1: Source must still exist
        if not os.path.exists(rule.source):
            raise SourceMissingError(f"Source not found: {rule.source}")

        # Step 2: Destination parent directory
        changes = self._prepare_destination(rule, mode)

        source, destination = mirror_arguments(rule.source, rule.destination)

        # Step 3: Plan with deletions enabled, never touching the destination
        plan = self.mirror.run(source, destination, delete=True, simulate=True)
        self._check(plan, rule, "Sync planning failed")
        deletions = plan.deletions
        logger.debug(
            "Plan for %s: %d change(s), %d deletion(s)",
            rule.label,
            plan.change_count,
            len(deletions),
        )

        if mode.simulate:
            # Step 4 (dry run): report deletions, the plan is the result
            if deletions:
                self.output.items("[DRY RUN] Items to be deleted:", deletions)
            result = plan
        else:
            # Step 4: Negotiate deletions, Step 5: commit
            delete_enabled = self.negotiator.negotiate(
                deletions, simulate_run=False, force_delete=mode.force_delete
            )
            result = self.mirror.run(
                source, destination, delete=delete_enabled, simulate=False
            )
            # Step 6
            self._check(result, rule, "Sync failed")

        # Step 7: Count and report changes
        changes += result.change_count
        self._report(rule, mode, result)
        return RuleOutcome(rule, RuleStatus.SUCCESS, changes)

    def _prepare_destination(self, rule: SyncRule, mode: RunMode) -> int:
        """Make sure the destination's parent directory exists.

        Returns:
            Number of directories created (or that would be created)

        Raises:
            SyncFilesystemError: If the directory cannot be created
        """
        parent = rule.destination_parent
        if parent.is_dir():
            return 0

        if mode.simulate:
            self.output.info(f"[DRY RUN] Would create directory: {parent}")
            return 1

        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise SyncFilesystemError(
                f"Failed to create destination directory: {parent} ({e})"
            ) from e
        self.output.info(f"Directory created: {parent}")
        return 1

    def _check(self, result: MirrorResult, rule: SyncRule, message: str) -> None:
        if not result.ok:
            raise MirrorError(
                f"{message}: {rule.label} (exit status {result.returncode})",
                returncode=result.returncode,
                stderr=result.stderr,
            )

    def _report(self, rule: SyncRule, mode: RunMode, result: MirrorResult) -> None:
        prefix = mode.label_prefix
        if result.change_count == 0:
            self.output.info(f"{prefix}No changes needed: {rule.label}")
            return

        if mode.verbose:
            for line in result.lines:
                self.output.print(line)

        if mode.simulate:
            self.output.info(f"{prefix}Would copy: {rule.label}")
        else:
            self.output.info(f"Sync completed: {rule.label}")

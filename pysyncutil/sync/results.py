"""Outcomes and change accounting for sync runs."""

from dataclasses import dataclass, field
from enum import Enum

from .rule import SyncRule


class RuleStatus(str, Enum):
    """Result of reconciling one rule."""

    SUCCESS = "success"
    FAILURE = "failure"


@dataclass
class RuleOutcome:
    """Outcome of reconciling a single rule."""

    rule: SyncRule
    status: RuleStatus
    change_count: int = 0

    @property
    def succeeded(self) -> bool:
        return self.status == RuleStatus.SUCCESS

    def to_dict(self) -> dict:
        return {
            **self.rule.to_dict(),
            "status": self.status.value,
            "changes": self.change_count,
        }


class ChangeAccountant:
    """Running total of changes applied during one invocation.

    The total only grows; a new accountant starts at zero.
    """

    def __init__(self, total: int = 0):
        if total < 0:
            raise ValueError("Change total cannot be negative")
        self._total = total

    @property
    def total(self) -> int:
        return self._total

    def add(self, count: int) -> int:
        """Add changes to the total.

        Args:
            count: Number of changes (must not be negative)

        Returns:
            The new total
        """
        if count < 0:
            raise ValueError("Change count cannot be negative")
        self._total += count
        return self._total


@dataclass
class RunSummary:
    """Aggregate result of a batch run."""

    success_count: int = 0
    failure_count: int = 0
    total_changes: int = 0
    outcomes: list[RuleOutcome] = field(default_factory=list)

    def record(self, outcome: RuleOutcome) -> None:
        """Tally one rule outcome."""
        self.outcomes.append(outcome)
        if outcome.succeeded:
            self.success_count += 1
        else:
            self.failure_count += 1

    def to_dict(self) -> dict:
        return {
            "succeeded": self.success_count,
            "failed": self.failure_count,
            "total_updates": self.total_changes,
            "rules": [outcome.to_dict() for outcome in self.outcomes],
        }

"""Run mode flags shared by every rule of one invocation."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RunMode:
    """Mode flags for one syncutil invocation.

    Examples:
        >>> RunMode(simulate=True).label_prefix
        '[DRY RUN] '
    """

    simulate: bool = False
    """Report planned changes without applying them"""

    verbose: bool = True
    """Echo itemized changes and informational messages"""

    force_delete: bool = False
    """Apply deletions without asking the operator"""

    @property
    def label_prefix(self) -> str:
        """Prefix for messages describing simulated work."""
        return "[DRY RUN] " if self.simulate else ""

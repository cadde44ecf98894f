"""Sync orchestration for syncutil - rules, planning, negotiation and execution."""

from .engine import SyncEngine
from .mirror import MirrorResult, RsyncMirror, mirror_arguments
from .modes import RunMode
from .negotiator import DeletionNegotiator, prompt_confirmation
from .plan import OperationKind, PlannedOperation, parse_operation
from .results import ChangeAccountant, RuleOutcome, RuleStatus, RunSummary
from .rule import SyncRule
from .runner import BatchRunner
from .store import RuleStore

__all__ = [
    "SyncEngine",
    "BatchRunner",
    "RuleStore",
    "SyncRule",
    "RunMode",
    "DeletionNegotiator",
    "prompt_confirmation",
    "RsyncMirror",
    "MirrorResult",
    "mirror_arguments",
    "OperationKind",
    "PlannedOperation",
    "parse_operation",
    "ChangeAccountant",
    "RuleOutcome",
    "RuleStatus",
    "RunSummary",
]

"""Exceptions raised by syncutil."""

from typing import Optional


class SyncUtilError(Exception):
    """Base exception for all syncutil errors."""


class ValidationError(SyncUtilError):
    """Raised when input to a rule-mutating command is invalid."""


class RuleNotFoundError(ValidationError):
    """Raised when a rule is requested from an empty store."""


class RuleRangeError(ValidationError):
    """Raised when a rule position is outside the stored range."""

    def __init__(self, position: int, count: int):
        self.position = position
        self.count = count
        super().__init__(f"Index out of range (1-{count})")


class SyncFilesystemError(SyncUtilError):
    """Raised when the filesystem could not be prepared for a rule."""


class MirrorError(SyncFilesystemError):
    """Raised when the mirror tool reports a non-zero exit status."""

    def __init__(self, message: str, returncode: int, stderr: Optional[str] = None):
        self.returncode = returncode
        self.stderr = stderr
        super().__init__(message)


class SourceMissingError(SyncUtilError):
    """Raised when a rule's source no longer exists."""


class StoreAccessError(SyncUtilError):
    """Raised when the rule store cannot be created, read or written."""

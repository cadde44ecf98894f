"""syncutil - keep destination directories mirrored from stored sync rules."""

from .exceptions import (
    MirrorError,
    RuleNotFoundError,
    RuleRangeError,
    SourceMissingError,
    StoreAccessError,
    SyncFilesystemError,
    SyncUtilError,
    ValidationError,
)

__version__ = "1.1.0"

__all__ = [
    "__version__",
    "SyncUtilError",
    "ValidationError",
    "RuleNotFoundError",
    "RuleRangeError",
    "SyncFilesystemError",
    "MirrorError",
    "SourceMissingError",
    "StoreAccessError",
]

"""Planned operations reported by the mirror tool."""

from dataclasses import dataclass
from enum import Enum

DELETE_PREFIX = "*deleting"
CREATED_DIRECTORY_PREFIX = "created directory "


class OperationKind(str, Enum):
    """Kinds of change a mirror pass can make to the destination."""

    CREATE = "create"
    """New file or link copied to the destination"""

    UPDATE = "update"
    """Existing destination item changed (content or attributes)"""

    DELETE = "delete"
    """Destination-only item removed"""

    MKDIR = "mkdir"
    """Directory created in the destination"""


@dataclass(frozen=True)
class PlannedOperation:
    """One change planned or performed by a mirror pass."""

    kind: OperationKind
    """Kind of change"""

    path: str
    """Path relative to the destination"""

    line: str
    """Raw output line the operation was parsed from"""

    @property
    def is_destructive(self) -> bool:
        return self.kind == OperationKind.DELETE


def parse_operation(line: str) -> PlannedOperation:
    """Parse one itemized output line from ``rsync -i``.

    Itemized lines look like ``>f+++++++++ docs/new.txt`` (an 11-character
    change summary followed by the path) or ``*deleting   old.txt``.

    Args:
        line: Non-empty output line

    Returns:
        PlannedOperation for the line

    Examples:
        >>> parse_operation("*deleting   old.txt").kind
        <OperationKind.DELETE: 'delete'>
        >>> parse_operation("cd+++++++++ photos/").kind
        <OperationKind.MKDIR: 'mkdir'>
        >>> parse_operation(">f.st...... notes.txt").path
        'notes.txt'
    """
    text = line.rstrip("\n")

    if text.startswith(DELETE_PREFIX):
        return PlannedOperation(
            OperationKind.DELETE, text[len(DELETE_PREFIX) :].strip(), text
        )

    if text.startswith(CREATED_DIRECTORY_PREFIX):
        return PlannedOperation(
            OperationKind.MKDIR, text[len(CREATED_DIRECTORY_PREFIX) :].strip(), text
        )

    flags, _, path = text.partition(" ")
    path = path.strip()
    is_new = "+++++++" in flags

    if len(flags) >= 2 and flags[1] == "d" and is_new:
        kind = OperationKind.MKDIR
    elif is_new:
        kind = OperationKind.CREATE
    else:
        kind = OperationKind.UPDATE

    return PlannedOperation(kind, path or text.strip(), text)


def parse_operations(lines: list[str]) -> list[PlannedOperation]:
    """Parse every non-empty line into a PlannedOperation."""
    return [parse_operation(line) for line in lines if line.strip()]

"""Synchronization rule definition."""

from dataclasses import dataclass
from pathlib import Path

from ..exceptions import ValidationError

RECORD_DELIMITER = "|"
"""Separator between source and destination in a stored record"""


@dataclass(frozen=True)
class SyncRule:
    """A one-way mirror target: make ``destination`` match ``source``.

    Examples:
        >>> rule = SyncRule.parse_record("/home/user/docs|/backup/docs", 1)
        >>> rule.source, rule.destination
        ('/home/user/docs', '/backup/docs')
        >>> rule.to_record()
        '/home/user/docs|/backup/docs'
    """

    source: str
    """Path to mirror from"""

    destination: str
    """Path to mirror into"""

    position: int = 0
    """1-based position in the rule store (0 when not yet stored)"""

    def __post_init__(self):
        validate_field("source", self.source)
        validate_field("destination", self.destination)

    @property
    def destination_parent(self) -> Path:
        """Directory that must exist before the destination can be written."""
        return Path(self.destination).parent

    @property
    def label(self) -> str:
        """Human-readable ``source -> destination`` form."""
        return f"{self.source} -> {self.destination}"

    @classmethod
    def parse_record(cls, record: str, position: int) -> "SyncRule":
        """Parse one stored record.

        Args:
            record: Line from the rule store (without line terminator)
            position: 1-based position of the record

        Returns:
            SyncRule instance

        Raises:
            ValidationError: If the record does not hold two fields
        """
        source, sep, destination = record.partition(RECORD_DELIMITER)
        if not sep:
            raise ValidationError(f"Malformed rule record: {record!r}")
        return cls(source=source, destination=destination, position=position)

    def to_record(self) -> str:
        """Serialize the rule to its stored form."""
        return f"{self.source}{RECORD_DELIMITER}{self.destination}"

    def to_dict(self) -> dict:
        """Convert rule to dictionary for JSON output."""
        return {
            "index": self.position,
            "source": self.source,
            "destination": self.destination,
        }


def validate_field(name: str, value: str) -> None:
    """Check that a rule field can be stored.

    Raises:
        ValidationError: If the value is empty, is not valid UTF-8 or holds
            a reserved character
    """
    if not value:
        raise ValidationError(f"Rule {name} must not be empty")
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable command line bytes arrive as lone surrogates
        shown = value.encode("utf-8", "backslashreplace").decode("utf-8")
        raise ValidationError(
            f"Rule {name} is not valid UTF-8: {shown}"
        ) from None
    if RECORD_DELIMITER in value:
        raise ValidationError(
            f"Rule {name} must not contain '{RECORD_DELIMITER}': {value}"
        )
    if "\n" in value or "\r" in value:
        raise ValidationError(f"Rule {name} must not contain line breaks")

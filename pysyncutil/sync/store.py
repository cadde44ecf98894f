"""Persistent storage of synchronization rules.

Rules are kept in a plain text file, one ``source|destination`` record per
line. A rule's position is its line number among the non-blank records, so
removing a rule renumbers every rule after it.
"""

import logging
import os
import tempfile
from pathlib import Path

from ..exceptions import (
    RuleNotFoundError,
    RuleRangeError,
    StoreAccessError,
    ValidationError,
)
from .rule import SyncRule, validate_field

logger = logging.getLogger(__name__)


class RuleStore:
    """Ordered, file-backed collection of sync rules.

    The backing file and its directory are created lazily on first access.
    No locking is done; concurrent writers may lose updates.
    """

    def __init__(self, path: Path):
        """Initialize the rule store.

        Args:
            path: Location of the rules file
        """
        self.path = Path(path)

    def ensure_exists(self) -> int:
        """Create the rules directory and file if they are missing.

        Returns:
            Number of filesystem items created (0, 1 or 2)

        Raises:
            StoreAccessError: If the directory or file cannot be created
        """
        created = 0
        directory = self.path.parent

        if not directory.is_dir():
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StoreAccessError(
                    f"Failed to create config directory: {directory} ({e})"
                ) from e
            logger.debug(f"Created rules directory {directory}")
            created += 1

        if not self.path.is_file():
            try:
                self.path.touch()
            except OSError as e:
                raise StoreAccessError(
                    f"Failed to create config file: {self.path} ({e})"
                ) from e
            logger.debug(f"Created rules file {self.path}")
            created += 1

        return created

    def _read_records(self) -> list[str]:
        if not self.path.exists():
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                lines = f.read().splitlines()
        except OSError as e:
            raise StoreAccessError(f"Failed to read rules file: {self.path} ({e})") from e
        except UnicodeDecodeError as e:
            raise StoreAccessError(
                f"Rules file is not valid UTF-8: {self.path} ({e})"
            ) from e
        return [line for line in lines if line.strip()]

    def _write_records(self, records: list[str]) -> None:
        """Replace the rules file contents via a temporary file."""
        directory = self.path.parent
        try:
            fd, tmp_name = tempfile.mkstemp(
                dir=directory, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    for record in records:
                        f.write(record + "\n")
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StoreAccessError(
                f"Failed to write rules file: {self.path} ({e})"
            ) from e

    def list(self) -> list[SyncRule]:
        """Return all rules in storage order.

        A missing store is treated as empty.
        """
        rules = []
        for position, record in enumerate(self._read_records(), start=1):
            try:
                rules.append(SyncRule.parse_record(record, position))
            except ValidationError as e:
                raise StoreAccessError(
                    f"Corrupt rules file {self.path} at rule {position}: {e}"
                ) from e
        return rules

    def append(self, source: str, destination: str) -> SyncRule:
        """Append a new rule.

        Args:
            source: Path to mirror from; must exist now
            destination: Path to mirror into; may not exist yet

        Returns:
            The stored rule, with its position set

        Raises:
            ValidationError: If the source does not exist or a field
                cannot be stored
        """
        validate_field("source", source)
        validate_field("destination", destination)
        if not os.path.exists(source):
            raise ValidationError(f"Source not found: {source}")

        records = self._read_records()
        rule = SyncRule(source=source, destination=destination, position=len(records) + 1)
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(rule.to_record() + "\n")
        except OSError as e:
            raise StoreAccessError(
                f"Failed to write rules file: {self.path} ({e})"
            ) from e
        logger.debug(f"Appended rule {rule.position}: {rule.label}")
        return rule

    def remove_at(self, position: int) -> SyncRule:
        """Remove the rule at a 1-based position.

        Args:
            position: Position as shown by :meth:`list`

        Returns:
            The removed rule

        Raises:
            RuleNotFoundError: If the store holds no rules
            RuleRangeError: If position is outside ``[1, count]``
        """
        records = self._read_records()
        if not records:
            raise RuleNotFoundError("No rules to remove")
        if position < 1 or position > len(records):
            raise RuleRangeError(position, len(records))

        removed = SyncRule.parse_record(records.pop(position - 1), position)
        self._write_records(records)
        logger.debug(f"Removed rule {position}: {removed.label}")
        return removed

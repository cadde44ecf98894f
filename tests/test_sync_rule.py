"""Unit tests for sync rules and planned operations."""

from pathlib import Path

import pytest

from pysyncutil.exceptions import ValidationError
from pysyncutil.sync.plan import OperationKind, parse_operation, parse_operations
from pysyncutil.sync.rule import SyncRule


class TestSyncRule:
    """Tests for SyncRule class."""

    def test_create_sync_rule(self):
        """Test creating a basic sync rule."""
        rule = SyncRule(source="/home/user/docs", destination="/backup/docs")

        assert rule.source == "/home/user/docs"
        assert rule.destination == "/backup/docs"
        assert rule.position == 0
        assert rule.label == "/home/user/docs -> /backup/docs"

    def test_destination_parent(self):
        """Test that the parent ignores a trailing slash."""
        rule = SyncRule(source="/src", destination="/backup/docs/")
        assert rule.destination_parent == Path("/backup")

    def test_parse_record(self):
        """Test parsing a stored record."""
        rule = SyncRule.parse_record("/src/a|/dest/a", 3)

        assert rule.source == "/src/a"
        assert rule.destination == "/dest/a"
        assert rule.position == 3

    def test_record_round_trip(self):
        """Test that to_record produces a parseable record."""
        rule = SyncRule(source="/src", destination="/dest")
        assert SyncRule.parse_record(rule.to_record(), 1).destination == "/dest"

    def test_parse_record_without_delimiter(self):
        """Test that a record missing the delimiter is rejected."""
        with pytest.raises(ValidationError, match="Malformed"):
            SyncRule.parse_record("/only/one/field", 1)

    @pytest.mark.parametrize(
        "source,destination",
        [
            ("", "/dest"),
            ("/src", ""),
            ("/src|x", "/dest"),
            ("/src", "/dest\nnext"),
        ],
    )
    def test_invalid_fields(self, source, destination):
        """Test that empty fields and reserved characters are rejected."""
        with pytest.raises(ValidationError):
            SyncRule(source=source, destination=destination)

    def test_to_dict(self):
        """Test converting rule to dictionary."""
        rule = SyncRule(source="/src", destination="/dest", position=2)
        assert rule.to_dict() == {
            "index": 2,
            "source": "/src",
            "destination": "/dest",
        }


class TestParseOperation:
    """Tests for parsing itemized mirror output."""

    def test_deletion(self):
        """Test parsing a deletion line."""
        op = parse_operation("*deleting   old/report.txt")
        assert op.kind == OperationKind.DELETE
        assert op.path == "old/report.txt"
        assert op.is_destructive

    def test_new_file(self):
        """Test parsing a new file line."""
        op = parse_operation(">f+++++++++ notes.txt")
        assert op.kind == OperationKind.CREATE
        assert op.path == "notes.txt"
        assert not op.is_destructive

    def test_updated_file(self):
        """Test parsing a changed file line."""
        op = parse_operation(">f.st...... notes.txt")
        assert op.kind == OperationKind.UPDATE

    def test_new_directory(self):
        """Test parsing a new directory line."""
        assert parse_operation("cd+++++++++ photos/").kind == OperationKind.MKDIR

    def test_directory_attribute_change(self):
        """Test that a touched directory is an update."""
        assert parse_operation(".d..t...... ./").kind == OperationKind.UPDATE

    def test_created_directory_message(self):
        """Test parsing rsync's 'created directory' message."""
        op = parse_operation("created directory /backup/docs")
        assert op.kind == OperationKind.MKDIR
        assert op.path == "/backup/docs"

    def test_path_with_spaces(self):
        """Test that paths containing spaces are kept whole."""
        assert parse_operation(">f+++++++++ my file.txt").path == "my file.txt"

    def test_parse_operations_skips_blank_lines(self):
        """Test that blank lines are not operations."""
        ops = parse_operations([">f+++++++++ a", "", "   ", "*deleting   b"])
        assert [op.kind for op in ops] == [
            OperationKind.CREATE,
            OperationKind.DELETE,
        ]

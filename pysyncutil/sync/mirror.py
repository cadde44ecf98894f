"""Wrapper around the external file-mirroring tool (rsync)."""

import logging
import os
import subprocess
from dataclasses import dataclass, field
from typing import Optional, Protocol

from ..config import config
from .plan import PlannedOperation, parse_operations

logger = logging.getLogger(__name__)

LAUNCH_FAILURE_STATUS = 127
"""Status reported when the mirror tool could not be started"""


@dataclass
class MirrorResult:
    """Outcome of one mirror pass."""

    returncode: int
    """Exit status of the tool (0 = success)"""

    lines: list[str] = field(default_factory=list)
    """Non-empty itemized output lines, one per change"""

    stderr: str = ""
    """Diagnostic output of the tool"""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def operations(self) -> list[PlannedOperation]:
        return parse_operations(self.lines)

    @property
    def deletions(self) -> list[str]:
        """Paths of destination-only items the pass removes."""
        return [op.path for op in self.operations if op.is_destructive]

    @property
    def change_count(self) -> int:
        return len(self.lines)


class Mirror(Protocol):
    """Interface of a file-mirroring primitive."""

    def run(
        self, source: str, destination: str, delete: bool, simulate: bool
    ) -> MirrorResult:
        ...


def mirror_arguments(source: str, destination: str) -> tuple[str, str]:
    """Normalize rule paths into mirror tool arguments.

    A source directory gets a trailing slash so that the destination mirrors
    its contents instead of receiving a nested copy. An existing destination
    directory is treated the same way.

    Examples:
        >>> mirror_arguments("/no/such/file.txt", "/backup/file.txt")
        ('/no/such/file.txt', '/backup/file.txt')
    """
    if os.path.isdir(source):
        source = source.rstrip("/") + "/"
    if os.path.isdir(destination):
        destination = destination.rstrip("/") + "/"
    return source, destination


class RsyncMirror:
    """Runs ``rsync`` in archive mode with itemized change output."""

    def __init__(self, executable: Optional[str] = None):
        """Initialize the mirror.

        Args:
            executable: rsync binary to run; defaults to the configured one
        """
        self.executable = executable or config.rsync_executable

    def build_command(
        self, source: str, destination: str, delete: bool, simulate: bool
    ) -> list[str]:
        """Build the rsync command line for one pass."""
        cmd = [self.executable, "-ai"]
        if simulate:
            cmd.append("-n")
        if delete:
            cmd.append("--delete")
        cmd.extend([source, destination])
        return cmd

    def run(
        self, source: str, destination: str, delete: bool, simulate: bool
    ) -> MirrorResult:
        """Run one mirror pass.

        Args:
            source: Source path (already normalized)
            destination: Destination path (already normalized)
            delete: Remove destination items that are absent from the source
            simulate: Only report what would change

        Returns:
            MirrorResult with the exit status and itemized changes
        """
        cmd = self.build_command(source, destination, delete, simulate)
        logger.debug("Running: %s", " ".join(cmd))

        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                check=False,
            )
        except OSError as e:
            logger.debug("Could not start %s: %s", self.executable, e)
            return MirrorResult(returncode=LAUNCH_FAILURE_STATUS, stderr=str(e))

        lines = [line for line in proc.stdout.splitlines() if line.strip()]
        logger.debug(
            "%s exited with %d (%d change line(s))",
            self.executable,
            proc.returncode,
            len(lines),
        )
        return MirrorResult(returncode=proc.returncode, lines=lines, stderr=proc.stderr)

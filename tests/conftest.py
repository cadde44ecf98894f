"""Shared fixtures for syncutil tests."""

import filecmp
import os
import shutil
from pathlib import Path
from typing import Optional

import pytest

from pysyncutil.output import OutputFormatter
from pysyncutil.sync.mirror import MirrorResult


class FakeMirror:
    """In-process stand-in for rsync with the same itemized output format.

    Supports the subset of behavior the engine relies on: copying new and
    changed files, creating directories, and removing destination-only items
    when ``delete`` is set. With ``simulate`` nothing is touched.
    """

    def __init__(self, returncode: int = 0, fail_when_executing: bool = False):
        self.returncode = returncode
        self.fail_when_executing = fail_when_executing
        self.calls: list[dict] = []

    def run(
        self, source: str, destination: str, delete: bool, simulate: bool
    ) -> MirrorResult:
        self.calls.append(
            {
                "source": source,
                "destination": destination,
                "delete": delete,
                "simulate": simulate,
            }
        )
        if self.returncode != 0 or (self.fail_when_executing and not simulate):
            return MirrorResult(
                returncode=self.returncode or 23, stderr="simulated failure"
            )

        src = Path(source)
        dest = Path(destination)
        if src.is_file():
            lines = self._sync_file(src, dest, simulate)
        else:
            lines = self._sync_dir(src, dest, delete, simulate)
        return MirrorResult(returncode=0, lines=lines)

    def _sync_file(self, src: Path, dest: Path, simulate: bool) -> list[str]:
        target = dest / src.name if dest.is_dir() else dest
        if not target.exists():
            line = f">f+++++++++ {src.name}"
        elif not filecmp.cmp(src, target, shallow=False):
            line = f">f.st...... {src.name}"
        else:
            return []
        if not simulate:
            shutil.copy2(src, target)
        return [line]

    def _sync_dir(
        self, src: Path, dest: Path, delete: bool, simulate: bool
    ) -> list[str]:
        lines = []
        if not dest.exists():
            lines.append("cd+++++++++ ./")
            if not simulate:
                dest.mkdir()

        for root, dirs, files in os.walk(src):
            dirs.sort()
            rel_root = Path(root).relative_to(src)
            for name in dirs:
                rel = rel_root / name
                if not (dest / rel).is_dir():
                    lines.append(f"cd+++++++++ {rel.as_posix()}/")
                    if not simulate:
                        (dest / rel).mkdir()
            for name in sorted(files):
                rel = rel_root / name
                target = dest / rel
                if not target.exists():
                    lines.append(f">f+++++++++ {rel.as_posix()}")
                elif not filecmp.cmp(src / rel, target, shallow=False):
                    lines.append(f">f.st...... {rel.as_posix()}")
                else:
                    continue
                if not simulate:
                    shutil.copy2(src / rel, target)

        if delete and dest.exists():
            lines.extend(self._delete_extraneous(src, dest, simulate))
        return lines

    def _delete_extraneous(self, src: Path, dest: Path, simulate: bool) -> list[str]:
        lines = []
        for root, dirs, files in os.walk(dest):
            rel_root = Path(root).relative_to(dest)
            for name in sorted(files):
                rel = rel_root / name
                if not (src / rel).exists():
                    lines.append(f"*deleting   {rel.as_posix()}")
                    if not simulate:
                        (dest / rel).unlink()
            for name in sorted(dirs):
                rel = rel_root / name
                if not (src / rel).is_dir():
                    lines.append(f"*deleting   {rel.as_posix()}/")
                    if not simulate:
                        shutil.rmtree(dest / rel)
            dirs[:] = [d for d in dirs if (src / rel_root / d).is_dir()]
        return lines


def snapshot(path: Path) -> dict[str, Optional[bytes]]:
    """Capture a directory tree as {relative path: content or None for dirs}."""
    state: dict[str, Optional[bytes]] = {}
    for root, dirs, files in os.walk(path):
        for name in dirs:
            full = Path(root) / name
            state[full.relative_to(path).as_posix() + "/"] = None
        for name in files:
            full = Path(root) / name
            state[full.relative_to(path).as_posix()] = full.read_bytes()
    return state


@pytest.fixture(autouse=True)
def plain_console(monkeypatch):
    """Keep rich from emitting color codes into captured output."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    monkeypatch.setenv("NO_COLOR", "1")


@pytest.fixture
def fake_mirror():
    """Provide a fresh fake mirror."""
    return FakeMirror()


@pytest.fixture
def quiet_output():
    """Provide an output formatter that prints nothing but errors."""
    return OutputFormatter(quiet=True)


@pytest.fixture
def source_dir(tmp_path):
    """Create a populated source directory."""
    src = tmp_path / "source"
    src.mkdir()
    (src / "a.txt").write_text("alpha")
    (src / "sub").mkdir()
    (src / "sub" / "b.txt").write_text("beta")
    return src

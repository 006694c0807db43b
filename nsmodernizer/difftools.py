"""Diff collaborators: unified diff between a backup and its live file.

Both implementations ignore whitespace-only changes, matching ``diff -wu``.
"""

import difflib
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from nsmodernizer.exceptions import DiffError
from nsmodernizer.utils.logging import get_subprocess_env, logger


class DiffTool(Protocol):
    def diff(self, old: Path, new: Path) -> str: ...


def _strip_whitespace(line: str) -> str:
    return "".join(line.split())


def _unified_range(start: int, stop: int) -> str:
    """Format a hunk range the way ``diff -u`` does."""
    length = stop - start
    beginning = start + 1
    if length == 1:
        return f"{beginning}"
    if not length:
        beginning -= 1
    return f"{beginning},{length}"


def unified_diff(
    old_lines: list[str],
    new_lines: list[str],
    fromfile: str,
    tofile: str,
    context: int = 3,
    ignore_whitespace: bool = True,
) -> str:
    """Unified diff of two line lists.

    With ``ignore_whitespace`` lines are compared with all whitespace
    removed while the hunks still show the real lines.
    """
    if not ignore_whitespace:
        return "".join(difflib.unified_diff(old_lines, new_lines, fromfile, tofile, n=context))

    matcher = difflib.SequenceMatcher(
        None,
        [_strip_whitespace(line) for line in old_lines],
        [_strip_whitespace(line) for line in new_lines],
        autojunk=False,
    )

    out = []
    for group in matcher.get_grouped_opcodes(context):
        if not out:
            out.append(f"--- {fromfile}\n")
            out.append(f"+++ {tofile}\n")
        first, last = group[0], group[-1]
        old_range = _unified_range(first[1], last[2])
        new_range = _unified_range(first[3], last[4])
        out.append(f"@@ -{old_range} +{new_range} @@\n")

        for tag, i1, i2, j1, j2 in group:
            if tag == "equal":
                out.extend(" " + line for line in old_lines[i1:i2])
                continue
            if tag in ("replace", "delete"):
                out.extend("-" + line for line in old_lines[i1:i2])
            if tag in ("replace", "insert"):
                out.extend("+" + line for line in new_lines[j1:j2])

    return "".join(line if line.endswith("\n") else line + "\n" for line in out)


class NativeDiffer:
    """difflib based differ; needs no external tools."""

    def __init__(self, encoding: str = "utf-8", context: int = 3):
        self.encoding = encoding
        self.context = context

    def _read_lines(self, path: Path) -> list[str]:
        try:
            with open(path, encoding=self.encoding, errors="surrogateescape", newline="") as f:
                return f.read().splitlines(keepends=True)
        except OSError as e:
            raise DiffError(f"Cannot read {path}: {e}") from e

    def diff(self, old: Path, new: Path) -> str:
        return unified_diff(
            self._read_lines(old),
            self._read_lines(new),
            str(old),
            str(new),
            context=self.context,
        )


class ExternalDiffer:
    """Runs an external diff command (``diff -wu`` by default)."""

    def __init__(self, command: str = "diff -wu", timeout: int | None = None):
        self.command = shlex.split(command)
        self.timeout = timeout

    def diff(self, old: Path, new: Path) -> str:
        cmd = [*self.command, str(old), str(new)]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                errors="replace",
                env=get_subprocess_env(),
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise DiffError(f"Could not run {shlex.join(cmd)}: {e}") from e

        # Status 1 only means the files differ
        if proc.returncode > 1:
            logger.debug("{cmd} exited with {code}", cmd=shlex.join(cmd), code=proc.returncode)
            raise DiffError(
                f"{shlex.join(cmd)} exited with status {proc.returncode}",
                output=proc.stdout + proc.stderr,
            )
        return proc.stdout


def get_differ(kind: str = "native", diff_command: str = "diff -wu", encoding: str = "utf-8") -> DiffTool:
    """Build the differ named in the ``tools.differ`` config setting."""
    if kind == "native":
        return NativeDiffer(encoding=encoding)
    if kind == "external":
        return ExternalDiffer(diff_command)
    raise ValueError(f"Unknown differ '{kind}' (expected 'native' or 'external')")

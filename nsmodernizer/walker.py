"""File enumeration collaborators.

Both walkers answer one question: which regular files under ``root`` have a
basename matching ``pattern``? Symbolic links are followed, like ``find -L``.
Results are sorted so repeated runs report in the same order.
"""

import fnmatch
import os
import shlex
import subprocess
from pathlib import Path
from typing import Protocol

from nsmodernizer.exceptions import EnumerationError
from nsmodernizer.utils.logging import get_subprocess_env, logger


class FileWalker(Protocol):
    def walk(self, root: Path, pattern: str) -> list[Path]: ...


class NativeWalker:
    """os.walk based enumeration with symlink loop protection."""

    def __init__(self, follow_symlinks: bool = True):
        self.follow_symlinks = follow_symlinks

    def walk(self, root: Path, pattern: str) -> list[Path]:
        root = Path(root)
        if not root.is_dir():
            raise EnumerationError(f"Root path is not a directory: {root}")

        def _fail(error: OSError) -> None:
            raise EnumerationError(f"Cannot list {error.filename}: {error.strerror}") from error

        matches = []
        seen_dirs = set()
        for dirpath, dirnames, filenames in os.walk(root, onerror=_fail, followlinks=self.follow_symlinks):
            real = os.path.realpath(dirpath)
            if real in seen_dirs:
                logger.debug("Skipping symlink loop at {dir}", dir=dirpath)
                dirnames.clear()
                continue
            seen_dirs.add(real)

            for filename in filenames:
                if not fnmatch.fnmatchcase(filename, pattern):
                    continue
                file = Path(dirpath) / filename
                # Dangling links and sockets are not scripts
                if file.is_file():
                    matches.append(file)

        matches.sort()
        logger.debug("Found {count} files matching {pattern} under {root}",
                     count=len(matches), pattern=pattern, root=str(root))
        return matches


class FindWalker:
    """Delegates enumeration to ``find -L``."""

    def __init__(self, command: str = "find", timeout: int | None = None):
        self.command = shlex.split(command)
        self.timeout = timeout

    def walk(self, root: Path, pattern: str) -> list[Path]:
        cmd = [*self.command, "-L", str(root), "-type", "f", "-name", pattern]
        try:
            proc = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                env=get_subprocess_env(),
                timeout=self.timeout,
            )
        except (OSError, subprocess.TimeoutExpired) as e:
            raise EnumerationError(f"Could not run {shlex.join(cmd)}: {e}") from e

        if proc.returncode != 0:
            raise EnumerationError(
                f"{shlex.join(cmd)} exited with status {proc.returncode}: {proc.stderr.strip()}"
            )

        return sorted(Path(line) for line in proc.stdout.splitlines() if line)


def get_walker(kind: str = "native", find_command: str = "find", follow_symlinks: bool = True) -> FileWalker:
    """Build the walker named in the ``tools.walker`` config setting."""
    if kind == "native":
        return NativeWalker(follow_symlinks=follow_symlinks)
    if kind == "find":
        return FindWalker(find_command)
    raise ValueError(f"Unknown walker '{kind}' (expected 'native' or 'find')")

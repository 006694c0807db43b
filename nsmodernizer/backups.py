"""Backup manager: undo or inspect the most recent rewrite pass.

A backup is any file named ``<name>-original``; its live counterpart is
``<name>`` in the same directory. Nothing else records that a rewrite
happened.
"""

import os
import re
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from nsmodernizer.difftools import DiffTool
from nsmodernizer.exceptions import DiffError
from nsmodernizer.rewriter import BACKUP_SUFFIX
from nsmodernizer.utils.logging import logger
from nsmodernizer.walker import FileWalker


@dataclass
class DiffOutcome:
    backup: Path
    live: Path
    output: str
    error: str | None = None


def live_path_for(backup: Path, suffix: str = BACKUP_SUFFIX) -> Path | None:
    """Strip the backup suffix; None when the name does not carry one."""
    match = re.match(rf"^(.+){re.escape(suffix)}$", backup.name)
    if not match:
        return None
    return backup.with_name(match.group(1))


def find_backups(root: Path, walker: FileWalker, suffix: str = BACKUP_SUFFIX) -> list[tuple[Path, Path]]:
    """(backup, live) pairs under ``root``; malformed names are skipped."""
    pairs = []
    for backup in walker.walk(root, f"*{suffix}"):
        live = live_path_for(backup, suffix)
        if live is None:
            logger.debug("Ignoring malformed backup name {path}", path=str(backup))
            continue
        pairs.append((backup, live))
    return pairs


def reset(root: Path, walker: FileWalker, suffix: str = BACKUP_SUFFIX) -> list[Path]:
    """Put every backup back in place of its live file.

    Destructive: rewritten content is discarded.

    Returns:
        The restored live paths
    """
    restored = []
    for backup, live in find_backups(root, walker, suffix):
        os.replace(backup, live)
        logger.debug("Restored {live} from {backup}", live=str(live), backup=str(backup))
        restored.append(live)
    return restored


def diff(
    root: Path,
    walker: FileWalker,
    differ: DiffTool,
    suffix: str = BACKUP_SUFFIX,
    emit: Callable[[str], None] | None = None,
) -> list[DiffOutcome]:
    """Diff every backup (old) against its live file (new).

    A failing pair is recorded and reported; the remaining pairs still run.
    Files are only read.
    """
    outcomes = []
    for backup, live in find_backups(root, walker, suffix):
        try:
            outcome = DiffOutcome(backup, live, differ.diff(backup, live))
        except DiffError as e:
            logger.error("Diff failed for {backup}: {err}", backup=str(backup), err=str(e))
            outcome = DiffOutcome(backup, live, e.output, error=str(e))

        if emit:
            emit(f"---diff -wu {backup} {live}")
            emit(outcome.output.rstrip("\n") if outcome.output else "")
            if outcome.error:
                emit(f"diff failed: {outcome.error}")
        outcomes.append(outcome)
    return outcomes

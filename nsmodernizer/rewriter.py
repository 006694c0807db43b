"""Rule-based rewriting with backup preservation.

The backup path is the live path plus ``-original``. A rewritten file and
its backup always come as a pair: the backup holds the text before the
rewrite, the live file the text after it. An existing backup is never
replaced, so a file rewritten once is refused until it is reset; the
driver runs reset before any rewrite when both are requested.
"""

import os
import shutil
import tempfile
from dataclasses import dataclass, field
from pathlib import Path

from nsmodernizer.exceptions import BackupWriteError
from nsmodernizer.rules import RewriteRule, RuleSet
from nsmodernizer.utils.logging import logger

BACKUP_SUFFIX = "-original"


@dataclass
class RewriteResult:
    """Outcome of running the rewrite table over one text."""

    text: str
    changes: int = 0
    per_rule: list[tuple[RewriteRule, int]] = field(default_factory=list)


def backup_path_for(path: Path, suffix: str = BACKUP_SUFFIX) -> Path:
    return path.with_name(path.name + suffix)


def read_script(path: Path, encoding: str = "utf-8") -> str:
    """Read a script so that writing it back reproduces the same bytes."""
    with open(path, encoding=encoding, errors="surrogateescape", newline="") as f:
        return f.read()


def apply_rewrites(text: str, rules: RuleSet) -> RewriteResult:
    """Apply every rewrite rule in table order.

    Each rule sees the output of the rules before it.
    """
    result = RewriteResult(text=text)
    for rule in rules.rewrites:
        result.text, count = rule.regex.subn(rule.replacement, result.text)
        if count:
            logger.debug("Rule {pattern} matched {count} times", pattern=rule.pattern, count=count)
            result.per_rule.append((rule, count))
            result.changes += count
    return result


def _replace_atomically(target: Path, fill) -> None:
    """Create a temp file next to ``target``, let ``fill`` write it, then os.replace."""
    fd, tmp_name = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
    os.close(fd)
    tmp = Path(tmp_name)
    try:
        fill(tmp)
        os.replace(tmp, target)
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise


def write_with_backup(
    path: Path,
    new_text: str,
    suffix: str = BACKUP_SUFFIX,
    encoding: str = "utf-8",
) -> Path:
    """Preserve ``path`` under its backup name, then write ``new_text`` to it.

    Both steps replace their target in one rename, so an interrupted run
    leaves either the old or the new file, never a truncated one. The live
    file is only touched once the backup is in place.

    An existing backup is never replaced: it may be the only copy of the
    text from before an earlier rewrite.

    Returns:
        The backup path

    Raises:
        BackupWriteError: If the backup already exists or either write fails
    """
    backup = backup_path_for(path, suffix)

    if os.path.lexists(backup):
        raise BackupWriteError(
            f"Backup {backup} already exists; run with -reset first or remove it",
            path=str(path),
        )

    try:
        _replace_atomically(backup, lambda tmp: shutil.copy2(path, tmp))
    except OSError as e:
        raise BackupWriteError(f"Could not create backup {backup}: {e}", path=str(path)) from e
    logger.debug("Backed up {path} to {backup}", path=str(path), backup=str(backup))

    def _write_new(tmp: Path) -> None:
        with open(tmp, "w", encoding=encoding, errors="surrogateescape", newline="") as f:
            f.write(new_text)
        shutil.copymode(backup, tmp)

    try:
        _replace_atomically(path, _write_new)
    except OSError as e:
        raise BackupWriteError(
            f"Could not write rewritten {path} (original kept in {backup}): {e}",
            path=str(path),
        ) from e

    return backup

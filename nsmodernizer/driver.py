"""Run sequencing: reset, diff, then scan/report/rewrite per file."""

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from nsmodernizer import backups
from nsmodernizer.difftools import DiffTool, NativeDiffer
from nsmodernizer.extractor import extract_by_heuristic, merge_heuristics
from nsmodernizer.reporter import FileReport, classify
from nsmodernizer.rewriter import BACKUP_SUFFIX, apply_rewrites, read_script, write_with_backup
from nsmodernizer.rules import DEFAULT_RULESET, RuleSet
from nsmodernizer.utils.logging import logger
from nsmodernizer.walker import FileWalker, NativeWalker


@dataclass
class RunOptions:
    """What one invocation should do. Paths are relative to the cwd."""

    path: str = "."
    name: str = "*.tcl"
    reset: bool = False
    diff: bool = False
    change: bool = False
    backup_suffix: str = BACKUP_SUFFIX
    encoding: str = "utf-8"


@dataclass
class RunSummary:
    """Counters accumulated over one traversal."""

    total_changes: int = 0
    files_changed: int = 0
    files_scanned: int = 0
    files_reported: int = 0
    files_skipped: int = 0
    restored: list[Path] = field(default_factory=list)
    diffs: list[backups.DiffOutcome] = field(default_factory=list)
    stopped_after_diff: bool = False

    def summary_line(self) -> str:
        return f"{self.total_changes} changes in {self.files_changed} files"


@dataclass
class FileResult:
    path: Path
    report: FileReport
    changes: int = 0
    backup: Path | None = None


class Modernizer:
    """Ties the extractor, reporter, rewriter and backup manager together.

    ``emit`` receives every user-facing line; the collaborators decide how
    files are found and diffed.
    """

    def __init__(
        self,
        rules: RuleSet = DEFAULT_RULESET,
        walker: FileWalker | None = None,
        differ: DiffTool | None = None,
        emit: Callable[[str], None] | None = None,
    ):
        self.rules = rules
        self.walker = walker or NativeWalker()
        self.differ = differ or NativeDiffer()
        self.emit = emit or (lambda line: None)

    def process_file(self, path: Path, options: RunOptions) -> FileResult | None:
        """Report on one file and, with ``options.change``, rewrite it.

        Returns None when the file cannot be read.
        """
        try:
            text = read_script(path, options.encoding)
        except OSError as e:
            logger.warning("Skipping unreadable file {path}: {err}", path=str(path), err=str(e))
            return None

        found = extract_by_heuristic(text)
        for label, names in found.items():
            if names:
                logger.debug("{path}: {label} matches {names}", path=str(path), label=label, names=sorted(names))

        report = classify(os.path.abspath(path), merge_heuristics(found), self.rules)
        for line in report.lines():
            self.emit(line)

        result = FileResult(path, report)
        if not options.change:
            return result

        rewritten = apply_rewrites(text, self.rules)
        if rewritten.changes > 0:
            for rule, count in rewritten.per_rule:
                logger.debug("{path}: {pattern} -> {replacement} x{count}",
                             path=str(path), pattern=rule.pattern, replacement=rule.replacement, count=count)
            self.emit(f"... updating {path} ({rewritten.changes} changes)")
            result.backup = write_with_backup(path, rewritten.text, options.backup_suffix, options.encoding)
            result.changes = rewritten.changes
        return result

    def run(self, options: RunOptions) -> RunSummary:
        """Execute one invocation.

        Reset runs first; diff ends the run before any scanning.

        Raises:
            EnumerationError: The tree could not be listed
            BackupWriteError: A rewritten file could not be saved
        """
        summary = RunSummary()
        root = Path(options.path)

        if options.reset:
            summary.restored = backups.reset(root, self.walker, options.backup_suffix)
            logger.info("Restored {count} files", count=len(summary.restored))

        if options.diff:
            summary.diffs = backups.diff(root, self.walker, self.differ, options.backup_suffix, self.emit)
            summary.stopped_after_diff = True
            return summary

        for path in self.walker.walk(root, options.name):
            # A broad -name glob would otherwise back up the backups
            if path.name.endswith(options.backup_suffix):
                continue
            result = self.process_file(path, options)
            if result is None:
                summary.files_skipped += 1
                continue
            summary.files_scanned += 1
            if result.report.has_findings:
                summary.files_reported += 1
            if result.changes:
                summary.total_changes += result.changes
                summary.files_changed += 1

        if options.change:
            self.emit(summary.summary_line())

        logger.debug(
            "Scanned {scanned} files, {reported} with findings, {skipped} skipped",
            scanned=summary.files_scanned,
            reported=summary.files_reported,
            skipped=summary.files_skipped,
        )
        return summary

"""Classify extracted command names and format the per-file findings."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from nsmodernizer.rules import RuleSet

DEPRECATED_MESSAGE = "use of deprecated command: '{name}'"
UNCERTAIN_MESSAGE = "use of command with unclear future: '{name}'"
MODERNIZE_MESSAGE = "use of command that should be modernized: '{name}'"


@dataclass
class FileReport:
    """Findings for one file. The header is emitted at most once."""

    display_path: str
    deprecated: list[str] = field(default_factory=list)
    uncertain: list[str] = field(default_factory=list)
    modernize: list[str] = field(default_factory=list)

    @property
    def has_findings(self) -> bool:
        return bool(self.deprecated or self.uncertain or self.modernize)

    @property
    def header(self) -> str:
        return f"\n----- {self.display_path}"

    def lines(self) -> list[str]:
        """Header plus one line per finding; empty when nothing matched."""
        if not self.has_findings:
            return []

        lines = [self.header]
        lines.extend(DEPRECATED_MESSAGE.format(name=name) for name in self.deprecated)
        lines.extend(UNCERTAIN_MESSAGE.format(name=name) for name in self.uncertain)
        lines.extend(MODERNIZE_MESSAGE.format(name=name) for name in self.modernize)
        return lines


def classify(display_path: str, names: Iterable[str], rules: RuleSet) -> FileReport:
    """Look every name up in the rule tables.

    Args:
        display_path: Path shown in the header line
        names: Command names extracted from the file
        rules: Tables to check against

    Returns:
        FileReport with each category sorted by name
    """
    report = FileReport(display_path)
    for name in sorted(set(names)):
        if name in rules.deprecated:
            report.deprecated.append(name)
        if name in rules.uncertain:
            report.uncertain.append(name)
        if name in rules.modernize:
            report.modernize.append(name)
    return report

"""Lexical command extraction for Tcl script text.

Tcl allows command substitution anywhere and has no fixed statement
syntax, so nothing here parses. Three independent patterns run over the
whole file and their matches are unioned:

    [ns_foo]                   bracketed single word
    [ns_foo -opt ...           single word followed by an argument opener
    ns_foo -opt ...              (-, $, [ or ") at a line start or after [
    ns_set new                 command plus one lowercase subcommand word

Commands whose names are built at runtime (``[set cmd ns_mkdir] $dir``,
``eval "ns_$op"``, ``$cmd $dir``) are not seen. That is a known limit of
lexical scanning, not something to patch with more patterns.
"""

import re

# The start of the text counts as a line start.
_LINE_OR_BRACKET = r"(?:\A|[\n\[])\s*"

BRACKETED_COMMAND = re.compile(r"\[\s*(ns[a-z_]+)\s*\]")
# Lookahead so the "[" of a nested substitution can start the next match.
ARGUMENT_COMMAND = re.compile(_LINE_OR_BRACKET + r"(ns[a-z_]+)(?=\s*[-$\[\"])")
SUBCOMMAND_COMMAND = re.compile(_LINE_OR_BRACKET + r"(ns[a-z_]+ +[a-z_]+)\b")

HEURISTICS = (
    ("bracketed", BRACKETED_COMMAND),
    ("argument", ARGUMENT_COMMAND),
    ("subcommand", SUBCOMMAND_COMMAND),
)


def _normalize(name: str) -> str:
    """Collapse the run of spaces between command and subcommand."""
    return " ".join(name.split())


def extract_by_heuristic(text: str) -> dict[str, set[str]]:
    """Per-heuristic matches, for debugging detection misses."""
    return {
        label: {_normalize(match) for match in pattern.findall(text)}
        for label, pattern in HEURISTICS
    }


def merge_heuristics(found: dict[str, set[str]]) -> set[str]:
    return set().union(*found.values())


def extract_commands(text: str) -> set[str]:
    """Return the deduplicated candidate command names found in ``text``."""
    return merge_heuristics(extract_by_heuristic(text))

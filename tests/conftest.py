"""Pytest configuration and fixtures."""
from pathlib import Path

import pytest

INDEX_TCL = """\
ad_page_contract {
    Sample page using old NaviServer calls
} {}

set dir [ns_tmpnam]
ns_mkdir $dir
set tid [ns_thread begin {ns_log notice started}]
ns_thread join $tid
"""

CLEAN_TCL = """\
set x [string trim $y]
ns_log notice "done $x"
"""

NOTES_TXT = """\
ns_mkdir $x
"""


@pytest.fixture
def script_tree(tmp_path):
    """Small Tcl package tree: one file with deprecated calls, one clean, one non-Tcl."""
    root = tmp_path / "packages"
    (root / "www").mkdir(parents=True)
    (root / "lib").mkdir()

    (root / "www" / "index.tcl").write_text(INDEX_TCL)
    (root / "lib" / "clean.tcl").write_text(CLEAN_TCL)
    (root / "lib" / "notes.txt").write_text(NOTES_TXT)

    return root


@pytest.fixture
def snapshot():
    """Returns a function mapping every file under a root to its bytes."""

    def _snapshot(root: Path) -> dict[str, bytes]:
        return {
            str(p.relative_to(root)): p.read_bytes()
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _snapshot

"""Central UI handler for ns-modernizer.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every module.

Report lines contain Tcl brackets (``[ns_conn ...]``) and long paths, so
they are printed verbatim: no markup, no highlighting, no wrapping.

Usage:
    from nsmodernizer.ui import print_plain

    print_plain("use of deprecated command: 'ns_mkdir'")
"""

import sys

from rich.console import Console

# Single console instance - import this, don't create your own
console = Console(
    force_terminal=sys.stdout.isatty(),
    soft_wrap=True,
)


def print_plain(text: str = "") -> None:
    """Print a report line exactly as given."""
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)

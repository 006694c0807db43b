"""ns-modernizer CLI - find and rewrite deprecated NaviServer calls in Tcl scripts.

Flags mirror the historical Tcl helper so existing invocations keep
working: single dash, and booleans may carry an explicit value
(``-change``, ``-change 1``, ``-change 0``).
"""

import os

import click

from nsmodernizer import __version__
from nsmodernizer.config_runtime import load_runtime_config
from nsmodernizer.difftools import get_differ
from nsmodernizer.driver import Modernizer, RunOptions
from nsmodernizer.rules import DEFAULT_RULESET
from nsmodernizer.ui import print_plain
from nsmodernizer.utils.error_handler import handle_exceptions
from nsmodernizer.utils.exit_codes import ExitCodes
from nsmodernizer.walker import get_walker


def _switch(name: str, dest: str, help_text: str):
    """Boolean option usable bare or with a value."""
    return click.option(
        name,
        dest,
        type=click.BOOL,
        is_flag=False,
        flag_value=True,
        default=False,
        show_default=True,
        help=help_text,
    )


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@handle_exceptions
@click.version_option(version=__version__, prog_name="ns-modernizer")
@click.option("-cd", "workdir", default=".", show_default=True,
              help="Directory to change into before anything else runs")
@click.option("-path", "path", default=".", show_default=True,
              help="Root of the tree to scan, relative to -cd")
@click.option("-name", "name", default=None,
              help="Filename glob of scripts to scan  [default: *.tcl]")
@_switch("-reset", "reset", "Restore every *-original backup before scanning")
@_switch("-diff", "diff", "Show what the last rewrite changed, then exit")
@_switch("-change", "change", "Rewrite deprecated calls (originals kept as *-original)")
@click.pass_context
def main(ctx, workdir, path, name, reset, diff, change):
    """Report deprecated NaviServer API calls in Tcl scripts and optionally rewrite them.

    Review the rewritten files: this is a helper, not a definitive migration.

    \b
    EXAMPLES:
      ns-modernizer -cd /usr/local/oacs-head/openacs-4/packages/
      ns-modernizer -change 1          # perform updates
      ns-modernizer -diff 1            # list the differences
      ns-modernizer -reset 1 -change 0 # undo the changes of a run
      ns-modernizer -reset -change     # reset, then run again
    """
    os.chdir(workdir)
    print_plain(f"working directory is {os.getcwd()}")

    config = load_runtime_config(".")
    scan_cfg = config["scan"]
    tools_cfg = config["tools"]

    modernizer = Modernizer(
        rules=DEFAULT_RULESET,
        walker=get_walker(tools_cfg["walker"], tools_cfg["find_command"], scan_cfg["follow_symlinks"]),
        differ=get_differ(tools_cfg["differ"], tools_cfg["diff_command"], scan_cfg["encoding"]),
        emit=print_plain,
    )
    options = RunOptions(
        path=path,
        name=name or scan_cfg["name"],
        reset=reset,
        diff=diff,
        change=change,
        backup_suffix=scan_cfg["backup_suffix"],
        encoding=scan_cfg["encoding"],
    )
    modernizer.run(options)

    ctx.exit(ExitCodes.SUCCESS)


if __name__ == "__main__":
    main()

"""Centralized exit codes for the ns-modernizer CLI."""


class ExitCodes:
    """Standard exit codes for the ns-modernizer CLI.

    Findings never change the exit code; only an aborted run does.
    """

    SUCCESS = 0

    # Enumeration failure, unwritable backup, bad configuration
    FATAL = 1

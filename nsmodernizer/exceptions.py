"""Exceptions for the ns-modernizer engine.

Each class covers a failure mode the driver handles explicitly. Malformed
backup names are not errors: they are skipped during reset and diff.
"""


class ModernizerError(Exception):
    """Base class for all ns-modernizer failures."""


class EnumerationError(ModernizerError):
    """Raised when the file tree cannot be listed.

    Fatal: the whole run is aborted because a partial listing would produce
    a partial report that looks complete.
    """


class DiffError(ModernizerError):
    """Raised when the diff collaborator fails for one backup/live pair.

    Attributes:
        output: Whatever the diff tool produced before failing
    """

    def __init__(self, message: str, output: str = ""):
        super().__init__(message)
        self.output = output


class BackupWriteError(ModernizerError):
    """Raised when the backup copy or the transformed content cannot be written.

    The live file is never replaced before its backup exists, so the
    path/path-original invariant holds when this is raised.

    Attributes:
        path: Live file being processed
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path

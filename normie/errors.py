"""Errors reported while normalizing names.

None of these abort a run: the engine collects them, prints one diagnostic
line per error and keeps going. Errors with ``fatal = True`` make the run
exit with a non-zero status.
"""

from pathlib import Path


class NormieError(Exception):
    """Base class for per-entry errors."""

    fatal = False

    def __init__(self, path: Path, message: str):
        self.path = path
        super().__init__(message)


class PathNotFoundError(NormieError):
    """Exception raised when a path given on the command line does not exist."""

    fatal = True

    def __init__(self, path: Path):
        super().__init__(path, f"'{path}' is not a valid directory or file")


class PermissionDeniedError(NormieError):
    """Exception raised when a directory cannot be read or an entry cannot be renamed."""

    fatal = True

    def __init__(self, path: Path, cause: OSError):
        self.cause = cause
        super().__init__(path, f"permission denied: '{path}'")


class RenameFailedError(NormieError):
    """Exception raised when the operating system refuses a rename or a listing."""

    fatal = True

    def __init__(self, path: Path, cause: OSError, target: Path | None = None):
        self.cause = cause
        self.target = target
        reason = cause.strerror or str(cause)
        if target is None:
            message = f"cannot read '{path}': {reason}"
        else:
            message = f"cannot rename '{path}' to '{target}': {reason}"
        super().__init__(path, message)


class NameConflictError(NormieError):
    """Exception raised when the target name is already taken by a sibling."""

    def __init__(self, path: Path, target_name: str):
        self.target_name = target_name
        super().__init__(path, f"cannot rename '{path}' to '{target_name}': name already in use")


class EmptyResultNameError(NormieError):
    """Exception raised when normalization would leave nothing of a name."""

    def __init__(self, path: Path):
        super().__init__(path, f"'{path}' would have an empty name, keeping it")


def os_error(path: Path, cause: OSError, target: Path | None = None) -> NormieError:
    """Wrap an ``OSError`` into the matching per-entry error."""
    if isinstance(cause, PermissionError):
        return PermissionDeniedError(path, cause)
    return RenameFailedError(path, cause, target)

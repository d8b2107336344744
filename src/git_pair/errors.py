"""Error taxonomy for git-pair.

Every error is terminal for the current invocation. The CLI renders
``str(error)`` on stderr and exits non-zero.
"""

from pathlib import Path


class GitPairError(Exception):
    """Base class for all errors reported to the user."""


class NotAGitRepository(GitPairError):
    """The repository, or its current branch, could not be determined."""

    def __init__(self, message: str | None = None):
        super().__init__(
            message or "Not in a git repository. Please run 'git init' first."
        )


class NotInitialized(GitPairError):
    def __init__(self, branch: str):
        self.branch = branch
        super().__init__(
            f"git-pair not initialized for branch '{branch}'. "
            "Please run 'git pair init' first."
        )


class AliasAlreadyExists(GitPairError):
    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(f"Alias '{alias}' already exists in global roster")


class AliasNotFound(GitPairError):
    def __init__(self, alias: str):
        self.alias = alias
        super().__init__(
            f"Alias '{alias}' not found in global roster. "
            "Use 'git pair list --global' to see available aliases."
        )


class CoAuthorNotFound(GitPairError):
    def __init__(self, identifier: str, branch: str):
        self.identifier = identifier
        self.branch = branch
        super().__init__(
            f"No co-author matching '{identifier}' on branch '{branch}'"
        )


class StorageError(GitPairError):
    """A filesystem operation on a git-pair file failed."""

    def __init__(self, path: Path, cause: OSError):
        self.path = path
        self.cause = cause
        reason = cause.strerror or str(cause)
        super().__init__(f"Cannot access {path}: {reason}")


class MalformedRecord(GitPairError):
    def __init__(self, path: Path, line_no: int, line: str):
        self.path = path
        self.line_no = line_no
        self.line = line
        super().__init__(f"Malformed record in {path} (line {line_no}): {line!r}")


class UsageError(GitPairError):
    """Arguments could not be dispatched to a known command shape."""

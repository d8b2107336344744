import logging
import subprocess
from pathlib import Path

from .constants import APP_NAME
from .errors import NotAGitRepository

logger = logging.getLogger(APP_NAME)


class GitRepo:
    """A wrapper around the Git command-line interface for a specific repository.

    Only the handful of read-only queries git-pair needs are exposed: locating
    the git directory and hooks directory, and reading the current branch.

    Attributes:
        path (Path): The file system path to the working tree root.
    """

    def __init__(self, path: Path):
        """Initializes the GitRepo instance.

        Args:
            path (Path): The path to the repository root directory.

        Raises:
            NotAGitRepository: If the specified path does not contain a .git entry.
        """
        self.path = path
        if not (self.path / ".git").exists():
            raise NotAGitRepository(f"Not a git repository: {self.path}")

    @classmethod
    def discover(cls, start: Path | None = None) -> "GitRepo":
        """Locates the repository enclosing `start` by asking git.

        Git walks up from `start` exactly as it does for its own commands, so
        nested directories and worktrees resolve the same way.

        Args:
            start (Path | None): Directory to search from. Defaults to the cwd.

        Returns:
            GitRepo: The repository rooted at the enclosing working tree.

        Raises:
            NotAGitRepository: If git is missing or `start` is outside a repository.
        """
        start = start or Path.cwd()
        try:
            res = subprocess.run(
                ["git", "rev-parse", "--show-toplevel"],
                cwd=start,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise NotAGitRepository("git executable not found on PATH") from e
        except subprocess.CalledProcessError as e:
            logger.debug(f"rev-parse failed in {start}: {e.stderr.strip()}")
            raise NotAGitRepository() from e

        toplevel = res.stdout.strip()
        if not toplevel:
            # Bare repositories have no working tree.
            raise NotAGitRepository(f"No working tree found at {start}")
        return cls(Path(toplevel))

    def _run(self, args: list[str]) -> str:
        """Executes a Git command within the repository context.

        Args:
            args (list[str]): A list of arguments to pass to the git command.

        Returns:
            str: The stripped stdout of the command.

        Raises:
            RuntimeError: If the git command returns a non-zero exit code.
        """
        logger.debug(f"git {' '.join(args)}")
        try:
            res = subprocess.run(
                ["git", *args],
                cwd=self.path,
                capture_output=True,
                text=True,
                check=True,
            )
            return res.stdout.strip()
        except subprocess.CalledProcessError as e:
            raise RuntimeError(f"Git error: {e.stderr or e}") from e

    def current_branch(self) -> str:
        """Retrieves the name of the currently checked-out branch.

        Returns:
            str: The name of the current branch.

        Raises:
            NotAGitRepository: If git fails or HEAD is detached.
        """
        try:
            branch = self._run(["branch", "--show-current"])
        except RuntimeError as e:
            raise NotAGitRepository(f"Failed to get current branch name: {e}") from e
        if not branch:
            raise NotAGitRepository("No branch name found (detached HEAD?)")
        return branch

    def git_dir(self) -> Path:
        """Returns the absolute path of the repository's git directory."""
        try:
            return Path(self._run(["rev-parse", "--absolute-git-dir"]))
        except RuntimeError as e:
            raise NotAGitRepository(str(e)) from e

    def hooks_dir(self) -> Path:
        """Returns the directory git reads hooks from.

        Honours `core.hooksPath`; relative answers are anchored at the repo root.
        """
        try:
            hooks = Path(self._run(["rev-parse", "--git-path", "hooks"]))
        except RuntimeError as e:
            raise NotAGitRepository(str(e)) from e
        return hooks if hooks.is_absolute() else self.path / hooks

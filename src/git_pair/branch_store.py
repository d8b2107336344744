import logging
from collections.abc import Iterable
from pathlib import Path

from . import paths, storage
from .constants import APP_NAME
from .errors import MalformedRecord, NotInitialized, StorageError
from .models import BranchConfig, CoAuthor

logger = logging.getLogger(APP_NAME)


def _header(branch: str) -> str:
    return (
        f"# git-pair configuration file for branch '{branch}'\n"
        "# Co-authors will be listed here\n"
    )


class BranchConfigStore:
    """Persists the co-author list of each branch under `{git_dir}/git-pair/`.

    One plain-text file per branch identifier, one `Name <email>` per line.
    Lines starting with `#` and blank lines are ignored. The hook script reads
    these files directly, so the format must stay shell-friendly.

    Attributes:
        git_dir (Path): The repository's git directory.
    """

    def __init__(self, git_dir: Path):
        self.git_dir = git_dir

    @property
    def directory(self) -> Path:
        return paths.git_pair_dir(self.git_dir)

    def path_for(self, branch_id: str) -> Path:
        return paths.config_path(self.git_dir, branch_id)

    def exists(self, branch_id: str) -> bool:
        return self.path_for(branch_id).is_file()

    def init(self, branch_id: str, branch: str | None = None) -> bool:
        """Creates an empty config for a branch if none exists yet.

        Args:
            branch_id (str): The sanitized branch identifier.
            branch (str | None): The original branch name, used in the header.

        Returns:
            bool: True if a new file was created, False if one already existed.

        Raises:
            StorageError: If the directory or file cannot be created.
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(self.directory, e) from e

        if self.exists(branch_id):
            logger.debug(f"Config for '{branch_id}' already present")
            return False

        storage.write_atomic(self.path_for(branch_id), _header(branch or branch_id))
        logger.debug(f"Initialized config for '{branch_id}'")
        return True

    def load(self, branch_id: str) -> BranchConfig:
        """Reads the stored co-author list for a branch.

        Raises:
            NotInitialized: If the branch has no config file.
            MalformedRecord: If a non-comment line is not `Name <email>`.
        """
        path = self.path_for(branch_id)
        content = storage.read_text(path)
        if content is None:
            raise NotInitialized(branch_id)

        coauthors = []
        for line_no, line in enumerate(content.splitlines(), start=1):
            if not line.strip() or line.lstrip().startswith("#"):
                continue
            try:
                coauthor = CoAuthor.parse(line)
            except ValueError:
                coauthor = None
            if coauthor is None:
                raise MalformedRecord(path, line_no, line)
            coauthors.append(coauthor)

        return BranchConfig(branch_id=branch_id, coauthors=coauthors)

    def append(self, branch_id: str, coauthors: Iterable[CoAuthor]) -> BranchConfig:
        """Appends co-authors to a branch's list, keeping duplicates.

        Raises:
            NotInitialized: If the branch has no config file.
        """
        config = self.load(branch_id)
        config.coauthors.extend(coauthors)
        self._save(config)
        return config

    def replace(self, config: BranchConfig) -> None:
        """Rewrites a branch's list wholesale.

        Raises:
            NotInitialized: If the branch has no config file.
        """
        if not self.exists(config.branch_id):
            raise NotInitialized(config.branch_id)
        self._save(config)

    def clear(self, branch_id: str) -> bool:
        """Wipes a branch's co-author list, keeping the file initialized.

        Returns:
            bool: True if a config was cleared, False if none existed.
        """
        path = self.path_for(branch_id)
        content = storage.read_text(path)
        if content is None:
            return False
        self._save(BranchConfig(branch_id=branch_id), content)
        return True

    def _save(self, config: BranchConfig, existing: str | None = None) -> None:
        path = self.path_for(config.branch_id)
        if existing is None:
            existing = storage.read_text(path) or ""
        # Preserve the comment header block written by `init`.
        header = []
        for line in existing.splitlines():
            if not line.lstrip().startswith("#"):
                break
            header.append(line)
        body = [str(c) for c in config.coauthors]
        lines = (header or _header(config.branch_id).splitlines()) + body
        storage.write_atomic(path, "\n".join(lines) + "\n")

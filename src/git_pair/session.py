import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

from . import paths
from .branch_store import BranchConfigStore
from .config import Config
from .constants import APP_NAME
from .errors import CoAuthorNotFound, NotInitialized
from .git_wrapper import GitRepo
from .hook import HookSynthesizer
from .models import BranchConfig, CoAuthor
from .resolver import CoAuthorResolver
from .roster import GlobalRoster

logger = logging.getLogger(APP_NAME)


@dataclass
class PairStatus:
    """Snapshot of the current branch's pairing state.

    Attributes:
        branch (str): The checked-out branch name.
        initialized (bool): Whether `init` has been run for the branch.
        coauthors (list[CoAuthor]): Stored co-authors, in order.
    """

    branch: str
    initialized: bool
    coauthors: list[CoAuthor] = field(default_factory=list)

    def describe(self) -> list[str]:
        """Human-readable lines summarizing the status."""
        if not self.initialized:
            return [
                f"git-pair not initialized for branch '{self.branch}'. "
                "Run 'git pair init' to start pairing."
            ]
        if not self.coauthors:
            return ["No co-authors configured for current branch"]
        return ["Current co-authors:", *(f"  {c}" for c in self.coauthors)]


class PairSession:
    """Orchestrates the pairing operations for the current branch.

    Attributes:
        repo (GitRepo): The repository being configured.
        roster (GlobalRoster): The global alias roster.
        config (Config): Effective configuration.
    """

    def __init__(
        self, repo: GitRepo, roster: GlobalRoster, config: Config | None = None
    ):
        self.repo = repo
        self.roster = roster
        self.config = config or Config()
        self.store = BranchConfigStore(repo.git_dir())
        self.resolver = CoAuthorResolver(roster)

    @classmethod
    def open(cls, cwd: Path | None = None) -> "PairSession":
        """Builds a session for the repository enclosing `cwd`.

        Raises:
            NotAGitRepository: If `cwd` is not inside a git working tree.
        """
        repo = GitRepo.discover(cwd)
        config = Config.load(repo.path)
        roster = GlobalRoster(paths.roster_path(config.roster.file))
        return cls(repo, roster, config)

    @property
    def branch(self) -> str:
        return self.repo.current_branch()

    @property
    def hook(self) -> HookSynthesizer:
        return HookSynthesizer(self.repo.hooks_dir(), self.config.hook)

    def _require_initialized(self, branch: str) -> str:
        branch_id = paths.sanitize_branch(branch)
        if not self.store.exists(branch_id):
            raise NotInitialized(branch)
        return branch_id

    def init(self) -> tuple[bool, Path]:
        """Creates the current branch's config. Idempotent.

        Returns:
            tuple[bool, Path]: Whether a new config was created, and its path.
        """
        branch = self.branch
        branch_id = paths.sanitize_branch(branch)
        created = self.store.init(branch_id, branch)
        return created, self.store.path_for(branch_id)

    def add(self, args: Sequence[str]) -> list[CoAuthor]:
        """Adds co-authors to the current branch and installs the hook.

        All requested co-authors are resolved before the config is touched,
        so an unknown alias leaves the branch unchanged.

        Args:
            args (Sequence[str]): A name/email pair or one or more aliases.

        Returns:
            list[CoAuthor]: The co-authors that were appended.

        Raises:
            NotInitialized: If `init` has not been run for the branch.
            AliasNotFound: If any alias is missing from the roster.
            UsageError: If the arguments fit no accepted shape.
        """
        branch_id = self._require_initialized(self.branch)
        coauthors = self.resolver.resolve(args)
        self.store.append(branch_id, coauthors)
        self.hook.install()
        logger.debug(f"Added {len(coauthors)} co-author(s) to '{branch_id}'")
        return coauthors

    def clear(self) -> bool:
        """Wipes the current branch's co-authors and removes the hook block.

        The hook is removed even if other branches still have co-authors.

        Returns:
            bool: True if a config was cleared, False if the branch had none.
        """
        branch_id = paths.sanitize_branch(self.branch)
        cleared = self.store.clear(branch_id)
        self.hook.remove()
        return cleared

    def remove(self, identifier: str) -> list[CoAuthor]:
        """Removes co-authors matching a name, an email, or a roster alias.

        Returns:
            list[CoAuthor]: Every stored entry that was removed.

        Raises:
            NotInitialized: If `init` has not been run for the branch.
            CoAuthorNotFound: If nothing on the branch matches.
        """
        branch = self.branch
        branch_id = self._require_initialized(branch)
        config = self.store.load(branch_id)

        aliases = {e.alias: e.coauthor for e in self.roster.list()}
        target = aliases.get(identifier)

        def matches(c: CoAuthor) -> bool:
            if target is not None and c == target:
                return True
            return identifier in (c.name, c.email)

        removed = [c for c in config.coauthors if matches(c)]
        if not removed:
            raise CoAuthorNotFound(identifier, branch)

        kept = [c for c in config.coauthors if not matches(c)]
        self.store.replace(BranchConfig(branch_id=branch_id, coauthors=kept))
        if not kept:
            self.hook.remove()
        return removed

    def status(self) -> PairStatus:
        """Reports the current branch's co-authors without modifying anything."""
        branch = self.branch
        try:
            config = self.store.load(paths.sanitize_branch(branch))
        except NotInitialized:
            return PairStatus(branch=branch, initialized=False)
        return PairStatus(branch=branch, initialized=True, coauthors=config.coauthors)

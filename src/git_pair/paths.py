"""Path derivation for branch config files and the global roster."""

import os
from pathlib import Path

from . import constants

_UNSAFE_CHARS = str.maketrans({"/": "_", "\\": "_", ":": "_"})


def sanitize_branch(branch: str) -> str:
    """Derives a single-segment file name component from a branch name.

    Every `/`, `\\` and `:` becomes `_`, so 'feature/auth' maps to
    'feature_auth'. Distinct names such as 'a/b' and 'a_b' collide; that is
    accepted rather than defended against.

    Args:
        branch (str): The git branch name.

    Returns:
        str: The branch identifier.

    Raises:
        ValueError: If the branch name is empty.
    """
    if not branch:
        raise ValueError("Branch name must not be empty")
    return branch.translate(_UNSAFE_CHARS)


def git_pair_dir(git_dir: Path) -> Path:
    """Returns the directory holding the per-branch config files."""
    return git_dir / constants.PAIR_DIR_NAME


def config_path(git_dir: Path, branch_id: str) -> Path:
    """Returns `{git_dir}/git-pair/config-{branch_id}`."""
    return git_pair_dir(git_dir) / f"{constants.BRANCH_CONFIG_PREFIX}{branch_id}"


def roster_path(configured: str | None = None) -> Path:
    """Resolves the global roster location.

    The resolution order is:
    1. The `GIT_PAIR_ROSTER_FILE` environment variable, when non-empty.
    2. The `[roster] file` configuration value, when set.
    3. `~/.config/git-pair/roster` (or under `$XDG_CONFIG_HOME`).

    Args:
        configured (str | None): The roster path from configuration, if any.

    Returns:
        Path: The roster file path (which may not exist yet).
    """
    override = os.environ.get(constants.ROSTER_ENV_VAR)
    if override:
        return Path(override).expanduser()
    if configured:
        return Path(configured).expanduser()
    return constants.ROSTER_FILE

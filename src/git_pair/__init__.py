"""git-pair: per-branch co-author management for pair programming.

This package stores, per branch, the collaborators to credit on every commit,
keeps a global alias roster for quick reuse across repositories, and installs
a `prepare-commit-msg` hook that appends the matching `Co-authored-by`
trailers at commit time.
"""

from . import (
    branch_store,
    cli,
    config,
    constants,
    errors,
    git_wrapper,
    hook,
    models,
    paths,
    resolver,
    roster,
    session,
    storage,
)

__all__ = [
    "branch_store",
    "cli",
    "config",
    "constants",
    "errors",
    "git_wrapper",
    "hook",
    "models",
    "paths",
    "resolver",
    "roster",
    "session",
    "storage",
]

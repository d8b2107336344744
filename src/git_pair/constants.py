import os
from pathlib import Path

"""Global constants and path definitions for git-pair.

This module defines the filesystem layout (adhering to XDG standards where
applicable), the environment variables the tool honours, and the markers used
to delimit the tool-owned region of the commit hook.
"""

# --- Identity ---
APP_NAME = "git-pair"
"""str: The human-readable application name."""

VERSION = "0.1.0"
"""str: The released version string."""

# --- Environment ---
ROSTER_ENV_VAR = "GIT_PAIR_ROSTER_FILE"
"""str: Environment variable overriding the global roster location."""

# --- Configuration Paths ---
_XDG_CONFIG = os.environ.get("XDG_CONFIG_HOME")
_BASE_CONFIG = Path(_XDG_CONFIG) if _XDG_CONFIG else Path.home() / ".config"

CONFIG_DIR: Path = _BASE_CONFIG / "git-pair"
"""Path: The directory for user configuration files."""

CONFIG_FILE: Path = CONFIG_DIR / "config.toml"
"""Path: The global configuration file path."""

ROSTER_FILE: Path = CONFIG_DIR / "roster"
"""Path: The default global roster file path."""

LOCAL_CONFIG_NAME = ".git-pair.toml"
"""str: Repository-local configuration file name."""

# --- Repository Layout ---
PAIR_DIR_NAME = "git-pair"
"""str: Directory inside the git dir holding per-branch config files."""

BRANCH_CONFIG_PREFIX = "config-"
"""str: Prefix of every per-branch config file name."""

HOOK_NAME = "prepare-commit-msg"
"""str: The git hook used to inject co-author trailers."""

# --- Hook Markers ---
HOOK_BEGIN_MARKER = "# >>> git-pair >>>"
"""str: First line of the git-pair region inside the hook script."""

HOOK_END_MARKER = "# <<< git-pair <<<"
"""str: Last line of the git-pair region inside the hook script."""

LEGACY_HOOK_SIGNATURE = "# git-pair hook"
"""str: Prefix of the signature line in hooks predating sentinel markers."""

TRAILER_KEY = "Co-authored-by"
"""str: Commit trailer key written for each co-author."""

KNOWN_COMMIT_SOURCES = ["message", "template", "merge", "squash", "commit"]
"""list[str]: Values git passes as the second prepare-commit-msg argument."""

import logging
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from . import constants
from .constants import APP_NAME, KNOWN_COMMIT_SOURCES, LOCAL_CONFIG_NAME

logger = logging.getLogger(APP_NAME)


def parse_sources(value: list | str) -> list[str]:
    """Normalizes the `commit_sources` setting, dropping unknown names."""
    items = [value] if isinstance(value, str) else list(value)
    sources = []
    for item in items:
        name = str(item).strip().lower()
        if name not in KNOWN_COMMIT_SOURCES:
            logger.warning(
                f"Unknown commit source '{item}'. "
                f"Expected one of: {', '.join(KNOWN_COMMIT_SOURCES)}."
            )
            continue
        if name not in sources:
            sources.append(name)
    return sources


@dataclass
class RosterConfig:
    """Global roster settings.

    Attributes:
        file (str | None): Roster location. `GIT_PAIR_ROSTER_FILE` takes
            precedence when set.
    """

    file: str | None = None


@dataclass
class HookConfig:
    """Commit hook behaviour.

    Attributes:
        commit_sources (list[str]): Commit sources, besides a plain
            `git commit`, on which trailers are injected.
        skip_if_present (bool): Leave messages that already carry a
            `Co-authored-by` trailer untouched.
    """

    commit_sources: list[str] = field(default_factory=lambda: ["message"])
    skip_if_present: bool = True


@dataclass
class Config:
    """Global configuration aggregator.

    Attributes:
        roster (RosterConfig): Roster settings.
        hook (HookConfig): Hook settings.
    """

    roster: RosterConfig = field(default_factory=RosterConfig)
    hook: HookConfig = field(default_factory=HookConfig)

    @classmethod
    def load(cls, repo_path: Path | None = None) -> "Config":
        """Loads and merges configuration from defaults, global, and local sources.

        Args:
            repo_path (Path | None): The repository root to search for local config.

        Returns:
            Config: The fully merged configuration object.
        """
        instance = cls()
        if constants.CONFIG_FILE.exists():
            instance._merge_from_file(constants.CONFIG_FILE)

        if repo_path:
            local_toml = repo_path / LOCAL_CONFIG_NAME
            pyproject = repo_path / "pyproject.toml"

            if local_toml.exists():
                instance._merge_from_file(local_toml)
            elif pyproject.exists():
                instance._merge_from_file(pyproject, section="tool.git-pair")

        return instance

    def _merge_from_file(self, path: Path, section: str | None = None) -> None:
        """Parses a TOML file and merges it into the current instance.

        Args:
            path (Path): Path to the TOML file.
            section (str | None): Dot-separated section path (e.g., 'tool.git-pair').
        """
        try:
            with open(path, "rb") as f:
                data = tomllib.load(f)

            if section:
                for key in section.split("."):
                    data = data.get(key, {})

            if not data:
                return

            if "roster" in data:
                self.roster = self._update_dataclass(
                    "roster", self.roster, data["roster"]
                )
            if "hook" in data:
                self.hook = self._update_dataclass("hook", self.hook, data["hook"])

        except tomllib.TOMLDecodeError as e:
            logger.error(f"Config syntax error in {path}: {e}")
        except OSError as e:
            logger.warning(f"Failed to load config from {path}: {e}")

    @staticmethod
    def _update_dataclass(section_name: str, instance: Any, updates: dict) -> Any:
        """Updates a dataclass, warning on invalid keys and malformed values."""
        valid_keys = instance.__dataclass_fields__.keys()
        filtered_updates = {}

        invalid_keys = set(updates.keys()) - set(valid_keys)
        if invalid_keys:
            logger.warning(
                f"Unknown config keys in [{section_name}]: "
                f"{', '.join(sorted(invalid_keys))}. Ignoring."
            )

        for k, v in updates.items():
            if k not in valid_keys:
                continue

            if k == "commit_sources":
                if not isinstance(v, (list, str)):
                    logger.warning(
                        f"Config error in [{section_name}].{k}: expected a list. "
                        "Falling back to default."
                    )
                    continue
                filtered_updates[k] = parse_sources(v)
            elif k == "skip_if_present" and not isinstance(v, bool):
                logger.warning(
                    f"Config error in [{section_name}].{k}: expected true/false. "
                    "Falling back to default."
                )
            elif k == "file" and not isinstance(v, str):
                logger.warning(
                    f"Config error in [{section_name}].{k}: expected a path string. "
                    "Falling back to default."
                )
            else:
                filtered_updates[k] = v

        return replace(instance, **filtered_updates)

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from . import storage
from .config import HookConfig
from .constants import (
    APP_NAME,
    HOOK_BEGIN_MARKER,
    HOOK_END_MARKER,
    HOOK_NAME,
    LEGACY_HOOK_SIGNATURE,
    TRAILER_KEY,
)

logger = logging.getLogger(APP_NAME)

SHEBANG = "#!/bin/sh\n"
HOOK_MODE = 0o755
_SHELLS = {"sh", "bash", "dash", "zsh", "ksh", "ash"}

# Placeholders are substituted with str.replace; the script itself uses `%s`.
_BLOCK_TEMPLATE = r"""__BEGIN__
git_pair_status=$?
[ "$git_pair_status" -eq 0 ] || exit "$git_pair_status"
# Managed by git-pair. Remove with 'git pair clear'.
git_pair_msg_file="$1"
git_pair_source="$2"
case "$git_pair_source" in
  __SOURCES__) git_pair_apply=1 ;;
  *) git_pair_apply=0 ;;
esac
if [ "$git_pair_apply" = 1 ]__PRESENT_CHECK__; then
  git_pair_branch=$(git branch --show-current 2>/dev/null)
  git_pair_safe=$(printf '%s' "$git_pair_branch" | tr '/\\:' '___')
  git_pair_config="$(git rev-parse --git-dir)/git-pair/config-$git_pair_safe"
  if [ -n "$git_pair_branch" ] && [ -f "$git_pair_config" ]; then
    git_pair_trailers=$(sed -e '/^[[:space:]]*#/d' -e '/^[[:space:]]*$/d' \
      -e 's/^__KEY__:[[:space:]]*//' -e 's/^/__KEY__: /' "$git_pair_config")
    if [ -n "$git_pair_trailers" ]; then
      printf '\n%s\n' "$git_pair_trailers" >> "$git_pair_msg_file"
    fi
  fi
fi
__END__
"""


def render_block(config: HookConfig | None = None) -> str:
    """Renders the tool-owned hook region, sentinel markers included.

    Args:
        config (HookConfig | None): Hook behaviour settings. Defaults apply
            when omitted.

    Returns:
        str: The shell fragment, terminated by a newline.
    """
    config = config or HookConfig()
    # An empty source means a plain `git commit` and is always included.
    sources = ['""', *config.commit_sources]
    present_check = ""
    if config.skip_if_present:
        present_check = f" && ! grep -q '^{TRAILER_KEY}:' \"$git_pair_msg_file\""
    return (
        _BLOCK_TEMPLATE.replace("__BEGIN__", HOOK_BEGIN_MARKER)
        .replace("__END__", HOOK_END_MARKER)
        .replace("__SOURCES__", "|".join(sources))
        .replace("__PRESENT_CHECK__", present_check)
        .replace("__KEY__", TRAILER_KEY)
    )


class HookState(enum.Enum):
    ABSENT = "absent"
    FOREIGN = "foreign"
    INSTALLED = "installed"
    CHAINED = "chained"


def _has_content(text: str) -> bool:
    """True if `text` holds anything beyond a shebang and blank lines."""
    for i, line in enumerate(text.splitlines()):
        if i == 0 and line.startswith("#!"):
            continue
        if line.strip():
            return True
    return False


def _is_shell_script(text: str) -> bool:
    first = text.splitlines()[0] if text else ""
    if not first.startswith("#!"):
        return True
    parts = first[2:].split()
    if not parts:
        return True
    interpreter = os.path.basename(parts[0])
    if interpreter == "env" and len(parts) > 1:
        interpreter = parts[1]
    return interpreter in _SHELLS


@dataclass
class HookFile:
    """A hook script split into foreign regions around the git-pair block.

    Attributes:
        before (str): Content preceding the block (or all content if no block).
        after (str): Content following the block.
        has_block (bool): Whether a git-pair block is present.
    """

    before: str = ""
    after: str = ""
    has_block: bool = False

    @classmethod
    def parse(cls, text: str) -> "HookFile":
        lines = text.splitlines(keepends=True)
        begin = end = None
        for i, line in enumerate(lines):
            stripped = line.strip()
            if stripped == HOOK_BEGIN_MARKER and begin is None:
                begin = i
            elif stripped == HOOK_END_MARKER and begin is not None:
                end = i
                break

        if begin is None:
            if any(line.strip().startswith(LEGACY_HOOK_SIGNATURE) for line in lines):
                # Hooks from older releases were written whole, without markers.
                return cls(has_block=True)
            return cls(before=text)

        if end is None:
            logger.warning(
                f"Unterminated git-pair block in {HOOK_NAME}; "
                "treating the rest of the file as tool-owned."
            )
            end = len(lines) - 1

        before = "".join(lines[:begin])
        after = "".join(lines[end + 1 :])
        return cls(before=before, after=after, has_block=True)

    @property
    def foreign(self) -> str:
        """The non-git-pair content, without the separator added on chaining."""
        before = self.before
        if self.has_block and before.endswith("\n\n"):
            before = before[:-1]
        return before + self.after

    @property
    def state(self) -> HookState:
        if not self.has_block:
            return HookState.FOREIGN if _has_content(self.before) else HookState.ABSENT
        if _has_content(self.foreign):
            return HookState.CHAINED
        return HookState.INSTALLED

    def with_block(self, block: str) -> str:
        """Renders the file with `block` installed, replacing any previous one."""
        if self.has_block:
            before = self.before or SHEBANG
            return before + block + self.after
        if not _has_content(self.before):
            return SHEBANG + block
        before = self.before if self.before.endswith("\n") else self.before + "\n"
        return before + "\n" + block

    def without_block(self) -> str | None:
        """Renders the file with the block stripped, or None if nothing remains."""
        remaining = self.foreign
        return remaining if _has_content(remaining) else None


class HookSynthesizer:
    """Installs and removes the co-author injection block in the commit hook.

    The block is delimited by sentinel comments so that install and remove are
    exact inverses. Any foreign hook content stays in place; the block is
    chained after it.

    Attributes:
        hooks_dir (Path): The directory git reads hooks from.
        config (HookConfig): Behaviour baked into the generated script.
    """

    def __init__(self, hooks_dir: Path, config: HookConfig | None = None):
        self.hooks_dir = hooks_dir
        self.config = config or HookConfig()

    @property
    def path(self) -> Path:
        return self.hooks_dir / HOOK_NAME

    def _read(self) -> HookFile:
        text = storage.read_text(self.path)
        return HookFile.parse(text) if text is not None else HookFile()

    def state(self) -> HookState:
        return self._read().state

    def install(self) -> HookState:
        """Installs or refreshes the block. Idempotent.

        Returns:
            HookState: INSTALLED for a standalone hook, CHAINED when foreign
            content is present.

        Raises:
            StorageError: If the hook cannot be written.
        """
        hook = self._read()
        if not hook.has_block and _has_content(hook.before):
            if not _is_shell_script(hook.before):
                logger.warning(
                    f"Existing {HOOK_NAME} hook is not a shell script; "
                    "chaining shell commands onto it may break it."
                )
            logger.info(f"Chaining git-pair onto existing hook at {self.path}")

        content = hook.with_block(render_block(self.config))
        storage.write_atomic(self.path, content, mode=HOOK_MODE)
        new_state = HookFile.parse(content).state
        logger.debug(f"Hook {hook.state.value} -> {new_state.value}")
        return new_state

    def remove(self) -> HookState:
        """Strips the block, deleting the file if nothing else remains.

        Returns:
            HookState: ABSENT if the file is gone, FOREIGN if other content
            survived. A missing hook is a no-op.

        Raises:
            StorageError: If the hook cannot be rewritten or deleted.
        """
        hook = self._read()
        if not hook.has_block:
            return hook.state

        remaining = hook.without_block()
        if remaining is None:
            storage.remove_file(self.path)
            logger.debug(f"Removed hook {self.path}")
            return HookState.ABSENT

        storage.write_atomic(self.path, remaining, mode=HOOK_MODE)
        logger.debug(f"Stripped git-pair block from {self.path}")
        return HookState.FOREIGN

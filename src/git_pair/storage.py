import contextlib
import logging
import os
from pathlib import Path

from .constants import APP_NAME
from .errors import StorageError

logger = logging.getLogger(APP_NAME)


def read_text(path: Path) -> str | None:
    """Reads a whole file, returning None if it does not exist.

    Raises:
        StorageError: On any other filesystem failure.
    """
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return None
    except OSError as e:
        raise StorageError(path, e) from e


def write_atomic(path: Path, content: str, mode: int | None = None) -> None:
    """Replaces a file's content in one step.

    The content goes to a sibling temp file which is then swapped in with
    `os.replace`, so an interrupted write never leaves a truncated file.

    Args:
        path (Path): The destination file.
        content (str): The complete new content.
        mode (int | None): Permission bits to apply before the swap.

    Raises:
        StorageError: If the directory cannot be created or the write fails.
    """
    tmp_file = path.with_name(f".{path.name}.tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_file, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        if mode is not None:
            os.chmod(tmp_file, mode)
        os.replace(tmp_file, path)
    except OSError as e:
        with contextlib.suppress(OSError):
            tmp_file.unlink()
        raise StorageError(path, e) from e
    logger.debug(f"Wrote {path} ({len(content)} bytes)")


def remove_file(path: Path) -> bool:
    """Deletes a file if present.

    Returns:
        bool: True if a file was deleted, False if it was already absent.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as e:
        raise StorageError(path, e) from e
    logger.debug(f"Removed {path}")
    return True

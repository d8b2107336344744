import logging
from pathlib import Path

from . import storage
from .constants import APP_NAME
from .errors import AliasAlreadyExists, AliasNotFound, MalformedRecord
from .models import CoAuthor, RosterEntry

logger = logging.getLogger(APP_NAME)

ROSTER_HEADER = "# Global git-pair roster\n# Format: alias|name|email\n"


class GlobalRoster:
    """The alias -> co-author mapping shared across repositories.

    Stored as `alias|name|email` lines in insertion order. The file is re-read
    on every call; nothing is cached between operations.

    Attributes:
        path (Path): The roster file location.
    """

    def __init__(self, path: Path):
        self.path = path

    def list(self) -> list[RosterEntry]:
        """Returns every roster entry in insertion order.

        A missing file is an empty roster.

        Raises:
            MalformedRecord: If a non-comment line is not `alias|name|email`.
        """
        content = storage.read_text(self.path)
        if content is None:
            return []

        entries = []
        for line_no, line in enumerate(content.splitlines(), start=1):
            if not line.strip() or line.startswith("#"):
                continue
            parts = line.split("|")
            if len(parts) != 3:
                raise MalformedRecord(self.path, line_no, line)
            alias, name, email = (p.strip() for p in parts)
            try:
                entries.append(RosterEntry(alias, CoAuthor(name, email)))
            except ValueError as e:
                raise MalformedRecord(self.path, line_no, line) from e
        return entries

    def lookup(self, alias: str) -> CoAuthor:
        """Finds the co-author registered under an alias.

        Raises:
            AliasNotFound: If the alias is not in the roster.
        """
        for entry in self.list():
            if entry.alias == alias:
                return entry.coauthor
        raise AliasNotFound(alias)

    def add(self, alias: str, coauthor: CoAuthor) -> RosterEntry:
        """Registers a new alias.

        Raises:
            AliasAlreadyExists: If the alias is already taken.
            ValueError: If a field contains the `|` delimiter.
        """
        entry = RosterEntry(alias, coauthor)
        if any(e.alias == alias for e in self.list()):
            raise AliasAlreadyExists(alias)

        content = storage.read_text(self.path)
        if content is None:
            content = ROSTER_HEADER
        elif content and not content.endswith("\n"):
            content += "\n"

        record = f"{alias}|{coauthor.name}|{coauthor.email}\n"
        storage.write_atomic(self.path, content + record)
        logger.debug(f"Added alias '{alias}' to {self.path}")
        return entry

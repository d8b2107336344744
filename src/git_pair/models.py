import re
from dataclasses import dataclass, field

from .constants import TRAILER_KEY

_LINE_RE = re.compile(r"^(?P<name>[^<>]+?)\s*<(?P<email>[^<>\s]+)>$")


@dataclass(frozen=True)
class CoAuthor:
    """A person credited on a commit through a ``Co-authored-by`` trailer.

    Attributes:
        name (str): Free-form display name (e.g. 'Alice Johnson').
        email (str): The address git hosts use to attribute the commit.

    Raises:
        ValueError: If either field is empty or would corrupt the line format.
    """

    name: str
    email: str

    def __post_init__(self) -> None:
        if not self.name.strip():
            raise ValueError("Co-author name must not be empty")
        if not self.email.strip():
            raise ValueError("Co-author email must not be empty")
        if any(c in self.name for c in "<>\r\n"):
            raise ValueError(f"Invalid character in co-author name '{self.name}'")
        if self.name.lstrip().startswith("#"):
            raise ValueError(f"Co-author name must not start with '#': '{self.name}'")
        if any(c in self.email for c in "<>\r\n \t"):
            raise ValueError(f"Invalid character in co-author email '{self.email}'")

    def __str__(self) -> str:
        return f"{self.name} <{self.email}>"

    @property
    def trailer(self) -> str:
        """Returns the commit trailer line for this co-author."""
        return f"{TRAILER_KEY}: {self}"

    @classmethod
    def parse(cls, line: str) -> "CoAuthor | None":
        """Parses a ``Name <email>`` line.

        A leading ``Co-authored-by:`` key (the format older releases stored) is
        accepted and dropped.

        Args:
            line (str): A single stored line.

        Returns:
            CoAuthor | None: The parsed value, or None if the line is malformed.
        """
        text = line.strip()
        prefix = f"{TRAILER_KEY}:"
        if text.startswith(prefix):
            text = text[len(prefix) :].strip()
        match = _LINE_RE.match(text)
        if not match:
            return None
        return cls(match.group("name").strip(), match.group("email"))


@dataclass(frozen=True)
class RosterEntry:
    """A global roster record mapping a short alias to a co-author."""

    alias: str
    coauthor: CoAuthor

    def __post_init__(self) -> None:
        if not self.alias.strip() or any(c.isspace() for c in self.alias):
            raise ValueError(f"Invalid alias '{self.alias}'")
        if self.alias.startswith("#"):
            raise ValueError(f"Alias must not start with '#': '{self.alias}'")
        for value in (self.alias, self.coauthor.name, self.coauthor.email):
            if "|" in value:
                raise ValueError(f"Roster fields must not contain '|': '{value}'")


@dataclass
class BranchConfig:
    """The ordered co-author list stored for one branch.

    Attributes:
        branch_id (str): The sanitized branch identifier.
        coauthors (list[CoAuthor]): Co-authors in the order they were added.
            Duplicates are kept.
    """

    branch_id: str
    coauthors: list[CoAuthor] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.coauthors

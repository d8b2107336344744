"""Turns raw `add` arguments into concrete co-author records.

Two argument shapes are accepted, told apart once by `parse_add_args`:

* DirectSpec -- `<name...> <email>`: the last token contains `@`.
* AliasList  -- `<alias> [<alias>...]`: no token contains `@`.

An alias that itself contains `@` can never be reached through this dispatch.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from .constants import APP_NAME
from .errors import UsageError
from .models import CoAuthor
from .roster import GlobalRoster

logger = logging.getLogger(APP_NAME)

USAGE = (
    "Usage: git pair add <name> <email>\n"
    "   or: git pair add <alias> [<alias>...]\n"
    "   or: git pair add --global <alias> <name> <email>"
)


def is_email_like(token: str) -> bool:
    return "@" in token


@dataclass(frozen=True)
class DirectSpec:
    """A literal name/email pair given on the command line."""

    name: str
    email: str


@dataclass(frozen=True)
class AliasList:
    """One or more roster aliases to resolve."""

    aliases: tuple[str, ...]


AddSpec = DirectSpec | AliasList


def parse_add_args(args: Sequence[str]) -> AddSpec:
    """Classifies `add` arguments into one of the two accepted shapes.

    Args:
        args (Sequence[str]): The positional arguments after `add`.

    Returns:
        AddSpec: A DirectSpec or an AliasList.

    Raises:
        UsageError: If the arguments fit neither shape.
    """
    tokens = [a.strip() for a in args]
    if not tokens or not all(tokens):
        raise UsageError(USAGE)

    email_positions = [i for i, t in enumerate(tokens) if is_email_like(t)]
    if not email_positions:
        return AliasList(tuple(tokens))

    if email_positions != [len(tokens) - 1] or len(tokens) < 2:
        raise UsageError(USAGE)

    email = tokens[-1]
    if email.startswith("<") and email.endswith(">"):
        email = email[1:-1]
    # `add John Doe john@x.com` keeps the three-token form working.
    name = " ".join(tokens[:-1])
    return DirectSpec(name=name, email=email)


class CoAuthorResolver:
    """Resolves `add` arguments, consulting the roster for aliases.

    Attributes:
        roster (GlobalRoster): The roster used for alias lookups.
    """

    def __init__(self, roster: GlobalRoster):
        self.roster = roster

    def resolve(self, args: Sequence[str]) -> list[CoAuthor]:
        """Resolves every requested co-author before anything is applied.

        Raises:
            UsageError: If the argument shape is not recognised.
            AliasNotFound: On the first alias missing from the roster.
            ValueError: If a direct name/email pair is invalid.
        """
        spec = parse_add_args(args)
        if isinstance(spec, DirectSpec):
            return [CoAuthor(spec.name, spec.email)]

        resolved = []
        for alias in spec.aliases:
            coauthor = self.roster.lookup(alias)
            logger.debug(f"Resolved alias '{alias}' to {coauthor}")
            resolved.append(coauthor)
        return resolved

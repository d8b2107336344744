import argparse
import logging
import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import paths
from .config import Config
from .constants import APP_NAME, VERSION
from .errors import GitPairError, NotAGitRepository, UsageError
from .git_wrapper import GitRepo
from .models import CoAuthor
from .roster import GlobalRoster
from .session import PairSession

logger = logging.getLogger(APP_NAME)
console = Console()
err_console = Console(stderr=True)

GLOBAL_ADD_USAGE = "Usage: git pair add --global <alias> <name> <email>"


def setup_logging(verbose: bool) -> None:
    """Configures the logging subsystem.

    Args:
        verbose (bool): If True, emit debug traces. Otherwise only warnings.
    """
    formatter = logging.Formatter(
        "[%(asctime)s] %(levelname)s: %(message)s", "%Y-%m-%d %H:%M:%S"
    )
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(formatter)
    logger.handlers.clear()
    logger.addHandler(stream_handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def run_init(session: PairSession) -> None:
    branch = session.branch
    created, path = session.init()
    if created:
        console.print(
            f"[bold green]✔ Successfully initialized git-pair for branch "
            f"'{escape(branch)}'![/bold green]"
        )
        console.print(f"Configuration file created at: [cyan]{path}[/cyan]")
    else:
        console.print(
            f"git-pair already initialized for branch '{escape(branch)}'", style="dim"
        )


def open_roster() -> GlobalRoster:
    """Opens the global roster, honouring repository-local config when inside a repo."""
    try:
        repo_path = GitRepo.discover().path
    except NotAGitRepository:
        repo_path = None
    config = Config.load(repo_path)
    return GlobalRoster(paths.roster_path(config.roster.file))


def run_add_global(roster: GlobalRoster, values: list[str]) -> None:
    if len(values) != 3:
        raise UsageError(GLOBAL_ADD_USAGE)
    alias, name, email = values
    entry = roster.add(alias, CoAuthor(name, email))
    console.print(
        f"[green]Added '{escape(entry.alias)}' "
        f"({escape(str(entry.coauthor))}) to global roster[/green]"
    )


def run_add(session: PairSession, values: list[str]) -> None:
    branch = session.branch
    for coauthor in session.add(values):
        console.print(
            f"[green]Added co-author: {escape(str(coauthor))} "
            f"to branch '{escape(branch)}'[/green]"
        )


def run_clear(session: PairSession) -> None:
    branch = session.branch
    if session.clear():
        console.print(
            f"[green]Cleared all co-authors for branch '{escape(branch)}' "
            "and uninstalled git hook[/green]"
        )
    else:
        console.print(
            f"Nothing to clear for branch '{escape(branch)}'", style="dim"
        )


def run_remove(session: PairSession, identifier: str) -> None:
    branch = session.branch
    for coauthor in session.remove(identifier):
        console.print(
            f"[green]Removed co-author: {escape(str(coauthor))} "
            f"from branch '{escape(branch)}'[/green]"
        )


def show_status(session: PairSession) -> None:
    status = session.status()
    lines = status.describe()
    if not status.initialized:
        console.print(escape(lines[0]), style="yellow")
        return
    if not status.coauthors:
        console.print(escape(lines[0]), style="dim")
        return
    console.print(f"[bold]{escape(lines[0])}[/bold]")
    for line in lines[1:]:
        console.print(escape(line))


def show_roster(roster: GlobalRoster) -> None:
    entries = roster.list()
    if not entries:
        console.print("No entries in global roster", style="yellow")
        console.print(
            "Use 'git pair add --global <alias> <name> <email>' to add entries",
            style="dim",
        )
        return

    table = Table(title="Global roster", show_header=True, header_style="bold magenta")
    table.add_column("Alias", style="cyan")
    table.add_column("Name")
    table.add_column("Email", style="dim")
    for entry in entries:
        table.add_row(
            escape(entry.alias),
            escape(entry.coauthor.name),
            escape(entry.coauthor.email),
        )
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-pair",
        description=(
            "A git extension for pair programming with per-branch "
            "co-author management"
        ),
        epilog=(
            "Environment:\n"
            "  GIT_PAIR_ROSTER_FILE  Override global roster file location"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version=f"{APP_NAME} {VERSION}"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )

    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("init", help="Initialize git-pair for current branch")

    add_parser = subparsers.add_parser(
        "add",
        help="Add co-authors to current branch (or to the global roster)",
        description=(
            "git pair add <name> <email>\n"
            "git pair add <alias> [<alias>...]\n"
            "git pair add --global <alias> <name> <email>"
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    add_parser.add_argument(
        "--global",
        dest="is_global",
        action="store_true",
        help="Add an alias to the global roster",
    )
    add_parser.add_argument("values", nargs="+", metavar="arg")

    remove_parser = subparsers.add_parser(
        "remove", help="Remove a specific co-author from current branch"
    )
    remove_parser.add_argument("identifier", metavar="name|email|alias")

    subparsers.add_parser("clear", help="Remove all co-authors from current branch")
    status_parser = subparsers.add_parser(
        "status", help="Show current branch co-authors, or the global roster"
    )
    status_parser.add_argument(
        "--global", dest="is_global", action="store_true", help="Show global roster"
    )

    list_parser = subparsers.add_parser(
        "list", help="Show current branch co-authors, or the global roster"
    )
    list_parser.add_argument(
        "--global", dest="is_global", action="store_true", help="Show global roster"
    )

    subparsers.add_parser("help", help="Show this help message")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the git-pair CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command in (None, "help"):
        parser.print_help()
        return

    try:
        # Roster-only commands work outside a repository.
        if getattr(args, "is_global", False):
            roster = open_roster()
            if args.command == "add":
                run_add_global(roster, args.values)
            else:
                show_roster(roster)
            return

        session = PairSession.open()
        if args.command == "init":
            run_init(session)
        elif args.command == "add":
            run_add(session, args.values)
        elif args.command == "remove":
            run_remove(session, args.identifier)
        elif args.command == "clear":
            run_clear(session)
        elif args.command in ("status", "list"):
            show_status(session)
    except (GitPairError, ValueError) as e:
        logger.debug(f"{args.command} failed", exc_info=True)
        err_console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()

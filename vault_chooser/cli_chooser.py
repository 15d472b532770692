from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Callable
from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from vault_chooser.adapters.files.local_fs_adapter import LocalDirectoryListingAdapter
from vault_chooser.adapters.files.memory_fs_adapter import (
    InMemoryDirectoryListingAdapter,
)
from vault_chooser.config.settings import settings
from vault_chooser.entities.navigation_state import ChooserSnapshot
from vault_chooser.exceptions import BaseAppError, NavigationError
from vault_chooser.ports.files.directory_listing_port import DirectoryListingPort
from vault_chooser.use_cases.navigation.chooser_session import ChooserSession
from vault_chooser.utils.paths import basename

ReadLine = Callable[[str], str]


def _supports_color() -> bool:
    if os.getenv("NO_COLOR"):
        return False
    return sys.stderr.isatty()


def _print_help(console: Console) -> None:
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column(style="cyan")
    table.add_column()
    table.add_row("<n>", "Open directory n or select file n")
    table.add_row("up", "Go to the parent directory")
    table.add_row("crumb <n>", "Jump to breadcrumb n")
    table.add_row("new <name>", "Draft a new vault in the current directory")
    table.add_row("draft", "Select the drafted new vault again")
    table.add_row("cancel", "Drop the drafted new vault")
    table.add_row("ok", "Confirm the selected target")
    table.add_row("quit", "Leave without choosing")
    table.add_row("help", "Show this help")
    console.print(Panel(table, title="Commands", border_style="cyan"))


def _parse_command(line: str) -> tuple[str, list[str]]:
    parts = line.strip().split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


def _render(console: Console, snapshot: ChooserSnapshot) -> None:
    nav = snapshot.navigation
    crumbs = [f"[dim]{i}[/dim] {escape(b.label)}" for i, b in enumerate(nav.breadcrumbs, 1)]
    crumbs.append(f"[bold]{escape(basename(nav.current_directory))}[/bold]")

    table = Table(title=" › ".join(crumbs), box=box.SIMPLE_HEAD, title_justify="left")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Kind", style="dim")
    if not nav.is_loading:
        for i, entry in enumerate(nav.entries, 1):
            name = escape(entry.name)
            if entry.is_directory:
                name = f"[yellow]{name}/[/yellow]"
            if entry.identifier == nav.selected_target:
                name = f"[reverse]{name}[/reverse]"
            table.add_row(str(i), name, entry.kind.value)
    if nav.draft_target:
        name = f"[red]+[/red] {escape(basename(nav.draft_target))}"
        if nav.draft_target == nav.selected_target:
            name = f"[reverse]{name}[/reverse]"
        table.add_row("", name, "new")
    console.print(table)

    if nav.is_loading:
        console.print("[dim]Loading…[/dim]")
    if nav.listing_error:
        console.print(
            Panel(escape(nav.listing_error), title="Listing failed", border_style="red")
        )
    if snapshot.composer.collision:
        console.print(
            f"[yellow]{escape(snapshot.composer.collision)} already exists; "
            "the new vault was discarded.[/yellow]"
        )
    selected = nav.selected_target or "nothing"
    console.print(f"Selected: [green]{escape(selected)}[/green]")


def _index_arg(args: list[str], count: int) -> int:
    if len(args) != 1 or not args[0].isdigit():
        raise NavigationError("Expected one number")
    index = int(args[0])
    if not 1 <= index <= count:
        raise NavigationError(f"Number must be between 1 and {count}")
    return index - 1


async def _dispatch(session: ChooserSession, console: Console, cmd: str, args: list[str]) -> bool:
    """Run one command; returns True when the session is finished."""
    nav = session.snapshot.navigation
    if cmd.isdigit():
        cmd, args = "open", [cmd]

    if cmd == "open":
        entry = nav.entries[_index_arg(args, len(nav.entries))]
        task = session.activate_entry(entry)
        if task is not None:
            await task
    elif cmd == "up":
        if not nav.breadcrumbs:
            raise NavigationError("Already at the root")
        await session.navigate_to_breadcrumb(nav.breadcrumbs[-1])
    elif cmd == "crumb":
        breadcrumb = nav.breadcrumbs[_index_arg(args, len(nav.breadcrumbs))]
        await session.navigate_to_breadcrumb(breadcrumb)
    elif cmd == "new":
        session.open_prompt()
        session.update_filename_draft(" ".join(args))
        if not session.snapshot.can_submit:
            session.close_prompt()
            raise NavigationError("A vault name needs a non-dot character and no '/' or '\\'")
        session.submit_prompt()
    elif cmd == "draft":
        session.select_draft()
    elif cmd == "cancel":
        session.cancel_draft()
    elif cmd == "ok":
        if nav.selected_target is None:
            raise NavigationError("Nothing is selected")
        session.complete()
        return True
    elif cmd in ("quit", "q", "exit"):
        session.abort()
        return True
    elif cmd in ("help", "?"):
        _print_help(console)
    elif cmd:
        raise NavigationError(f"Unknown command: {cmd} (type 'help')")
    return False


async def run_chooser(
    session: ChooserSession, console: Console, read_line: ReadLine
) -> Optional[str]:
    """
    Drive a chooser session from line-based input until it is confirmed or aborted.

    Returns:
        The confirmed target, or None when the user quit
    """
    await session.initialize()
    finished = False
    while not finished:
        _render(console, session.snapshot)
        try:
            line = await asyncio.to_thread(read_line, "> ")
        except EOFError:
            session.abort()
            break
        cmd, args = _parse_command(line)
        try:
            finished = await _dispatch(session, console, cmd, args)
        except NavigationError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
    return session.result


def _build_gateway(args: argparse.Namespace) -> DirectoryListingPort:
    # Explicit flags win over the environment; a configured tree file wins over the root
    if args.tree:
        return InMemoryDirectoryListingAdapter.from_json_file(args.tree)
    if args.root:
        return LocalDirectoryListingAdapter(args.root, show_hidden=args.show_hidden)
    if settings.tree_file:
        return InMemoryDirectoryListingAdapter.from_json_file(settings.tree_file)
    return LocalDirectoryListingAdapter(settings.root_path, show_hidden=args.show_hidden)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vault-chooser",
        description=(
            "Browse a directory tree and pick an existing vault or a new vault path. "
            "The chosen path is printed to stdout."
        ),
    )
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--root",
        help="Directory shown as '/' (default: VAULT_CHOOSER_ROOT or home)",
    )
    source.add_argument(
        "--tree",
        help=(
            "JSON file describing a virtual tree, directories as objects and files as null "
            "(default: VAULT_CHOOSER_TREE_FILE)"
        ),
    )
    parser.add_argument(
        "--suffix",
        default=settings.document_suffix,
        help="Suffix appended to new vault names (default: %(default)s)",
    )
    parser.add_argument(
        "--show-hidden",
        action="store_true",
        default=settings.show_hidden,
        help="Include dot-files and dot-directories",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Log level for diagnostics on stderr (default: %(default)s)",
    )
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    # Stdout carries only the chosen path
    console = Console(stderr=True, no_color=not _supports_color())

    try:
        gateway = _build_gateway(args)
        session = ChooserSession(gateway, suffix=args.suffix)
    except BaseAppError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        return 2

    try:
        target = asyncio.run(run_chooser(session, console, console.input))
    except KeyboardInterrupt:
        if not session.completed:
            session.abort()
        return 1
    if target is None:
        return 1
    if isinstance(gateway, LocalDirectoryListingAdapter):
        try:
            target = gateway.to_native_path(target)
        except BaseAppError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            return 2
    print(target)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())

"""Console output for fixcommit.

All styling decisions come from the ``Config`` a ``Reporter`` is built with;
nothing here is module-level mutable state.
"""

from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from fixcommit.config import Config
from fixcommit.utils import StatusRecord

__all__ = ["Reporter", "describe_code"]

_STATE_NAMES = {
    "M": "modified",
    "A": "added",
    "D": "deleted",
    "R": "renamed",
    "C": "copied",
    "U": "unmerged",
    "T": "type changed",
    "?": "untracked",
    "!": "ignored",
}


def describe_code(record: StatusRecord) -> str:
    """Human readable form of a status code, e.g. ``staged: added, worktree: modified``."""
    if record.is_untracked:
        return "untracked"
    parts = []
    if record.index_state != " ":
        parts.append(f"staged: {_STATE_NAMES.get(record.index_state, record.index_state)}")
    if record.worktree_state != " ":
        parts.append(f"worktree: {_STATE_NAMES.get(record.worktree_state, record.worktree_state)}")
    return ", ".join(parts)


class Reporter:
    """Writes status, results and summaries to a rich console."""

    def __init__(self, config: Config, console: Optional[Console] = None) -> None:
        self.config = config
        if console is None:
            console = Console(no_color=not config.color, highlight=False,
                              force_terminal=None if config.color else False)
        self.console = console

    def info(self, message: str) -> None:
        self.console.print(f"[bold blue]{message}[/bold blue]")

    def success(self, message: str) -> None:
        self.console.print(f"[green]✓ {message}[/green]")

    def warning(self, message: str) -> None:
        self.console.print(f"[yellow]⚠ {message}[/yellow]")

    def error(self, message: str) -> None:
        self.console.print(f"[red]✗ {message}[/red]")

    def plain(self, message: str) -> None:
        self.console.print(message, markup=False)

    def show_records(self, records: Iterable[StatusRecord], title: str) -> None:
        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("Code", style="magenta", no_wrap=True)
        table.add_column("Path", overflow="fold")
        table.add_column("State", style="dim")
        for record in records:
            path = record.path
            if record.orig_path:
                path = f"{record.orig_path} -> {record.path}"
            table.add_row(record.code.replace(" ", "·"), path, describe_code(record))
        self.console.print(table)

    def show_stat(self, stat: str) -> None:
        if stat:
            self.console.print(Panel(stat, title="Staged changes", border_style="cyan",
                                     expand=False), markup=False)

    def show_commit_message(self, message: str) -> None:
        self.console.print(Panel(message, title="Commit message", border_style="green",
                                 expand=False), markup=False)

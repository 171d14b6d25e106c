#!/usr/bin/env python3
"""
Screenshot checklist

Verifies that every figure referenced by the user guide has its screenshot
on disk and reports the file sizes.

Usage:
    check-screenshots [-d DIR] [--no-color]

The exit status is the number of missing screenshots.
"""

import argparse
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence

from rich.table import Table

from fixcommit.config import Config
from fixcommit.output import Reporter

__all__ = ["DEFAULT_MANIFEST", "ScreenshotEntry", "ScreenshotStatus", "check_screenshots", "main"]

DEFAULT_DIRECTORY = Path("docs") / "screenshots"


@dataclass(frozen=True)
class ScreenshotEntry:
    figure: int
    filename: str
    description: str


@dataclass(frozen=True)
class ScreenshotStatus:
    entry: ScreenshotEntry
    path: Path
    exists: bool
    size: int = 0


DEFAULT_MANIFEST = (
    ScreenshotEntry(1, "fix-commit-mismatch.png", "Files whose staged content differs from disk"),
    ScreenshotEntry(2, "fix-commit-confirm.png", "Single confirmation before re-staging"),
    ScreenshotEntry(3, "fix-commit-result.png", "Commit summary with abbreviated hash"),
    ScreenshotEntry(4, "quick-commit-unattended.png", "Unattended run with --yes"),
    ScreenshotEntry(5, "push-set-upstream.png", "Push falling back to --set-upstream"),
    ScreenshotEntry(6, "push-force-with-lease.png", "Diverged branch and force-with-lease prompt"),
)


def check_screenshots(directory: Path,
                      manifest: Sequence[ScreenshotEntry] = DEFAULT_MANIFEST) -> List[ScreenshotStatus]:
    statuses = []
    for entry in manifest:
        path = directory / entry.filename
        if path.is_file():
            statuses.append(ScreenshotStatus(entry, path, True, path.stat().st_size))
        else:
            statuses.append(ScreenshotStatus(entry, path, False))
    return statuses


def format_size(size: int) -> str:
    if size < 1024:
        return f"{size} B"
    if size < 1024 * 1024:
        return f"{size / 1024:.1f} KB"
    return f"{size / (1024 * 1024):.1f} MB"


def build_table(statuses: Sequence[ScreenshotStatus]) -> Table:
    table = Table(title="Screenshots", header_style="bold cyan")
    table.add_column("Fig.", justify="right")
    table.add_column("File")
    table.add_column("Description", style="dim")
    table.add_column("Status")
    table.add_column("Size", justify="right")
    for status in statuses:
        table.add_row(
            str(status.entry.figure),
            status.entry.filename,
            status.entry.description,
            "[green]found[/green]" if status.exists else "[red]missing[/red]",
            format_size(status.size) if status.exists else "-",
        )
    return table


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check-screenshots",
        description="Check that every documentation screenshot exists",
    )
    parser.add_argument(
        "-d", "--dir",
        type=Path,
        default=DEFAULT_DIRECTORY,
        help=f"Directory holding the screenshots (default: {DEFAULT_DIRECTORY})",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    reporter = Reporter(Config(color=not args.no_color))

    statuses = check_screenshots(args.dir)
    reporter.console.print(build_table(statuses))

    missing = sum(1 for status in statuses if not status.exists)
    if missing:
        reporter.error(f"{missing} of {len(statuses)} screenshot(s) missing in {args.dir}")
    else:
        reporter.success(f"All {len(statuses)} screenshots present")
    return missing


if __name__ == "__main__":
    sys.exit(main())

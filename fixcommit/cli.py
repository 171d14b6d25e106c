#!/usr/bin/env python3
"""
fixcommit CLI Interface

Two entry points share one workflow:

    fix-commit [MESSAGE] [options]
        Careful variant. Multi-line message entry; declining the commit
        exits with status 1.

    quick-commit [MESSAGE] [options]
        Lenient variant. Single-line message entry; declining exits 0.

Options:
    -m, --message MSG     Commit message (fix-commit; same as MESSAGE)
    -y, --yes             Answer yes to every prompt (unattended)
    -p, --push            Push after committing
    -a, --all             Stage every change before committing
    -f, --files PATTERN   Stage files matching PATTERN first (fix-commit)
    -n, --no-fix          Skip the staging-mismatch fix
    -C, --path PATH       Repository path (default: current directory)
    --no-color            Disable colored output
    -v, --verbose         Debug logging and full tracebacks
    --version             Show version information
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.logging import RichHandler

from fixcommit import __version__
from fixcommit.config import Config
from fixcommit.errors import RepositoryEnvironmentError, UserCancellation
from fixcommit.main import run
from fixcommit.output import Reporter


class Colors:
    GREEN = "\033[92m"
    ENDC = "\033[0m"


class ColoredHelpFormatter(argparse.RawDescriptionHelpFormatter):
    """Help formatter that colors option strings."""

    def __init__(self, prog: str, color: bool = True, **kwargs) -> None:
        super().__init__(prog, **kwargs)
        self.use_color = color and sys.stdout.isatty()

    def _format_action_invocation(self, action: argparse.Action) -> str:
        text = super()._format_action_invocation(action)
        if not self.use_color or not action.option_strings:
            return text
        return f"{Colors.GREEN}{text}{Colors.ENDC}"


def create_argument_parser(strict: bool = True) -> argparse.ArgumentParser:
    prog = "fix-commit" if strict else "quick-commit"
    description = (
        "Re-stage files whose staged content no longer matches the working tree, "
        "then commit (and optionally push)."
    )
    parser = argparse.ArgumentParser(
        prog=prog,
        description=description,
        formatter_class=ColoredHelpFormatter,
    )
    add_version_argument(parser)
    add_message_arguments(parser, strict)
    add_staging_arguments(parser, strict)
    add_directory_argument(parser)
    add_output_arguments(parser)
    return parser


def add_version_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version information",
    )


def add_message_arguments(parser: argparse.ArgumentParser, strict: bool = True) -> None:
    parser.add_argument(
        "message",
        nargs="?",
        default=None,
        help="Commit message (prompted for when omitted)",
    )
    if strict:
        parser.add_argument(
            "-m", "--message",
            dest="message_option",
            metavar="MESSAGE",
            default=None,
            help="Commit message, as an option",
        )


def add_staging_arguments(parser: argparse.ArgumentParser, strict: bool = True) -> None:
    parser.add_argument(
        "-y", "--yes",
        action="store_true",
        help="Answer yes to every prompt and synthesize a message if none is given",
    )
    parser.add_argument(
        "-p", "--push",
        action="store_true",
        help="Push the current branch after committing",
    )
    parser.add_argument(
        "-a", "--all",
        dest="stage_all",
        action="store_true",
        help="Stage every change before committing",
    )
    if strict:
        parser.add_argument(
            "-f", "--files",
            dest="stage_pattern",
            metavar="PATTERN",
            default=None,
            help="Stage files matching PATTERN before committing",
        )
    no_fix_flags = ["-n", "--no-fix"] if strict else ["--no-fix"]
    parser.add_argument(
        *no_fix_flags,
        dest="no_fix",
        action="store_true",
        help="Skip re-staging files whose staged content differs from disk",
    )


def add_directory_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-C", "--path",
        type=Path,
        default=Path.cwd(),
        help="Path to the git repository (default: current directory)",
    )


def add_output_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging and full tracebacks",
    )


def resolve_message_argument(parser: argparse.ArgumentParser, args: argparse.Namespace) -> Optional[str]:
    positional = args.message
    option = getattr(args, "message_option", None)
    if positional and option and positional != option:
        parser.error("give the commit message either as MESSAGE or with -m, not both")
    return option or positional or None


def create_config_from_args(args: argparse.Namespace, message: Optional[str],
                            strict: bool = True) -> Config:
    return Config(
        auto_confirm=args.yes,
        push=args.push,
        stage_all=args.stage_all,
        stage_pattern=getattr(args, "stage_pattern", None),
        fix_staging=not args.no_fix,
        message=message,
        color=not args.no_color,
        multiline_message=strict,
        strict_cancel=strict,
        repo_path=args.path,
    )


def configure_logging(verbose: bool, color: bool = True) -> None:
    handler = RichHandler(
        console=Console(stderr=True, no_color=not color),
        show_path=False,
        rich_tracebacks=verbose,
    )
    package_logger = logging.getLogger("fixcommit")
    package_logger.handlers = [handler]
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    package_logger.propagate = False


def run_cli(argv: Optional[Sequence[str]], strict: bool) -> int:
    parser = create_argument_parser(strict)
    args = parser.parse_args(argv)
    message = resolve_message_argument(parser, args)

    configure_logging(args.verbose, not args.no_color)

    try:
        config = create_config_from_args(args, message, strict)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    reporter = Reporter(config)
    try:
        return run(config, reporter=reporter)
    except UserCancellation as e:
        reporter.warning(f"Cancelled ({e.reason})")
        return 1 if config.strict_cancel else 0
    except KeyboardInterrupt:
        reporter.plain("\nOperation cancelled by user")
        return 130
    except RepositoryEnvironmentError as e:
        if args.verbose:
            raise
        reporter.error(str(e))
        return 1
    except Exception as e:
        if args.verbose:
            raise
        reporter.error(f"Error: {e!s}")
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``fix-commit``."""
    return run_cli(argv, strict=True)


def quick_main(argv: Optional[List[str]] = None) -> int:
    """Entry point for ``quick-commit``."""
    return run_cli(argv, strict=False)


if __name__ == "__main__":
    sys.exit(main())

"""Tests for the command-line interfaces of fixcommit."""

import argparse
from pathlib import Path
from unittest.mock import patch

import pytest

from fixcommit.cli import (
    ColoredHelpFormatter,
    create_argument_parser,
    create_config_from_args,
    main,
    quick_main,
    resolve_message_argument,
)
from fixcommit.errors import RepositoryEnvironmentError, UserCancellation

TEST_ROOT = Path("/test/root")


@pytest.fixture
def strict_parser():
    return create_argument_parser(strict=True)


@pytest.fixture
def quick_parser():
    return create_argument_parser(strict=False)


def test_version_argument(strict_parser):
    with pytest.raises(SystemExit):
        strict_parser.parse_args(["--version"])


def test_defaults(strict_parser):
    args = strict_parser.parse_args([])
    assert args.message is None
    assert args.message_option is None
    assert args.yes is False
    assert args.push is False
    assert args.stage_all is False
    assert args.stage_pattern is None
    assert args.no_fix is False
    assert args.path == Path.cwd()


def test_short_flags(strict_parser):
    args = strict_parser.parse_args(["-y", "-p", "-a", "-n", "-f", "src/*.py", "-C", str(TEST_ROOT),
                                     "-m", "msg", "-v", "--no-color"])
    assert args.yes and args.push and args.stage_all and args.no_fix
    assert args.stage_pattern == "src/*.py"
    assert args.path == TEST_ROOT
    assert args.message_option == "msg"
    assert args.verbose and args.no_color


def test_long_flags(strict_parser):
    args = strict_parser.parse_args(["--yes", "--push", "--all", "--no-fix", "--files", "docs",
                                     "--path", str(TEST_ROOT), "--message", "msg"])
    assert args.yes and args.push and args.stage_all and args.no_fix
    assert args.stage_pattern == "docs"


def test_positional_message(strict_parser):
    args = strict_parser.parse_args(["Fix the thing"])
    assert args.message == "Fix the thing"


def test_quick_parser_has_no_strict_only_flags(quick_parser):
    args = quick_parser.parse_args(["wip", "-y", "--no-fix"])
    assert args.message == "wip"
    assert args.no_fix is True
    assert not hasattr(args, "stage_pattern")
    for flags in (["-m", "x"], ["-f", "x"], ["-n"]):
        with pytest.raises(SystemExit):
            quick_parser.parse_args(flags)


@pytest.mark.parametrize("argv, expected", [
    ([], None),
    (["positional"], "positional"),
    (["-m", "option"], "option"),
    (["same", "-m", "same"], "same"),
])
def test_resolve_message_argument(strict_parser, argv, expected):
    args = strict_parser.parse_args(argv)
    assert resolve_message_argument(strict_parser, args) == expected


def test_conflicting_messages(strict_parser):
    args = strict_parser.parse_args(["one", "-m", "two"])
    with pytest.raises(SystemExit):
        resolve_message_argument(strict_parser, args)


@pytest.mark.parametrize("strict", [True, False])
def test_create_config_from_args(strict):
    parser = create_argument_parser(strict)
    args = parser.parse_args(["-y", "--no-fix", "-C", str(TEST_ROOT)])
    config = create_config_from_args(args, "msg", strict)

    assert config.auto_confirm is True
    assert config.fix_staging is False
    assert config.message == "msg"
    assert config.repo_path == TEST_ROOT
    assert config.multiline_message is strict
    assert config.strict_cancel is strict


def test_create_config_stage_pattern(strict_parser):
    args = strict_parser.parse_args(["-f", "src"])
    assert create_config_from_args(args, None).stage_all_pattern == "src"


def test_colored_help_formatter_plain_when_not_a_tty():
    with patch("sys.stdout.isatty", return_value=False):
        formatter = ColoredHelpFormatter("prog")
    assert formatter.use_color is False
    action = argparse.Action(["-y", "--yes"], "yes", nargs=0)
    assert "\033[" not in formatter._format_action_invocation(action)


@patch("fixcommit.cli.run", return_value=0)
def test_main_success(mock_run, tmp_path):
    assert main(["-y", "-C", str(tmp_path), "msg"]) == 0
    config = mock_run.call_args[0][0]
    assert config.message == "msg"
    assert config.strict_cancel is True


@pytest.mark.parametrize("entry, expected", [(main, 1), (quick_main, 0)])
def test_cancellation_exit_codes(entry, expected, tmp_path):
    with patch("fixcommit.cli.run", side_effect=UserCancellation("declined")):
        assert entry(["-C", str(tmp_path)]) == expected


def test_environment_error_exits_one(tmp_path, capsys):
    with patch("fixcommit.cli.run", side_effect=RepositoryEnvironmentError("Not a git repository: /x")):
        assert main(["-C", str(tmp_path)]) == 1
    assert "Not a git repository" in capsys.readouterr().out


def test_unexpected_error_exits_one(tmp_path):
    with patch("fixcommit.cli.run", side_effect=RuntimeError("boom")):
        assert quick_main(["-C", str(tmp_path)]) == 1


def test_verbose_reraises(tmp_path):
    with patch("fixcommit.cli.run", side_effect=RuntimeError("boom")):
        with pytest.raises(RuntimeError):
            main(["-v", "-C", str(tmp_path)])


def test_keyboard_interrupt(tmp_path):
    with patch("fixcommit.cli.run", side_effect=KeyboardInterrupt):
        assert main(["-C", str(tmp_path)]) == 130


def test_main_not_a_repository(tmp_path, capsys):
    assert main(["-y", "--no-color", "-C", str(tmp_path)]) == 1
    assert "git" in capsys.readouterr().out.lower()


def test_main_end_to_end(temp_git_repo, repo):
    (temp_git_repo / "feature.py").write_text("print('hi')\n")
    assert quick_main(["-y", "-a", "--no-color", "-C", str(temp_git_repo), "Add feature"]) == 0
    assert repo.head.commit.message.strip() == "Add feature"

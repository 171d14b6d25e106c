"""Tests for porcelain parsing and mismatch classification."""

import itertools

import pytest

from fixcommit.main import classify, read_status
from fixcommit.repository import parse_status_line, parse_status_output, unquote_path
from fixcommit.utils import MISMATCH_CODES, StatusRecord

STATE_CHARS = " MADRCUT?!"


@pytest.mark.parametrize("line, code, path", [
    ("MM a.txt", "MM", "a.txt"),
    ("AM new.py", "AM", "new.py"),
    (" M src/app.py", " M", "src/app.py"),
    ("M  staged.txt", "M ", "staged.txt"),
    ("?? untracked.txt", "??", "untracked.txt"),
    ("D  gone.txt", "D ", "gone.txt"),
    ("UU conflict.txt", "UU", "conflict.txt"),
])
def test_parse_status_line(line, code, path):
    record = parse_status_line(line)
    assert record.code == code
    assert record.path == path
    assert record.orig_path is None


def test_parse_status_line_keeps_leading_space_in_code():
    record = parse_status_line(" M file.txt")
    assert record.index_state == " "
    assert record.worktree_state == "M"


def test_parse_quoted_path_with_space():
    record = parse_status_line('AM "b b.txt"')
    assert record.path == "b b.txt"
    assert record.is_mismatched


def test_parse_path_starting_with_dash():
    record = parse_status_line("MM -weird.txt")
    assert record.path == "-weird.txt"


@pytest.mark.parametrize("raw, expected", [
    ('"plain.txt"', "plain.txt"),
    ('"tab\\there.txt"', "tab\there.txt"),
    ('"quote\\"d.txt"', 'quote"d.txt'),
    ('"back\\\\slash.txt"', "back\\slash.txt"),
    ('"caf\\303\\251.txt"', "café.txt"),
    ("unquoted name.txt", "unquoted name.txt"),
    ('"', '"'),
])
def test_unquote_path(raw, expected):
    assert unquote_path(raw) == expected


def test_parse_rename():
    record = parse_status_line("RM old.txt -> new.txt")
    assert record.path == "new.txt"
    assert record.orig_path == "old.txt"
    assert record.is_mismatched


def test_parse_quoted_rename():
    record = parse_status_line('R  "old name.txt" -> "new name.txt"')
    assert record.path == "new name.txt"
    assert record.orig_path == "old name.txt"


def test_parse_quoted_rename_containing_arrow():
    record = parse_status_line('R  "a -> b.txt" -> c.txt')
    assert record.orig_path == "a -> b.txt"
    assert record.path == "c.txt"


def test_parse_status_output_skips_blank_and_malformed_lines():
    output = "MM a.txt\n\n?? b.txt\nXY\n M c.txt\n"
    records = parse_status_output(output)
    assert [r.path for r in records] == ["a.txt", "b.txt", "c.txt"]


def test_parse_status_output_handles_crlf():
    records = parse_status_output("MM a.txt\r\nAM b.txt\r\n")
    assert [r.path for r in records] == ["a.txt", "b.txt"]


def test_parse_status_output_empty():
    assert parse_status_output("") == []


@pytest.mark.parametrize("index_state, worktree_state",
                         list(itertools.product(STATE_CHARS, STATE_CHARS)))
def test_is_mismatched_only_for_known_codes(index_state, worktree_state):
    record = StatusRecord(index_state, worktree_state, "file.txt")
    assert record.is_mismatched == (index_state + worktree_state in {"MM", "AM", "RM"})


def test_is_mismatched_ignores_path():
    assert StatusRecord("M", "M", "-x").is_mismatched == StatusRecord("M", "M", "y y").is_mismatched


def test_mismatch_codes():
    assert MISMATCH_CODES == {"MM", "AM", "RM"}


@pytest.mark.parametrize("code, staged, unstaged", [
    ("M ", True, False),
    (" M", False, True),
    ("MM", True, True),
    ("??", False, True),
    ("A ", True, False),
    (" D", False, True),
])
def test_staged_and_unstaged_flags(code, staged, unstaged):
    record = StatusRecord(code[0], code[1], "f")
    assert record.is_staged is staged
    assert record.is_unstaged is unstaged


def test_classify_keeps_only_mismatched():
    records = [
        StatusRecord("M", "M", "a.txt"),
        StatusRecord("M", " ", "b.txt"),
        StatusRecord("A", "M", "c.txt"),
        StatusRecord("?", "?", "d.txt"),
        StatusRecord("R", "M", "e.txt", "old-e.txt"),
        StatusRecord("C", "M", "f.txt", "g.txt"),
        StatusRecord("U", "U", "h.txt"),
    ]
    assert [r.path for r in classify(records)] == ["a.txt", "c.txt", "e.txt"]


def test_classify_empty():
    assert classify([]) == []


def test_read_status_queries_every_time(mock_client):
    mock_client.status.side_effect = [
        [StatusRecord("M", "M", "a.txt")],
        [],
    ]
    assert len(read_status(mock_client)) == 1
    assert read_status(mock_client) == []
    assert mock_client.status.call_count == 2

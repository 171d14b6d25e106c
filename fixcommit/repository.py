"""Narrow client over the git command line.

Every method maps to one git invocation. Text parsing of git output lives in
the module-level ``parse_*`` functions so it can be exercised against canned
output without a repository.
"""

import logging
import re
from pathlib import Path
from typing import List, NamedTuple, Optional, Tuple, Union

from fixcommit.config import Config
from fixcommit.errors import ExecutionError, RepositoryEnvironmentError
from fixcommit.utils import StatusRecord, SubprocessHandler

__all__ = [
    "GitResult",
    "RepositoryClient",
    "parse_status_line",
    "parse_status_output",
    "unquote_path",
]

logger = logging.getLogger(__name__)

_C_ESCAPES = {
    "a": 0x07, "b": 0x08, "t": 0x09, "n": 0x0A,
    "v": 0x0B, "f": 0x0C, "r": 0x0D, '"': 0x22, "\\": 0x5C,
}
_OCTAL = re.compile(r"[0-7]{3}")
_NOT_A_REPO = "not a git repository"
LITERAL_ROOT_PATHSPEC = ":(top,literal)"


class GitResult(NamedTuple):
    stdout: str
    stderr: str
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


def unquote_path(raw: str) -> str:
    """Strip the double quotes git wraps around special paths.

    Backslash escapes inside the quotes are decoded the way git writes them:
    the usual C escapes plus three-digit octal bytes, which together form
    UTF-8 for non-ASCII names.
    """
    if len(raw) < 2 or not (raw.startswith('"') and raw.endswith('"')):
        return raw

    body = raw[1:-1]
    out = bytearray()
    i = 0
    while i < len(body):
        char = body[i]
        if char != "\\" or i + 1 >= len(body):
            out.extend(char.encode("utf-8"))
            i += 1
            continue

        octal = _OCTAL.match(body, i + 1)
        if octal:
            out.append(int(octal.group(), 8) & 0xFF)
            i += 4
        elif body[i + 1] in _C_ESCAPES:
            out.append(_C_ESCAPES[body[i + 1]])
            i += 2
        else:
            out.extend(body[i:i + 2].encode("utf-8"))
            i += 2
    return out.decode("utf-8", errors="replace")


def _split_rename(rest: str) -> Tuple[Optional[str], str]:
    """Split ``old -> new`` where either side may be quoted."""
    if rest.startswith('"'):
        i = 1
        while i < len(rest):
            if rest[i] == "\\":
                i += 2
                continue
            if rest[i] == '"':
                break
            i += 1
        head, tail = rest[:i + 1], rest[i + 1:]
        if tail.startswith(" -> "):
            return head, tail[4:]
        return None, rest

    if " -> " in rest:
        head, tail = rest.split(" -> ", 1)
        return head, tail
    return None, rest


def parse_status_line(line: str) -> Optional[StatusRecord]:
    """Parse one ``git status --porcelain`` line, or return None if it is not one."""
    line = line.rstrip("\r\n")
    if len(line) < 4 or line[2] != " ":
        return None

    index_state, worktree_state, rest = line[0], line[1], line[3:]
    orig_path = None
    if "R" in (index_state, worktree_state) or "C" in (index_state, worktree_state):
        orig, rest = _split_rename(rest)
        orig_path = unquote_path(orig) if orig is not None else None

    return StatusRecord(index_state, worktree_state, unquote_path(rest), orig_path)


def parse_status_output(output: str) -> List[StatusRecord]:
    records = []
    for line in output.splitlines():
        record = parse_status_line(line)
        if record is not None:
            records.append(record)
        elif line.strip():
            logger.warning("Ignoring unrecognised status line: %r", line)
    return records


class RepositoryClient:
    """The git operations the commit workflow consumes, and nothing else."""

    def __init__(self, repo_path: Union[str, Path] = ".",
                 handler: Optional[SubprocessHandler] = None,
                 git_executable: str = "git") -> None:
        self.repo_path = Path(repo_path)
        self.handler = handler or SubprocessHandler()
        self.git_executable = git_executable

    @classmethod
    def from_config(cls, config: Config) -> "RepositoryClient":
        handler = SubprocessHandler(timeout=config.command_timeout, extra_env=config.pager_env)
        return cls(config.repo_path, handler)

    def run_git(self, args: List[str], check: bool = False) -> GitResult:
        """Run ``git <args>`` in the repository.

        Raises:
            RepositoryEnvironmentError: git is missing or the path is not a repository.
            ExecutionError: ``check`` is set and git exited non-zero.
        """
        command = [self.git_executable, *args]
        try:
            stdout, stderr, code = self.handler.run_command(command, cwd=self.repo_path)
        except FileNotFoundError as e:
            raise RepositoryEnvironmentError(
                f"git executable not found: {self.git_executable}", command, 127, str(e)
            ) from e
        except NotADirectoryError as e:
            raise RepositoryEnvironmentError(
                f"Repository path is not a directory: {self.repo_path}", command, 1, str(e)
            ) from e

        if code != 0 and _NOT_A_REPO in stderr.lower():
            raise RepositoryEnvironmentError(
                f"Not a git repository: {self.repo_path.resolve()}", command, code, stderr
            )
        if check and code != 0:
            raise ExecutionError(command, code, stderr)
        return GitResult(stdout, stderr, code)

    def ensure_repository(self) -> None:
        if not self.repo_path.is_dir():
            raise RepositoryEnvironmentError(f"Path does not exist: {self.repo_path}")
        result = self.run_git(["rev-parse", "--is-inside-work-tree"])
        if not result.ok or result.stdout.strip() != "true":
            raise RepositoryEnvironmentError(
                f"Not inside a git work tree: {self.repo_path.resolve()}",
                ["git", "rev-parse", "--is-inside-work-tree"], result.returncode, result.stderr,
            )

    def status(self) -> List[StatusRecord]:
        result = self.run_git(["-c", "core.quotePath=false", "status", "--porcelain"], check=True)
        return parse_status_output(result.stdout)

    def staged_files(self) -> List[str]:
        result = self.run_git(["-c", "core.quotePath=false", "diff", "--cached", "--name-only"],
                              check=True)
        return [unquote_path(line) for line in result.stdout.splitlines() if line]

    def staged_stat(self) -> str:
        return self.run_git(["diff", "--cached", "--stat"], check=True).stdout.rstrip()

    def stage(self, path: str) -> GitResult:
        """Stage exactly one file, given relative to the repository root as status reports it.

        ``top`` anchors the path at the root whatever ``repo_path`` is, and
        ``literal`` stops ``[``, ``*`` and ``?`` from matching other files.
        """
        return self.run_git(["add", "--", f"{LITERAL_ROOT_PATHSPEC}{path}"])

    def stage_all(self) -> GitResult:
        return self.run_git(["add", "-A"])

    def stage_pattern(self, pattern: str) -> GitResult:
        """Stage additions, modifications and deletions matching ``pattern``.

        The pattern is a glob pathspec relative to ``repo_path``.
        """
        return self.run_git(["add", "-A", "--", pattern])

    def commit(self, message: str) -> GitResult:
        return self.run_git(["commit", "-m", message])

    def short_head(self) -> Optional[str]:
        result = self.run_git(["rev-parse", "--short", "HEAD"])
        return (result.stdout.strip() or None) if result.ok else None

    def current_branch(self) -> Optional[str]:
        result = self.run_git(["branch", "--show-current"], check=True)
        return result.stdout.strip() or None

    def remotes(self) -> List[str]:
        result = self.run_git(["remote"], check=True)
        return [name.strip() for name in result.stdout.splitlines() if name.strip()]

    def upstream(self) -> Optional[str]:
        result = self.run_git(["rev-parse", "--abbrev-ref", "--symbolic-full-name", "@{u}"])
        return (result.stdout.strip() or None) if result.ok else None

    def ahead_count(self) -> Optional[int]:
        result = self.run_git(["rev-list", "--count", "@{u}..HEAD"])
        if not result.ok:
            return None
        try:
            return int(result.stdout.strip())
        except ValueError:
            return None

    def push(self) -> GitResult:
        return self.run_git(["push"])

    def push_set_upstream(self, remote: str, branch: str) -> GitResult:
        return self.run_git(["push", "--set-upstream", remote, branch])

    def push_force_with_lease(self) -> GitResult:
        return self.run_git(["push", "--force-with-lease"])

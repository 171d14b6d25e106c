"""
fixcommit: repair stale staging before committing.

Editors that integrate with git sometimes stage a file and then keep
editing it, so the index holds a version that no longer matches the file on
disk. Committing at that point records content nobody is looking at.

The workflow:
    1. Read ``git status --porcelain``
    2. Pick out files whose staged content differs from the worktree
       (``MM``, ``AM``, ``RM``)
    3. Re-stage them from the worktree, after one confirmation
    4. Commit, staging everything first if nothing is staged
    5. Optionally push, falling back to ``--set-upstream`` or
       ``--force-with-lease``
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Sequence

from fixcommit.config import Config
from fixcommit.errors import ExecutionError, UserCancellation
from fixcommit.output import Reporter
from fixcommit.prompts import AutoConfirmPrompt, ConsolePrompt, PromptProvider
from fixcommit.push import PushResult, push
from fixcommit.repository import RepositoryClient
from fixcommit.utils import StatusRecord

__all__ = [
    "CommitResult",
    "ReconcileResult",
    "classify",
    "commit",
    "default_message",
    "read_status",
    "reconcile",
    "resolve_message",
    "run",
]

logger = logging.getLogger(__name__)

CANCEL_REASONS = ("declined", "no-message")


@dataclass
class ReconcileResult:
    fixed_count: int = 0
    failed_count: int = 0
    declined: bool = False


@dataclass
class CommitResult:
    committed: bool
    hash: Optional[str] = None
    reason: Optional[str] = None
    message: Optional[str] = None


def read_status(client: RepositoryClient) -> List[StatusRecord]:
    """Query git for the current status. Never cached: git is the source of truth."""
    return client.status()


def classify(records: Sequence[StatusRecord]) -> List[StatusRecord]:
    return [record for record in records if record.is_mismatched]


def reconcile(client: RepositoryClient, mismatched: Sequence[StatusRecord], auto_confirm: bool,
              prompt: PromptProvider, reporter: Reporter) -> ReconcileResult:
    """Re-stage every mismatched file from the worktree.

    One confirmation covers the whole set. A failure on one path is counted
    and the remaining paths are still processed; nothing is rolled back.
    """
    if not mismatched:
        return ReconcileResult()

    reporter.show_records(mismatched, "Staged content differs from the working tree")
    if not auto_confirm:
        decision = prompt.confirm(
            f"Re-stage {len(mismatched)} file(s) from the working tree?"
        )
        if not decision.proceed:
            reporter.warning("Skipping the staging fix")
            return ReconcileResult(declined=True)

    fixed = failed = 0
    for record in mismatched:
        result = client.stage(record.path)
        if result.ok:
            fixed += 1
            reporter.success(f"Re-staged {record.path}")
        else:
            failed += 1
            reporter.error(f"Could not re-stage {record.path}: {result.stderr.strip()}")
            logger.debug("git add failed for %r with exit status %d", record.path, result.returncode)

    if failed:
        reporter.warning(f"Re-staged {fixed} file(s), {failed} failed")
    else:
        reporter.success(f"Re-staged {fixed} file(s)")
    return ReconcileResult(fixed, failed)


def default_message(files: Sequence[str], now: Optional[datetime] = None) -> str:
    if len(files) == 1:
        return f"Update: {files[0]}"
    if files:
        return f"Update: {len(files)} files"
    return f"Update: {(now or datetime.now()):%Y-%m-%d %H:%M:%S}"


def resolve_message(client: RepositoryClient, prompt: PromptProvider, message: Optional[str],
                    auto_confirm: bool, multiline: bool = False) -> Optional[str]:
    """Pick the commit message: explicit, then entered, then (unattended only) synthesized."""
    if message is not None and message.strip():
        return message

    if not auto_confirm:
        return prompt.ask_message(multiline=multiline)

    try:
        files = client.staged_files()
    except ExecutionError as e:
        logger.debug("could not list staged files: %s", e)
        files = []
    return default_message(files)


def _stage_requested(client: RepositoryClient, pattern: str, reporter: Reporter) -> bool:
    result = client.stage_all() if pattern == "." else client.stage_pattern(pattern)
    if not result.ok:
        reporter.error(f"Could not stage '{pattern}': {result.stderr.strip()}")
    return result.ok


def commit(client: RepositoryClient, prompt: PromptProvider, reporter: Reporter,
           message: Optional[str] = None, auto_confirm: bool = False,
           stage_all_pattern: Optional[str] = None, multiline: bool = False) -> CommitResult:
    """Commit the staged set, deciding first what that set should be.

    | staged | unstaged | auto_confirm | action                      |
    |--------|----------|--------------|-----------------------------|
    | >0     | any      | any          | commit the staged set       |
    | 0      | >0       | True         | stage everything, commit    |
    | 0      | >0       | False        | ask; declining aborts       |
    | 0      | 0        | any          | nothing to commit           |
    """
    if stage_all_pattern and not _stage_requested(client, stage_all_pattern, reporter):
        return CommitResult(False, reason="stage-failed")

    records = read_status(client)
    staged = [record for record in records if record.is_staged]
    unstaged = [record for record in records if record.is_unstaged]

    if not staged and not unstaged:
        reporter.warning("No changes to commit")
        return CommitResult(False, reason="nothing-to-commit")

    if not staged:
        reporter.show_records(unstaged, "Nothing staged; unstaged changes")
        if not auto_confirm:
            decision = prompt.confirm("Stage all changes and commit?")
            if not decision.proceed:
                reporter.warning("Commit cancelled")
                return CommitResult(False, reason="declined")
        if not _stage_requested(client, ".", reporter):
            return CommitResult(False, reason="stage-failed")

    try:
        reporter.show_stat(client.staged_stat())
    except ExecutionError as e:
        logger.debug("could not summarise staged changes: %s", e)

    resolved = resolve_message(client, prompt, message, auto_confirm, multiline)
    if resolved is None:
        reporter.warning("No commit message entered, commit cancelled")
        return CommitResult(False, reason="no-message")

    reporter.show_commit_message(resolved)
    result = client.commit(resolved)
    if not result.ok:
        detail = (result.stderr or result.stdout).strip()
        reporter.error(f"Commit failed: {detail}")
        return CommitResult(False, reason="commit-failed", message=resolved)

    commit_hash = client.short_head()
    reporter.success(f"Committed {commit_hash or ''}".rstrip())
    return CommitResult(True, hash=commit_hash, message=resolved)


def run(config: Config, client: Optional[RepositoryClient] = None,
        prompt: Optional[PromptProvider] = None, reporter: Optional[Reporter] = None) -> int:
    """Run the whole workflow and return the process exit code.

    Raises:
        RepositoryEnvironmentError: git is unusable here.
        UserCancellation: the operator declined the commit.
    """
    reporter = reporter or Reporter(config)
    if prompt is None:
        prompt = AutoConfirmPrompt() if config.auto_confirm else ConsolePrompt(reporter)
    client = client or RepositoryClient.from_config(config)

    client.ensure_repository()

    if config.fix_staging:
        mismatched = classify(read_status(client))
        if mismatched:
            reconcile(client, mismatched, config.auto_confirm, prompt, reporter)
        else:
            reporter.success("Staged content matches the working tree")

    result = commit(client, prompt, reporter, config.message, config.auto_confirm,
                    config.stage_all_pattern, config.multiline_message)
    if result.reason in CANCEL_REASONS:
        raise UserCancellation(result.reason)
    if not result.committed and result.reason != "nothing-to-commit":
        return 1

    if config.push:
        pushed: PushResult = push(client, prompt, reporter, config, config.auto_confirm)
        if not pushed.pushed and config.strict_cancel:
            return 1

    return 0

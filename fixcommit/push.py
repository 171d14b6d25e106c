"""Best-effort push of the current branch.

A plain ``git push`` is tried once. If it fails, exactly one fallback is
offered: ``--set-upstream`` when the branch tracks nothing, or
``--force-with-lease`` when it does (the histories have diverged). There are
no further retries.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from fixcommit.config import Config
from fixcommit.output import Reporter
from fixcommit.prompts import PromptProvider
from fixcommit.repository import GitResult, RepositoryClient

__all__ = ["PushResult", "choose_remote", "push"]

logger = logging.getLogger(__name__)


@dataclass
class PushResult:
    pushed: bool
    reason: Optional[str] = None


def choose_remote(remotes: Sequence[str], preferred: str) -> str:
    return preferred if preferred in remotes else remotes[0]


def _first_line(result: GitResult) -> str:
    text = (result.stderr or result.stdout).strip()
    return text.splitlines()[0] if text else f"exit status {result.returncode}"


def _confirmed(prompt: PromptProvider, auto_confirm: bool, question: str, default: bool) -> bool:
    if auto_confirm:
        return True
    return prompt.confirm(question, default=default).proceed


def push(client: RepositoryClient, prompt: PromptProvider, reporter: Reporter, config: Config,
         auto_confirm: bool = False) -> PushResult:
    branch = client.current_branch()
    if not branch:
        reporter.error("HEAD is detached; there is no branch to push")
        return PushResult(False, "detached-head")

    remotes = client.remotes()
    if not remotes:
        reporter.error("No remote is configured")
        return PushResult(False, "no-remote")

    upstream = client.upstream()
    if upstream:
        ahead = client.ahead_count()
        if ahead is not None:
            reporter.info(f"{branch} is {ahead} commit(s) ahead of {upstream}")

    reporter.info(f"Pushing {branch}...")
    result = client.push()
    if result.ok:
        reporter.success(f"Pushed {branch}")
        return PushResult(True)

    reporter.error(f"Push failed: {_first_line(result)}")
    logger.debug("git push stderr: %s", result.stderr)

    if upstream is None:
        remote = choose_remote(remotes, config.default_remote)
        if not _confirmed(prompt, auto_confirm,
                          f"{branch} has no upstream. Push and track {remote}/{branch}?", True):
            reporter.warning("Push skipped")
            return PushResult(False, "declined")

        retry = client.push_set_upstream(remote, branch)
        if retry.ok:
            reporter.success(f"Pushed {branch} and set upstream to {remote}/{branch}")
            return PushResult(True)
        reporter.error(f"Push with --set-upstream failed: {_first_line(retry)}")
        return PushResult(False, "set-upstream-failed")

    if not _confirmed(prompt, auto_confirm,
                      f"{branch} has diverged from {upstream}. Force push with lease?", False):
        reporter.warning("Push skipped")
        return PushResult(False, "declined")

    retry = client.push_force_with_lease()
    if retry.ok:
        reporter.success(f"Force pushed {branch} (with lease)")
        return PushResult(True)
    reporter.error(f"Force push with lease failed: {_first_line(retry)}")
    return PushResult(False, "force-push-failed")

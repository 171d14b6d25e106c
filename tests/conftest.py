import io
from pathlib import Path
from typing import Generator, List
from unittest.mock import MagicMock

import git
import pytest
from rich.console import Console

from fixcommit.config import Config
from fixcommit.output import Reporter
from fixcommit.prompts import Decision, PromptProvider
from fixcommit.repository import GitResult, RepositoryClient


class ScriptedPrompt(PromptProvider):
    """Answers prompts from a fixed script and records every question."""

    def __init__(self, decisions: List[Decision] = None, messages: List[str] = None) -> None:
        self.decisions = list(decisions or [])
        self.messages = list(messages or [])
        self.questions: List[str] = []
        self.message_requests = 0

    def confirm(self, question: str, default: bool = True) -> Decision:
        self.questions.append(question)
        return self.decisions.pop(0)

    def ask_message(self, multiline: bool = False):
        self.message_requests += 1
        return self.messages.pop(0) if self.messages else None


OK = GitResult("", "", 0)


def failed(stderr: str = "error: failed", code: int = 1) -> GitResult:
    return GitResult("", stderr, code)


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(output) -> Reporter:
    console = Console(file=output, width=200, no_color=True, highlight=False)
    return Reporter(Config(color=False), console=console)


@pytest.fixture
def mock_client() -> MagicMock:
    client = MagicMock(spec=RepositoryClient)
    client.stage.return_value = OK
    client.stage_all.return_value = OK
    client.stage_pattern.return_value = OK
    client.commit.return_value = OK
    client.staged_stat.return_value = ""
    client.staged_files.return_value = []
    client.short_head.return_value = "abc1234"
    return client


@pytest.fixture
def temp_git_repo(tmp_path) -> Generator[Path, None, None]:
    """Create a temporary Git repository with one commit on ``main``."""
    repo_dir = tmp_path / "repo"
    repo_dir.mkdir()
    repo = git.Repo.init(repo_dir, initial_branch="main")

    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Test User")
        writer.set_value("user", "email", "test@example.com")
        writer.set_value("commit", "gpgsign", "false")

    (repo_dir / "README.md").write_text("# test\n")
    repo.index.add(["README.md"])
    repo.index.commit("Initial commit")

    yield repo_dir
    repo.close()


@pytest.fixture
def repo(temp_git_repo) -> git.Repo:
    return git.Repo(temp_git_repo)


@pytest.fixture
def client(temp_git_repo) -> RepositoryClient:
    return RepositoryClient.from_config(Config(repo_path=temp_git_repo))

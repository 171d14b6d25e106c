"""Configuration module for fixcommit.

This module provides a configuration class that holds every setting the
reconcile/commit/push pipeline and its console output depend on. One
instance is built by the CLI and passed explicitly to each component.
"""

from pathlib import Path
from typing import Dict, Optional, Union

PATH_TYPE = Union[str, Path]

DEFAULT_PAGER_ENV: Dict[str, str] = {"GIT_PAGER": "cat", "PAGER": "cat"}


class Config:
    """Configuration class for fixcommit.

    Attributes:
        auto_confirm: Answer every prompt with yes (unattended mode).
        push: Push after a successful commit.
        stage_all: Stage every change (``git add -A``) before committing.
        stage_pattern: Pathspec to stage before committing.
        fix_staging: Run the staging-mismatch reconciliation before committing.
        message: Explicit commit message; skips the message prompt.
        color: Emit colored console output.
        multiline_message: Prompt for a multi-line message ended by an empty line.
        strict_cancel: Treat a declined prompt as a failed run (exit code 1).
        default_remote: Remote preferred for ``push --set-upstream``.
        command_timeout: Seconds to wait for a single git invocation.
        pager_env: Variables added to each git subprocess environment.
        repo_path: Working directory of the repository.
    """

    def __init__(
        self,
        auto_confirm: bool = False,
        push: bool = False,
        stage_all: bool = False,
        stage_pattern: Optional[str] = None,
        fix_staging: bool = True,
        message: Optional[str] = None,
        color: bool = True,
        multiline_message: bool = False,
        strict_cancel: bool = False,
        default_remote: str = "origin",
        command_timeout: int = 300,
        pager_env: Optional[Dict[str, str]] = None,
        repo_path: PATH_TYPE = ".",
    ):
        self.auto_confirm: bool = auto_confirm
        self.push: bool = push
        self.stage_all: bool = stage_all
        self.stage_pattern: Optional[str] = stage_pattern
        self.fix_staging: bool = fix_staging
        self.message: Optional[str] = message
        self.color: bool = color
        self.multiline_message: bool = multiline_message
        self.strict_cancel: bool = strict_cancel
        self.default_remote: str = default_remote
        self.command_timeout: int = command_timeout
        self.pager_env: Dict[str, str] = dict(DEFAULT_PAGER_ENV if pager_env is None else pager_env)
        self.repo_path: Path = Path(repo_path)

        self.validate()

    @property
    def stage_all_pattern(self) -> Optional[str]:
        """Pathspec staged before the commit decision, or None.

        ``"."`` stands for the stage-all switch; an explicit pattern wins.
        """
        if self.stage_pattern:
            return self.stage_pattern
        if self.stage_all:
            return "."
        return None

    def validate(self) -> None:
        """Raise ValueError describing the first invalid setting."""
        error = self._first_error()
        if error:
            raise ValueError(f"Invalid configuration: {error}")

    def is_valid(self) -> bool:
        return self._first_error() is None

    def _first_error(self) -> Optional[str]:
        for name in ("auto_confirm", "push", "stage_all", "fix_staging", "color",
                     "multiline_message", "strict_cancel"):
            if not isinstance(getattr(self, name), bool):
                return f"{name} must be a boolean value"

        if self.stage_pattern is not None and (
                not isinstance(self.stage_pattern, str) or not self.stage_pattern.strip()):
            return "stage_pattern must be a non-empty string"

        if self.message is not None and not isinstance(self.message, str):
            return "message must be a string"

        if not isinstance(self.default_remote, str) or not self.default_remote.strip():
            return "default_remote must be a non-empty string"

        if (not isinstance(self.command_timeout, int) or isinstance(self.command_timeout, bool)
                or not 1 <= self.command_timeout <= 3600):
            return "command_timeout must be an integer between 1 and 3600"

        if not all(isinstance(k, str) and isinstance(v, str) for k, v in self.pager_env.items()):
            return "pager_env must map strings to strings"

        return None


# Default configuration instance
default_config = Config()

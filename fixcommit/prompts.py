"""Operator prompts.

Every question the workflow asks goes through a ``PromptProvider`` so that
the orchestration can be driven without a terminal. ``ConsolePrompt`` reads
standard input; ``AutoConfirmPrompt`` answers yes to everything and never
blocks.
"""

from enum import Enum
from typing import Callable, List, Optional

from fixcommit.output import Reporter

__all__ = ["AutoConfirmPrompt", "ConsolePrompt", "Decision", "PromptProvider"]


class Decision(Enum):
    CONFIRMED = "confirmed"
    DECLINED = "declined"
    SKIP_ALL = "skip-all"

    @property
    def proceed(self) -> bool:
        return self is Decision.CONFIRMED


class PromptProvider:
    """Interface for yes/no questions and commit message entry."""

    def confirm(self, question: str, default: bool = True) -> Decision:
        raise NotImplementedError

    def ask_message(self, multiline: bool = False) -> Optional[str]:
        """Return the entered commit message, or None when nothing was entered."""
        raise NotImplementedError


class AutoConfirmPrompt(PromptProvider):
    def confirm(self, question: str, default: bool = True) -> Decision:
        return Decision.CONFIRMED

    def ask_message(self, multiline: bool = False) -> Optional[str]:
        return None


class ConsolePrompt(PromptProvider):
    """Reads answers from standard input.

    Accepted answers are ``y``/``yes``, ``n``/``no``, ``s``/``skip`` (decline
    this and every later question) and an empty line for the default.
    """

    YES = ("y", "yes")
    NO = ("n", "no")
    SKIP = ("s", "skip")

    def __init__(self, reporter: Reporter, input_func: Callable[[str], str] = input) -> None:
        self.reporter = reporter
        self.input_func = input_func
        self.skip_all = False

    def confirm(self, question: str, default: bool = True) -> Decision:
        if self.skip_all:
            return Decision.SKIP_ALL

        hint = "[Y/n/s]" if default else "[y/N/s]"
        while True:
            try:
                answer = self.input_func(f"{question} {hint} ").strip().lower()
            except EOFError:
                return Decision.DECLINED
            if not answer:
                return Decision.CONFIRMED if default else Decision.DECLINED
            if answer in self.YES:
                return Decision.CONFIRMED
            if answer in self.NO:
                return Decision.DECLINED
            if answer in self.SKIP:
                self.skip_all = True
                return Decision.SKIP_ALL
            self.reporter.warning("Please answer y (yes), n (no) or s (skip all)")

    def ask_message(self, multiline: bool = False) -> Optional[str]:
        if not multiline:
            try:
                message = self.input_func("Commit message: ").strip()
            except EOFError:
                return None
            return message or None

        self.reporter.info("Enter the commit message; finish with an empty line:")
        lines: List[str] = []
        while True:
            try:
                line = self.input_func("> " if not lines else "  ")
            except EOFError:
                break
            if not line.strip():
                break
            lines.append(line.rstrip())
        return "\n".join(lines) if lines else None

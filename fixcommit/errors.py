"""Exception hierarchy for fixcommit."""

from typing import List, Optional, Sequence


class FixCommitError(Exception):
    """Base class for all fixcommit errors."""


class ExecutionError(FixCommitError):
    """A single git invocation returned a non-zero exit status."""

    def __init__(self, command: Sequence[str], returncode: int, stderr: str = "") -> None:
        self.command: List[str] = list(command)
        self.returncode = returncode
        self.stderr = stderr.strip()
        detail = f": {self.stderr}" if self.stderr else ""
        super().__init__(
            f"Command failed with exit code {returncode}: {' '.join(self.command)}{detail}"
        )


class RepositoryEnvironmentError(ExecutionError):
    """git is not installed, or the target directory is not a repository."""

    def __init__(self, message: str, command: Optional[Sequence[str]] = None,
                 returncode: int = 1, stderr: str = "") -> None:
        super().__init__(command or ["git"], returncode, stderr)
        self.args = (message,)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UserCancellation(FixCommitError):
    """The operator declined a prompt that gates the rest of the run."""

    def __init__(self, reason: str = "cancelled") -> None:
        super().__init__(reason)
        self.reason = reason

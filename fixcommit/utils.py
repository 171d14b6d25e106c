import logging
import os
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple, Union

__all__ = ["MISMATCH_CODES", "StatusRecord", "SubprocessHandler"]

logger = logging.getLogger(__name__)

# Index entry staged externally, worktree changed again afterwards.
MISMATCH_CODES: FrozenSet[str] = frozenset({"MM", "AM", "RM"})


@dataclass(frozen=True)
class StatusRecord:
    index_state: str
    worktree_state: str
    path: str
    orig_path: Optional[str] = None  # set on renames and copies

    @property
    def code(self) -> str:
        return f"{self.index_state}{self.worktree_state}"

    @property
    def is_mismatched(self) -> bool:
        return self.code in MISMATCH_CODES

    @property
    def is_untracked(self) -> bool:
        return self.code == "??"

    @property
    def is_staged(self) -> bool:
        return self.index_state not in (" ", "?", "!")

    @property
    def is_unstaged(self) -> bool:
        return self.is_untracked or self.worktree_state not in (" ", "!")


class SubprocessHandler:
    """Runs git as a child process and hands back its decoded output.

    Every call builds its own environment so that variables such as the
    pager suppression never leak into the parent process.
    """

    def __init__(self, timeout: Optional[int] = None,
                 termination_wait: Optional[float] = None,
                 extra_env: Optional[Mapping[str, str]] = None) -> None:
        """Initialize the SubprocessHandler.

        Args:
            timeout: Maximum time in seconds to wait for a process to complete.
            termination_wait: Seconds to wait after SIGTERM before killing the process.
            extra_env: Variables added to every child environment.
        """
        self.timeout: int = timeout or 30
        self.termination_wait: float = termination_wait or 0.5
        self.extra_env: Dict[str, str] = dict(extra_env or {})

    def create_env(self, extra_env: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
        """Return a copy of ``os.environ`` with the encoding and handler variables set."""
        env = os.environ.copy()
        env["PYTHONIOENCODING"] = "utf-8"
        env.update(self.extra_env)
        if extra_env:
            env.update(extra_env)
        return env

    def run_command(self, command: List[str], cwd: Optional[Union[str, Path]] = None,
                    timeout: Optional[int] = None,
                    extra_env: Optional[Mapping[str, str]] = None) -> Tuple[str, str, int]:
        """Execute a command and return ``(stdout, stderr, returncode)``.

        Output is decoded as UTF-8; undecodable bytes are replaced rather than
        failing, since git may emit paths in any encoding.

        Raises:
            FileNotFoundError: If the executable does not exist.
            TimeoutError: If the process exceeds the timeout.
        """
        limit = timeout or self.timeout
        logger.debug("running %s (cwd=%s)", " ".join(command), cwd or ".")

        process: Optional[subprocess.Popen[Any]] = None
        try:
            process = subprocess.Popen(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                cwd=str(cwd) if cwd is not None else None,
                env=self.create_env(extra_env),
                text=True,
                encoding="utf-8",
                errors="replace",
            )
            stdout, stderr = process.communicate(timeout=limit)
        except subprocess.TimeoutExpired:
            self._terminate_process(process)
            raise TimeoutError(f"Command timed out after {limit} seconds: {' '.join(command)}")
        finally:
            self._cleanup_process(process)

        logger.debug("exit status %d from %s", process.returncode, " ".join(command[:2]))
        return stdout, stderr, process.returncode

    def _terminate_process(self, process: Optional[subprocess.Popen[Any]]) -> None:
        """Ask the process to stop, and kill it if it outlives ``termination_wait``."""
        if process is None or process.poll() is not None:
            return

        process.terminate()
        try:
            process.wait(timeout=self.termination_wait)
        except subprocess.TimeoutExpired:
            logger.debug("process %d ignored SIGTERM, killing it", process.pid)
            process.kill()
            process.wait()

    def _cleanup_process(self, process: Optional[subprocess.Popen[Any]]) -> None:
        if process is None:
            return

        for pipe in (process.stdout, process.stderr):
            if pipe is not None:
                pipe.close()
        self._terminate_process(process)

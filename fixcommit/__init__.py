"""
fixcommit: re-stage stale index entries, then commit and push.

Code editors that integrate with git can leave the index holding an older
version of a file than the one on disk. fixcommit finds those files in
``git status --porcelain`` (codes ``MM``, ``AM`` and ``RM``), re-stages
them from the working tree after a single confirmation, and then commits.

Entry points:
    - fix-commit: careful variant, multi-line messages, strict cancellation
    - quick-commit: lenient variant for quick single-line commits
    - check-screenshots: verifies the documentation screenshots exist
"""

__version__ = "1.0.0"
__author__ = "Alaamer"

from .config import Config, default_config
from .errors import ExecutionError, FixCommitError, RepositoryEnvironmentError, UserCancellation
from .main import CommitResult, ReconcileResult, classify, commit, read_status, reconcile, run
from .push import PushResult, push
from .repository import RepositoryClient
from .utils import StatusRecord

__all__ = [
    "CommitResult",
    "Config",
    "ExecutionError",
    "FixCommitError",
    "PushResult",
    "ReconcileResult",
    "RepositoryClient",
    "RepositoryEnvironmentError",
    "StatusRecord",
    "UserCancellation",
    "__author__",
    "__version__",
    "classify",
    "commit",
    "default_config",
    "push",
    "read_status",
    "reconcile",
    "run",
]

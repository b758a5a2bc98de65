"""Non-blocking run lock backed by an advisory lockfile."""

import fcntl
import logging
from pathlib import Path
from typing import IO, Optional

from .exceptions import LockError

logger = logging.getLogger(__name__)


class RunLock:
    """Exclusive lock that prevents two runs from sharing a destination.

    The lockfile has no content contract; only the advisory ``flock`` on it
    matters. The lock is released on context exit, and by the kernel when
    the process dies.

    Examples:
        >>> with RunLock(Path("/var/tmp/audiomirror.lock")):
        ...     pass  # only one process at a time gets here
    """

    def __init__(self, path: Path):
        """Initialize the lock.

        Args:
            path: Lockfile path (created if missing)
        """
        self.path = Path(path)
        self._handle: Optional[IO[str]] = None

    @property
    def locked(self) -> bool:
        """Whether this instance currently holds the lock."""
        return self._handle is not None

    def acquire(self) -> None:
        """Take the lock without waiting.

        Raises:
            LockError: If the lockfile cannot be opened or another process
                holds the lock
        """
        try:
            handle = open(self.path, "a", encoding="utf-8")
        except OSError as e:
            raise LockError(f"Couldn't acquire lock on {self.path}: {e}") from e

        try:
            fcntl.flock(handle.fileno(), fcntl.LOCK_EX | fcntl.LOCK_NB)
        except OSError as e:
            handle.close()
            raise LockError(f"Couldn't acquire lock on {self.path}") from e

        self._handle = handle
        logger.debug(f"Acquired lock on {self.path}")

    def release(self) -> None:
        """Release the lock if held."""
        if self._handle is None:
            return
        try:
            fcntl.flock(self._handle.fileno(), fcntl.LOCK_UN)
        finally:
            self._handle.close()
            self._handle = None
        logger.debug(f"Released lock on {self.path}")

    def __enter__(self) -> "RunLock":
        self.acquire()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.release()

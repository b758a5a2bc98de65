"""Exceptions and exit statuses for audiomirror."""

import signal
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Process exit statuses.

    The values are part of the command line contract: calling automation
    branches on them, so they must never be renumbered.
    """

    OK = 0
    GENERIC_ERROR = 1
    BAD_ARGUMENTS = 2
    LOCK_FAILED = 3
    SOURCE_NOT_FOUND = 10
    DEST_NOT_FOUND = 11
    DEPENDENCY_MISSING = 20
    TRANSCODE_FAILED = 30


class AudioMirrorError(Exception):
    """Base exception for all fatal audiomirror errors."""

    exit_code: ExitCode = ExitCode.GENERIC_ERROR

    def __init__(self, message: str, exit_code: Optional[ExitCode] = None):
        """Initialize the error.

        Args:
            message: Human-readable error message
            exit_code: Override for the class default exit status
        """
        super().__init__(message)
        self.message = message
        if exit_code is not None:
            self.exit_code = exit_code


class BadArgumentsError(AudioMirrorError):
    """Raised when command line arguments are invalid."""

    exit_code = ExitCode.BAD_ARGUMENTS


class LockError(AudioMirrorError):
    """Raised when the run lock is held by another process."""

    exit_code = ExitCode.LOCK_FAILED


class SourceNotFoundError(AudioMirrorError):
    """Raised when the source directory does not exist."""

    exit_code = ExitCode.SOURCE_NOT_FOUND


class DestinationNotFoundError(AudioMirrorError):
    """Raised when the destination directory does not exist."""

    exit_code = ExitCode.DEST_NOT_FOUND


class DependencyMissingError(AudioMirrorError):
    """Raised when an encoder or decoder binary cannot be found."""

    exit_code = ExitCode.DEPENDENCY_MISSING


class TranscodeError(AudioMirrorError):
    """Raised when a transcode step cannot be started at all.

    A non-zero encoder exit status is not an error of this kind; it is
    handled per file by the sync engine.
    """

    exit_code = ExitCode.TRANSCODE_FAILED


class RunInterrupted(BaseException):
    """Raised from a signal handler when the run is asked to terminate.

    Derives from BaseException (like KeyboardInterrupt) so that per-file
    ``except Exception`` handlers never swallow it.
    """

    def __init__(self, signum: int):
        self.signum = signum
        try:
            name = signal.Signals(signum).name
        except ValueError:
            name = str(signum)
        super().__init__(f"Interrupted by {name}")

    @property
    def exit_code(self) -> int:
        """Conventional shell exit status for a signal-terminated process."""
        return 128 + self.signum

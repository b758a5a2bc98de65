"""Decides what to do with each source file."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from ..job import SyncJob
from .scanner import FileEntry


class SyncAction(str, Enum):
    """Actions that can be taken for a source file."""

    TRANSCODE = "transcode"
    """Encode the source to the transcode target"""

    LINK = "link"
    """Hard-link the source to its mirrored path"""

    SKIP = "skip"
    """Destination is up to date"""


@dataclass
class SyncDecision:
    """Represents a decision about how to mirror a file."""

    action: SyncAction
    """Action to take"""

    reason: str
    """Human-readable reason for this decision"""

    entry: FileEntry
    """Source file"""

    target: Path
    """Destination path the action writes (transcode target or link)"""


class FileComparator:
    """Classifies source files against the destination tree.

    Files whose full source path matches the job pattern are transcode
    candidates and are compared by modification time with their transcode
    target. Everything else is a link candidate and only checked for
    existence.
    """

    def __init__(self, job: SyncJob):
        """Initialize file comparator.

        Args:
            job: Job whose pattern, format and destination root are used
        """
        self.job = job

    def is_transcode_candidate(self, entry: FileEntry) -> bool:
        return self.job.pattern.search(str(entry.path)) is not None

    def decide(self, entry: FileEntry) -> SyncDecision:
        """Determine the action for one source file.

        Args:
            entry: Source file

        Returns:
            SyncDecision for this file
        """
        mirrored = self.job.mirror_path(entry.relative_path)
        if self.is_transcode_candidate(entry):
            target = self.job.output_format.transcode_target(mirrored)
            return self._compare_transcode(entry, target)
        return self._compare_link(entry, mirrored)

    def _compare_transcode(self, entry: FileEntry, target: Path) -> SyncDecision:
        try:
            target_mtime_ns = target.stat().st_mtime_ns
        except FileNotFoundError:
            return SyncDecision(
                action=SyncAction.TRANSCODE,
                reason="No transcoded file",
                entry=entry,
                target=target,
            )

        if entry.mtime_ns > target_mtime_ns:
            return SyncDecision(
                action=SyncAction.TRANSCODE,
                reason="Source is newer than transcoded file",
                entry=entry,
                target=target,
            )

        return SyncDecision(
            action=SyncAction.SKIP,
            reason="Transcoded file is up to date",
            entry=entry,
            target=target,
        )

    def _compare_link(self, entry: FileEntry, target: Path) -> SyncDecision:
        # A dangling symlink at the target still blocks os.link
        if target.is_symlink() or target.exists():
            return SyncDecision(
                action=SyncAction.SKIP,
                reason="Destination already exists",
                entry=entry,
                target=target,
            )

        return SyncDecision(
            action=SyncAction.LINK,
            reason="New file",
            entry=entry,
            target=target,
        )

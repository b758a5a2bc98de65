"""Sync engine for audiomirror - walk, classify, transcode or link."""

from .comparator import FileComparator, SyncAction, SyncDecision
from .engine import SyncEngine
from .operations import SyncOperations
from .scanner import DirectoryScanner, FileEntry
from .stats import RunStats

__all__ = [
    "SyncEngine",
    "SyncOperations",
    "DirectoryScanner",
    "FileEntry",
    "FileComparator",
    "SyncAction",
    "SyncDecision",
    "RunStats",
]

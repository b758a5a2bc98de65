"""Directory scanning for sync operations."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A regular file found under the source root."""

    path: Path
    """Path to the file (source root joined with relative_path)"""

    relative_path: str
    """Path relative to the source root, using forward slashes"""

    mtime_ns: int
    """Last modification time in nanoseconds"""

    @property
    def mtime(self) -> float:
        """Last modification time (Unix timestamp)."""
        return self.mtime_ns / 1e9

    @classmethod
    def from_path(cls, file_path: Path, base_path: Path) -> "FileEntry":
        """Create a FileEntry from a path.

        Args:
            file_path: Path to the file
            base_path: Source root the relative path is computed against

        Returns:
            FileEntry instance
        """
        stat = file_path.stat()
        return cls(
            path=file_path,
            relative_path=file_path.relative_to(base_path).as_posix(),
            mtime_ns=stat.st_mtime_ns,
        )


class DirectoryScanner:
    """Lists the regular files of a source tree in a deterministic order.

    Symbolic links are neither listed nor followed.

    Examples:
        >>> scanner = DirectoryScanner()
        >>> for entry in scanner.scan(Path("/music/flac")):
        ...     print(entry.relative_path)
    """

    def scan(self, directory: Path) -> list[FileEntry]:
        """Recursively scan a directory.

        Args:
            directory: Source root

        Returns:
            FileEntry objects sorted by relative path
        """
        files = self._scan_directory(directory, directory)
        files.sort(key=lambda entry: entry.relative_path)
        return files

    def _scan_directory(
        self, directory: Path, base_path: Optional[Path] = None
    ) -> list[FileEntry]:
        base_path = base_path or directory
        files: list[FileEntry] = []

        try:
            items = list(directory.iterdir())
        except PermissionError as e:
            logger.warning(f"Permission denied: {e}")
            return files

        for item in items:
            if item.is_symlink():
                logger.debug(f"Skipping symlink: {item}")
                continue
            if item.is_dir():
                files.extend(self._scan_directory(item, base_path))
            elif item.is_file():
                try:
                    files.append(FileEntry.from_path(item, base_path))
                except OSError as e:
                    # Vanished or unreadable between listing and stat
                    logger.warning(f"Skipping {item}: {e}")

        return files

"""Filesystem operations performed by the sync engine."""

import logging
import os
from pathlib import Path

from ..encoders import EncodeResult, Encoder
from .scanner import FileEntry

logger = logging.getLogger(__name__)


class SyncOperations:
    """Transcode and link operations with their failure cleanup."""

    def __init__(self, encoder: Encoder):
        """Initialize sync operations.

        Args:
            encoder: Encoder for the configured output format
        """
        self.encoder = encoder

    def transcode(self, entry: FileEntry, target: Path) -> EncodeResult:
        """Encode a source file to its transcode target.

        A failed encode leaves no file at ``target``: a non-zero result
        deletes whatever the encoder wrote, and so does any exception or
        interruption raised while the encoder runs.

        Args:
            entry: Source file
            target: Transcode target path

        Returns:
            EncodeResult from the encoder
        """
        try:
            result = self.encoder.encode(entry.path, target)
        except BaseException:
            self.remove_partial(target)
            raise

        if not result.success:
            self.remove_partial(target)
        return result

    def remove_partial(self, target: Path) -> bool:
        """Delete a partially written transcode target.

        Args:
            target: Transcode target path

        Returns:
            True if a file was deleted, False if there was none or it could
            not be deleted
        """
        try:
            target.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not delete partial file {target}: {e}")
            return False
        logger.debug(f"Deleted partial file {target}")
        return True

    def link(self, entry: FileEntry, target: Path) -> None:
        """Hard-link a source file to its mirrored destination.

        Missing parent directories of the target are created first.

        Args:
            entry: Source file
            target: Mirrored destination path

        Raises:
            OSError: If the link cannot be created (e.g. across devices)
        """
        target.parent.mkdir(parents=True, exist_ok=True)
        os.link(entry.path, target)

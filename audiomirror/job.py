"""Run configuration."""

import re
import shlex
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .config import DEFAULT_FORMAT, DEFAULT_LOCKFILE, DEFAULT_TRANSCODE_PATTERN
from .exceptions import (
    BadArgumentsError,
    DestinationNotFoundError,
    SourceNotFoundError,
)
from .formats import OutputFormat, validate_extension_mapping


@dataclass(frozen=True)
class SyncJob:
    """Immutable configuration for one synchronization run."""

    source: Path
    """Root of the tree being mirrored"""

    dest: Path
    """Root of the mirror; written into, never deleted from"""

    pattern: re.Pattern
    """Files whose full path matches this are transcoded, all others linked"""

    output_format: OutputFormat
    """Lossy format to transcode to"""

    encoder_options: tuple[str, ...]
    """Extra arguments passed to the encoding binary"""

    lockfile: Path
    """File used for the non-blocking run lock"""

    @classmethod
    def from_options(
        cls,
        source: Union[str, Path],
        dest: Union[str, Path],
        transcode_pattern: str = DEFAULT_TRANSCODE_PATTERN,
        output_format: Union[str, OutputFormat] = DEFAULT_FORMAT,
        encoder_options: Optional[str] = None,
        lockfile: Union[str, Path] = DEFAULT_LOCKFILE,
    ) -> "SyncJob":
        """Build a job from raw option values.

        Args:
            source: Source directory
            dest: Destination directory
            transcode_pattern: Regular expression selecting files to transcode
            output_format: Output format name or enum member
            encoder_options: Encoder option string; None selects the format
                default. Split with shell quoting rules.
            lockfile: Lockfile path

        Returns:
            SyncJob instance

        Raises:
            BadArgumentsError: If any value is invalid
        """
        try:
            fmt = OutputFormat(output_format)
        except ValueError:
            choices = ", ".join(f'"{f.value}"' for f in OutputFormat)
            raise BadArgumentsError(
                f"Transcode format must be one of {choices}"
            ) from None

        try:
            validate_extension_mapping()
        except ValueError as e:
            raise BadArgumentsError(str(e)) from e

        try:
            pattern = re.compile(transcode_pattern)
        except re.error as e:
            raise BadArgumentsError(
                f"Invalid transcode pattern {transcode_pattern!r}: {e}"
            ) from e

        if encoder_options is None:
            encoder_options = fmt.default_encoder_options
        try:
            options = tuple(shlex.split(encoder_options))
        except ValueError as e:
            raise BadArgumentsError(f"Invalid encoder options: {e}") from e

        source_path = Path(source).expanduser()
        dest_path = Path(dest).expanduser()
        source_abs = source_path.absolute()
        dest_abs = dest_path.absolute()
        if dest_abs == source_abs or source_abs in dest_abs.parents:
            raise BadArgumentsError(
                f"DEST {dest_path} must not be SOURCE or lie inside it"
            )

        return cls(
            source=source_path,
            dest=dest_path,
            pattern=pattern,
            output_format=fmt,
            encoder_options=options,
            lockfile=Path(lockfile).expanduser(),
        )

    def check_directories(self) -> None:
        """Check that both roots exist as directories.

        Raises:
            SourceNotFoundError: If the source directory is missing
            DestinationNotFoundError: If the destination directory is missing
        """
        if not self.source.is_dir():
            raise SourceNotFoundError(f'Couldn\'t find SOURCE "{self.source}"')
        if not self.dest.is_dir():
            raise DestinationNotFoundError(f'Couldn\'t find DEST "{self.dest}"')

    def mirror_path(self, relative_path: str) -> Path:
        """Destination path mirroring a source-relative path."""
        return self.dest / relative_path

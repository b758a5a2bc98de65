"""Output formats and the source-to-target extension mapping."""

from enum import Enum
from pathlib import Path

SOURCE_EXTENSION = ".flac"
"""Extension of the one lossless format eligible for transcoding"""


class OutputFormat(str, Enum):
    """Lossy formats audiomirror can transcode to."""

    VORBIS = "vorbis"
    """Ogg Vorbis, encoded by oggenc"""

    MP3 = "mp3"
    """MP3, decoded by flac and encoded by lame"""

    @property
    def target_extension(self) -> str:
        """Extension of files written in this format."""
        return _TARGET_EXTENSIONS[self]

    @property
    def default_encoder_options(self) -> str:
        """Encoder option string used when none is configured."""
        return _DEFAULT_ENCODER_OPTIONS[self]

    @property
    def required_binaries(self) -> tuple[str, ...]:
        """Executables that must be on PATH to transcode to this format."""
        return _REQUIRED_BINARIES[self]

    def transcode_target(self, path: Path) -> Path:
        """Map a mirrored destination path to its transcode target.

        A trailing source extension (matched case-insensitively) is replaced
        by the target extension. Any other name gets the target extension
        appended, so a transcode never overwrites a mirrored file name.

        Args:
            path: Destination path mirrored from the source file

        Returns:
            Path the encoded output is written to

        Examples:
            >>> OutputFormat.VORBIS.transcode_target(Path("a/track.flac"))
            PosixPath('a/track.ogg')
            >>> OutputFormat.MP3.transcode_target(Path("a/take.wav"))
            PosixPath('a/take.wav.mp3')
        """
        if path.suffix.lower() == SOURCE_EXTENSION:
            return path.with_suffix(self.target_extension)
        return path.with_name(path.name + self.target_extension)


_TARGET_EXTENSIONS = {
    OutputFormat.VORBIS: ".ogg",
    OutputFormat.MP3: ".mp3",
}

_DEFAULT_ENCODER_OPTIONS = {
    OutputFormat.VORBIS: "-q4",
    OutputFormat.MP3: "-V 4 --noreplaygain",
}

_REQUIRED_BINARIES = {
    OutputFormat.VORBIS: ("oggenc",),
    OutputFormat.MP3: ("lame", "flac"),
}


def validate_extension_mapping() -> None:
    """Check every output format has a usable target extension.

    Raises:
        ValueError: If a format lacks a mapping or maps onto the source
            extension
    """
    for fmt in OutputFormat:
        extension = _TARGET_EXTENSIONS.get(fmt)
        if not extension or not extension.startswith("."):
            raise ValueError(f"No target extension configured for {fmt.value}")
        if extension.lower() == SOURCE_EXTENSION:
            raise ValueError(
                f"Target extension for {fmt.value} must differ from "
                f"{SOURCE_EXTENSION}"
            )

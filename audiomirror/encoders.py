"""Encoder strategies wrapping the external audio binaries.

Each output format has one Encoder subclass. The sync engine only sees
``encode(source, target) -> EncodeResult``; argument layout, tag plumbing
and the decode/encode pipeline stay in here.
"""

import logging
import shutil
import subprocess
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .exceptions import DependencyMissingError, TranscodeError
from .formats import OutputFormat
from .metadata import TrackTags, read_tags

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EncodeResult:
    """Outcome of one encode."""

    returncode: int
    """Exit status of the final stage of the encoder pipeline"""

    @property
    def success(self) -> bool:
        return self.returncode == 0


def _wait(processes: Sequence[subprocess.Popen]) -> list[int]:
    """Wait for every process, killing all of them if interrupted.

    Args:
        processes: Pipeline stages, in pipeline order

    Returns:
        Exit status of each process, in the same order
    """
    try:
        return [process.wait() for process in processes]
    except BaseException:
        for process in processes:
            if process.poll() is None:
                process.kill()
        for process in processes:
            process.wait()
        raise


class Encoder(ABC):
    """Base class for output format encoders."""

    output_format: OutputFormat

    def __init__(self, options: Sequence[str] = ()):
        """Initialize the encoder.

        Args:
            options: Extra arguments for the encoding binary
        """
        self.options = tuple(options)
        self._binaries: dict[str, str] = {}

    def check_dependencies(self) -> dict[str, str]:
        """Locate every binary this encoder runs.

        Returns:
            Mapping of binary name to resolved path

        Raises:
            DependencyMissingError: If a binary is not on PATH
        """
        binaries = {}
        for name in self.output_format.required_binaries:
            path = shutil.which(name)
            if path is None:
                raise DependencyMissingError(
                    f"Couldn't find '{name}' binary required for "
                    f"{self.output_format.value} transcoding"
                )
            binaries[name] = path
        self._binaries = binaries
        logger.debug(f"Using binaries: {binaries}")
        return binaries

    def binary(self, name: str) -> str:
        """Path of a binary, resolved by check_dependencies() when possible."""
        return self._binaries.get(name, name)

    def encode(self, source: Path, target: Path) -> EncodeResult:
        """Encode one lossless file.

        Args:
            source: FLAC file to read
            target: Output path; its parent directory is created if missing

        Returns:
            EncodeResult of the pipeline

        Raises:
            TranscodeError: If the target directory cannot be created or a
                binary cannot be started
        """
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise TranscodeError(f"Couldn't create {target.parent}: {e}") from e

        try:
            return self._run(source, target)
        except OSError as e:
            raise TranscodeError(f"Couldn't run encoder for {source}: {e}") from e

    @abstractmethod
    def _run(self, source: Path, target: Path) -> EncodeResult:
        """Run the format-specific pipeline."""


class VorbisEncoder(Encoder):
    """Encodes with oggenc, which reads FLAC and copies its tags itself."""

    output_format = OutputFormat.VORBIS

    def build_command(self, source: Path, target: Path) -> list[str]:
        return [
            self.binary("oggenc"),
            "-Q",
            *self.options,
            str(source),
            "-o",
            str(target),
        ]

    def _run(self, source: Path, target: Path) -> EncodeResult:
        command = self.build_command(source, target)
        logger.debug(f"Running: {command}")
        process = subprocess.Popen(command)
        (returncode,) = _wait([process])
        return EncodeResult(returncode)


class Mp3Encoder(Encoder):
    """Decodes with flac and pipes raw audio into lame.

    lame only reads WAV or raw streams, so tags are read from the FLAC file
    separately and passed as explicit arguments.
    """

    output_format = OutputFormat.MP3

    TAG_OPTIONS = (
        ("--ta", "artist"),
        ("--tt", "title"),
        ("--tl", "album"),
        ("--tg", "genre"),
        ("--tn", "tracknumber"),
        ("--ty", "year"),
    )

    def build_decode_command(self, source: Path) -> list[str]:
        return [self.binary("flac"), "-s", "-c", "-d", str(source)]

    def build_encode_command(
        self, target: Path, tags: Optional[TrackTags] = None
    ) -> list[str]:
        command = [
            self.binary("lame"),
            "--quiet",
            "--id3v2-only",
            *self.options,
            "-",
            str(target),
        ]
        if tags is not None:
            for option, field in self.TAG_OPTIONS:
                value = getattr(tags, field)
                if value:
                    command.extend([option, value])
        return command

    def _run(self, source: Path, target: Path) -> EncodeResult:
        tags = read_tags(source)
        decode_command = self.build_decode_command(source)
        encode_command = self.build_encode_command(target, tags)
        logger.debug(f"Running: {decode_command} | {encode_command}")

        decoder = subprocess.Popen(decode_command, stdout=subprocess.PIPE)
        try:
            encoder = subprocess.Popen(encode_command, stdin=decoder.stdout)
        except BaseException:
            decoder.kill()
            decoder.wait()
            raise
        finally:
            # lame owns the read end now; closing ours lets flac see SIGPIPE
            if decoder.stdout is not None:
                decoder.stdout.close()

        decode_status, encode_status = _wait([decoder, encoder])
        if decode_status != 0:
            logger.debug(f"flac exited with {decode_status} for {source}")
        return EncodeResult(encode_status)


ENCODERS: dict[OutputFormat, type[Encoder]] = {
    OutputFormat.VORBIS: VorbisEncoder,
    OutputFormat.MP3: Mp3Encoder,
}


def create_encoder(
    output_format: OutputFormat, options: Sequence[str] = ()
) -> Encoder:
    """Create the encoder for an output format.

    Args:
        output_format: Format to encode to
        options: Extra arguments for the encoding binary

    Returns:
        Encoder instance
    """
    return ENCODERS[OutputFormat(output_format)](options)

"""audiomirror - mirror a lossless audio tree as a lossy copy."""

__version__ = "0.4.0"

from .encoders import EncodeResult, Encoder, Mp3Encoder, VorbisEncoder, create_encoder
from .exceptions import (
    AudioMirrorError,
    BadArgumentsError,
    DependencyMissingError,
    DestinationNotFoundError,
    ExitCode,
    LockError,
    RunInterrupted,
    SourceNotFoundError,
    TranscodeError,
)
from .formats import SOURCE_EXTENSION, OutputFormat
from .job import SyncJob
from .sync import RunStats, SyncEngine

__all__ = [
    "__version__",
    "SyncJob",
    "SyncEngine",
    "RunStats",
    "OutputFormat",
    "SOURCE_EXTENSION",
    "Encoder",
    "EncodeResult",
    "VorbisEncoder",
    "Mp3Encoder",
    "create_encoder",
    "ExitCode",
    "AudioMirrorError",
    "BadArgumentsError",
    "LockError",
    "SourceNotFoundError",
    "DestinationNotFoundError",
    "DependencyMissingError",
    "TranscodeError",
    "RunInterrupted",
]

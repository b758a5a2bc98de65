"""Tag extraction from FLAC source files."""

import logging
from dataclasses import dataclass
from pathlib import Path

from mutagen import MutagenError
from mutagen.flac import FLAC

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackTags:
    """Textual tags copied from a FLAC file into an MP3."""

    artist: str = ""
    title: str = ""
    album: str = ""
    genre: str = ""
    tracknumber: str = ""
    year: str = ""
    """First four characters of the DATE tag"""


def _first(tags, key: str) -> str:
    values = tags.get(key) if tags is not None else None
    if not values:
        return ""
    return str(values[0])


def read_tags(path: Path) -> TrackTags:
    """Read the tags lame needs from a FLAC file.

    Vorbis comment keys are case-insensitive; the first value of a
    multi-valued tag is used. A file mutagen cannot parse yields empty
    tags, leaving the decoder to report the broken file.

    Args:
        path: FLAC file to read

    Returns:
        TrackTags with missing fields set to ""
    """
    try:
        audio = FLAC(path)
    except (MutagenError, OSError) as e:
        logger.debug(f"Could not read tags from {path}: {e}")
        return TrackTags()

    tags = audio.tags
    return TrackTags(
        artist=_first(tags, "artist"),
        title=_first(tags, "title"),
        album=_first(tags, "album"),
        genre=_first(tags, "genre"),
        tracknumber=_first(tags, "tracknumber"),
        year=_first(tags, "date")[:4],
    )

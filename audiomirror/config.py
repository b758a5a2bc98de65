"""Default settings for audiomirror.

Every default can be overridden on the command line, or through the
environment variable named next to it.
"""

from pathlib import Path

ENV_PREFIX = "AUDIOMIRROR_"

# AUDIOMIRROR_TRANSCODE_PATTERN
DEFAULT_TRANSCODE_PATTERN: str = r"\.flac$"

# AUDIOMIRROR_FORMAT
DEFAULT_FORMAT: str = "vorbis"

# AUDIOMIRROR_LOCKFILE
DEFAULT_LOCKFILE: Path = Path("/var/tmp/audiomirror.lock")

# AUDIOMIRROR_ENCODER_OPTIONS has no single default; see OutputFormat.

PROGRAM_NAME = "audiomirror"


def env_var(name: str) -> str:
    """Return the environment variable name for a setting.

    Args:
        name: Setting name, e.g. "lockfile"

    Returns:
        Environment variable name, e.g. "AUDIOMIRROR_LOCKFILE"
    """
    return f"{ENV_PREFIX}{name.upper()}"

"""CLI interface for audiomirror."""

import logging
from pathlib import Path
from typing import Any, Optional

import click

from . import __version__
from .config import (
    DEFAULT_FORMAT,
    DEFAULT_LOCKFILE,
    DEFAULT_TRANSCODE_PATTERN,
    PROGRAM_NAME,
    env_var,
)
from .encoders import create_encoder
from .exceptions import AudioMirrorError, ExitCode, RunInterrupted
from .formats import OutputFormat
from .job import SyncJob
from .output import OutputFormatter
from .session import run_session
from .sync import SyncEngine

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("dest", type=click.Path(path_type=Path))
@click.option(
    "--transcode-pattern",
    "-t",
    default=DEFAULT_TRANSCODE_PATTERN,
    show_default=True,
    envvar=env_var("transcode_pattern"),
    help="Regex of file paths to transcode (any non-matching file is hard-linked)",
)
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice([fmt.value for fmt in OutputFormat]),
    default=DEFAULT_FORMAT,
    show_default=True,
    envvar=env_var("format"),
    help="Transcode format",
)
@click.option(
    "--encoder-options",
    "-o",
    default=None,
    envvar=env_var("encoder_options"),
    help=(
        "Arguments to the encoding binary. Default for vorbis (oggenc): "
        f'"{OutputFormat.VORBIS.default_encoder_options}", for mp3 (lame): '
        f'"{OutputFormat.MP3.default_encoder_options}"'
    ),
)
@click.option(
    "--purge",
    "-p",
    is_flag=True,
    help=(
        "Purge destination files without a corresponding source file. "
        "Not implemented: passing it is an error."
    ),
)
@click.option(
    "--lockfile",
    "-l",
    type=click.Path(dir_okay=False, path_type=Path),
    default=DEFAULT_LOCKFILE,
    show_default=True,
    envvar=env_var("lockfile"),
    help="Lockfile name",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose/debug logging output",
)
@click.version_option(version=__version__, prog_name=PROGRAM_NAME)
@click.pass_context
def main(
    ctx: Any,
    source: Path,
    dest: Path,
    transcode_pattern: str,
    output_format: str,
    encoder_options: Optional[str],
    purge: bool,
    lockfile: Path,
    verbose: bool,
) -> None:
    """Create a lossy-compressed copy of a tree of audio files.

    FLAC files under SOURCE are transcoded into DEST; every other file is
    hard-linked. Files already up to date in DEST are skipped.

    \b
    Exit statuses:
       0  success
       1  generic error
       2  bad arguments
       3  couldn't acquire lock on lockfile
      10  couldn't find SOURCE
      11  couldn't find DEST
      20  couldn't find a decoding/encoding binary
      30  transcoding could not be started
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%H:%M:%S",
        )
        logging.getLogger("audiomirror").setLevel(logging.DEBUG)
    else:
        logging.basicConfig(level=logging.WARNING)

    if purge:
        raise click.UsageError(
            "--purge is not implemented; orphaned files in DEST are never deleted",
            ctx=ctx,
        )

    out = OutputFormatter()
    exit_code = run(
        out,
        source=source,
        dest=dest,
        transcode_pattern=transcode_pattern,
        output_format=output_format,
        encoder_options=encoder_options,
        lockfile=lockfile,
    )
    ctx.exit(int(exit_code))


def run(out: OutputFormatter, **options: Any) -> int:
    """Run one synchronization and map its outcome to an exit status.

    Startup checks run in order (arguments, SOURCE, DEST, encoder
    binaries, lock) and each fails with its own status before anything is
    written to DEST.

    Args:
        out: Output formatter
        **options: Keyword arguments for SyncJob.from_options

    Returns:
        Process exit status
    """
    try:
        job = SyncJob.from_options(**options)
        job.check_directories()
        encoder = create_encoder(job.output_format, job.encoder_options)
        encoder.check_dependencies()

        with run_session(job, out) as stats:
            SyncEngine(encoder, out).run(job, stats)
    except AudioMirrorError as e:
        out.error(e.message)
        return e.exit_code
    except RunInterrupted as e:
        out.warning(str(e))
        return e.exit_code
    except KeyboardInterrupt:
        out.warning("Interrupted by user")
        return 130  # Standard exit code for SIGINT
    except OSError as e:
        out.error(str(e))
        return ExitCode.GENERIC_ERROR

    return ExitCode.OK


if __name__ == "__main__":
    main()

"""Run lifecycle: lock, start banner, signal handling and final summary."""

import logging
import signal
import time
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import datetime

from .config import PROGRAM_NAME
from .exceptions import RunInterrupted
from .job import SyncJob
from .lock import RunLock
from .output import OutputFormatter
from .sync.stats import RunStats
from .utils import format_duration, format_run_time

logger = logging.getLogger(__name__)

# SIGINT keeps Python's default handler and arrives as KeyboardInterrupt
HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGHUP)


def _raise_interrupted(signum, frame) -> None:
    raise RunInterrupted(signum)


@contextmanager
def run_session(job: SyncJob, out: OutputFormatter) -> Iterator[RunStats]:
    """Hold the run lock and guarantee the end-of-run summary.

    The summary (finish time, elapsed time and counters) is printed exactly
    once however the body exits: normally, by exception, by Ctrl-C or by
    SIGTERM/SIGHUP, which are turned into RunInterrupted for the duration
    of the session.

    Args:
        job: Job being run (supplies the lockfile)
        out: Output formatter

    Yields:
        Fresh RunStats for the body to update

    Raises:
        LockError: If another run holds the lock; nothing is printed and
            no summary is emitted in that case
    """
    lock = RunLock(job.lockfile)
    lock.acquire()

    previous_handlers = {}
    try:
        for signum in HANDLED_SIGNALS:
            previous_handlers[signum] = signal.signal(signum, _raise_interrupted)

        stats = RunStats()
        started = time.monotonic()
        out.info(f"{PROGRAM_NAME} starting at {format_run_time()}")
        try:
            yield stats
        finally:
            finish_session(out, stats, time.monotonic() - started)
    finally:
        for signum, handler in previous_handlers.items():
            signal.signal(signum, handler)
        lock.release()


def finish_session(
    out: OutputFormatter, stats: RunStats, elapsed: float, finished=None
) -> None:
    """Print the end-of-run summary.

    Args:
        out: Output formatter
        stats: Final counters
        elapsed: Run duration in seconds
        finished: Finish time (defaults to now)
    """
    finished = finished or datetime.now()
    out.info(f"{PROGRAM_NAME} finishing at {format_run_time(finished)}")
    out.info(f"Time elapsed: {format_duration(elapsed)}.")
    out.info(stats.summary_line())
    logger.debug(f"Final counters: {stats.to_dict()}")

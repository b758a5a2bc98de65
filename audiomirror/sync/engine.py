"""Core sync engine for mirroring a source tree."""

import logging
from contextlib import nullcontext
from typing import Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from ..encoders import Encoder
from ..job import SyncJob
from ..output import OutputFormatter
from .comparator import FileComparator, SyncAction, SyncDecision
from .operations import SyncOperations
from .scanner import DirectoryScanner
from .stats import RunStats

logger = logging.getLogger(__name__)


class SyncEngine:
    """Walks the source tree and transcodes, links or skips each file."""

    def __init__(self, encoder: Encoder, output: Optional[OutputFormatter] = None):
        """Initialize sync engine.

        Args:
            encoder: Encoder for the configured output format
            output: Output formatter for log lines and progress
        """
        self.encoder = encoder
        self.output = output or OutputFormatter()
        self.operations = SyncOperations(encoder)
        self.scanner = DirectoryScanner()

    def run(self, job: SyncJob, stats: Optional[RunStats] = None) -> RunStats:
        """Mirror ``job.source`` into ``job.dest``.

        Files are processed one at a time in relative path order. Per-file
        failures are reported as warnings and never abort the run.

        Args:
            job: Job configuration; both roots must already exist
            stats: Counters to update in place (a new RunStats if omitted)

        Returns:
            The updated counters

        Examples:
            >>> engine = SyncEngine(create_encoder(OutputFormat.VORBIS))
            >>> stats = engine.run(SyncJob.from_options("/flac", "/ogg"))
            >>> print(stats.summary_line())
        """
        if stats is None:
            stats = RunStats()

        comparator = FileComparator(job)
        entries = self.scanner.scan(job.source)
        logger.debug(f"Found {len(entries)} file(s) under {job.source}")

        progress = self._create_progress()
        with progress if progress is not None else nullcontext():
            task = None
            if progress is not None:
                task = progress.add_task(stats.summary_line(), total=None)

            for entry in entries:
                try:
                    decision = comparator.decide(entry)
                except OSError as e:
                    self.output.warning(f"Couldn't examine {entry.path}: {e}")
                    stats.skipped += 1
                    stats.failed += 1
                else:
                    self._execute_decision(decision, stats)
                stats.examined += 1

                if progress is not None and task is not None:
                    progress.update(task, description=stats.summary_line())

        return stats

    def _create_progress(self) -> Optional[Progress]:
        """Running counter line, only when attached to a terminal."""
        if not self.output.interactive:
            return None
        return Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            console=self.output.console,
        )

    def _execute_decision(self, decision: SyncDecision, stats: RunStats) -> None:
        """Execute one decision and count its outcome.

        Args:
            decision: Decision to execute
            stats: Statistics (modified in place)
        """
        logger.debug(f"{decision.entry.relative_path}: {decision.reason}")

        if decision.action == SyncAction.TRANSCODE:
            self._transcode(decision, stats)
        elif decision.action == SyncAction.LINK:
            self._link(decision, stats)
        else:
            stats.skipped += 1

    def _transcode(self, decision: SyncDecision, stats: RunStats) -> None:
        source = decision.entry.path
        self.output.info(f"Transcoding {source}")
        result = self.operations.transcode(decision.entry, decision.target)
        if result.success:
            stats.transcoded += 1
            return

        self.output.warning(f"Error {result.returncode} when transcoding {source}")
        self.output.info(f"Deleting partial file {decision.target}")
        stats.skipped += 1
        stats.failed += 1

    def _link(self, decision: SyncDecision, stats: RunStats) -> None:
        source = decision.entry.path
        self.output.info(f"Linking {source}")
        try:
            self.operations.link(decision.entry, decision.target)
        except OSError as e:
            self.output.warning(f"Error linking {source} to {decision.target}: {e}")
            stats.skipped += 1
            stats.failed += 1
            return
        stats.linked += 1

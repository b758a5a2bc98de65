"""Run counters."""

from dataclasses import dataclass

from ..utils import format_counters


@dataclass
class RunStats:
    """Counters for one synchronization run.

    Every examined file ends up in exactly one of transcoded, linked or
    skipped, so ``examined == transcoded + linked + skipped`` holds after
    each file. ``failed`` counts the skipped files that were abandoned
    because their transcode or link failed.
    """

    examined: int = 0
    transcoded: int = 0
    linked: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def is_balanced(self) -> bool:
        """Whether the counters satisfy the conservation invariant."""
        return self.examined == self.transcoded + self.linked + self.skipped

    def summary_line(self) -> str:
        """Counters formatted for progress and summary output."""
        return format_counters(self.examined, self.transcoded, self.linked)

    def to_dict(self) -> dict:
        return {
            "examined": self.examined,
            "transcoded": self.transcoded,
            "linked": self.linked,
            "skipped": self.skipped,
            "failed": self.failed,
        }

"""
Dataclass for tracking download session statistics.
"""

import time
from dataclasses import dataclass, field


@dataclass
class DownloadStats:
    """Tracks statistics for a channel download session."""

    videos_total: int = 0
    videos_downloaded: int = 0
    videos_failed: int = 0
    total_size_downloaded: int = 0
    _start_time: float = field(default_factory=time.monotonic, repr=False)

    @property
    def videos_completed(self) -> int:
        """Videos that reached a final state, successful or not."""
        return self.videos_downloaded + self.videos_failed

    @property
    def elapsed(self) -> float:
        return time.monotonic() - self._start_time

    def record_success(self, size: int) -> None:
        self.videos_downloaded += 1
        self.total_size_downloaded += size

    def record_failure(self) -> None:
        self.videos_failed += 1

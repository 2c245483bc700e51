"""
Progress reporting interface used by the download engine.

The engine only talks to a `ProgressObserver`; the terminal implementation
lives in `switchtube_cli.cli.progress_manager`. The base class does nothing,
so it doubles as the observer for runs without progress output.
"""

from typing import Any, Optional


class ProgressObserver:
    """No-op observer. Subclasses override the hooks they care about."""

    def initialize_session(self, total_videos: int) -> None:
        """Called once with the number of videos in the channel."""

    def add_video_task(self, description: str, total_size: Optional[int]) -> Any:
        """Called when a video's transfer starts. Returns an opaque task handle."""
        return None

    def update_task_progress(self, task_id: Any, completed: int) -> None:
        """Called after each chunk is written with the cumulative byte count."""

    def remove_task(self, task_id: Any, success: bool = True) -> None:
        """Called when a video's transfer ends."""

    def advance_overall(self, completed: int) -> None:
        """Called after each video, successful or not, with the running count."""

    def finish_session(self) -> None:
        """Called once after the last video."""

"""
Manages a Rich Live display showing the overall channel progress and the
transfer of the video currently being downloaded.
"""

import asyncio
from typing import Optional

from rich.console import Console, Group
from rich.live import Live
from rich.panel import Panel
from rich.progress import (
    BarColumn,
    DownloadColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeRemainingColumn,
    TransferSpeedColumn,
)
from rich.text import Text

from switchtube_cli.core.observer import ProgressObserver


class ProgressManager(ProgressObserver):
    """Terminal implementation of the download progress observer."""

    def __init__(self, console: Console):
        self.console = console

        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}", justify="left"),
            BarColumn(bar_width=None),
            "[progress.percentage]{task.percentage:>3.0f}%",
            "•",
            DownloadColumn(),
            "•",
            TransferSpeedColumn(),
            "•",
            TimeRemainingColumn(),
            console=console,
            transient=False,
        )

        self.overall_progress = Progress(
            TextColumn("[bold blue]{task.description}"),
            BarColumn(bar_width=None),
            MofNCompleteColumn(),
            console=console,
        )

        self._live: Live | None = None
        self._overall_task_id: TaskID | None = None
        self._active_tasks: dict[TaskID, str] = {}

    def _render(self) -> Group:
        if self._active_tasks:
            transfers = Panel(
                self.progress,
                title="[bold]📥 Current Download[/bold]",
                border_style="green",
            )
        else:
            transfers = Panel(
                Text("Waiting for the next video...", style="dim italic"),
                title="[bold]📥 Current Download[/bold]",
                border_style="green",
            )
        return Group(
            Panel(
                self.overall_progress,
                title="[bold]📺 Channel[/bold]",
                border_style="blue",
            ),
            transfers,
        )

    def _update_display(self) -> None:
        if self._live:
            self._live.update(self._render())

    def initialize_session(self, total_videos: int) -> None:
        self._overall_task_id = self.overall_progress.add_task(
            "Downloading channel", total=total_videos, start=True
        )
        self._update_display()

    def add_video_task(self, description: str, total_size: Optional[int]) -> TaskID:
        if len(description) > 55:
            description = description[:52] + "..."
        task_id = self.progress.add_task(description, total=total_size, start=True)
        self._active_tasks[task_id] = description
        self._update_display()
        return task_id

    def update_task_progress(self, task_id: TaskID, completed: int) -> None:
        if task_id is not None:
            self.progress.update(task_id, completed=completed)

    def remove_task(self, task_id: TaskID, success: bool = True) -> None:
        if task_id is None or task_id not in self._active_tasks:
            return
        self.progress.remove_task(task_id)
        del self._active_tasks[task_id]
        self._update_display()

    def advance_overall(self, completed: int) -> None:
        if self._overall_task_id is not None:
            self.overall_progress.update(self._overall_task_id, completed=completed)

    def finish_session(self) -> None:
        if self._overall_task_id is not None:
            self.overall_progress.update(
                self._overall_task_id, description="Download complete"
            )
        self._update_display()

    async def __aenter__(self):
        self._live = Live(
            self._render(),
            console=self.console,
            refresh_per_second=12,
            vertical_overflow="visible",
        )
        self._live.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if self._live:
            await asyncio.sleep(0.2)
            self._live.stop()
            self._live = None

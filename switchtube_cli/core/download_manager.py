"""
The main orchestrator for listing a channel and downloading its videos one by one.
"""

import logging
from typing import List

from rich.markup import escape

from switchtube_cli.api.client import SwitchTubeAPIClient
from switchtube_cli.media import Downloader
from switchtube_cli.models.config import DownloadConfig
from switchtube_cli.models.stats import DownloadStats
from switchtube_cli.models.video import DownloadResult

from .observer import ProgressObserver
from .video_processor import VideoProcessor

log = logging.getLogger(__name__)


class DownloadManager:
    """
    Orchestrates the download of a whole channel.

    Videos are processed strictly in the order the server lists them, and each
    one finishes (successfully or not) before the next starts. A failed video
    is recorded and the batch continues.
    """

    def __init__(
        self,
        config: DownloadConfig,
        api_client: SwitchTubeAPIClient,
        progress: ProgressObserver | None = None,
    ):
        self.config = config
        self.api_client = api_client
        self.progress = progress or ProgressObserver()
        self.stats = DownloadStats()
        self.video_processor = VideoProcessor(
            config,
            api_client,
            Downloader(config.chunk_size),
            self.progress,
        )

    async def download_channel(self, channel_id: str) -> List[DownloadResult]:
        """
        Downloads every video of a channel.

        Returns:
            The results of the videos that failed, in processing order. An
            empty list means every video was downloaded.

        Raises:
            ChannelListingError: If the channel's video list cannot be fetched.
        """
        videos = await self.api_client.list_channel_videos(channel_id)
        log.info(
            f"Found [bold]{len(videos)}[/bold] videos in channel "
            f"[cyan]{escape(channel_id)}[/cyan]."
        )

        self.stats.videos_total = len(videos)
        self.progress.initialize_session(len(videos))

        failed_downloads: List[DownloadResult] = []
        for video in videos:
            if not self.config.show_progress:
                log.info(f"Downloading [bold]{escape(video.display_title)}[/bold]...")

            result = await self.video_processor.process_video(video)
            if result.success:
                self.stats.record_success(result.size)
            else:
                self.stats.record_failure()
                failed_downloads.append(result)

            self.progress.advance_overall(self.stats.videos_completed)

        self.progress.finish_session()
        return failed_downloads

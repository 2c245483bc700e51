"""
Handles the processing of a single video, from variant lookup to the file on disk.
"""

import logging
import os
from pathlib import Path
from typing import Any

from rich.markup import escape

from switchtube_cli.api.client import SwitchTubeAPIClient
from switchtube_cli.exceptions import (
    DownloadError,
    DownloadErrorKind,
    FileCreationError,
    NoVariantError,
    UnknownSizeError,
)
from switchtube_cli.media import Downloader
from switchtube_cli.models.config import DownloadConfig
from switchtube_cli.models.video import DownloadResult, Video
from switchtube_cli.utils.formatting import format_size
from switchtube_cli.utils.path import build_file_name, create_dir

from .observer import ProgressObserver

log = logging.getLogger(__name__)


class VideoProcessor:
    """
    Downloads the first variant of a single video.

    `process_video` never raises for failures of the video itself; every such
    failure is returned as a `DownloadResult` carrying its error kind.
    """

    def __init__(
        self,
        config: DownloadConfig,
        api_client: SwitchTubeAPIClient,
        downloader: Downloader,
        progress: ProgressObserver,
    ):
        self.config = config
        self.api_client = api_client
        self.downloader = downloader
        self.progress = progress
        self.output_dir = Path(config.output_dir)

    async def _fetch_to_temp(
        self, video: Video, variant_path: str, temp_path: Path
    ) -> tuple[int, Any]:
        """Requests the media resource and writes its body to `temp_path`."""
        task_id = None
        async with self.api_client.open_media(variant_path) as response:
            if not self.config.show_progress:
                return await self.downloader.copy_body(response, temp_path), task_id

            total_size = response.content_length
            if total_size is None:
                raise UnknownSizeError(
                    "The server did not declare a content length for the media."
                )
            task_id = self.progress.add_video_task(video.display_title, total_size)
            try:
                size = await self.downloader.stream_body(
                    response, temp_path, self.progress, task_id
                )
            except BaseException:
                self.progress.remove_task(task_id, success=False)
                raise
            return size, task_id

    async def process_video(self, video: Video) -> DownloadResult:
        """
        Manages the complete lifecycle of downloading and saving a video.
        """
        display_title = escape(video.display_title)
        temp_path = None

        try:
            variants = await self.api_client.list_video_variants(video.id)
            if not variants:
                raise NoVariantError("The server offers no variant for this video.")
            variant = variants[0]

            final_path = self.output_dir / build_file_name(video, variant.extension)
            temp_path = final_path.with_name(f"{final_path.name}.part")
            try:
                create_dir(final_path.parent)
            except OSError as e:
                raise FileCreationError(
                    f"Could not create directory '{final_path.parent}': {e}"
                ) from e

            size, task_id = await self._fetch_to_temp(video, variant.path, temp_path)

            try:
                os.replace(temp_path, final_path)
            except OSError as e:
                self.progress.remove_task(task_id, success=False)
                raise FileCreationError(
                    f"Could not move download to '{final_path}': {e}"
                ) from e

            self.progress.remove_task(task_id, success=True)
            log.info(
                f"  [green]✓ Downloaded:[/] {escape(final_path.name)} "
                f"[dim]({format_size(size)})[/dim]"
            )
            return DownloadResult(video=video, destination=final_path, size=size)

        except DownloadError as e:
            return self._failure(video, display_title, e.kind, e)
        except Exception as e:
            return self._failure(video, display_title, DownloadErrorKind.TRANSFER, e)
        finally:
            if temp_path is not None and temp_path.exists():
                try:
                    os.remove(temp_path)
                except OSError as e:
                    log.debug(f"Could not remove partial file '{temp_path}': {e}")

    def _failure(
        self,
        video: Video,
        display_title: str,
        kind: DownloadErrorKind,
        error: Exception,
    ) -> DownloadResult:
        log.error(
            f"  [red]✗ Failed:[/] {display_title} ({escape(str(error))})",
            exc_info=log.getEffectiveLevel() == logging.DEBUG,
        )
        return DownloadResult(video=video, error_kind=kind, message=str(error))

"""
Handles the low-level transfer of a media response body into a local file,
either as a single whole-body copy or as a chunked stream with progress updates.
"""

import asyncio
import logging
from pathlib import Path
from typing import Any, AsyncIterator, Callable, Optional

import aiofiles
import aiohttp

from switchtube_cli.core.observer import ProgressObserver
from switchtube_cli.exceptions import FileCreationError, TransferError
from switchtube_cli.models.config import DEFAULT_CHUNK_SIZE

log = logging.getLogger(__name__)


class Downloader:
    """Writes HTTP response bodies to disk."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self.chunk_size = chunk_size

    @staticmethod
    async def _open_destination(destination: Path):
        """Creates (or truncates) the destination file for binary writing."""
        try:
            return await aiofiles.open(destination, "wb")
        except OSError as e:
            raise FileCreationError(
                f"Could not create file '{destination}': {e}"
            ) from e

    async def _write(
        self,
        chunks: AsyncIterator[bytes],
        destination: Path,
        on_progress: Optional[Callable[[int], None]] = None,
    ) -> int:
        """Drains `chunks` into `destination` and returns the number of bytes written."""
        f = await self._open_destination(destination)
        bytes_written = 0
        try:
            async for chunk in chunks:
                await f.write(chunk)
                bytes_written += len(chunk)
                if on_progress:
                    on_progress(bytes_written)
        except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as e:
            # Timeouts carry no message of their own.
            reason = str(e) or type(e).__name__
            raise TransferError(
                f"Transfer to '{destination.name}' failed after "
                f"{bytes_written} bytes: {reason}"
            ) from e
        finally:
            await f.close()

        log.debug(f"Wrote {bytes_written} bytes to '{destination}'")
        return bytes_written

    async def copy_body(
        self, response: aiohttp.ClientResponse, destination: Path
    ) -> int:
        """Reads the whole body into memory and writes it out in one go."""

        async def whole_body() -> AsyncIterator[bytes]:
            yield await response.read()

        return await self._write(whole_body(), destination)

    async def stream_body(
        self,
        response: aiohttp.ClientResponse,
        destination: Path,
        progress: ProgressObserver,
        task_id: Any = None,
    ) -> int:
        """
        Streams the body in chunks, reporting the cumulative byte count to
        `progress` after every chunk that reached the disk.
        """
        return await self._write(
            response.content.iter_chunked(self.chunk_size),
            destination,
            on_progress=lambda written: progress.update_task_progress(
                task_id, written
            ),
        )

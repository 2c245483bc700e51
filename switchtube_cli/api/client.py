"""
Async client for the SwitchTube browse API.
"""

import asyncio
import logging
import time
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional

import aiohttp
from pydantic import ValidationError

from switchtube_cli.exceptions import ChannelListingError, VariantRequestError
from switchtube_cli.models.config import DEFAULT_BASE_URL
from switchtube_cli.models.video import (
    Video,
    VideoList,
    VideoVariant,
    VideoVariantList,
)

from .auth import build_auth_headers

log = logging.getLogger(__name__)

# No cap on the whole response: video bodies can take far longer than any fixed total.
SESSION_TIMEOUT = aiohttp.ClientTimeout(total=None, sock_connect=15, sock_read=90)


class SwitchTubeAPIClient:
    """
    Async client for the SwitchTube REST API.

    The authorization header is fixed when the client is built and sent with
    every request. Requests are not retried. Only connecting and idle reads
    time out; a transfer that keeps receiving data is never cut off.
    """

    def __init__(self, token: str, base_url: str = DEFAULT_BASE_URL):
        """
        Initializes the API client.

        Args:
            token: Personal access token of the user.
            base_url: Scheme and host of the SwitchTube instance.

        Raises:
            AuthenticationError: If the token cannot be sent as a header value.
        """
        self.base_url: str = base_url.rstrip("/")
        self._headers = build_auth_headers(token)
        self._session: Optional[aiohttp.ClientSession] = None

    async def _initialize_session(self) -> None:
        """Ensures an active aiohttp session is available."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers=self._headers, timeout=SESSION_TIMEOUT
            )

    async def close(self) -> None:
        """Gracefully closes the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def __aenter__(self) -> "SwitchTubeAPIClient":
        await self._initialize_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def api_call(self, endpoint: str) -> Any:
        """Performs an authenticated GET request and returns the decoded JSON body."""
        await self._initialize_session()

        start_time = time.monotonic()
        async with self._session.get(f"{self.base_url}/{endpoint}") as r:
            duration_ms = (time.monotonic() - start_time) * 1000
            log.debug(f"GET {endpoint} -> {r.status} ({duration_ms:.0f} ms)")
            r.raise_for_status()
            return await r.json(content_type=None)

    async def list_channel_videos(self, channel_id: str) -> List[Video]:
        """
        Lists the videos of a channel in the order the server returns them.

        Raises:
            ChannelListingError: If the request fails or the body does not decode.
        """
        try:
            payload = await self.api_call(
                f"api/v1/browse/channels/{channel_id}/videos"
            )
            return VideoList.validate_python(payload)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValidationError, ValueError) as e:
            raise ChannelListingError(
                f"Could not list the videos of channel '{channel_id}': {e}"
            ) from e

    async def list_video_variants(self, video_id: str) -> List[VideoVariant]:
        """
        Lists the media variants offered for a video, in server order.

        Raises:
            VariantRequestError: If the request fails or the body does not decode.
        """
        try:
            payload = await self.api_call(
                f"api/v1/browse/videos/{video_id}/video_variants"
            )
            return VideoVariantList.validate_python(payload)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValidationError, ValueError) as e:
            raise VariantRequestError(
                f"Could not list the variants of video '{video_id}': {e}"
            ) from e

    @asynccontextmanager
    async def open_media(self, path: str) -> AsyncIterator[aiohttp.ClientResponse]:
        """
        Opens the media resource at a server-relative path.

        The response body is not read; callers stream or copy it themselves.
        """
        await self._initialize_session()
        async with self._session.get(f"{self.base_url}{path}") as response:
            log.debug(
                f"GET {path} -> {response.status} "
                f"(Content-Length: {response.content_length})"
            )
            response.raise_for_status()
            yield response

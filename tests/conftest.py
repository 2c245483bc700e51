import json
from pathlib import Path

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from switchtube_cli.api.client import SwitchTubeAPIClient
from switchtube_cli.core.observer import ProgressObserver
from switchtube_cli.models.config import DownloadConfig

TOKEN = "secret-token"


class FakeSwitchTube:
    """In-process stand-in for the SwitchTube browse API."""

    def __init__(self):
        self.channels: dict[str, list] = {}
        self.variants: dict[str, list] = {}
        self.media: dict[str, bytes] = {}
        self.unsized: set[str] = set()
        self.failing: set[str] = set()
        self.truncated: set[str] = set()
        self.plain_json = False
        self.requests: list[str] = []
        self.base_url = ""

    def add_video(
        self,
        channel_id,
        video_id,
        title=None,
        media_type="video/mp4",
        data=b"",
        variants=None,
    ):
        video = {"id": video_id}
        if title is not None:
            video["title"] = title
        self.channels.setdefault(channel_id, []).append(video)

        if variants is None:
            path = f"/media/{video_id}"
            variants = [{"path": path, "media_type": media_type}]
            self.media[path] = data
        self.variants[video_id] = variants

    def media_requests(self) -> list[str]:
        return [p for p in self.requests if p.startswith("/media/")]

    def make_app(self) -> web.Application:
        app = web.Application(middlewares=[self._record])
        app.router.add_get(
            "/api/v1/browse/channels/{id}/videos", self._channel_videos
        )
        app.router.add_get(
            "/api/v1/browse/videos/{id}/video_variants", self._video_variants
        )
        app.router.add_get("/media/{name}", self._media)
        return app

    @web.middleware
    async def _record(self, request, handler):
        self.requests.append(request.path)
        if request.headers.get("Authorization") != f"Token {TOKEN}":
            raise web.HTTPUnauthorized()
        return await handler(request)

    async def _channel_videos(self, request):
        channel_id = request.match_info["id"]
        if channel_id not in self.channels:
            raise web.HTTPNotFound()
        return self._json(self.channels[channel_id])

    async def _video_variants(self, request):
        video_id = request.match_info["id"]
        if video_id not in self.variants:
            raise web.HTTPNotFound()
        return self._json(self.variants[video_id])

    def _json(self, payload):
        if self.plain_json:
            return web.Response(text=json.dumps(payload), content_type="text/plain")
        return web.json_response(payload)

    async def _media(self, request):
        if request.path in self.failing:
            raise web.HTTPInternalServerError()
        data = self.media.get(request.path)
        if data is None:
            raise web.HTTPNotFound()
        if request.path in self.truncated:
            # Announce twice the body, send half of it, then hang up.
            response = web.StreamResponse()
            response.content_length = len(data) * 2
            await response.prepare(request)
            await response.write(data)
            request.transport.close()
            return response
        if request.path in self.unsized:
            response = web.StreamResponse()
            response.enable_chunked_encoding()
            await response.prepare(request)
            await response.write(data)
            await response.write_eof()
            return response
        return web.Response(body=data, content_type="application/octet-stream")


class RecordingObserver(ProgressObserver):
    def __init__(self):
        self.events = []
        self.byte_counts = []

    def initialize_session(self, total_videos):
        self.events.append(("session", total_videos))

    def add_video_task(self, description, total_size):
        self.events.append(("start", description, total_size))
        return description

    def update_task_progress(self, task_id, completed):
        self.byte_counts.append(completed)

    def remove_task(self, task_id, success=True):
        self.events.append(("end", task_id, success))

    def advance_overall(self, completed):
        self.events.append(("overall", completed))

    def finish_session(self):
        self.events.append(("finish",))


@pytest_asyncio.fixture
async def switchtube():
    fake = FakeSwitchTube()
    server = TestServer(fake.make_app())
    await server.start_server()
    fake.base_url = str(server.make_url("/")).rstrip("/")
    yield fake
    await server.close()


@pytest_asyncio.fixture
async def api_client(switchtube):
    client = SwitchTubeAPIClient(TOKEN, switchtube.base_url)
    yield client
    await client.close()


@pytest.fixture
def observer():
    return RecordingObserver()


@pytest.fixture
def make_config(tmp_path: Path):
    def _make(base_url: str, **overrides) -> DownloadConfig:
        values = {
            "token": TOKEN,
            "base_url": base_url,
            "output_dir": str(tmp_path),
            "chunk_size": 1024,
            "config_path": str(tmp_path),
        }
        values.update(overrides)
        return DownloadConfig(**values)

    return _make

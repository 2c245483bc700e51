import asyncio
from types import SimpleNamespace

import aiohttp
import pytest

from switchtube_cli.exceptions import FileCreationError, TransferError
from switchtube_cli.media import Downloader


class FakeResponse:
    """Mimics the parts of aiohttp.ClientResponse the downloader uses."""

    def __init__(self, chunks, fail_after=None, error=None):
        self._chunks = chunks
        self._fail_after = fail_after
        self._error = error or aiohttp.ClientPayloadError("connection lost")
        self.content = SimpleNamespace(iter_chunked=self._iter_chunked)

    async def _iter_chunked(self, size):
        for i, chunk in enumerate(self._chunks):
            if self._fail_after is not None and i >= self._fail_after:
                raise self._error
            yield chunk

    async def read(self):
        return b"".join(self._chunks)


@pytest.mark.asyncio
async def test_stream_body_reports_cumulative_progress(tmp_path, observer):
    destination = tmp_path / "out.mp4"
    response = FakeResponse([b"abc", b"defg", b"h"])

    written = await Downloader(1024).stream_body(
        response, destination, observer, task_id="t"
    )

    assert written == 8
    assert destination.read_bytes() == b"abcdefgh"
    assert observer.byte_counts == [3, 7, 8]


@pytest.mark.asyncio
async def test_copy_body_writes_whole_body(tmp_path):
    destination = tmp_path / "out.mp4"

    written = await Downloader().copy_body(FakeResponse([b"12", b"34"]), destination)

    assert written == 4
    assert destination.read_bytes() == b"1234"


@pytest.mark.asyncio
async def test_copy_body_truncates_existing_file(tmp_path):
    destination = tmp_path / "out.mp4"
    destination.write_bytes(b"x" * 100)

    await Downloader().copy_body(FakeResponse([b"new"]), destination)

    assert destination.read_bytes() == b"new"


@pytest.mark.asyncio
async def test_network_failure_mid_stream_is_transfer_error(tmp_path, observer):
    response = FakeResponse([b"abc", b"def"], fail_after=1)

    with pytest.raises(TransferError):
        await Downloader().stream_body(response, tmp_path / "out.mp4", observer)

    assert observer.byte_counts == [3]


@pytest.mark.asyncio
async def test_unwritable_destination_is_file_creation_error(tmp_path):
    destination = tmp_path / "missing-dir" / "out.mp4"

    with pytest.raises(FileCreationError):
        await Downloader().copy_body(FakeResponse([b"abc"]), destination)


@pytest.mark.asyncio
async def test_read_timeout_is_named_in_transfer_error(tmp_path, observer):
    response = FakeResponse([b"abc", b"def"], fail_after=1, error=asyncio.TimeoutError())

    with pytest.raises(TransferError) as exc_info:
        await Downloader().stream_body(response, tmp_path / "out.mp4", observer)

    assert "after 3 bytes: TimeoutError" in str(exc_info.value)

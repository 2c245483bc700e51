import pytest

from switchtube_cli.core.download_manager import DownloadManager
from switchtube_cli.exceptions import ChannelListingError, DownloadErrorKind


@pytest.mark.asyncio
async def test_failed_video_does_not_stop_the_batch(
    switchtube, api_client, make_config, observer, tmp_path
):
    switchtube.add_video("chan", "a", title="A", data=b"aaa")
    switchtube.add_video("chan", "b", title="B", variants=[])
    switchtube.add_video("chan", "c", title="C", data=b"ccc")
    manager = DownloadManager(make_config(switchtube.base_url), api_client, observer)

    failed = await manager.download_channel("chan")

    assert [r.video.display_title for r in failed] == ["B"]
    assert failed[0].error_kind == DownloadErrorKind.NO_VARIANT
    assert sorted(p.name for p in tmp_path.iterdir()) == ["A.mp4", "C.mp4"]
    assert manager.stats.videos_downloaded == 2
    assert manager.stats.videos_failed == 1
    assert manager.stats.total_size_downloaded == 6

    overall = [e[1] for e in observer.events if e[0] == "overall"]
    assert observer.events[0] == ("session", 3)
    assert overall == [1, 2, 3]
    assert observer.events[-1] == ("finish",)


@pytest.mark.asyncio
async def test_videos_are_processed_in_server_order(
    switchtube, api_client, make_config
):
    for video_id in ["z", "m", "a"]:
        switchtube.add_video("chan", video_id, data=video_id.encode())
    config = make_config(switchtube.base_url, show_progress=False)

    failed = await DownloadManager(config, api_client).download_channel("chan")

    assert failed == []
    assert switchtube.requests == [
        "/api/v1/browse/channels/chan/videos",
        "/api/v1/browse/videos/z/video_variants",
        "/media/z",
        "/api/v1/browse/videos/m/video_variants",
        "/media/m",
        "/api/v1/browse/videos/a/video_variants",
        "/media/a",
    ]


@pytest.mark.asyncio
async def test_empty_channel(switchtube, api_client, make_config, observer):
    switchtube.channels["empty"] = []
    manager = DownloadManager(make_config(switchtube.base_url), api_client, observer)

    assert await manager.download_channel("empty") == []
    assert observer.events == [("session", 0), ("finish",)]


@pytest.mark.asyncio
async def test_listing_failure_is_fatal(switchtube, api_client, make_config, tmp_path):
    manager = DownloadManager(make_config(switchtube.base_url), api_client)

    with pytest.raises(ChannelListingError):
        await manager.download_channel("missing")
    assert list(tmp_path.iterdir()) == []

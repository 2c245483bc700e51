"""
Core application engine for orchestrating the download process.

This package contains the primary logic. The `DownloadManager` acts
as the channel-level coordinator, delegating the task of downloading
each individual video to the `VideoProcessor`. Progress is reported
through the `ProgressObserver` interface.
"""

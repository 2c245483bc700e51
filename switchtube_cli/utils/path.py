"""
Utilities for handling file names and URL parsing.
"""

from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlsplit

from switchtube_cli.models.video import Video

PATH_SEPARATOR_REPLACEMENT = " - "


def parse_switchtube_url(url: str) -> Optional[Tuple[str, str]]:
    """
    Parses a SwitchTube URL to extract the content type and ID.

    Only channel URLs (`/channels/<id>`) are recognized; anything after the id
    is ignored. Returns None for every other path.
    """
    segments = urlsplit(url).path.split("/")[1:]
    if len(segments) >= 2 and segments[0] == "channels" and segments[1]:
        return "channel", segments[1]
    return None


def is_absolute_url(url: str) -> bool:
    parts = urlsplit(url)
    return bool(parts.scheme and parts.netloc)


def build_file_name(video: Video, extension: str) -> str:
    """
    Builds the local file name for a video, e.g. 'Lecture 1.mp4'.

    Forward slashes would create nested paths, so each one becomes ' - '.
    """
    return f"{video.display_title}.{extension}".replace(
        "/", PATH_SEPARATOR_REPLACEMENT
    )


def create_dir(directory_path: Path) -> None:
    """Creates a directory if it does not already exist."""
    directory_path.mkdir(parents=True, exist_ok=True)

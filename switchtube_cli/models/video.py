"""
Pydantic models for the records returned by the SwitchTube browse API.
"""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, TypeAdapter

from switchtube_cli.exceptions import DownloadErrorKind, MalformedMediaTypeError


class Video(BaseModel):
    """A single video of a channel."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str
    title: str | None = None

    @property
    def display_title(self) -> str:
        """The title if the server sent one, otherwise the id."""
        return self.title if self.title is not None else self.id

    def __str__(self) -> str:
        return self.display_title


class VideoVariant(BaseModel):
    """An encoded rendition of a video, e.g. one MP4 file."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    path: str
    media_type: str

    @property
    def extension(self) -> str:
        """
        The MIME subtype, used as file extension ('video/mp4' -> 'mp4').

        Raises:
            MalformedMediaTypeError: If the media type contains no '/'.
        """
        _, sep, subtype = self.media_type.partition("/")
        if not sep:
            raise MalformedMediaTypeError(
                f"Media type '{self.media_type}' has no subtype."
            )
        return subtype


class DownloadResult(BaseModel):
    """Outcome of downloading one video."""

    model_config = ConfigDict(frozen=True)

    video: Video
    error_kind: DownloadErrorKind | None = None
    message: str = ""
    destination: Path | None = None
    size: int = 0

    @property
    def success(self) -> bool:
        return self.error_kind is None


VideoList = TypeAdapter(list[Video])
VideoVariantList = TypeAdapter(list[VideoVariant])

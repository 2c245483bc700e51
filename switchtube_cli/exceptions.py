"""
Defines custom exceptions for the application to allow for more specific error handling.
"""

from enum import Enum


class SwitchTubeCliError(Exception):
    """Base exception for all application-specific errors."""


class AuthenticationError(SwitchTubeCliError):
    """Raised when the access token cannot be used to build an authorization header."""


class ConfigurationError(SwitchTubeCliError):
    """Raised for issues related to configuration loading or validation."""


class ChannelListingError(SwitchTubeCliError):
    """Raised when the video list of a channel cannot be fetched or decoded."""


class DownloadErrorKind(str, Enum):
    """Why a single video failed to download."""

    REQUEST = "request"
    NO_VARIANT = "no_variant"
    MALFORMED_MEDIA_TYPE = "malformed_media_type"
    UNKNOWN_SIZE = "unknown_size"
    IO = "io"
    TRANSFER = "transfer"


class DownloadError(SwitchTubeCliError):
    """
    Base exception for failures confined to a single video.

    These never abort a channel download; they are converted into a
    `DownloadResult` at the per-video boundary.
    """

    kind: DownloadErrorKind = DownloadErrorKind.TRANSFER


class VariantRequestError(DownloadError):
    """Raised when the variant list of a video cannot be fetched or decoded."""

    kind = DownloadErrorKind.REQUEST


class NoVariantError(DownloadError):
    """Raised when the server offers no media variant for a video."""

    kind = DownloadErrorKind.NO_VARIANT


class MalformedMediaTypeError(DownloadError):
    """Raised when a variant's media type has no '/' to derive an extension from."""

    kind = DownloadErrorKind.MALFORMED_MEDIA_TYPE


class UnknownSizeError(DownloadError):
    """Raised when progress is requested but the response declares no length."""

    kind = DownloadErrorKind.UNKNOWN_SIZE


class FileCreationError(DownloadError):
    """Raised when the local destination file cannot be created."""

    kind = DownloadErrorKind.IO


class TransferError(DownloadError):
    """Raised when reading from the network or writing to disk fails mid-transfer."""

    kind = DownloadErrorKind.TRANSFER

"""
Data Models Layer.

This package contains Pydantic models that define the core data structures
used throughout the application, such as API records, configuration and
statistics.
"""

from .config import DownloadConfig
from .stats import DownloadStats
from .video import DownloadResult, Video, VideoVariant

__all__ = ["DownloadConfig", "DownloadResult", "DownloadStats", "Video", "VideoVariant"]

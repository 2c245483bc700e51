"""
Media Transfer Layer.

This package is responsible for writing downloaded media to disk.
"""

from .downloader import Downloader

__all__ = ["Downloader"]

"""
Storage Layer.

This package handles persistent local state, currently the INI configuration file.
"""

from .config_manager import ConfigManager

__all__ = ["ConfigManager"]

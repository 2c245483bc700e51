"""
SwitchTube API Layer.

This package handles all communication with the SwitchTube REST API.
"""

from .auth import build_auth_headers
from .client import SwitchTubeAPIClient

__all__ = ["SwitchTubeAPIClient", "build_auth_headers"]

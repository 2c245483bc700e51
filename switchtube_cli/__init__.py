"""
switchtube-cli: download whole channels from SwitchTube.
"""

__version__ = "0.1.0"

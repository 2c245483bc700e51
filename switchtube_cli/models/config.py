"""
Pydantic model for application configuration.
Provides robust validation for all settings.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_BASE_URL = "https://tube.switch.ch"
DEFAULT_CHUNK_SIZE = 131072  # 128 KB
MIN_CHUNK_SIZE = 1024
MAX_CHUNK_SIZE = 16 * 1024 * 1024


class DownloadConfig(BaseModel):
    """A validated configuration model for the application."""

    model_config = ConfigDict(validate_assignment=True, str_strip_whitespace=True)

    # Authentication & API
    token: str
    base_url: str = DEFAULT_BASE_URL

    # Download Settings
    output_dir: str = "."
    show_progress: bool = True
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # Internal fields not loaded from INI file
    config_path: str = Field(..., repr=False)

    @field_validator("token")
    @classmethod
    def validate_token(cls, v: str) -> str:
        """Ensures a token was supplied at all."""
        if not v:
            raise ValueError(
                "No access token configured. Pass --token, set the TOKEN "
                "environment variable, or run 'switchtube-cli init <TOKEN>'."
            )
        return v

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Requires an http(s) URL and strips the trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Base URL must start with http:// or https://: {v}")
        return v.rstrip("/")

    @field_validator("output_dir")
    @classmethod
    def validate_output_dir(cls, v: str) -> str:
        if not v:
            raise ValueError("Output directory cannot be empty.")
        return v

    @field_validator("chunk_size")
    @classmethod
    def validate_chunk_size(cls, v: int) -> int:
        """Keeps the streaming chunk size within sane bounds."""
        if v < MIN_CHUNK_SIZE or v > MAX_CHUNK_SIZE:
            raise ValueError(
                f"Chunk size must be between {MIN_CHUNK_SIZE} and {MAX_CHUNK_SIZE} bytes."
            )
        return v

    @classmethod
    def get_ini_keys(cls) -> set[str]:
        """Returns a set of all keys that are expected in the INI file."""
        internal_fields = {"config_path"}
        return {key for key in cls.model_fields if key not in internal_fields}

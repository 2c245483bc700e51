"""
Builds the token authorization header used for every SwitchTube API request.
"""

import logging

from switchtube_cli.exceptions import AuthenticationError

log = logging.getLogger(__name__)

AUTH_SCHEME = "Token"


def _is_valid_header_value(value: str) -> bool:
    """HTTP header values must be latin-1 and free of control characters."""
    try:
        value.encode("latin-1")
    except UnicodeEncodeError:
        return False
    return not any(ord(ch) < 0x20 or ord(ch) == 0x7F for ch in value)


def build_auth_headers(token: str) -> dict[str, str]:
    """
    Returns the default headers carrying the user's access token.

    Args:
        token: Personal access token generated in the SwitchTube profile.

    Raises:
        AuthenticationError: If the token is empty or cannot be sent as a
            header value.
    """
    token = token.strip()
    if not token:
        raise AuthenticationError("The access token is empty.")

    header_value = f"{AUTH_SCHEME} {token}"
    if not _is_valid_header_value(header_value):
        raise AuthenticationError(
            "The access token contains characters that are not allowed in an "
            "HTTP header."
        )

    log.debug(f"Using token authentication ({len(token)} characters).")
    return {"Authorization": header_value}

"""
awschime/api/errors.py

Errors surfaced to the user. Every one of them ends the current command with
a single message and exit code 1.
"""

from __future__ import annotations

import json
from typing import Any, Optional

CONFIG_HINT = (
    "Run: awschime config set --access-key-id <id> --secret-access-key <secret>"
)


class ChimeError(Exception):
    """Base class for every error the CLI reports to the user.

    Attributes:
        message (str): The user-facing message.
        status (Optional[int]): HTTP status, when the error came from a response.
    """

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class AuthenticationError(ChimeError):
    def __init__(self, status: int = 403) -> None:
        super().__init__("Authentication failed. Check your AWS credentials.", status)


class NotFoundError(ChimeError):
    def __init__(self, status: int = 404) -> None:
        super().__init__("Resource not found.", status)


class RateLimitError(ChimeError):
    def __init__(self, status: int = 429) -> None:
        super().__init__("Rate limit exceeded. Please wait before retrying.", status)


class ApiError(ChimeError):
    """Any other error status. Keeps the server's own message."""

    def __init__(self, status: int, server_message: str) -> None:
        super().__init__(f"API Error ({status}): {server_message}", status)
        self.server_message = server_message


class NetworkError(ChimeError):
    def __init__(self, detail: Optional[str] = None) -> None:
        super().__init__(
            "No response from AWS Chime API. Check your internet connection."
        )
        self.detail = detail


class ConfigurationError(ChimeError):
    """The local config file exists but cannot be read or parsed."""


class ConfigurationMissingError(ChimeError):
    """Raised before any network call when credentials are incomplete."""

    def __init__(self) -> None:
        super().__init__(f"AWS credentials not configured. {CONFIG_HINT}")


def server_message(data: Any, text: str = "") -> str:
    """Pick the message out of an error body: ``message``, then ``Message``, then the JSON itself."""
    if isinstance(data, dict):
        for key in ("message", "Message"):
            value = data.get(key)
            if value:
                return str(value)
    if data is not None:
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return text


def error_for_status(status: int, data: Any, text: str = "") -> ChimeError:
    """Translate an HTTP error status into the matching ChimeError."""
    if status in (401, 403):
        return AuthenticationError(status)
    if status == 404:
        return NotFoundError(status)
    if status == 429:
        return RateLimitError(status)
    return ApiError(status, server_message(data, text))

"""
api/__init__.py

The async Chime resource client and the errors it raises.
"""

from awschime.api.client import AsyncChimeClient
from awschime.api.errors import (
    ApiError,
    AuthenticationError,
    ChimeError,
    ConfigurationError,
    ConfigurationMissingError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)

__all__ = [
    "AsyncChimeClient",
    "ApiError",
    "AuthenticationError",
    "ChimeError",
    "ConfigurationError",
    "ConfigurationMissingError",
    "NetworkError",
    "NotFoundError",
    "RateLimitError",
]

"""
models/api_keys/__init__.py

Aggregate imports so credential models can be accessed directly from this package.
"""

from awschime.models.api_keys.aws import AWSApiKey

__all__ = [
    "AWSApiKey",
]

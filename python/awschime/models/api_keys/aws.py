"""
awschime/models/api_keys/aws.py
A Pydantic model representing AWS API credentials.

Instances are passed explicitly into every signing and client call.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class AWSApiKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    access_key_id: str
    # Kept out of repr() so secrets never end up in tracebacks or logs.
    secret_access_key: str = Field(repr=False)
    session_token: Optional[str] = Field(default=None, repr=False)

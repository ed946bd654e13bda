"""
awschime/models/config.py

The on-disk CLI configuration. Field aliases are the camelCase keys used in
the JSON file and accepted by ``awschime config get``.
"""

from __future__ import annotations

from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

# snake_case spellings accepted on the command line, mapped to file keys.
CONFIG_KEY_ALIASES: Dict[str, str] = {
    "access_key_id": "accessKeyId",
    "secret_access_key": "secretAccessKey",
    "session_token": "sessionToken",
}


class CLIConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    access_key_id: Optional[str] = Field(default=None, alias="accessKeyId")
    secret_access_key: Optional[str] = Field(
        default=None, alias="secretAccessKey", repr=False
    )
    session_token: Optional[str] = Field(default=None, alias="sessionToken", repr=False)

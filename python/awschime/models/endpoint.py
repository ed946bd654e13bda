from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ChimeEndpoint(BaseModel):
    """Where requests go and which signing scope they are signed for.

    The defaults are the fixed us-east-1 Chime deployment. Tests override
    ``base_url`` to point at a local server while keeping the signing host.
    """

    model_config = ConfigDict(frozen=True)

    host: str = "chime.us-east-1.amazonaws.com"
    region: str = "us-east-1"
    service: str = "chime"
    base_url: str = Field(default="https://chime.us-east-1.amazonaws.com")
    verify_ssl: bool = True

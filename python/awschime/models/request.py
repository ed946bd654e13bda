"""
awschime/models/request.py

Pydantic models for an outgoing API request before and after signing.
"""

from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "DELETE"]


class RequestDescriptor(BaseModel):
    """
    Everything the signer needs to know about one API call.

    Attributes:
        method: HTTP verb.
        path: Request path, identifiers already percent-encoded.
        query: Optional query parameters, kept in insertion order.
        body: Optional JSON body. ``None`` means no body at all.
    """

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    query: Optional[Dict[str, str]] = None
    body: Optional[Dict[str, Any]] = None


class SignedRequest(BaseModel):
    """
    The result of signing a RequestDescriptor.

    ``headers`` is what goes on the wire; ``body`` is the exact string whose
    hash was signed. ``canonical_request`` and ``string_to_sign`` are kept for
    diagnostics.
    """

    model_config = ConfigDict(frozen=True)

    method: HttpMethod
    path: str
    query_string: str = ""
    headers: Dict[str, str] = Field(default_factory=dict)
    body: str = ""
    canonical_request: str
    string_to_sign: str

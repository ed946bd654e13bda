"""
awschime/cli/common.py

Pieces shared by every command group: the per-invocation context, the client
factory and the ``--json`` flag.
"""

from __future__ import annotations

import argparse
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Literal

from awschime.api.client import AsyncChimeClient
from awschime.cli.render import Renderer
from awschime.models.endpoint import ChimeEndpoint
from awschime.secrets.config_store import ConfigStore

DetailKind = Literal["meeting", "attendee", "channel"]

# Get/create responses wrap the resource in one top-level field.
DETAIL_RESPONSE_FIELDS: Dict[DetailKind, str] = {
    "meeting": "Meeting",
    "attendee": "Attendee",
    "channel": "Channel",
}


@dataclass
class CLIContext:
    """What a command handler needs besides its parsed arguments."""

    store: ConfigStore
    ui: Renderer = field(default_factory=Renderer)
    endpoint: ChimeEndpoint = field(default_factory=ChimeEndpoint)


Handler = Callable[[argparse.Namespace, CLIContext], Awaitable[None]]


@asynccontextmanager
async def open_client(ctx: CLIContext) -> AsyncIterator[AsyncChimeClient]:
    """Open a client with the stored credentials.

    Raises:
        ConfigurationMissingError: Before any network call, if credentials are unset.
    """
    credentials = ctx.store.credentials()
    async with AsyncChimeClient(credentials, endpoint=ctx.endpoint) as client:
        yield client


def unwrap_detail(kind: DetailKind, result: Any) -> Any:
    """Return ``result[<Field>]`` when present, else ``result`` itself."""
    if isinstance(result, dict):
        inner = result.get(DETAIL_RESPONSE_FIELDS[kind])
        if inner is not None:
            return inner
    return result


def add_json_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Output raw JSON instead of a table.",
    )

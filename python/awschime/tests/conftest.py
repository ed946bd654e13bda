"""
Shared fixtures: a local aiohttp application standing in for the Chime API.

The fake records every request it receives (raw path, raw query, headers,
body) and answers from a table of scripted responses keyed by method and raw
path. Unscripted requests get ``200 {}``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Tuple

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from awschime.models.api_keys.aws import AWSApiKey
from awschime.models.endpoint import ChimeEndpoint


@dataclass
class RecordedRequest:
    method: str
    raw_path: str
    raw_query: str
    headers: Dict[str, str]
    body: str


@dataclass
class FakeChime:
    base_url: str = ""
    requests: List[RecordedRequest] = field(default_factory=list)
    responses: Dict[Tuple[str, str], Tuple[int, Any]] = field(default_factory=dict)

    def respond(self, method: str, raw_path: str, status: int, body: Any) -> None:
        """Script a response. ``body`` is JSON-encoded unless it is a str."""
        self.responses[(method, raw_path)] = (status, body)

    async def handle(self, request: web.Request) -> web.Response:
        raw_path = request.rel_url.raw_path
        self.requests.append(
            RecordedRequest(
                method=request.method,
                raw_path=raw_path,
                raw_query=request.rel_url.raw_query_string,
                headers={k.lower(): v for k, v in request.headers.items()},
                body=await request.text(),
            )
        )
        status, body = self.responses.get((request.method, raw_path), (200, {}))
        text = body if isinstance(body, str) else json.dumps(body)
        return web.Response(status=status, text=text, content_type="application/json")

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]

    @property
    def endpoint(self) -> ChimeEndpoint:
        return ChimeEndpoint(base_url=self.base_url)


@pytest_asyncio.fixture
async def chime_api() -> AsyncIterator[FakeChime]:
    fake = FakeChime()
    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", fake.handle)
    async with TestServer(app) as server:
        fake.base_url = f"http://{server.host}:{server.port}"
        yield fake


@pytest.fixture
def credentials() -> AWSApiKey:
    return AWSApiKey(access_key_id="AKIDEXAMPLE", secret_access_key="secret")

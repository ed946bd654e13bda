"""
awschime/tests/test_client.py

AsyncChimeClient against a local aiohttp server: paths, bodies, list
unwrapping, error translation, and a server-side check of the signature.
"""

from __future__ import annotations

import hashlib
import hmac
import json
import socket

import pytest

from awschime.api.client import AsyncChimeClient, quote_segment
from awschime.api.errors import (
    ApiError,
    AuthenticationError,
    ChimeError,
    NetworkError,
    NotFoundError,
    RateLimitError,
)
from awschime.models.api_keys.aws import AWSApiKey
from awschime.models.endpoint import ChimeEndpoint
from awschime.signing import sigv4

EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"


def test_quote_segment_matches_encode_uri_component() -> None:
    assert quote_segment("a/b") == "a%2Fb"
    assert quote_segment("arn:aws:chime:us-east-1:123:channel/x y") == (
        "arn%3Aaws%3Achime%3Aus-east-1%3A123%3Achannel%2Fx%20y"
    )
    assert quote_segment("A-z_0.9!~*'()") == "A-z_0.9!~*'()"


@pytest.mark.asyncio
async def test_list_meetings_unwraps_field(chime_api, credentials) -> None:
    chime_api.respond("GET", "/meetings", 200, {"Meetings": [{"MeetingId": "m1"}]})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        assert await client.list_meetings() == [{"MeetingId": "m1"}]


@pytest.mark.asyncio
async def test_list_meetings_empty_object_is_empty_list(chime_api, credentials) -> None:
    chime_api.respond("GET", "/meetings", 200, {})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        assert await client.list_meetings() == []


@pytest.mark.asyncio
async def test_list_meetings_sends_signed_get(chime_api, credentials) -> None:
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        await client.list_meetings()

    req = chime_api.last
    assert req.method == "GET"
    assert req.raw_path == "/meetings"
    assert req.raw_query == ""
    assert req.body == ""
    assert req.headers["host"] == "chime.us-east-1.amazonaws.com"
    assert req.headers["content-type"] == "application/json"
    assert req.headers["x-amz-content-sha256"] == EMPTY_SHA256
    assert req.headers["authorization"].startswith(
        "AWS4-HMAC-SHA256 Credential=AKIDEXAMPLE/"
    )
    assert "x-amz-security-token" not in req.headers


@pytest.mark.asyncio
async def test_signature_verifies_on_server_side(chime_api) -> None:
    creds = AWSApiKey(
        access_key_id="AKIDEXAMPLE", secret_access_key="secret", session_token="tok"
    )
    async with AsyncChimeClient(creds, endpoint=chime_api.endpoint) as client:
        await client.create_attendee("m/1", external_user_id="alice")

    req = chime_api.last
    auth = req.headers["authorization"]
    signed_names = auth.split("SignedHeaders=")[1].split(",")[0].split(";")
    assert signed_names == [
        "content-type",
        "host",
        "x-amz-content-sha256",
        "x-amz-date",
        "x-amz-security-token",
    ]

    canonical_headers, signed_headers = sigv4.canonicalize_headers(
        {name: req.headers[name] for name in signed_names}
    )
    canonical_request = sigv4.build_canonical_request(
        req.method,
        req.raw_path,
        req.raw_query,
        canonical_headers,
        signed_headers,
        hashlib.sha256(req.body.encode()).hexdigest(),
    )
    amz_date = req.headers["x-amz-date"]
    scope = sigv4.credential_scope(amz_date[:8], "us-east-1", "chime")
    string_to_sign = sigv4.build_string_to_sign(amz_date, scope, canonical_request)
    key = sigv4.derive_signing_key("secret", amz_date[:8], "us-east-1", "chime")
    expected = hmac.new(key, string_to_sign.encode(), hashlib.sha256).hexdigest()

    assert auth.endswith(f"Signature={expected}")
    assert req.headers["x-amz-content-sha256"] == hashlib.sha256(
        req.body.encode()
    ).hexdigest()


@pytest.mark.asyncio
async def test_get_meeting_encodes_reserved_characters(chime_api, credentials) -> None:
    chime_api.respond("GET", "/meetings/a%2Fb", 200, {"Meeting": {"MeetingId": "a/b"}})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        result = await client.get_meeting("a/b")

    assert chime_api.last.raw_path == "/meetings/a%2Fb"
    assert result == {"Meeting": {"MeetingId": "a/b"}}


@pytest.mark.asyncio
async def test_get_meeting_404_raises_not_found(chime_api, credentials) -> None:
    chime_api.respond("GET", "/meetings/missing", 404, {"Message": "nope"})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        with pytest.raises(NotFoundError) as exc_info:
            await client.get_meeting("missing")
    assert exc_info.value.status == 404
    assert not isinstance(exc_info.value, ApiError)


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,error_cls",
    [
        (401, AuthenticationError),
        (403, AuthenticationError),
        (404, NotFoundError),
        (429, RateLimitError),
    ],
)
async def test_status_mapping(chime_api, credentials, status, error_cls) -> None:
    chime_api.respond("GET", "/meetings", status, {"message": "x"})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        with pytest.raises(error_cls) as exc_info:
            await client.list_meetings()
    assert exc_info.value.status == status


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body,expected_message",
    [
        ({"message": "lower"}, "lower"),
        ({"Message": "upper"}, "upper"),
        ({"Code": "BadRequest"}, '{"Code":"BadRequest"}'),
        ({"Detail": "é"}, '{"Detail":"é"}'),
        ("plain failure", "plain failure"),
    ],
)
async def test_other_status_is_api_error(
    chime_api, credentials, body, expected_message
) -> None:
    chime_api.respond("POST", "/meetings", 400, body)
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.create_meeting()
    err = exc_info.value
    assert err.status == 400
    assert err.server_message == expected_message
    assert err.message == f"API Error (400): {expected_message}"


@pytest.mark.asyncio
async def test_server_error_is_api_error(chime_api, credentials) -> None:
    chime_api.respond("DELETE", "/channels/c1", 503, {"Message": "unavailable"})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        with pytest.raises(ApiError) as exc_info:
            await client.delete_channel("c1")
    assert exc_info.value.status == 503


@pytest.mark.asyncio
async def test_connection_refused_is_network_error(credentials) -> None:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    endpoint = ChimeEndpoint(base_url=f"http://127.0.0.1:{port}")

    async with AsyncChimeClient(credentials, endpoint=endpoint) as client:
        with pytest.raises(NetworkError) as exc_info:
            await client.list_meetings()
    assert isinstance(exc_info.value, ChimeError)
    assert "No response from AWS Chime API" in exc_info.value.message


@pytest.mark.asyncio
async def test_create_meeting_body(chime_api, credentials) -> None:
    chime_api.respond("POST", "/meetings", 200, {"Meeting": {"MeetingId": "m1"}})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        result = await client.create_meeting(
            client_request_token="tok-1",
            external_meeting_id="ext",
            media_region="eu-west-1",
        )

    assert result == {"Meeting": {"MeetingId": "m1"}}
    body = json.loads(chime_api.last.body)
    assert body == {
        "ClientRequestToken": "tok-1",
        "MediaRegion": "eu-west-1",
        "ExternalMeetingId": "ext",
    }
    assert "MeetingHostId" not in body


@pytest.mark.asyncio
async def test_create_meeting_generates_request_token(chime_api, credentials) -> None:
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        await client.create_meeting()
    body = json.loads(chime_api.last.body)
    assert body["MediaRegion"] == "us-east-1"
    assert len(body["ClientRequestToken"]) == 36


@pytest.mark.asyncio
async def test_delete_meeting_empty_body(chime_api, credentials) -> None:
    chime_api.respond("DELETE", "/meetings/m1", 200, "")
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        assert await client.delete_meeting("m1") == {}
    assert chime_api.last.method == "DELETE"


@pytest.mark.asyncio
async def test_attendee_operations(chime_api, credentials) -> None:
    chime_api.respond(
        "GET", "/meetings/m1/attendees", 200, {"Attendees": [{"AttendeeId": "a1"}]}
    )
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        assert await client.list_attendees("m1") == [{"AttendeeId": "a1"}]
        await client.get_attendee("m1", "a/1")
        assert chime_api.last.raw_path == "/meetings/m1/attendees/a%2F1"
        await client.create_attendee("m1", external_user_id="bob")
        assert chime_api.last.method == "POST"
        assert json.loads(chime_api.last.body) == {"ExternalUserId": "bob"}
        await client.delete_attendee("m1", "a1")
        assert chime_api.last.method == "DELETE"
        assert chime_api.last.raw_path == "/meetings/m1/attendees/a1"


@pytest.mark.asyncio
async def test_list_channels_query(chime_api, credentials) -> None:
    chime_api.respond("GET", "/channels", 200, {"Channels": [{"Name": "general"}]})
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        channels = await client.list_channels(
            app_instance_arn="arn:aws:chime:us-east-1:1:app-instance/x", max_results=5
        )

    assert channels == [{"Name": "general"}]
    assert chime_api.last.raw_query == (
        "app_instance_arn=arn%3Aaws%3Achime%3Aus-east-1%3A1%3Aapp-instance%2Fx"
        "&max_results=5"
    )


@pytest.mark.asyncio
async def test_list_channels_default_query(chime_api, credentials) -> None:
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        assert await client.list_channels() == []
    assert chime_api.last.raw_query == "max_results=20"


@pytest.mark.asyncio
async def test_channel_operations(chime_api, credentials) -> None:
    arn = "arn:aws:chime:us-east-1:1:app-instance/x/channel/y"
    encoded = quote_segment(arn)
    async with AsyncChimeClient(credentials, endpoint=chime_api.endpoint) as client:
        await client.get_channel(arn)
        assert chime_api.last.raw_path == f"/channels/{encoded}"
        await client.create_channel(
            app_instance_arn="arn:app", name="general", client_request_token="t"
        )
        assert json.loads(chime_api.last.body) == {
            "AppInstanceArn": "arn:app",
            "Name": "general",
            "Mode": "UNRESTRICTED",
            "Privacy": "PUBLIC",
            "ClientRequestToken": "t",
        }
        await client.delete_channel(arn)
        assert chime_api.last.method == "DELETE"
        assert chime_api.last.raw_path == f"/channels/{encoded}"

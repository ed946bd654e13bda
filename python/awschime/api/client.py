"""
An asynchronous Amazon Chime REST client for meetings, attendees and channels.

Every call is signed with SigV4 (see awschime.signing.sigv4), performs exactly
one HTTP round trip, and maps error statuses onto awschime.api.errors. There is
no retry and no caching: failures surface to the caller immediately.
"""

from __future__ import annotations

import asyncio
import json
import logging
import uuid
from typing import Any, Dict, List, Literal, Optional, Type
from urllib.parse import quote

import aiohttp
from yarl import URL

from awschime.api.errors import NetworkError, error_for_status
from awschime.models.api_keys.aws import AWSApiKey
from awschime.models.endpoint import ChimeEndpoint
from awschime.models.request import HttpMethod, RequestDescriptor
from awschime.models.validator import validate_type
from awschime.signing.sigv4 import sign_request

logger = logging.getLogger(__name__)

ListOperation = Literal["list_meetings", "list_attendees", "list_channels"]

# The top-level field each list response carries its items in.
LIST_RESPONSE_FIELDS: Dict[ListOperation, str] = {
    "list_meetings": "Meetings",
    "list_attendees": "Attendees",
    "list_channels": "Channels",
}


def quote_segment(value: str) -> str:
    """Percent-encode one path segment the way encodeURIComponent does ("/" -> "%2F")."""
    return quote(value, safe="!~*'()")


class AsyncChimeClient:
    """An asynchronous client for the Chime meeting, attendee and channel APIs.

    Use as an async context manager. If an ``aiohttp.ClientSession`` is passed
    in, it is borrowed and left open on exit; otherwise the client owns one.
    """

    def __init__(
        self,
        credentials: AWSApiKey,
        endpoint: Optional[ChimeEndpoint] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ) -> None:
        """
        Initialize the AsyncChimeClient.

        Args:
            credentials (AWSApiKey): Used to sign every request.
            endpoint (ChimeEndpoint, optional): Host, region and base URL.
            session (aiohttp.ClientSession, optional): A session to borrow.
        """
        self._credentials = credentials
        self._endpoint = endpoint or ChimeEndpoint()
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> AsyncChimeClient:
        await self.ensure_session()
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[Any],
    ) -> None:
        """Close the aiohttp session if this client created it."""
        if self._session and self._owns_session:
            await self._session.close()
            self._session = None

    async def ensure_session(self) -> aiohttp.ClientSession:
        """Ensure an aiohttp session is available, creating one if needed."""
        if self._session is None:
            self._session = aiohttp.ClientSession()
            self._owns_session = True
        return self._session

    async def request(
        self,
        method: HttpMethod,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, str]] = None,
    ) -> Any:
        """Sign and send one request, returning the decoded JSON body.

        An empty success body decodes to ``{}``.

        Raises:
            AuthenticationError, NotFoundError, RateLimitError, ApiError:
                For the corresponding error statuses.
            NetworkError: If no response was received.
        """
        descriptor = RequestDescriptor(method=method, path=path, query=query, body=body)
        signed = sign_request(descriptor, self._credentials, endpoint=self._endpoint)

        url = self._endpoint.base_url + signed.path
        if signed.query_string:
            url = f"{url}?{signed.query_string}"

        session = await self.ensure_session()
        logger.debug("%s %s", method, url)
        try:
            async with session.request(
                method,
                # Send the path and query exactly as signed.
                URL(url, encoded=True),
                headers=signed.headers,
                data=signed.body.encode("utf-8") if signed.body else None,
                ssl=self._endpoint.verify_ssl,
            ) as resp:
                status = resp.status
                text = await resp.text()
        except (aiohttp.ClientConnectionError, asyncio.TimeoutError) as exc:
            logger.debug("%s %s failed without a response: %r", method, url, exc)
            raise NetworkError(str(exc)) from exc

        logger.debug("%s %s -> %d", method, url, status)
        data = _decode_json(text)
        if status >= 400:
            raise error_for_status(status, data, text)
        if data is None:
            return {} if not text.strip() else text
        return data

    async def _list(
        self,
        operation: ListOperation,
        path: str,
        query: Optional[Dict[str, str]] = None,
    ) -> List[Dict[str, Any]]:
        data = await self.request("GET", path, query=query)
        field = LIST_RESPONSE_FIELDS[operation]
        items = data.get(field) if isinstance(data, dict) else None
        return validate_type(items or [], List[Dict[str, Any]])

    #
    # Meetings
    #
    async def list_meetings(self) -> List[Dict[str, Any]]:
        return await self._list("list_meetings", "/meetings")

    async def get_meeting(self, meeting_id: str) -> Any:
        return await self.request("GET", f"/meetings/{quote_segment(meeting_id)}")

    async def create_meeting(
        self,
        *,
        client_request_token: Optional[str] = None,
        external_meeting_id: Optional[str] = None,
        media_region: str = "us-east-1",
        meeting_host_id: Optional[str] = None,
    ) -> Any:
        """Create a meeting. A random ClientRequestToken is generated if none is given."""
        body: Dict[str, Any] = {
            "ClientRequestToken": client_request_token or str(uuid.uuid4()),
            "MediaRegion": media_region,
        }
        if external_meeting_id:
            body["ExternalMeetingId"] = external_meeting_id
        if meeting_host_id:
            body["MeetingHostId"] = meeting_host_id
        return await self.request("POST", "/meetings", body=body)

    async def delete_meeting(self, meeting_id: str) -> Any:
        return await self.request("DELETE", f"/meetings/{quote_segment(meeting_id)}")

    #
    # Attendees
    #
    async def list_attendees(self, meeting_id: str) -> List[Dict[str, Any]]:
        return await self._list(
            "list_attendees", f"/meetings/{quote_segment(meeting_id)}/attendees"
        )

    async def get_attendee(self, meeting_id: str, attendee_id: str) -> Any:
        return await self.request(
            "GET",
            f"/meetings/{quote_segment(meeting_id)}/attendees/{quote_segment(attendee_id)}",
        )

    async def create_attendee(self, meeting_id: str, *, external_user_id: str) -> Any:
        return await self.request(
            "POST",
            f"/meetings/{quote_segment(meeting_id)}/attendees",
            body={"ExternalUserId": external_user_id},
        )

    async def delete_attendee(self, meeting_id: str, attendee_id: str) -> Any:
        return await self.request(
            "DELETE",
            f"/meetings/{quote_segment(meeting_id)}/attendees/{quote_segment(attendee_id)}",
        )

    #
    # Channels (Chime SDK Messaging)
    #
    async def list_channels(
        self,
        *,
        app_instance_arn: Optional[str] = None,
        max_results: Optional[int] = 20,
    ) -> List[Dict[str, Any]]:
        query: Dict[str, str] = {}
        if app_instance_arn:
            query["app_instance_arn"] = app_instance_arn
        if max_results:
            query["max_results"] = str(max_results)
        return await self._list("list_channels", "/channels", query=query)

    async def get_channel(self, channel_arn: str) -> Any:
        return await self.request("GET", f"/channels/{quote_segment(channel_arn)}")

    async def create_channel(
        self,
        *,
        app_instance_arn: str,
        name: str,
        mode: str = "UNRESTRICTED",
        privacy: str = "PUBLIC",
        client_request_token: Optional[str] = None,
    ) -> Any:
        body: Dict[str, Any] = {
            "AppInstanceArn": app_instance_arn,
            "Name": name,
            "Mode": mode,
            "Privacy": privacy,
            "ClientRequestToken": client_request_token or str(uuid.uuid4()),
        }
        return await self.request("POST", "/channels", body=body)

    async def delete_channel(self, channel_arn: str) -> Any:
        return await self.request("DELETE", f"/channels/{quote_segment(channel_arn)}")


def _decode_json(text: str) -> Any:
    """Return the decoded body, or None if it is empty or not JSON."""
    if not text.strip():
        return None
    try:
        return json.loads(text)
    except ValueError:
        return None

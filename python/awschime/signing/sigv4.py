"""
awschime/signing/sigv4.py

AWS Signature Version 4 signing for Chime REST calls.

The output must match what the service computes byte for byte, so every step
is a small pure function:

  1) timestamp and date stamp
  2) body serialization and hash
  3) header set, sorted into canonical headers and the signed-header list
  4) canonical request and string to sign
  5) signing key derivation and the final signature
"""

from __future__ import annotations

import hashlib
import hmac
import json
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Tuple
from urllib.parse import urlencode

from awschime.models.api_keys.aws import AWSApiKey
from awschime.models.endpoint import ChimeEndpoint
from awschime.models.request import RequestDescriptor, SignedRequest

ALGORITHM = "AWS4-HMAC-SHA256"
TERMINATOR = "aws4_request"
KEY_PREFIX = "AWS4"
CONTENT_TYPE = "application/json"


def amz_timestamp(now: Optional[datetime] = None) -> Tuple[str, str]:
    """Return ``(amz_date, date_stamp)``, e.g. ``("20240102T030405Z", "20240102")``."""
    moment = now if now is not None else datetime.now(timezone.utc)
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    amz_date = moment.strftime("%Y%m%dT%H%M%SZ")
    return amz_date, amz_date[:8]


def serialize_body(body: Optional[Dict[str, Any]]) -> str:
    """Compact JSON with key order preserved; the empty string when there is no body."""
    if body is None:
        return ""
    return json.dumps(body, separators=(",", ":"), ensure_ascii=False)


def encode_query(query: Optional[Mapping[str, str]]) -> str:
    """Form-encode query parameters in insertion order; ``""`` when there are none."""
    if not query:
        return ""
    return urlencode(list(query.items()))


def sha256_hex(data: str) -> str:
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def derive_signing_key(
    secret_access_key: str, date_stamp: str, region: str, service: str
) -> bytes:
    """HMAC chain: "AWS4"+secret -> date -> region -> service -> "aws4_request"."""
    k_date = _hmac((KEY_PREFIX + secret_access_key).encode("utf-8"), date_stamp)
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, TERMINATOR)


def canonicalize_headers(headers: Mapping[str, str]) -> Tuple[str, str]:
    """
    Return ``(canonical_headers, signed_headers)``.

    Header names are sorted lexicographically regardless of the order they
    were supplied in. Each canonical line is ``name:value\\n``.
    """
    names = sorted(headers)
    canonical = "".join(f"{name}:{headers[name]}\n" for name in names)
    return canonical, ";".join(names)


def build_canonical_request(
    method: str,
    path: str,
    query_string: str,
    canonical_headers: str,
    signed_headers: str,
    payload_hash: str,
) -> str:
    return "\n".join(
        [method, path, query_string or "", canonical_headers, signed_headers, payload_hash]
    )


def credential_scope(date_stamp: str, region: str, service: str) -> str:
    return f"{date_stamp}/{region}/{service}/{TERMINATOR}"


def build_string_to_sign(amz_date: str, scope: str, canonical_request: str) -> str:
    return "\n".join([ALGORITHM, amz_date, scope, sha256_hex(canonical_request)])


def sign_request(
    descriptor: RequestDescriptor,
    credentials: AWSApiKey,
    *,
    endpoint: ChimeEndpoint,
    now: Optional[datetime] = None,
) -> SignedRequest:
    """
    Sign one request and return the headers to send with it.

    Args:
        descriptor: Method, path, query and body of the call.
        credentials: Access key id, secret key and optional session token.
        endpoint: Supplies the host header and the region/service scope.
        now: Fixes the request timestamp; defaults to the current UTC time.

    Returns:
        SignedRequest: Final headers (including ``authorization``), the query
        string and the serialized body exactly as they were signed.
    """
    amz_date, date_stamp = amz_timestamp(now)
    query_string = encode_query(descriptor.query)

    body_str = serialize_body(descriptor.body)
    payload_hash = sha256_hex(body_str)

    headers: Dict[str, str] = {
        "content-type": CONTENT_TYPE,
        "host": endpoint.host,
        "x-amz-date": amz_date,
        "x-amz-content-sha256": payload_hash,
    }
    if credentials.session_token:
        headers["x-amz-security-token"] = credentials.session_token

    canonical_headers, signed_headers = canonicalize_headers(headers)
    canonical_request = build_canonical_request(
        descriptor.method,
        descriptor.path,
        query_string,
        canonical_headers,
        signed_headers,
        payload_hash,
    )

    scope = credential_scope(date_stamp, endpoint.region, endpoint.service)
    string_to_sign = build_string_to_sign(amz_date, scope, canonical_request)

    signing_key = derive_signing_key(
        credentials.secret_access_key, date_stamp, endpoint.region, endpoint.service
    )
    signature = hmac.new(
        signing_key, string_to_sign.encode("utf-8"), hashlib.sha256
    ).hexdigest()

    authorization = (
        f"{ALGORITHM} Credential={credentials.access_key_id}/{scope}, "
        f"SignedHeaders={signed_headers}, Signature={signature}"
    )

    return SignedRequest(
        method=descriptor.method,
        path=descriptor.path,
        query_string=query_string,
        headers={**headers, "authorization": authorization},
        body=body_str,
        canonical_request=canonical_request,
        string_to_sign=string_to_sign,
    )

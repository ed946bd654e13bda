#!/usr/bin/env python3
"""
scripts/sign_request.py

Sign a Chime API request and print the equivalent curl command without
sending anything. Useful for comparing signatures against another client.

Credentials come from AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY /
AWS_SESSION_TOKEN if set, otherwise from the awschime config file.

Usage example:
  python scripts/sign_request.py GET /meetings
  python scripts/sign_request.py POST /meetings --body '{"MediaRegion": "us-east-1"}'
  python scripts/sign_request.py GET /channels --query max_results=5
"""

from __future__ import annotations

import argparse
import asyncio
import json
import os
import shlex
import sys
from typing import Dict, List

from awschime.api.errors import ChimeError
from awschime.models.api_keys.aws import AWSApiKey
from awschime.models.endpoint import ChimeEndpoint
from awschime.models.request import RequestDescriptor, SignedRequest
from awschime.secrets.config_store import ConfigStore
from awschime.signing.sigv4 import sign_request


async def _load_credentials(config_file: str | None) -> AWSApiKey:
    akid = os.environ.get("AWS_ACCESS_KEY_ID")
    secret = os.environ.get("AWS_SECRET_ACCESS_KEY")
    if akid and secret:
        return AWSApiKey(
            access_key_id=akid,
            secret_access_key=secret,
            session_token=os.environ.get("AWS_SESSION_TOKEN") or None,
        )
    store = await ConfigStore(config_file).load()
    return store.credentials()


def _parse_query(pairs: List[str]) -> Dict[str, str]:
    query: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep:
            raise ValueError(f"Query parameter must be key=value, got '{pair}'")
        query[key] = value
    return query


def to_curl(signed: SignedRequest, endpoint: ChimeEndpoint) -> str:
    url = endpoint.base_url + signed.path
    if signed.query_string:
        url = f"{url}?{signed.query_string}"
    parts = ["curl", "-X", signed.method]
    for name, value in signed.headers.items():
        parts += ["-H", f"{name}: {value}"]
    if signed.body:
        parts += ["-d", signed.body]
    parts.append(url)
    return " ".join(shlex.quote(p) for p in parts)


async def _run(args: argparse.Namespace) -> None:
    credentials = await _load_credentials(args.config_file)
    descriptor = RequestDescriptor(
        method=args.method,
        path=args.path,
        query=_parse_query(args.query) or None,
        body=json.loads(args.body) if args.body else None,
    )
    endpoint = ChimeEndpoint()
    signed = sign_request(descriptor, credentials, endpoint=endpoint)
    if args.show_canonical:
        print("# canonical request", file=sys.stderr)
        print(signed.canonical_request, file=sys.stderr)
        print("# string to sign", file=sys.stderr)
        print(signed.string_to_sign, file=sys.stderr)
    print(to_curl(signed, endpoint))


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Print a SigV4-signed curl command for a Chime API call."
    )
    parser.add_argument("method", choices=["GET", "POST", "DELETE"])
    parser.add_argument("path", help="Request path, e.g. /meetings")
    parser.add_argument(
        "--query", action="append", default=[], help="key=value (repeatable)."
    )
    parser.add_argument("--body", default=None, help="JSON body.")
    parser.add_argument("--config-file", default=None)
    parser.add_argument(
        "--show-canonical",
        action="store_true",
        default=False,
        help="Also print the canonical request and string to sign on stderr.",
    )
    args = parser.parse_args()

    try:
        asyncio.run(_run(args))
    except (ChimeError, ValueError) as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()

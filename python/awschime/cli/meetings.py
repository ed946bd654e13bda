"""
awschime/cli/meetings.py

``awschime meetings list|get|create|delete``
"""

from __future__ import annotations

import argparse
from typing import Any

from awschime.cli.common import CLIContext, add_json_flag, open_client, unwrap_detail
from awschime.cli.render import Column, arn_tail

MEETING_COLUMNS = [
    Column("MeetingId", "Meeting ID"),
    Column("ExternalMeetingId", "External ID"),
    Column("MediaRegion", "Region"),
    Column("MeetingArn", "ARN", arn_tail),
]


async def run_list(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Fetching meetings..."):
            meetings = await client.list_meetings()

    if args.json:
        ctx.ui.json(meetings)
        return
    ctx.ui.table(meetings, MEETING_COLUMNS)


async def run_get(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Fetching meeting..."):
            result = await client.get_meeting(args.meeting_id)
    meeting: Any = unwrap_detail("meeting", result)

    if args.json or not isinstance(meeting, dict):
        ctx.ui.json(meeting)
        return

    fields = [
        ("Meeting ID", meeting.get("MeetingId")),
        ("External ID", meeting.get("ExternalMeetingId")),
        ("Region", meeting.get("MediaRegion")),
        ("ARN", meeting.get("MeetingArn")),
    ]
    placement = meeting.get("MediaPlacement")
    if placement:
        fields += [
            ("Audio Host", placement.get("AudioHostUrl")),
            ("Signaling", placement.get("SignalingUrl")),
        ]
    ctx.ui.details("Meeting Details", fields)


async def run_create(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Creating meeting..."):
            result = await client.create_meeting(
                external_meeting_id=args.external_id,
                media_region=args.region,
                meeting_host_id=args.host_id,
            )
    meeting: Any = unwrap_detail("meeting", result)

    if args.json or not isinstance(meeting, dict):
        ctx.ui.json(meeting)
        return

    ctx.ui.success("Meeting created")
    fields = [
        ("Meeting ID", meeting.get("MeetingId")),
        ("Region", meeting.get("MediaRegion")),
    ]
    audio_host = (meeting.get("MediaPlacement") or {}).get("AudioHostUrl")
    if audio_host:
        fields.append(("Audio Host", audio_host))
    ctx.ui.details("Meeting", fields)


async def run_delete(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner(f"Deleting meeting {args.meeting_id}..."):
            await client.delete_meeting(args.meeting_id)
    ctx.ui.success(f"Meeting '{args.meeting_id}' deleted")


def register(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    group = subparsers.add_parser("meetings", help="Manage Chime meetings.")
    commands = group.add_subparsers(
        dest="action", required=True, parser_class=type(group)
    )

    list_parser = commands.add_parser("list", help="List active meetings.")
    add_json_flag(list_parser)
    list_parser.set_defaults(func=run_list)

    get_parser = commands.add_parser("get", help="Get details of a specific meeting.")
    get_parser.add_argument("meeting_id", metavar="meeting-id")
    add_json_flag(get_parser)
    get_parser.set_defaults(func=run_get)

    create_parser = commands.add_parser("create", help="Create a new meeting.")
    create_parser.add_argument(
        "--external-id", help="External meeting ID for your system."
    )
    create_parser.add_argument(
        "--region",
        default="us-east-1",
        help="Media region (us-east-1, us-west-2, eu-west-1, etc.). (default: us-east-1)",
    )
    create_parser.add_argument("--host-id", help="Meeting host ID.")
    add_json_flag(create_parser)
    create_parser.set_defaults(func=run_create)

    delete_parser = commands.add_parser("delete", help="Delete a meeting.")
    delete_parser.add_argument("meeting_id", metavar="meeting-id")
    delete_parser.set_defaults(func=run_delete)

"""
awschime/cli/attendees.py

``awschime attendees list|get|create|delete``, always scoped to a meeting.
"""

from __future__ import annotations

import argparse
from typing import Any

from awschime.cli.common import CLIContext, add_json_flag, open_client, unwrap_detail
from awschime.cli.render import Column, abbreviate

ATTENDEE_COLUMNS = [
    Column("AttendeeId", "Attendee ID"),
    Column("ExternalUserId", "External User ID"),
    Column("JoinToken", "Join Token", abbreviate(20)),
]

join_token = abbreviate(30)


async def run_list(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Fetching attendees..."):
            attendees = await client.list_attendees(args.meeting_id)

    if args.json:
        ctx.ui.json(attendees)
        return
    ctx.ui.table(attendees, ATTENDEE_COLUMNS)


async def run_get(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Fetching attendee..."):
            result = await client.get_attendee(args.meeting_id, args.attendee_id)
    attendee: Any = unwrap_detail("attendee", result)

    if args.json or not isinstance(attendee, dict):
        ctx.ui.json(attendee)
        return
    ctx.ui.details(
        "Attendee Details",
        [
            ("Attendee ID", attendee.get("AttendeeId")),
            ("External User ID", attendee.get("ExternalUserId")),
            ("Join Token", join_token(attendee.get("JoinToken"))),
        ],
    )


async def run_create(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Creating attendee..."):
            result = await client.create_attendee(
                args.meeting_id, external_user_id=args.user_id
            )
    attendee: Any = unwrap_detail("attendee", result)

    if args.json or not isinstance(attendee, dict):
        ctx.ui.json(attendee)
        return

    ctx.ui.success("Attendee added to meeting")
    ctx.ui.details(
        "Attendee",
        [
            ("Attendee ID", attendee.get("AttendeeId")),
            ("User ID", attendee.get("ExternalUserId")),
            ("Join Token", join_token(attendee.get("JoinToken"))),
        ],
    )


async def run_delete(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Removing attendee..."):
            await client.delete_attendee(args.meeting_id, args.attendee_id)
    ctx.ui.success(f"Attendee '{args.attendee_id}' removed from meeting")


def register(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    group = subparsers.add_parser("attendees", help="Manage meeting attendees.")
    commands = group.add_subparsers(
        dest="action", required=True, parser_class=type(group)
    )

    list_parser = commands.add_parser("list", help="List attendees in a meeting.")
    list_parser.add_argument("meeting_id", metavar="meeting-id")
    add_json_flag(list_parser)
    list_parser.set_defaults(func=run_list)

    get_parser = commands.add_parser("get", help="Get details of a specific attendee.")
    get_parser.add_argument("meeting_id", metavar="meeting-id")
    get_parser.add_argument("attendee_id", metavar="attendee-id")
    add_json_flag(get_parser)
    get_parser.set_defaults(func=run_get)

    create_parser = commands.add_parser("create", help="Add an attendee to a meeting.")
    create_parser.add_argument("meeting_id", metavar="meeting-id")
    create_parser.add_argument(
        "--user-id", required=True, help="External user ID for the attendee."
    )
    add_json_flag(create_parser)
    create_parser.set_defaults(func=run_create)

    delete_parser = commands.add_parser(
        "delete", help="Remove an attendee from a meeting."
    )
    delete_parser.add_argument("meeting_id", metavar="meeting-id")
    delete_parser.add_argument("attendee_id", metavar="attendee-id")
    delete_parser.set_defaults(func=run_delete)

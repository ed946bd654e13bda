"""
awschime/cli/channels.py

``awschime channels list|get|create|delete`` (Chime SDK messaging channels).
"""

from __future__ import annotations

import argparse
from typing import Any

from awschime.cli.common import CLIContext, add_json_flag, open_client, unwrap_detail
from awschime.cli.render import Column, arn_tail, local_time

CHANNEL_COLUMNS = [
    Column("ChannelArn", "Channel ARN", arn_tail),
    Column("Name", "Name"),
    Column("Mode", "Mode"),
    Column("Privacy", "Privacy"),
    Column("LastMessageTimestamp", "Last Message", local_time),
]


async def run_list(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Fetching channels..."):
            channels = await client.list_channels(
                app_instance_arn=args.app_instance_arn,
                max_results=args.max_results,
            )

    if args.json:
        ctx.ui.json(channels)
        return
    ctx.ui.table(channels, CHANNEL_COLUMNS)


async def run_get(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Fetching channel..."):
            result = await client.get_channel(args.channel_arn)
    channel: Any = unwrap_detail("channel", result)

    if args.json or not isinstance(channel, dict):
        ctx.ui.json(channel)
        return
    ctx.ui.details(
        "Channel Details",
        [
            ("Name", channel.get("Name")),
            ("ARN", channel.get("ChannelArn")),
            ("Mode", channel.get("Mode")),
            ("Privacy", channel.get("Privacy")),
            ("Created", local_time(channel.get("CreatedTimestamp"))),
        ],
    )


async def run_create(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Creating channel..."):
            result = await client.create_channel(
                app_instance_arn=args.app_instance_arn,
                name=args.name,
                mode=args.mode,
                privacy=args.privacy,
            )

    if args.json:
        ctx.ui.json(result)
        return

    channel_arn = result.get("ChannelArn") if isinstance(result, dict) else result
    ctx.ui.success(f"Channel '{args.name}' created")
    ctx.ui.details("Channel", [("Channel ARN", channel_arn)])


async def run_delete(args: argparse.Namespace, ctx: CLIContext) -> None:
    async with open_client(ctx) as client:
        with ctx.ui.spinner("Deleting channel..."):
            await client.delete_channel(args.channel_arn)
    ctx.ui.success("Channel deleted")


def register(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    group = subparsers.add_parser("channels", help="Manage Chime messaging channels.")
    commands = group.add_subparsers(
        dest="action", required=True, parser_class=type(group)
    )

    list_parser = commands.add_parser("list", help="List messaging channels.")
    list_parser.add_argument("--app-instance-arn", help="App Instance ARN.")
    list_parser.add_argument(
        "--max-results",
        type=int,
        default=20,
        help="Maximum results. (default: 20)",
    )
    add_json_flag(list_parser)
    list_parser.set_defaults(func=run_list)

    get_parser = commands.add_parser("get", help="Get details of a specific channel.")
    get_parser.add_argument("channel_arn", metavar="channel-arn")
    add_json_flag(get_parser)
    get_parser.set_defaults(func=run_get)

    create_parser = commands.add_parser("create", help="Create a new messaging channel.")
    create_parser.add_argument(
        "--app-instance-arn", required=True, help="App Instance ARN."
    )
    create_parser.add_argument("--name", required=True, help="Channel name.")
    create_parser.add_argument(
        "--mode",
        default="UNRESTRICTED",
        choices=["UNRESTRICTED", "RESTRICTED"],
        help="Channel mode. (default: UNRESTRICTED)",
    )
    create_parser.add_argument(
        "--privacy",
        default="PUBLIC",
        choices=["PUBLIC", "PRIVATE"],
        help="Channel privacy. (default: PUBLIC)",
    )
    add_json_flag(create_parser)
    create_parser.set_defaults(func=run_create)

    delete_parser = commands.add_parser("delete", help="Delete a messaging channel.")
    delete_parser.add_argument("channel_arn", metavar="channel-arn")
    delete_parser.set_defaults(func=run_delete)

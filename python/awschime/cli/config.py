"""
awschime/cli/config.py

``awschime config set|get|list`` for the locally stored AWS credentials.
"""

from __future__ import annotations

import argparse

from awschime.api.errors import ChimeError
from awschime.cli.common import CLIContext

# (argparse dest, config key, label)
SETTABLE = [
    ("access_key_id", "accessKeyId", "Access Key ID"),
    ("secret_access_key", "secretAccessKey", "Secret Access Key"),
    ("session_token", "sessionToken", "Session Token"),
]


async def run_set(args: argparse.Namespace, ctx: CLIContext) -> None:
    """Store each provided value and save the file once."""
    provided = [(key, label, getattr(args, dest)) for dest, key, label in SETTABLE]
    provided = [(key, label, value) for key, label, value in provided if value]
    if not provided:
        raise ChimeError(
            "No options provided. Use --access-key-id, --secret-access-key, or --session-token"
        )

    for key, _, value in provided:
        ctx.store.set(key, value)
    await ctx.store.save()

    for _, label, _ in provided:
        ctx.ui.success(f"{label} set")


async def run_get(args: argparse.Namespace, ctx: CLIContext) -> None:
    value = ctx.store.get(args.key)
    if value is None:
        raise ChimeError(f"Key '{args.key}' not found")
    ctx.ui.info(str(value))


async def run_list(args: argparse.Namespace, ctx: CLIContext) -> None:
    cfg = ctx.store.config()
    ctx.ui.details(
        "Amazon Chime CLI Configuration",
        [
            ("Access Key ID", cfg.access_key_id or "not set"),
            ("Secret Access Key", "*" * 8 if cfg.secret_access_key else "not set"),
            ("Session Token", "set" if cfg.session_token else "not set"),
            ("Config File", ctx.store.path),
        ],
    )


def register(subparsers: "argparse._SubParsersAction[argparse.ArgumentParser]") -> None:
    group = subparsers.add_parser("config", help="Manage CLI configuration.")
    commands = group.add_subparsers(
        dest="action", required=True, parser_class=type(group)
    )

    set_parser = commands.add_parser("set", help="Set configuration values.")
    set_parser.add_argument("--access-key-id", help="AWS Access Key ID.")
    set_parser.add_argument("--secret-access-key", help="AWS Secret Access Key.")
    set_parser.add_argument(
        "--session-token", help="AWS Session Token (for temporary credentials)."
    )
    set_parser.set_defaults(func=run_set)

    get_parser = commands.add_parser("get", help="Get a configuration value.")
    get_parser.add_argument(
        "key", help="Configuration key (e.g. accessKeyId or access_key_id)."
    )
    get_parser.set_defaults(func=run_get)

    list_parser = commands.add_parser("list", help="List all configuration values.")
    list_parser.set_defaults(func=run_list)

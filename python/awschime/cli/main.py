#!/usr/bin/env python3
"""
awschime/cli/main.py

Entry point for the ``awschime`` command:

  awschime config set|get|list
  awschime meetings list|get|create|delete
  awschime attendees list|get|create|delete
  awschime channels list|get|create|delete

Each subcommand handler is an async function; it is run with asyncio.run after
the config store has been loaded. Any error ends the process with exit code 1.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, NoReturn, Optional

from awschime import __version__
from awschime.api.errors import ChimeError
from awschime.cli import attendees, channels, config, meetings
from awschime.cli.common import CLIContext, Handler
from awschime.cli.render import Renderer
from awschime.secrets.config_store import ConfigStore

logger = logging.getLogger(__name__)


class CLIArgumentParser(argparse.ArgumentParser):
    """ArgumentParser whose usage errors exit 1 like every other failure."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = CLIArgumentParser(
        prog="awschime",
        description="Amazon Chime CLI - Meeting and communications from your terminal.",
    )
    parser.add_argument("--version", action="version", version=__version__)
    parser.add_argument(
        "--config-file",
        default=None,
        help="Path to the config file (default: $AWSCHIME_CONFIG or ~/.config/awschime/config.json).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Enable debug logging on stderr.",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        parser_class=CLIArgumentParser,
        help="Command group. Use -h/--help after a command for more usage details.",
    )
    config.register(subparsers)
    meetings.register(subparsers)
    attendees.register(subparsers)
    channels.register(subparsers)
    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


async def _dispatch(args: argparse.Namespace, ctx: CLIContext) -> None:
    await ctx.store.load()
    func: Handler = args.func
    await func(args, ctx)


def main(argv: Optional[List[str]] = None) -> NoReturn:
    """
    CLI entry point. Exits 0 on success, 1 on any reported error.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    configure_logging(args.verbose)
    ctx = CLIContext(store=ConfigStore(args.config_file), ui=Renderer())

    try:
        asyncio.run(_dispatch(args, ctx))
    except ChimeError as exc:
        ctx.ui.error(exc.message)
        sys.exit(1)
    except Exception as exc:
        logger.debug("Unhandled error", exc_info=True)
        ctx.ui.error(str(exc) or exc.__class__.__name__)
        sys.exit(1)
    else:
        sys.exit(0)


if __name__ == "__main__":
    main()

from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import datetime
from typing import (
    Any,
    Callable,
    Dict,
    Iterator,
    List,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)

from rich.console import Console
from rich.table import Table
from rich.text import Text

MAX_CELL_WIDTH = 40


class Column(NamedTuple):
    key: str
    label: str
    format: Optional[Callable[[Any], str]] = None


def arn_tail(value: Any) -> str:
    """Last "/"-separated segment of an ARN."""
    return str(value).split("/")[-1] if value else ""


def abbreviate(length: int) -> Callable[[Any], str]:
    def _fmt(value: Any) -> str:
        return f"{str(value)[:length]}..." if value else "N/A"

    return _fmt


def local_time(value: Any) -> str:
    """Render an ISO-8601 or epoch timestamp in local time."""
    if not value:
        return "N/A"
    try:
        if isinstance(value, (int, float)):
            moment = datetime.fromtimestamp(value)
        else:
            moment = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
            if moment.tzinfo is not None:
                moment = moment.astimezone()
    except (ValueError, OverflowError, OSError):
        return str(value)
    return moment.strftime("%Y-%m-%d %H:%M:%S")


def _cell(row: Dict[str, Any], column: Column) -> str:
    raw = row.get(column.key)
    text = column.format(raw) if column.format else ("" if raw is None else str(raw))
    return text[:MAX_CELL_WIDTH]


class Renderer:
    """Rich console output for the CLI: tables, detail views, status lines.

    Results go to stdout; status and errors go to stderr so ``--json`` output
    stays clean for piping.
    """

    def __init__(
        self, console: Optional[Console] = None, err_console: Optional[Console] = None
    ) -> None:
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def success(self, message: str) -> None:
        self.console.print(
            Text("✓ ", style="green") + Text(message), soft_wrap=True
        )

    def error(self, message: str) -> None:
        self.err_console.print(Text("✗ ", style="red") + Text(message), soft_wrap=True)

    def info(self, message: str, style: str = "") -> None:
        self.console.print(Text(message, style=style), soft_wrap=True)

    def json(self, data: Any) -> None:
        # Plain print keeps the output byte-for-byte valid JSON.
        print(json.dumps(data, indent=2, default=str))

    def table(self, rows: Sequence[Dict[str, Any]], columns: Sequence[Column]) -> None:
        if not rows:
            self.info("No results found.", style="yellow")
            return

        table = Table(header_style="bold cyan", box=None, pad_edge=False)
        for column in columns:
            table.add_column(column.label, no_wrap=True, max_width=MAX_CELL_WIDTH)
        for row in rows:
            table.add_row(*[_cell(row, column) for column in columns])
        self.console.print(table)
        self.info(f"\n{len(rows)} result(s)", style="dim")

    def details(self, title: str, fields: List[Tuple[str, Any]]) -> None:
        """A titled list of label/value lines; ``None`` values show as N/A."""
        self.console.print(Text(f"\n{title}\n", style="bold"))
        width = max((len(label) for label, _ in fields), default=0) + 2
        for label, value in fields:
            shown = "N/A" if value in (None, "") else str(value)
            self.console.print(
                Text(f"{label}:".ljust(width)) + Text(shown, style="cyan"),
                soft_wrap=True,
            )

    @contextmanager
    def spinner(self, message: str) -> Iterator[None]:
        with self.err_console.status(message):
            yield

"""CLI UI components (Rich).

Keeps command logic apart from rendering so tables/panels can be reused by
several commands.
"""

from __future__ import annotations

import json

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import InboundResponse

_BODY_PREVIEW_BYTES = 64


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in `--raw` mode)."""

    title = Text("https-service", style="bold cyan")
    subtitle = Text("Encode • Send • Decode", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_response_table(response: InboundResponse) -> Table:
    """Status line and headers of a decoded response."""

    reason = response.reason_phrase or ""
    table = Table(title=f"{response.status_code} {reason}".strip())
    table.add_column("Header", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in sorted(response.headers.normalized().items()):
        table.add_row(name, value)
    table.caption = f"logical type: {response.logical_type or '-'}"
    return table


def build_body_panel(response: InboundResponse) -> Panel:
    """Body panel: pretty JSON, text, or a short hex preview for bytes."""

    data = response.data
    if data is None:
        body = Text("(no body)", style="dim")
    elif isinstance(data, bytes):
        preview = data[:_BODY_PREVIEW_BYTES].hex(" ")
        suffix = " …" if len(data) > _BODY_PREVIEW_BYTES else ""
        body = Text(f"{len(data)} bytes\n{preview}{suffix}")
    elif isinstance(data, str):
        body = Text(data)
    else:
        body = Text(json.dumps(data, ensure_ascii=False, indent=2))

    return Panel(body, title=Text("Body", style="bold yellow"), border_style="yellow")


def print_failure(console: Console, message: str) -> None:
    console.print(f"[red]Error:[/red] {message}")

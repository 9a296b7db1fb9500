"""Rich rendering for tapecalc — display panel, history table, key bindings.

Reads a Session and never mutates it.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from rich.console import Console, Group
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from tapecalc.formatting import format_age
from tapecalc.keymap import KEY_BINDINGS
from tapecalc.session import Session


def render_display(session: Session, console: Console) -> None:
    """Render the calculator display: trail, value, error and memory badge."""
    lines = [
        Text(session.trail or " ", style="dim"),
        Text(session.display_value, style="bold", justify="right"),
    ]
    error = session.error
    if error:
        lines.append(Text(f"⚠ {error}", style="red"))

    title = "Calculator"
    if session.memory_indicator:
        title += " [white on blue] M [/white on blue]"

    console.print(Panel(Group(*lines), title=title, title_align="left", width=40))


def render_history(session: Session, console: Console, now: Optional[datetime] = None) -> None:
    """Render the history list, most recent first."""
    history = session.history
    if not history:
        console.print("[yellow]No calculations yet.[/yellow]")
        return

    table = Table(title="History", show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Calculation", min_width=16)
    table.add_column("Result", style="green", justify="right")
    table.add_column("When", style="dim")

    for i, item in enumerate(history, 1):
        table.add_row(str(i), item.calculation, item.result, format_age(item.timestamp, now))

    console.print()
    console.print(table)
    console.print()


def render_keys(console: Console) -> None:
    """Render the key binding reference."""
    table = Table(title="Key Bindings", show_header=True, header_style="bold")
    table.add_column("Keys", style="green", min_width=12)
    table.add_column("Action", min_width=30)

    for keys, action in KEY_BINDINGS:
        table.add_row(keys, action)

    console.print()
    console.print(table)
    console.print()

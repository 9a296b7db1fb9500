"""CLI for the tapecalc calculator.

Usage:
    python -m tapecalc run 5 + 3 '*' 2 =       # Feed keys, show the display
    python -m tapecalc run 16 sqrt --history   # Also show the history table
    python -m tapecalc run 8 / 0 = --json      # Dump the state as JSON
    python -m tapecalc repl                    # Interactive session
    python -m tapecalc keys                    # Show key bindings
"""

from __future__ import annotations

import json
from typing import List, Optional

import typer
from rich.console import Console

from tapecalc.config import load_settings
from tapecalc.display import render_display, render_history, render_keys
from tapecalc.session import Session

app = typer.Typer(
    name="tapecalc",
    help="Sequential arithmetic calculator with memory and history",
    no_args_is_help=True,
)
console = Console(stderr=True)
out = Console()

_QUIT_WORDS = ("quit", "exit", "q")


def _make_session(
    notice_seconds: Optional[float],
    history_limit: Optional[int],
    trace: bool = False,
) -> Session:
    """Load settings (env + overrides) and start a session, or exit on bad config."""
    try:
        settings = load_settings(notice_seconds=notice_seconds, history_limit=history_limit)
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/red]")
        raise typer.Exit(1)
    return Session(settings=settings, console=console, trace=trace)


def _warn_rejected(rejected: list[str]) -> None:
    if rejected:
        console.print(f"[yellow]Ignored unknown input: {' '.join(rejected)}[/yellow]")


@app.command("run")
def cmd_run(
    tokens: List[str] = typer.Argument(help="Keys and commands, e.g. 5 + 3 = or 16 sqrt"),
    history: bool = typer.Option(False, "--history", "-H", help="Show the history table"),
    trace: bool = typer.Option(False, "--trace", "-t", help="Print the display after every event"),
    as_json: bool = typer.Option(False, "--json", help="Print the calculator state as JSON"),
    notice_seconds: Optional[float] = typer.Option(None, "--notice-seconds", help="Error notice visibility window"),
    history_limit: Optional[int] = typer.Option(None, "--history-limit", help="History entries to keep"),
) -> None:
    """Feed a sequence of keys to a fresh calculator and show the result."""
    session = _make_session(notice_seconds, history_limit, trace=trace)
    _warn_rejected(session.feed(" ".join(tokens)))

    if as_json:
        typer.echo(json.dumps(session.state.to_dict(), indent=2, ensure_ascii=False))
        return

    render_display(session, out)
    if history:
        render_history(session, out)


@app.command("repl")
def cmd_repl(
    trace: bool = typer.Option(False, "--trace", "-t", help="Print the display after every event"),
    notice_seconds: Optional[float] = typer.Option(None, "--notice-seconds", help="Error notice visibility window"),
    history_limit: Optional[int] = typer.Option(None, "--history-limit", help="History entries to keep"),
) -> None:
    """Start an interactive calculator session."""
    session = _make_session(notice_seconds, history_limit, trace=trace)
    console.print("[dim]Type keys or commands; 'history', 'keys', 'quit'.[/dim]")
    render_display(session, out)

    while True:
        try:
            line = console.input("[bold cyan]>[/bold cyan] ")
        except (EOFError, KeyboardInterrupt):
            console.print()
            break

        word = line.strip().lower()
        if not word:
            continue
        if word in _QUIT_WORDS:
            break
        if word == "history":
            render_history(session, out)
            continue
        if word == "keys":
            render_keys(out)
            continue

        _warn_rejected(session.feed(line))
        render_display(session, out)


@app.command("keys")
def cmd_keys() -> None:
    """Show key bindings."""
    render_keys(out)


if __name__ == "__main__":
    app()

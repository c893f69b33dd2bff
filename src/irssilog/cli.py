"""irssilog CLI — entry point.

Commands:
    irssilog parse <file>   Parse an irssi log and display its events
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click
from pydantic import ValidationError
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .config import load_settings
from .events import EVENT_TYPES, Event
from .parsers.irssi import IrssiParser
from .parsers.patterns import PatternError

console = Console()
err_console = Console(stderr=True)

# ── Helpers ─────────────────────────────────────────────────────────────────


def _type_colour(type_: str) -> str:
    return {
        "message": "white",
        "action": "magenta",
        "join": "green",
        "part": "yellow",
        "quit": "yellow",
        "kick": "red",
        "mode": "cyan",
        "nick": "blue",
        "nicks": "dim",
        "logopen": "bold",
        "logclose": "bold",
    }.get(type_, "white")


def _describe(event: Event) -> str:
    """Return a one-line, irssi-like description of an event."""
    d = event.to_dict()
    t = event.type
    if t == "message":
        return f"<{(d['mode'] or '').strip()}{d['nick']}> {d['message']}"
    if t == "action":
        return f"* {d['nick']} {d['message']}"
    if t == "join":
        return f"{d['nick']} [{d['mask']}] joined {d['channel'] or ''}".rstrip()
    if t in ("part", "quit"):
        tail = f" [{d['message']}]" if d.get("message") else ""
        return f"{d['nick']} [{d['mask']}] {'left' if t == 'part' else 'quit'}{tail}"
    if t == "kick":
        return f"{d['nick']} kicked by {d['by']} [{d['message'] or ''}]"
    if t == "nick":
        return f"{d['nick']} → {d['new_nick']}"
    if t == "nicks":
        return (
            f"{d['total']} nicks ({d['ops']} ops, {d['halfops']} halfops, "
            f"{d['voices']} voices, {d['normal']} normal)"
        )
    if t == "mode":
        return f"[{d['mode']}] by {d['by']}"
    return "log opened" if t == "logopen" else "log closed"


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version="1.0.0", prog_name="irssilog")
def main() -> None:
    """irssilog — turn irssi logs into typed events."""


# ── parse ────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--config", "-c", "config_path", default=None, help="JSON config file (.json may be omitted).")
@click.option("--default-nick", default=None, help="Name shown for our own nick before it is known.")
@click.option("--own-nick", default=None, help="Our nick at the start of the log, if known.")
@click.option("--debug", is_flag=True, help="Report lines that match no pattern.")
@click.option(
    "--type", "-t", "types", multiple=True,
    type=click.Choice(EVENT_TYPES, case_sensitive=False),
    help="Only show these event types (repeatable).",
)
@click.option(
    "--output", "-o", "output_fmt", default="stream",
    type=click.Choice(["stream", "table", "json"], case_sensitive=False),
    help="Output format.",
    show_default=True,
)
@click.option("--limit", "-n", default=0, type=int, help="Max events to display (0 = all).")
def parse(
    file: Path,
    config_path: str | None,
    default_nick: str | None,
    own_nick: str | None,
    debug: bool,
    types: tuple[str, ...],
    output_fmt: str,
    limit: int,
) -> None:
    """Parse an irssi log file and display its events.

    \b
    Examples:
      irssilog parse '#python.log'
      irssilog parse '#python.log' --type message --type action
      irssilog parse '#python.log' --output json --limit 100
      irssilog parse '#python.log' --config irssilog.json --debug
    """
    _setup_logging(debug)
    try:
        settings = load_settings(config_path, default_nick=default_nick, own_nick=own_nick, debug=debug or None)
        parser = IrssiParser(settings)
    except (ValidationError, PatternError) as exc:
        err_console.print(f"[red]Invalid configuration:[/red] {escape(str(exc))}")
        sys.exit(1)

    collected: list[Event] = []

    def _collect(event: Event) -> None:
        if limit and len(collected) >= limit:
            return
        if types and event.type not in types:
            return
        collected.append(event)
        if limit and len(collected) >= limit:
            parser.pause()

    parser.on_all(_collect)
    with parser:
        parser.scan(file)

    if not collected:
        err_console.print("[yellow]No events found.[/yellow]")
        return

    if output_fmt == "json":
        for event in collected:
            out: dict[str, Any] = event.to_dict()
            click.echo(json.dumps(out, default=str))
        err_console.print(f"[dim]Parsed {len(collected)} events from {file}[/dim]")
        return

    if output_fmt == "table":
        tbl = Table(title=f"{file.name}", box=box.ROUNDED, show_lines=False)
        tbl.add_column("time", style="dim")
        tbl.add_column("type")
        tbl.add_column("event", overflow="fold", max_width=80)
        for event in collected:
            colour = _type_colour(event.type)
            tbl.add_row(str(event.time), f"[{colour}]{event.type}[/{colour}]", escape(_describe(event)))
        console.print(tbl)
    else:
        for event in collected:
            colour = _type_colour(event.type)
            console.print(
                f"[dim]{event.time}[/dim] [{colour}]{event.type:8}[/{colour}] {escape(_describe(event))}"
            )

    if limit and len(collected) == limit:
        console.print(f"[dim]Showing first {limit} events. Use --limit 0 to see all.[/dim]")
    else:
        console.print(f"\n[dim]{len(collected)} events from {file.name}[/dim]")


if __name__ == "__main__":
    main()

"""
Event stream commands: inspect
"""

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from actionlog.core.canonical import canonical_json_str
from actionlog.core.errors import EventDecodeError
from actionlog.core.events import ActionEvent
from actionlog.log import event_to_dict, read_events

app = typer.Typer()
console = Console()


@app.command()
def inspect(
    log_path: str = typer.Option(
        ...,
        "--log",
        "-l",
        help="Path to JSONL event stream",
    ),
    run_id: Optional[str] = typer.Option(None, "--run", "-r", help="Filter by run id"),
    lines: Optional[int] = typer.Option(None, "--lines", "-n", help="Show only the last N events"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    List decoded events.

    Examples:
        actionlog log inspect --log events.jsonl
        actionlog log inspect --log events.jsonl --run r1 --json
    """
    try:
        events = list(enumerate(read_events(log_path)))
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)
    except EventDecodeError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if run_id is not None:
        events = [(seq, ev) for seq, ev in events if ev.run_id == run_id]
    if lines:
        events = events[-lines:]

    if json_output:
        records = [dict(event_to_dict(ev), seq=seq) for seq, ev in events]
        print(canonical_json_str({"events": records, "count": len(records)}, indent=2))
        return

    if not events:
        console.print("[yellow]No events match the filters[/yellow]")
        return

    table = Table(title=f"Event stream: {log_path}")
    table.add_column("Seq", style="cyan", justify="right")
    table.add_column("Type", style="green")
    table.add_column("Run", style="yellow")
    table.add_column("Action")
    table.add_column("Kind", style="dim")

    for seq, ev in events:
        if isinstance(ev, ActionEvent):
            kind = "done" if ev.is_completion else "call"
            table.add_row(str(seq), ev.type, ev.run_id, ev.action_path, kind)
        else:
            table.add_row(str(seq), ev.type, ev.run_id, "-", "init")

    console.print(table)
    console.print(f"\n[bold]Total events:[/bold] {len(events)}")

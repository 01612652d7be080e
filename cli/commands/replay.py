"""
Replay command: rebuild runs from an event stream and print their action trees
"""

import json
from typing import List, Optional

import typer
from rich.console import Console
from rich.syntax import Syntax
from rich.tree import Tree

from actionlog.config import EngineConfig
from actionlog.core.canonical import canonical_json_str, canonicalize
from actionlog.core.errors import ActionLogError
from actionlog.core.nodes import ActionNode, Run
from actionlog.log import read_events
from actionlog.query import current_state, group_repeating
from actionlog.registry import RunRegistry
from actionlog.replay import replay as replay_events

console = Console()


def _label(node: ActionNode, count: int = 1) -> str:
    if node.done:
        label = f"[green]{node.name}[/green]"
    else:
        label = f"[yellow]{node.name}[/yellow] [dim](pending)[/dim]"
    if count > 1:
        label += f" [cyan]x{count}[/cyan]"
    return label


def _add_children(tree: Tree, nodes, collapse_repeating: bool) -> None:
    groups = group_repeating(nodes) if collapse_repeating else [(n, 1) for n in nodes]
    for node, count in groups:
        branch = tree.add(_label(node, count))
        _add_children(branch, node.children, collapse_repeating)


def render_run(run: Run, collapse_repeating: bool = True) -> Tree:
    """Build a rich Tree for one run."""
    tree = Tree(f"[bold]Run {run.id}[/bold] [dim]@ {run.timestamp}[/dim]")
    _add_children(tree, run.actions, collapse_repeating)
    return tree


def replay_command(
    log_path: str = typer.Option(
        ...,
        "--log",
        "-l",
        help="Path to JSONL event stream",
    ),
    run_id: Optional[str] = typer.Option(None, "--run", "-r", help="Only show this run"),
    until: Optional[int] = typer.Option(None, "--until", "-u", help="Replay only the first N events"),
    show_state: bool = typer.Option(False, "--show-state", "-s", help="Show current state of each run"),
    collapse: Optional[bool] = typer.Option(
        None,
        "--collapse-repeating/--no-collapse-repeating",
        help="Group repeated sibling actions (default: devtools setting)",
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """
    Replay an event stream and print the rebuilt action trees.

    Examples:
        actionlog replay --log events.jsonl
        actionlog replay --log events.jsonl --run r1 --show-state
        actionlog replay --log events.jsonl --until 10 --json
    """
    try:
        registry = RunRegistry(EngineConfig.from_env())
        result = replay_events(read_events(log_path), registry, until=until)
    except FileNotFoundError:
        if json_output:
            print(json.dumps({"error": "Log file not found", "path": log_path}))
        else:
            console.print(f"[red]Error: Log file not found:[/red] {log_path}")
        raise typer.Exit(2)
    except ActionLogError as e:
        if json_output:
            print(json.dumps({"error": str(e)}))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(2)

    if collapse is None:
        collapse = result.registry.state.collapse_repeating_actions

    runs: List[Run] = result.registry.list_runs()
    if run_id is not None:
        runs = [r for r in runs if r.id == run_id]
        if not runs:
            if json_output:
                print(json.dumps({"error": "Run not found", "run_id": run_id}))
            else:
                console.print(f"[red]Error: Run not found:[/red] {run_id}")
            raise typer.Exit(2)

    if json_output:
        output = {
            "success": True,
            "events_replayed": result.applied,
            "events_dropped": result.unchanged,
            "runs": canonicalize(runs),
        }
        if show_state:
            output["states"] = {r.id: canonicalize(current_state(r)) for r in runs}
        print(canonical_json_str(output, indent=2))
        return

    console.print(f"[green]✓ Replayed {result.applied} events[/green] ({result.unchanged} dropped)")
    for run in runs:
        console.print(render_run(run, collapse))
        if show_state:
            console.print(Syntax(canonical_json_str(current_state(run), indent=2), "json", theme="monokai"))

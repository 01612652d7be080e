#!/usr/bin/env python3
"""
actionlog CLI

Main entrypoint for the actionlog command-line tool.
"""

import typer
from rich.console import Console
from rich.table import Table

from actionlog.config import EngineConfig
from actionlog.logging_config import setup_logging
from actionlog.metrics import start_metrics_server
from cli.commands import log, replay

app = typer.Typer(
    name="actionlog",
    help="Rebuild action call trees from recorded dispatch events",
    add_completion=False,
)

console = Console()

app.add_typer(log.app, name="log", help="Event stream operations")

app.command(name="replay")(replay.replay_command)


@app.callback()
def configure():
    """Configure logging and metrics from the environment."""
    config = EngineConfig.from_env()
    setup_logging(config)
    start_metrics_server(config.metrics_enabled, config.metrics_port)


@app.command()
def version():
    """Show version information."""
    from cli import __version__
    from actionlog import __version__ as engine_version

    table = Table(show_header=False, box=None)
    table.add_row("[bold]actionlog CLI[/bold]", f"v{__version__}")
    table.add_row("Engine", f"v{engine_version}")

    console.print(table)


def main():
    """Main entrypoint."""
    app()


if __name__ == "__main__":
    main()

"""CLI for the monolith calculation.

Usage:
    python -m monolith                                # One run with the defaults
    python -m monolith a,bb x;y                       # Bare inputs go to `run`
    python -m monolith run [INPUTS...]                # Same, explicit
    python -m monolith run a,bb,ccc --seed 5 --no-flag --items 1 --when 2024-01-01
    python -m monolith run a,bb --repeat 3            # Counter accumulates across runs
    python -m monolith run a,bb --json                # Machine-readable outcome
    python -m monolith config                         # Show defaults and env overrides
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Optional

import typer
from rich.console import Console
from typer.core import TyperGroup

from monolith.calculator import Calculator
from monolith.config import load_defaults, parse_items
from monolith.models import GlobalState
from monolith.report import render_defaults, render_outcome, summary_lines

# Top-level options that belong to the group rather than to `run`.
_GROUP_OPTIONS = ("--help", "--install-completion", "--show-completion")


class DefaultRunGroup(TyperGroup):
    """Routes a bare invocation, with or without inputs, to `run`."""

    def parse_args(self, ctx, args):
        if not args or (args[0] not in self.commands and args[0] not in _GROUP_OPTIONS):
            args = ["run", *args]
        return super().parse_args(ctx, args)


app = typer.Typer(
    name="monolith",
    help="Deterministic numeric run over a batch of inputs",
    cls=DefaultRunGroup,
)
console = Console(stderr=True)


@app.command("run")
def cmd_run(
    inputs: Optional[list[str]] = typer.Argument(None, help="Inputs to process (e.g., 'a,bb,ccc')"),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Seed mixed into counter and token maths"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Run name, becomes the global mode"),
    items: Optional[str] = typer.Option(None, "--items", help="Comma-separated integers (e.g., '1,2,3')"),
    no_flag: bool = typer.Option(False, "--no-flag", help="Clear the run flag"),
    when: Optional[datetime] = typer.Option(
        None, "--when", formats=["%Y-%m-%d", "%Y-%m-%dT%H:%M:%S"], help="Timestamp (UTC), default now",
    ),
    repeat: int = typer.Option(1, "--repeat", "-r", min=1, help="Runs in this process, sharing global state"),
    as_json: bool = typer.Option(False, "--json", help="Print the outcome as JSON"),
    table: bool = typer.Option(False, "--table", help="Also render a table on stderr"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Trace every step on stderr"),
) -> None:
    """Run the calculation and print the summary."""
    try:
        defaults = load_defaults()
        run_seed = defaults.seed if seed is None else seed
        run_name = defaults.name if name is None else name
        run_items = defaults.items if items is None else parse_items(items)
        run_flag = defaults.flag and not no_flag
        stamp = when or datetime.now(timezone.utc)
        if stamp.tzinfo is None:
            stamp = stamp.replace(tzinfo=timezone.utc)

        global_state = GlobalState()
        for n in range(repeat):
            if verbose:
                console.print(f"\n[bold]Run {n + 1}/{repeat}[/bold]")
            calc = Calculator(console=console if verbose else None)
            outcome = calc.run(
                inputs or [], run_seed, run_flag, run_name, run_items, stamp,
                global_state=global_state,
            )
            global_state = outcome.global_state

            if as_json:
                typer.echo(json.dumps(outcome.to_dict(), indent=2))
            else:
                for line in summary_lines(outcome):
                    typer.echo(line)
            if table:
                render_outcome(outcome, console)
    except Exception as e:
        typer.echo(f"Unhandled: {type(e).__name__}: {e}")


@app.command("config")
def cmd_config() -> None:
    """Show the run defaults after environment overrides."""
    try:
        defaults = load_defaults()
    except ValueError as e:
        console.print(f"[red]Invalid configuration:[/red] {e}")
        raise typer.Exit(1)
    render_defaults(defaults, console)


if __name__ == "__main__":
    app()

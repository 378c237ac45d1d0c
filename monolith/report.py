"""Monolith report: plain summary lines and Rich tables for a RunOutcome.

The summary lines are the program's stdout contract.  The tables are an
optional human view rendered to the diagnostics console.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from monolith.config import RunDefaults
from monolith.models import EmptyTransform, RunOutcome

# Number of state entries shown after the summary line.
STATE_SAMPLE_LIMIT = 5


def summary_line(outcome: RunOutcome) -> str:
    """`Final:<final> R:<result> G:<counter> M:<mode>`."""
    g = outcome.global_state
    return f"Final:{outcome.final} R:{outcome.result} G:{g.counter} M:{g.mode}"


def summary_lines(outcome: RunOutcome, limit: int = STATE_SAMPLE_LIMIT) -> list[str]:
    """Summary line followed by up to `limit` key=value state lines."""
    lines = [summary_line(outcome)]
    for key, value in outcome.state_sample(limit):
        lines.append(f"{key}={value}")
    return lines


def render_outcome(outcome: RunOutcome, console: Console, limit: int = STATE_SAMPLE_LIMIT) -> None:
    """Render a Rich table of the state sample, then the error list."""
    table = Table(
        title=f"Run: final={outcome.final}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Key", style="dim", min_width=8)
    table.add_column("Kind", min_width=8)
    table.add_column("Index", justify="right")
    table.add_column("Len", justify="right")
    table.add_column("Snippet / note", min_width=12)

    for key, value in outcome.state_sample(limit):
        if isinstance(value, EmptyTransform):
            table.add_row(key, "[yellow]empty[/yellow]", str(value.index), "--", escape(value.note))
        else:
            table.add_row(key, "[cyan]snippet[/cyan]", str(value.index), str(value.length), escape(value.snippet))

    console.print()
    console.print(table)

    if outcome.errors:
        console.print(f"[red]Errors ({len(outcome.errors)}):[/red]")
        for err in outcome.errors:
            console.print(f"  {escape(err)}")
    else:
        console.print("[green]No errors.[/green]")

    console.print(
        f"[dim]a={outcome.a} b={outcome.b} c={outcome.c} "
        f"mode={escape(outcome.mode)} depth={outcome.depth}[/dim]"
    )
    console.print()


def render_defaults(defaults: RunDefaults, console: Console) -> None:
    """Render the effective run defaults."""
    table = Table(title="Run Defaults", show_header=True, header_style="bold")
    table.add_column("Setting", style="green", min_width=8)
    table.add_column("Value", min_width=12)
    table.add_column("Env var", style="dim")

    table.add_row("seed", str(defaults.seed), "MONOLITH_SEED")
    table.add_row("flag", str(defaults.flag).lower(), "MONOLITH_FLAG")
    table.add_row("name", escape(defaults.name), "MONOLITH_NAME")
    table.add_row("items", ",".join(str(i) for i in defaults.items), "MONOLITH_ITEMS")

    console.print()
    console.print(table)
    console.print()

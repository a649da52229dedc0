"""Typer entry-point wiring for the Omingard CLI."""

from __future__ import annotations

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .. import benchmark
from ..game import Game
from ..rules import EmptyColumnPolicy, InvalidTarget
from ..state import MAX_EVENT_LOG, OmingardConfig
from .render import describe_action, render_table

app = typer.Typer(add_completion=False, rich_markup_mode="rich")
console = Console()

HELP_TEXT = (
    "[bold]c COL [ROW][/bold] click a card (bottom card when ROW is omitted) • "
    "[bold]p PILE[/bold] click a pile top • [bold]e COL[/bold] click an empty column • "
    "[bold]h[/bold] hit me • [bold]u[/bold] undo • [bold]?[/bold] hint • [bold]q[/bold] quit"
)


def _index(raw: str, name: str) -> int:
    """Convert a 1-based command-line index to a 0-based one."""

    try:
        value = int(raw)
    except ValueError:
        raise InvalidTarget(f"{name} must be a number, got '{raw}'") from None
    if value < 1:
        raise InvalidTarget(f"{name} numbers start at 1")
    return value - 1


def run_command(game: Game, line: str) -> str | None:
    """Execute one typed command; returns feedback text or ``None`` to quit."""

    parts = line.split()
    if not parts:
        return ""
    command, args = parts[0].lower(), parts[1:]
    try:
        if command in {"q", "quit", "exit"}:
            return None
        if command in {"c", "click"} and 1 <= len(args) <= 2:
            row = _index(args[1], "row") if len(args) == 2 else None
            game.click_card_at(_index(args[0], "column"), row)
            return game.events[-1]
        if command in {"p", "pile"} and len(args) == 1:
            game.click_pile(_index(args[0], "pile"))
            return game.events[-1]
        if command in {"e", "empty"} and len(args) == 1:
            game.click_column(_index(args[0], "column"))
            return game.events[-1]
        if command in {"h", "hit"} and not args:
            game.serve()
            return game.events[-1]
        if command in {"u", "undo"} and not args:
            game.undo()
            return game.events[-1]
        if command in {"?", "hint"} and not args:
            return f"Hint: {describe_action(game.hint())}"
    except InvalidTarget as exc:
        return f"[red]{exc}[/red]"
    return f"[yellow]Unknown command '{line.strip()}'[/yellow]\n{HELP_TEXT}"


def _status(game: Game) -> str:
    if game.is_won:
        return "[bold green]All cards discarded, you win![/bold green]"
    if game.is_stuck:
        return "[bold red]No moves left[/bold red] (undo to try another line)"
    return ""


def _make_config(
    seed: int | None,
    empty_columns: EmptyColumnPolicy,
    max_events: int = MAX_EVENT_LOG,
) -> OmingardConfig:
    try:
        return OmingardConfig(seed=seed, empty_column_policy=empty_columns, max_event_log=max_events)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def play(
    seed: int | None = typer.Option(None, help="Random seed for reproducible deals (omit for randomness)."),
    empty_columns: EmptyColumnPolicy = typer.Option(
        EmptyColumnPolicy.ANY,
        "--empty-columns",
        case_sensitive=False,
        help="Which cards an empty column accepts.",
    ),
    max_events: int = typer.Option(MAX_EVENT_LOG, "--max-events", help="Number of event log lines kept."),
) -> None:
    """Play an interactive game in the terminal."""

    game = Game.new(_make_config(seed, empty_columns, max_events))
    console.print(HELP_TEXT)
    while True:
        status = _status(game)
        console.print(render_table(game.table, game.events, status=status))
        if game.is_won:
            break
        try:
            line = console.input("[bold green]omingard>[/bold green] ")
        except EOFError:
            break
        reply = run_command(game, line)
        if reply is None:
            break
        if reply:
            console.print(reply)


@app.command()
def show(
    seed: int | None = typer.Option(None, help="Random seed for the deal (omit for randomness)."),
) -> None:
    """Print a freshly dealt table and exit."""

    game = Game.new(_make_config(seed, EmptyColumnPolicy.ANY))
    console.print(render_table(game.table, game.events))


@app.command("benchmark")
def benchmark_cli(
    games: int = typer.Option(10, min=1, help="Number of auto-played games."),
    seed: int = typer.Option(123, help="Random seed for the benchmark."),
    max_steps: int = typer.Option(benchmark.DEFAULT_MAX_STEPS, min=1, help="Action limit per game."),
    empty_columns: EmptyColumnPolicy = typer.Option(
        EmptyColumnPolicy.ANY,
        "--empty-columns",
        case_sensitive=False,
        help="Which cards an empty column accepts.",
    ),
) -> None:
    """Run the greedy auto-player over a batch of seeded games."""

    report = benchmark.run_self_play(
        games,
        seed,
        _make_config(None, empty_columns),
        max_steps=max_steps,
    )

    table = Table(title="Greedy Self-Play", box=box.SIMPLE_HEAVY)
    table.add_column("Seed", justify="right")
    table.add_column("Result", justify="center")
    table.add_column("Discarded", justify="right")
    table.add_column("Serves", justify="right")
    table.add_column("Steps", justify="right")
    for outcome in report.outcomes:
        if outcome.won:
            result = "[bold green]Won[/bold green]"
        elif outcome.stuck:
            result = "Stuck"
        else:
            result = "[yellow]Step limit[/yellow]"
        table.add_row(
            str(outcome.seed),
            result,
            str(outcome.discarded),
            str(outcome.serves),
            str(outcome.steps),
        )
    console.print(table)
    console.print(
        f"[cyan]Win rate[/cyan] {report.win_rate:.0%} • "
        f"[cyan]stuck[/cyan] {report.stuck_rate:.0%} • "
        f"[cyan]discarded[/cyan] mean {report.mean_discarded:.1f}, median {report.median_discarded:.1f} • "
        f"[cyan]serves[/cyan] mean {report.mean_serves:.1f}"
    )


def main() -> None:
    """Entry-point for ``python -m omingard.cli``."""

    app()


if __name__ == "__main__":  # pragma: no cover - CLI invocation
    main()

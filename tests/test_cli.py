from __future__ import annotations

import random

from rich.console import Console
from typer.testing import CliRunner

from omingard import state
from omingard.actions import DiscardAction, MoveAction, ServeAction
from omingard.cards import Card, Deck, Suit, cards_from_codes
from omingard.cli.main import HELP_TEXT, app, run_command
from omingard.cli.render import FACE_DOWN, describe_action, format_card, render_table
from omingard.game import Game

runner = CliRunner()


def _game_with(columns: dict[int, list[str]], *, stack: list[str] | None = None) -> Game:
    table = state.empty_table(cards_from_codes(stack or []))
    for index, codes in columns.items():
        table = table.with_column(state.Column(index=index, cards=tuple(cards_from_codes(codes))))
    return Game(config=state.OmingardConfig(), table=table)


def _render_text(renderable) -> str:
    console = Console(width=120, record=True, color_system=None)
    console.print(renderable)
    return console.export_text()


def test_format_card_variants() -> None:
    assert format_card(Card(Suit.SPADES, 7)) == FACE_DOWN
    assert format_card(Card(Suit.HEARTS, 12, open=True)) == "[bold red]♥Q[/bold red]"
    assert format_card(Card(Suit.CLUBS, 1, Deck.B, open=True)) == "[bold white]♣A′[/bold white]"
    assert format_card(Card(Suit.CLUBS, 1, open=True, moving=True)).startswith("[reverse]")


def test_describe_action() -> None:
    card = Card(Suit.DIAMONDS, 4)

    assert describe_action(None) == "No moves left"
    assert describe_action(DiscardAction(card=card)) == "Discard ♦ 4 (a)"
    assert describe_action(MoveAction(card=card, target_column=2)) == "Move ♦ 4 (a) to column 3"
    assert describe_action(ServeAction()) == "Hit me: serve new cards"


def test_render_table_shows_counters_and_events() -> None:
    game = Game.new(rng=random.Random(5))

    text = _render_text(render_table(game.table, game.events, status="Ready"))

    assert "Omingard" in text
    assert "Stack: 75 card(s)" in text
    assert "Discarded: 0 / 104" in text
    assert "New game: 75 card(s) left in the stack" in text
    assert "Ready" in text


def test_run_command_click_and_move() -> None:
    game = _game_with({0: ["c.3", "s.8.o"], 1: ["h.9.o"]})

    assert run_command(game, "c 1") == "Marked ♠ 8 (a) for moving"
    assert run_command(game, "click 2 1") == "Moved ♠ 8 (a) to column 2"
    assert [card.value for card in game.table.columns[1].cards] == [9, 8]


def test_run_command_empty_column_and_pile() -> None:
    game = _game_with({0: ["c.3", "h.9.o"]})

    run_command(game, "c 1")
    assert run_command(game, "e 4") == "Moved ♥ 9 (a) to column 4"
    assert run_command(game, "p 1") == "Pile 1 is empty"


def test_run_command_hit_undo_and_hint() -> None:
    game = _game_with({0: ["s.5.o"], 1: ["h.9.o"]}, stack=["c.2"])

    assert run_command(game, "?") == "Hint: Hit me: serve new cards"
    assert run_command(game, "h") == "Served 1 new card(s)"
    assert run_command(game, "u") == "Undid the last step"
    assert game.table.stack_size == 1


def test_run_command_errors_and_quit() -> None:
    game = _game_with({0: ["s.5.o"]})

    assert run_command(game, "") == ""
    assert run_command(game, "q") is None
    assert run_command(game, "c 0") == "[red]column numbers start at 1[/red]"
    assert run_command(game, "c x") == "[red]column must be a number, got 'x'[/red]"
    assert run_command(game, "c 2") == "[red]column 1 is empty[/red]"
    assert run_command(game, "p 9") == "[red]no pile with index 8[/red]"
    reply = run_command(game, "dance")
    assert reply.startswith("[yellow]Unknown command 'dance'[/yellow]")
    assert reply.endswith(HELP_TEXT)


def test_show_command_prints_table() -> None:
    result = runner.invoke(app, ["show", "--seed", "3"])

    assert result.exit_code == 0
    assert "Stack: 75 card(s)" in result.stdout


def test_play_command_runs_until_quit() -> None:
    result = runner.invoke(app, ["play", "--seed", "3"], input="h\nu\nq\n")

    assert result.exit_code == 0
    assert "Served 9 new card(s)" in result.stdout
    assert "Undid the last step" in result.stdout


def test_play_command_stops_on_end_of_input() -> None:
    result = runner.invoke(app, ["play", "--seed", "3", "--empty-columns", "kings"], input="h\n")

    assert result.exit_code == 0


def test_play_command_rejects_invalid_event_log_size() -> None:
    result = runner.invoke(app, ["play", "--max-events", "0"], input="q\n")

    assert result.exit_code == 2


def test_benchmark_command_prints_summary() -> None:
    result = runner.invoke(app, ["benchmark", "--games", "2", "--seed", "7", "--max-steps", "30"])

    assert result.exit_code == 0
    assert "Greedy Self-Play" in result.stdout
    assert "Win rate" in result.stdout

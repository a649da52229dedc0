from __future__ import annotations

import random

import pytest

from omingard import rules, state
from omingard.actions import DiscardAction, MoveAction, ServeAction
from omingard.cards import Card, Suit, cards_from_codes
from omingard.game import Game
from omingard.protocol import ClickOutcome


def _game(columns: dict[int, list[str]], *, stack: list[str] | None = None, **config) -> Game:
    table = state.empty_table(cards_from_codes(stack or []))
    for index, codes in columns.items():
        table = table.with_column(state.Column(index=index, cards=tuple(cards_from_codes(codes))))
    return Game(config=state.OmingardConfig(**config), table=table)


def test_new_game_is_playable() -> None:
    game = Game.new(state.OmingardConfig(seed=4))

    assert game.table.stack_size == 75
    assert not game.is_won
    assert not game.is_stuck
    assert game.events == ["New game: 75 card(s) left in the stack"]
    assert game.hint() is not None


def test_new_game_is_reproducible_with_rng() -> None:
    assert Game.new(rng=random.Random(8)).table == Game.new(rng=random.Random(8)).table


def test_serve_then_undo_restores_initial_table() -> None:
    game = Game.new(rng=random.Random(12))
    initial = game.table

    assert game.serve() == 9
    assert game.table.stack_size == 66
    assert game.undo()
    assert game.table == initial
    assert not game.undo()
    assert game.events[-1] == "Nothing to undo"


def test_serve_with_empty_stack_logs_and_keeps_history() -> None:
    game = _game({0: ["h.9.o"]})

    assert game.serve() == 0
    assert game.events[-1] == "The stack is empty"
    assert len(game.history) == 1


def test_click_sequence_moves_and_logs() -> None:
    game = _game({0: ["c.3", "s.8.o"], 1: ["h.9.o"]})

    assert game.click_card_at(0) is ClickOutcome.MARKED
    assert [card.value for card in game.marked_cards] == [8]
    assert game.click_card_at(1) is ClickOutcome.MOVED

    assert [card.value for card in game.table.columns[1].cards] == [9, 8]
    assert game.events[-2:] == ["Marked ♠ 8 (a) for moving", "Moved ♠ 8 (a) to column 2"]
    assert len(game.history) == 3


def test_rejected_move_reports_new_selection() -> None:
    game = _game({0: ["s.8.o"], 1: ["s.9.o"]})

    game.click_card_at(0)
    assert game.click_card_at(1) is ClickOutcome.MOVE_REJECTED

    assert game.events[-1] == "Cannot move ♠ 8 (a) to column 2; marked ♠ 9 (a) instead"
    assert [card.value for card in game.marked_cards] == [9]


def test_discard_by_double_click() -> None:
    game = _game({0: ["h.1.o"]})

    game.click_card(Card(Suit.HEARTS, 1))
    assert game.click_card(Card(Suit.HEARTS, 1)) is ClickOutcome.DISCARDED

    assert game.table.discarded_count == 1
    assert game.events[-1] == "Discarded ♥ A (a)"
    assert game.is_stuck


def test_ignored_clicks_do_not_grow_history() -> None:
    game = _game({0: ["c.k", "h.9.o"]})

    assert game.click_card_at(0, 0) is ClickOutcome.IGNORED
    assert len(game.history) == 1
    assert game.events[-1] == "Nothing to do with ♣ K (a)"


def test_column_click_moves_into_empty_column() -> None:
    game = _game({0: ["c.3", "h.9.o"]})

    game.click_card_at(0)
    assert game.click_column(4) is ClickOutcome.MOVED

    assert game.table.columns[4].cards[0].same_card(Card(Suit.HEARTS, 9))
    assert game.events[-1] == "Moved ♥ 9 (a) to column 5"


def test_column_click_under_kings_policy_rejects_other_cards() -> None:
    game = _game({0: ["c.3", "h.9.o"]}, empty_column_policy="kings")

    game.click_card_at(0)
    assert game.click_column(4) is ClickOutcome.MOVE_REJECTED
    assert not game.marked_cards


def test_pile_clicks() -> None:
    game = _game({})
    assert game.click_pile(0) is ClickOutcome.IGNORED
    assert game.events[-1] == "Pile 1 is empty"

    game.table = game.table.with_pile(game.table.piles[0].with_cards(cards_from_codes(["h.1.o"])))
    assert game.click_pile(0) is ClickOutcome.MARKED_PILE_TOP


def test_invalid_targets_raise() -> None:
    game = _game({0: ["h.9.o"]})

    with pytest.raises(rules.InvalidTarget):
        game.click_card_at(1)
    with pytest.raises(rules.InvalidTarget):
        game.click_card_at(0, 3)
    with pytest.raises(rules.InvalidTarget):
        game.click_pile(8)
    with pytest.raises(rules.InvalidTarget):
        game.click_column(-1)


def test_event_log_is_bounded() -> None:
    game = _game({0: ["h.9.o"]}, max_event_log=3)

    for _ in range(5):
        game.undo()

    assert len(game.events) == 3


@pytest.mark.parametrize(
    ("columns", "stack", "expected"),
    [
        ({0: ["d.1.o"]}, [], DiscardAction),
        ({0: ["c.2", "s.8.o"], 1: ["h.9.o"]}, [], MoveAction),
        ({0: ["s.5.o"], 1: ["h.9.o"]}, ["c.2"], ServeAction),
    ],
)
def test_hint_suggests_next_action(columns: dict, stack: list[str], expected: type) -> None:
    game = _game(columns, stack=stack)

    assert isinstance(game.hint(), expected)


def test_hint_is_none_when_stuck() -> None:
    game = _game({0: ["s.5.o"], 1: ["h.9.o"]})

    assert game.is_stuck
    assert game.hint() is None

"""Click interpretation for Omingard.

A click is resolved against the current marks: the first click marks a run,
a second click on the same card discards it, and a click elsewhere tries to
move the marked run there.
"""

from __future__ import annotations

from enum import Enum

from .cards import Card
from .rules import (
    EmptyColumnPolicy,
    can_be_appended_to,
    can_be_placed_on_empty,
    cards_marked_for_moving,
    column_for,
    moveable,
    pile_for,
)
from .state import TableState
from .transactions import (
    discard_card,
    mark_card_and_children_for_moving,
    mark_card_for_moving,
    move_marked_cards_to,
    unmark_all_column_cards,
)

__all__ = ["ClickOutcome", "resolve_click", "resolve_column_click", "handle_card_click"]


class ClickOutcome(str, Enum):
    """What a single click did to the table."""

    MARKED_PILE_TOP = "marked_pile_top"
    MARKED = "marked"
    DISCARDED = "discarded"
    DISCARD_REJECTED = "discard_rejected"
    MOVED = "moved"
    MOVE_REJECTED = "move_rejected"
    IGNORED = "ignored"


def _open_pile_top(table: TableState, card: Card) -> bool:
    pile = pile_for(table.piles, card)
    if pile is None:
        return False
    return pile.top.same_card(card) and pile.top.open


def resolve_click(table: TableState, clicked: Card) -> tuple[TableState, ClickOutcome]:
    """Apply a click on ``clicked`` and report what happened."""

    column = column_for(table.columns, clicked)

    if column is None:
        if _open_pile_top(table, clicked):
            return mark_card_for_moving(table, clicked), ClickOutcome.MARKED_PILE_TOP
        return table, ClickOutcome.IGNORED

    if not moveable(column.cards, clicked):
        return table, ClickOutcome.IGNORED

    marked = cards_marked_for_moving(table)

    # second click on a marked card
    if any(card.same_card(clicked) for card in marked):
        discarded = discard_card(table, clicked)
        if len(discarded.columns[column.index].cards) < len(column.cards):
            return discarded, ClickOutcome.DISCARDED
        # the cards above the clicked one lose their mark too
        return unmark_all_column_cards(discarded), ClickOutcome.DISCARD_REJECTED

    if marked:
        if can_be_appended_to(marked[0], column):
            moved = move_marked_cards_to(table, column.index)
            return unmark_all_column_cards(moved), ClickOutcome.MOVED
        table = unmark_all_column_cards(table)
        return mark_card_and_children_for_moving(table, clicked), ClickOutcome.MOVE_REJECTED

    return mark_card_and_children_for_moving(table, clicked), ClickOutcome.MARKED


def resolve_column_click(
    table: TableState,
    column_index: int,
    policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY,
) -> tuple[TableState, ClickOutcome]:
    """Apply a click on a column's placeholder (only shown for empty columns)."""

    column = table.column_at(column_index)
    if column.cards:
        return table, ClickOutcome.IGNORED
    marked = cards_marked_for_moving(table)
    if not marked:
        return table, ClickOutcome.IGNORED
    if can_be_placed_on_empty(marked[0], column, policy):
        moved = move_marked_cards_to(table, column_index)
        return unmark_all_column_cards(moved), ClickOutcome.MOVED
    return unmark_all_column_cards(table), ClickOutcome.MOVE_REJECTED


def handle_card_click(table: TableState, clicked: Card) -> TableState:
    """Run the interaction protocol for a click and return the new table."""

    return resolve_click(table, clicked)[0]

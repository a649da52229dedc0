"""State transitions for Omingard.

Every transaction takes a ``TableState`` and returns a new one; inputs are
never mutated. Illegal requests leave the table unchanged (or only clear a
mark) instead of raising.
"""

from __future__ import annotations

from typing import Sequence

from .cards import Card
from .rules import cards_marked_for_moving, column_for, discardable, free_pile_for, index_for, pile_for
from .state import TableState, serve_card_to_column

__all__ = [
    "discard_card",
    "move_marked_cards_to",
    "unmark_card",
    "unmark_all_column_cards",
    "unmark_all_cards",
    "mark_card_for_moving",
    "mark_card_and_children_for_moving",
    "serve_new_cards",
]


def _open_last(cards: list[Card]) -> None:
    if cards:
        cards[-1] = cards[-1].opened()


def _unmark_cards(cards: Sequence[Card]) -> tuple[Card, ...]:
    return tuple(card.unmarked() for card in cards)


def unmark_card(table: TableState, card: Card) -> TableState:
    """Clear the mark of ``card`` wherever it lives."""

    column = column_for(table.columns, card)
    if column is not None:
        cards = list(column.cards)
        idx = index_for(cards, card)
        cards[idx] = cards[idx].unmarked()
        return table.with_column(column.with_cards(cards))
    pile = pile_for(table.piles, card)
    if pile is not None:
        cards = list(pile.cards)
        idx = index_for(cards, card)
        cards[idx] = cards[idx].unmarked()
        return table.with_pile(pile.with_cards(cards))
    return table


def discard_card(table: TableState, card: Card) -> TableState:
    """Move a column's last card to its pile and open the new last card.

    When the card cannot be discarded only its own mark is cleared, so a
    failed attempt still deselects it.
    """

    if not discardable(table, card):
        return unmark_card(table, card)

    column = column_for(table.columns, card)
    remaining = list(column.cards)
    discarded = remaining.pop().unmarked()
    _open_last(remaining)
    pile = free_pile_for(table.piles, discarded)
    table = table.with_column(column.with_cards(remaining))
    return table.with_pile(pile.with_cards(pile.cards + (discarded,)))


def move_marked_cards_to(table: TableState, target_index: int) -> TableState:
    """Move the marked tail of its column, in order, onto another column.

    The source is cut at the first marked card; when the cut does not match
    the marked cards exactly the table is returned unchanged. Marks travel
    with the cards; clearing them is a separate step.
    """

    marked = cards_marked_for_moving(table)
    target = table.column_at(target_index)
    if not marked:
        return table
    source = column_for(table.columns, marked[0])
    if source.index == target.index:
        return table

    head = index_for(source.cards, marked[0])
    run = source.cards[head:]
    if len(run) != len(marked) or not all(card.same_card(other) for card, other in zip(run, marked)):
        return table

    remaining = list(source.cards[:head])
    _open_last(remaining)
    table = table.with_column(source.with_cards(remaining))
    return table.with_column(target.with_cards(target.cards + run))


def unmark_all_column_cards(table: TableState) -> TableState:
    """Remove the marking from every card in every column."""

    if not cards_marked_for_moving(table):
        return table
    columns = tuple(column.with_cards(_unmark_cards(column.cards)) for column in table.columns)
    return TableState(stack=table.stack, columns=columns, piles=table.piles)


def unmark_all_cards(table: TableState) -> TableState:
    """Remove the marking from column cards and pile cards alike."""

    table = unmark_all_column_cards(table)
    if not any(card.moving for pile in table.piles for card in pile.cards):
        return table
    piles = tuple(pile.with_cards(_unmark_cards(pile.cards)) for pile in table.piles)
    return TableState(stack=table.stack, columns=table.columns, piles=piles)


def mark_card_for_moving(table: TableState, card: Card) -> TableState:
    """Find and mark a single card, in a column or on a pile."""

    column = column_for(table.columns, card)
    if column is not None:
        cards = list(column.cards)
        idx = index_for(cards, card)
        cards[idx] = cards[idx].marked()
        return table.with_column(column.with_cards(cards))
    pile = pile_for(table.piles, card)
    if pile is not None:
        cards = list(pile.cards)
        idx = index_for(cards, card)
        cards[idx] = cards[idx].marked()
        return table.with_pile(pile.with_cards(cards))
    # still in the stack
    return table


def mark_card_and_children_for_moving(table: TableState, card: Card) -> TableState:
    """Mark ``card`` and every card below it, whether or not they are sorted."""

    column = column_for(table.columns, card)
    if column is None:
        return table
    cards = list(column.cards)
    for idx in range(index_for(cards, card), len(cards)):
        cards[idx] = cards[idx].marked()
    return table.with_column(column.with_cards(cards))


def serve_new_cards(table: TableState) -> TableState:
    """Append a new open card to each column while the stack lasts."""

    table = unmark_all_cards(table)
    for column in table.columns:
        table = serve_card_to_column(table, column.index, open_card=True)
    return table

"""Rule predicates for Omingard.

Everything in this module is pure: predicates read cards, columns, piles and
table snapshots and never build new state.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Final, Sequence

from .cards import Card

if TYPE_CHECKING:
    from .state import Column, Pile, TableState

__all__ = [
    "EmptyColumnPolicy",
    "InvalidTarget",
    "TOTAL_CARDS",
    "is_open",
    "index_for",
    "children_of",
    "with_alternating_colours",
    "with_descending_values",
    "sorted_from_card",
    "moveable",
    "free_pile_for",
    "column_for",
    "pile_for",
    "discardable",
    "can_be_appended_to",
    "can_be_placed_on_empty",
    "cards_marked_for_moving",
    "is_won",
]

TOTAL_CARDS: Final[int] = 104
KING: Final[int] = 13


class EmptyColumnPolicy(str, Enum):
    """Which cards an empty column accepts."""

    ANY = "any"
    KINGS = "kings"
    NONE = "none"


class InvalidTarget(ValueError):
    """Raised when a column, pile or row address does not exist."""


def is_open(card: Card) -> bool:
    return card.open


def index_for(cards: Sequence[Card], card: Card) -> int | None:
    """Return the position of ``card`` in ``cards`` or ``None`` when absent."""

    for idx, candidate in enumerate(cards):
        if candidate.same_card(card):
            return idx
    return None


def children_of(column_cards: Sequence[Card], card: Card) -> list[Card]:
    """Return all the cards below ``card`` in a column (empty when absent)."""

    idx = index_for(column_cards, card)
    if idx is None:
        return []
    return list(column_cards[idx + 1 :])


def with_alternating_colours(cards: Sequence[Card]) -> bool:
    """Check that consecutive cards alternate between red and black."""

    for upper, lower in zip(cards, cards[1:]):
        if upper.colour == lower.colour:
            return False
    return True


def with_descending_values(cards: Sequence[Card]) -> bool:
    """Check that values descend one by one from the first card to the last."""

    if not cards:
        return True
    first = cards[0].value
    expected = list(range(first, first - len(cards), -1))
    return [card.value for card in cards] == expected


def sorted_from_card(column_cards: Sequence[Card], card: Card) -> bool:
    """Check whether ``card`` and its children form a sorted run.

    A card without children is sorted only when it is the column's last card;
    a card that is not in the column at all is never sorted.
    """

    children = children_of(column_cards, card)
    if not children:
        return bool(column_cards) and column_cards[-1].same_card(card)
    run = [card, *children]
    return with_descending_values(run) and with_alternating_colours(run)


def moveable(column_cards: Sequence[Card], card: Card) -> bool:
    """Check whether ``card`` can be moved elsewhere from its column."""

    idx = index_for(column_cards, card)
    if idx is None:
        return False
    return is_open(column_cards[idx]) and sorted_from_card(column_cards, card)


def free_pile_for(piles: Sequence["Pile"], card: Card) -> "Pile | None":
    """Return the first pile that needs exactly ``card`` next."""

    for pile in piles:
        if pile.suit == card.suit and len(pile.cards) == card.value - 1:
            return pile
    return None


def column_for(columns: Sequence["Column"], card: Card) -> "Column | None":
    for column in columns:
        if index_for(column.cards, card) is not None:
            return column
    return None


def pile_for(piles: Sequence["Pile"], card: Card) -> "Pile | None":
    for pile in piles:
        if index_for(pile.cards, card) is not None:
            return pile
    return None


def discardable(table: "TableState", card: Card) -> bool:
    """Only a column's open last card with a free pile can be discarded."""

    column = column_for(table.columns, card)
    if column is None:
        return False
    return moveable(column.cards, card) and free_pile_for(table.piles, card) is not None


def can_be_appended_to(card: Card, column: "Column") -> bool:
    """Check whether ``card`` may be put below the column's last card.

    An empty column has no upper card, so this is always ``False`` for it;
    see ``can_be_placed_on_empty``.
    """

    if not column.cards:
        return False
    upper = column.cards[-1]
    return upper.value == card.value + 1 and upper.colour != card.colour


def can_be_placed_on_empty(card: Card, column: "Column", policy: EmptyColumnPolicy) -> bool:
    if column.cards:
        return False
    if policy is EmptyColumnPolicy.ANY:
        return True
    if policy is EmptyColumnPolicy.KINGS:
        return card.value == KING
    return False


def cards_marked_for_moving(table: "TableState") -> list[Card]:
    """Return every marked column card, in column order then card order."""

    return [card for column in table.columns for card in column.cards if card.moving]


def is_won(table: "TableState") -> bool:
    return table.discarded_count == TOTAL_CARDS

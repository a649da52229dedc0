"""Core table state data structures for Omingard."""

from __future__ import annotations

import random
from dataclasses import dataclass, field, replace
from typing import Iterable, Sequence

from .cards import Card, Suit, build_deck
from .rules import EmptyColumnPolicy, InvalidTarget

NUM_COLUMNS = 9
DEAL_PATTERN: tuple[int, ...] = (1, 2, 3, 4, 5, 4, 3, 2, 1)
PILES_PER_SUIT = 2
MAX_EVENT_LOG = 12


@dataclass(slots=True)
class OmingardConfig:
    """Runtime configuration for a single Omingard game."""

    num_columns: int = NUM_COLUMNS
    deal_pattern: tuple[int, ...] = DEAL_PATTERN
    empty_column_policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY
    seed: int | None = None
    max_event_log: int = MAX_EVENT_LOG

    def __post_init__(self) -> None:
        self.deal_pattern = tuple(self.deal_pattern)
        self.empty_column_policy = EmptyColumnPolicy(self.empty_column_policy)
        if self.num_columns <= 0:
            raise ValueError("num_columns must be positive")
        if len(self.deal_pattern) != self.num_columns:
            raise ValueError("deal pattern must name a card count for every column")
        if any(count < 0 for count in self.deal_pattern):
            raise ValueError("deal pattern counts must not be negative")
        if self.max_event_log <= 0:
            raise ValueError("max_event_log must be positive")

    def make_rng(self) -> random.Random:
        """Return the random source used to shuffle a new stack."""

        return random.Random(self.seed)


@dataclass(frozen=True, slots=True)
class Column:
    """One of the vertical stacks dealt from the shuffled stack."""

    index: int
    cards: tuple[Card, ...] = ()

    @property
    def last(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    @property
    def is_empty(self) -> bool:
        return not self.cards

    def with_cards(self, cards: Iterable[Card]) -> "Column":
        return replace(self, cards=tuple(cards))


@dataclass(frozen=True, slots=True)
class Pile:
    """Discard destination built up ace-to-king in a single suit."""

    index: int
    suit: Suit
    cards: tuple[Card, ...] = ()

    @property
    def top(self) -> Card | None:
        return self.cards[-1] if self.cards else None

    def with_cards(self, cards: Iterable[Card]) -> "Pile":
        return replace(self, cards=tuple(cards))


@dataclass(frozen=True, slots=True)
class TableState:
    """Immutable snapshot of the whole table at one moment of play.

    The stack's top card is its last element.
    """

    stack: tuple[Card, ...] = ()
    columns: tuple[Column, ...] = field(default_factory=tuple)
    piles: tuple[Pile, ...] = field(default_factory=tuple)

    @property
    def stack_size(self) -> int:
        return len(self.stack)

    @property
    def discarded_count(self) -> int:
        return sum(len(pile.cards) for pile in self.piles)

    def all_column_cards(self) -> list[Card]:
        return [card for column in self.columns for card in column.cards]

    def column_at(self, index: int) -> Column:
        if index < 0 or index >= len(self.columns):
            raise InvalidTarget(f"no column with index {index}")
        return self.columns[index]

    def pile_at(self, index: int) -> Pile:
        if index < 0 or index >= len(self.piles):
            raise InvalidTarget(f"no pile with index {index}")
        return self.piles[index]

    def card_at(self, column_index: int, row: int) -> Card:
        """Return the card at ``row`` (0 = first dealt) of a column."""

        column = self.column_at(column_index)
        if row < 0 or row >= len(column.cards):
            raise InvalidTarget(f"column {column_index} has no card at row {row}")
        return column.cards[row]

    def with_column(self, column: Column) -> "TableState":
        columns = list(self.columns)
        columns[column.index] = column
        return replace(self, columns=tuple(columns))

    def with_pile(self, pile: Pile) -> "TableState":
        piles = list(self.piles)
        piles[pile.index] = pile
        return replace(self, piles=tuple(piles))

    def with_stack(self, stack: Iterable[Card]) -> "TableState":
        return replace(self, stack=tuple(stack))


def piles_for_suits(suits: Sequence[Suit]) -> tuple[Pile, ...]:
    return tuple(Pile(index=idx, suit=suit) for idx, suit in enumerate(suits))


def empty_table(stack: Sequence[Card], config: OmingardConfig | None = None) -> TableState:
    """Return a table with ``stack`` undealt, empty columns and empty piles."""

    config = config or OmingardConfig()
    pile_suits = [suit for suit in Suit for _ in range(PILES_PER_SUIT)]
    return TableState(
        stack=tuple(stack),
        columns=tuple(Column(index=idx) for idx in range(config.num_columns)),
        piles=piles_for_suits(pile_suits),
    )


def serve_card_to_column(table: TableState, column_index: int, open_card: bool = False) -> TableState:
    """Move the stack's top card to the end of a column; no-op on an empty stack."""

    if not table.stack:
        return table
    card = table.stack[-1]
    if open_card:
        card = card.opened()
    column = table.column_at(column_index)
    table = table.with_stack(table.stack[:-1])
    return table.with_column(column.with_cards(column.cards + (card,)))


def deal_initial(stack: Sequence[Card], config: OmingardConfig | None = None) -> TableState:
    """Deal the opening layout column by column following the deal pattern.

    Only the last card dealt into each column is opened. A column simply stays
    short when the stack runs out.
    """

    config = config or OmingardConfig()
    table = empty_table(stack, config)
    for column_index, count in enumerate(config.deal_pattern):
        for dealt in range(count):
            table = serve_card_to_column(table, column_index, open_card=dealt == count - 1)
    return table


def new_game(config: OmingardConfig | None = None, rng: random.Random | None = None) -> TableState:
    """Build a shuffled stack and deal the initial layout."""

    config = config or OmingardConfig()
    return deal_initial(build_deck(rng or config.make_rng()), config)

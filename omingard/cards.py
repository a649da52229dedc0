"""Card abstractions and deck assembly for Omingard."""

from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable

from . import encoding


class Suit(str, Enum):
    """Enumeration of the four suits, in dealing order."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    SPADES = "spades"
    CLUBS = "clubs"

    @property
    def colour(self) -> str:
        return encoding.colour(self.value)

    @property
    def symbol(self) -> str:
        return encoding.symbol_for_suit(self.value)


class Deck(str, Enum):
    """Tag distinguishing the two physical copies of a card."""

    A = "a"
    B = "b"


CardKey = tuple[Suit, int, Deck]


@dataclass(frozen=True, slots=True)
class Card:
    """Value object describing a physical card and its table flags."""

    suit: Suit
    value: int
    deck: Deck = Deck.A
    open: bool = False
    moving: bool = False

    @property
    def key(self) -> CardKey:
        """Identity of the physical card, ignoring the transient flags."""

        return (self.suit, self.value, self.deck)

    @property
    def colour(self) -> str:
        return self.suit.colour

    def same_card(self, other: "Card") -> bool:
        return self.key == other.key

    def opened(self) -> "Card":
        return self if self.open else replace(self, open=True)

    def marked(self) -> "Card":
        return self if self.moving else replace(self, moving=True)

    def unmarked(self) -> "Card":
        return replace(self, moving=False) if self.moving else self

    @property
    def code(self) -> str:
        return encoding.format_code(self.suit.value, self.value, self.deck.value)

    def label(self) -> str:
        """Create a display label suitable for CLI representations."""

        return encoding.label(self.suit.value, self.value, self.deck.value)

    @classmethod
    def from_code(cls, code: str) -> "Card":
        """Build a card from a code such as ``"d.12.a"`` or ``"s.k.o"``."""

        parsed = encoding.parse_code(code)
        return cls(
            suit=Suit(parsed.suit),
            value=parsed.value,
            deck=Deck(parsed.deck),
            open=parsed.open,
        )


def iter_full_deck() -> Iterable[Card]:
    """Yield the 104 physical cards of two merged decks, face down."""

    for suit in Suit:
        for value in range(encoding.MIN_VALUE, encoding.MAX_VALUE + 1):
            for deck in Deck:
                yield Card(suit=suit, value=value, deck=deck)


def build_deck(rng: random.Random | None = None) -> list[Card]:
    """Return a uniformly shuffled stack of all 104 cards."""

    cards = list(iter_full_deck())
    (rng or random.Random()).shuffle(cards)
    return cards


def cards_from_codes(codes: Iterable[str]) -> list[Card]:
    return [Card.from_code(code) for code in codes]

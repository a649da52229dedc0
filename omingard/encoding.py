"""Display conventions and textual card codes for Omingard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final

SUITS: Final[list[str]] = ["hearts", "diamonds", "spades", "clubs"]
SUIT_CODES: Final[dict[str, str]] = {"h": "hearts", "d": "diamonds", "s": "spades", "c": "clubs"}
CODE_FOR_SUIT: Final[dict[str, str]] = {suit: code for code, suit in SUIT_CODES.items()}
SUIT_SYMBOLS: Final[dict[str, str]] = {
    "spades": "♠",
    "hearts": "♥",
    "diamonds": "♦",
    "clubs": "♣",
}
RED_SUITS: Final[frozenset[str]] = frozenset({"hearts", "diamonds"})
BLACK_SUITS: Final[frozenset[str]] = frozenset({"spades", "clubs"})
FACE_LABELS: Final[dict[int, str]] = {1: "A", 11: "J", 12: "Q", 13: "K"}
LITERAL_VALUES: Final[dict[str, int]] = {label.lower(): value for value, label in FACE_LABELS.items()}
DECK_TAGS: Final[tuple[str, str]] = ("a", "b")
OPEN_TAG: Final[str] = "o"
MIN_VALUE: Final[int] = 1
MAX_VALUE: Final[int] = 13


@dataclass(frozen=True, slots=True)
class CardCode:
    """Typed container describing a parsed card code."""

    suit: str
    value: int
    deck: str
    open: bool


def colour(suit: str) -> str:
    """Return ``"red"`` or ``"black"`` for ``suit``."""

    if suit in RED_SUITS:
        return "red"
    if suit in BLACK_SUITS:
        return "black"
    raise ValueError(f"unknown suit '{suit}'")


def display_value(value: int) -> str:
    """Return the face label for ``value`` ("A", "2" .. "10", "J", "Q", "K")."""

    if not MIN_VALUE <= value <= MAX_VALUE:
        raise ValueError(f"card value {value} out of range")
    return FACE_LABELS.get(value, str(value))


def symbol_for_suit(suit: str) -> str:
    return SUIT_SYMBOLS[suit]


def value_from_literal(literal: str) -> int:
    """Transform ``"J"`` etc. back to 11 etc."""

    lowered = literal.strip().lower()
    if lowered in LITERAL_VALUES:
        return LITERAL_VALUES[lowered]
    try:
        value = int(lowered)
    except ValueError:
        raise ValueError(f"invalid card value '{literal}'") from None
    if not MIN_VALUE <= value <= MAX_VALUE:
        raise ValueError(f"card value {value} out of range")
    return value


def parse_code(code: str) -> CardCode:
    """Parse a code such as ``"d.12.a"`` (queen of diamonds, deck a).

    The optional third component is a deck tag (``a``/``b``) or ``o`` for an
    open card; the deck defaults to ``a``.
    """

    parts = code.strip().split(".")
    if len(parts) not in (2, 3):
        raise ValueError(f"invalid card code '{code}'")
    suit_code = parts[0].lower()
    if suit_code not in SUIT_CODES:
        raise ValueError(f"invalid suit in card code '{code}'")
    value = value_from_literal(parts[1])
    deck = DECK_TAGS[0]
    is_open = False
    if len(parts) == 3:
        option = parts[2].lower()
        if option in DECK_TAGS:
            deck = option
        elif option == OPEN_TAG:
            is_open = True
        else:
            raise ValueError(f"invalid option in card code '{code}'")
    return CardCode(suit=SUIT_CODES[suit_code], value=value, deck=deck, open=is_open)


def format_code(suit: str, value: int, deck: str) -> str:
    """Return the card code for the given components (inverse of ``parse_code``)."""

    return f"{CODE_FOR_SUIT[suit]}.{value}.{deck}"


def label(suit: str, value: int, deck: str) -> str:
    """Return a human-readable label, e.g. ``"♠ 7 (a)"``."""

    return f"{symbol_for_suit(suit)} {display_value(value)} ({deck})"

"""Top-level package for the Omingard patience engine."""

from . import actions, cards, encoding, game, history, protocol, rules, state, transactions

__all__ = [
    "actions",
    "cards",
    "encoding",
    "game",
    "history",
    "protocol",
    "rules",
    "state",
    "transactions",
]

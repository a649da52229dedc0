"""Game service owning the current table, its undo history and event log."""

from __future__ import annotations

import random
from dataclasses import dataclass, field

from . import actions, rules
from .cards import Card
from .history import History
from .protocol import ClickOutcome, resolve_click, resolve_column_click
from .state import OmingardConfig, TableState, new_game
from .transactions import serve_new_cards

__all__ = ["Game"]


@dataclass(slots=True)
class Game:
    """Single authoritative game: every change goes through ``_commit``."""

    config: OmingardConfig
    table: TableState
    history: History = field(init=False, repr=False)
    events: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.history = History(self.table)

    @classmethod
    def new(cls, config: OmingardConfig | None = None, rng: random.Random | None = None) -> "Game":
        """Shuffle, deal and start recording a fresh game."""

        config = config or OmingardConfig()
        game = cls(config=config, table=new_game(config, rng))
        game._log(f"New game: {game.table.stack_size} card(s) left in the stack")
        return game

    @property
    def policy(self) -> rules.EmptyColumnPolicy:
        return self.config.empty_column_policy

    @property
    def is_won(self) -> bool:
        return rules.is_won(self.table)

    @property
    def is_stuck(self) -> bool:
        return actions.is_stuck(self.table, self.policy)

    @property
    def marked_cards(self) -> list[Card]:
        return rules.cards_marked_for_moving(self.table)

    def _log(self, message: str) -> None:
        """Append ``message`` to the event log keeping it bounded."""

        self.events.append(message)
        excess = len(self.events) - self.config.max_event_log
        if excess > 0:
            del self.events[:excess]

    def _commit(self, table: TableState, message: str) -> TableState:
        self.table = table
        self.history.record(table)
        self._log(message)
        return table

    def click_card(self, card: Card) -> ClickOutcome:
        """Run the interaction protocol for a click on ``card``."""

        before = self.table
        marked = rules.cards_marked_for_moving(before)
        table, outcome = resolve_click(before, card)
        target = rules.column_for(before.columns, card)
        self._commit(table, _describe(outcome, card, marked, target.index if target else None))
        return outcome

    def click_card_at(self, column_index: int, row: int | None = None) -> ClickOutcome:
        """Click the card at ``row`` of a column (its last card when omitted)."""

        column = self.table.column_at(column_index)
        if row is None:
            if column.is_empty:
                raise rules.InvalidTarget(f"column {column_index} is empty")
            row = len(column.cards) - 1
        return self.click_card(self.table.card_at(column_index, row))

    def click_pile(self, pile_index: int) -> ClickOutcome:
        """Click the top card of a pile."""

        pile = self.table.pile_at(pile_index)
        if pile.top is None:
            self._log(f"Pile {pile_index + 1} is empty")
            return ClickOutcome.IGNORED
        return self.click_card(pile.top)

    def click_column(self, column_index: int) -> ClickOutcome:
        """Click the placeholder of an empty column."""

        marked = rules.cards_marked_for_moving(self.table)
        table, outcome = resolve_column_click(self.table, column_index, self.policy)
        head = marked[0] if marked else None
        self._commit(table, _describe(outcome, head, marked, column_index))
        return outcome

    def serve(self) -> int:
        """Hit me: serve new open cards and return how many were served."""

        table = serve_new_cards(self.table)
        served = self.table.stack_size - table.stack_size
        self._commit(table, f"Served {served} new card(s)" if served else "The stack is empty")
        return served

    def undo(self) -> bool:
        restored = self.history.undo()
        if restored is None:
            self._log("Nothing to undo")
            return False
        self.table = restored
        self._log("Undid the last step")
        return True

    def hint(self) -> actions.Action | None:
        """Suggest the auto-player's next action without applying it."""

        return actions.choose_action(self.table, self.policy, seen=self.history.entries)


def _describe(
    outcome: ClickOutcome,
    card: Card | None,
    marked: list[Card],
    column_index: int | None,
) -> str:
    label = card.label() if card is not None else "card"
    where = f"column {column_index + 1}" if column_index is not None else "a pile"
    if outcome is ClickOutcome.MARKED:
        return f"Marked {label} for moving"
    if outcome is ClickOutcome.MARKED_PILE_TOP:
        return f"Marked {label} on its pile"
    if outcome is ClickOutcome.DISCARDED:
        return f"Discarded {label}"
    if outcome is ClickOutcome.DISCARD_REJECTED:
        return f"Cannot discard {label}"
    if outcome is ClickOutcome.MOVED:
        return f"Moved {marked[0].label()} to {where}"
    if outcome is ClickOutcome.MOVE_REJECTED:
        if card is not None and marked and not marked[0].same_card(card):
            return f"Cannot move {marked[0].label()} to {where}; marked {label} instead"
        return f"Cannot move {marked[0].label()} to {where}"
    return f"Nothing to do with {label}"

"""Legal action generation and greedy auto-play for Omingard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Collection, Union

from .cards import Card
from .protocol import handle_card_click, resolve_column_click
from .rules import (
    EmptyColumnPolicy,
    can_be_appended_to,
    can_be_placed_on_empty,
    column_for,
    discardable,
    index_for,
    is_won,
    moveable,
)
from .state import Column, TableState
from .transactions import serve_new_cards, unmark_all_column_cards


@dataclass(frozen=True)
class DiscardAction:
    """Discard a column's last card onto its pile."""

    card: Card


@dataclass(frozen=True)
class MoveAction:
    """Move ``card`` and its children onto ``target_column``."""

    card: Card
    target_column: int


@dataclass(frozen=True)
class ServeAction:
    """Serve one new open card to every column."""


Action = Union[DiscardAction, MoveAction, ServeAction]


def _accepts(card: Card, target: Column, policy: EmptyColumnPolicy) -> bool:
    if target.is_empty:
        return can_be_placed_on_empty(card, target, policy)
    return target.last.open and can_be_appended_to(card, target)


def legal_discard_actions(table: TableState) -> list[DiscardAction]:
    """Return a discard for every column whose last card fits a pile."""

    actions: list[DiscardAction] = []
    for column in table.columns:
        last = column.last
        if last is not None and discardable(table, last):
            actions.append(DiscardAction(card=last))
    return actions


def legal_move_actions(
    table: TableState,
    policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY,
) -> list[MoveAction]:
    """Return every moveable run paired with every other column accepting it.

    Shifting a whole column into an empty one changes nothing and is left out.
    """

    actions: list[MoveAction] = []
    for source in table.columns:
        for row, card in enumerate(source.cards):
            if not moveable(source.cards, card):
                continue
            for target in table.columns:
                if target.index == source.index:
                    continue
                if row == 0 and target.is_empty:
                    continue
                if _accepts(card, target, policy):
                    actions.append(MoveAction(card=card, target_column=target.index))
    return actions


def is_stuck(table: TableState, policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY) -> bool:
    """Return ``True`` when nothing but undo is left to do."""

    if is_won(table) or table.stack:
        return False
    return not legal_discard_actions(table) and not legal_move_actions(table, policy)


def legal_actions(
    table: TableState,
    policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY,
) -> list[Action]:
    """Return discards, then moves, then serving while the stack lasts."""

    actions: list[Action] = [*legal_discard_actions(table), *legal_move_actions(table, policy)]
    if table.stack:
        actions.append(ServeAction())
    return actions


def apply_action(
    table: TableState,
    action: Action,
    policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY,
) -> TableState:
    """Perform ``action`` by clicking through the interaction protocol."""

    if isinstance(action, ServeAction):
        return serve_new_cards(table)

    table = unmark_all_column_cards(table)
    if isinstance(action, DiscardAction):
        table = handle_card_click(table, action.card)
        return handle_card_click(table, action.card)
    if isinstance(action, MoveAction):
        table = handle_card_click(table, action.card)
        target = table.column_at(action.target_column)
        if target.is_empty:
            return resolve_column_click(table, target.index, policy)[0]
        return handle_card_click(table, target.last)
    raise ValueError(f"Unknown action {action!r}")  # pragma: no cover


def choose_action(
    table: TableState,
    policy: EmptyColumnPolicy = EmptyColumnPolicy.ANY,
    seen: Collection[TableState] = (),
) -> Action | None:
    """Pick the next action for the greedy auto-player.

    Discards come first. Moves leading back to a table in ``seen`` are skipped;
    among the rest, moves uncovering a face-down card win, then moves emptying
    a column. Serving is the last resort; ``None`` means nothing is left.
    """

    discards = legal_discard_actions(table)
    if discards:
        return discards[0]

    best: MoveAction | None = None
    best_rank = (-1, -1)
    for move in legal_move_actions(table, policy):
        source = column_for(table.columns, move.card)
        head_index = index_for(source.cards, move.card)
        if apply_action(table, move, policy) in seen:
            continue
        uncovers = head_index > 0 and not source.cards[head_index - 1].open
        empties = head_index == 0
        rank = (int(uncovers), int(empties))
        if rank > best_rank:
            best, best_rank = move, rank
    if best is not None:
        return best
    if table.stack:
        return ServeAction()
    return None

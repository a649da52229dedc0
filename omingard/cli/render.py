"""Rendering helpers dedicated to the CLI experience."""

from __future__ import annotations

from typing import Sequence

from rich.console import RenderableType
from rich.panel import Panel

from .. import encoding
from ..actions import Action, DiscardAction, MoveAction
from ..cards import Card
from ..state import TableState
from .views import TableSummaryView

_SUIT_STYLES = {
    "red": "bold red",
    "black": "bold white",
}
FACE_DOWN = "[dim]▒▒[/dim]"


def format_card(card: Card) -> str:
    """Return a Rich-rendered label for ``card``."""

    if not card.open:
        return FACE_DOWN
    style = _SUIT_STYLES[card.colour]
    suffix = "′" if card.deck.value == "b" else ""
    text = f"[{style}]{card.suit.symbol}{encoding.display_value(card.value)}{suffix}[/{style}]"
    if card.moving:
        return f"[reverse]{text}[/reverse]"
    return text


def format_pile_placeholder(suit_value: str) -> str:
    style = _SUIT_STYLES[encoding.colour(suit_value)]
    return f"[dim {style}]{encoding.symbol_for_suit(suit_value)}[/dim {style}]"


def describe_action(action: Action | None) -> str:
    """Return a human-readable description of an auto-player action."""

    if action is None:
        return "No moves left"
    if isinstance(action, DiscardAction):
        return f"Discard {action.card.label()}"
    if isinstance(action, MoveAction):
        return f"Move {action.card.label()} to column {action.target_column + 1}"
    return "Hit me: serve new cards"


def render_table(
    table: TableState,
    events: Sequence[str] = (),
    *,
    status: str = "",
    title: str = "Omingard",
) -> RenderableType:
    """Return a Rich panel describing the current table state."""

    view = TableSummaryView(
        table=table,
        events=events,
        status=status,
        card_formatter=format_card,
        placeholder_formatter=format_pile_placeholder,
    )
    return Panel(view.render(), title=title, padding=(0, 1), border_style="green")

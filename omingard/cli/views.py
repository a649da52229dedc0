"""Composable view primitives for the Omingard CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table

from ..cards import Card
from ..rules import TOTAL_CARDS
from ..state import TableState


@dataclass(slots=True)
class TableSummaryView:
    """Renderable summarising columns, piles, stack and the event log."""

    table: TableState
    events: Sequence[str]
    status: str
    card_formatter: Callable[[Card], str]
    placeholder_formatter: Callable[[str], str]

    def _columns_table(self) -> Table:
        grid = Table(box=box.SIMPLE, expand=False, show_edge=False)
        grid.add_column("#", justify="right", style="dim")
        for column in self.table.columns:
            grid.add_column(str(column.index + 1), justify="center")

        depth = max((len(column.cards) for column in self.table.columns), default=0)
        for row in range(max(depth, 1)):
            cells = [str(row + 1)]
            for column in self.table.columns:
                if row < len(column.cards):
                    cells.append(self.card_formatter(column.cards[row]))
                elif row == 0:
                    cells.append("[dim]··[/dim]")
                else:
                    cells.append("")
            grid.add_row(*cells)
        return grid

    def _piles_panel(self) -> Panel:
        grid = Table.grid(padding=(0, 2))
        for _ in self.table.piles:
            grid.add_column(justify="center")
        grid.add_row(*(f"[dim]P{pile.index + 1}[/dim]" for pile in self.table.piles))
        cells = []
        for pile in self.table.piles:
            if pile.top is None:
                cells.append(self.placeholder_formatter(pile.suit.value))
            else:
                cells.append(f"{self.card_formatter(pile.top)} [dim]x{len(pile.cards)}[/dim]")
        grid.add_row(*cells)
        return Panel(grid, title="Piles", box=box.SQUARE, border_style="blue")

    def _metadata_panel(self) -> Panel:
        grid = Table.grid(expand=True)
        grid.add_column(justify="left")
        grid.add_row(f"[cyan]Stack[/cyan]: {self.table.stack_size} card(s)")
        grid.add_row(f"[cyan]Discarded[/cyan]: {self.table.discarded_count} / {TOTAL_CARDS}")
        if self.status:
            grid.add_row(self.status)
        return Panel(grid, title="Table State", box=box.SQUARE, border_style="blue")

    def _event_panel(self) -> Panel:
        log_table = Table.grid(expand=True)
        log_table.add_column(justify="left")
        if self.events:
            total = len(self.events)
            for offset, line in enumerate(reversed(self.events)):
                log_table.add_row(f"[dim]{total - offset}.[/dim] {line}")
        else:
            log_table.add_row("[dim]Event log will appear here[/dim]")
        return Panel(log_table, title="Event Log", border_style="magenta", box=box.SIMPLE)

    def render(self) -> RenderableType:
        return Group(
            self._columns_table(),
            self._piles_panel(),
            self._metadata_panel(),
            self._event_panel(),
        )

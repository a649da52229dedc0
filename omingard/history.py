"""Undo history for Omingard tables."""

from __future__ import annotations

from dataclasses import dataclass, field

from .state import TableState

__all__ = ["History", "undo"]


@dataclass(slots=True)
class History:
    """Linear log of committed tables; the first entry can never be undone."""

    initial: TableState
    entries: list[TableState] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.entries = [self.initial]

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def current(self) -> TableState:
        return self.entries[-1]

    @property
    def can_undo(self) -> bool:
        return len(self.entries) > 1

    def record(self, table: TableState) -> bool:
        """Append ``table`` unless it equals the current tail."""

        if table == self.entries[-1]:
            return False
        self.entries.append(table)
        return True

    def undo(self) -> TableState | None:
        """Drop the latest entry and return the table to restore."""

        if not self.can_undo:
            return None
        self.entries.pop()
        return self.entries[-1]


def undo(history: History) -> TableState:
    """Undo one step; the unchanged current table is returned when refused."""

    restored = history.undo()
    return restored if restored is not None else history.current

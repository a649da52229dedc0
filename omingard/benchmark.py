"""Self-play harness measuring how far the greedy auto-player gets."""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import Sequence

import numpy as np

from . import actions, rules
from .state import OmingardConfig, TableState, new_game

__all__ = ["GameOutcome", "SelfPlayReport", "play_greedy_game", "run_self_play"]

DEFAULT_MAX_STEPS = 2000


@dataclass(frozen=True, slots=True)
class GameOutcome:
    """Result of a single auto-played game."""

    seed: int
    won: bool
    stuck: bool
    discarded: int
    serves: int
    steps: int


@dataclass(frozen=True, slots=True)
class SelfPlayReport:
    """Aggregate statistics over a batch of auto-played games."""

    outcomes: Sequence[GameOutcome]
    win_rate: float
    stuck_rate: float
    mean_discarded: float
    median_discarded: float
    mean_serves: float


def play_greedy_game(
    table: TableState,
    policy: rules.EmptyColumnPolicy = rules.EmptyColumnPolicy.ANY,
    *,
    seed: int = 0,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> GameOutcome:
    """Play ``table`` to the end with ``actions.choose_action``."""

    seen: set[TableState] = {table}
    serves = 0
    steps = 0
    while steps < max_steps:
        action = actions.choose_action(table, policy, seen)
        if action is None:
            break
        if isinstance(action, actions.ServeAction):
            serves += 1
        table = actions.apply_action(table, action, policy)
        seen.add(table)
        steps += 1

    return GameOutcome(
        seed=seed,
        won=rules.is_won(table),
        stuck=actions.is_stuck(table, policy),
        discarded=table.discarded_count,
        serves=serves,
        steps=steps,
    )


def run_self_play(
    games: int,
    seed: int,
    config: OmingardConfig | None = None,
    *,
    max_steps: int = DEFAULT_MAX_STEPS,
) -> SelfPlayReport:
    """Auto-play ``games`` freshly shuffled games derived from ``seed``."""

    if games <= 0:
        raise ValueError("games must be positive")
    config = config or OmingardConfig()
    rng = random.Random(seed)

    outcomes: list[GameOutcome] = []
    for _ in range(games):
        game_seed = rng.randrange(2**32)
        table = new_game(config, random.Random(game_seed))
        outcomes.append(
            play_greedy_game(table, config.empty_column_policy, seed=game_seed, max_steps=max_steps)
        )

    won = np.array([outcome.won for outcome in outcomes], dtype=bool)
    stuck = np.array([outcome.stuck for outcome in outcomes], dtype=bool)
    discarded = np.array([outcome.discarded for outcome in outcomes], dtype=np.int16)
    serves = np.array([outcome.serves for outcome in outcomes], dtype=np.int16)

    return SelfPlayReport(
        outcomes=tuple(outcomes),
        win_rate=float(won.mean()),
        stuck_rate=float(stuck.mean()),
        mean_discarded=float(discarded.mean()),
        median_discarded=float(np.median(discarded)),
        mean_serves=float(serves.mean()),
    )

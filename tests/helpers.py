from __future__ import annotations

import random
from typing import List, Optional, Sequence

from esper import World

from candy.components.candy import Grid
from candy.config import CascadeTiming
from candy.session import GameSession
from candy.systems.board_ops import grid_from_colors
from candy.utils.game_state import get_board

BASE_COLORS = ['red', 'blue', 'green', 'yellow', 'purple', 'orange']


def match_free_colors(size: int = 8) -> List[List[Optional[str]]]:
    """Diagonal stripes: no two neighbours share a color in any row or column."""
    return [[BASE_COLORS[(2 * r + c) % len(BASE_COLORS)] for c in range(size)] for r in range(size)]


def install_grid(world: World, colors: Sequence[Sequence[Optional[str]]]) -> Grid:
    grid = grid_from_colors(colors)
    get_board(world).grid = grid
    return grid


def make_session(seed: int = 7, **kwargs) -> GameSession:
    kwargs.setdefault('timing', CascadeTiming())
    return GameSession(rng=random.Random(seed), **kwargs)


def drive(session: GameSession, seconds: float, dt: float = 0.02) -> None:
    steps = int(round(seconds / dt))
    for _ in range(steps):
        session.advance(dt)


def matchable_colors(size: int = 8) -> List[List[Optional[str]]]:
    """Swapping (0, 2) with (1, 2) completes a red run on row 0."""
    colors = match_free_colors(size)
    colors[0][1] = 'red'
    colors[1][2] = 'red'
    return colors

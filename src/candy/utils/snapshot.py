from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet, Optional

from esper import World

from candy.components.animation_state import SwapPair
from candy.components.candy import Candy, Grid, Position
from candy.components.game_state import GamePhase
from candy.systems.board_ops import swap_direction
from candy.utils.game_state import (
    get_animation_state,
    get_board,
    get_game_state,
    get_score_board,
    get_selection,
)


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """Read-only view of a session handed to rendering and tests."""

    grid: Grid
    selection: Optional[Position]
    score: int
    moves: int
    clearing: FrozenSet[Position]
    falling: FrozenSet[Position]
    last_swap: Optional[SwapPair]
    phase: GamePhase
    animating: bool

    @property
    def rows(self) -> int:
        return len(self.grid)

    @property
    def cols(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    def candy_at(self, row: int, col: int) -> Optional[Candy]:
        return self.grid[row][col]

    def swap_direction(self, row: int, col: int) -> Optional[str]:
        return swap_direction((row, col), self.last_swap)


def take_snapshot(world: World) -> BoardSnapshot:
    anim = get_animation_state(world)
    score = get_score_board(world)
    state = get_game_state(world)
    return BoardSnapshot(
        grid=get_board(world).grid,
        selection=get_selection(world).position,
        score=score.score,
        moves=score.moves,
        clearing=anim.clearing,
        falling=anim.falling,
        last_swap=anim.last_swap,
        phase=state.phase,
        animating=state.animating,
    )

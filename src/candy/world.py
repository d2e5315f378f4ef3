import random
from typing import Optional, Sequence

from esper import World

from candy.components.animation_state import AnimationState
from candy.components.board import Board
from candy.components.candy import Grid
from candy.components.game_state import GameState
from candy.components.score_board import ScoreBoard
from candy.components.selection import Selection
from candy.constants import CANDY_COLORS, GRID_SIZE
from candy.events.bus import EventBus
from candy.systems.board_ops import build_initial_grid


def create_world(
    event_bus: EventBus,
    *,
    size: int = GRID_SIZE,
    rng: random.Random | None = None,
    palette: Sequence[str] = CANDY_COLORS,
    max_initial_attempts: Optional[int] = None,
) -> World:
    """Create the session world with a single state entity holding every singleton."""
    world = World()
    setattr(world, "random", rng or random.Random())

    board = Board(rows=size, cols=size, palette=tuple(palette),
                  max_initial_attempts=max_initial_attempts)
    board.grid = fresh_grid(world, board)
    world.create_entity(
        board,
        Selection(),
        ScoreBoard(),
        GameState(),
        AnimationState(),
    )
    return world


def fresh_grid(world: World, board: Board) -> Grid:
    """Roll a new match-free grid for ``board`` using the world's random source."""
    return build_initial_grid(
        board.rows,
        getattr(world, "random", None),
        board.palette,
        max_attempts=board.max_initial_attempts,
    )

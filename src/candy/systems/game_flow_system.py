"""Session lifecycle: reset and teardown."""
from __future__ import annotations

import logging
from typing import Optional

from esper import World

from candy.components.game_state import GamePhase
from candy.events.bus import (
    EVENT_BOARD_CHANGED,
    EVENT_GAME_RESET,
    EVENT_RESET_REQUEST,
    EVENT_SCORE_CHANGED,
    EventBus,
)
from candy.systems.timer import TimerSystem
from candy.utils.game_state import (
    get_animation_state,
    get_board,
    get_game_state,
    get_score_board,
    get_selection,
    set_phase,
)
from candy.world import fresh_grid

logger = logging.getLogger(__name__)


class GameFlowSystem:
    """Owns reset: every pending continuation is dropped before state is rebuilt.

    In-flight progress (score earned by a cascade that has not settled yet) is
    discarded along with it.
    """

    def __init__(self, world: World, event_bus: EventBus, *, timers: Optional[TimerSystem] = None) -> None:
        self.world = world
        self.event_bus = event_bus
        self.timers = timers or getattr(world, "timers")
        self.event_bus.subscribe(EVENT_RESET_REQUEST, self._on_reset_request)

    def _on_reset_request(self, sender, **kwargs) -> None:
        self.reset()

    def reset(self) -> None:
        cancelled = self.timers.cancel_all()
        board = get_board(self.world)
        board.grid = fresh_grid(self.world, board)
        score = get_score_board(self.world)
        score.score = 0
        score.moves = 0
        get_selection(self.world).position = None
        get_animation_state(self.world).clear()
        get_game_state(self.world).cascade_depth = 0
        set_phase(self.world, self.event_bus, GamePhase.IDLE, animating=False)
        logger.info("Game reset (%d pending step(s) cancelled)", cancelled)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0)
        self.event_bus.emit(EVENT_GAME_RESET)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='reset')

    def teardown(self) -> None:
        self.timers.cancel_all()

"""Headless game session: one world, one bus, the systems wired together."""
from __future__ import annotations

import random
from typing import Optional, Sequence

from candy.config import CascadeTiming
from candy.constants import CANDY_COLORS, GRID_SIZE
from candy.events.bus import EVENT_RESET_REQUEST, EVENT_TICK, EVENT_TILE_CLICK, EventBus
from candy.systems.board import BoardSystem
from candy.systems.game_flow_system import GameFlowSystem
from candy.systems.match_resolution import MatchResolutionSystem
from candy.systems.swap import SwapSystem
from candy.systems.timer import TimerSystem
from candy.utils.snapshot import BoardSnapshot, take_snapshot
from candy.world import create_world


class GameSession:
    """Owns every piece of mutable state for one game.

    Several sessions can coexist; nothing is shared between them. Commands go
    through the event bus so a front-end can drive the same systems directly.
    """

    def __init__(
        self,
        event_bus: Optional[EventBus] = None,
        *,
        size: int = GRID_SIZE,
        rng: random.Random | None = None,
        palette: Sequence[str] = CANDY_COLORS,
        timing: Optional[CascadeTiming] = None,
        max_initial_attempts: Optional[int] = None,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.timing = timing or CascadeTiming()
        self.world = create_world(
            self.event_bus,
            size=size,
            rng=rng,
            palette=palette,
            max_initial_attempts=max_initial_attempts,
        )
        self.timers = TimerSystem(self.world, self.event_bus)
        self.match_resolution = MatchResolutionSystem(self.world, self.event_bus, timing=self.timing,
                                                      timers=self.timers)
        self.swap_system = SwapSystem(self.world, self.event_bus, resolution=self.match_resolution,
                                      timing=self.timing, timers=self.timers)
        self.board_system = BoardSystem(self.world, self.event_bus)
        self.game_flow = GameFlowSystem(self.world, self.event_bus, timers=self.timers)
        self._closed = False

    def select(self, row: int, col: int) -> None:
        if self._closed:
            return
        self.event_bus.emit(EVENT_TILE_CLICK, row=row, col=col)

    def reset(self) -> None:
        self.event_bus.emit(EVENT_RESET_REQUEST)

    def advance(self, dt: float) -> None:
        """Move the animation clock forward by ``dt`` seconds."""
        self.event_bus.emit(EVENT_TICK, dt=dt)

    def run_until_idle(self, *, step: float = 1 / 60, max_time: float = 60.0) -> float:
        """Tick until no continuation is pending. Returns the simulated time spent."""
        elapsed = 0.0
        while self.timers.pending() and elapsed < max_time:
            self.advance(step)
            elapsed += step
        return elapsed

    def snapshot(self) -> BoardSnapshot:
        return take_snapshot(self.world)

    def close(self) -> None:
        """Teardown: no scheduled step may touch the world afterwards."""
        self.game_flow.teardown()
        self._closed = True

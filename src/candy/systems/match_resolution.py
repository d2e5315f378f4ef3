import logging
from typing import List, Optional, Tuple

from esper import World

from candy.components.candy import Grid
from candy.components.game_state import GamePhase
from candy.config import CascadeTiming
from candy.constants import SCORE_PER_CANDY
from candy.events.bus import (EventBus, EVENT_MATCH_FOUND, EVENT_MATCH_CLEARED, EVENT_GRAVITY_APPLIED,
                              EVENT_REFILL_COMPLETED, EVENT_CASCADE_STEP, EVENT_CASCADE_COMPLETE,
                              EVENT_BOARD_CHANGED, EVENT_SCORE_CHANGED)
from candy.systems.board_ops import (find_all_matches, clear_positions, apply_gravity, refill_empty_cells,
                                     moved_positions, filled_positions)
from candy.systems.timer import TimerSystem
from candy.utils.game_state import (get_animation_state, get_board, get_game_state, get_score_board,
                                    set_phase)

logger = logging.getLogger(__name__)


class MatchResolutionSystem:
    """Runs the clear -> gravity -> refill loop until the board is stable.

    Each pass yields back to the TimerSystem between steps so the front-end can
    animate the published clearing/falling sets.
    """
    def __init__(self, world: World, event_bus: EventBus, *,
                 timing: Optional[CascadeTiming] = None, timers: Optional[TimerSystem] = None):
        self.world = world
        self.event_bus = event_bus
        self.timing = timing or CascadeTiming()
        self.timers = timers or getattr(world, "timers")
        self.pending_match_positions: List[Tuple[int, int]] = []
        setattr(self.world, "match_resolution", self)

    def resolve(self, grid: Grid, *, settle: bool = True) -> bool:
        """Start one pass over ``grid``. Returns False when nothing matched.

        With ``settle`` False a match-free grid leaves the phase untouched so the
        caller can keep input locked (used by the invalid swap reversion).
        """
        state = get_game_state(self.world)
        matches = find_all_matches(grid)
        if not matches:
            depth = state.cascade_depth
            state.cascade_depth = 0
            if settle:
                set_phase(self.world, self.event_bus, GamePhase.IDLE, animating=False)
            if depth:
                logger.debug("Cascade settled after %d pass(es)", depth)
                self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
            return False

        state.cascade_depth += 1
        depth = state.cascade_depth
        set_phase(self.world, self.event_bus, GamePhase.RESOLVING)
        self.pending_match_positions = matches

        anim = get_animation_state(self.world)
        anim.clearing = frozenset(matches)
        score = get_score_board(self.world)
        gained = len(matches) * SCORE_PER_CANDY
        score.score += gained
        logger.debug("Cascade pass %d clears %d candies (+%d)", depth, len(matches), gained)

        self.event_bus.emit(EVENT_MATCH_FOUND, positions=matches, size=len(matches), depth=depth)
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=depth, positions=matches)
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=score.score, delta=gained)

        cleared = clear_positions(grid, matches)
        self.timers.schedule_after(self.timing.cascade_step, lambda: self._after_clear(cleared),
                                   label='cascade_gravity')
        return True

    def _after_clear(self, cleared: Grid) -> None:
        anim = get_animation_state(self.world)
        anim.clearing = frozenset()
        fallen = apply_gravity(cleared)
        falling = moved_positions(cleared, fallen)
        get_board(self.world).grid = fallen
        anim.falling = frozenset(falling)
        self.event_bus.emit(EVENT_MATCH_CLEARED, positions=self.pending_match_positions)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, falling=falling)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='gravity')
        self.timers.schedule_after(self.timing.cascade_step, lambda: self._after_gravity(fallen),
                                   label='cascade_refill')

    def _after_gravity(self, fallen: Grid) -> None:
        board = get_board(self.world)
        filled = refill_empty_cells(fallen, getattr(self.world, "random", None), board.palette)
        new_tiles = filled_positions(fallen, filled)
        board.grid = filled
        anim = get_animation_state(self.world)
        anim.falling = anim.falling | frozenset(new_tiles)
        self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='refill')
        self.timers.schedule_after(self.timing.cascade_step, lambda: self._after_refill(filled),
                                   label='cascade_next')

    def _after_refill(self, filled: Grid) -> None:
        get_animation_state(self.world).falling = frozenset()
        self.pending_match_positions = []
        self.resolve(filled)

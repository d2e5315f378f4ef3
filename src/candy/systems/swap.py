import logging
from typing import Optional, Tuple

from esper import World

from candy.components.game_state import GamePhase
from candy.config import CascadeTiming
from candy.events.bus import (EventBus, EVENT_TILE_SWAP_REQUEST, EVENT_TILE_SWAP_COMMITTED,
                              EVENT_TILE_SWAP_VALID, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REVERTED,
                              EVENT_BOARD_CHANGED)
from candy.systems.board_ops import are_adjacent, in_bounds, swap_candies
from candy.systems.match_resolution import MatchResolutionSystem
from candy.systems.timer import TimerSystem
from candy.utils.game_state import (get_animation_state, get_board, get_game_state, get_score_board,
                                    set_phase)

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class SwapSystem:
    """Commits player swaps and reverts the ones that produce no match.

    Sequence for a swap request (src, dst):

    * commit: count the move, publish the swapped grid and the swap hint, lock input;
    * after ``timing.swap``: one resolve pass. A match hands control to the cascade;
    * otherwise, after ``timing.reverse_prep`` the reversed hint is published, after
      ``timing.reverse_observe`` the candies are swapped back and after
      ``timing.reverse`` the hint clears and input unlocks.
    """
    def __init__(self, world: World, event_bus: EventBus, *,
                 resolution: Optional[MatchResolutionSystem] = None,
                 timing: Optional[CascadeTiming] = None, timers: Optional[TimerSystem] = None):
        self.world = world
        self.event_bus = event_bus
        self.resolution = resolution or getattr(world, "match_resolution")
        self.timing = timing or self.resolution.timing
        self.timers = timers or getattr(world, "timers")
        self.event_bus.subscribe(EVENT_TILE_SWAP_REQUEST, self.on_swap_request)

    def on_swap_request(self, sender, **kwargs):
        src = kwargs.get('src')
        dst = kwargs.get('dst')
        if not src or not dst:
            return
        state = get_game_state(self.world)
        if not state.accepts_input:
            return
        board = get_board(self.world)
        if not (in_bounds(board.grid, src) and in_bounds(board.grid, dst)) or not are_adjacent(src, dst):
            logger.warning("Rejected swap request %s -> %s", src, dst)
            return
        score = get_score_board(self.world)
        score.moves += 1
        get_animation_state(self.world).last_swap = (src, dst)
        board.grid = swap_candies(board.grid, src, dst)
        set_phase(self.world, self.event_bus, GamePhase.SWAPPING)
        logger.debug("Swap committed %s <-> %s (move %d)", src, dst, score.moves)
        self.event_bus.emit(EVENT_TILE_SWAP_COMMITTED, src=src, dst=dst, moves=score.moves)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='swap')
        self.timers.schedule_after(self.timing.swap, lambda: self._after_swap(src, dst), label='swap_resolve')

    def _after_swap(self, src: Position, dst: Position) -> None:
        matched = self.resolution.resolve(get_board(self.world).grid, settle=False)
        get_animation_state(self.world).last_swap = None
        if matched:
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=src, dst=dst)
            return
        set_phase(self.world, self.event_bus, GamePhase.REVERTING)
        self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=src, dst=dst)
        self.timers.schedule_after(self.timing.reverse_prep, lambda: self._publish_reverse_hint(src, dst),
                                   label='revert_prepare')

    def _publish_reverse_hint(self, src: Position, dst: Position) -> None:
        get_animation_state(self.world).last_swap = (dst, src)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='revert_hint')
        self.timers.schedule_after(self.timing.reverse_observe, lambda: self._swap_back(src, dst),
                                   label='revert_swap')

    def _swap_back(self, src: Position, dst: Position) -> None:
        board = get_board(self.world)
        board.grid = swap_candies(board.grid, src, dst)
        self.event_bus.emit(EVENT_BOARD_CHANGED, reason='revert')
        self.timers.schedule_after(self.timing.reverse, lambda: self._finish_revert(src, dst),
                                   label='revert_finish')

    def _finish_revert(self, src: Position, dst: Position) -> None:
        get_animation_state(self.world).last_swap = None
        set_phase(self.world, self.event_bus, GamePhase.IDLE, animating=False)
        logger.debug("Swap %s <-> %s reverted", src, dst)
        self.event_bus.emit(EVENT_TILE_SWAP_REVERTED, src=src, dst=dst)

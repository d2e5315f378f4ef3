import logging
from typing import Optional, Tuple

from esper import World

from candy.components.game_state import GamePhase
from candy.events.bus import (EventBus, EVENT_TILE_CLICK, EVENT_TILE_CLICK_REJECTED, EVENT_TILE_SELECTED,
                              EVENT_TILE_DESELECTED, EVENT_TILE_SWAP_REQUEST, EVENT_MOUSE_PRESS)
from candy.systems.board_ops import are_adjacent, in_bounds
from candy.utils.game_state import get_board, get_game_state, get_selection, set_phase

logger = logging.getLogger(__name__)

# Arcade reports the right mouse button as 4.
MOUSE_BUTTON_RIGHT = 4


class BoardSystem:
    """Turns tile clicks into selections and swap requests."""

    def __init__(self, world: World, event_bus: EventBus):
        self.world = world
        self.event_bus = event_bus
        self.event_bus.subscribe(EVENT_TILE_CLICK, self.on_tile_click)
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    @property
    def selected(self) -> Optional[Tuple[int, int]]:
        return get_selection(self.world).position

    def on_tile_click(self, sender, **kwargs):
        row = kwargs.get('row')
        col = kwargs.get('col')
        if row is None or col is None:
            return
        if not get_game_state(self.world).accepts_input:
            logger.debug("Ignoring click at %s while animating", (row, col))
            return
        position = (row, col)
        if not in_bounds(get_board(self.world).grid, position):
            logger.warning("Rejected click outside the board at %s", position)
            self.event_bus.emit(EVENT_TILE_CLICK_REJECTED, row=row, col=col, reason='out_of_bounds')
            return
        selection = get_selection(self.world)
        if selection.position is None:
            self._select(position)
        elif selection.position == position:
            self._deselect(reason='same_tile')
        elif are_adjacent(selection.position, position):
            src = selection.position
            selection.position = None
            self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=src, dst=position)
        else:
            # Change selection to new tile
            self._select(position)

    def on_mouse_press(self, sender, **kwargs):
        # Right-click clears the current selection.
        if kwargs.get('button') != MOUSE_BUTTON_RIGHT:
            return
        if not get_game_state(self.world).accepts_input:
            return
        if get_selection(self.world).position is not None:
            self._deselect(reason='right_click')

    def _select(self, position: Tuple[int, int]) -> None:
        get_selection(self.world).position = position
        set_phase(self.world, self.event_bus, GamePhase.AWAITING_SELECTION)
        self.event_bus.emit(EVENT_TILE_SELECTED, row=position[0], col=position[1])

    def _deselect(self, *, reason: str) -> None:
        selection = get_selection(self.world)
        prev = selection.position
        selection.position = None
        set_phase(self.world, self.event_bus, GamePhase.IDLE)
        if prev is not None:
            self.event_bus.emit(EVENT_TILE_DESELECTED, reason=reason, prev_row=prev[0], prev_col=prev[1])

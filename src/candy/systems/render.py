from __future__ import annotations

from candy.components.game_state import GamePhase
from candy.config import CascadeTiming
from candy.events.bus import (EventBus, EVENT_TICK, EVENT_MATCH_FOUND, EVENT_GRAVITY_APPLIED,
                              EVENT_REFILL_COMPLETED, EVENT_BOARD_CHANGED)
from candy.rendering.board_renderer import build_tile_draws, selection_outline
from candy.ui.layout import compute_board_geometry
from candy.utils.snapshot import take_snapshot
from esper import World


class RenderSystem:
    """Draws the board and the score/moves header with arcade."""
    def __init__(self, world: World, event_bus: EventBus, window, *, timing: CascadeTiming | None = None):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self.timing = timing or CascadeTiming()
        self._time = 0.0
        self._clear_started = 0.0
        self._fall_started = 0.0
        self._swap_started = 0.0
        self.last_draws = []
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.event_bus.subscribe(EVENT_MATCH_FOUND, self.on_match_found)
        self.event_bus.subscribe(EVENT_GRAVITY_APPLIED, self.on_fall_started)
        self.event_bus.subscribe(EVENT_REFILL_COMPLETED, self.on_fall_started)
        self.event_bus.subscribe(EVENT_BOARD_CHANGED, self.on_board_changed)

    def on_tick(self, sender, **kwargs):
        self._time += float(kwargs.get('dt', 1/60))

    def on_match_found(self, sender, **kwargs):
        self._clear_started = self._time

    def on_fall_started(self, sender, **kwargs):
        self._fall_started = self._time

    def on_board_changed(self, sender, **kwargs):
        if kwargs.get('reason') in ('swap', 'revert'):
            self._swap_started = self._time

    def _progress(self, started: float, duration: float) -> float:
        if duration <= 0.0:
            return 1.0
        return min(1.0, (self._time - started) / duration)

    def build_frame(self):
        snapshot = take_snapshot(self.world)
        tile_size, start_x, start_y = compute_board_geometry(
            self.window.width, self.window.height, snapshot.rows, snapshot.cols)
        swap_duration = self.timing.reverse if snapshot.phase == GamePhase.REVERTING else self.timing.swap
        self.last_draws = build_tile_draws(
            snapshot, tile_size, start_x, start_y,
            clear_progress=self._progress(self._clear_started, self.timing.cascade_step),
            fall_progress=self._progress(self._fall_started, self.timing.cascade_step),
            swap_progress=self._progress(self._swap_started, swap_duration),
        )
        return snapshot, tile_size, start_x, start_y

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        snapshot, tile_size, start_x, start_y = self.build_frame()
        board_w = snapshot.cols * tile_size
        board_h = snapshot.rows * tile_size
        arcade.draw_lbwh_rectangle_filled(start_x - 8, start_y - 8, board_w + 16, board_h + 16, (88, 28, 135, 120))
        for draw in self.last_draws:
            arcade.draw_circle_filled(draw.x, draw.y, draw.radius, draw.color)
            arcade.draw_circle_filled(draw.x, draw.y, draw.radius * 0.35, (255, 255, 255, 200))
        outline = selection_outline(self.last_draws)
        if outline is not None:
            arcade.draw_circle_outline(outline.x, outline.y, outline.radius + 3, arcade.color.WHITE, 3)
        header_y = start_y + board_h + 24
        arcade.draw_text(f"Score: {snapshot.score}", start_x, header_y, arcade.color.WHITE, 20)
        arcade.draw_text(f"Moves: {snapshot.moves}", start_x + board_w, header_y, arcade.color.WHITE, 20,
                         anchor_x="right")

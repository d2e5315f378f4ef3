"""Entry point for the Candy Cascade match-three game.

Sets up the game session, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color, key
from candy.events.bus import EVENT_MOUSE_PRESS, EVENT_RESET_REQUEST, EVENT_TICK
from candy.session import GameSession
from candy.systems.input import InputSystem
from candy.systems.render import RenderSystem


class CandyCascadeWindow(Window):
    def __init__(self):
        super().__init__(800, 700, "Candy Cascade")
        self.set_update_rate(1/60)
        self.session = GameSession()
        self.event_bus = self.session.event_bus
        self.render_system = RenderSystem(self.session.world, self.event_bus, self, timing=self.session.timing)
        # InputSystem expects (event_bus, window)
        self.input_system = InputSystem(self.event_bus, self, self.session.world)
        set_background_color(color.DARK_SLATE_BLUE)

    def on_draw(self):
        self.clear()
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == key.R:
            self.event_bus.emit(EVENT_RESET_REQUEST)

    def on_close(self):
        self.session.close()
        super().on_close()


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    window = CandyCascadeWindow()
    run()

if __name__ == "__main__":
    main()

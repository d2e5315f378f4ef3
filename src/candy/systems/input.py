from candy.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from candy.ui.layout import compute_board_geometry
from candy.utils.game_state import get_board

# Arcade reports the left mouse button as 1.
MOUSE_BUTTON_LEFT = 1


class InputSystem:
    """Maps raw mouse presses onto board cells."""
    def __init__(self, event_bus: EventBus, window, world=None):
        self.event_bus = event_bus
        self.window = window
        self.world = world  # optional; supplies the board dimensions
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button')
        if x is None or y is None:
            return
        # Non-left buttons fall through; BoardSystem listens for right-click directly.
        if button != MOUSE_BUTTON_LEFT:
            return
        cell = self.cell_at(x, y)
        if cell is not None:
            self.event_bus.emit(EVENT_TILE_CLICK, row=cell[0], col=cell[1])

    def cell_at(self, x: float, y: float):
        rows, cols = self._dimensions()
        tile_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, rows, cols)
        if x < start_x or x >= start_x + cols * tile_size:
            return None
        if y < start_y or y >= start_y + rows * tile_size:
            return None
        col = int((x - start_x) // tile_size)
        row = rows - 1 - int((y - start_y) // tile_size)
        if 0 <= row < rows and 0 <= col < cols:
            return row, col
        return None

    def _dimensions(self):
        if self.world is None:
            from candy.constants import GRID_ROWS, GRID_COLS
            return GRID_ROWS, GRID_COLS
        board = get_board(self.world)
        return board.rows, board.cols

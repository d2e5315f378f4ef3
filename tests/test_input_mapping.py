import pytest

from candy.events.bus import EventBus, EVENT_MOUSE_PRESS, EVENT_TILE_CLICK
from candy.systems.input import InputSystem
from candy.ui.layout import cell_center, compute_board_geometry
from tests.helpers import make_session


class DummyWindow:
    def __init__(self, width=800, height=700):
        self.width = width
        self.height = height


class ClickCapture:
    def __init__(self, bus: EventBus):
        self.received = []
        bus.subscribe(EVENT_TILE_CLICK, self.on_click)

    def on_click(self, sender, **payload):
        self.received.append((payload.get('row'), payload.get('col')))


@pytest.fixture
def setup_input():
    bus = EventBus()
    window = DummyWindow()
    input_sys = InputSystem(bus, window)
    return bus, window, input_sys, ClickCapture(bus)


@pytest.mark.parametrize('cell', [(0, 0), (7, 7), (0, 7), (3, 5)])
def test_click_center_maps_to_cell(setup_input, cell):
    bus, window, _, capture = setup_input
    tile_size, start_x, start_y = compute_board_geometry(window.width, window.height)
    x, y = cell_center(cell[0], cell[1], tile_size, start_x, start_y)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    assert capture.received == [cell]


def test_row_zero_is_drawn_at_top(setup_input):
    _, window, _, _ = setup_input
    tile_size, start_x, start_y = compute_board_geometry(window.width, window.height)
    _, top_y = cell_center(0, 0, tile_size, start_x, start_y)
    _, bottom_y = cell_center(7, 0, tile_size, start_x, start_y)
    assert top_y > bottom_y


def test_clicks_outside_board_and_other_buttons_ignored(setup_input):
    bus, window, _, capture = setup_input
    bus.emit(EVENT_MOUSE_PRESS, x=1, y=1, button=1)
    bus.emit(EVENT_MOUSE_PRESS, x=window.width - 1, y=window.height - 1, button=1)
    tile_size, start_x, start_y = compute_board_geometry(window.width, window.height)
    x, y = cell_center(2, 2, tile_size, start_x, start_y)
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    bus.emit(EVENT_MOUSE_PRESS, y=y, button=1)
    assert capture.received == []


def test_mouse_press_drives_session_selection():
    session = make_session()
    window = DummyWindow()
    InputSystem(session.event_bus, window, session.world)
    tile_size, start_x, start_y = compute_board_geometry(window.width, window.height)
    x, y = cell_center(4, 6, tile_size, start_x, start_y)
    session.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    assert session.snapshot().selection == (4, 6)

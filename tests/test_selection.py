from candy.components.game_state import GamePhase
from candy.events.bus import (EVENT_MOUSE_PRESS, EVENT_TILE_CLICK_REJECTED, EVENT_TILE_DESELECTED,
                              EVENT_TILE_SELECTED)
from tests.helpers import install_grid, make_session, match_free_colors


def test_first_click_selects_and_waits_for_second():
    session = make_session()
    selected = []
    session.event_bus.subscribe(EVENT_TILE_SELECTED, lambda s, **k: selected.append((k['row'], k['col'])))
    session.select(2, 3)
    snap = session.snapshot()
    assert snap.selection == (2, 3)
    assert snap.phase == GamePhase.AWAITING_SELECTION
    assert not snap.animating
    assert selected == [(2, 3)]


def test_clicking_selected_tile_again_clears_selection():
    session = make_session()
    deselected = []
    session.event_bus.subscribe(EVENT_TILE_DESELECTED, lambda s, **k: deselected.append(k['reason']))
    session.select(2, 3)
    session.select(2, 3)
    snap = session.snapshot()
    assert snap.selection is None
    assert snap.phase == GamePhase.IDLE
    assert deselected == ['same_tile']


def test_non_adjacent_click_moves_selection_without_swapping():
    session = make_session()
    before = session.snapshot().grid
    session.select(0, 0)
    session.select(4, 4)
    snap = session.snapshot()
    assert snap.selection == (4, 4)
    assert snap.grid is before
    assert snap.moves == 0
    session.select(5, 5)
    assert session.snapshot().selection == (5, 5)


def test_out_of_bounds_click_is_rejected():
    session = make_session()
    rejected = []
    session.event_bus.subscribe(EVENT_TILE_CLICK_REJECTED, lambda s, **k: rejected.append((k['row'], k['col'])))
    session.select(8, 0)
    session.select(-1, 2)
    assert session.snapshot().selection is None
    assert rejected == [(8, 0), (-1, 2)]


def test_right_click_clears_selection():
    session = make_session()
    session.select(1, 1)
    session.event_bus.emit(EVENT_MOUSE_PRESS, x=10, y=10, button=4)
    assert session.snapshot().selection is None


def test_clicks_ignored_while_swap_animates():
    session = make_session()
    install_grid(session.world, match_free_colors())
    session.select(0, 0)
    session.select(0, 1)
    snap = session.snapshot()
    assert snap.animating
    assert snap.phase == GamePhase.SWAPPING
    session.select(5, 5)
    session.select(5, 6)
    snap = session.snapshot()
    assert snap.selection is None
    assert snap.moves == 1

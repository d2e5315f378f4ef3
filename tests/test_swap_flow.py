from candy.components.game_state import GamePhase
from candy.events.bus import (EVENT_BOARD_CHANGED, EVENT_TILE_SWAP_COMMITTED, EVENT_TILE_SWAP_INVALID,
                              EVENT_TILE_SWAP_REVERTED, EVENT_TILE_SWAP_VALID)
from candy.systems.board_ops import board_has_match, grid_ids
from tests.helpers import install_grid, make_session, match_free_colors, matchable_colors




def test_invalid_swap_reverts_to_original_grid():
    session = make_session()
    original = install_grid(session.world, match_free_colors())
    events = []
    for name in (EVENT_TILE_SWAP_COMMITTED, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REVERTED):
        session.event_bus.subscribe(name, lambda s, _name=name, **k: events.append(_name))
    hints = []
    session.event_bus.subscribe(
        EVENT_BOARD_CHANGED,
        lambda s, **k: hints.append((k['reason'], session.snapshot().last_swap)),
    )

    session.select(0, 0)
    session.select(0, 1)
    snap = session.snapshot()
    assert snap.last_swap == ((0, 0), (0, 1))
    assert snap.grid[0][0].id == original[0][1].id
    assert snap.moves == 1

    session.advance(session.timing.swap)
    snap = session.snapshot()
    assert snap.phase == GamePhase.REVERTING
    assert snap.animating
    assert snap.last_swap is None

    session.run_until_idle()
    snap = session.snapshot()
    assert grid_ids(snap.grid) == grid_ids(original)
    assert snap.grid == original
    assert snap.moves == 1
    assert snap.score == 0
    assert snap.phase == GamePhase.IDLE
    assert not snap.animating
    assert snap.last_swap is None
    assert events == [EVENT_TILE_SWAP_COMMITTED, EVENT_TILE_SWAP_INVALID, EVENT_TILE_SWAP_REVERTED]
    assert hints == [
        ('swap', ((0, 0), (0, 1))),
        ('revert_hint', ((0, 1), (0, 0))),
        ('revert', ((0, 1), (0, 0))),
    ]


def test_input_locked_until_reversion_finishes():
    session = make_session()
    install_grid(session.world, match_free_colors())
    session.select(0, 0)
    session.select(0, 1)
    session.advance(session.timing.swap + session.timing.reverse_prep)
    session.select(4, 4)
    assert session.snapshot().selection is None
    session.run_until_idle()
    session.select(4, 4)
    assert session.snapshot().selection == (4, 4)


def test_valid_swap_starts_cascade_and_settles():
    session = make_session()
    install_grid(session.world, matchable_colors())
    outcome = []
    session.event_bus.subscribe(EVENT_TILE_SWAP_VALID, lambda s, **k: outcome.append((k['src'], k['dst'])))

    session.select(0, 2)
    session.select(1, 2)
    session.advance(session.timing.swap)
    snap = session.snapshot()
    assert outcome == [((0, 2), (1, 2))]
    assert snap.phase == GamePhase.RESOLVING
    assert snap.clearing == frozenset({(0, 0), (0, 1), (0, 2)})
    assert snap.score == 30
    assert snap.last_swap is None

    session.run_until_idle()
    snap = session.snapshot()
    assert snap.phase == GamePhase.IDLE
    assert not snap.animating
    assert snap.moves == 1
    assert snap.score >= 30 and snap.score % 10 == 0
    assert not board_has_match(snap.grid)
    assert snap.clearing == frozenset() and snap.falling == frozenset()


def test_swap_direction_hint_during_swap():
    session = make_session()
    install_grid(session.world, match_free_colors())
    session.select(3, 3)
    session.select(4, 3)
    snap = session.snapshot()
    assert snap.swap_direction(3, 3) == 'from-bottom'
    assert snap.swap_direction(4, 3) == 'from-top'
    assert snap.swap_direction(0, 0) is None

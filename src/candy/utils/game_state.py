from __future__ import annotations

from typing import Type, TypeVar

from esper import World

from candy.components.animation_state import AnimationState
from candy.components.board import Board
from candy.components.game_state import GamePhase, GameState
from candy.components.score_board import ScoreBoard
from candy.components.selection import Selection
from candy.events.bus import EVENT_PHASE_CHANGED, EventBus

_C = TypeVar("_C")


def _singleton(world: World, component_type: Type[_C]) -> _C:
    for _, component in world.get_component(component_type):
        return component
    raise RuntimeError(f"{component_type.__name__} not found; was the world built with create_world?")


def get_board(world: World) -> Board:
    return _singleton(world, Board)


def get_game_state(world: World) -> GameState:
    return _singleton(world, GameState)


def get_selection(world: World) -> Selection:
    return _singleton(world, Selection)


def get_score_board(world: World) -> ScoreBoard:
    return _singleton(world, ScoreBoard)


def get_animation_state(world: World) -> AnimationState:
    return _singleton(world, AnimationState)


def set_phase(world: World, event_bus: EventBus, phase: GamePhase, *, animating: bool | None = None) -> None:
    """Update the orchestration phase and emit a change event when it differs.

    ``animating`` defaults to True for every phase that does not accept input.
    """
    state = get_game_state(world)
    previous = state.phase
    state.phase = phase
    state.animating = animating if animating is not None else phase not in (
        GamePhase.IDLE, GamePhase.AWAITING_SELECTION,
    )
    if previous != phase:
        event_bus.emit(EVENT_PHASE_CHANGED, previous=previous, phase=phase)

"""Game state resource describing the current orchestration phase."""
from dataclasses import dataclass
from enum import Enum, auto


class GamePhase(Enum):
    """Phases of a swap/cascade cycle. Only IDLE and AWAITING_SELECTION accept input."""
    IDLE = auto()
    AWAITING_SELECTION = auto()
    SWAPPING = auto()
    RESOLVING = auto()
    REVERTING = auto()


INPUT_PHASES = frozenset({GamePhase.IDLE, GamePhase.AWAITING_SELECTION})


@dataclass(slots=True)
class GameState:
    """Singleton component storing the active phase and the input lock."""
    phase: GamePhase = GamePhase.IDLE
    animating: bool = False
    cascade_depth: int = 0

    @property
    def accepts_input(self) -> bool:
        return not self.animating and self.phase in INPUT_PHASES

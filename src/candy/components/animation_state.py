from dataclasses import dataclass
from typing import FrozenSet, Optional, Tuple

from candy.components.candy import Position

SwapPair = Tuple[Position, Position]

@dataclass(slots=True)
class AnimationState:
    """Positions currently animating, published for the front-end.

    clearing: cells playing the pop animation.
    falling: cells whose occupant slid down or was spawned by refill.
    last_swap: directional hint for the swap animation; no gameplay meaning.
    """
    clearing: FrozenSet[Position] = frozenset()
    falling: FrozenSet[Position] = frozenset()
    last_swap: Optional[SwapPair] = None

    def clear(self) -> None:
        self.clearing = frozenset()
        self.falling = frozenset()
        self.last_swap = None

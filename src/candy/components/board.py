from dataclasses import dataclass
from typing import Optional, Tuple

from candy.components.candy import Grid
from candy.constants import CANDY_COLORS

@dataclass(slots=True)
class Board:
    rows: int
    cols: int
    grid: Grid = ()
    palette: Tuple[str, ...] = CANDY_COLORS
    # Cap on rerolled initial boards before the constructive fill; None keeps rerolling.
    max_initial_attempts: Optional[int] = None

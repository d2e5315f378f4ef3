from dataclasses import dataclass
from typing import Optional

from candy.components.candy import Position

@dataclass(slots=True)
class Selection:
    """Cell picked by the player while waiting for the second half of a swap."""
    position: Optional[Position] = None

from dataclasses import dataclass, field
from typing import Callable

@dataclass(slots=True)
class Timer:
    """Pending delayed continuation owned by the TimerSystem."""
    due: float
    sequence: int
    callback: Callable[[], None] = field(repr=False)
    label: str = ''

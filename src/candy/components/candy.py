from dataclasses import dataclass
from typing import Optional, Tuple

Position = Tuple[int, int]

@dataclass(frozen=True, slots=True)
class Candy:
    """A single colored token occupying one board cell.

    ``id`` survives gravity and swaps so consumers can tell a candy that slid
    down from a freshly spawned one. ``row``/``col`` always mirror the cell the
    candy sits in; relocation produces a new value.
    """
    id: str
    color: str
    row: int
    col: int

    @property
    def position(self) -> Position:
        return (self.row, self.col)


Cell = Optional[Candy]
Grid = Tuple[Tuple[Cell, ...], ...]

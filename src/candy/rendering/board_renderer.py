from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from candy.constants import CANDY_COLOR_MAP
from candy.ui.layout import cell_center
from candy.utils.snapshot import BoardSnapshot

Color = Tuple[int, ...]

_SWAP_OFFSETS = {
    'from-left': (-1, 0),
    'from-right': (1, 0),
    'from-top': (0, 1),
    'from-bottom': (0, -1),
}


@dataclass(slots=True)
class TileDraw:
    row: int
    col: int
    x: float
    y: float
    radius: float
    color: Color
    selected: bool = False


def _ease(p: float) -> float:
    p = min(max(p, 0.0), 1.0)
    if p < 0.5:
        return 2 * p * p
    return -2 * p * p + 4 * p - 1


def build_tile_draws(snapshot: BoardSnapshot, tile_size: int, start_x: float, start_y: float, *,
                     clear_progress: float = 1.0, fall_progress: float = 1.0,
                     swap_progress: float = 1.0, padding: int = 4) -> List[TileDraw]:
    """Compute where and how every candy is drawn for one frame.

    Pure so it can be exercised without an arcade window. Progress values run
    0..1 since the matching animation set was published.
    """
    draws: List[TileDraw] = []
    radius = max(tile_size - padding, 4) / 2
    for row, cells in enumerate(snapshot.grid):
        for col, candy in enumerate(cells):
            if candy is None:
                continue
            x, y = cell_center(row, col, tile_size, start_x, start_y, snapshot.rows)
            r, g, b = CANDY_COLOR_MAP.get(candy.color, (128, 128, 128))
            color: Color = (r, g, b)
            draw_radius = radius
            position = (row, col)
            if position in snapshot.clearing:
                p = _ease(clear_progress)
                draw_radius = radius * (1.0 + 0.3 * p)
                color = (r, g, b, int(255 * (1.0 - p)))
            if position in snapshot.falling:
                y += tile_size * (1.0 - _ease(fall_progress))
            direction = snapshot.swap_direction(row, col)
            if direction is not None:
                dx, dy = _SWAP_OFFSETS[direction]
                remaining = 1.0 - _ease(swap_progress)
                x += dx * tile_size * remaining
                y += dy * tile_size * remaining
            draws.append(TileDraw(row=row, col=col, x=x, y=y, radius=draw_radius, color=color,
                                  selected=snapshot.selection == position))
    return draws


def selection_outline(draws: List[TileDraw]) -> Optional[TileDraw]:
    for draw in draws:
        if draw.selected:
            return draw
    return None

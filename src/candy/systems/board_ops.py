"""Pure board transformations.

Every function takes a grid value and returns a new one; nothing here mutates
its input or keeps state between calls. The orchestrating systems rely on this
to diff boards before and after a step.
"""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from candy.components.candy import Candy, Cell, Grid, Position
from candy.constants import CANDY_COLORS, GRID_SIZE, MIN_MATCH_LENGTH

logger = logging.getLogger(__name__)

SwapPair = Tuple[Position, Position]

_DIRECTIONS = {
    (0, 1): 'from-right',
    (0, -1): 'from-left',
    (1, 0): 'from-bottom',
    (-1, 0): 'from-top',
}


def grid_dimensions(grid: Grid) -> Tuple[int, int]:
    rows = len(grid)
    cols = len(grid[0]) if rows else 0
    return rows, cols


def in_bounds(grid: Grid, position: Position) -> bool:
    rows, cols = grid_dimensions(grid)
    row, col = position
    return 0 <= row < rows and 0 <= col < cols


def empty_grid(rows: int, cols: int | None = None) -> Grid:
    cols = rows if cols is None else cols
    return tuple(tuple(None for _ in range(cols)) for _ in range(rows))


def _thaw(grid: Grid) -> List[List[Cell]]:
    return [list(row) for row in grid]


def _freeze(cells: List[List[Cell]]) -> Grid:
    return tuple(tuple(row) for row in cells)


def generate_candy(row: int, col: int, rng: random.Random | None = None,
                   palette: Sequence[str] = CANDY_COLORS) -> Candy:
    """Create a candy with a uniformly random color and a fresh id."""
    rng = rng or random
    color = rng.choice(palette)
    return Candy(id=f"{row}-{col}-{rng.getrandbits(64):016x}", color=color, row=row, col=col)


def _random_grid(size: int, rng, palette: Sequence[str]) -> Grid:
    return tuple(
        tuple(generate_candy(r, c, rng, palette) for c in range(size))
        for r in range(size)
    )


def _constructive_grid(size: int, rng, palette: Sequence[str]) -> Grid:
    # Exclude a color whenever the two cells to the left or above already share it.
    cells: List[List[Cell]] = []
    for r in range(size):
        row_cells: List[Cell] = []
        for c in range(size):
            available = list(palette)
            if c >= 2:
                left1 = row_cells[c - 1].color
                if left1 == row_cells[c - 2].color and left1 in available:
                    available.remove(left1)
            if r >= 2:
                up1 = cells[r - 1][c].color
                if up1 == cells[r - 2][c].color and up1 in available:
                    available.remove(up1)
            row_cells.append(generate_candy(r, c, rng, available))
        cells.append(row_cells)
    return _freeze(cells)


def build_initial_grid(size: int = GRID_SIZE, rng: random.Random | None = None,
                       palette: Sequence[str] = CANDY_COLORS, *,
                       max_attempts: int | None = None) -> Grid:
    """Return a fully populated size x size grid containing no matches.

    Every cell is rerolled until the whole board is match free. The loop is
    unbounded unless ``max_attempts`` is given; once that many boards have been
    rejected a constructive fill is used instead.
    """
    if size <= 0:
        raise ValueError(f"Board size must be positive, got {size}")
    if not palette:
        raise ValueError("Palette must contain at least one color")
    if max_attempts is not None and len(palette) < 3:
        raise ValueError("Constructive fallback needs at least three colors")
    rng = rng or random
    grid = _random_grid(size, rng, palette)
    attempts = 1
    while board_has_match(grid):
        if max_attempts is not None and attempts >= max_attempts:
            logger.debug("Initial grid fallback after %d rejected boards", attempts)
            return _constructive_grid(size, rng, palette)
        grid = _random_grid(size, rng, palette)
        attempts += 1
    logger.debug("Initial grid generated after %d attempt(s)", attempts)
    return grid


def run_length(grid: Grid, row: int, col: int, d_row: int, d_col: int) -> int:
    """Count same-color candies walking from (row, col) in direction (d_row, d_col).

    The start cell is included; an empty start cell yields 0.
    """
    if not in_bounds(grid, (row, col)):
        return 0
    candy = grid[row][col]
    if candy is None:
        return 0
    rows, cols = grid_dimensions(grid)
    count = 0
    r, c = row, col
    while 0 <= r < rows and 0 <= c < cols:
        current = grid[r][c]
        if current is None or current.color != candy.color:
            break
        count += 1
        r += d_row
        c += d_col
    return count


def cell_in_match(grid: Grid, row: int, col: int) -> bool:
    if not in_bounds(grid, (row, col)) or grid[row][col] is None:
        return False
    horizontal = run_length(grid, row, col, 0, 1) + run_length(grid, row, col, 0, -1) - 1
    vertical = run_length(grid, row, col, 1, 0) + run_length(grid, row, col, -1, 0) - 1
    return horizontal >= MIN_MATCH_LENGTH or vertical >= MIN_MATCH_LENGTH


def board_has_match(grid: Grid) -> bool:
    rows, cols = grid_dimensions(grid)
    return any(cell_in_match(grid, r, c) for r in range(rows) for c in range(cols))


def find_all_matches(grid: Grid) -> List[Position]:
    """Every position belonging to a maximal run of MIN_MATCH_LENGTH or more.

    Cells shared by a horizontal and a vertical run appear once. Sorted only for
    stable event payloads; callers should treat the result as a set.
    """
    rows, cols = grid_dimensions(grid)
    matched: Set[Position] = set()
    for r in range(rows):
        for c in range(cols):
            if grid[r][c] is None:
                continue
            left = c - run_length(grid, r, c, 0, -1) + 1
            right = c + run_length(grid, r, c, 0, 1) - 1
            if right - left + 1 >= MIN_MATCH_LENGTH:
                matched.update((r, cc) for cc in range(left, right + 1))
            top = r - run_length(grid, r, c, -1, 0) + 1
            bottom = r + run_length(grid, r, c, 1, 0) - 1
            if bottom - top + 1 >= MIN_MATCH_LENGTH:
                matched.update((rr, c) for rr in range(top, bottom + 1))
    return sorted(matched)


def clear_positions(grid: Grid, positions: Iterable[Position]) -> Grid:
    """Empty every listed cell. Unknown or already empty cells are ignored."""
    cells = _thaw(grid)
    for position in positions:
        if in_bounds(grid, position):
            row, col = position
            cells[row][col] = None
    return _freeze(cells)


def apply_gravity(grid: Grid) -> Grid:
    """Compact each column downward, keeping the candies' relative order."""
    rows, cols = grid_dimensions(grid)
    cells = _thaw(grid)
    for col in range(cols):
        write_row = rows - 1
        for read_row in range(rows - 1, -1, -1):
            candy = cells[read_row][col]
            if candy is None:
                continue
            if read_row != write_row:
                cells[write_row][col] = replace(candy, row=write_row)
                cells[read_row][col] = None
            write_row -= 1
    return _freeze(cells)


def refill_empty_cells(grid: Grid, rng: random.Random | None = None,
                       palette: Sequence[str] = CANDY_COLORS) -> Grid:
    cells = _thaw(grid)
    for r, row in enumerate(cells):
        for c, candy in enumerate(row):
            if candy is None:
                row[c] = generate_candy(r, c, rng, palette)
    return _freeze(cells)


def are_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return (abs(ar - br) == 1 and ac == bc) or (abs(ac - bc) == 1 and ar == br)


def swap_candies(grid: Grid, a: Position, b: Position) -> Grid:
    """Exchange the contents of two cells, updating coordinates of moved candies.

    No adjacency check is done here. Empty cells swap like any other content.
    """
    for position in (a, b):
        if not in_bounds(grid, position):
            raise ValueError(f"Position {position} is outside the board")
    cells = _thaw(grid)
    (ar, ac), (br, bc) = a, b
    first = cells[ar][ac]
    second = cells[br][bc]
    cells[ar][ac] = replace(second, row=ar, col=ac) if second is not None else None
    cells[br][bc] = replace(first, row=br, col=bc) if first is not None else None
    return _freeze(cells)


def moved_positions(before: Grid, after: Grid) -> List[Position]:
    """Cells now holding a candy that was not there before (slid in or spawned)."""
    changed: List[Position] = []
    for r, row in enumerate(after):
        for c, candy in enumerate(row):
            if candy is None:
                continue
            previous = before[r][c]
            if previous is None or previous.id != candy.id:
                changed.append((r, c))
    return changed


def filled_positions(before: Grid, after: Grid) -> List[Position]:
    """Cells that were empty before and are occupied after."""
    return [
        (r, c)
        for r, row in enumerate(after)
        for c, candy in enumerate(row)
        if candy is not None and before[r][c] is None
    ]


def swap_direction(position: Position, pair: Optional[SwapPair]) -> Optional[str]:
    """Direction the candy at ``position`` arrives from during a swap animation."""
    if pair is None:
        return None
    first, second = pair
    if position == first:
        other = second
    elif position == second:
        other = first
    else:
        return None
    offset = (other[0] - position[0], other[1] - position[1])
    return _DIRECTIONS.get(offset)


def grid_from_colors(rows: Sequence[Sequence[Optional[str]]], *, id_prefix: str = 'c') -> Grid:
    """Build a grid from a color matrix; ``None`` entries become empty cells."""
    return tuple(
        tuple(
            Candy(id=f"{id_prefix}-{r}-{c}", color=color, row=r, col=c) if color is not None else None
            for c, color in enumerate(row)
        )
        for r, row in enumerate(rows)
    )


def grid_colors(grid: Grid) -> List[List[Optional[str]]]:
    return [[candy.color if candy is not None else None for candy in row] for row in grid]


def grid_ids(grid: Grid) -> List[List[Optional[str]]]:
    return [[candy.id if candy is not None else None for candy in row] for row in grid]

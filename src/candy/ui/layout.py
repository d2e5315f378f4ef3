from candy.constants import GRID_COLS, GRID_ROWS, BOTTOM_MARGIN, HEADER_HEIGHT, BOARD_MAX_WIDTH_PCT, BOARD_MAX_HEIGHT_PCT

def compute_board_geometry(window_width: int, window_height: int, rows: int = GRID_ROWS, cols: int = GRID_COLS):
    """Return (tile_size, start_x, start_y) for the board's bottom-left corner.

    Shared by RenderSystem and InputSystem so clicks map onto drawn cells.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - BOTTOM_MARGIN - HEADER_HEIGHT) * BOARD_MAX_HEIGHT_PCT
    tile_by_w = max_board_w / cols
    tile_by_h = max_board_h / rows
    tile_size = int(min(tile_by_w, tile_by_h))
    if tile_size < 20:
        tile_size = 20
    total_width = cols * tile_size
    start_x = (window_width - total_width) / 2
    start_y = BOTTOM_MARGIN
    return tile_size, start_x, start_y


def cell_center(row: int, col: int, tile_size: int, start_x: float, start_y: float, rows: int = GRID_ROWS):
    """Screen center of a cell. Row 0 is drawn at the top of the board."""
    x = start_x + col * tile_size + tile_size / 2
    y = start_y + (rows - 1 - row) * tile_size + tile_size / 2
    return x, y

GRID_SIZE = 8
GRID_ROWS = GRID_SIZE
GRID_COLS = GRID_SIZE
MIN_MATCH_LENGTH = 3
SCORE_PER_CANDY = 10

# Spawnable candy colors. Order matters for seeded boards.
CANDY_COLORS = ('red', 'blue', 'green', 'yellow', 'purple', 'orange')

# Display colors used by the arcade front-end.
CANDY_COLOR_MAP = {
    'red':    (239, 68, 68),    # #ef4444
    'blue':   (59, 130, 246),   # #3b82f6
    'green':  (34, 197, 94),    # #22c55e
    'yellow': (234, 179, 8),    # #eab308
    'purple': (168, 85, 247),   # #a855f7
    'orange': (249, 115, 22),   # #f97316
}


# ============================================================================
# TIMING (seconds)
# ============================================================================
# Delay before the post-swap resolve pass runs.
SWAP_ANIMATION_DELAY = 0.3
# Delay before the reversed swap hint is published for an invalid move.
REVERSE_SWAP_PREP_DELAY = 0.01
# Two frames at 60fps so the reversed hint is observable before the swap back.
REVERSE_SWAP_OBSERVE_DELAY = 2 / 60
# Duration of the reverse swap animation.
REVERSE_SWAP_ANIMATION_DELAY = 0.2
# Delay between clear -> gravity, gravity -> refill and refill -> next pass.
CASCADE_STEP_DELAY = 0.3


# ============================================================================
# LAYOUT
# ============================================================================
BOTTOM_MARGIN = 20
# Height reserved above the board for the score/moves header.
HEADER_HEIGHT = 70

# Board maximum footprint relative to window (percentage of window width/height).
BOARD_MAX_WIDTH_PCT = 0.75
BOARD_MAX_HEIGHT_PCT = 0.85

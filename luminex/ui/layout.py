"""Layout constants for the puzzle UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

# Tile metrics
TILE_SIZE: int = 60
BOARD_OUTER_PADDING: int = 32
HEADER_HEIGHT: int = 72
FOOTER_HEIGHT: int = 40
MIN_WINDOW_SIZE: Tuple[int, int] = (640, 480)

# Colors expressed as RGB tuples
BACKGROUND_COLOR: Tuple[int, int, int] = (12, 10, 26)
BOARD_BACKGROUND_COLOR: Tuple[int, int, int] = (20, 13, 31)
CELL_COLOR: Tuple[int, int, int] = (26, 26, 51)
POWERED_CELL_COLOR: Tuple[int, int, int] = (38, 76, 128)
GRID_LINE_COLOR: Tuple[int, int, int] = (77, 77, 128)
BOARD_BORDER_COLOR: Tuple[int, int, int] = (128, 51, 204)
PIPE_COLOR: Tuple[int, int, int] = (128, 128, 179)
POWERED_PIPE_COLOR: Tuple[int, int, int] = (77, 204, 255)
SOURCE_COLOR: Tuple[int, int, int] = (77, 77, 102)
MIRROR_COLOR: Tuple[int, int, int] = (240, 240, 240)
BEAM_COLOR: Tuple[int, int, int] = (255, 128, 51)
LASER_COLOR: Tuple[int, int, int] = (26, 77, 204)
TEXT_COLOR: Tuple[int, int, int] = (232, 236, 244)
ACCENT_COLOR: Tuple[int, int, int] = (77, 204, 255)

# Bulb glow colors per target bulb type
BULB_COLORS: Dict[int, Tuple[int, int, int]] = {
    1: (255, 230, 153),
    2: (153, 204, 255),
    3: (153, 255, 153),
    4: (204, 153, 255),
}
UNLIT_BULB_COLOR: Tuple[int, int, int] = (90, 90, 80)


@dataclass(frozen=True)
class BoardGeometry:
    """Pixel rectangles for the major UI regions."""

    board: Tuple[int, int, int, int]
    header: Tuple[int, int, int, int]
    footer: Tuple[int, int, int, int]
    window: Tuple[int, int]
    cell_size: int


def compute_geometry(
    level_width: int,
    level_height: int,
    window: Tuple[int, int] = MIN_WINDOW_SIZE,
    cell_size: int = TILE_SIZE,
) -> BoardGeometry:
    """Centre the board in the window below the header and above the footer."""

    board_width = level_width * cell_size
    board_height = level_height * cell_size

    window_width = max(window[0], board_width + 2 * BOARD_OUTER_PADDING)
    window_height = max(
        window[1],
        HEADER_HEIGHT + board_height + FOOTER_HEIGHT + 2 * BOARD_OUTER_PADDING,
    )

    available = window_height - HEADER_HEIGHT - FOOTER_HEIGHT
    board_x = (window_width - board_width) // 2
    board_y = HEADER_HEIGHT + (available - board_height) // 2

    return BoardGeometry(
        board=(board_x, board_y, board_width, board_height),
        header=(0, 0, window_width, HEADER_HEIGHT),
        footer=(0, window_height - FOOTER_HEIGHT, window_width, FOOTER_HEIGHT),
        window=(window_width, window_height),
        cell_size=cell_size,
    )

"""Pixel checks of the deterministic pygame rendering.

Each sample sits three pixels inside a cell's top-left corner, away from pipe
strokes, so it reads the plain cell fill.
"""

from __future__ import annotations

from luminex.game import PuzzleGame
from luminex.levels import catalog_from_dicts
from luminex.ui import PuzzleUI
from luminex.ui import layout

CELL = 24

STRIP = {
    "name": "Render Strip",
    "grid": [
        ["source", "straight", "straight", "target"],
        ["empty", "empty", "empty", "empty"],
        ["empty", "empty", "empty", "empty"],
    ],
    "rotations": [0, 1, 0, 0, 0, 0, 0, 0, 0, 0, 0, 0],
}

BEAM = {
    "name": "Render Beam",
    "width": 5,
    "height": 4,
    "mirrors": [{"x": 3, "y": 1, "angle": 0}],
    "targets": [{"x": 3, "y": 3}],
    "laser": {"x": 0, "y": 1, "dir": "right"},
}


def cell_color(surface, x, y):
    return tuple(surface.get_at((x * CELL + 3, y * CELL + 3)))[:3]


def render(level):
    game = PuzzleGame(catalog_from_dicts([level]))
    ui = PuzzleUI(game, cell_size=CELL)
    return ui, ui.render()


def test_surface_matches_board_size(pygame_module):
    _, surface = render(STRIP)

    assert surface.get_size() == (4 * CELL, 3 * CELL)


def test_powered_cells_are_highlighted(pygame_module):
    ui, surface = render(STRIP)

    assert cell_color(surface, 0, 0) == layout.POWERED_CELL_COLOR
    assert cell_color(surface, 1, 0) == layout.POWERED_CELL_COLOR
    assert cell_color(surface, 2, 0) == layout.CELL_COLOR
    assert cell_color(surface, 3, 0) == layout.CELL_COLOR

    ui.game.rotate_tile(2, 0)
    surface = ui.render()
    assert cell_color(surface, 2, 0) == layout.POWERED_CELL_COLOR
    assert cell_color(surface, 3, 0) == layout.POWERED_CELL_COLOR


def test_beam_cells_are_highlighted(pygame_module):
    _, surface = render(BEAM)

    for cell in [(0, 1), (1, 1), (2, 1), (3, 2), (3, 3)]:
        assert cell_color(surface, *cell) == layout.POWERED_CELL_COLOR
    assert cell_color(surface, 4, 1) == layout.CELL_COLOR
    assert cell_color(surface, 0, 0) == layout.CELL_COLOR


def test_lit_bulb_uses_its_bulb_color(pygame_module):
    level = dict(STRIP, rotations=[0, 1, 1, 0] + [0] * 8, bulb_types=[3])
    ui, surface = render(level)

    center = ui.cell_center(3, 0)
    assert tuple(surface.get_at(center))[:3] == layout.BULB_COLORS[3]

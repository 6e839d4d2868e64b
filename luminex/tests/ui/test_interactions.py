"""Headless interaction tests for the pygame click and key handling.

Clicks are synthesised as pygame events with a fixed ``cell_size`` of 32, so
pixel ``(48, 16)`` lands in cell ``(1, 0)``.
"""

from __future__ import annotations

from luminex.game import PuzzleGame, SessionState
from luminex.levels import catalog_from_dicts
from luminex.ui import PuzzleUI

STRIP = {
    "name": "UI Strip",
    "grid": [
        ["source", "straight", "straight", "target"],
        ["empty", "empty", "empty", "empty"],
        ["empty", "empty", "empty", "empty"],
    ],
    "rotations": [0] * 12,
}

BEAM = {
    "name": "UI Beam",
    "width": 6,
    "height": 4,
    "mirrors": [{"x": 3, "y": 1, "angle": 1}],
    "targets": [{"x": 3, "y": 3}],
    "laser": {"x": 0, "y": 1, "dir": "right"},
}


def make_ui(pygame, *levels, origin=(0, 0)) -> PuzzleUI:
    game = PuzzleGame(catalog_from_dicts(list(levels or (STRIP, BEAM))))
    return PuzzleUI(game, cell_size=32, origin=origin)


def click(pygame, pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, button=button, pos=pos)


def key(pygame, code):
    return pygame.event.Event(pygame.KEYDOWN, key=code)


def test_left_click_rotates_clockwise(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame)

    ui.process_events([click(pygame, (48, 16))])

    assert ui.last_action == "rotate"
    assert ui.game.board.tile_at(1, 0).rotation == 1
    assert ui.game.moves == 1


def test_right_click_rotates_counter_clockwise(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame)

    ui.process_events([click(pygame, (48, 16), button=3)])

    assert ui.game.board.tile_at(1, 0).rotation == 3


def test_middle_click_and_fixed_tiles_are_ignored(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame)

    ui.process_events([click(pygame, (48, 16), button=2)])
    assert ui.last_action is None
    ui.process_events([click(pygame, (16, 16))])
    assert ui.last_action is None
    assert ui.game.moves == 0


def test_clicks_outside_the_board_are_ignored(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, origin=(20, 40))

    assert ui.grid_from_pixel((10, 10)) is None
    assert ui.grid_from_pixel((20 + 4 * 32, 50)) is None
    assert ui.grid_from_pixel((20 + 33, 40 + 65)) == (1, 2)

    ui.process_events([click(pygame, (5, 5))])
    assert ui.last_action is None


def test_solving_then_click_advances(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame)

    ui.process_events([click(pygame, (48, 16)), click(pygame, (80, 16))])
    assert ui.game.state is SessionState.COMPLETE

    ui.process_events([click(pygame, (0, 0))])
    assert ui.last_action == "advance"
    assert ui.game.level_index == 1
    assert ui.game.board.name == "UI Beam"


def test_mirror_click_redirects_beam(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame, BEAM)

    ui.process_events([click(pygame, (3 * 32 + 5, 32 + 5))])

    assert ui.game.board.mirrors[(3, 1)].angle == 0
    assert ui.game.complete


def test_reset_and_next_keys(pygame_module):
    pygame = pygame_module
    ui = make_ui(pygame)
    ui.process_events([click(pygame, (48, 16))])

    ui.process_events([key(pygame, pygame.K_r)])
    assert ui.last_action == "reset"
    assert ui.game.moves == 0
    assert ui.game.board.tile_at(1, 0).rotation == 0

    ui.process_events([key(pygame, pygame.K_n)])
    assert ui.last_action == "advance"
    assert ui.game.level_index == 1

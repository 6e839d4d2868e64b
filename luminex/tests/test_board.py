import pytest

from luminex.board import MirrorBoard, PipeGrid, build_board
from luminex.config import CLASSIC, EDITOR, ROTATING_SOURCES
from luminex.levels import parse_level
from luminex.tiles import Direction, TileType


def make_grid() -> PipeGrid:
    return build_board(
        parse_level(
            {
                "name": "Board",
                "grid": [
                    ["source", "straight", "target"],
                    ["empty", "cross", "empty"],
                    ["target", "corner", "source"],
                ],
                "rotations": [0, 1, 0, 0, 0, 0, 0, 2, 2],
                "bulb_types": [2, 4],
            }
        )
    )


def make_mirror_board() -> MirrorBoard:
    return build_board(
        parse_level(
            {
                "name": "Mirrors",
                "width": 6,
                "height": 4,
                "mirrors": [{"x": 3, "y": 1, "angle": 0}],
                "targets": [{"x": 3, "y": 3}],
                "laser": {"x": 0, "y": 1, "dir": "right"},
            }
        )
    )


def test_descriptor_builds_indices_and_bulbs():
    grid = make_grid()

    assert isinstance(grid, PipeGrid)
    assert [tile.position for tile in grid.sources] == [(0, 0), (2, 2)]
    assert grid.target_positions == [(2, 0), (0, 2)]
    assert [tile.bulb_type for tile in grid.targets] == [2, 4]
    assert grid.tile_at(1, 0).rotation == 1
    assert grid.tile_at(3, 0) is None


def test_rotate_respects_ruleset():
    grid = make_grid()

    assert grid.rotate_tile(1, 0)
    assert grid.tile_at(1, 0).rotation == 2
    assert grid.rotate_tile(1, 1, ruleset=CLASSIC)
    assert not grid.rotate_tile(1, 1, ruleset=EDITOR)
    assert not grid.rotate_tile(0, 0, ruleset=CLASSIC)
    assert grid.rotate_tile(0, 0, ruleset=ROTATING_SOURCES)
    assert grid.tile_at(0, 0).connections == {Direction.DOWN}
    assert not grid.rotate_tile(0, 1)
    assert not grid.rotate_tile(2, 0)


@pytest.mark.parametrize("x, y", [(-1, 0), (0, -1), (3, 0), (0, 3)])
def test_rotate_outside_grid_is_refused(x, y):
    grid = make_grid()
    before = [tile.rotation for tile in grid]

    assert not grid.rotate_tile(x, y)
    assert [tile.rotation for tile in grid] == before


def test_place_tile_keeps_indices_in_sync():
    grid = make_grid()

    assert grid.place_tile(1, 1, TileType.SOURCE, rotation=1)
    assert grid.place_tile(0, 0, TileType.STRAIGHT)
    assert grid.place_tile(2, 0, TileType.EMPTY)
    assert grid.place_tile(0, 1, TileType.TARGET, bulb_type=7)
    assert not grid.place_tile(5, 5, TileType.CORNER)

    incremental_sources = sorted(tile.position for tile in grid.sources)
    incremental_targets = sorted(tile.position for tile in grid.targets)
    grid.rebuild_indices()

    assert incremental_sources == sorted(tile.position for tile in grid.sources)
    assert incremental_targets == sorted(tile.position for tile in grid.targets)
    assert grid.tile_at(0, 1).bulb_type == 4


def test_resize_pads_and_truncates():
    grid = make_grid()

    grid.resize(4, 5)
    assert (grid.width, grid.height) == (4, 5)
    assert grid.tile_at(3, 4).type is TileType.EMPTY
    assert grid.tile_at(0, 0).type is TileType.SOURCE

    grid.resize(3, 3)
    grid.place_tile(2, 2, TileType.EMPTY)
    grid.resize(4, 3)
    assert [tile.position for tile in grid.sources] == [(0, 0)]


def test_resize_rejects_tiny_grids():
    with pytest.raises(ValueError):
        make_grid().resize(2, 5)


def test_pipe_grid_round_trips_through_descriptor():
    grid = make_grid()
    grid.rotate_tile(1, 2)

    rebuilt = build_board(grid.to_descriptor())

    assert [(t.type, t.rotation, t.bulb_type) for t in rebuilt] == [
        (t.type, t.rotation, t.bulb_type) for t in grid
    ]


def test_mirror_board_rotation_toggles_only_mirrors():
    board = make_mirror_board()

    assert isinstance(board, MirrorBoard)
    assert board.rotate_tile(3, 1)
    assert board.mirrors[(3, 1)].angle == 1
    assert board.rotate_tile(3, 1, clockwise=False)
    assert board.mirrors[(3, 1)].angle == 0
    assert not board.rotate_tile(0, 1)
    assert not board.rotate_tile(-1, 0)


def test_mirror_board_editing():
    board = make_mirror_board()

    assert board.place_mirror(5, 3, angle=1)
    assert not board.place_mirror(6, 0)
    assert board.remove_mirror(3, 1)
    assert not board.remove_mirror(3, 1)

    descriptor = board.to_descriptor()
    assert descriptor.mirrors == ((5, 3, 1),)
    assert descriptor.targets == ((3, 3),)
    assert (descriptor.width, descriptor.height) == (6, 4)

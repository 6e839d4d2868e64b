"""Mutable per-session board state built from level descriptors."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Union

from .config import BULB_TYPES, CLASSIC, MIN_GRID_SIZE, Ruleset
from .levels import MirrorLevelDescriptor, PipeLevelDescriptor
from .tiles import LaserSource, Mirror, Position, Target, Tile, TileType

logger = logging.getLogger(__name__)


class PipeGrid:
    """Tile array plus the ``sources``/``targets`` indices into it."""

    def __init__(self, name: str, width: int, height: int):
        self.name = name
        self.width = width
        self.height = height
        self.tiles: List[List[Tile]] = [
            [Tile(x, y) for x in range(width)] for y in range(height)
        ]
        self.sources: List[Tile] = []
        self.targets: List[Tile] = []

    @classmethod
    def from_descriptor(cls, descriptor: PipeLevelDescriptor) -> "PipeGrid":
        grid = cls(descriptor.name, descriptor.width, descriptor.height)
        bulbs = iter(descriptor.bulb_types)
        for y, row in enumerate(descriptor.grid):
            for x, tile_type in enumerate(row):
                bulb_type = next(bulbs, 1) if tile_type is TileType.TARGET else 1
                grid.tiles[y][x] = Tile(
                    x,
                    y,
                    tile_type,
                    rotation=descriptor.rotation_at(x, y),
                    bulb_type=bulb_type,
                )
        grid.rebuild_indices()
        return grid

    def __iter__(self) -> Iterator[Tile]:
        for row in self.tiles:
            yield from row

    def inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        if not self.inside((x, y)):
            return None
        return self.tiles[y][x]

    @property
    def target_positions(self) -> List[Position]:
        return [tile.position for tile in self.targets]

    def rebuild_indices(self) -> None:
        self.sources = [tile for tile in self if tile.type is TileType.SOURCE]
        self.targets = [tile for tile in self if tile.type is TileType.TARGET]

    def reset_power(self) -> None:
        for tile in self:
            tile.powered = False

    def powered_positions(self) -> List[Position]:
        return [tile.position for tile in self if tile.powered]

    def rotate_tile(self, x: int, y: int, clockwise: bool = True, ruleset: Ruleset = CLASSIC) -> bool:
        tile = self.tile_at(x, y)
        if tile is None or not ruleset.can_rotate(tile.type):
            return False
        tile.rotate(clockwise)
        logger.debug("Rotated %s at (%d, %d) to %d", tile.type.value, x, y, tile.rotation)
        return True

    # ------------------------------------------------------------------
    # Structural edits used by level authoring
    def place_tile(
        self,
        x: int,
        y: int,
        tile_type: TileType,
        rotation: int = 0,
        bulb_type: int = 1,
    ) -> bool:
        old = self.tile_at(x, y)
        if old is None:
            return False
        self._unindex(old)
        bulb_type = min(max(int(bulb_type), BULB_TYPES[0]), BULB_TYPES[-1])
        tile = Tile(x, y, tile_type, rotation=rotation, bulb_type=bulb_type)
        self.tiles[y][x] = tile
        if tile_type is TileType.SOURCE:
            self.sources.append(tile)
        elif tile_type is TileType.TARGET:
            self.targets.append(tile)
        return True

    def _unindex(self, tile: Tile) -> None:
        if tile.type is TileType.SOURCE:
            registry = self.sources
        elif tile.type is TileType.TARGET:
            registry = self.targets
        else:
            return
        for index, entry in enumerate(registry):
            if entry.position == tile.position:
                del registry[index]
                break

    def resize(self, width: int, height: int) -> None:
        """Resize in place, keeping overlapping cells and padding with empty tiles."""

        if width < MIN_GRID_SIZE or height < MIN_GRID_SIZE:
            raise ValueError(
                f"Grid must be at least {MIN_GRID_SIZE}x{MIN_GRID_SIZE}, got {width}x{height}"
            )
        old = self.tiles
        self.tiles = [
            [
                old[y][x] if y < self.height and x < self.width else Tile(x, y)
                for x in range(width)
            ]
            for y in range(height)
        ]
        self.width = width
        self.height = height
        self.rebuild_indices()

    def to_descriptor(self) -> PipeLevelDescriptor:
        return PipeLevelDescriptor(
            name=self.name,
            grid=tuple(tuple(tile.type for tile in row) for row in self.tiles),
            rotations=tuple(tile.rotation for tile in self),
            bulb_types=tuple(tile.bulb_type for tile in self.targets_in_row_order()),
        )

    def targets_in_row_order(self) -> List[Tile]:
        return [tile for tile in self if tile.type is TileType.TARGET]


@dataclass
class MirrorBoard:
    """Laser, mirrors and targets of a mirror puzzle."""

    name: str
    width: int
    height: int
    laser: LaserSource
    mirrors: Dict[Position, Mirror] = field(default_factory=dict)
    targets: List[Target] = field(default_factory=list)

    @classmethod
    def from_descriptor(cls, descriptor: MirrorLevelDescriptor) -> "MirrorBoard":
        return cls(
            name=descriptor.name,
            width=descriptor.width,
            height=descriptor.height,
            laser=descriptor.laser,
            mirrors={(x, y): Mirror(x, y, angle) for x, y, angle in descriptor.mirrors},
            targets=[Target(x, y) for x, y in descriptor.targets],
        )

    def inside(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    @property
    def target_positions(self) -> List[Position]:
        return [target.position for target in self.targets]

    def reset_hits(self) -> None:
        for target in self.targets:
            target.hit = False

    def rotate_tile(self, x: int, y: int, clockwise: bool = True, ruleset: Ruleset = CLASSIC) -> bool:
        # Mirrors only have two states, so the rotation sense is irrelevant.
        mirror = self.mirrors.get((x, y))
        if mirror is None:
            return False
        mirror.rotate()
        logger.debug("Rotated mirror at (%d, %d) to %s", x, y, mirror.glyph)
        return True

    def place_mirror(self, x: int, y: int, angle: int = 0) -> bool:
        if not self.inside((x, y)):
            return False
        self.mirrors[(x, y)] = Mirror(x, y, angle)
        return True

    def remove_mirror(self, x: int, y: int) -> bool:
        return self.mirrors.pop((x, y), None) is not None

    def to_descriptor(self) -> MirrorLevelDescriptor:
        return MirrorLevelDescriptor(
            name=self.name,
            laser=self.laser,
            mirrors=tuple((m.x, m.y, m.angle) for m in self.mirrors.values()),
            targets=tuple(self.target_positions),
            width=self.width,
            height=self.height,
        )


Board = Union[PipeGrid, MirrorBoard]


def build_board(descriptor: Union[PipeLevelDescriptor, MirrorLevelDescriptor]) -> Board:
    if isinstance(descriptor, PipeLevelDescriptor):
        return PipeGrid.from_descriptor(descriptor)
    return MirrorBoard.from_descriptor(descriptor)

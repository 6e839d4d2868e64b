"""Tile, connector and mirror primitives shared by both puzzle variants."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple


Position = Tuple[int, int]


class Direction(Enum):
    """Cardinal directions in screen space (``y`` grows downwards)."""

    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def vector(self) -> Tuple[int, int]:
        return self.value

    @staticmethod
    def from_name(name: str) -> "Direction":
        name = str(name).upper()
        try:
            return Direction[name]
        except KeyError as exc:
            raise ValueError(f"Unknown direction: {name}") from exc

    def step(self, position: Position) -> Position:
        return position[0] + self.value[0], position[1] + self.value[1]

    def rotated(self, steps: int) -> "Direction":
        """Turn clockwise by ``steps`` quarter turns (negative turns anticlockwise)."""

        index = CLOCKWISE.index(self)
        return CLOCKWISE[(index + steps) % 4]

    def opposite(self) -> "Direction":
        return OPPOSITES[self]


CLOCKWISE: Tuple[Direction, ...] = (
    Direction.UP,
    Direction.RIGHT,
    Direction.DOWN,
    Direction.LEFT,
)

OPPOSITES: Mapping[Direction, Direction] = MappingProxyType(
    {
        Direction.UP: Direction.DOWN,
        Direction.DOWN: Direction.UP,
        Direction.LEFT: Direction.RIGHT,
        Direction.RIGHT: Direction.LEFT,
    }
)


class TileType(Enum):
    """Closed set of pipe tile kinds."""

    EMPTY = "empty"
    STRAIGHT = "straight"
    CORNER = "corner"
    T_JUNCTION = "t_junction"
    CROSS = "cross"
    SOURCE = "source"
    TARGET = "target"

    @staticmethod
    def from_name(name: str) -> "TileType":
        try:
            return TileType(str(name).lower())
        except ValueError as exc:
            raise ValueError(f"Unknown tile type: {name}") from exc


BASE_CONNECTIONS: Mapping[TileType, FrozenSet[Direction]] = MappingProxyType(
    {
        TileType.EMPTY: frozenset(),
        TileType.STRAIGHT: frozenset({Direction.UP, Direction.DOWN}),
        TileType.CORNER: frozenset({Direction.UP, Direction.RIGHT}),
        TileType.T_JUNCTION: frozenset({Direction.UP, Direction.RIGHT, Direction.DOWN}),
        TileType.CROSS: frozenset(CLOCKWISE),
        TileType.SOURCE: frozenset({Direction.RIGHT}),
        TileType.TARGET: frozenset(CLOCKWISE),
    }
)


def _build_connection_table() -> Mapping[Tuple[TileType, int], FrozenSet[Direction]]:
    table: Dict[Tuple[TileType, int], FrozenSet[Direction]] = {}
    for tile_type, base in BASE_CONNECTIONS.items():
        for rotation in range(4):
            table[(tile_type, rotation)] = frozenset(
                direction.rotated(rotation) for direction in base
            )
    return MappingProxyType(table)


CONNECTIONS = _build_connection_table()


def get_connections(tile_type: TileType, rotation: int) -> FrozenSet[Direction]:
    """Return the directions a tile of ``tile_type`` connects to at ``rotation``."""

    return CONNECTIONS[(tile_type, rotation % 4)]


def rotate_value(rotation: int, clockwise: bool = True) -> int:
    return (rotation + (1 if clockwise else -1)) % 4


@dataclass
class Tile:
    """One cell of a pipe grid."""

    x: int
    y: int
    type: TileType = TileType.EMPTY
    rotation: int = 0
    powered: bool = False
    bulb_type: int = 1

    def __post_init__(self) -> None:
        self.rotation = int(self.rotation) % 4

    @property
    def position(self) -> Position:
        return self.x, self.y

    @property
    def connections(self) -> FrozenSet[Direction]:
        return get_connections(self.type, self.rotation)

    def connects(self, direction: Direction) -> bool:
        return direction in self.connections

    def rotate(self, clockwise: bool = True) -> int:
        self.rotation = rotate_value(self.rotation, clockwise)
        return self.rotation


# Reflection for "\" (angle 0) and "/" (angle 1) in screen space.
REFLECTIONS: Mapping[int, Mapping[Direction, Direction]] = MappingProxyType(
    {
        0: MappingProxyType(
            {
                Direction.RIGHT: Direction.DOWN,
                Direction.LEFT: Direction.UP,
                Direction.UP: Direction.LEFT,
                Direction.DOWN: Direction.RIGHT,
            }
        ),
        1: MappingProxyType(
            {
                Direction.RIGHT: Direction.UP,
                Direction.LEFT: Direction.DOWN,
                Direction.UP: Direction.RIGHT,
                Direction.DOWN: Direction.LEFT,
            }
        ),
    }
)

MIRROR_GLYPHS: Mapping[int, str] = MappingProxyType({0: "\\", 1: "/"})


@dataclass
class Mirror:
    """Two-state mirror; ``angle`` 0 is ``\\`` and 1 is ``/``."""

    x: int
    y: int
    angle: int = 0

    def __post_init__(self) -> None:
        if self.angle not in REFLECTIONS:
            raise ValueError(f"Unknown mirror angle: {self.angle}")

    @property
    def position(self) -> Position:
        return self.x, self.y

    @property
    def glyph(self) -> str:
        return MIRROR_GLYPHS[self.angle]

    def rotate(self) -> int:
        self.angle = 1 - self.angle
        return self.angle

    def reflect(self, direction: Direction) -> Direction:
        return REFLECTIONS[self.angle][direction]


@dataclass(frozen=True)
class LaserSource:
    x: int
    y: int
    direction: Direction

    @property
    def position(self) -> Position:
        return self.x, self.y


@dataclass
class Target:
    """Beam target; ``hit`` is refreshed by every propagation pass."""

    x: int
    y: int
    hit: bool = False

    @property
    def position(self) -> Position:
        return self.x, self.y

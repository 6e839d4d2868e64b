"""Level descriptors and the JSON level catalog."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .config import BULB_TYPES, DEFAULT_MIRROR_BOARD_SIZE
from .tiles import Direction, LaserSource, TileType

logger = logging.getLogger(__name__)

UNKNOWN_LEVEL_NAME = "Unknown Level"


class LevelFormatError(ValueError):
    """Raised when a level descriptor cannot be turned into a playable board."""

    def __init__(self, message: str, *, level: Optional[Union[int, str]] = None):
        self.level = level
        if level is not None:
            message = f"level {level}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class PipeLevelDescriptor:
    """Static catalog entry for a pipe puzzle."""

    name: str
    grid: Tuple[Tuple[TileType, ...], ...]
    rotations: Tuple[int, ...]
    bulb_types: Tuple[int, ...] = ()

    @property
    def width(self) -> int:
        return len(self.grid[0]) if self.grid else 0

    @property
    def height(self) -> int:
        return len(self.grid)

    @property
    def cell_count(self) -> int:
        return self.width * self.height

    def rotation_at(self, x: int, y: int) -> int:
        index = y * self.width + x
        if index < len(self.rotations):
            return self.rotations[index]
        return 0


@dataclass(frozen=True)
class MirrorLevelDescriptor:
    """Static catalog entry for a laser and mirror puzzle."""

    name: str
    laser: LaserSource
    mirrors: Tuple[Tuple[int, int, int], ...] = ()
    targets: Tuple[Tuple[int, int], ...] = ()
    width: int = DEFAULT_MIRROR_BOARD_SIZE[0]
    height: int = DEFAULT_MIRROR_BOARD_SIZE[1]


LevelDescriptor = Union[PipeLevelDescriptor, MirrorLevelDescriptor]


def _require(data: Dict, key: str, level: Optional[Union[int, str]]):
    if key not in data:
        raise LevelFormatError(f"missing required field '{key}'", level=level)
    return data[key]


def _as_int(value: object, what: str, level: Optional[Union[int, str]]) -> int:
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise LevelFormatError(f"{what} must be an integer, got {value!r}", level=level) from exc


def _as_list(data: Dict, key: str, level: Optional[Union[int, str]]) -> List:
    value = data.get(key, [])
    if not isinstance(value, list):
        raise LevelFormatError(f"'{key}' must be a list, got {value!r}", level=level)
    return value


def _as_entry(entry: object, what: str, level: Optional[Union[int, str]]) -> Dict:
    if not isinstance(entry, dict):
        raise LevelFormatError(f"{what} must be an object, got {entry!r}", level=level)
    return entry


def parse_pipe_level(
    data: Dict, *, level: Optional[Union[int, str]] = None, strict: bool = False
) -> PipeLevelDescriptor:
    name = str(_require(data, "name", level))
    raw_grid = _require(data, "grid", level)
    if (
        not isinstance(raw_grid, list)
        or not raw_grid
        or not all(isinstance(row, list) and row for row in raw_grid)
    ):
        raise LevelFormatError("grid must be a non-empty list of non-empty rows", level=level)

    width = len(raw_grid[0])
    rows: List[Tuple[TileType, ...]] = []
    for y, row in enumerate(raw_grid):
        if len(row) != width:
            raise LevelFormatError(
                f"row {y} has {len(row)} cells, expected {width}", level=level
            )
        try:
            rows.append(tuple(TileType.from_name(cell) for cell in row))
        except ValueError as exc:
            raise LevelFormatError(str(exc), level=level) from exc

    cell_count = width * len(rows)
    rotations = [
        _as_int(value, "rotation", level) % 4 for value in _as_list(data, "rotations", level)
    ]
    if len(rotations) != cell_count:
        message = f"{len(rotations)} rotations for {cell_count} cells"
        if strict:
            raise LevelFormatError(message, level=level)
        logger.warning("Level %s (%s): %s; padding with rotation 0", level, name, message)
        rotations = (rotations + [0] * cell_count)[:cell_count]

    bulb_types = []
    bulb_key = "bulb_types" if "bulb_types" in data else "bulbTypes"
    for value in _as_list(data, bulb_key, level):
        bulb = _as_int(value, "bulb type", level)
        bulb_types.append(min(max(bulb, BULB_TYPES[0]), BULB_TYPES[-1]))

    return PipeLevelDescriptor(
        name=name,
        grid=tuple(rows),
        rotations=tuple(rotations),
        bulb_types=tuple(bulb_types),
    )


def parse_mirror_level(
    data: Dict, *, level: Optional[Union[int, str]] = None, strict: bool = False
) -> MirrorLevelDescriptor:
    name = str(_require(data, "name", level))
    width = _as_int(data.get("width", DEFAULT_MIRROR_BOARD_SIZE[0]), "width", level)
    height = _as_int(data.get("height", DEFAULT_MIRROR_BOARD_SIZE[1]), "height", level)
    if width <= 0 or height <= 0:
        raise LevelFormatError(f"invalid board size {width}x{height}", level=level)

    def inside(x: int, y: int) -> bool:
        return 0 <= x < width and 0 <= y < height

    raw_laser = _require(data, "laser", level)
    try:
        raw_x, raw_y, raw_dir = raw_laser["x"], raw_laser["y"], raw_laser["dir"]
    except (KeyError, TypeError) as exc:
        raise LevelFormatError(f"laser is missing {exc}", level=level) from exc
    try:
        direction = Direction.from_name(raw_dir)
    except ValueError as exc:
        raise LevelFormatError(str(exc), level=level) from exc
    laser = LaserSource(
        x=_as_int(raw_x, "laser x", level),
        y=_as_int(raw_y, "laser y", level),
        direction=direction,
    )
    if not inside(laser.x, laser.y):
        raise LevelFormatError(f"laser {laser.position} is off the board", level=level)

    mirrors: Dict[Tuple[int, int], int] = {}
    for entry in _as_list(data, "mirrors", level):
        entry = _as_entry(entry, "mirror", level)
        x = _as_int(entry.get("x"), "mirror x", level)
        y = _as_int(entry.get("y"), "mirror y", level)
        angle = _as_int(entry.get("angle", 0), "mirror angle", level)
        if angle not in (0, 1):
            raise LevelFormatError(f"mirror angle must be 0 or 1, got {angle}", level=level)
        if not inside(x, y):
            message = f"mirror ({x}, {y}) is off the board"
            if strict:
                raise LevelFormatError(message, level=level)
            logger.warning("Level %s (%s): %s; ignoring it", level, name, message)
            continue
        mirrors[(x, y)] = angle

    targets: List[Tuple[int, int]] = []
    for entry in _as_list(data, "targets", level):
        entry = _as_entry(entry, "target", level)
        position = (
            _as_int(entry.get("x"), "target x", level),
            _as_int(entry.get("y"), "target y", level),
        )
        if not inside(*position):
            message = f"target {position} is off the board"
            if strict:
                raise LevelFormatError(message, level=level)
            logger.warning("Level %s (%s): %s; ignoring it", level, name, message)
            continue
        if position not in targets:
            targets.append(position)

    return MirrorLevelDescriptor(
        name=name,
        laser=laser,
        mirrors=tuple((x, y, angle) for (x, y), angle in mirrors.items()),
        targets=tuple(targets),
        width=width,
        height=height,
    )


def parse_level(
    data: Dict, *, level: Optional[Union[int, str]] = None, strict: bool = False
) -> LevelDescriptor:
    """Build a descriptor, picking the variant from the keys present."""

    if not isinstance(data, dict):
        raise LevelFormatError("descriptor must be a JSON object", level=level)
    if "grid" in data:
        return parse_pipe_level(data, level=level, strict=strict)
    if "laser" in data:
        return parse_mirror_level(data, level=level, strict=strict)
    raise LevelFormatError("descriptor needs either 'grid' or 'laser'", level=level)


def descriptor_to_dict(descriptor: LevelDescriptor) -> Dict[str, object]:
    if isinstance(descriptor, PipeLevelDescriptor):
        payload: Dict[str, object] = {
            "name": descriptor.name,
            "grid": [[cell.value for cell in row] for row in descriptor.grid],
            "rotations": list(descriptor.rotations),
        }
        if descriptor.bulb_types:
            payload["bulb_types"] = list(descriptor.bulb_types)
        return payload
    return {
        "name": descriptor.name,
        "width": descriptor.width,
        "height": descriptor.height,
        "mirrors": [{"x": x, "y": y, "angle": angle} for x, y, angle in descriptor.mirrors],
        "targets": [{"x": x, "y": y} for x, y in descriptor.targets],
        "laser": {
            "x": descriptor.laser.x,
            "y": descriptor.laser.y,
            "dir": descriptor.laser.direction.name.lower(),
        },
    }


@dataclass
class LevelCatalog:
    """Ordered, read-only list of level descriptors."""

    levels: List[LevelDescriptor] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.levels)

    def count(self) -> int:
        return len(self.levels)

    def clamp_index(self, index: int) -> int:
        if 0 <= index < len(self.levels):
            return index
        return 0

    def get(self, index: int) -> LevelDescriptor:
        if not self.levels:
            raise LookupError("The level catalog is empty.")
        return self.levels[self.clamp_index(index)]

    def name(self, index: int) -> str:
        if 0 <= index < len(self.levels):
            return self.levels[index].name
        return UNKNOWN_LEVEL_NAME

    def names(self) -> List[str]:
        return [level.name for level in self.levels]


class LevelLoader:
    """Load level files stored as JSON."""

    def __init__(self, root: Path, *, strict: bool = False):
        self.root = Path(root)
        self.strict = strict

    def level_files(self) -> List[Path]:
        return sorted(self.root.glob("*.json"))

    def load(self, name: str) -> LevelDescriptor:
        path = self.root / f"{name}.json"
        if not path.exists():
            raise FileNotFoundError(path)
        return self._load_path(path, level=name, strict=self.strict)

    def load_catalog(self) -> LevelCatalog:
        levels = [
            self._load_path(path, level=index, strict=self.strict)
            for index, path in enumerate(self.level_files())
        ]
        logger.info("Loaded %d levels from %s", len(levels), self.root)
        return LevelCatalog(levels)

    def validate(self) -> List[str]:
        """Strictly parse every level file and return the problems found."""

        problems: List[str] = []
        for index, path in enumerate(self.level_files()):
            try:
                self._load_path(path, level=index, strict=True)
            except LevelFormatError as exc:
                problems.append(f"{path.name}: {exc}")
        return problems

    def save(self, name: str, descriptor: LevelDescriptor) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        path = self.root / f"{name}.json"
        path.write_text(json.dumps(descriptor_to_dict(descriptor), indent=2) + "\n")
        logger.info("Saved level '%s' to %s", descriptor.name, path)
        return path

    @staticmethod
    def _load_path(path: Path, *, level: Union[int, str], strict: bool) -> LevelDescriptor:
        try:
            data = json.loads(path.read_text())
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise LevelFormatError(f"invalid JSON in {path.name}: {exc}", level=level) from exc
        return parse_level(data, level=level, strict=strict)


def catalog_from_dicts(
    entries: Sequence[Dict], *, strict: bool = False
) -> LevelCatalog:
    return LevelCatalog(
        [parse_level(entry, level=index, strict=strict) for index, entry in enumerate(entries)]
    )

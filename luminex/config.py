"""Rulesets, shared constants and resource directory resolution."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Tuple

from .tiles import TileType

LEVEL_ENV_VAR = "LUMINEX_LEVEL_ROOT"
SAVE_ENV_VAR = "LUMINEX_SAVE_PATH"

DEFAULT_MIRROR_BOARD_SIZE: Tuple[int, int] = (10, 10)
MAX_BEAM_SEGMENTS = 50
BULB_TYPES: Tuple[int, ...] = (1, 2, 3, 4)
MIN_GRID_SIZE = 3


@dataclass(frozen=True)
class Ruleset:
    """Gameplay switches that differ between the shipped game variants."""

    name: str
    rotatable: FrozenSet[TileType]
    max_beam_segments: int = MAX_BEAM_SEGMENTS
    # Lazy propagation defers the refresh to the next completion check; the
    # session only becomes complete on the following update().
    eager_propagation: bool = True
    strict_levels: bool = False

    def can_rotate(self, tile_type: TileType) -> bool:
        return tile_type in self.rotatable


CLASSIC = Ruleset(
    name="classic",
    rotatable=frozenset(
        {TileType.STRAIGHT, TileType.CORNER, TileType.T_JUNCTION, TileType.CROSS}
    ),
)

ROTATING_SOURCES = Ruleset(
    name="rotating_sources",
    rotatable=CLASSIC.rotatable | {TileType.SOURCE},
)

EDITOR = Ruleset(
    name="editor",
    rotatable=frozenset(
        {TileType.STRAIGHT, TileType.CORNER, TileType.T_JUNCTION, TileType.SOURCE}
    ),
    strict_levels=True,
)

RULESETS: Dict[str, Ruleset] = {
    ruleset.name: ruleset for ruleset in (CLASSIC, ROTATING_SOURCES, EDITOR)
}


def get_ruleset(name: str) -> Ruleset:
    try:
        return RULESETS[name]
    except KeyError as exc:
        raise KeyError(f"Unknown ruleset '{name}'.") from exc


@dataclass(frozen=True)
class GameDirectories:
    """Bundle with resolved on-disk locations used by the game."""

    level_root: Path
    save_path: Path


def default_level_root() -> Path:
    return Path(__file__).resolve().parent / "levels"


def default_save_path() -> Path:
    return Path.home() / ".luminex" / "best_scores.json"


def _read_path(env_var: str, fallback: Path) -> Path:
    value = os.environ.get(env_var)
    if value:
        return Path(value).expanduser()
    return fallback


def resolve_directories(
    check_exists: bool = True, *, level_root: Optional[Path] = None
) -> GameDirectories:
    """Resolve level and save locations using environment variables.

    Parameters
    ----------
    check_exists:
        When *True*, raise :class:`FileNotFoundError` if the level directory
        does not exist. The save file is created lazily and is never checked.
    level_root:
        Explicit level directory, taking precedence over the environment.
    """

    levels = Path(level_root) if level_root else _read_path(LEVEL_ENV_VAR, default_level_root())
    save_path = _read_path(SAVE_ENV_VAR, default_save_path())

    if check_exists and not levels.exists():
        raise FileNotFoundError(f"Level directory does not exist: {levels}")

    return GameDirectories(level_root=levels, save_path=save_path)

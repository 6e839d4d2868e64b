"""Luminex puzzle package: pipe and laser routing on a rotatable grid."""

from .board import MirrorBoard, PipeGrid, build_board
from .config import CLASSIC, EDITOR, ROTATING_SOURCES, Ruleset, get_ruleset
from .game import PuzzleGame, SessionState
from .levels import (
    LevelCatalog,
    LevelFormatError,
    LevelLoader,
    MirrorLevelDescriptor,
    PipeLevelDescriptor,
    parse_level,
)
from .propagation import (
    BeamPropagation,
    BeamSegment,
    ConnectivityPropagation,
    PropagationResult,
    PropagationStrategy,
    evaluate_completion,
)
from .scores import BestScoreStore
from .tiles import Direction, LaserSource, Mirror, Target, Tile, TileType, get_connections

__all__ = [
    "BeamPropagation",
    "BeamSegment",
    "BestScoreStore",
    "CLASSIC",
    "ConnectivityPropagation",
    "Direction",
    "EDITOR",
    "LaserSource",
    "LevelCatalog",
    "LevelFormatError",
    "LevelLoader",
    "Mirror",
    "MirrorBoard",
    "MirrorLevelDescriptor",
    "PipeGrid",
    "PipeLevelDescriptor",
    "PropagationResult",
    "PropagationStrategy",
    "PuzzleGame",
    "ROTATING_SOURCES",
    "Ruleset",
    "SessionState",
    "Target",
    "Tile",
    "TileType",
    "build_board",
    "evaluate_completion",
    "get_connections",
    "get_ruleset",
    "parse_level",
]

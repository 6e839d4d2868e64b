"""Level sessions: loading, rotate commands and completion tracking."""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from .board import Board, MirrorBoard, PipeGrid, build_board
from .config import CLASSIC, Ruleset, default_level_root
from .levels import LevelCatalog, LevelDescriptor, LevelLoader
from .propagation import (
    PropagationResult,
    PropagationStrategy,
    evaluate_completion,
    strategy_for,
)
from .scores import BestScoreStore

logger = logging.getLogger(__name__)


class SessionState(Enum):
    LOADED = "loaded"
    PLAYING = "playing"
    COMPLETE = "complete"


class PuzzleGame:
    """High level game manager handling rotations, propagation and win state."""

    def __init__(
        self,
        catalog: LevelCatalog,
        *,
        ruleset: Ruleset = CLASSIC,
        scores: Optional[BestScoreStore] = None,
        level_index: int = 0,
    ):
        if not len(catalog):
            raise ValueError("PuzzleGame needs at least one level.")
        self.catalog = catalog
        self.ruleset = ruleset
        self.scores = scores if scores is not None else BestScoreStore()
        self.load_level(level_index)

    @classmethod
    def from_directory(
        cls,
        root: Optional[Path] = None,
        *,
        ruleset: Ruleset = CLASSIC,
        scores: Optional[BestScoreStore] = None,
    ) -> "PuzzleGame":
        loader = LevelLoader(root or default_level_root(), strict=ruleset.strict_levels)
        return cls(loader.load_catalog(), ruleset=ruleset, scores=scores)

    # ------------------------------------------------------------------
    # Level handling
    def load_level(self, index: int) -> None:
        """Build a fresh board for ``index``; out of range indices load the first level."""

        clamped = self.catalog.clamp_index(index)
        if clamped != index:
            logger.debug("Level index %s out of range, loading level 0", index)
        self.level_index = clamped
        self.descriptor: LevelDescriptor = self.catalog.get(clamped)
        self.board: Board = build_board(self.descriptor)
        self.strategy: PropagationStrategy = strategy_for(
            self.board, self.ruleset.max_beam_segments
        )
        self.moves = 0
        self.state = SessionState.LOADED
        self.last_events: Dict[str, List[Dict[str, object]]] = {}
        self.result: PropagationResult = self.propagate()
        logger.info("Loaded level %d: %s", self.level_index, self.descriptor.name)

    def reset(self) -> None:
        self.load_level(self.level_index)

    def advance(self) -> None:
        self.load_level(self.level_index + 1)

    def get_level_name(self, index: int) -> str:
        return self.catalog.name(index)

    def get_level_count(self) -> int:
        return self.catalog.count()

    @property
    def level_name(self) -> str:
        return self.descriptor.name

    # ------------------------------------------------------------------
    # Propagation and completion
    def propagate(self) -> PropagationResult:
        self.result = self.strategy.propagate(self.board)
        return self.result

    def is_level_complete(self) -> bool:
        return evaluate_completion(self.propagate())

    @property
    def complete(self) -> bool:
        return self.state is SessionState.COMPLETE

    def update(self) -> bool:
        """Frame tick: promote the session to complete once the puzzle is solved."""

        if self.state is not SessionState.COMPLETE and self.is_level_complete():
            self._enter_complete()
        return self.complete

    def _enter_complete(self) -> None:
        self.state = SessionState.COMPLETE
        new_best = self.scores.record(self.level_index, self.moves)
        self.last_events.setdefault("completed", []).append(
            {"level": self.level_index, "moves": self.moves, "new_best": new_best}
        )
        logger.info(
            "Level %d (%s) complete in %d moves", self.level_index, self.level_name, self.moves
        )

    # ------------------------------------------------------------------
    # Commands
    def rotate_tile(self, x: int, y: int, clockwise: bool = True) -> bool:
        """Rotate the tile or mirror at ``(x, y)``. Returns False when nothing changed."""

        if not self.board.rotate_tile(x, y, clockwise, self.ruleset):
            return False

        previously_hit = set(self.result.hit_targets)
        self.last_events = {
            "rotation": [{"position": (x, y), "clockwise": clockwise}],
        }
        if self.state is SessionState.COMPLETE:
            self.propagate()
            return True

        self.moves += 1
        self.state = SessionState.PLAYING
        if not self.ruleset.eager_propagation:
            return True

        self.propagate()
        connected = [
            {"position": position}
            for position in self.result.hit_targets
            if position not in previously_hit
        ]
        if connected:
            self.last_events["connected"] = connected
        if evaluate_completion(self.result):
            self._enter_complete()
        return True

    # ------------------------------------------------------------------
    # Reporting
    def summary(self) -> Dict[str, object]:
        """Report the board after a fresh propagation pass."""

        result = self.propagate()
        metadata: Dict[str, object] = {
            "index": self.level_index,
            "name": self.level_name,
            "variant": "pipe" if isinstance(self.board, PipeGrid) else "mirror",
            "dimensions": f"{self.board.width}x{self.board.height}",
            "ruleset": self.ruleset.name,
        }
        best = self.scores.get(self.level_index)
        if best is not None:
            metadata["best_moves"] = best
        payload: Dict[str, object] = {
            "metadata": metadata,
            "state": self.state.value,
            "moves": self.moves,
            "complete": evaluate_completion(result),
            "energized": sorted([x, y] for x, y in result.energized),
            "targets": {
                f"({x}, {y})": hit for (x, y), hit in result.targets.items()
            },
        }
        if isinstance(self.board, MirrorBoard):
            payload["path"] = [
                {
                    "start": list(segment.start),
                    "end": list(segment.end),
                    "direction": segment.direction.name,
                }
                for segment in result.segments
            ]
            payload["loop_detected"] = result.loop_detected
        return payload

"""Power and beam propagation strategies plus the completion check."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Set, Tuple

from .board import Board, MirrorBoard, PipeGrid
from .config import MAX_BEAM_SEGMENTS
from .tiles import Direction, Position, Tile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BeamSegment:
    """Single directed cell-to-cell step of the laser beam."""

    start: Position
    end: Position
    direction: Direction


@dataclass
class PropagationResult:
    """Outcome of one propagation pass."""

    energized: Set[Position] = field(default_factory=set)
    targets: Dict[Position, bool] = field(default_factory=dict)
    segments: List[BeamSegment] = field(default_factory=list)
    loop_detected: bool = False
    truncated: bool = False

    @property
    def hit_targets(self) -> List[Position]:
        return [position for position, hit in self.targets.items() if hit]


def evaluate_completion(result: PropagationResult) -> bool:
    """Every target energized, and at least one target present."""

    return bool(result.targets) and all(result.targets.values())


class PropagationStrategy(ABC):
    """Computes which cells and targets are energized on a board."""

    @abstractmethod
    def propagate(self, board: Board) -> PropagationResult:
        raise NotImplementedError


class ConnectivityPropagation(PropagationStrategy):
    """Multi-source breadth first reachability over matching pipe connections."""

    def propagate(self, board: Board) -> PropagationResult:
        if not isinstance(board, PipeGrid):
            raise TypeError(f"{type(self).__name__} expects a PipeGrid, got {type(board).__name__}")

        board.reset_power()
        queue: Deque[Tile] = deque()
        for source in board.sources:
            source.powered = True
            queue.append(source)

        while queue:
            current = queue.popleft()
            for direction in current.connections:
                neighbour = board.tile_at(*direction.step(current.position))
                if neighbour is None or neighbour.powered:
                    continue
                if neighbour.connects(direction.opposite()):
                    neighbour.powered = True
                    queue.append(neighbour)

        result = PropagationResult(
            energized=set(board.powered_positions()),
            targets={tile.position: tile.powered for tile in board.targets},
        )
        logger.debug(
            "Power flow on '%s': %d cells powered, %d/%d targets",
            board.name,
            len(result.energized),
            len(result.hit_targets),
            len(result.targets),
        )
        return result


class BeamPropagation(PropagationStrategy):
    """Ray marching of a single laser beam with mirror reflection."""

    def __init__(self, max_segments: int = MAX_BEAM_SEGMENTS):
        if max_segments <= 0:
            raise ValueError("max_segments must be positive")
        self.max_segments = max_segments

    def trace(self, board: MirrorBoard) -> Tuple[List[BeamSegment], bool, bool]:
        """Return the beam segments plus the loop and truncation flags."""

        segments: List[BeamSegment] = []
        visited: Set[Tuple[int, int, Direction]] = set()
        position = board.laser.position
        direction = board.laser.direction
        loop_detected = False
        truncated = False

        while True:
            state = (position[0], position[1], direction)
            if state in visited:
                loop_detected = True
                break
            visited.add(state)

            next_position = direction.step(position)
            segments.append(BeamSegment(position, next_position, direction))

            if not board.inside(next_position):
                break

            mirror = board.mirrors.get(next_position)
            if mirror is not None:
                direction = mirror.reflect(direction)

            position = next_position

            # The cap counts emitted segments. A loop longer than the cap is
            # reported as truncated, not as a loop.
            if len(segments) >= self.max_segments:
                truncated = True
                break

        return segments, loop_detected, truncated

    def propagate(self, board: Board) -> PropagationResult:
        if not isinstance(board, MirrorBoard):
            raise TypeError(f"{type(self).__name__} expects a MirrorBoard, got {type(board).__name__}")

        segments, loop_detected, truncated = self.trace(board)
        lit: Set[Position] = set()
        for segment in segments:
            lit.add(segment.start)
            lit.add(segment.end)

        board.reset_hits()
        for target in board.targets:
            if target.position in lit:
                target.hit = True

        if truncated:
            logger.warning(
                "Beam on '%s' reached the %d segment cap", board.name, self.max_segments
            )
        return PropagationResult(
            energized={position for position in lit if board.inside(position)},
            targets={target.position: target.hit for target in board.targets},
            segments=segments,
            loop_detected=loop_detected,
            truncated=truncated,
        )


def strategy_for(board: Board, max_segments: Optional[int] = None) -> PropagationStrategy:
    if isinstance(board, PipeGrid):
        return ConnectivityPropagation()
    return BeamPropagation(max_segments or MAX_BEAM_SEGMENTS)

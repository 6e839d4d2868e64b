"""Simple command line demo for the puzzle logic."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from .board import MirrorBoard, PipeGrid
from .config import RULESETS, get_ruleset, resolve_directories
from .game import PuzzleGame
from .levels import LevelLoader
from .logging_config import setup_logging
from .propagation import PropagationResult
from .scores import BestScoreStore
from .tiles import Direction, TileType

D = Direction

PIPE_GLYPHS: Dict[FrozenSet[Direction], str] = {
    frozenset(): ".",
    frozenset({D.UP, D.DOWN}): "│",
    frozenset({D.LEFT, D.RIGHT}): "─",
    frozenset({D.UP, D.RIGHT}): "└",
    frozenset({D.RIGHT, D.DOWN}): "┌",
    frozenset({D.DOWN, D.LEFT}): "┐",
    frozenset({D.LEFT, D.UP}): "┘",
    frozenset({D.UP, D.RIGHT, D.DOWN}): "├",
    frozenset({D.RIGHT, D.DOWN, D.LEFT}): "┬",
    frozenset({D.DOWN, D.LEFT, D.UP}): "┤",
    frozenset({D.LEFT, D.UP, D.RIGHT}): "┴",
    frozenset({D.UP, D.RIGHT, D.DOWN, D.LEFT}): "┼",
}

SOURCE_GLYPHS: Dict[Direction, str] = {D.UP: "^", D.RIGHT: ">", D.DOWN: "v", D.LEFT: "<"}


def render_pipe_grid(grid: PipeGrid) -> List[str]:
    lines = []
    for row in grid.tiles:
        cells = []
        for tile in row:
            if tile.type is TileType.SOURCE:
                glyph = SOURCE_GLYPHS[next(iter(tile.connections))]
            elif tile.type is TileType.TARGET:
                glyph = "T"
            else:
                glyph = PIPE_GLYPHS[tile.connections]
            cells.append(glyph + ("*" if tile.powered else " "))
        lines.append("".join(cells).rstrip())
    return lines


def render_mirror_board(board: MirrorBoard, result: PropagationResult) -> List[str]:
    canvas = [["." for _ in range(board.width)] for _ in range(board.height)]
    for segment in result.segments:
        for x, y in (segment.start, segment.end):
            if board.inside((x, y)):
                canvas[y][x] = "-" if segment.direction in (D.LEFT, D.RIGHT) else "|"
    for (x, y), mirror in board.mirrors.items():
        canvas[y][x] = mirror.glyph
    for target in board.targets:
        if board.inside(target.position):
            canvas[target.y][target.x] = "@" if target.hit else "T"
    laser = board.laser
    canvas[laser.y][laser.x] = SOURCE_GLYPHS[laser.direction]
    return [" ".join(row) for row in canvas]


def render(game: PuzzleGame) -> str:
    if isinstance(game.board, PipeGrid):
        lines = render_pipe_grid(game.board)
    else:
        lines = render_mirror_board(game.board, game.result)
    return "\n".join(lines)


def parse_rotation(value: str) -> Tuple[int, int, bool]:
    parts = [part.strip() for part in value.split(",")]
    if len(parts) not in (2, 3):
        raise argparse.ArgumentTypeError(f"Expected X,Y[,ccw], got '{value}'")
    try:
        x, y = int(parts[0]), int(parts[1])
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Coordinates must be integers: '{value}'") from exc
    clockwise = True
    if len(parts) == 3:
        sense = parts[2].lower()
        if sense not in ("cw", "ccw"):
            raise argparse.ArgumentTypeError(f"Rotation sense must be cw or ccw: '{value}'")
        clockwise = sense == "cw"
    return x, y, clockwise


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Luminex puzzle demo")
    parser.add_argument("--levels", type=Path, help="Directory with level JSON files.")
    parser.add_argument("--list-levels", action="store_true", help="List levels and exit.")
    parser.add_argument("--validate", action="store_true", help="Strictly validate all levels.")
    parser.add_argument("--level", type=int, default=0, help="Zero based level index.")
    parser.add_argument(
        "--rotate",
        type=parse_rotation,
        action="append",
        default=[],
        metavar="X,Y[,ccw]",
        help="Rotate a tile before printing; may be repeated.",
    )
    parser.add_argument(
        "--ruleset", choices=sorted(RULESETS), default="classic", help="Rotation rules."
    )
    parser.add_argument("--json", action="store_true", help="Print a JSON summary.")
    parser.add_argument("--save-scores", action="store_true", help="Persist best scores.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    parser.add_argument("--log-file", help="Also write the log to this file.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING, args.log_file)

    ruleset = get_ruleset(args.ruleset)
    directories = resolve_directories(level_root=args.levels)
    loader = LevelLoader(directories.level_root, strict=ruleset.strict_levels)

    if args.validate:
        problems = loader.validate()
        for problem in problems:
            print(problem)
        print(f"{len(loader.level_files())} levels checked, {len(problems)} problems")
        return 1 if problems else 0

    catalog = loader.load_catalog()
    if args.list_levels:
        print("Available levels:")
        for index, name in enumerate(catalog.names()):
            print(f"  {index}: {name}")
        return 0

    scores = BestScoreStore(directories.save_path if args.save_scores else None)
    game = PuzzleGame(catalog, ruleset=ruleset, scores=scores)
    game.load_level(args.level)
    for x, y, clockwise in args.rotate:
        if not game.rotate_tile(x, y, clockwise):
            print(f"Cannot rotate ({x}, {y})", file=sys.stderr)
    game.update()

    if args.json:
        print(json.dumps(game.summary(), indent=2))
        return 0

    print("=== Luminex Demo ===")
    print(f"Level {game.level_index}: {game.level_name}")
    print(render(game))
    print(f"Moves: {game.moves}")
    print(f"Complete: {'yes' if game.is_level_complete() else 'no'}")
    return 0


if __name__ == "__main__":
    sys.exit(main())

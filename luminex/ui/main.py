"""Interactive pygame front end for the puzzle."""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional, Sequence

from ..config import CLASSIC, GameDirectories, RULESETS, Ruleset, get_ruleset, resolve_directories
from ..game import PuzzleGame
from ..levels import LevelLoader
from ..logging_config import setup_logging
from ..scores import BestScoreStore
from . import layout
from .toolkit import PuzzleUI, ensure_pygame

logger = logging.getLogger(__name__)

FRAME_RATE = 60


class PuzzleApp:
    """Windowed game loop: one input event batch and one redraw per frame."""

    def __init__(
        self,
        *,
        directories: Optional[GameDirectories] = None,
        ruleset: Ruleset = CLASSIC,
        level_index: int = 0,
        screen_size=(960, 720),
    ) -> None:
        pygame = ensure_pygame()
        pygame.init()
        pygame.display.set_caption("Luminex")
        self.directories = directories or resolve_directories()
        catalog = LevelLoader(
            self.directories.level_root, strict=ruleset.strict_levels
        ).load_catalog()
        self.game = PuzzleGame(
            catalog,
            ruleset=ruleset,
            scores=BestScoreStore(self.directories.save_path),
            level_index=level_index,
        )
        self.screen = pygame.display.set_mode(screen_size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(pygame.font.get_default_font(), 22)
        self.small_font = pygame.font.Font(pygame.font.get_default_font(), 16)
        self._layout_for_level()

    def _layout_for_level(self) -> None:
        board = self.game.board
        self.geometry = layout.compute_geometry(
            board.width, board.height, window=self.screen.get_size()
        )
        board_x, board_y, _, _ = self.geometry.board
        self.ui = PuzzleUI(
            self.game,
            cell_size=self.geometry.cell_size,
            origin=(board_x, board_y),
            surface=self.screen,
        )
        self.ui_level = self.game.level_index

    def handle_event(self, event) -> None:
        pygame = ensure_pygame()
        if event.type == pygame.QUIT:
            raise SystemExit
        if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
            raise SystemExit
        if event.type == pygame.VIDEORESIZE:
            self._layout_for_level()
            return
        self.ui.process_events([event])
        if self.ui.last_action == "rotate":
            logger.debug("Move %d on level %d", self.game.moves, self.game.level_index)

    def draw(self) -> None:
        pygame = ensure_pygame()
        if self.ui_level != self.game.level_index:
            self._layout_for_level()
        self.ui.render()
        pygame.draw.rect(self.screen, layout.BOARD_BORDER_COLOR, pygame.Rect(self.geometry.board), 3)
        self._draw_header()
        self._draw_footer()
        pygame.display.flip()

    def _draw_header(self) -> None:
        game = self.game
        left = self.font.render(
            f"Level {game.level_index + 1}   Moves: {game.moves}", True, layout.TEXT_COLOR
        )
        right = self.font.render(game.level_name, True, layout.ACCENT_COLOR)
        self.screen.blit(left, (20, 20))
        self.screen.blit(right, (self.screen.get_width() - right.get_width() - 20, 20))

    def _draw_footer(self) -> None:
        if self.game.complete:
            best = self.game.scores.get(self.game.level_index)
            text = f"LEVEL COMPLETE! Best: {best} moves. Click to continue"
            color = layout.ACCENT_COLOR
        else:
            text = "Left/right click: rotate | R: reset | N: next level | ESC: quit"
            color = layout.TEXT_COLOR
        label = self.small_font.render(text, True, color)
        _, footer_y, width, height = self.geometry.footer
        self.screen.blit(
            label,
            ((width - label.get_width()) // 2, footer_y + (height - label.get_height()) // 2),
        )

    def run(self) -> None:  # pragma: no cover - interactive loop
        pygame = ensure_pygame()
        try:
            while True:
                for event in pygame.event.get():
                    self.handle_event(event)
                self.game.update()
                self.draw()
                self.clock.tick(FRAME_RATE)
        except SystemExit:
            pass
        finally:
            pygame.quit()


def bootstrap_directories() -> GameDirectories:
    """Return resolved directories and print a short bootstrap message."""

    directories = resolve_directories()
    message = (
        "Luminex UI bootstrap\n"
        f"  levels: {directories.level_root}\n"
        f"  scores: {directories.save_path}\n"
        "Set LUMINEX_LEVEL_ROOT or LUMINEX_SAVE_PATH to use custom locations."
    )
    print(message)
    return directories


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Luminex UI launcher")
    parser.add_argument(
        "--info",
        action="store_true",
        help="Print resolved resource directories and exit without launching the UI.",
    )
    parser.add_argument("--list-levels", action="store_true", help="List levels and exit.")
    parser.add_argument("--level", type=int, default=0, help="Zero based level to start at.")
    parser.add_argument("--ruleset", choices=sorted(RULESETS), default="classic")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.INFO)

    if args.info:
        bootstrap_directories()
        return 0

    directories = resolve_directories()
    if args.list_levels:
        catalog = LevelLoader(directories.level_root).load_catalog()
        lines: List[str] = ["Available levels:"]
        lines.extend(f"  {index}: {name}" for index, name in enumerate(catalog.names()))
        print("\n".join(lines))
        return 0

    app = PuzzleApp(  # pragma: no cover - opens a window
        directories=directories, ruleset=get_ruleset(args.ruleset), level_index=args.level
    )
    app.run()  # pragma: no cover
    return 0  # pragma: no cover


if __name__ == "__main__":  # pragma: no cover - manual invocation entry point
    raise SystemExit(main())

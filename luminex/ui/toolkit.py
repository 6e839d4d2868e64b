"""Minimal pygame based UI helpers for headless testing.

This module intentionally keeps the rendering deterministic so it can be
exercised in automated tests using the SDL ``dummy`` video driver.
"""

from __future__ import annotations

import os
from typing import Iterable, Optional, Tuple

from ..board import MirrorBoard, PipeGrid
from ..game import PuzzleGame
from ..tiles import Direction, TileType
from . import layout

# Pygame is optional for the library but required for the UI helpers.  The
# import is performed lazily in ``ensure_pygame`` so test environments can
# control the SDL configuration (e.g. select the ``dummy`` video driver).
_PYGAME = None


def ensure_pygame():
    global _PYGAME
    if _PYGAME is None:
        os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
        import pygame

        pygame.display.init()
        _PYGAME = pygame
    return _PYGAME


class PuzzleUI:
    """Small pygame wrapper translating clicks into rotate commands."""

    def __init__(
        self,
        game: PuzzleGame,
        *,
        cell_size: int = 32,
        origin: Tuple[int, int] = (0, 0),
        surface=None,
        use_display: bool = False,
    ) -> None:
        pygame = ensure_pygame()
        self.game = game
        self.cell_size = cell_size
        self.origin = origin
        width = origin[0] + game.board.width * cell_size
        height = origin[1] + game.board.height * cell_size
        self.surface = surface if surface is not None else pygame.Surface((width, height))
        self.screen = None
        if use_display:
            self.screen = pygame.display.set_mode((width, height))
        self.last_action: Optional[str] = None

    # ------------------------------------------------------------------
    # Input handling
    def process_events(self, events: Iterable[object]) -> None:
        pygame = ensure_pygame()
        for event in events:
            if event.type == pygame.MOUSEBUTTONDOWN and event.button in (1, 3):
                self._handle_click(event.pos, clockwise=event.button == 1)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_r:
                    self.game.reset()
                    self.last_action = "reset"
                elif event.key == pygame.K_n:
                    self.game.advance()
                    self.last_action = "advance"

    def grid_from_pixel(self, pos: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        x = pos[0] - self.origin[0]
        y = pos[1] - self.origin[1]
        if x < 0 or y < 0:
            return None
        grid_x = x // self.cell_size
        grid_y = y // self.cell_size
        if not self.game.board.inside((grid_x, grid_y)):
            return None
        return grid_x, grid_y

    def _handle_click(self, pos: Tuple[int, int], clockwise: bool) -> None:
        # A click on a solved board moves on to the next level.
        if self.game.complete:
            self.game.advance()
            self.last_action = "advance"
            return
        cell = self.grid_from_pixel(pos)
        if cell is None:
            self.last_action = None
            return
        if self.game.rotate_tile(cell[0], cell[1], clockwise):
            self.last_action = "rotate"
        else:
            self.last_action = None

    # ------------------------------------------------------------------
    # Rendering helpers
    def render(self):
        pygame = ensure_pygame()
        self.surface.fill(layout.BACKGROUND_COLOR)
        board = self.game.board
        if isinstance(board, PipeGrid):
            self._draw_pipe_grid(board)
        else:
            self._draw_mirror_board(board)
        if self.screen is not None:
            self.screen.blit(self.surface, (0, 0))
            pygame.display.flip()
        return self.surface

    def cell_rect(self, x: int, y: int):
        pygame = ensure_pygame()
        return pygame.Rect(
            self.origin[0] + x * self.cell_size,
            self.origin[1] + y * self.cell_size,
            self.cell_size,
            self.cell_size,
        )

    def cell_center(self, x: int, y: int) -> Tuple[int, int]:
        return self.cell_rect(x, y).center

    def _draw_cell(self, x: int, y: int, lit: bool) -> None:
        pygame = ensure_pygame()
        rect = self.cell_rect(x, y)
        color = layout.POWERED_CELL_COLOR if lit else layout.CELL_COLOR
        self.surface.fill(color, rect)
        pygame.draw.rect(self.surface, layout.GRID_LINE_COLOR, rect, 1)

    def _draw_pipe_grid(self, grid: PipeGrid) -> None:
        pygame = ensure_pygame()
        for tile in grid:
            self._draw_cell(tile.x, tile.y, tile.powered)
            rect = self.cell_rect(tile.x, tile.y)
            center = rect.center
            half = self.cell_size // 2
            color = layout.POWERED_PIPE_COLOR if tile.powered else layout.PIPE_COLOR
            for direction in tile.connections:
                dx, dy = direction.vector
                end = (center[0] + dx * half, center[1] + dy * half)
                pygame.draw.line(self.surface, color, center, end, 3)
            if tile.type is TileType.SOURCE:
                body = rect.inflate(-self.cell_size * 2 // 5, -self.cell_size * 2 // 5)
                pygame.draw.rect(self.surface, layout.SOURCE_COLOR, body)
            elif tile.type is TileType.TARGET:
                bulb = layout.BULB_COLORS.get(tile.bulb_type, layout.BULB_COLORS[1])
                pygame.draw.circle(
                    self.surface,
                    bulb if tile.powered else layout.UNLIT_BULB_COLOR,
                    center,
                    max(2, self.cell_size // 4),
                )

    def _draw_mirror_board(self, board: MirrorBoard) -> None:
        pygame = ensure_pygame()
        lit = self.game.result.energized
        for y in range(board.height):
            for x in range(board.width):
                self._draw_cell(x, y, (x, y) in lit)

        inset = self.cell_size // 6
        for (x, y), mirror in board.mirrors.items():
            rect = self.cell_rect(x, y).inflate(-2 * inset, -2 * inset)
            if mirror.angle == 0:
                start, end = rect.topleft, (rect.right - 1, rect.bottom - 1)
            else:
                start, end = (rect.left, rect.bottom - 1), (rect.right - 1, rect.top)
            pygame.draw.line(self.surface, layout.MIRROR_COLOR, start, end, 3)

        for target in board.targets:
            if not board.inside(target.position):
                continue
            color = layout.BULB_COLORS[1] if target.hit else layout.UNLIT_BULB_COLOR
            pygame.draw.circle(
                self.surface, color, self.cell_center(*target.position), max(2, self.cell_size // 4)
            )

        laser = board.laser
        body = self.cell_rect(laser.x, laser.y).inflate(-self.cell_size // 2, -self.cell_size // 2)
        pygame.draw.rect(self.surface, layout.LASER_COLOR, body)

        for segment in self.game.result.segments:
            start = self.cell_center(*segment.start)
            end = self._clip_to_board(board, segment.end, segment.direction)
            pygame.draw.line(self.surface, layout.BEAM_COLOR, start, end, 3)

    def _clip_to_board(self, board: MirrorBoard, cell, direction: Direction) -> Tuple[int, int]:
        if board.inside(cell):
            return self.cell_center(*cell)
        # Beam leaving the board stops at the outer edge.
        center = self.cell_center(*direction.opposite().step(cell))
        dx, dy = direction.vector
        half = self.cell_size // 2
        return center[0] + dx * half, center[1] + dy * half


__all__ = ["PuzzleUI", "ensure_pygame"]

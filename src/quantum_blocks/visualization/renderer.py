from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
import pygame

from quantum_blocks.game import GameState, Piece


def _color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        1: (0, 240, 240),  # I
        2: (240, 240, 0),  # O
        3: (160, 0, 240),  # T
        4: (0, 240, 0),    # S
        5: (240, 0, 0),    # Z
        6: (0, 0, 240),    # J
        7: (240, 160, 0),  # L
    }
    return palette.get(abs(v), (200, 200, 200))


LOCKED_COLOR = (110, 110, 124)
TEXT_COLOR = (230, 230, 230)


class Renderer:
    """Draws published snapshots; never touches game state."""

    def __init__(self, cell_size: int = 30, margin: int = 20, panel_width: int = 160) -> None:
        self.cell_size = cell_size
        self.margin = margin
        self.panel_width = panel_width
        self._font: Optional[pygame.font.Font] = None

    def window_size(self, state: GameState) -> Tuple[int, int]:
        width = state.board_width * self.cell_size + self.margin * 3 + self.panel_width
        height = state.board_height * self.cell_size + self.margin * 2
        return width, height

    def _cell_rect(self, x: int, y: int) -> pygame.Rect:
        return pygame.Rect(
            x * self.cell_size,
            y * self.cell_size,
            self.cell_size - 1,
            self.cell_size - 1,
        )

    def _grid_surface(self, matrix: np.ndarray) -> pygame.Surface:
        h, w = matrix.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(matrix[y, x])
                color = LOCKED_COLOR if v > 0 else _color_for_value(v)
                pygame.draw.rect(surf, color, self._cell_rect(x, y))
        return surf

    def _preview_surface(self, piece: Piece) -> pygame.Surface:
        surf = pygame.Surface((4 * self.cell_size, 4 * self.cell_size))
        surf.fill((10, 10, 14))
        top = min(b.row for b in piece.blocks)
        left = min(b.col for b in piece.blocks)
        for b in piece.blocks:
            pygame.draw.rect(surf, _color_for_value(int(piece.kind)), self._cell_rect(b.col - left, b.row - top))
        return surf

    def _text(self, screen: pygame.Surface, text: str, pos: Tuple[int, int]) -> None:
        if self._font is None:
            self._font = pygame.font.SysFont(None, 28)
        screen.blit(self._font.render(text, True, TEXT_COLOR), pos)

    def draw(self, screen: pygame.Surface, state: GameState) -> None:
        screen.fill((10, 10, 14))
        screen.blit(self._grid_surface(state.to_matrix()), (self.margin, self.margin))

        panel_x = self.margin * 2 + state.board_width * self.cell_size
        self._text(screen, f"Score {state.score}", (panel_x, self.margin))
        self._text(screen, f"Level {state.level}", (panel_x, self.margin + 30))
        self._text(screen, f"Lines {state.lines_cleared_total}", (panel_x, self.margin + 60))
        if state.next_piece is not None:
            self._text(screen, "Next", (panel_x, self.margin + 100))
            screen.blit(self._preview_surface(state.next_piece), (panel_x, self.margin + 130))

        if state.game_over:
            self._text(screen, "Game Over - R to restart", (self.margin, self.margin // 2))
        pygame.display.flip()

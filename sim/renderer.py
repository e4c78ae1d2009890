"""
Grid renderer.

Purpose: Draw a frame's symbolic grid onto a pygame surface, one square
    per cell.

Inputs:
    - Frame (symbolic rows)
    - Target surface

Outputs:
    - Pixels on the surface

Params:
    cell_size: int - Pixels per cell
    stroke_width: int - Outline width for open cells
"""

import pygame
from typing import Tuple

from nav.frames import Frame, Tag


TAG_COLORS = {
    Tag.WALL: (0, 0, 0),
    Tag.PATH: (255, 255, 0),
    Tag.START: (255, 0, 0),
    Tag.END: (0, 255, 0),
    Tag.GOOD: (50, 50, 255),
    Tag.BAD: (255, 50, 50),
    Tag.OPEN: (255, 255, 255),
}
OUTLINE_COLOR = (2, 7, 159)


class GridRenderer:
    """Renders frames as colored squares."""

    def __init__(self, cell_size: int = 20, stroke_width: int = 2, origin: Tuple[int, int] = (0, 0)):
        self.cell_size = cell_size
        self.stroke_width = stroke_width
        self.origin = origin

    def surface_size(self, frame_or_rows) -> Tuple[int, int]:
        """Pixel size needed for a frame (or its rows)."""
        rows = frame_or_rows.rows if isinstance(frame_or_rows, Frame) else frame_or_rows
        return len(rows[0]) * self.cell_size, len(rows) * self.cell_size

    def cell_rect(self, x: int, y: int) -> pygame.Rect:
        ox, oy = self.origin
        return pygame.Rect(ox + x * self.cell_size, oy + y * self.cell_size,
                           self.cell_size, self.cell_size)

    def draw(self, surface, frame: Frame):
        """Draw every cell of frame onto surface."""
        for y, row in enumerate(frame.rows):
            for x, char in enumerate(row):
                tag = Tag(char)
                rect = self.cell_rect(x, y)
                pygame.draw.rect(surface, TAG_COLORS[tag], rect)
                if tag == Tag.OPEN:
                    pygame.draw.rect(surface, OUTLINE_COLOR, rect, self.stroke_width)

# surfaces.py
"""
Drawing surfaces the renderer paints on.

A surface is sized in logical pixels and carries a device pixel ratio;
callers always pass logical coordinates to fill_rect() and the surface
scales them to its backing pixels.
"""
from __future__ import annotations
from typing import Protocol, Tuple

import numpy as np  # type: ignore
import pygame       # type: ignore

Color = Tuple[int, int, int]


class Surface(Protocol):
    width: int
    height: int
    pixel_ratio: int

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None: ...


class ArraySurface:
    """Headless surface backed by an (H, W, 3) uint8 array in device pixels."""

    def __init__(self, width: int, height: int, pixel_ratio: int = 1):
        self.width = width
        self.height = height
        self.pixel_ratio = pixel_ratio
        self.pixels = np.zeros(
            (height * pixel_ratio, width * pixel_ratio, 3), dtype=np.uint8
        )

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        r = self.pixel_ratio
        # numpy slicing clips anything hanging off the right/bottom edge
        x0, y0 = max(x * r, 0), max(y * r, 0)
        x1, y1 = (x + w) * r, (y + h) * r
        if x1 <= x0 or y1 <= y0:
            return
        self.pixels[y0:y1, x0:x1] = color

    def frame(self) -> np.ndarray:
        return self.pixels

    def color_at(self, x: int, y: int) -> Color:
        """Colour of the logical pixel (x, y)."""
        r = self.pixel_ratio
        return tuple(int(c) for c in self.pixels[y * r, x * r])


class PygameSurface:
    """Wraps a pygame.Surface whose size is the logical size times pixel_ratio."""

    def __init__(self, target: pygame.Surface, pixel_ratio: int = 1):
        self.target = target
        self.pixel_ratio = pixel_ratio

    @property
    def width(self) -> int:
        return self.target.get_width() // self.pixel_ratio

    @property
    def height(self) -> int:
        return self.target.get_height() // self.pixel_ratio

    def fill_rect(self, x: int, y: int, w: int, h: int, color: Color) -> None:
        r = self.pixel_ratio
        pygame.draw.rect(self.target, color, pygame.Rect(x * r, y * r, w * r, h * r))

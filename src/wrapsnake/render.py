# render.py
from __future__ import annotations

from .config import BG, FOOD, HEAD, BODY
from .game import GameState
from .surfaces import Surface


class Renderer:
    """
    Paints a GameState onto any Surface. The only state kept between
    frames is the pixel size of a grid cell, which the window code
    recomputes on resize.
    """

    def __init__(self, cell_size: int):
        self.cell_size = cell_size

    def resize(self, cell_size: int) -> None:
        if cell_size < 1:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size

    def draw(self, surface: Surface, state: GameState) -> None:
        cs = self.cell_size
        surface.fill_rect(0, 0, surface.width, surface.height, BG)

        if state.food is not None:
            fx, fy = state.food
            surface.fill_rect(fx * cs, fy * cs, cs, cs, FOOD)

        # 1px gap between segments keeps the body readable
        seg = max(cs - 1, 1)
        for i, (x, y) in enumerate(state.snake):
            surface.fill_rect(x * cs, y * cs, seg, seg, HEAD if i == 0 else BODY)

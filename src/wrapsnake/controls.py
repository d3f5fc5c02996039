# controls.py
"""Maps raw input (keys, swipes, on-screen buttons, window size) to game operations."""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Tuple, Union

import pygame  # type: ignore

from .config import Direction, UP, DOWN, LEFT, RIGHT, MIN_SPEED, MAX_SPEED


class Command(Enum):
    PAUSE = "pause"
    RESTART = "restart"
    FASTER = "faster"
    SLOWER = "slower"
    QUIT = "quit"


KEY_DIRECTIONS = {
    pygame.K_UP: UP,
    pygame.K_DOWN: DOWN,
    pygame.K_LEFT: LEFT,
    pygame.K_RIGHT: RIGHT,
    pygame.K_w: UP,
    pygame.K_s: DOWN,
    pygame.K_a: LEFT,
    pygame.K_d: RIGHT,
}

KEY_COMMANDS = {
    pygame.K_SPACE: Command.PAUSE,
    pygame.K_p: Command.PAUSE,
    pygame.K_r: Command.RESTART,
    pygame.K_PLUS: Command.FASTER,
    pygame.K_EQUALS: Command.FASTER,
    pygame.K_KP_PLUS: Command.FASTER,
    pygame.K_MINUS: Command.SLOWER,
    pygame.K_KP_MINUS: Command.SLOWER,
    pygame.K_ESCAPE: Command.QUIT,
}

MIN_SWIPE_PX = 10


def key_to_direction(key: int) -> Optional[Direction]:
    return KEY_DIRECTIONS.get(key)


def key_to_command(key: int) -> Optional[Command]:
    return KEY_COMMANDS.get(key)


def swipe_direction(start: Tuple[int, int], end: Tuple[int, int],
                    min_distance: int = MIN_SWIPE_PX) -> Optional[Direction]:
    """
    Direction of a pointer drag from start to end, by its dominant axis.
    Drags shorter than min_distance on both axes are taps and return None.
    Screen y grows downward, matching the grid.
    """
    dx = end[0] - start[0]
    dy = end[1] - start[1]
    if max(abs(dx), abs(dy)) < min_distance:
        return None
    if abs(dx) > abs(dy):
        return RIGHT if dx > 0 else LEFT
    return DOWN if dy > 0 else UP


def fit_cell_size(width: int, height: int, cols: int, rows: int,
                  max_cell: int) -> int:
    """Largest whole cell size (capped at max_cell) that fits the grid in width x height."""
    fit = min(width // cols, height // rows)
    return max(1, min(max_cell, fit))


# ---------- On-screen controls ----------
HUD_HEIGHT = 48       # score, speed slider, pause/restart above the board
PAD_HEIGHT = 132      # direction pad below the board
BUTTON = 36           # side of a direction button
GAP = 4
MIN_WIDTH = 320       # room for the HUD on narrow grids


@dataclass
class Button:
    rect: pygame.Rect
    label: str
    action: Union[Direction, Command]


@dataclass
class Layout:
    """Where everything sits in a window, in logical pixels."""
    cell_size: int
    board: pygame.Rect
    slider: pygame.Rect
    buttons: List[Button]

    def button_at(self, pos: Tuple[int, int]) -> Optional[Button]:
        for button in self.buttons:
            if button.rect.collidepoint(pos):
                return button
        return None

    def on_slider(self, pos: Tuple[int, int]) -> bool:
        # the track is thin; accept clicks a little around it
        return self.slider.inflate(12, 20).collidepoint(pos)

    def speed_at(self, x: int) -> int:
        """Speed under a pointer at x on the slider track, clamped to its ends."""
        span = max(self.slider.width - 1, 1)
        frac = (x - self.slider.left) / span
        speed = MIN_SPEED + round(frac * (MAX_SPEED - MIN_SPEED))
        return max(MIN_SPEED, min(MAX_SPEED, speed))

    def knob_x(self, speed: int) -> int:
        frac = (speed - MIN_SPEED) / (MAX_SPEED - MIN_SPEED)
        return self.slider.left + round(frac * (self.slider.width - 1))


def window_size(cols: int, rows: int, cell_size: int) -> Tuple[int, int]:
    """Logical window size that fits the board at cell_size plus the HUD and pad."""
    return max(cols * cell_size, MIN_WIDTH), HUD_HEIGHT + rows * cell_size + PAD_HEIGHT


def compute_layout(width: int, height: int, cols: int, rows: int,
                   max_cell: int) -> Layout:
    cell = fit_cell_size(width, height - HUD_HEIGHT - PAD_HEIGHT, cols, rows, max_cell)
    board = pygame.Rect((width - cols * cell) // 2, HUD_HEIGHT, cols * cell, rows * cell)

    # HUD: right-aligned [slider] [Pause] [Restart]
    top = (HUD_HEIGHT - 28) // 2
    restart = pygame.Rect(width - 8 - 72, top, 72, 28)
    pause = pygame.Rect(restart.left - 8 - 64, top, 64, 28)
    slider = pygame.Rect(pause.left - 12 - 96, top + 10, 96, 8)

    # Pad: a plus shape centred under the board
    cx = width // 2
    pad_top = board.bottom + 8
    half = BUTTON // 2
    up = pygame.Rect(cx - half, pad_top, BUTTON, BUTTON)
    mid = pad_top + BUTTON + GAP
    left = pygame.Rect(cx - half - GAP - BUTTON, mid, BUTTON, BUTTON)
    right = pygame.Rect(cx + half + GAP, mid, BUTTON, BUTTON)
    down = pygame.Rect(cx - half, mid + BUTTON + GAP, BUTTON, BUTTON)

    buttons = [
        Button(pause, "Pause", Command.PAUSE),
        Button(restart, "Restart", Command.RESTART),
        Button(up, "^", UP),
        Button(left, "<", LEFT),
        Button(right, ">", RIGHT),
        Button(down, "v", DOWN),
    ]
    return Layout(cell_size=cell, board=board, slider=slider, buttons=buttons)

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

# ----- Colors (RGB) -----
BG    = (11, 11, 11)     # #0b0b0b
FOOD  = (230, 57, 70)    # #e63946
HEAD  = (38, 70, 83)     # #264653
BODY  = (42, 157, 143)   # #2a9d8f
TEXT  = (220, 220, 230)
MUTED = (148, 163, 184)  # #94a3b8

# ----- Directions (dx, dy) -----
UP, DOWN, LEFT, RIGHT = (0, -1), (0, 1), (-1, 0), (1, 0)
DIRECTIONS = (UP, DOWN, LEFT, RIGHT)

Position = Tuple[int, int]
Direction = Tuple[int, int]

# ----- Speed limits (ticks per second) -----
MIN_SPEED, MAX_SPEED = 4, 16

DEFAULT_HIGHSCORE_PATH = Path.home() / ".wrapsnake" / "highscore.txt"


# ----- Tunables -----
@dataclass
class GameConfig:
    cols: int = 20
    rows: int = 20
    cell_size: int = 20           # upper bound; the window may shrink it
    speed: int = 8                # ticks per second
    seed: Optional[int] = None    # None -> nondeterministic food placement
    pixel_ratio: int = 1
    highscore_path: Path = field(default_factory=lambda: DEFAULT_HIGHSCORE_PATH)

    def __post_init__(self):
        # three starting segments plus a free cell ahead of the head
        if self.cols < 4 or self.rows < 3:
            raise ValueError(f"Grid must be at least 4x3, got {self.cols}x{self.rows}")
        if self.cell_size < 1:
            raise ValueError(f"cell_size must be positive, got {self.cell_size}")
        if self.pixel_ratio < 1:
            raise ValueError(f"pixel_ratio must be positive, got {self.pixel_ratio}")
        if not MIN_SPEED <= self.speed <= MAX_SPEED:
            raise ValueError(
                f"speed must be within {MIN_SPEED}..{MAX_SPEED}, got {self.speed}"
            )
        self.highscore_path = Path(self.highscore_path)

    @property
    def width(self) -> int:
        return self.cols * self.cell_size

    @property
    def height(self) -> int:
        return self.rows * self.cell_size

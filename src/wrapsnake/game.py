# game.py
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence
import logging
import random

from .config import (
    GameConfig, Position, Direction,
    DIRECTIONS, RIGHT, MIN_SPEED, MAX_SPEED,
)
from .persistence import HighScoreStore, MemoryHighScoreStore

logger = logging.getLogger(__name__)


class RunState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class TickOutcome(Enum):
    IDLE = "idle"    # not running, nothing happened
    MOVED = "moved"
    ATE = "ate"
    DIED = "died"


# ---------- Helpers ----------
def spawn_food(snake: Sequence[Position], cols: int, rows: int,
               rng: random.Random) -> Position:
    """Rejection-sample a cell not covered by the snake. The caller must
    make sure at least one free cell exists."""
    occupied = set(snake)
    while True:
        fx = rng.randrange(cols)
        fy = rng.randrange(rows)
        if (fx, fy) not in occupied:
            return (fx, fy)


def is_opposite(a: Direction, b: Direction) -> bool:
    return a[0] == -b[0] and a[1] == -b[1]


def wrap(pos: Position, cols: int, rows: int) -> Position:
    return (pos[0] % cols, pos[1] % rows)


def initial_snake(cols: int, rows: int) -> List[Position]:
    cx, cy = cols // 2, rows // 2
    return [(cx, cy), (cx - 1, cy), (cx - 2, cy)]


# ---------- State ----------
@dataclass
class GameState:
    snake: List[Position]          # head at index 0
    direction: Direction           # committed on the last tick
    pending: Direction             # applied on the next tick
    food: Optional[Position]       # None only once the board is full
    score: int
    high_score: int
    run_state: RunState
    speed: int                     # ticks per second

    @property
    def head(self) -> Position:
        return self.snake[0]


class SnakeGame:
    """
    The tick-driven state machine. Input code only calls
    set_pending_direction / toggle_running / restart / set_speed;
    a scheduler calls tick() once per period.
    """

    def __init__(self, cfg: Optional[GameConfig] = None,
                 store: Optional[HighScoreStore] = None,
                 rng: Optional[random.Random] = None):
        self.cfg = cfg or GameConfig()
        self.store = store if store is not None else MemoryHighScoreStore()
        self.rng = rng or random.Random(self.cfg.seed)
        self.state = self._fresh_state(high_score=self.store.load(),
                                        speed=self.cfg.speed)

    # ----- Input-facing operations -----
    def set_pending_direction(self, d: Direction) -> None:
        d = tuple(d)
        if d not in DIRECTIONS:
            raise ValueError(f"Not a unit direction: {d!r}")
        # no 180° turns; last write before the tick wins
        if is_opposite(d, self.state.direction):
            return
        self.state.pending = d

    def toggle_running(self) -> RunState:
        s = self.state
        if s.run_state is RunState.RUNNING:
            s.run_state = RunState.PAUSED
            logger.info("Paused")
        elif s.run_state is RunState.PAUSED:
            s.run_state = RunState.RUNNING
            logger.info("Resumed")
        return s.run_state

    def set_speed(self, speed: int) -> int:
        clamped = max(MIN_SPEED, min(MAX_SPEED, int(speed)))
        if clamped != speed:
            logger.debug("Speed %s clamped to %s", speed, clamped)
        if clamped != self.state.speed:
            logger.info("Speed set to %d ticks/s", clamped)
        self.state.speed = clamped
        return clamped

    @property
    def tick_interval_ms(self) -> float:
        return 1000 / self.state.speed

    def restart(self) -> None:
        # in-memory high score survives a store that failed to persist it
        high = max(self.state.high_score, self.store.load())
        self.state = self._fresh_state(high_score=high, speed=self.state.speed)
        logger.info("New game (high score %d)", high)

    # ----- Tick -----
    def tick(self) -> TickOutcome:
        s = self.state
        if s.run_state is not RunState.RUNNING:
            return TickOutcome.IDLE

        # Commit direction once per tick
        s.direction = s.pending

        hx, hy = s.head
        dx, dy = s.direction
        new_head = wrap((hx + dx, hy + dy), self.cfg.cols, self.cfg.rows)

        # Self collision; the tail has not moved yet so it counts too
        if new_head in s.snake:
            s.run_state = RunState.GAME_OVER
            logger.info("Game over at %s with score %d", new_head, s.score)
            return TickOutcome.DIED

        s.snake.insert(0, new_head)

        if new_head != s.food:
            s.snake.pop()
            return TickOutcome.MOVED

        s.score += 1
        logger.debug("Ate food at %s, score %d", new_head, s.score)
        if s.score > s.high_score:
            s.high_score = s.score
            self.store.save(s.score)

        if len(s.snake) >= self.cfg.cols * self.cfg.rows:
            # Nowhere left to put food
            s.food = None
            s.run_state = RunState.GAME_OVER
            logger.info("Board filled with score %d", s.score)
        else:
            s.food = spawn_food(s.snake, self.cfg.cols, self.cfg.rows, self.rng)
        return TickOutcome.ATE

    # ----- Internals -----
    def _fresh_state(self, high_score: int, speed: int) -> GameState:
        snake = initial_snake(self.cfg.cols, self.cfg.rows)
        return GameState(
            snake=snake,
            direction=RIGHT,
            pending=RIGHT,
            food=spawn_food(snake, self.cfg.cols, self.cfg.rows, self.rng),
            score=0,
            high_score=high_score,
            run_state=RunState.RUNNING,
            speed=speed,
        )

# main.py
from __future__ import annotations
import argparse
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pygame # type: ignore

from .config import GameConfig, DEFAULT_HIGHSCORE_PATH, MIN_SPEED, MAX_SPEED, TEXT, MUTED, BODY
from .controls import (
    Command, Layout,
    key_to_command, key_to_direction, swipe_direction,
    compute_layout, window_size,
)
from .game import SnakeGame, RunState, TickOutcome
from .persistence import FileHighScoreStore
from .render import Renderer
from .scheduler import TickScheduler
from .surfaces import PygameSurface

logger = logging.getLogger(__name__)

PANEL = (24, 28, 36)
BUTTON_FILL = (44, 52, 66)


def scaled(rect: pygame.Rect, ratio: int) -> pygame.Rect:
    return pygame.Rect(rect.x * ratio, rect.y * ratio, rect.w * ratio, rect.h * ratio)


# --------------------------
# HUD, buttons and overlays (drawn straight onto the window, in device pixels)
# --------------------------
def draw_hud(screen: pygame.Surface, font: pygame.font.Font, small: pygame.font.Font,
             game: SnakeGame, layout: Layout, ratio: int) -> None:
    s = game.state
    score = font.render(f"Score: {s.score}", True, TEXT)
    best = small.render(f"Best: {s.high_score}", True, MUTED)
    screen.blit(score, (8 * ratio, 4 * ratio))
    screen.blit(best, (8 * ratio, 4 * ratio + score.get_height()))

    # speed slider: track, knob and value
    track = scaled(layout.slider, ratio)
    pygame.draw.rect(screen, BUTTON_FILL, track)
    knob = pygame.Rect(0, 0, 8 * ratio, 18 * ratio)
    knob.center = (layout.knob_x(s.speed) * ratio, track.centery)
    pygame.draw.rect(screen, BODY, knob)
    label = small.render(f"Speed {s.speed}", True, MUTED)
    screen.blit(label, label.get_rect(midtop=(track.centerx, track.bottom + 4 * ratio)))


def draw_buttons(screen: pygame.Surface, small: pygame.font.Font, game: SnakeGame,
                 layout: Layout, ratio: int) -> None:
    for button in layout.buttons:
        rect = scaled(button.rect, ratio)
        pygame.draw.rect(screen, BUTTON_FILL, rect, border_radius=4 * ratio)
        text = button.label
        if button.action is Command.PAUSE and game.state.run_state is RunState.PAUSED:
            text = "Resume"
        img = small.render(text, True, TEXT)
        screen.blit(img, img.get_rect(center=rect.center))


def draw_banner(screen: pygame.Surface, font: pygame.font.Font, area: pygame.Rect,
                lines: List[str]) -> None:
    overlay = pygame.Surface(area.size, pygame.SRCALPHA)
    overlay.fill((0, 0, 0, 140))  # RGBA
    screen.blit(overlay, area.topleft)

    step = font.get_linesize() + 4
    top = area.centery - step * (len(lines) - 1) // 2
    for i, text in enumerate(lines):
        color = (240, 240, 250) if i == 0 else TEXT
        img = font.render(text, True, color)
        screen.blit(img, img.get_rect(center=(area.centerx, top + i * step)))


# --------------------------
# Game loop
# --------------------------
class App:
    """Composition root: owns the window, the game, the renderer and the tick timer."""

    def __init__(self, cfg: GameConfig):
        self.cfg = cfg
        self.ratio = cfg.pixel_ratio
        self.game = SnakeGame(cfg, FileHighScoreStore(cfg.highscore_path))
        self.layout = compute_layout(*window_size(cfg.cols, cfg.rows, cfg.cell_size),
                                     cfg.cols, cfg.rows, cfg.cell_size)
        self.renderer = Renderer(self.layout.cell_size)
        self.scheduler = TickScheduler(self.on_tick, self.game.tick_interval_ms)
        self.swipe_start: Optional[Tuple[int, int]] = None
        self.dragging_slider = False
        self.dirty = True
        self.screen: Optional[pygame.Surface] = None
        self.font: Optional[pygame.font.Font] = None
        self.small_font: Optional[pygame.font.Font] = None

    # ----- scheduler callback -----
    def on_tick(self) -> None:
        outcome = self.game.tick()
        if outcome is TickOutcome.IDLE:
            return
        self.dirty = True
        if outcome is TickOutcome.DIED or self.game.state.run_state is RunState.GAME_OVER:
            self.scheduler.stop()

    # ----- input -----
    def change_speed(self, speed: int, now: int) -> None:
        old = self.game.state.speed
        if self.game.set_speed(speed) != old:
            self.scheduler.set_period(self.game.tick_interval_ms, now)
        self.dirty = True

    def run_command(self, cmd: Command, now: int) -> bool:
        """Apply a command; returns False when the app should quit."""
        if cmd is Command.QUIT:
            return False
        if cmd is Command.PAUSE:
            state = self.game.toggle_running()
            if state is RunState.RUNNING:
                self.scheduler.start(now)
            else:
                self.scheduler.stop()
        elif cmd is Command.RESTART:
            self.game.restart()
            self.scheduler.start(now)
        elif cmd in (Command.FASTER, Command.SLOWER):
            delta = 1 if cmd is Command.FASTER else -1
            self.change_speed(self.game.state.speed + delta, now)
        self.dirty = True
        return True

    def handle_event(self, event: pygame.event.Event, now: int) -> bool:
        """Apply one event; only the pending direction and commands change here. Return False to quit."""
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYDOWN:
            d = key_to_direction(event.key)
            if d is not None:
                self.game.set_pending_direction(d)
                return True
            cmd = key_to_command(event.key)
            if cmd is not None:
                return self.run_command(cmd, now)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            return self.on_pointer_down(self._logical(event.pos), now)
        elif event.type == pygame.MOUSEMOTION and self.dragging_slider:
            self.change_speed(self.layout.speed_at(self._logical(event.pos)[0]), now)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.on_pointer_up(self._logical(event.pos))
        elif event.type == pygame.VIDEORESIZE:
            self.on_resize(event.w, event.h)
        return True

    def handle_events(self, now: int) -> bool:
        for event in pygame.event.get():
            if not self.handle_event(event, now):
                return False
        return True

    def on_pointer_down(self, pos: Tuple[int, int], now: int) -> bool:
        button = self.layout.button_at(pos)
        if button is not None:
            if isinstance(button.action, Command):
                return self.run_command(button.action, now)
            self.game.set_pending_direction(button.action)
        elif self.layout.on_slider(pos):
            self.dragging_slider = True
            self.change_speed(self.layout.speed_at(pos[0]), now)
        elif self.layout.board.collidepoint(pos):
            self.swipe_start = pos
        return True

    def on_pointer_up(self, pos: Tuple[int, int]) -> None:
        if self.swipe_start is not None:
            d = swipe_direction(self.swipe_start, pos)
            if d is not None:
                self.game.set_pending_direction(d)
        self.swipe_start = None
        self.dragging_slider = False

    def on_resize(self, w: int, h: int) -> None:
        self.layout = compute_layout(w // self.ratio, h // self.ratio,
                                     self.cfg.cols, self.cfg.rows, self.cfg.cell_size)
        if self.layout.cell_size != self.renderer.cell_size:
            logger.debug("Cell size %d -> %d", self.renderer.cell_size, self.layout.cell_size)
            self.renderer.resize(self.layout.cell_size)
        self.dirty = True

    def _logical(self, pos: Tuple[int, int]) -> Tuple[int, int]:
        return (pos[0] // self.ratio, pos[1] // self.ratio)

    # ----- drawing -----
    def draw(self) -> None:
        if self.screen is None or self.font is None or self.small_font is None:
            raise RuntimeError("draw() called before the window was opened")
        r = self.ratio
        self.screen.fill(PANEL)

        board = scaled(self.layout.board, r).clip(self.screen.get_rect())
        if board.w and board.h:
            surface = PygameSurface(self.screen.subsurface(board), r)
            self.renderer.draw(surface, self.game.state)

        draw_hud(self.screen, self.font, self.small_font, self.game, self.layout, r)
        draw_buttons(self.screen, self.small_font, self.game, self.layout, r)

        s = self.game.state
        if s.run_state is RunState.GAME_OVER:
            draw_banner(self.screen, self.font, board,
                        ["GAME OVER", f"Score: {s.score}", "Press R to restart"])
        elif s.run_state is RunState.PAUSED:
            draw_banner(self.screen, self.font, board, ["PAUSED", "Press Space to resume"])
        pygame.display.flip()

    def run(self) -> None:
        pygame.init()
        try:
            self.font = pygame.font.SysFont(None, 24 * self.ratio)
            self.small_font = pygame.font.SysFont(None, 18 * self.ratio)
            w, h = window_size(self.cfg.cols, self.cfg.rows, self.cfg.cell_size)
            self.screen = pygame.display.set_mode((w * self.ratio, h * self.ratio),
                                                  pygame.RESIZABLE)
            pygame.display.set_caption("Snake")
            clock = pygame.time.Clock()

            logger.info("Starting %dx%d game at %d ticks/s (high score %d)",
                        self.cfg.cols, self.cfg.rows, self.game.state.speed,
                        self.game.state.high_score)
            self.scheduler.start(pygame.time.get_ticks())

            running = True
            while running:
                # 1) input
                now = pygame.time.get_ticks()
                running = self.handle_events(now)
                if not running:
                    break

                # 2) update; the scheduler decides whether a tick is due
                self.scheduler.poll(pygame.time.get_ticks())

                # 3) render
                if self.dirty:
                    self.draw()
                    self.dirty = False
                clock.tick(60)  # high FPS; movement gated by the scheduler
        finally:
            self.scheduler.stop()
            pygame.quit()


# --------------------------
# Main
# --------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Snake on a wrap-around grid.")
    parser.add_argument("--cols", type=int, default=20, help="grid width in cells")
    parser.add_argument("--rows", type=int, default=20, help="grid height in cells")
    parser.add_argument("--cell-size", type=int, default=20,
                        help="pixels per cell (the window may shrink it)")
    parser.add_argument("--speed", type=int, default=8,
                        help=f"ticks per second, {MIN_SPEED}..{MAX_SPEED}")
    parser.add_argument("--seed", type=int, default=None,
                        help="seed food placement for reproducible games")
    parser.add_argument("--pixel-ratio", type=int, default=1,
                        help="device pixels per logical pixel (2 for HiDPI screens)")
    parser.add_argument("--highscore-file", type=Path, default=DEFAULT_HIGHSCORE_PATH,
                        help="where the high score is kept")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        cols=args.cols,
        rows=args.rows,
        cell_size=args.cell_size,
        speed=args.speed,
        seed=args.seed,
        pixel_ratio=args.pixel_ratio,
        highscore_path=args.highscore_file,
    )


def main(argv: Optional[List[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = config_from_args(args)
    except ValueError as exc:
        parser.error(str(exc))

    App(cfg).run()


if __name__ == "__main__":
    main()

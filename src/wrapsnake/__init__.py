# src/wrapsnake/__init__.py
"""Snake on a wrap-around grid: tick state machine, renderer and pygame front end."""

from wrapsnake.game import SnakeGame, GameState, RunState, TickOutcome
from wrapsnake.render import Renderer

__all__ = ["SnakeGame", "GameState", "RunState", "TickOutcome", "Renderer"]

"""
Tests for render.py and surfaces.py - painting game state onto a surface.
"""

import numpy as np
import pytest

from wrapsnake.config import BG, FOOD, HEAD, BODY, RIGHT
from wrapsnake.game import GameState, RunState
from wrapsnake.render import Renderer
from wrapsnake.surfaces import ArraySurface


def make_state(snake, food):
    return GameState(
        snake=list(snake),
        direction=RIGHT,
        pending=RIGHT,
        food=food,
        score=0,
        high_score=0,
        run_state=RunState.RUNNING,
        speed=8,
    )


class TestArraySurface:
    def test_fill_rect_in_logical_pixels(self):
        surf = ArraySurface(10, 8)
        surf.fill_rect(2, 3, 4, 2, (1, 2, 3))
        assert surf.color_at(2, 3) == (1, 2, 3)
        assert surf.color_at(5, 4) == (1, 2, 3)
        assert surf.color_at(6, 4) == (0, 0, 0)
        assert surf.color_at(2, 5) == (0, 0, 0)

    def test_pixel_ratio_scales_backing_array(self):
        surf = ArraySurface(10, 8, pixel_ratio=2)
        assert surf.frame().shape == (16, 20, 3)
        surf.fill_rect(1, 1, 1, 1, (9, 9, 9))
        block = surf.frame()[2:4, 2:4]
        assert np.all(block == 9)
        assert surf.frame()[1, 1].tolist() == [0, 0, 0]

    def test_rects_past_the_edge_are_clipped(self):
        surf = ArraySurface(4, 4)
        surf.fill_rect(3, 3, 5, 5, (7, 7, 7))
        assert surf.color_at(3, 3) == (7, 7, 7)
        assert surf.frame().shape == (4, 4, 3)


class TestRenderer:
    def test_draws_background_food_and_snake(self):
        cs = 10
        surf = ArraySurface(5 * cs, 5 * cs)
        state = make_state([(2, 2), (1, 2), (0, 2)], food=(4, 0))
        Renderer(cs).draw(surf, state)

        assert surf.color_at(0, 0) == BG
        assert surf.color_at(4 * cs, 0) == FOOD
        assert surf.color_at(4 * cs + cs - 1, cs - 1) == FOOD
        assert surf.color_at(2 * cs, 2 * cs) == HEAD
        assert surf.color_at(1 * cs, 2 * cs) == BODY
        assert surf.color_at(0, 2 * cs) == BODY

    def test_segments_leave_a_one_pixel_gap(self):
        cs = 10
        surf = ArraySurface(5 * cs, 5 * cs)
        state = make_state([(2, 2), (1, 2)], food=(4, 4))
        Renderer(cs).draw(surf, state)
        assert surf.color_at(2 * cs + cs - 2, 2 * cs) == HEAD
        assert surf.color_at(2 * cs + cs - 1, 2 * cs) == BG

    def test_redraw_clears_previous_frame(self):
        cs = 4
        surf = ArraySurface(5 * cs, 5 * cs)
        renderer = Renderer(cs)
        renderer.draw(surf, make_state([(0, 0), (1, 0)], food=(3, 3)))
        renderer.draw(surf, make_state([(2, 2), (1, 2)], food=(4, 4)))
        assert surf.color_at(0, 0) == BG
        assert surf.color_at(3 * cs, 3 * cs) == BG

    def test_no_food_when_board_is_full(self):
        surf = ArraySurface(20, 20)
        Renderer(10).draw(surf, make_state([(0, 0), (1, 0)], food=None))
        assert surf.color_at(10, 10) == BG

    def test_resize_changes_pixel_mapping(self):
        surf = ArraySurface(100, 100)
        renderer = Renderer(20)
        renderer.resize(5)
        renderer.draw(surf, make_state([(3, 3), (2, 3)], food=(9, 9)))
        assert surf.color_at(15, 15) == HEAD
        assert surf.color_at(45, 45) == FOOD

    def test_resize_rejects_zero(self):
        with pytest.raises(ValueError):
            Renderer(10).resize(0)

    def test_draws_on_high_dpi_surface(self):
        cs = 10
        surf = ArraySurface(5 * cs, 5 * cs, pixel_ratio=2)
        Renderer(cs).draw(surf, make_state([(1, 1), (0, 1)], food=(3, 3)))
        assert surf.color_at(cs, cs) == HEAD
        assert surf.frame()[2 * cs * 2 - 1, 2 * cs * 2 - 1].tolist() == list(BG)

"""Tests for drawing the board with Pillow."""

from __future__ import annotations

from splitflap import CanvasSize, DisplayContent, GridController
from splitflap.renderer import BoardRenderer, TILE_COLORS
from tests.conftest import run


def rendered(board_config, text, canvas=CanvasSize(100, 100)):
    async def scenario():
        controller = GridController(board_config)
        controller.update_canvas_size(canvas)
        controller.update_content(DisplayContent(text))
        controller.force_update()
        return BoardRenderer(board_config).render(controller)

    return run(scenario())


class TestBoardRenderer:
    def test_image_matches_canvas(self, board_config):
        img = rendered(board_config, "HELLO")
        assert img.size == (100, 100)
        assert img.mode == "RGB"

    def test_colour_tile_fills_flap(self, board_config):
        img = rendered(board_config, "🟥")
        # First flap is 21x21 at the origin
        assert img.getpixel((10, 5)) == TILE_COLORS["🟥"]

    def test_empty_canvas_renders_placeholder(self, board_config):
        img = rendered(board_config, "HELLO", CanvasSize(0, 0))
        assert img.size == (1, 1)

"""
BoardRenderer - Draws the flap grid to an image
Reads each cell's displayed symbol and the grid geometry; knows nothing
about how the symbols got there.
"""

import logging
from typing import Dict, Tuple
from PIL import Image, ImageDraw, ImageFont

from .config import BoardConfig
from .grid import GridGeometry

# Colour tiles are drawn as filled swatches instead of glyphs
TILE_COLORS: Dict[str, Tuple[int, int, int]] = {
    "🟥": (221, 46, 68),
    "🟧": (244, 144, 12),
    "🟨": (253, 203, 88),
    "🟩": (120, 177, 89),
    "🟦": (85, 172, 238),
    "🟪": (170, 142, 214),
    "🟫": (193, 105, 79),
    "⬛": (49, 55, 61),
    "⬜": (230, 231, 232),
}


class BoardRenderer:
    """Renders a GridController's current display with Pillow"""

    def __init__(self, config: BoardConfig = None):
        self.config = config or BoardConfig()
        self._font_cache: Dict[int, ImageFont.ImageFont] = {}

    def _load_font(self, size: int) -> ImageFont.ImageFont:
        """Load font with caching"""
        if size not in self._font_cache:
            try:
                self._font_cache[size] = ImageFont.truetype(self.config.font_path, size)
            except Exception as e:
                if not self.config.fallback_to_default_font:
                    raise
                logging.warning(f"Could not load flap font {self.config.font_path}: {e}, using default")
                self._font_cache[size] = ImageFont.load_default()
        return self._font_cache[size]

    def render(self, controller) -> Image.Image:
        """Render the complete board at the controller's canvas size"""
        width = max(1, int(controller.canvas_size.width))
        height = max(1, int(controller.canvas_size.height))

        img = Image.new('RGB', (width, height), self.config.background_color)
        draw = ImageDraw.Draw(img)

        geometry = controller.geometry
        if geometry.capacity == 0:
            return img

        font = self._load_font(max(1, int(geometry.font_scale)))
        for index, symbol in enumerate(controller.snapshot()):
            self.draw_flap(draw, geometry, index, symbol, font)

        return img

    def draw_flap(self, draw: ImageDraw.ImageDraw, geometry: GridGeometry,
                  index: int, symbol: str, font: ImageFont.ImageFont) -> None:
        """Draw a single flap with its symbol and split line"""
        x, y = geometry.cell_origin(index)
        cell_width = geometry.cell_size.width
        cell_height = geometry.cell_size.height
        if cell_width < 2 or cell_height < 2:
            return

        box = [x, y, x + cell_width - 1, y + cell_height - 1]
        radius = min(self.config.corner_radius, int(min(cell_width, cell_height) // 4))

        draw.rounded_rectangle(box, radius=radius, fill=self.config.flap_color)

        tile_color = TILE_COLORS.get(symbol)
        inset = max(2, int(min(cell_width, cell_height) // 8))
        if tile_color is not None:
            if min(cell_width, cell_height) > 2 * inset:
                draw.rectangle([x + inset, y + inset,
                                x + cell_width - 1 - inset, y + cell_height - 1 - inset],
                               fill=tile_color)
        elif symbol.strip():
            # Center glyph
            bbox = draw.textbbox((0, 0), symbol, font=font)
            text_width = bbox[2] - bbox[0]
            text_height = bbox[3] - bbox[1]
            text_x = x + (cell_width - text_width) // 2 - bbox[0]
            text_y = y + (cell_height - text_height) // 2 - bbox[1]
            draw.text((text_x, text_y), symbol, fill=self.config.text_color, font=font)

        # Split line across the middle and outline
        center_y = y + cell_height // 2
        draw.line([(x, center_y), (x + cell_width - 1, center_y)], fill=self.config.separator_color, width=2)
        draw.rounded_rectangle(box, radius=radius, outline=self.config.separator_color)

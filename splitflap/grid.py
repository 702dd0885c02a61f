"""
Grid Layout - Derives flap grid geometry from the available canvas
Pure functions: identical inputs always produce an identical GridGeometry,
so geometry can be recomputed on every canvas-size event without caching.
"""

import math
from dataclasses import dataclass, field
from typing import Tuple

# Base flap metrics at scale 1.0
BASE_CELL_WIDTH = 14
BASE_CELL_HEIGHT = 18
BASE_SPACING = 5


@dataclass(frozen=True)
class CanvasSize:
    """Available drawing area in pixels"""
    width: float
    height: float


@dataclass(frozen=True)
class CellSize:
    """Size of a single flap in pixels"""
    width: float
    height: float


@dataclass(frozen=True)
class GridGeometry:
    """Calculated grid layout for one canvas size"""
    columns: int = 0
    rows: int = 0
    cell_size: CellSize = field(default_factory=lambda: CellSize(0, 0))
    spacing: float = 0
    font_scale: float = 0

    @property
    def capacity(self) -> int:
        return self.columns * self.rows

    def cell_origin(self, index: int) -> Tuple[float, float]:
        """Top-left pixel position of the cell at a row-major index"""
        if self.columns <= 0:
            return 0, 0
        row, column = divmod(index, self.columns)
        x = column * (self.cell_size.width + self.spacing)
        y = row * (self.cell_size.height + self.spacing)
        return x, y

    def to_dict(self) -> dict:
        """Convert geometry to dictionary for serialization"""
        return {
            'columns': self.columns,
            'rows': self.rows,
            'capacity': self.capacity,
            'cell_size': {'width': self.cell_size.width, 'height': self.cell_size.height},
            'spacing': self.spacing,
            'font_scale': self.font_scale,
        }


ZERO_GEOMETRY = GridGeometry()


class GridCapacityError(ValueError):
    """A fitted grid would hold more flaps than the board allows"""

    def __init__(self, geometry: GridGeometry, max_cells: int):
        self.geometry = geometry
        self.max_cells = max_cells
        super().__init__(f"Grid of {geometry.columns}x{geometry.rows} flaps exceeds "
                         f"the limit of {max_cells} cells")


def min_cell_size_for_scale(scale: float,
                            base_width: float = BASE_CELL_WIDTH,
                            base_height: float = BASE_CELL_HEIGHT,
                            base_spacing: float = BASE_SPACING) -> Tuple[CellSize, float]:
    """Minimum flap size and spacing for a content scale factor"""
    return CellSize(base_width * scale, base_height * scale), base_spacing * scale


def _usable(value: float) -> bool:
    return math.isfinite(value) and value > 0


def calculate_grid(canvas_size: CanvasSize, min_cell_size: CellSize, spacing: float) -> GridGeometry:
    """
    Fit as many flaps of at least min_cell_size as the canvas can hold.

    Args:
        canvas_size: Settled canvas size
        min_cell_size: Smallest acceptable flap size
        spacing: Gap between neighbouring flaps

    Returns:
        GridGeometry, or the zero geometry when not even one flap fits
    """
    spacing = max(0, spacing) if math.isfinite(spacing) else 0

    if not (_usable(canvas_size.width) and _usable(canvas_size.height)):
        return ZERO_GEOMETRY

    pitch_width = min_cell_size.width + spacing
    pitch_height = min_cell_size.height + spacing
    if not (_usable(pitch_width) and _usable(pitch_height)):
        return ZERO_GEOMETRY

    columns = math.floor(canvas_size.width / pitch_width)
    rows = math.floor(canvas_size.height / pitch_height)
    if columns <= 0 or rows <= 0:
        return ZERO_GEOMETRY

    spacer_width = max(0, columns - 1) * spacing
    spacer_height = max(0, rows - 1) * spacing

    cell_size = CellSize(
        width=math.floor((canvas_size.width - spacer_width) / columns),
        height=math.floor((canvas_size.height - spacer_height) / rows),
    )

    return GridGeometry(
        columns=columns,
        rows=rows,
        cell_size=cell_size,
        spacing=spacing,
        font_scale=cell_size.height / 2,
    )

"""
Splitflap Board Engine
Rotation sequencing, grid and content layout, and per-cell flip scheduling
for an animated split-flap display
"""

from .alphabet import Alphabet, DEFAULT_ALPHABET
from .rotation import rotation_sequence
from .grid import CanvasSize, CellSize, GridCapacityError, GridGeometry, calculate_grid, min_cell_size_for_scale
from .content import DisplayContent, HorizontalAlignment, VerticalAlignment, layout_content
from .events import CellUpdated, GeometryChanged
from .cell import CellAnimator
from .config import BoardConfig
from .controller import GridController
from .renderer import BoardRenderer

__all__ = [
    'Alphabet', 'DEFAULT_ALPHABET', 'rotation_sequence',
    'CanvasSize', 'CellSize', 'GridCapacityError', 'GridGeometry', 'calculate_grid', 'min_cell_size_for_scale',
    'DisplayContent', 'HorizontalAlignment', 'VerticalAlignment', 'layout_content',
    'CellUpdated', 'GeometryChanged', 'CellAnimator', 'BoardConfig',
    'GridController', 'BoardRenderer'
]

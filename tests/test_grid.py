"""Tests for grid geometry."""

from __future__ import annotations

import pytest

from splitflap.grid import (
    CanvasSize,
    CellSize,
    GridGeometry,
    ZERO_GEOMETRY,
    calculate_grid,
    min_cell_size_for_scale,
)


class TestCalculateGrid:
    def test_square_canvas(self):
        geometry = calculate_grid(CanvasSize(100, 100), CellSize(20, 20), 5)
        assert geometry.columns == 4
        assert geometry.rows == 4
        assert geometry.capacity == 16
        # (100 - 3 * 5) / 4 = 21.25
        assert geometry.cell_size == CellSize(21, 21)
        assert geometry.spacing == 5
        assert geometry.font_scale == 10.5

    def test_cells_fit_inside_canvas(self):
        canvas = CanvasSize(1919.5, 1080)
        geometry = calculate_grid(canvas, CellSize(14, 18), 5)
        used_width = geometry.columns * geometry.cell_size.width + (geometry.columns - 1) * geometry.spacing
        used_height = geometry.rows * geometry.cell_size.height + (geometry.rows - 1) * geometry.spacing
        assert used_width <= canvas.width
        assert used_height <= canvas.height
        assert geometry.cell_size.width >= 14
        assert geometry.cell_size.height >= 18

    @pytest.mark.parametrize("canvas", [
        CanvasSize(24, 100),
        CanvasSize(100, 24),
        CanvasSize(0, 0),
        CanvasSize(-50, 100),
        CanvasSize(float("nan"), 100),
        CanvasSize(float("inf"), 100),
    ])
    def test_too_small_or_degenerate_canvas(self, canvas):
        geometry = calculate_grid(canvas, CellSize(20, 20), 5)
        assert geometry == ZERO_GEOMETRY
        assert geometry.capacity == 0

    def test_zero_pitch_does_not_divide_by_zero(self):
        assert calculate_grid(CanvasSize(100, 100), CellSize(0, 0), 0) == ZERO_GEOMETRY

    def test_negative_spacing_clamped(self):
        geometry = calculate_grid(CanvasSize(100, 100), CellSize(20, 20), -5)
        assert geometry.spacing == 0
        assert geometry.columns == 5

    def test_single_cell_has_no_spacers(self):
        geometry = calculate_grid(CanvasSize(30, 30), CellSize(20, 20), 5)
        assert geometry.capacity == 1
        assert geometry.cell_size == CellSize(30, 30)

    def test_idempotent(self):
        first = calculate_grid(CanvasSize(640, 480), CellSize(14, 18), 5)
        second = calculate_grid(CanvasSize(640, 480), CellSize(14, 18), 5)
        assert first == second

    def test_font_scale_grows_with_cell_height(self):
        small = calculate_grid(CanvasSize(100, 100), CellSize(20, 20), 5)
        large = calculate_grid(CanvasSize(100, 120), CellSize(20, 20), 5)
        assert large.cell_size.height > small.cell_size.height
        assert large.font_scale > small.font_scale


class TestGeometryHelpers:
    def test_min_cell_size_for_scale(self):
        cell_size, spacing = min_cell_size_for_scale(2)
        assert cell_size == CellSize(28, 36)
        assert spacing == 10

    def test_cell_origin_row_major(self):
        geometry = GridGeometry(columns=4, rows=4, cell_size=CellSize(21, 21), spacing=5)
        assert geometry.cell_origin(0) == (0, 0)
        assert geometry.cell_origin(1) == (26, 0)
        assert geometry.cell_origin(5) == (26, 26)

    def test_to_dict(self):
        data = calculate_grid(CanvasSize(100, 100), CellSize(20, 20), 5).to_dict()
        assert data["columns"] == 4
        assert data["capacity"] == 16
        assert data["cell_size"] == {"width": 21, "height": 21}

"""
GridController - Coordinates the flap grid
Recomputes geometry on canvas-size events, reflows content on content
events and hands every buffer slot to its cell animator.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Tuple

from .alphabet import Alphabet, SPACE
from .cell import CellAnimator
from .config import BoardConfig
from .content import DisplayContent, layout_content
from .events import BoardEvent, BoardListener, CellUpdated, GeometryChanged
from .grid import (
    CanvasSize,
    GridCapacityError,
    GridGeometry,
    ZERO_GEOMETRY,
    calculate_grid,
    min_cell_size_for_scale,
)


class GridController:
    """Owns the cell pool and drives it from canvas and content changes"""

    def __init__(self, config: Optional[BoardConfig] = None, alphabet: Optional[Alphabet] = None):
        self.config = config or BoardConfig()
        self.alphabet = alphabet or self.config.build_alphabet()

        self.canvas_size = CanvasSize(0, 0)
        self.content = DisplayContent()
        self.geometry: GridGeometry = ZERO_GEOMETRY

        self._cells: List[CellAnimator] = []
        self._listeners: List[BoardListener] = []

    # Event sources

    def update_canvas_size(self, canvas_size: CanvasSize) -> GridGeometry:
        """
        Handle a settled canvas size from the measuring side.

        Raises:
            GridCapacityError: the canvas would hold more than max_cells flaps
            RuntimeError: called outside a running event loop
        """
        self._refresh(canvas_size, self.content)
        return self.geometry

    def update_content(self, content: DisplayContent) -> Tuple[str, ...]:
        """Handle new display content; returns the laid-out buffer"""
        return self._refresh(self.canvas_size, content)

    def _refresh(self, canvas_size: CanvasSize, content: DisplayContent) -> Tuple[str, ...]:
        # Flip tasks need a running loop; fail before any state changes
        asyncio.get_running_loop()

        geometry = self.fit_grid(canvas_size, content.scale)
        if geometry.capacity > self.config.max_cells:
            raise GridCapacityError(geometry, self.config.max_cells)

        self.canvas_size = canvas_size
        self.content = content
        self._apply_geometry(geometry)
        return self._apply_content()

    def fit_grid(self, canvas_size: CanvasSize, scale: float) -> GridGeometry:
        """Geometry the board would use for a canvas size and content scale"""
        min_cell_size, spacing = min_cell_size_for_scale(
            scale,
            self.config.base_cell_width,
            self.config.base_cell_height,
            self.config.base_spacing,
        )
        return calculate_grid(canvas_size, min_cell_size, spacing)

    def _apply_geometry(self, geometry: GridGeometry) -> None:
        if geometry == self.geometry:
            return

        old_capacity = self.geometry.capacity
        self.geometry = geometry
        logging.info(f"Grid geometry: {geometry.columns}x{geometry.rows} cells "
                     f"of {geometry.cell_size.width}x{geometry.cell_size.height}")

        if geometry.capacity != old_capacity:
            self._resize_pool(geometry.capacity)

        self._emit(GeometryChanged(geometry))

    def _resize_pool(self, capacity: int) -> None:
        """Grow with blank cells or drop trailing cells"""
        current = len(self._cells)

        if capacity > current:
            for index in range(current, capacity):
                self._cells.append(CellAnimator(
                    index,
                    step_interval=self.config.step_interval,
                    alphabet=self.alphabet,
                    on_step=self._on_cell_step,
                    symbol=SPACE,
                ))
        else:
            for cell in self._cells[capacity:]:
                cell.cancel()
            del self._cells[capacity:]

        logging.debug(f"Cell pool resized from {current} to {capacity}")

    def _apply_content(self) -> Tuple[str, ...]:
        """Lay out the current content and retarget cells whose symbol changed"""
        geometry = self.geometry
        buffer = layout_content(
            self.content.text,
            geometry.capacity,
            geometry.columns,
            geometry.rows,
            self.content.horizontal_alignment,
            self.content.vertical_alignment,
        )

        restarted = 0
        for cell, symbol in zip(self._cells, buffer):
            if cell.set_target(symbol):
                restarted += 1

        if restarted:
            logging.debug(f"Retargeted {restarted} of {len(self._cells)} cells")
        return buffer

    # Notifications

    def subscribe(self, listener: BoardListener) -> Callable[[], None]:
        """Register a listener for board events; returns a function that removes it"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_cell_step(self, index: int, symbol: str) -> None:
        self._emit(CellUpdated(index, symbol))

    def _emit(self, event: BoardEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception as e:
                logging.error(f"Board listener failed on {event.event_type}: {e}")

    # State

    @property
    def cells(self) -> Tuple[CellAnimator, ...]:
        return tuple(self._cells)

    def snapshot(self) -> List[str]:
        """Symbols currently on display, row-major"""
        return [cell.current_symbol for cell in self._cells]

    def targets(self) -> List[str]:
        """Symbols each cell is heading for, row-major"""
        return [cell.target_symbol for cell in self._cells]

    def display_text(self) -> str:
        """Current display as text, one line per grid row"""
        columns = self.geometry.columns
        if columns <= 0:
            return ""
        symbols = self.snapshot()
        return "\n".join(
            "".join(symbols[start:start + columns])
            for start in range(0, len(symbols), columns)
        )

    def is_any_animation_active(self) -> bool:
        """Check if any cell is currently flipping"""
        return any(cell.is_animating for cell in self._cells)

    async def wait_idle(self) -> None:
        """Wait until every cell has reached its target"""
        while True:
            tasks = [cell.task for cell in self._cells if cell.is_animating]
            if not tasks:
                return
            await asyncio.gather(*tasks, return_exceptions=True)

    def force_update(self) -> None:
        """Snap every cell to its target immediately"""
        for cell in self._cells:
            cell.snap()

    def close(self) -> None:
        """Cancel all flipping and release the cell pool"""
        for cell in self._cells:
            cell.cancel()
        self._cells.clear()
        self._listeners.clear()
        self.geometry = ZERO_GEOMETRY

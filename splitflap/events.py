"""
Board Events - Notifications emitted by the grid controller
"""

from dataclasses import dataclass
from typing import Callable, Union

from .grid import GridGeometry


@dataclass(frozen=True)
class GeometryChanged:
    """Grid geometry was recalculated and differs from the previous one"""
    geometry: GridGeometry

    event_type = "geometry_changed"

    def to_dict(self) -> dict:
        return self.geometry.to_dict()


@dataclass(frozen=True)
class CellUpdated:
    """A flap committed a new displayed symbol"""
    index: int
    symbol: str

    event_type = "cell_updated"

    def to_dict(self) -> dict:
        return {'index': self.index, 'symbol': self.symbol}


BoardEvent = Union[GeometryChanged, CellUpdated]
BoardListener = Callable[[BoardEvent], None]

"""
Ray class encapsulating start, end and direction, with casting helpers.
"""
from typing import Iterable, Optional

import numpy as np

from .grid import TileGrid, _resolve_ray
from .vector import as_vec2, endpoint


class Ray:
    def __init__(self, start: Iterable[float], end: Iterable[float]):
        self.start, self.direction, self.length = _resolve_ray(start, end)
        self.end = as_vec2(end)

    @classmethod
    def from_angle(cls, start: Iterable[float], angle: float, max_distance: float) -> "Ray":
        """Ray leaving *start* at *angle* radians, *max_distance* long."""
        return cls(start, endpoint(start, angle, max_distance))

    def point_at(self, distance: float) -> np.ndarray:
        return self.start + self.direction * float(distance)

    def __repr__(self) -> str:
        return f"Ray(start={self.start.tolist()}, end={self.end.tolist()})"

    def first_hit(self, grid: TileGrid):
        """Delegate to TileGrid.first_hit."""
        return grid.first_hit(self.start, self.end)

    def cast(self, grid: TileGrid) -> Optional[np.ndarray]:
        """Delegate to TileGrid.cast."""
        return grid.cast(self.start, self.end)

    def traverse(self, grid: TileGrid):
        """Delegate to TileGrid.traverse."""
        return grid.traverse(self.start, self.end)

    def distance_map(self, grid: TileGrid, use_distance: bool = True):
        """Delegate to TileGrid.distance_map."""
        return grid.distance_map(self.start, self.end, use_distance=use_distance)

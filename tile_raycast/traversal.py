"""
Numba‑accelerated 2‑D tile raycasting after

    J. Amanatides & A. Woo,
    "A Fast Voxel Traversal Algorithm for Ray Tracing" (Eurographics ’87)

Public API
----------
cast(start, end, grid)
    – intersection point with the first solid tile, or None

cast_angle(start, angle, max_distance, grid)
    – same, with the end derived from an angle and a distance budget

first_hit(start, end, grid)
    – (col, row, distance) of the first solid tile, or None

traverse_ray(start, end, grid)
    – generator yielding every in‑bounds tile entered (col, row, distance)

distance_map(start, end, grid)
    – traversal rasterized into a (width, height) array

*grid* may be a TileGrid, a 2‑D boolean array indexed [col, row] or a
nested sequence of tiles exposing ``solid``.
"""
from __future__ import annotations

from typing import Generator, Iterable, Optional, Tuple

import numpy as np

from .grid import as_grid


def cast(start: Iterable[float],
         end: Iterable[float],
         grid) -> Optional[np.ndarray]:
    return as_grid(grid).cast(start, end)


def cast_angle(start: Iterable[float],
               angle: float,
               max_distance: float,
               grid) -> Optional[np.ndarray]:
    return as_grid(grid).cast_angle(start, angle, max_distance)


def first_hit(start: Iterable[float],
              end: Iterable[float],
              grid) -> Optional[Tuple[int, int, float]]:
    return as_grid(grid).first_hit(start, end)


def traverse_ray(start: Iterable[float],
                 end: Iterable[float],
                 grid) -> Generator[Tuple[int, int, float], None, None]:
    return as_grid(grid).traverse(start, end)


def distance_map(start: Iterable[float],
                 end: Iterable[float],
                 grid,
                 *,
                 use_distance: bool = True) -> np.ndarray:
    return as_grid(grid).distance_map(start, end, use_distance=use_distance)

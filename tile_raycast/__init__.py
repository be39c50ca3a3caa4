"""
2‑D DDA raycasting against tile grids.
"""
from .grid import DegenerateRayError, RayTraceable, TileGrid, as_grid
from .ray import Ray
from .traversal import cast, cast_angle, distance_map, first_hit, traverse_ray

__all__ = [
    "DegenerateRayError",
    "RayTraceable",
    "TileGrid",
    "Ray",
    "as_grid",
    "cast",
    "cast_angle",
    "distance_map",
    "first_hit",
    "traverse_ray",
]

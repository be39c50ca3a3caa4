"""
2‑D vector helpers on NumPy float64 arrays of shape ``(2,)``.
"""
import math
from typing import Iterable, Union

import numpy as np


def vec2(x: float, y: float) -> np.ndarray:
    return np.array((x, y), dtype=np.float64)


def as_vec2(p: Iterable[float]) -> np.ndarray:
    """Coerce any 2‑element array‑like into a fresh float64 vector."""
    v = np.array(p, dtype=np.float64).reshape(-1)
    if v.shape != (2,):
        raise ValueError(f"expected a 2‑D point, got {v.shape[0]} components")
    return v


def sub(a: Iterable[float], b: Iterable[float]) -> np.ndarray:
    return as_vec2(a) - as_vec2(b)


def magnitude(v: Iterable[float]) -> float:
    x, y = as_vec2(v)
    return math.hypot(x, y)


def normalize(v: Iterable[float]) -> np.ndarray:
    """Return *v* scaled to unit length. Zero vectors have no direction."""
    v = as_vec2(v)
    mag = math.hypot(v[0], v[1])
    if mag == 0.0:
        raise ValueError("cannot normalize a zero-length vector")
    return v / mag


def distance(a: Iterable[float], b: Iterable[float]) -> float:
    return magnitude(sub(b, a))


def from_angle(angle: float) -> np.ndarray:
    """Unit vector pointing at *angle* radians (0 = +x, pi/2 = +y)."""
    return vec2(math.cos(angle), math.sin(angle))


def endpoint(start: Iterable[float], angle: float, max_distance: float) -> np.ndarray:
    """End of a ray leaving *start* at *angle* and travelling *max_distance*."""
    if max_distance < 0.0:
        raise ValueError("max_distance must be non-negative")
    return as_vec2(start) + from_angle(angle) * float(max_distance)


# -------------------------------------------------------------------------
# Screen <-> tile space
# -------------------------------------------------------------------------
def _tile_size(tile_size: Union[float, Iterable[float]]) -> np.ndarray:
    if np.ndim(tile_size):
        size = as_vec2(tile_size)
    else:
        size = np.full(2, float(tile_size), dtype=np.float64)
    if np.any(size <= 0.0):
        raise ValueError("tile_size must be positive")
    return size


def to_tile_space(point: Iterable[float],
                  tile_size: Union[float, Iterable[float]]) -> np.ndarray:
    """Pixel position -> fractional tile coordinates (x18 at 16px -> 1.125)."""
    return as_vec2(point) / _tile_size(tile_size)


def to_screen_space(point: Iterable[float],
                    tile_size: Union[float, Iterable[float]]) -> np.ndarray:
    return as_vec2(point) * _tile_size(tile_size)

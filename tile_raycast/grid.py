"""
User‑facing TileGrid class, the tile protocol and ray validation.
"""
import logging
import math
import time
from typing import (Generator, Iterable, Optional, Protocol, Sequence, Tuple,
                    runtime_checkable)

import numpy as np

from ._core import _cast, _walk
from .vector import as_vec2, endpoint, magnitude, sub

logger = logging.getLogger(__name__)


class DegenerateRayError(ValueError):
    """The ray has no direction (start == end) or non-finite coordinates."""


@runtime_checkable
class RayTraceable(Protocol):
    """Anything a ray can collide with. Rays stop at solid tiles."""

    @property
    def solid(self) -> bool:
        ...


def _resolve_ray(start: Iterable[float],
                 end: Iterable[float]) -> Tuple[np.ndarray, np.ndarray, float]:
    """Return ``(start, unit direction, length)`` or raise DegenerateRayError."""
    s = as_vec2(start)
    e = as_vec2(end)
    if not (np.all(np.isfinite(s)) and np.all(np.isfinite(e))):
        raise DegenerateRayError(f"ray endpoints must be finite, got {s} -> {e}")
    with np.errstate(over="ignore", invalid="ignore"):
        delta = sub(e, s)
        length = magnitude(delta)
        if length == 0.0:
            raise DegenerateRayError(f"ray start and end coincide at {s}")
        direction = delta / length
    # huge but finite endpoints can still overflow the difference
    if not (math.isfinite(length) and np.all(np.isfinite(direction))):
        raise DegenerateRayError(f"ray from {s} to {e} overflows float64")
    return s, direction, length


class TileGrid:
    """Read‑only snapshot of a 2‑D tile map, indexed ``[col, row]``."""

    def __init__(self, mask) -> None:
        arr = np.array(mask, dtype=bool)
        if arr.ndim != 2:
            if arr.size == 0:
                arr = arr.reshape(0, 0)
            else:
                raise ValueError("tile mask must be 2‑D (width, height)")
        self._mask = np.ascontiguousarray(arr)
        self._mask.setflags(write=False)

    @classmethod
    def from_tiles(cls, tiles: Sequence[Sequence[RayTraceable]]) -> "TileGrid":
        """Snapshot the ``solid`` flag of ``tiles[col][row]``."""
        return cls([[bool(tile.solid) for tile in column] for column in tiles])

    # ---------------------------------------------------------------------
    # Shape / lookup
    # ---------------------------------------------------------------------
    @property
    def mask(self) -> np.ndarray:
        return self._mask

    @property
    def shape(self) -> Tuple[int, int]:
        return self._mask.shape

    @property
    def width(self) -> int:
        return self._mask.shape[0]

    @property
    def height(self) -> int:
        return self._mask.shape[1]

    def in_bounds(self, col: int, row: int) -> bool:
        return 0 <= col < self.width and 0 <= row < self.height

    def is_solid(self, col: int, row: int) -> bool:
        return self.in_bounds(col, row) and bool(self._mask[col, row])

    def __repr__(self) -> str:
        return (f"TileGrid(width={self.width}, height={self.height}, "
                f"solid={int(self._mask.sum())})")

    # ---------------------------------------------------------------------
    # Casting
    # ---------------------------------------------------------------------
    def first_hit(
        self,
        start: Iterable[float],
        end: Iterable[float],
    ) -> Optional[Tuple[int, int, float]]:
        """Return ``(col, row, distance)`` of the first solid tile or *None*."""
        return self._first_hit(*_resolve_ray(start, end))

    def _first_hit(self, s: np.ndarray, d: np.ndarray,
                   length: float) -> Optional[Tuple[int, int, float]]:
        debug = logger.isEnabledFor(logging.DEBUG)
        if debug:
            t0 = time.perf_counter()

        hit, dist, col, row = _cast(s[0], s[1], d[0], d[1], length, self._mask)

        if debug:
            elapsed_ms = (time.perf_counter() - t0) * 1e3
            if hit:
                logger.debug("ray %s -> tile (%d, %d) at distance %.6g, cast took %.4f ms",
                             s.tolist(), col, row, dist, elapsed_ms)
            else:
                logger.debug("ray %s missed within %.6g, cast took %.4f ms",
                             s.tolist(), length, elapsed_ms)
        if not hit:
            return None
        return int(col), int(row), float(dist)

    def cast(self, start: Iterable[float], end: Iterable[float]) -> Optional[np.ndarray]:
        """Intersection point with the first solid tile between *start* and *end*."""
        s, d, length = _resolve_ray(start, end)
        hit = self._first_hit(s, d, length)
        if hit is None:
            return None
        return s + d * hit[2]

    def cast_angle(
        self,
        start: Iterable[float],
        angle: float,
        max_distance: float,
    ) -> Optional[np.ndarray]:
        """Cast from *start* at *angle* radians for at most *max_distance*."""
        return self.cast(start, endpoint(start, angle, max_distance))

    # ---------------------------------------------------------------------
    # Traversal generators
    # ---------------------------------------------------------------------
    def traverse(
        self,
        start: Iterable[float],
        end: Iterable[float],
    ) -> Generator[Tuple[int, int, float], None, None]:
        """Yield ``(col, row, distance)`` for each in‑bounds tile the ray enters."""
        s, d, length = _resolve_ray(start, end)
        e = as_vec2(end)

        # one start tile plus at most ceil(|delta|) + 1 crossings per axis, and
        # a line never enters more than width + height - 1 in-bounds tiles
        ray_bound = math.ceil(abs(e[0] - s[0])) + math.ceil(abs(e[1] - s[1])) + 1
        max_tiles = int(min(ray_bound, self.width + self.height + 1)) + 2
        buf_ix = np.empty((max_tiles, 2), dtype=np.int64)
        buf_d = np.empty(max_tiles, dtype=np.float64)

        count = _walk(s[0], s[1], d[0], d[1], length,
                      self.width, self.height, buf_ix, buf_d)

        for i in range(count):
            yield int(buf_ix[i, 0]), int(buf_ix[i, 1]), float(buf_d[i])

    def distance_map(self,
                     start: Iterable[float],
                     end: Iterable[float],
                     *,
                     use_distance: bool = True) -> np.ndarray:
        """
        Rasterize the traversal into a ``(width, height)`` float array.

        Visited tiles hold their entry distance (or 1.0 when *use_distance*
        is False); tiles the ray never enters are NaN.
        """
        out = np.full(self.shape, np.nan, dtype=float)
        for col, row, dist in self.traverse(start, end):
            out[col, row] = dist if use_distance else 1.0
        return out


def as_grid(grid) -> TileGrid:
    """Accept a TileGrid, a 2‑D boolean array or nested ``RayTraceable`` tiles."""
    if isinstance(grid, TileGrid):
        return grid
    if isinstance(grid, np.ndarray) and grid.dtype != object:
        return TileGrid(grid)
    first = _first_tile(grid)
    if first is not None and isinstance(first, RayTraceable):
        return TileGrid.from_tiles(grid)
    return TileGrid(grid)


def _first_tile(grid):
    for column in grid:
        for tile in column:
            return tile
    return None

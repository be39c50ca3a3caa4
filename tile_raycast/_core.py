"""
Low-level Numba kernels for 2D DDA tile traversal.

All kernels take the ray as scalars: start ``(sx, sy)``, unit direction
``(dx, dy)`` and the travel budget ``max_distance``.  Grids are boolean
arrays indexed ``solid[col, row]``.
"""
import math

import numpy as np
from numba import njit
from typing import Tuple


@njit(cache=True)
def _step_scale(along: float, across: float) -> float:
    """Ray length travelled per unit of travel along one axis."""
    if along == 0.0:
        # parallel to the other axis: this boundary is never reached
        return math.inf
    ratio = across / along
    return math.sqrt(1.0 + ratio * ratio)


@njit(cache=True)
def _axis_setup(s: float, d: float, scale: float) -> Tuple[int, float]:
    """Return (step, accumulated length to the first boundary) for one axis."""
    cell = math.floor(s)
    if d < 0.0:
        return -1, (s - cell) * scale
    # the fraction is in (0, 1], so an infinite scale stays infinite
    return 1, (cell + 1.0 - s) * scale


@njit(cache=True)
def _receding(col: int, row: int, dx: float, dy: float,
              width: int, height: int) -> bool:
    """True once the ray is outside the grid and can never come back in."""
    if (col >= width and dx >= 0.0) or (col < 0 and dx <= 0.0):
        return True
    return (row >= height and dy >= 0.0) or (row < 0 and dy <= 0.0)


@njit(cache=True)
def _cast(sx: float, sy: float, dx: float, dy: float,
          max_distance: float, solid: np.ndarray) -> Tuple[bool, float, int, int]:
    """
    Walk the grid until the first solid tile.

    Returns ``(hit, distance, col, row)``; *col*, *row* and *distance* are
    only meaningful when *hit* is true.
    """
    width, height = solid.shape
    scale_x = _step_scale(dx, dy)
    scale_y = _step_scale(dy, dx)
    step_x, acc_x = _axis_setup(sx, dx, scale_x)
    step_y, acc_y = _axis_setup(sy, dy, scale_y)

    col = int(math.floor(sx))
    row = int(math.floor(sy))
    distance = 0.0
    while distance < max_distance:
        # X wins ties
        if acc_x <= acc_y:
            col += step_x
            distance = acc_x
            acc_x += scale_x
        else:
            row += step_y
            distance = acc_y
            acc_y += scale_y

        if distance > max_distance:
            break
        if 0 <= col < width and 0 <= row < height:
            if solid[col, row]:
                return True, distance, col, row
        elif _receding(col, row, dx, dy, width, height):
            break

    return False, distance, col, row


@njit(cache=True)
def _walk(sx: float, sy: float, dx: float, dy: float,
          max_distance: float, width: int, height: int,
          out_ix: np.ndarray, out_d: np.ndarray) -> int:
    """
    Record every in-bounds tile the ray enters, start tile included.

    Fills pre-allocated ``out_ix`` (n, 2) and ``out_d`` (n,) buffers with
    tile indices and entry distances and returns the number of entries.
    """
    scale_x = _step_scale(dx, dy)
    scale_y = _step_scale(dy, dx)
    step_x, acc_x = _axis_setup(sx, dx, scale_x)
    step_y, acc_y = _axis_setup(sy, dy, scale_y)

    col = int(math.floor(sx))
    row = int(math.floor(sy))
    distance = 0.0
    count = 0
    max_out = out_ix.shape[0]

    if 0 <= col < width and 0 <= row < height and count < max_out:
        out_ix[count, 0] = col
        out_ix[count, 1] = row
        out_d[count] = 0.0
        count += 1

    while distance < max_distance and count < max_out:
        if acc_x <= acc_y:
            col += step_x
            distance = acc_x
            acc_x += scale_x
        else:
            row += step_y
            distance = acc_y
            acc_y += scale_y

        if distance > max_distance:
            break
        if 0 <= col < width and 0 <= row < height:
            out_ix[count, 0] = col
            out_ix[count, 1] = row
            out_d[count] = distance
            count += 1
        elif _receding(col, row, dx, dy, width, height):
            break

    return count

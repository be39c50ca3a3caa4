import math

import numpy as np
import pytest

from tile_raycast import DegenerateRayError, Ray, TileGrid


def test_ray_direction_and_length():
    ray = Ray(start=(1.0, 1.0), end=(4.0, 5.0))
    assert ray.length == pytest.approx(5.0)
    assert tuple(ray.direction) == pytest.approx((0.6, 0.8))
    assert tuple(ray.point_at(2.5)) == pytest.approx((2.5, 3.0))


def test_ray_from_angle():
    ray = Ray.from_angle((1.0, 1.0), math.pi / 2, 3.0)
    assert tuple(ray.end) == pytest.approx((1.0, 4.0))
    assert ray.length == pytest.approx(3.0)


def test_degenerate_ray():
    with pytest.raises(DegenerateRayError):
        Ray((2.0, 2.0), (2.0, 2.0))
    with pytest.raises(DegenerateRayError):
        Ray((0.0, 0.0), (math.inf, 1.0))
    with pytest.raises(DegenerateRayError):
        Ray.from_angle((2.0, 2.0), 1.0, 0.0)


def test_ray_cast_and_reversed():
    arr = np.zeros((5, 5), dtype=bool)
    arr[2, 0] = True
    g = TileGrid(arr)

    ray = Ray((0.5, 0.5), (4.5, 0.5))
    hit = ray.first_hit(g)
    assert hit[:2] == (2, 0)
    assert hit[2] == pytest.approx(1.5)
    assert tuple(ray.cast(g)) == pytest.approx((2.0, 0.5))

    # reversed ray enters the same tile through its right edge
    ray_rev = Ray((4.5, 0.5), (0.5, 0.5))
    hit_rev = ray_rev.first_hit(g)
    assert hit_rev[:2] == (2, 0)
    assert hit_rev[2] == pytest.approx(1.5)
    assert tuple(ray_rev.cast(g)) == pytest.approx((3.0, 0.5))


def test_ray_traverse_and_distance_map():
    g = TileGrid(np.zeros((3, 3), dtype=bool))
    ray = Ray((0.5, 2.5), (0.5, 0.5))
    visited = list(ray.traverse(g))
    assert [v[:2] for v in visited] == [(0, 2), (0, 1), (0, 0)]

    times = ray.distance_map(g)
    assert times[0, :] == pytest.approx(np.array([1.5, 0.5, 0.0]))
    assert np.all(np.isnan(times[1:, :]))


def test_hit_point_lies_on_ray():
    arr = np.zeros((8, 8), dtype=bool)
    arr[6, 3] = True
    g = TileGrid(arr)
    ray = Ray((0.25, 0.75), (7.5, 4.0))
    hit = ray.first_hit(g)
    assert hit is not None
    assert tuple(ray.cast(g)) == pytest.approx(tuple(ray.point_at(hit[2])))

from hilbert_curve import (Point, distance_to_point, distances_to_points, int_power,
                           point_to_distance, rotate)
from sat_errors import ArithmeticDomainError
import numpy as np
import pytest

# order-2 curve, distance -> (x, y), worked out by hand
ORDER_2_TABLE = [
    (0, 0), (1, 0), (1, 1), (0, 1),
    (0, 2), (0, 3), (1, 3), (1, 2),
    (2, 2), (2, 3), (3, 3), (3, 2),
    (3, 1), (2, 1), (2, 0), (3, 0),
]


@pytest.mark.parametrize("base, exponent, expected", [
    (2, 0, 1),
    (2, 1, 2),
    (2, 10, 1024),
    (-3, 3, -27),
    (1, -5, 1),
    (-1, -3, -1),
    (-1, -4, 1),
    (7, -2, 0),
    (-2, -1, 0),
])
def test_int_power(base, exponent, expected):
    assert int_power(base, exponent) == expected


@pytest.mark.parametrize("exponent", [0, -1, -10])
def test_int_power_zero_base_is_undefined(exponent):
    with pytest.raises(ArithmeticDomainError, match="base 0"):
        int_power(0, exponent)


def test_rotate():
    # ry = 1 leaves the point alone
    assert rotate(4, 1, 2, 0, 1) == (1, 2)
    assert rotate(4, 1, 2, 1, 1) == (1, 2)
    # ry = 0 swaps, rx = 1 also reflects first
    assert rotate(4, 1, 2, 0, 0) == (2, 1)
    assert rotate(4, 1, 2, 1, 0) == (1, 2)
    assert rotate(4, 0, 3, 1, 0) == (0, 3)
    assert rotate(4, 0, 1, 1, 0) == (2, 3)


def test_order_2_reference_table():
    points = [distance_to_point(2, d) for d in range(16)]
    assert points == ORDER_2_TABLE
    assert len(set(points)) == 16
    assert distance_to_point(2, 5) == Point(0, 3)


def test_order_0_is_a_single_cell():
    assert distance_to_point(0, 0) == (0, 0)
    assert point_to_distance(0, 0, 0) == 0


@pytest.mark.parametrize("order", range(0, 7))
def test_bijection_exhaustive(order):
    side = 1 << order
    seen = set()
    for d in range(side * side):
        x, y = distance_to_point(order, d)
        assert 0 <= x < side and 0 <= y < side
        assert point_to_distance(order, x, y) == d
        seen.add((x, y))
    assert len(seen) == side * side


def test_bijection_order_10_sampled():
    order = 10
    for d in range(0, 4 ** order, 997):
        x, y = distance_to_point(order, d)
        assert point_to_distance(order, x, y) == d
    last = 4 ** order - 1
    assert point_to_distance(order, *distance_to_point(order, last)) == last


@pytest.mark.parametrize("order", range(1, 7))
def test_locality(order):
    prev = distance_to_point(order, 0)
    for d in range(1, 4 ** order):
        cur = distance_to_point(order, d)
        assert max(abs(cur.x - prev.x), abs(cur.y - prev.y)) == 1
        prev = cur


@pytest.mark.parametrize("order", range(0, 6))
def test_vectorised_matches_scalar(order):
    distances = np.arange(4 ** order)
    xs, ys = distances_to_points(order, distances)
    expected = [distance_to_point(order, int(d)) for d in distances]
    np.testing.assert_array_equal(xs, [p.x for p in expected])
    np.testing.assert_array_equal(ys, [p.y for p in expected])


def test_out_of_range_arguments():
    with pytest.raises(ValueError):
        distance_to_point(2, 16)
    with pytest.raises(ValueError):
        distance_to_point(2, -1)
    with pytest.raises(ValueError):
        distance_to_point(-1, 0)
    with pytest.raises(ValueError):
        point_to_distance(2, 4, 0)
    with pytest.raises(ValueError):
        point_to_distance(2, 0, -1)

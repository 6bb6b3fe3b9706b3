import numpy as np
from typing import NamedTuple, Tuple

from sat_errors import ArithmeticDomainError


class Point(NamedTuple):
    """A grid coordinate on the Hilbert curve."""
    x: int
    y: int


def int_power(base: int, exponent: int) -> int:
    """
    Integer power base^exponent.

    0^0 and 0 raised to a negative exponent have no integer value and raise
    ArithmeticDomainError. Any other negative exponent follows truncating
    integer division: 1 for base 1, +/-1 for base -1 and 0 for everything
    else. This is intentional; the curve itself never asks for a negative
    exponent.
    """
    if exponent < 0:
        if base == 0:
            raise ArithmeticDomainError(
                f"int_power: {base}^{exponent} requested, with base 0 and negative exponent.")
        if base == 1:
            return 1
        if base == -1:
            return -1 if exponent % 2 else 1
        return 0
    if exponent == 0:
        if base == 0:
            raise ArithmeticDomainError(
                f"int_power: {base}^{exponent} requested, with base 0 and exponent 0.")
        return 1

    value = 1
    for _ in range(exponent):
        value *= base
    return value


def rotate(n: int, x: int, y: int, rx: int, ry: int) -> Tuple[int, int]:
    """Rotate/flip a quadrant so the curve stays continuous between levels."""
    if ry == 0:
        if rx == 1:
            x = n - 1 - x
            y = n - 1 - y
        x, y = y, x
    return x, y


def _side(order: int) -> int:
    if order < 0:
        raise ValueError(f"Hilbert order must be non-negative, got {order}")
    return int_power(2, order)


def distance_to_point(order: int, distance: int) -> Point:
    """Map a distance along the order-m curve to its (x, y) cell."""
    n = _side(order)
    if not 0 <= distance < n * n:
        raise ValueError(f"distance {distance} outside [0, {n * n}) for order {order}")

    x = y = 0
    t = distance
    s = 1
    while s < n:
        rx = 1 & (t // 2)
        ry = 1 & (t ^ rx)
        x, y = rotate(s, x, y, rx, ry)
        x += s * rx
        y += s * ry
        t //= 4
        s *= 2
    return Point(x, y)


def point_to_distance(order: int, x: int, y: int) -> int:
    """Inverse of distance_to_point."""
    n = _side(order)
    if not (0 <= x < n and 0 <= y < n):
        raise ValueError(f"point ({x}, {y}) outside the {n}x{n} grid")

    d = 0
    s = n // 2
    while s > 0:
        rx = int((x & s) > 0)
        ry = int((y & s) > 0)
        d += s * s * ((3 * rx) ^ ry)
        x, y = rotate(s, x, y, rx, ry)
        s //= 2
    return d


def distances_to_points(order: int, distances: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
    """
    Vectorised distance_to_point.

    Same loop as the scalar version, with the quadrant rotation applied
    through masks over the whole array.
    """
    n = _side(order)
    t = np.asarray(distances, dtype=np.int64).copy()
    x = np.zeros_like(t)
    y = np.zeros_like(t)

    s = 1
    while s < n:
        rx = 1 & (t // 2)
        ry = 1 & (t ^ rx)

        swap = ry == 0
        flip = swap & (rx == 1)
        x = np.where(flip, s - 1 - x, x)
        y = np.where(flip, s - 1 - y, y)
        x, y = np.where(swap, y, x), np.where(swap, x, y)

        x += s * rx
        y += s * ry
        t //= 4
        s *= 2
    return x, y

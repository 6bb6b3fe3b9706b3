import numpy as np


def to_gray(d):
    """Reflected binary code of d: consecutive inputs differ in exactly one bit."""
    if isinstance(d, np.ndarray):
        return d ^ (d >> 1)
    if d < 0:
        raise ValueError(f"Gray code is only defined for non-negative integers, got {d}")
    return d ^ (d >> 1)


def from_gray(g):
    """Inverse of to_gray."""
    if isinstance(g, np.ndarray):
        # prefix XOR by doubling shifts: g ^= g>>1, g>>2, g>>4, ...
        d = g.copy()
        shift = 1
        while shift < d.dtype.itemsize * 8:
            d ^= d >> shift
            shift *= 2
        return d

    if g < 0:
        raise ValueError(f"Gray code is only defined for non-negative integers, got {g}")
    d = 0
    while g:
        d ^= g
        g >>= 1
    return d

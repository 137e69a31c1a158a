"""Szudzik pairing of two signed integers into one non-negative integer."""

from __future__ import annotations

import math


def _fold(n: int) -> int:
    return n * 2 if n >= 0 else (n * -2) - 1


def _unfold(n: int) -> int:
    return n // 2 if n % 2 == 0 else -((n + 1) // 2)


def pair(x, y) -> int:
    """Combine two numbers (floored to integers) into one unique integer."""
    xx = _fold(math.floor(x))
    yy = _fold(math.floor(y))
    if xx >= yy:
        return xx * xx + xx + yy
    return yy * yy + xx


def unpair(z) -> tuple[int, int]:
    """Split a number produced by pair() back into its two integers."""
    if z < 0:
        raise ValueError("cannot unpair a negative number")
    root = math.isqrt(math.floor(z))
    square = root * root
    if (z - square) >= root:
        first = root
        second = int(z - square - root)
    else:
        first = int(z - square)
        second = root
    return _unfold(first), _unfold(second)
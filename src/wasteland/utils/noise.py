"""Seeded 2D gradient noise used to shape world terrain.

:func:`make_noise` returns a closure over its own permutation table, so two
fields built from different seeds never observe each other's state and a field
can be shared freely once built.
"""

from __future__ import annotations

import math
from collections.abc import Callable

from wasteland.utils.rng import LcgStream

NoiseField = Callable[[float, float], float]

PERMUTATION_SIZE = 256

GRADIENTS: tuple[tuple[int, int], ...] = (
    (1, 1),
    (-1, 1),
    (1, -1),
    (-1, -1),
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
)


def fade(t: float) -> float:
    """Quintic smoothing curve ``6t^5 - 15t^4 + 10t^3``."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(a: float, b: float, t: float) -> float:
    return a + t * (b - a)


def build_permutation(seed: int) -> tuple[int, ...]:
    """Return a seeded permutation of ``0..255`` doubled to 512 entries."""

    stream = LcgStream(seed)
    table = list(range(PERMUTATION_SIZE))
    stream.shuffle(table)
    return tuple(table + table)


def make_noise(seed: int) -> NoiseField:
    """Create a deterministic noise field for ``seed``.

    The returned function maps ``(x, y)`` to a float in ``[-1, 1]``.  Equal
    seeds and coordinates always give equal values and nearby coordinates give
    nearby values.

    Example:
        >>> field = make_noise(42)
        >>> field(1.5, 2.25) == make_noise(42)(1.5, 2.25)
        True
    """

    perm = build_permutation(seed)

    def sample(x: float, y: float) -> float:
        x_floor = math.floor(x)
        y_floor = math.floor(y)
        xi = x_floor & 255
        yi = y_floor & 255
        xf = x - x_floor
        yf = y - y_floor

        g00 = GRADIENTS[perm[(xi + perm[yi]) & 255] % 8]
        g01 = GRADIENTS[perm[(xi + perm[(yi + 1) & 255]) & 255] % 8]
        g10 = GRADIENTS[perm[(xi + 1 + perm[yi]) & 255] % 8]
        g11 = GRADIENTS[perm[(xi + 1 + perm[(yi + 1) & 255]) & 255] % 8]

        d00 = g00[0] * xf + g00[1] * yf
        d01 = g01[0] * xf + g01[1] * (yf - 1)
        d10 = g10[0] * (xf - 1) + g10[1] * yf
        d11 = g11[0] * (xf - 1) + g11[1] * (yf - 1)

        u = fade(xf)
        v = fade(yf)
        value = lerp(lerp(d00, d10, u), lerp(d01, d11, u), v)
        return max(-1.0, min(1.0, value))

    return sample


def noise_grid(width: int, height: int, *, seed: int, scale: float = 0.1) -> list[list[float]]:
    """Sample a ``height`` x ``width`` grid of noise values (row-major).

    Handy for previewing how a seed will shape terrain.

    Raises:
        ValueError: If width or height is negative
    """
    if width < 0 or height < 0:
        raise ValueError(f"grid dimensions must be non-negative, got {width}x{height}")

    field = make_noise(seed)
    return [[field(x * scale, y * scale) for x in range(width)] for y in range(height)]

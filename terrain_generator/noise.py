# terrain_generator/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides functions for generating 2D gradient (Perlin) noise. It
is designed to be a pure, stateless utility.

Data Contract:
---------------
- Inputs:
    - p: A 512-entry NumPy permutation table (int array, values in [0, 256)).
    - x, y: Scalar coordinates, or 2D NumPy arrays of coordinates.
- Outputs:
    - Noise values nominally in the range [-1, 1]. The bound is not hard;
      with this gradient set the magnitude never exceeds 2.
- Side Effects: None.
- Invariants: For a fixed table the output is a pure function of (x, y).
  The shape of a grid output matches the shape of input x and y.
================================================================================
"""

import numpy as np
from numba import njit

from . import config as DEFAULTS

# The four diagonal gradients the hash selects between. grad() encodes them
# with bit tests instead of indexing this array.
GRADIENT_VECTORS = np.array([[1, 1], [-1, 1], [1, -1], [-1, -1]])
GRADIENT_VECTORS.setflags(write=False)


def make_permutation_table(rng: np.random.Generator) -> np.ndarray:
    """
    Draws a permutation table from the given random source.

    Each of the 256 entries is an independent uniform draw from [0, 256), so
    values may repeat. The table is duplicated to 512 entries so that
    table[i] == table[i % 256] for every valid index.
    """
    size = DEFAULTS.PERMUTATION_TABLE_SIZE
    p = rng.integers(0, size, size=size, dtype=np.int64)
    return np.concatenate([p, p])


@njit
def fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)


@njit
def lerp(t, a, b):
    "Linear interpolation."
    return a + t * (b - a)


@njit
def grad(hash_value, x, y):
    """
    Returns the influence of the corner gradient selected by hash_value on
    the corner-relative offset (x, y).
    """
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = y
    return (-u if h & 1 else u) + (-v if h & 2 else v)


def normalize(value):
    """Maps [-1, 1] onto [0, 1]. Not clamped."""
    return (value + 1) / 2


@njit
def perlin_noise_2d(p, x, y):
    """
    Samples 2D gradient noise at a single point.
    This function is JIT-compiled with Numba.
    """
    # Lattice cell, masked to the table's range
    fx = np.floor(x)
    fy = np.floor(y)
    X = int(fx) & 255
    Y = int(fy) & 255

    # Position inside the cell
    xf = x - fx
    yf = y - fy

    u = fade(xf)
    v = fade(yf)

    A = p[X] + Y
    B = p[X + 1] + Y

    return lerp(
        v,
        lerp(u, grad(p[A], xf, yf), grad(p[B], xf - 1, yf)),
        lerp(u, grad(p[A + 1], xf, yf - 1), grad(p[B + 1], xf - 1, yf - 1))
    )


@njit
def perlin_noise_grid(p, x, y):
    """
    Samples 2D gradient noise for every point of two equally shaped
    coordinate arrays.
    """
    rows, cols = x.shape
    total_noise = np.zeros((rows, cols))

    for i in range(rows):
        for j in range(cols):
            total_noise[i, j] = perlin_noise_2d(p, x[i, j], y[i, j])

    return total_noise

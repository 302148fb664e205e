"""
Texture Coordinate Mapping

Conversions between integer pixel indices and normalized UV coordinates,
plus repeat (tiling) addressing.

Pixel-center convention:
    uv = (pixel + 0.5) / extent

UVs are not restricted to [0, 1). Indices returned by the UV -> pixel
functions are *before* wraparound and may be negative or exceed the
extent; pass them through wrap_index() before fetching a texel.

Negative UVs use a Euclidean convention: the pixel is always the floor
of the mapped coordinate and the fractional part is always in [0, 1).
"""

from typing import Tuple
import numpy as np
from numba import njit


@njit(cache=True)
def pixel_to_uv(pixel: int, extent: int) -> float:
    """Map a pixel index to the UV of its center."""
    return (pixel + 0.5) / extent


@njit(cache=True)
def uv_to_pixel(uv: float, extent: int) -> int:
    """
    Map a UV to the pixel containing it.

    Equivalent to rounding uv * extent - 0.5 to the nearest integer.
    """
    return int(np.floor(uv * extent))


@njit(cache=True)
def uv_to_pixel_frac(uv: float, extent: int) -> Tuple[int, float]:
    """
    Map a UV to the pixel whose center is at or left of it.

    Returns:
        (pixel, frac): the lower pixel of the interpolation pair and the
        weight of the upper one, frac in [0, 1)
    """
    x = uv * extent - 0.5
    base = np.floor(x)
    frac = x - base
    # x just below an integer can round frac up to exactly 1.0
    if frac >= 1.0:
        base += 1.0
        frac = 0.0
    return int(base), frac


@njit(cache=True)
def wrap_index(index: int, extent: int) -> int:
    """Repeat addressing. Always returns a value in [0, extent)."""
    return index % extent

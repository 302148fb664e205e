"""
Color Space Module

Handles:
- sRGB (8-bit) to Linear (float) conversion for filtering
- Linear to sRGB conversion back to storage texels

Color Space Background:
- Stored texels are sRGB encoded with a gamma of ~2.2
- Averaging must happen in Linear (physical) space
- Averaging sRGB values directly darkens mips ("gamma-space averaging error")

A fixed gamma of 2.2 is used rather than the piecewise sRGB curve.
"""

import numpy as np
from numba import njit

GAMMA = 2.2


@njit(cache=True)
def to_linear_component(c: int) -> float:
    """
    Convert a single 8-bit sRGB component to Linear.

    Args:
        c: sRGB value in [0, 255]

    Returns:
        Linear value in [0, 1]
    """
    return (c / 255.0) ** GAMMA


@njit(cache=True)
def to_texel_component(c: float) -> int:
    """
    Convert a single Linear component to an 8-bit sRGB value.

    Args:
        c: Linear value (values outside [0, 1] are clamped)

    Returns:
        sRGB value in [0, 255]
    """
    if c <= 0.0:
        return 0
    value = (c ** (1.0 / GAMMA)) * 255.0 + 0.5
    if value > 255.0:
        value = 255.0
    return int(value)


def to_linear(texels) -> np.ndarray:
    """
    Convert sRGB texels to Linear colors.

    Args:
        texels: uint8 array (or sequence) of shape (..., 3)

    Returns:
        float64 array of the same shape with Linear values [0, 1]
    """
    normalized = np.asarray(texels, dtype=np.float64) / 255.0
    return np.power(normalized, GAMMA)


def to_texel(colors) -> np.ndarray:
    """
    Convert Linear colors to sRGB texels.

    Args:
        colors: float array (or sequence) of shape (..., 3)

    Returns:
        uint8 array of the same shape
    """
    clamped = np.clip(np.asarray(colors, dtype=np.float64), 0.0, 1.0)
    srgb = np.power(clamped, 1.0 / GAMMA)
    return np.clip(srgb * 255.0 + 0.5, 0.0, 255.0).astype(np.uint8)

"""
Texture Sampling Module

Lookup modes:
1. Nearest   - single texel, no color conversion (u8 in, u8 out)
2. Bilinear  - 2x2 neighborhood, interpolated along x then y
3. Trilinear - bilinear on two adjacent mip levels, blended by the
               fractional part of the LOD

All modes use repeat addressing: any real UV is valid.

Note: interpolation happens on the sRGB encoded 8-bit values, not in
Linear space, unlike the mip builder. Every interpolation stage stores
its result back to 8 bits, rounding to nearest by default. Pass
truncate=True to truncate each weighted term instead.
"""

from enum import Enum
from typing import Sequence, Tuple
import numpy as np
from numba import njit

from .addressing import uv_to_pixel, uv_to_pixel_frac, wrap_index
from .texture import Image, MipChain


class SampleType(Enum):
    """Available texture filtering modes."""
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    TRILINEAR = "trilinear"


# Integer codes used by the JIT kernels
MODE_CODES = {
    SampleType.NEAREST: 0,
    SampleType.BILINEAR: 1,
    SampleType.TRILINEAR: 2,
}


@njit(cache=True)
def lerp_channel(a, b, t: float, truncate: bool) -> int:
    """
    Interpolate one 8-bit channel: a * (1 - t) + b * t.

    Args:
        a, b: Channel values (0-255)
        t: Weight of b
        truncate: Truncate each weighted term instead of rounding the sum

    Returns:
        Interpolated channel value (0-255)
    """
    if truncate:
        return int(a * (1.0 - t)) + int(b * t)

    value = a * (1.0 - t) + b * t + 0.5
    if value < 0.0:
        return 0
    if value > 255.0:
        return 255
    return int(value)


@njit(cache=True)
def _lerp_rgb(c0, c1, t: float, truncate: bool):
    """Interpolate an RGB triple."""
    return (
        lerp_channel(c0[0], c1[0], t, truncate),
        lerp_channel(c0[1], c1[1], t, truncate),
        lerp_channel(c0[2], c1[2], t, truncate),
    )


@njit(cache=True)
def _fetch(pixels: np.ndarray, x: int, y: int):
    """Read a texel as an integer triple."""
    return (
        np.int64(pixels[y, x, 0]),
        np.int64(pixels[y, x, 1]),
        np.int64(pixels[y, x, 2]),
    )


@njit(cache=True)
def nearest_kernel(pixels: np.ndarray, u: float, v: float):
    """Nearest texel lookup on a (H, W, 3) array."""
    height = pixels.shape[0]
    width = pixels.shape[1]
    x = wrap_index(uv_to_pixel(u, width), width)
    y = wrap_index(uv_to_pixel(v, height), height)
    return _fetch(pixels, x, y)


@njit(cache=True)
def bilinear_kernel(pixels: np.ndarray, u: float, v: float, truncate: bool):
    """Bilinear lookup on a (H, W, 3) array."""
    height = pixels.shape[0]
    width = pixels.shape[1]

    px, x_weight = uv_to_pixel_frac(u, width)
    py, y_weight = uv_to_pixel_frac(v, height)

    x0 = wrap_index(px, width)
    y0 = wrap_index(py, height)
    x1 = (x0 + 1) % width
    y1 = (y0 + 1) % height

    p00 = _fetch(pixels, x0, y0)
    p10 = _fetch(pixels, x1, y0)
    p01 = _fetch(pixels, x0, y1)
    p11 = _fetch(pixels, x1, y1)

    top = _lerp_rgb(p00, p10, x_weight, truncate)
    bottom = _lerp_rgb(p01, p11, x_weight, truncate)
    return _lerp_rgb(top, bottom, y_weight, truncate)


@njit(cache=True)
def trilinear_kernel(
    low: np.ndarray,
    high: np.ndarray,
    u: float,
    v: float,
    weight: float,
    truncate: bool
):
    """Blend bilinear lookups on two mip levels by weight."""
    c0 = bilinear_kernel(low, u, v, truncate)
    c1 = bilinear_kernel(high, u, v, truncate)
    return _lerp_rgb(c0, c1, weight, truncate)


def split_lod(lod: float, last_level: int) -> Tuple[int, int, float]:
    """
    Split a continuous LOD into the two levels it blends.

    Args:
        lod: Continuous mip level (clamped into [0, last_level])
        last_level: Index of the smallest level

    Returns:
        (low, high, weight) with high = min(low + 1, last_level)
    """
    if not np.isfinite(lod) or lod < 0.0:
        lod = 0.0
    lod = min(float(lod), float(last_level))
    low = int(np.floor(lod))
    high = min(low + 1, last_level)
    return low, high, lod - low


def _as_texel(rgb) -> np.ndarray:
    return np.array(rgb, dtype=np.uint8)


def sample_nearest(image: Image, uv: Sequence[float]) -> np.ndarray:
    """
    Nearest-texel lookup.

    Args:
        image: Texture level
        uv: (u, v) coordinate, wrapped

    Returns:
        RGB uint8 array of shape (3,)
    """
    u, v = uv
    return _as_texel(nearest_kernel(image.pixels, float(u), float(v)))


def sample_bilinear(image: Image, uv: Sequence[float], truncate: bool = False) -> np.ndarray:
    """
    Bilinear lookup, interpolated in sRGB space.

    Args:
        image: Texture level
        uv: (u, v) coordinate, wrapped
        truncate: Truncate instead of round at each interpolation stage

    Returns:
        RGB uint8 array of shape (3,)
    """
    u, v = uv
    return _as_texel(bilinear_kernel(image.pixels, float(u), float(v), truncate))


def sample_trilinear(
    chain: MipChain,
    uv: Sequence[float],
    lod: float,
    truncate: bool = False
) -> np.ndarray:
    """
    Trilinear lookup across a mip chain.

    Samples bilinearly at floor(lod) and at the next level (clamped to
    the last level), then blends by the fractional part of lod.

    Args:
        chain: Mip chain
        uv: (u, v) coordinate, wrapped
        lod: Continuous mip level
        truncate: Truncate instead of round at each interpolation stage

    Returns:
        RGB uint8 array of shape (3,)
    """
    u, v = uv
    low, high, weight = split_lod(lod, chain.last_level)
    return _as_texel(trilinear_kernel(
        chain[low].pixels, chain[high].pixels,
        float(u), float(v), weight, truncate
    ))


class Sampler:
    """
    Samples a mip chain with a configurable filter.

    Nearest and bilinear modes use the level floor(lod); trilinear
    blends floor(lod) with the next level.
    """

    def __init__(
        self,
        chain: MipChain,
        sample_type: SampleType = SampleType.TRILINEAR,
        truncate: bool = False
    ):
        """
        Initialize the sampler.

        Args:
            chain: Mip chain to sample
            sample_type: Default filter mode (enum or its name)
            truncate: Truncate instead of round when interpolating
        """
        self.chain = chain
        self.sample_type = SampleType(sample_type)
        self.truncate = truncate

    def sample(
        self,
        uv: Sequence[float],
        lod: float = 0.0,
        sample_type=None
    ) -> np.ndarray:
        """
        Sample the chain.

        Args:
            uv: (u, v) coordinate
            lod: Continuous mip level
            sample_type: Override for the default filter mode

        Returns:
            RGB uint8 array of shape (3,)
        """
        mode = self.sample_type if sample_type is None else SampleType(sample_type)

        if mode == SampleType.TRILINEAR:
            return sample_trilinear(self.chain, uv, lod, self.truncate)

        low, _, _ = split_lod(lod, self.chain.last_level)
        level = self.chain[low]
        if mode == SampleType.NEAREST:
            return sample_nearest(level, uv)
        return sample_bilinear(level, uv, self.truncate)

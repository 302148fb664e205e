"""
Mip Chain Construction with Numba JIT Compilation

Builds a mip pyramid using a box filter. Every destination texel is the
average of the disjoint block of source texels it covers, computed in
Linear space and converted back to sRGB.

Algorithm Overview:
1. Level 0 is a verbatim copy of the input image
2. Each next level is max(src / 2, 1) along each axis (floored)
3. The footprint is (src_w // dst_w) x (src_h // dst_h) texels, so an
   axis that already reached 1 pixel is no longer blurred
4. Stop after floor(log2(max(width, height))) + 1 levels (last is 1x1)

Odd sizes: the footprint is floored too, so the last row/column of an
odd-sized level does not contribute to the next level.
"""

import numpy as np
from numba import njit

from .color import to_linear_component, to_texel_component
from .texture import Image, MipChain, num_mip_levels


@njit(cache=True)
def _downsample_box(src: np.ndarray, dst_width: int, dst_height: int) -> np.ndarray:
    """
    Box filter one level down.

    Args:
        src: (H, W, 3) uint8 source level
        dst_width: Destination width
        dst_height: Destination height

    Returns:
        (dst_height, dst_width, 3) uint8 level
    """
    src_height = src.shape[0]
    src_width = src.shape[1]
    width_ratio = src_width // dst_width
    height_ratio = src_height // dst_height
    scale = 1.0 / (width_ratio * height_ratio)

    dst = np.empty((dst_height, dst_width, 3), dtype=np.uint8)

    for y in range(dst_height):
        for x in range(dst_width):
            r = 0.0
            g = 0.0
            b = 0.0
            for iy in range(height_ratio):
                sy = y * height_ratio + iy
                for ix in range(width_ratio):
                    sx = x * width_ratio + ix
                    r += to_linear_component(src[sy, sx, 0])
                    g += to_linear_component(src[sy, sx, 1])
                    b += to_linear_component(src[sy, sx, 2])

            dst[y, x, 0] = to_texel_component(r * scale)
            dst[y, x, 1] = to_texel_component(g * scale)
            dst[y, x, 2] = to_texel_component(b * scale)

    return dst


def next_level_size(width: int, height: int):
    """Get the (width, height) of the level below one of the given size."""
    return max(width // 2, 1), max(height // 2, 1)


def downsample(image: Image) -> Image:
    """
    Produce the next mip level of an image.

    Args:
        image: Source level

    Returns:
        New Image at half resolution (each axis floored, minimum 1)
    """
    dst_width, dst_height = next_level_size(image.width, image.height)
    pixels = _downsample_box(np.ascontiguousarray(image.pixels), dst_width, dst_height)
    return Image(dst_width, dst_height, pixels)


class MipChainBuilder:
    """
    Builds mip chains from base images.

    The builder is stateless; build() is a pure function of its input
    and returns bit-identical chains for identical images.
    """

    def build(self, image: Image) -> MipChain:
        """
        Build the full mip chain for an image.

        Args:
            image: Base image (not modified, level 0 is a copy)

        Returns:
            MipChain ending in a 1x1 level
        """
        count = num_mip_levels(image.width, image.height)

        levels = [image]
        for _ in range(1, count):
            levels.append(downsample(levels[-1]))

        return MipChain(levels)


def build_mip_chain(image: Image) -> MipChain:
    """Convenience wrapper around MipChainBuilder().build()."""
    return MipChainBuilder().build(image)

"""
Level of Detail Selection

Picks a continuous mip level from how fast a UV transform moves through
the texture per output pixel:

1. derivatives = diag(image_scale) @ linear_part(transform)
2. dUV/dx = (1, 0) @ derivatives, dUV/dy = (0, 1) @ derivatives
3. lod = clamp(log2(max(|dUV/dx|, |dUV/dy|)), 0, num_levels - 1)

Translation does not affect derivatives, so only the 2x2 part matters.
The larger axis wins (isotropic worst case); a single scalar can't
describe direction dependent minification.

For a single global affine transform the result is constant over the
whole output image.

When rendering, output pixels and texels have their own resolutions on
each axis. texel_derivatives() moves the transform into texel space,

    J = diag(1 / out_w, 1 / out_h) @ L @ diag(tex_w, tex_h)

so its rows are texels per output pixel even for non-square textures
under rotation; pass it with image_scale = (1, 1). A diagonal
image_scale alone is only exact for square textures or axis-aligned
transforms.
"""

from typing import Sequence, Tuple
import math
import numpy as np

from .transform import compose, linear_part, scale22


def image_scale_for(
    texture_size: Tuple[int, int],
    output_size: Tuple[int, int]
) -> Tuple[float, float]:
    """
    Scale correcting for texture vs output resolution.

    Args:
        texture_size: (width, height) of mip level 0
        output_size: (width, height) of the rendered image

    Returns:
        (texture_width / output_width, texture_height / output_height)
    """
    tex_w, tex_h = texture_size
    out_w, out_h = output_size
    if out_w < 1 or out_h < 1:
        raise ValueError(f"Output dimensions must be positive, got {out_w}x{out_h}")
    return (tex_w / out_w, tex_h / out_h)


def texel_derivatives(
    transform: np.ndarray,
    texture_size: Tuple[int, int],
    output_size: Tuple[int, int]
) -> np.ndarray:
    """
    Texel-space Jacobian of a UV transform rendered at output_size.

    Args:
        transform: 2x2 or 3x3 UV transform (row vector convention)
        texture_size: (width, height) of mip level 0
        output_size: (width, height) of the rendered image

    Returns:
        2x2 matrix whose rows are the texel steps per output pixel along
        output x and output y
    """
    tex_w, tex_h = texture_size
    out_w, out_h = output_size
    if out_w < 1 or out_h < 1:
        raise ValueError(f"Output dimensions must be positive, got {out_w}x{out_h}")
    return compose(
        scale22(1.0 / out_w, 1.0 / out_h),
        linear_part(transform),
        scale22(tex_w, tex_h)
    )


def derivative_lengths(
    transform: np.ndarray,
    image_scale: Sequence[float] = (1.0, 1.0)
) -> Tuple[float, float]:
    """
    Texel-space distance covered by one output pixel step on each axis.

    Args:
        transform: 2x2 or 3x3 UV transform (row vector convention)
        image_scale: (sx, sy) resolution correction

    Returns:
        (length along output x, length along output y)
    """
    sx, sy = image_scale
    derivatives = compose(scale22(sx, sy), linear_part(transform))

    d_dx = np.array([1.0, 0.0]) @ derivatives
    d_dy = np.array([0.0, 1.0]) @ derivatives

    return float(np.hypot(*d_dx)), float(np.hypot(*d_dy))


def select_lod(
    transform: np.ndarray,
    image_scale: Sequence[float],
    num_levels: int
) -> float:
    """
    Select the continuous mip level for a transform.

    Args:
        transform: 2x2 or 3x3 UV transform
        image_scale: (sx, sy) resolution correction, see image_scale_for()
        num_levels: Number of levels in the mip chain

    Returns:
        LOD in [0, num_levels - 1]; singular or degenerate transforms
        resolve to 0
    """
    if num_levels < 1:
        raise ValueError(f"num_levels must be >= 1, got {num_levels}")

    len_x, len_y = derivative_lengths(transform, image_scale)
    if not (math.isfinite(len_x) and math.isfinite(len_y)):
        return 0.0

    # log2(0) is -inf; anything up to 1 texel per pixel is the base level
    max_len = max(len_x, len_y)
    if max_len <= 1.0:
        return 0.0

    return min(math.log2(max_len), float(num_levels - 1))


def select_render_lod(
    transform: np.ndarray,
    texture_size: Tuple[int, int],
    output_size: Tuple[int, int],
    num_levels: int
) -> float:
    """Select the LOD for rendering a texture_size texture at output_size."""
    derivatives = texel_derivatives(transform, texture_size, output_size)
    return select_lod(derivatives, (1.0, 1.0), num_levels)

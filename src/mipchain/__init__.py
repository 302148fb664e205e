"""
Mipchain
========

Gamma-correct mip pyramids and trilinear texture sampling on the CPU.

This package builds box-filtered mip chains (averaged in Linear space) from
RGB8 images and samples them under arbitrary 2D affine UV transforms, picking
the mip level from the transform's local minification.

Key Features:
- Box-filter mip chains averaged in Linear light (gamma 2.2)
- Nearest, bilinear and trilinear sampling with repeat addressing
- Isotropic LOD selection from an affine transform's derivatives
- Numba JIT kernels for mip building and per-pixel rendering
- PNG export of rendered images and stacked mip strips

Example Usage:
    from mipchain import TextureRenderer, scale33

    renderer = TextureRenderer(sample_type="trilinear")
    renderer.load_image("scenery.png")
    renderer.render(scale33(4.0))
    renderer.export_render("zoomed.png")
"""

__version__ = "1.0.0"
__author__ = "Mipchain Team"

from .texture import Image, MipChain, num_mip_levels
from .color import to_linear, to_texel
from .addressing import pixel_to_uv, uv_to_pixel, uv_to_pixel_frac, wrap_index
from .mipmap import MipChainBuilder, build_mip_chain
from .sampler import (
    SampleType, Sampler, sample_nearest, sample_bilinear, sample_trilinear
)
from .lod import select_lod, select_render_lod, image_scale_for
from .transform import (
    identity22, identity33, rotation22, rotation33, scale22, scale33, translation33
)
from .renderer import TextureRenderer, render_transformed

__all__ = [
    "Image",
    "MipChain",
    "num_mip_levels",
    "to_linear",
    "to_texel",
    "pixel_to_uv",
    "uv_to_pixel",
    "uv_to_pixel_frac",
    "wrap_index",
    "MipChainBuilder",
    "build_mip_chain",
    "SampleType",
    "Sampler",
    "sample_nearest",
    "sample_bilinear",
    "sample_trilinear",
    "select_lod",
    "select_render_lod",
    "image_scale_for",
    "identity22",
    "identity33",
    "rotation22",
    "rotation33",
    "scale22",
    "scale33",
    "translation33",
    "TextureRenderer",
    "render_transformed",
]

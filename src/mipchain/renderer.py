"""
Main TextureRenderer Class

This is the primary interface for the mip sampling pipeline.
It orchestrates:
1. Image loading
2. Mip chain construction (once per texture)
3. LOD selection (once per transform)
4. Per-pixel sampling under a UV transform
5. Export of the rendered image and the mip chain

Every output pixel (x, y) maps to
    uv = (pixel_to_uv(x, out_w), pixel_to_uv(y, out_h), 1) @ M
with M a 3x3 homogeneous (or 2x2 linear) row-vector transform.

Example Usage:
    renderer = TextureRenderer(sample_type="trilinear")
    renderer.load_image("scenery.png")
    renderer.render(scale33(4.0), output_size=(256, 256))
    renderer.export_render("out/zoomed.png")
    renderer.export_mips("out/mips.png")
"""

from pathlib import Path
from typing import Optional, Tuple, Union
import numpy as np
from numba import njit, prange

from .addressing import pixel_to_uv
from .exporters import MipStripExporter, PNGExporter
from .ingestion import ImageLoader
from .lod import select_render_lod
from .mipmap import MipChainBuilder
from .sampler import (
    MODE_CODES, SampleType, bilinear_kernel, nearest_kernel, split_lod, trilinear_kernel
)
from .texture import Image, MipChain
from .transform import check_matrix, identity33


@njit(cache=True, parallel=True)
def _render_kernel(
    low: np.ndarray,
    high: np.ndarray,
    weight: float,
    matrix: np.ndarray,
    out_width: int,
    out_height: int,
    mode: int,
    truncate: bool
) -> np.ndarray:
    """
    Sample every output pixel under a 3x3 transform.

    Each row is written by exactly one thread; levels are read only.
    """
    out = np.empty((out_height, out_width, 3), dtype=np.uint8)

    for y in prange(out_height):
        py = pixel_to_uv(y, out_height)
        for x in range(out_width):
            px = pixel_to_uv(x, out_width)
            u = px * matrix[0, 0] + py * matrix[1, 0] + matrix[2, 0]
            v = px * matrix[0, 1] + py * matrix[1, 1] + matrix[2, 1]

            if mode == 0:
                r, g, b = nearest_kernel(low, u, v)
            elif mode == 1:
                r, g, b = bilinear_kernel(low, u, v, truncate)
            else:
                r, g, b = trilinear_kernel(low, high, u, v, weight, truncate)

            out[y, x, 0] = r
            out[y, x, 1] = g
            out[y, x, 2] = b

    return out


def as_homogeneous(transform) -> np.ndarray:
    """Promote a 2x2 linear transform to 3x3; 3x3 passes through."""
    matrix = check_matrix(transform)
    if matrix.shape == (3, 3):
        return matrix
    result = identity33()
    result[:2, :2] = matrix
    return result


def render_transformed(
    chain: MipChain,
    transform,
    output_size: Optional[Tuple[int, int]] = None,
    sample_type: Union[str, SampleType] = SampleType.TRILINEAR,
    use_mips: bool = True,
    truncate: bool = False
) -> Tuple[Image, float]:
    """
    Render a mip chain under a UV transform.

    Args:
        chain: Mip chain of the texture
        transform: 2x2 or 3x3 UV transform (row vector convention)
        output_size: (width, height) of the result, defaults to level 0 size
        sample_type: Filter mode
        use_mips: If False, always sample level 0
        truncate: Truncate instead of round when interpolating

    Returns:
        (rendered image, LOD used)
    """
    mode = SampleType(sample_type)
    matrix = as_homogeneous(transform)

    if output_size is None:
        output_size = chain.base.size
    out_width, out_height = output_size

    lod = 0.0
    if use_mips:
        lod = select_render_lod(matrix, chain.base.size, output_size, len(chain))
    low, high, weight = split_lod(lod, chain.last_level)

    pixels = _render_kernel(
        chain[low].pixels,
        chain[high].pixels,
        weight,
        np.ascontiguousarray(matrix),
        out_width,
        out_height,
        MODE_CODES[mode],
        truncate
    )
    return Image(out_width, out_height, pixels), lod


class TextureRenderer:
    """
    High-level interface for rendering transformed textures.

    Attributes:
        sample_type: Filter mode used by render()
        use_mips: Select a mip level from the transform (False = level 0)
        truncate: Truncate instead of round when interpolating
    """

    def __init__(
        self,
        sample_type: Union[str, SampleType] = SampleType.TRILINEAR,
        use_mips: bool = True,
        truncate: bool = False
    ):
        """
        Initialize the TextureRenderer.

        Args:
            sample_type: Filter mode name or SampleType enum
            use_mips: Select a mip level from the transform
            truncate: Truncate instead of round when interpolating
        """
        self.sample_type = SampleType(sample_type)
        self.use_mips = use_mips
        self.truncate = truncate

        self._loader: Optional[ImageLoader] = None
        self._chain: Optional[MipChain] = None
        self._output: Optional[Image] = None
        self._lod: Optional[float] = None

    def load_image(self, image_path: Union[str, Path]) -> "TextureRenderer":
        """
        Load a texture from disk and build its mip chain.

        Args:
            image_path: Path to the texture

        Returns:
            self for method chaining
        """
        self._loader = ImageLoader().load(image_path)
        return self.build_mips()

    def load_array(self, array: np.ndarray) -> "TextureRenderer":
        """
        Load a texture from an (H, W, 3) or (H, W, 4) array.

        Returns:
            self for method chaining
        """
        self._loader = ImageLoader().load_from_array(array)
        return self.build_mips()

    def build_mips(self) -> "TextureRenderer":
        """
        (Re)build the mip chain of the loaded texture.

        Returns:
            self for method chaining
        """
        if self._loader is None:
            raise RuntimeError("No image loaded. Call load_image() first.")

        self._chain = MipChainBuilder().build(self._loader.image)
        self._output = None
        self._lod = None
        return self

    def set_sample_type(self, sample_type: Union[str, SampleType]) -> "TextureRenderer":
        """Change the filter mode. Returns self."""
        self.sample_type = SampleType(sample_type)
        return self

    def lod_for(self, transform, output_size: Optional[Tuple[int, int]] = None) -> float:
        """
        Get the LOD render() would use for a transform.

        Args:
            transform: 2x2 or 3x3 UV transform
            output_size: (width, height) of the result

        Returns:
            Continuous mip level
        """
        chain = self.chain
        if output_size is None:
            output_size = chain.base.size
        return select_render_lod(transform, chain.base.size, output_size, len(chain))

    def render(
        self,
        transform=None,
        output_size: Optional[Tuple[int, int]] = None
    ) -> Image:
        """
        Render the texture under a UV transform.

        Args:
            transform: 2x2 or 3x3 UV transform (identity when None)
            output_size: (width, height) of the result, defaults to texture size

        Returns:
            Rendered image
        """
        if transform is None:
            transform = identity33()

        self._output, self._lod = render_transformed(
            self.chain,
            transform,
            output_size=output_size,
            sample_type=self.sample_type,
            use_mips=self.use_mips,
            truncate=self.truncate
        )
        return self._output

    def export_render(self, output_path: Union[str, Path]) -> Path:
        """Write the last rendered image."""
        if self._output is None:
            raise RuntimeError("Nothing rendered. Call render() first.")
        return PNGExporter().export(self._output, output_path)

    def export_mips(self, output_path: Union[str, Path]) -> Path:
        """Write all mip levels as one stacked image."""
        return MipStripExporter().export(self.chain, output_path)

    @property
    def chain(self) -> MipChain:
        """Get the mip chain."""
        if self._chain is None:
            raise RuntimeError("No image loaded. Call load_image() first.")
        return self._chain

    @property
    def output(self) -> Optional[Image]:
        """Get the last rendered image."""
        return self._output

    @property
    def lod(self) -> Optional[float]:
        """Get the LOD used by the last render."""
        return self._lod

    def preview(self) -> dict:
        """
        Get a summary of the current state.

        Returns:
            Dictionary with current state information
        """
        info = {
            "image_loaded": self._loader is not None,
            "rendered": self._output is not None,
            "sample_type": self.sample_type.value,
        }

        if self._chain is not None:
            info["image_size"] = self._chain.base.size
            info["mip_levels"] = len(self._chain)
            info["mip_sizes"] = [level.size for level in self._chain]

        if self._output is not None:
            info["output_size"] = self._output.size
            info["lod"] = self._lod

        return info

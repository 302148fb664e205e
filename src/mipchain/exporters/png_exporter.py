"""
Image File Exporters

Writers for single textures and whole mip chains. The output format is
picked by Pillow from the file extension (PNG recommended, lossless).

Mip strip layout: every level stacked top to bottom, left aligned, in a
canvas as wide as level 0. Area not covered by a level is black.

    +--------+
    | level0 |
    |        |
    +----+---+
    | l1 |
    +-+--+
    |.|
"""

from pathlib import Path
from typing import Union
import numpy as np
from PIL import Image as PILImage

from ..texture import Image, MipChain


class PNGExporter:
    """Export a single Image to an image file."""

    def export(self, image: Image, output_path: Union[str, Path]) -> Path:
        """
        Write an image.

        Args:
            image: Texture to write
            output_path: Output file path

        Returns:
            The path written
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        pixels = np.ascontiguousarray(image.pixels, dtype=np.uint8)
        PILImage.fromarray(pixels).save(output_path)
        return output_path


class MipStripExporter:
    """Export every level of a mip chain as one composite image."""

    def __init__(self, background=(0, 0, 0)):
        """
        Initialize the exporter.

        Args:
            background: RGB fill for the area no level covers
        """
        self.background = background

    def compose(self, chain: MipChain) -> Image:
        """
        Build the composite strip without writing it.

        Args:
            chain: Mip chain

        Returns:
            Image of size (level0.width, sum of level heights)
        """
        width = chain.base.width
        height = sum(level.height for level in chain)

        strip = Image.filled(width, height, self.background)
        y = 0
        for level in chain:
            strip.pixels[y:y + level.height, :level.width] = level.pixels
            y += level.height

        return strip

    def export(self, chain: MipChain, output_path: Union[str, Path]) -> Path:
        """
        Write the composite strip.

        Args:
            chain: Mip chain
            output_path: Output file path

        Returns:
            The path written
        """
        return PNGExporter().export(self.compose(chain), output_path)

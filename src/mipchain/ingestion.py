"""
Image Ingestion Module

This module handles:
- Loading image files of any Pillow-supported format as RGB8 textures
- Wrapping in-memory arrays (RGB or RGBA) as textures

Alpha is dropped: textures are always 3-channel RGB.
"""

from pathlib import Path
from typing import Optional, Tuple, Union
import numpy as np
from PIL import Image as PILImage

from .texture import Image


class ImageLoader:
    """
    Texture loader producing RGB8 Images.

    Any input mode (palette, grayscale, RGBA, ...) is converted to RGB.
    """

    def __init__(self):
        """Initialize the image loader."""
        self._image: Optional[Image] = None
        self._source_path: Optional[Path] = None

    def load(self, image_path: Union[str, Path]) -> "ImageLoader":
        """
        Load an image file.

        Args:
            image_path: Path to the image (PNG, JPEG, ...)

        Returns:
            self for method chaining
        """
        image_path = Path(image_path)
        if not image_path.exists():
            raise FileNotFoundError(f"Image not found: {image_path}")

        with PILImage.open(image_path) as img:
            if img.mode != "RGB":
                img = img.convert("RGB")
            pixels = np.array(img, dtype=np.uint8)

        self._image = Image.from_array(pixels)
        self._source_path = image_path
        return self

    def load_from_array(self, array: np.ndarray) -> "ImageLoader":
        """
        Load from a numpy array instead of a file.

        Args:
            array: Array of shape (H, W, 3) or (H, W, 4); alpha is ignored

        Returns:
            self for method chaining
        """
        array = np.asarray(array)
        if array.ndim != 3 or array.shape[2] not in (3, 4):
            raise ValueError("Color array must have shape (H, W, 3) or (H, W, 4)")

        self._image = Image.from_array(array[:, :, :3])
        self._source_path = None
        return self

    @property
    def image(self) -> Image:
        """Get the loaded texture."""
        if self._image is None:
            raise RuntimeError("No image loaded")
        return self._image

    @property
    def source_path(self) -> Optional[Path]:
        """Get the file the image came from, if any."""
        return self._source_path

    @property
    def size(self) -> Tuple[int, int]:
        """Get image size as (width, height)."""
        return self.image.size


def load_image(image_path: Union[str, Path]) -> Image:
    """Load an image file as an RGB8 Image."""
    return ImageLoader().load(image_path).image

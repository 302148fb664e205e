"""
Texture Data Structures

This module provides:
- Image: dense RGB8 image (sRGB encoded texels)
- MipChain: immutable sequence of progressively halved Images

Storage: pixels are a (height, width, 3) uint8 numpy array, row-major,
which matches the flat RGB buffer layout used by image loaders/writers.
"""

from dataclasses import dataclass, field
from typing import Iterator, Sequence, Tuple, Union
import numpy as np


def num_mip_levels(width: int, height: int) -> int:
    """
    Number of levels needed for the longer axis to reach 1 pixel.

    Equal to floor(log2(max(width, height))) + 1.
    """
    if width < 1 or height < 1:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    return max(width, height).bit_length()


def as_texels(values) -> np.ndarray:
    """
    Convert values to uint8 texels without wrapping.

    Non-uint8 input must hold whole numbers in [0, 255].
    """
    values = np.asarray(values)
    if values.dtype == np.uint8:
        return values

    as_float = values.astype(np.float64)
    if as_float.size and not (
        np.all(np.isfinite(as_float))
        and as_float.min() >= 0
        and as_float.max() <= 255
        and np.all(as_float == np.floor(as_float))
    ):
        raise ValueError(
            f"Texel values must be whole numbers in [0, 255], got dtype {values.dtype}"
        )
    return values.astype(np.uint8)


@dataclass
class Image:
    """
    RGB8 image with sRGB encoded texels.

    Attributes:
        width: Width in pixels (> 0)
        height: Height in pixels (> 0)
        pixels: uint8 array of shape (height, width, 3)
    """

    width: int
    height: int
    pixels: np.ndarray = field(repr=False)

    def __post_init__(self):
        """Validate dimensions against the pixel array."""
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Image dimensions must be positive, got {self.width}x{self.height}"
            )
        self.pixels = np.asarray(self.pixels)
        if self.pixels.shape != (self.height, self.width, 3):
            raise ValueError(
                f"Pixel array shape {self.pixels.shape} doesn't match "
                f"({self.height}, {self.width}, 3)"
            )
        self.pixels = as_texels(self.pixels)

    @classmethod
    def from_array(cls, pixels: np.ndarray) -> "Image":
        """
        Create an Image from a (H, W, 3) array.

        Args:
            pixels: Array of RGB values (0-255)

        Returns:
            New Image owning a copy of the data
        """
        pixels = np.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError("Pixel array must have shape (H, W, 3)")
        return cls(pixels.shape[1], pixels.shape[0], np.array(pixels, copy=True))

    @classmethod
    def from_buffer(
        cls,
        width: int,
        height: int,
        data: Union[bytes, bytearray, Sequence[int], np.ndarray]
    ) -> "Image":
        """
        Create an Image from a flat row-major RGB buffer.

        Args:
            width: Image width
            height: Image height
            data: width * height * 3 bytes, R G B per texel

        Returns:
            New Image
        """
        if isinstance(data, (bytes, bytearray)):
            flat = np.frombuffer(data, dtype=np.uint8)
        else:
            flat = as_texels(data).ravel()

        expected = width * height * 3
        if width < 1 or height < 1 or flat.size != expected:
            raise ValueError(
                f"Buffer of {flat.size} bytes doesn't describe a {width}x{height} RGB image"
            )
        return cls(width, height, flat.reshape(height, width, 3).copy())

    @classmethod
    def filled(cls, width: int, height: int, color: Sequence[int]) -> "Image":
        """Create a uniform single-color image."""
        pixels = np.empty((height, width, 3), dtype=np.uint8)
        pixels[:, :] = as_texels(color)
        return cls(width, height, pixels)

    def to_buffer(self) -> bytes:
        """Get the image as a flat row-major RGB byte string."""
        return np.ascontiguousarray(self.pixels).tobytes()

    def texel(self, x: int, y: int) -> np.ndarray:
        """Get the RGB texel at (x, y) without wraparound."""
        return self.pixels[y, x].copy()

    def freeze(self) -> "Image":
        """Make the pixel data read-only. Returns self."""
        self.pixels.flags.writeable = False
        return self

    def copy(self) -> "Image":
        """Get an independent, writable copy."""
        return Image(self.width, self.height, self.pixels.copy())

    @property
    def size(self) -> Tuple[int, int]:
        """Get image size as (width, height)."""
        return (self.width, self.height)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Image):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.pixels, other.pixels)


class MipChain:
    """
    Immutable mip pyramid.

    Level 0 is the full resolution image; each further level halves
    both axes (floored, minimum 1) until the last level is 1x1.
    """

    def __init__(self, levels: Sequence[Image]):
        """
        Initialize the chain.

        Args:
            levels: Images ordered from full resolution to 1x1; the chain
                keeps read-only copies, the caller's images stay writable
        """
        levels = tuple(levels)
        if not levels:
            raise ValueError("A mip chain needs at least one level")
        self._levels = tuple(level.copy().freeze() for level in levels)

    @property
    def levels(self) -> Tuple[Image, ...]:
        """Get all levels, base first."""
        return self._levels

    @property
    def base(self) -> Image:
        """Get the full resolution level."""
        return self._levels[0]

    @property
    def last_level(self) -> int:
        """Get the index of the smallest level."""
        return len(self._levels) - 1

    def __len__(self) -> int:
        return len(self._levels)

    def __getitem__(self, index: int) -> Image:
        return self._levels[index]

    def __iter__(self) -> Iterator[Image]:
        return iter(self._levels)

    def __repr__(self) -> str:
        sizes = ", ".join(f"{img.width}x{img.height}" for img in self._levels)
        return f"MipChain([{sizes}])"

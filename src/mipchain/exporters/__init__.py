"""
Export modules for textures and mip chains.

Supported outputs:
- Single texture (.png or any Pillow format)
- Mip strip: all levels stacked in one image
"""

from .png_exporter import PNGExporter, MipStripExporter

__all__ = ["PNGExporter", "MipStripExporter"]

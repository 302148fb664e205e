#!/usr/bin/env python3
"""
Mipchain Demo Script

This script demonstrates the full pipeline by:
1. Creating synthetic test textures (no external images needed)
2. Building their mip chains
3. Rendering each under a sweep of zoom/rotation transforms in every sample mode
4. Printing selected LODs and timings

Run with: python examples/demo.py
"""

import sys
from pathlib import Path
import numpy as np
import time

# Add src to path for development
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from mipchain import TextureRenderer, SampleType
from mipchain.mipmap import build_mip_chain
from mipchain.texture import Image
from mipchain.transform import compose, degrees_to_radians, rotation33, scale33, translation33


def create_checkerboard(size: int = 256, square: int = 16) -> np.ndarray:
    """
    Create a black/white checkerboard texture.

    Returns:
        (size, size, 3) uint8 array
    """
    cells = np.arange(size) // square
    mask = (cells[:, None] + cells[None, :]) % 2
    return np.stack([mask * 255] * 3, axis=-1).astype(np.uint8)


def create_gradient(size: int = 256) -> np.ndarray:
    """
    Create a red/green gradient texture.

    Returns:
        (size, size, 3) uint8 array
    """
    rgb = np.zeros((size, size, 3), dtype=np.uint8)
    ramp = (255 * np.arange(size) / (size - 1)).astype(np.uint8)
    rgb[..., 0] = ramp[None, :]
    rgb[..., 1] = ramp[:, None]
    rgb[..., 2] = 128
    return rgb


def create_rings(size: int = 256) -> np.ndarray:
    """
    Create concentric rings, a texture that aliases badly without mips.

    Returns:
        (size, size, 3) uint8 array
    """
    y, x = np.mgrid[0:size, 0:size]
    center = size / 2
    dist = np.sqrt((x - center) ** 2 + (y - center) ** 2)
    mask = (dist.astype(np.int32) // 3) % 2 == 0

    rgb = np.zeros((size, size, 3), dtype=np.uint8)
    rgb[mask] = [220, 180, 60]
    rgb[~mask] = [30, 60, 140]
    return rgb


# (name, transform) pairs rendered for every texture
TRANSFORMS = [
    ("identity", scale33(1.0)),
    ("zoom2", scale33(2.0)),
    ("zoom4", scale33(4.0)),
    ("zoom6", scale33(6.0)),
    ("rotate30_zoom3", compose(scale33(3.0), rotation33(degrees_to_radians(30.0)))),
    ("stretch", scale33(8.0, 1.5)),
    ("offset_zoom5", compose(scale33(5.0), translation33(0.3, 0.1))),
]


def run_demo():
    """Run the demonstration."""
    print("=" * 60)
    print("Mipchain - Demo")
    print("=" * 60)
    print()

    # Create output directory
    output_dir = Path(__file__).parent / "output"
    output_dir.mkdir(exist_ok=True)

    textures = [
        ("checkerboard", create_checkerboard()),
        ("gradient", create_gradient()),
        ("rings", create_rings()),
    ]

    total_start = time.time()

    for name, rgb in textures:
        print(f"\n--- Processing: {name} ---")
        print(f"Input size: {rgb.shape[1]}x{rgb.shape[0]} pixels")

        renderer = TextureRenderer()

        build_start = time.time()
        renderer.load_array(rgb)
        build_time = time.time() - build_start

        print(f"  Mip levels: {len(renderer.chain)} ({build_time*1000:.1f}ms)")
        renderer.export_mips(output_dir / f"{name}_mips.png")

        for transform_name, transform in TRANSFORMS:
            print(f"  {transform_name}: LOD {renderer.lod_for(transform):.3f}")

            for mode in SampleType:
                renderer.set_sample_type(mode)

                render_start = time.time()
                renderer.render(transform)
                render_time = time.time() - render_start

                path = output_dir / f"{name}_{transform_name}_{mode.value}.png"
                renderer.export_render(path)
                print(f"    {mode.value:<9} {render_time*1000:7.1f}ms -> {path.name}")

    total_time = time.time() - total_start

    print("\n" + "=" * 60)
    print(f"Demo complete! Total time: {total_time:.2f}s")
    print(f"Output files in: {output_dir}")
    print("=" * 60)

    return 0


def benchmark_mip_building():
    """Benchmark mip chain construction."""
    print("\n--- Mip Building Benchmark ---\n")

    for size in [64, 256, 1024, 2048]:
        image = Image.from_array(create_gradient(size))

        start = time.time()
        chain = build_mip_chain(image)
        elapsed = time.time() - start

        print(f"Texture size: {size}x{size}")
        print(f"  Levels: {len(chain)}, {elapsed*1000:.1f}ms")
        print()


if __name__ == "__main__":
    run_demo()

    # Uncomment to run benchmark
    # benchmark_mip_building()

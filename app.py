#!/usr/bin/env python3
"""
Mipchain Web Interface

A simple Gradio-based web UI for previewing mip chains and transformed
texture sampling.

Run with: python app.py
Then open http://localhost:7860 in your browser
"""

import sys
from pathlib import Path
import numpy as np

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

import gradio as gr
from mipchain import TextureRenderer
from mipchain.exporters import MipStripExporter
from mipchain.transform import compose, degrees_to_radians, rotation33, scale33, translation33


def process_image(
    image,
    sample_mode: str,
    scale: float,
    rotation: float,
    offset_u: float,
    offset_v: float,
    output_size: int,
    use_mips: bool
):
    """
    Render an uploaded texture under the chosen transform.

    Returns the rendered image, the mip strip and a stats text.
    """
    if image is None:
        return None, None, "Please upload an image first."

    if not isinstance(image, np.ndarray):
        return None, None, "Invalid image format."

    if image.ndim == 2:
        image = np.stack([image, image, image], axis=-1)

    renderer = TextureRenderer(sample_type=sample_mode.lower(), use_mips=use_mips)
    renderer.load_array(image.astype(np.uint8))

    transform = compose(
        scale33(scale),
        rotation33(degrees_to_radians(rotation)),
        translation33(offset_u, offset_v)
    )

    size = int(output_size)
    output = renderer.render(transform, output_size=(size, size))
    strip = MipStripExporter().compose(renderer.chain)

    info = renderer.preview()
    sizes = ", ".join(f"{w}x{h}" for w, h in info["mip_sizes"])

    stats_text = f"""## Render Complete!

| Metric | Value |
|--------|-------|
| Input Size | {info['image_size'][0]} x {info['image_size'][1]} pixels |
| Mip Levels | {info['mip_levels']} |
| Level Sizes | {sizes} |
| Output Size | {size} x {size} pixels |
| Selected LOD | {renderer.lod:.3f} |

**Settings:** {sample_mode}, Scale={scale}, Rotation={rotation} deg, Mips={'on' if use_mips else 'off'}
"""

    return output.pixels, strip.pixels, stats_text


def create_demo_image(style: str):
    """Create a demo texture for testing."""
    if not style:
        return None

    size = 256
    y, x = np.mgrid[0:size, 0:size]
    rgb = np.zeros((size, size, 3), dtype=np.uint8)

    if style == "Checkerboard":
        mask = ((x // 16 + y // 16) % 2).astype(bool)
        rgb[mask] = [255, 255, 255]

    elif style == "Gradient":
        rgb[..., 0] = (255 * x / (size - 1)).astype(np.uint8)
        rgb[..., 1] = (255 * y / (size - 1)).astype(np.uint8)
        rgb[..., 2] = 128

    elif style == "Rings":
        center = size / 2
        dist = np.sqrt((x - center) ** 2 + (y - center) ** 2)
        mask = (dist.astype(np.int32) // 4) % 2 == 0
        rgb[mask] = [220, 180, 60]
        rgb[~mask] = [30, 60, 140]

    return rgb


# Build the Gradio interface
with gr.Blocks(title="Mipchain") as app:

    gr.Markdown("""
    # Mipchain
    ### Mip Chains and Trilinear Texture Sampling

    Upload a texture or try a demo, pick a transform, and compare sample modes!
    """)

    with gr.Row():
        # Left column - Input
        with gr.Column(scale=1):
            gr.Markdown("### Input Texture")

            image_input = gr.Image(
                label="Upload Image",
                type="numpy",
                image_mode="RGB"
            )

            with gr.Row():
                demo_dropdown = gr.Dropdown(
                    choices=["Checkerboard", "Gradient", "Rings"],
                    label="Or try a demo"
                )
                demo_btn = gr.Button("Load Demo")

            gr.Markdown("### Settings")

            sample_mode = gr.Dropdown(
                choices=["Nearest", "Bilinear", "Trilinear"],
                value="Trilinear",
                label="Sample Mode"
            )

            scale = gr.Slider(
                minimum=0.25,
                maximum=32.0,
                value=4.0,
                step=0.25,
                label="UV Scale (>1 = minify)"
            )

            rotation = gr.Slider(
                minimum=-180,
                maximum=180,
                value=0,
                step=1,
                label="Rotation (degrees)"
            )

            with gr.Row():
                offset_u = gr.Number(value=0.0, label="Offset U")
                offset_v = gr.Number(value=0.0, label="Offset V")

            output_size = gr.Slider(
                minimum=32,
                maximum=1024,
                value=256,
                step=32,
                label="Output Size (pixels)"
            )

            use_mips = gr.Checkbox(value=True, label="Use Mips")

            render_btn = gr.Button("Render", variant="primary")

        # Middle column - Result
        with gr.Column(scale=2):
            gr.Markdown("### Rendered Output")

            render_output = gr.Image(label="Rendered", type="numpy")

            stats_output = gr.Markdown(
                value="Upload an image and click 'Render' to see results."
            )

        # Right column - Mips
        with gr.Column(scale=1):
            gr.Markdown("### Mip Chain")

            mips_output = gr.Image(label="All Levels", type="numpy")

            gr.Markdown("""
            ---
            **Tips:**
            - **Nearest** = sharp, aliases when minified
            - **Bilinear** = smooth, still aliases far away
            - **Trilinear** = blends two mip levels
            - Turn **Use Mips** off to see the aliasing mips remove
            """)

    # Wire up events
    demo_btn.click(
        fn=create_demo_image,
        inputs=[demo_dropdown],
        outputs=[image_input]
    )

    render_btn.click(
        fn=process_image,
        inputs=[
            image_input,
            sample_mode,
            scale,
            rotation,
            offset_u,
            offset_v,
            output_size,
            use_mips
        ],
        outputs=[render_output, mips_output, stats_output]
    )


if __name__ == "__main__":
    print("\n" + "="*60)
    print("Mipchain Web Interface")
    print("="*60)
    print("\nStarting server...")
    print("Open http://localhost:7860 in your browser\n")

    app.launch(
        server_name="0.0.0.0",
        server_port=7860,
        share=False
    )

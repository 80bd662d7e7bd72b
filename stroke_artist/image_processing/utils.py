"""Utility functions for image scaling and placement.

AIDEV-NOTE: The pipeline works in "pen units": one scaled image pixel maps to
one pen width on the canvas. Scaling to canvas units happens in the compiler.
"""

from pathlib import Path

from PIL import Image

from stroke_artist.models import REAL_PEN_DIAMETER, PixelBuffer


def load_image(file_path: "str | Path") -> Image.Image:
    """Load an image file as RGBA.

    Raises:
        ValueError: If file cannot be loaded or is invalid
    """
    try:
        image = Image.open(file_path)
        if image.mode != "RGBA":
            image = image.convert("RGBA")
        return image
    except Exception as e:
        raise ValueError(f"Failed to load image: {e}") from e


def effective_drawing_size(
    canvas_size: "tuple[float, float]",
    pen_diameter: float = REAL_PEN_DIAMETER,
) -> "tuple[float, float]":
    """Canvas size expressed in pen units."""
    width, height = canvas_size
    return width / pen_diameter, height / pen_diameter


def fit_image(image: Image.Image, size: "tuple[float, float]") -> PixelBuffer:
    """Scale an image to fit inside ``size`` keeping its aspect ratio.

    Args:
        image: Input PIL image
        size: (width, height) bounding box in pen units

    Returns:
        PixelBuffer of the resized image, at least 1x1
    """
    max_width, max_height = size
    orig_width, orig_height = image.size

    scale = min(max_width / orig_width, max_height / orig_height)

    new_width = max(1, int(orig_width * scale))
    new_height = max(1, int(orig_height * scale))

    rgba = image.convert("RGBA")
    if (new_width, new_height) != rgba.size:
        rgba = rgba.resize((new_width, new_height), Image.Resampling.LANCZOS)

    return PixelBuffer.from_image(rgba)


def centering_offset(
    drawing_size: "tuple[float, float]",
    image_width: int,
    image_height: int,
) -> "tuple[float, float]":
    """Offset (pen units) that centers the scaled image in the drawing area.

    AIDEV-NOTE: The extra half unit puts pen centers on pixel centers.
    """
    width, height = drawing_size
    return (
        (width - image_width) / 2 + 0.5,
        (height - image_height) / 2 + 0.5,
    )

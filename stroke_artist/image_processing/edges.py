"""Sobel edge detection on pixel luminance.

The threshold is a fixed cutoff, not adaptive. Output is sorted
strongest first; edge stroke synthesis only consumes the head of the list.
"""

import math

from stroke_artist.models import EDGE_THRESHOLD, Edge, PixelBuffer

from .palette import ColorPalette

# 3x3 Sobel kernels as (dx, dy, weight)
SOBEL_X = (
    (-1, -1, -1), (1, -1, 1),
    (-1, 0, -2), (1, 0, 2),
    (-1, 1, -1), (1, 1, 1),
)
SOBEL_Y = (
    (-1, -1, -1), (0, -1, -2), (1, -1, -1),
    (-1, 1, 1), (0, 1, 2), (1, 1, 1),
)


def get_pixel_intensity(buffer: PixelBuffer, x: int, y: int) -> float:
    """Mean of the RGB channels at (x, y), 0 outside the buffer."""
    if not buffer.contains(x, y):
        return 0.0
    i = buffer.index(x, y)
    data = buffer.data
    return (data[i] + data[i + 1] + data[i + 2]) / 3


def sobel_gradient(buffer: PixelBuffer, x: int, y: int) -> "tuple[float, float]":
    """Horizontal and vertical luminance gradient at (x, y)."""
    gx = sum(w * get_pixel_intensity(buffer, x + dx, y + dy) for dx, dy, w in SOBEL_X)
    gy = sum(w * get_pixel_intensity(buffer, x + dx, y + dy) for dx, dy, w in SOBEL_Y)
    return gx, gy


def detect_edges(
    buffer: PixelBuffer,
    palette: ColorPalette,
    threshold: float = EDGE_THRESHOLD,
) -> "list[Edge]":
    """Find interior pixels with a strong luminance gradient.

    Args:
        buffer: Scaled image pixels
        palette: Palette used to quantize each edge pixel's color
        threshold: Magnitude an edge must exceed

    Returns:
        Edges sorted by magnitude, strongest first. Equal magnitudes keep
        raster order. Images smaller than 3x3 have no interior and yield [].
    """
    edges = []

    for y in range(1, buffer.height - 1):
        for x in range(1, buffer.width - 1):
            gx, gy = sobel_gradient(buffer, x, y)
            magnitude = math.sqrt(gx * gx + gy * gy)

            if magnitude > threshold:
                edges.append(
                    Edge(
                        x=x,
                        y=y,
                        color=palette.closest(buffer.rgb_at(x, y)),
                        magnitude=magnitude,
                        direction=math.atan2(gy, gx),
                    )
                )

    # list.sort is stable
    edges.sort(key=lambda edge: edge.magnitude, reverse=True)
    return edges

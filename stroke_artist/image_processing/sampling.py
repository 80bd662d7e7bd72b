"""Complexity-adaptive color sampling.

AIDEV-NOTE: Busy images are sampled more densely. Complexity is the mean
RGB difference between each coarse grid point and the pixel 4px diagonally
away from it; the thresholds below pick a 2, 3 or 4 px sampling step.
"""

from stroke_artist.models import COMPLEXITY_GRID_STEP, Color, PixelBuffer, Sample

from .palette import ColorPalette

# (minimum variation, sampling step), checked in order
SAMPLE_STEPS = (
    (50.0, 2),
    (25.0, 3),
)
COARSEST_SAMPLE_STEP = 4


def estimate_complexity(buffer: PixelBuffer, grid_step: int = COMPLEXITY_GRID_STEP) -> float:
    """Mean per-channel variation between diagonal grid neighbours.

    Returns 0.0 when the buffer is too small to compare any pair.
    """
    data = buffer.data
    total_variation = 0
    pair_count = 0

    for y in range(0, buffer.height, grid_step):
        for x in range(0, buffer.width, grid_step):
            if x + grid_step < buffer.width and y + grid_step < buffer.height:
                i1 = buffer.index(x, y)
                i2 = buffer.index(x + grid_step, y + grid_step)
                total_variation += (
                    abs(data[i1] - data[i2])
                    + abs(data[i1 + 1] - data[i2 + 1])
                    + abs(data[i1 + 2] - data[i2 + 2])
                )
                pair_count += 1

    if pair_count == 0:
        return 0.0
    return total_variation / pair_count


def select_sample_step(variation: float) -> int:
    """Pick the sampling step for a complexity value."""
    for minimum, step in SAMPLE_STEPS:
        if variation > minimum:
            return step
    return COARSEST_SAMPLE_STEP


def adaptive_sample(
    buffer: PixelBuffer,
    palette: ColorPalette,
    fill_color: Color,
    step: "int | None" = None,
) -> "list[Sample]":
    """Sample quantized colors on a regular grid.

    Args:
        buffer: Scaled image pixels
        palette: Palette used for quantization
        fill_color: Background color; samples of this color are dropped
        step: Sampling step, derived from estimate_complexity() if None

    Returns:
        Samples in raster (row-major) order
    """
    if step is None:
        step = select_sample_step(estimate_complexity(buffer))

    samples = []
    for y in range(0, buffer.height, step):
        for x in range(0, buffer.width, step):
            color = palette.closest(buffer.rgb_at(x, y))
            if color != fill_color:
                samples.append(Sample(x, y, color))

    return samples

"""Main image processor orchestrating the complete pipeline.

AIDEV-NOTE: image -> fit to canvas -> background color -> edges + samples ->
strokes -> commands. Everything is deterministic for a given image, palette
and pen diameter list.
"""

from pathlib import Path
from typing import Callable

from PIL import Image

from stroke_artist.models import Device, DrawingResult, PixelBuffer
from stroke_artist.strokes_to_commands import CommandCompiler, summarize_commands

from .edges import detect_edges
from .palette import ColorPalette
from .sampling import adaptive_sample, estimate_complexity, select_sample_step
from .strokes import build_edge_strokes, build_natural_strokes
from .utils import centering_offset, effective_drawing_size, fit_image, load_image


class Artist:
    """Turns images into draw commands for a given toolbar and canvas."""

    def __init__(
        self,
        device: Device,
        canvas_size: "tuple[float, float]",
        log: Callable[[str], None] = print,
    ):
        self.palette = ColorPalette(device.get_colors())
        self.compiler = CommandCompiler(device.get_pen_diameters())
        self.drawing_size = effective_drawing_size(canvas_size)
        self.log = log

    def load_image(self, file_path: "str | Path") -> Image.Image:
        """Load an image file as RGBA (see utils.load_image)."""
        return load_image(file_path)

    def draw(self, image: Image.Image) -> DrawingResult:
        """Generate the draw commands for an image.

        Args:
            image: Any PIL image

        Returns:
            DrawingResult with the command list and pipeline statistics
        """
        orig_width, orig_height = image.size
        buffer = fit_image(image, self.drawing_size)
        self.log(f"Scaled image to {buffer.width}x{buffer.height} pen units.")

        result = self.draw_buffer(buffer)
        result.original_width = orig_width
        result.original_height = orig_height
        return result

    def draw_file(self, file_path: "str | Path") -> DrawingResult:
        return self.draw(self.load_image(file_path))

    def draw_buffer(self, buffer: PixelBuffer) -> DrawingResult:
        """Run the pipeline on an already scaled pixel buffer."""
        self.log("Generating universal drawing commands...")

        fill_color = self.palette.most_common_color(buffer)

        self.log("Detecting edges...")
        edges = detect_edges(buffer, self.palette)
        edge_strokes = build_edge_strokes(edges)

        self.log("Creating adaptive sampling...")
        complexity = estimate_complexity(buffer)
        step = select_sample_step(complexity)
        self.log(f"Image complexity: {complexity:.1f}, using {step}px sampling")
        samples = adaptive_sample(buffer, self.palette, fill_color, step)

        self.log("Creating natural strokes...")
        natural_strokes = build_natural_strokes(samples)

        all_strokes = edge_strokes + natural_strokes
        offset = centering_offset(self.drawing_size, buffer.width, buffer.height)
        commands = self.compiler.compile(all_strokes, offset, fill_color)

        self.log(
            f"{len(commands)} universal commands generated "
            f"({len(all_strokes)} strokes, {len(edges)} edges detected)."
        )

        return DrawingResult(
            commands=commands,
            fill_color=fill_color,
            edge_count=len(edges),
            stroke_count=len(all_strokes),
            sample_count=len(samples),
            complexity=complexity,
            sample_step=step,
            offset=offset,
            scaled_width=buffer.width,
            scaled_height=buffer.height,
            original_width=buffer.width,
            original_height=buffer.height,
            command_summary=summarize_commands(commands),
        )

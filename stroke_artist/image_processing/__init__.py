"""Image processing pipeline for image-to-strokes conversion.

AIDEV-NOTE: Organized into modular components:
- processor: Artist orchestrator
- palette: Nearest-color matching and background color
- edges: Sobel edge detection
- sampling: Complexity-adaptive sampling
- strokes: Natural and edge stroke synthesis
- utils: Loading, scaling and centering
"""

from .palette import ColorPalette
from .processor import Artist

__all__ = ["Artist", "ColorPalette"]

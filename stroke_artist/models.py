"""Data models and constants for the stroke artist."""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import NamedTuple, Protocol, Sequence, Union

import numpy as np

# AIDEV-NOTE: Drawing constants shared by the pipeline and the compiler
NOMINAL_PEN_DIAMETER = 4  # pen used for edge strokes
REAL_PEN_DIAMETER = 4  # image pixel -> canvas units scale
EDGE_THRESHOLD = 30.0  # Sobel magnitude cutoff
MAX_EDGE_STROKES = 300

COMPLEXITY_GRID_STEP = 4  # px between complexity probes
MAX_STROKE_LENGTH = 15  # points per natural stroke
CONNECTION_DISTANCE = 4.0  # px between chained samples

PROGRESS_EVERY = 50  # commands between progress reports
PROGRESS_INTERVAL = 2.0  # seconds between progress reports

# Configuration file path
CONFIG_FILE = Path.home() / ".stroke_artist_config.json"

DEFAULT_CANVAS_WIDTH = 800
DEFAULT_CANVAS_HEIGHT = 600

# AIDEV-NOTE: Mirrors the 16-color swatch row of a classic paint toolbar
DEFAULT_PALETTE = [
    (0, 0, 0),
    (255, 255, 255),
    (127, 127, 127),
    (195, 195, 195),
    (136, 0, 21),
    (185, 122, 87),
    (237, 28, 36),
    (255, 174, 201),
    (255, 127, 39),
    (255, 201, 14),
    (255, 242, 0),
    (239, 228, 176),
    (34, 177, 76),
    (181, 230, 29),
    (0, 162, 232),
    (63, 72, 204),
]
DEFAULT_PEN_DIAMETERS = [2, 4, 8, 16]


class Color(NamedTuple):
    """RGB color (0-255 per channel)."""

    r: int
    g: int
    b: int


class Tool(Enum):
    """Drawing tools exposed by the toolbar device."""

    FILL = "fill"
    PEN = "pen"


class ExecutorState(Enum):
    """Lifecycle of a single executor run."""

    READY = "Ready"
    RUNNING = "Running"
    DRAINED = "Drained"
    STOPPED = "Stopped"


@dataclass
class ArtistConfig:
    """Canvas and toolbar settings."""

    # Canvas size in surface units
    canvas_width: int = DEFAULT_CANVAS_WIDTH
    canvas_height: int = DEFAULT_CANVAS_HEIGHT

    # Toolbar swatches and pen sizes
    palette: "list[tuple[int, int, int]]" = field(
        default_factory=lambda: list(DEFAULT_PALETTE)
    )
    pen_diameters: "list[float]" = field(
        default_factory=lambda: list(DEFAULT_PEN_DIAMETERS)
    )


@dataclass(frozen=True)
class PixelBuffer:
    """RGBA pixels of a scaled image.

    AIDEV-NOTE: data is row-major RGBA bytes, 4 bytes per pixel. Alpha is
    carried along but never read by the pipeline.
    """

    width: int
    height: int
    data: bytes

    def __post_init__(self):
        expected = self.width * self.height * 4
        if self.width < 0 or self.height < 0 or len(self.data) != expected:
            raise ValueError(
                f"Pixel data length {len(self.data)} does not match "
                f"{self.width}x{self.height} RGBA ({expected} bytes)"
            )

    @classmethod
    def from_image(cls, image) -> "PixelBuffer":
        """Build a buffer from a PIL image (any mode)."""
        rgba = image.convert("RGBA")
        width, height = rgba.size
        return cls(width, height, rgba.tobytes())

    def index(self, x: int, y: int) -> int:
        return (y * self.width + x) * 4

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def rgb_at(self, x: int, y: int) -> Color:
        i = self.index(x, y)
        data = self.data
        return Color(data[i], data[i + 1], data[i + 2])

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixel data."""
        return np.frombuffer(self.data, dtype=np.uint8).reshape(
            self.height, self.width, 4
        )


@dataclass(frozen=True)
class Edge:
    """Pixel whose luminance gradient exceeds the edge threshold."""

    x: int
    y: int
    color: Color
    magnitude: float
    direction: float  # radians, atan2(gy, gx)


@dataclass(frozen=True)
class Sample:
    """Palette-quantized pixel picked by the adaptive sampler."""

    x: int
    y: int
    color: Color


@dataclass(frozen=True)
class Stroke:
    """A single-color pen stroke in image pixel coordinates."""

    points: "tuple[tuple[float, float], ...]"
    color: Color
    is_edge: bool = False

    def __post_init__(self):
        if not self.points:
            raise ValueError("Stroke needs at least one point")

    @property
    def length(self) -> int:
        """Number of points in the stroke."""
        return len(self.points)


# --- Draw commands ---


@dataclass(frozen=True)
class FillCanvas:
    """Select the fill tool, set the color and flood the canvas."""

    color: Color


@dataclass(frozen=True)
class SetTool:
    tool: Tool


@dataclass(frozen=True)
class SetColor:
    color: Color


@dataclass(frozen=True)
class SetDiameter:
    diameter: float


@dataclass(frozen=True)
class DrawPath:
    """Draw a path through points given in canvas units."""

    points: "tuple[tuple[float, float], ...]"


DrawCommand = Union[FillCanvas, SetTool, SetColor, SetDiameter, DrawPath]


@dataclass
class ExecutionState:
    """Bookkeeping for one executor run."""

    total: int = 0
    remaining: int = 0
    start_time: float = 0.0
    last_progress_time: float = 0.0

    @property
    def completed(self) -> int:
        return self.total - self.remaining


@dataclass
class DrawingResult:
    """Result of the image-to-commands pipeline."""

    commands: "list[DrawCommand]"
    fill_color: Color

    # Statistics
    edge_count: int = 0
    stroke_count: int = 0
    sample_count: int = 0
    complexity: float = 0.0
    sample_step: int = 4

    # Placement of the scaled image in pen units
    offset: "tuple[float, float]" = (0.0, 0.0)
    scaled_width: int = 0
    scaled_height: int = 0

    # Original image dimensions (pixels)
    original_width: int = 0
    original_height: int = 0

    command_summary: "dict[str, int]" = field(default_factory=dict)


# --- External collaborators ---


class Surface(Protocol):
    """Drawing surface the executor renders onto."""

    @property
    def size(self) -> "tuple[int, int]":
        ...

    def draw(self, points: "Sequence[tuple[float, float]]") -> None:
        ...


class Device(Protocol):
    """Toolbar holding the current tool, color and pen diameter."""

    def set_fill_tool(self) -> None:
        ...

    def set_pen_tool(self) -> None:
        ...

    def set_color(self, color: Color) -> None:
        ...

    def set_pen_diameter(self, diameter: float) -> None:
        ...

    def get_colors(self) -> "list[Color]":
        ...

    def get_pen_diameters(self) -> "list[float]":
        ...

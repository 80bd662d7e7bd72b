"""UI components for the stroke artist.

The toolbar and canvas surface implement the device and surface the command
executor drives; the window wires them to the pipeline.
"""

from stroke_artist.ui.canvas import CanvasSurface, CanvasWidget
from stroke_artist.ui.console_panel import ConsolePanel
from stroke_artist.ui.main_window import ArtistWindow
from stroke_artist.ui.toolbar import Toolbar

__all__ = [
    "ArtistWindow",
    "CanvasSurface",
    "CanvasWidget",
    "ConsolePanel",
    "Toolbar",
]

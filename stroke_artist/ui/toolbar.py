"""Toolbar device: current tool, color and pen diameter."""

from dataclasses import dataclass
from typing import Iterable

from PyQt6.QtCore import QObject, pyqtSignal

from stroke_artist.models import Color, Tool


@dataclass
class ToolState:
    tool: Tool = Tool.PEN
    color: Color = Color(0, 0, 0)
    pen_diameter: float = 4


class Toolbar(QObject):
    """Drawing device the executor configures before each stroke.

    AIDEV-NOTE: Setters only store absolute state, so replaying a command
    leaves the toolbar unchanged.
    """

    state_changed = pyqtSignal()

    def __init__(
        self,
        colors: "Iterable[tuple[int, int, int]]",
        pen_diameters: "Iterable[float]",
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._colors = [Color(*color) for color in colors]
        self._pen_diameters = list(pen_diameters)
        self.state = ToolState(
            pen_diameter=min(self._pen_diameters) if self._pen_diameters else 4
        )

    # --- Device interface ---

    def set_fill_tool(self):
        self.state.tool = Tool.FILL
        self.state_changed.emit()

    def set_pen_tool(self):
        self.state.tool = Tool.PEN
        self.state_changed.emit()

    def set_color(self, color: Color):
        self.state.color = Color(*color)
        self.state_changed.emit()

    def set_pen_diameter(self, diameter: float):
        self.state.pen_diameter = diameter
        self.state_changed.emit()

    def get_colors(self) -> "list[Color]":
        return list(self._colors)

    def get_pen_diameters(self) -> "list[float]":
        return list(self._pen_diameters)

    # --- Convenience ---

    @property
    def tool(self) -> Tool:
        return self.state.tool

    @property
    def color(self) -> Color:
        return self.state.color

    @property
    def pen_diameter(self) -> float:
        return self.state.pen_diameter

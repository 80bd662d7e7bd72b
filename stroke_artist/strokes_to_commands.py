"""Compile strokes into an ordered list of draw commands.

AIDEV-NOTE: The command list always starts with a single FillCanvas. Strokes
are then grouped by color and pen diameter so the toolbar is touched as
rarely as possible. Device state is tracked in a per-compile cache; the
executor never sees it.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Optional

from stroke_artist.models import (
    NOMINAL_PEN_DIAMETER,
    REAL_PEN_DIAMETER,
    Color,
    DrawCommand,
    DrawPath,
    FillCanvas,
    SetColor,
    SetDiameter,
    SetTool,
    Stroke,
    Tool,
)

# Non-edge strokes longer than these get larger pens
LARGE_STROKE_LENGTH = 10
MEDIUM_STROKE_LENGTH = 5


@dataclass
class DeviceStateCache:
    """Last device state the compiled commands will have set."""

    tool: Optional[Tool] = None
    color: Optional[Color] = None
    diameter: Optional[float] = None


def order_strokes(strokes: "Iterable[Stroke]") -> "list[Stroke]":
    """Edge strokes first, then longer strokes before shorter ones (stable)."""
    return sorted(strokes, key=lambda stroke: (not stroke.is_edge, -stroke.length))


def select_pen_diameter(
    stroke: Stroke,
    diameters: "list[float]",
    nominal_diameter: float = NOMINAL_PEN_DIAMETER,
) -> float:
    """Pick the pen diameter for a stroke.

    Args:
        stroke: Stroke to draw
        diameters: Available diameters sorted ascending (non-empty)
        nominal_diameter: Diameter used for every edge stroke

    Returns:
        Pen diameter in toolbar units
    """
    if stroke.is_edge:
        return nominal_diameter

    last = len(diameters) - 1
    if stroke.length > LARGE_STROKE_LENGTH:
        return diameters[min(3, last)]
    if stroke.length > MEDIUM_STROKE_LENGTH:
        return diameters[min(2, last)]
    return diameters[min(1, last)]


def summarize_commands(commands: "Iterable[DrawCommand]") -> "dict[str, int]":
    """Count commands by kind, e.g. {"DrawPath": 120, "SetColor": 5}."""
    return dict(Counter(type(command).__name__ for command in commands))


class CommandCompiler:
    """Converts strokes to toolbar and surface commands."""

    def __init__(
        self,
        pen_diameters: "Iterable[float]",
        nominal_pen_diameter: float = NOMINAL_PEN_DIAMETER,
        pen_scale: float = REAL_PEN_DIAMETER,
    ):
        self.pen_diameters = sorted(pen_diameters)
        if not self.pen_diameters:
            raise ValueError("At least one pen diameter is required")

        self.nominal_pen_diameter = nominal_pen_diameter
        self.pen_scale = pen_scale

    def compile(
        self,
        strokes: "Iterable[Stroke]",
        offset: "tuple[float, float]",
        fill_color: Color,
    ) -> "list[DrawCommand]":
        """Build the full command sequence for one drawing.

        Args:
            strokes: Edge and natural strokes in any order
            offset: Centering offset in pen units, added before scaling
            fill_color: Background color flooded first

        Returns:
            Commands in execution order, starting with FillCanvas
        """
        state = DeviceStateCache(tool=Tool.FILL, color=fill_color)
        commands: "list[DrawCommand]" = [FillCanvas(fill_color)]

        for color, group in self._group_by_color(order_strokes(strokes)):
            self._emit_pen_color(commands, state, color)

            for diameter, bucket in self._group_by_diameter(group):
                self._emit_diameter(commands, state, diameter)
                for stroke in bucket:
                    commands.append(self.stroke_to_command(stroke, offset))

        return commands

    def stroke_to_command(
        self, stroke: Stroke, offset: "tuple[float, float]"
    ) -> DrawPath:
        """Transform a stroke to canvas units.

        AIDEV-NOTE: The surface needs at least two points to leave a mark,
        so one-point strokes get a second point one unit to the right.
        """
        offset_x, offset_y = offset
        scale = self.pen_scale
        coords = [((x + offset_x) * scale, (y + offset_y) * scale) for x, y in stroke.points]

        if len(coords) == 1:
            x, y = coords[0]
            coords.append((x + 1, y))

        return DrawPath(tuple(coords))

    # --- Grouping ---

    def _group_by_color(
        self, strokes: "list[Stroke]"
    ) -> "list[tuple[Color, list[Stroke]]]":
        groups: "dict[Color, list[Stroke]]" = {}
        for stroke in strokes:
            groups.setdefault(stroke.color, []).append(stroke)
        return list(groups.items())

    def _group_by_diameter(
        self, strokes: "list[Stroke]"
    ) -> "list[tuple[float, list[Stroke]]]":
        buckets: "dict[float, list[Stroke]]" = {}
        for stroke in strokes:
            diameter = select_pen_diameter(
                stroke, self.pen_diameters, self.nominal_pen_diameter
            )
            buckets.setdefault(diameter, []).append(stroke)
        return sorted(buckets.items(), key=lambda item: item[0])

    # --- Device state ---

    def _emit_pen_color(
        self,
        commands: "list[DrawCommand]",
        state: DeviceStateCache,
        color: Color,
    ):
        if state.tool is not Tool.PEN:
            commands.append(SetTool(Tool.PEN))
            state.tool = Tool.PEN

        if state.color != color:
            commands.append(SetColor(color))
            state.color = color

    def _emit_diameter(
        self,
        commands: "list[DrawCommand]",
        state: DeviceStateCache,
        diameter: float,
    ):
        if state.diameter != diameter:
            commands.append(SetDiameter(diameter))
            state.diameter = diameter

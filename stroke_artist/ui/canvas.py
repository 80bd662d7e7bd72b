"""Canvas surface the executor draws onto, and the widget that shows it."""

from typing import Sequence

from PyQt6 import QtWidgets
from PyQt6.QtCore import QObject, QPointF, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QImage, QPainter, QPainterPath, QPen

from stroke_artist.models import Color, Tool
from stroke_artist.ui.styles import COLORS
from stroke_artist.ui.toolbar import Toolbar


class CanvasSurface(QObject):
    """Raster surface rendering paths with the toolbar's current settings.

    AIDEV-NOTE: Drawing happens on an offscreen QImage at canvas resolution.
    Coordinates passed to draw() are canvas pixels.
    """

    changed = pyqtSignal()

    def __init__(self, toolbar: Toolbar, width: int, height: int, parent=None):
        super().__init__(parent)
        self.toolbar = toolbar
        self.image = QImage(width, height, QImage.Format.Format_RGB32)
        self.image.fill(COLORS.CANVAS_BACKGROUND)

    @property
    def size(self) -> "tuple[int, int]":
        return self.image.width(), self.image.height()

    def draw(self, points: "Sequence[tuple[float, float]]"):
        """Render a path through points at the toolbar's tool/color/width."""
        if not points:
            return

        r, g, b = self.toolbar.color
        color = QColor(r, g, b)

        if self.toolbar.tool is Tool.FILL:
            # Bucket fill on the blank background covers the whole canvas
            self.image.fill(color)
        else:
            self._stroke_path(points, color, self.toolbar.pen_diameter)

        self.changed.emit()

    def _stroke_path(
        self,
        points: "Sequence[tuple[float, float]]",
        color: QColor,
        diameter: float,
    ):
        path = QPainterPath(QPointF(*points[0]))
        for x, y in points[1:]:
            path.lineTo(QPointF(x, y))

        pen = QPen(color, float(diameter))
        pen.setCapStyle(Qt.PenCapStyle.RoundCap)
        pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)

        painter = QPainter(self.image)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPath(path)
        painter.end()

    def pixel_color(self, x: int, y: int) -> Color:
        """Color of a canvas pixel."""
        color = self.image.pixelColor(x, y)
        return Color(color.red(), color.green(), color.blue())

    def clear(self):
        self.image.fill(COLORS.CANVAS_BACKGROUND)
        self.changed.emit()


class CanvasWidget(QtWidgets.QWidget):
    """Shows a CanvasSurface scaled to the widget, keeping aspect ratio."""

    def __init__(self, surface: CanvasSurface, parent=None):
        super().__init__(parent)
        self.surface = surface
        self.surface.changed.connect(self.update)
        self.setMinimumSize(400, 300)

    def paintEvent(self, event):
        """Render the canvas image centered in the widget."""
        image = self.surface.image
        painter = QPainter(self)
        painter.fillRect(self.rect(), COLORS.WINDOW_BACKGROUND)

        scale = min(self.width() / image.width(), self.height() / image.height())
        target_width = image.width() * scale
        target_height = image.height() * scale
        target = QRectF(
            (self.width() - target_width) / 2,
            (self.height() - target_height) / 2,
            target_width,
            target_height,
        )

        painter.drawImage(target, image)
        painter.setPen(QPen(COLORS.CANVAS_BORDER, 1))
        painter.drawRect(target)
        painter.end()

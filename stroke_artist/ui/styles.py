"""Centralized styling constants for the stroke artist UI."""

from PyQt6.QtGui import QColor, QFont


class ThemeColors:
    """Application theme colors."""

    CANVAS_BACKGROUND = QColor(255, 255, 255)
    CANVAS_BORDER = QColor(150, 150, 150)
    WINDOW_BACKGROUND = QColor(20, 20, 20)


class Fonts:
    """Standard application fonts."""

    CONSOLE = QFont("Courier", 9)


class Sizes:
    """Standard widget sizes and constraints."""

    CONSOLE_MIN_HEIGHT = 100


COLORS = ThemeColors
FONTS = Fonts
SIZES = Sizes

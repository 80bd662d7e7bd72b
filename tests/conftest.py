"""Shared fixtures: recording surface/device fakes and image builders."""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import numpy as np
import pytest
from PIL import Image

from stroke_artist.models import Color, PixelBuffer

BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
BLUE = Color(0, 0, 255)


class FakeSurface:
    """Records every draw call."""

    def __init__(self, calls=None, width=800, height=600, on_draw=None):
        self.calls = calls if calls is not None else []
        self.draws = []
        self._size = (width, height)
        self.on_draw = on_draw

    @property
    def size(self):
        return self._size

    def draw(self, points):
        self.draws.append(list(points))
        self.calls.append(("draw", tuple(points)))
        if self.on_draw:
            self.on_draw()


class FakeDevice:
    """Records toolbar calls and serves a fixed palette and diameters."""

    def __init__(self, colors=(BLACK, WHITE, RED, BLUE), diameters=(1, 2, 4, 8), calls=None):
        self.colors = [Color(*c) for c in colors]
        self.diameters = list(diameters)
        self.calls = calls if calls is not None else []

    def set_fill_tool(self):
        self.calls.append(("fill_tool",))

    def set_pen_tool(self):
        self.calls.append(("pen_tool",))

    def set_color(self, color):
        self.calls.append(("color", color))

    def set_pen_diameter(self, diameter):
        self.calls.append(("diameter", diameter))

    def get_colors(self):
        return list(self.colors)

    def get_pen_diameters(self):
        return list(self.diameters)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


def make_image(pixels: np.ndarray) -> Image.Image:
    """RGB image from an (height, width, 3) array."""
    return Image.fromarray(np.ascontiguousarray(pixels, dtype=np.uint8))


def make_buffer(pixels: np.ndarray) -> PixelBuffer:
    """PixelBuffer from an (height, width, 3) array."""
    return PixelBuffer.from_image(make_image(pixels))


def solid(width, height, color) -> np.ndarray:
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


@pytest.fixture
def calls():
    return []


@pytest.fixture
def surface(calls):
    return FakeSurface(calls)


@pytest.fixture
def device(calls):
    return FakeDevice(calls=calls)

"""Nearest-color matching against the toolbar palette.

AIDEV-NOTE: Every quantized color in the pipeline goes through ColorPalette so
strokes can be grouped by exact Color equality. Distance is squared Euclidean
in RGB space; ties go to the earliest palette entry.
"""

from typing import Iterable

import numpy as np

from stroke_artist.models import Color, PixelBuffer

# Upper bound on memoized lookups; a full cache is cleared and refilled
CLOSEST_CACHE_SIZE = 4096


class ColorPalette:
    """Fixed, ordered set of drawable colors."""

    def __init__(
        self,
        colors: "Iterable[tuple[int, int, int]]",
        cache_size: int = CLOSEST_CACHE_SIZE,
    ):
        self.colors = [Color(*(int(c) for c in color)) for color in colors]
        if not self.colors:
            raise ValueError("Color palette must contain at least one color")

        self._array = np.array(self.colors, dtype=np.int64)
        self.cache_size = cache_size
        self._cache: "dict[Color, Color]" = {}

    def __len__(self) -> int:
        return len(self.colors)

    def closest(self, color: "tuple[int, int, int]") -> Color:
        """Return the palette color nearest to ``color``."""
        key = Color(*color)
        cached = self._cache.get(key)
        if cached is not None:
            return cached

        best = self.colors[0]
        best_distance = None
        for candidate in self.colors:
            distance = (
                (candidate.r - key.r) ** 2
                + (candidate.g - key.g) ** 2
                + (candidate.b - key.b) ** 2
            )
            # strict comparison keeps the first minimal entry
            if best_distance is None or distance < best_distance:
                best = candidate
                best_distance = distance

        if len(self._cache) >= self.cache_size:
            self._cache.clear()
        self._cache[key] = best
        return best

    def closest_indices(self, rgb: np.ndarray) -> np.ndarray:
        """Vectorized nearest-color lookup.

        Args:
            rgb: Array of shape (N, 3) with channel values 0-255

        Returns:
            Array of N palette indices
        """
        pixels = np.asarray(rgb, dtype=np.int64).reshape(-1, 1, 3)
        distances = ((pixels - self._array[np.newaxis, :, :]) ** 2).sum(axis=2)
        # argmin returns the first occurrence, matching closest()
        return distances.argmin(axis=1)

    def most_common_color(self, buffer: PixelBuffer) -> Color:
        """Most frequent palette color after quantizing every pixel.

        AIDEV-NOTE: On equal counts the color whose first pixel appears later
        in raster order wins. Used as the background fill color.
        """
        if buffer.width == 0 or buffer.height == 0:
            return self.colors[0]

        rgb = buffer.as_array()[:, :, :3].reshape(-1, 3)
        indices = self.closest_indices(rgb)
        unique, first_seen, counts = np.unique(
            indices, return_index=True, return_counts=True
        )

        best_index = None
        best_count = -1
        for order in np.argsort(first_seen, kind="stable"):
            if counts[order] >= best_count:
                best_count = counts[order]
                best_index = int(unique[order])

        return self.colors[best_index]

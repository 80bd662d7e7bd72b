"""Stroke Artist: turn raster images into pen strokes for a paint canvas."""

__version__ = "0.1.0"

"""Stroke synthesis from samples and edges.

Natural strokes come from greedy nearest-neighbor chaining of
same-colored samples. O(n^2), not globally optimal.
Edge strokes are short 3-point ticks along the local gradient direction.
"""

import math

from stroke_artist.models import (
    CONNECTION_DISTANCE,
    MAX_EDGE_STROKES,
    MAX_STROKE_LENGTH,
    Edge,
    Sample,
    Stroke,
)

# Distances along the gradient for the 2nd and 3rd edge stroke points
EDGE_STROKE_OFFSETS = (2.0, 3.0)


def _nearest_unused(
    samples: "list[Sample]",
    used: "list[bool]",
    tail: Sample,
    max_distance: float,
) -> int:
    """Index of the closest unused sample sharing the tail's color, or -1."""
    best_index = -1
    best_distance = math.inf

    for j, sample in enumerate(samples):
        if used[j] or sample.color != tail.color:
            continue

        dx = sample.x - tail.x
        dy = sample.y - tail.y
        distance = math.sqrt(dx * dx + dy * dy)

        if distance <= max_distance and distance < best_distance:
            best_distance = distance
            best_index = j

    return best_index


def build_natural_strokes(
    samples: "list[Sample]",
    max_length: int = MAX_STROKE_LENGTH,
    max_distance: float = CONNECTION_DISTANCE,
) -> "list[Stroke]":
    """Chain samples into short single-color strokes.

    Every sample ends up in exactly one stroke. Lone samples become
    one-point strokes.

    Args:
        samples: Quantized samples (not modified)
        max_length: Maximum points per stroke
        max_distance: Maximum gap between consecutive points in pixels

    Returns:
        Strokes in seed order (top-to-bottom, left-to-right)
    """
    ordered = sorted(samples, key=lambda s: (s.y, s.x))
    used = [False] * len(ordered)
    strokes = []

    for i, seed in enumerate(ordered):
        if used[i]:
            continue

        used[i] = True
        chain = [seed]
        tail = seed

        while len(chain) < max_length:
            j = _nearest_unused(ordered, used, tail, max_distance)
            if j < 0:
                break
            used[j] = True
            tail = ordered[j]
            chain.append(tail)

        strokes.append(
            Stroke(
                points=tuple((float(s.x), float(s.y)) for s in chain),
                color=seed.color,
            )
        )

    return strokes


def build_edge_strokes(
    edges: "list[Edge]",
    max_edges: int = MAX_EDGE_STROKES,
) -> "list[Stroke]":
    """Turn the strongest edges into short gradient-aligned strokes.

    Args:
        edges: Edges sorted strongest first (see detect_edges)
        max_edges: Number of edges to consume from the head of the list

    Returns:
        One 3-point edge stroke per consumed edge
    """
    strokes = []

    for edge in edges[:max_edges]:
        direction_x = math.cos(edge.direction)
        direction_y = math.sin(edge.direction)

        points = [(float(edge.x), float(edge.y))]
        points.extend(
            (edge.x + direction_x * distance, edge.y + direction_y * distance)
            for distance in EDGE_STROKE_OFFSETS
        )

        strokes.append(Stroke(points=tuple(points), color=edge.color, is_edge=True))

    return strokes

# geometry.py - poolfoil ver1.0
# Perimeter/area formulas per pool shape and labelled wall segments.

import math
from typing import List, Sequence, Tuple

from models import PoolDimensions, PoolShape, WallSegment


def corner_label(i: int) -> str:
    return chr(65 + i)


def polygon_area(vertices: Sequence[Tuple[float, float]]) -> float:
    """Shoelace formula, always non-negative."""
    n = len(vertices)
    if n < 3:
        return 0.0
    s = 0.0
    for i in range(n):
        x1, y1 = vertices[i]
        x2, y2 = vertices[(i + 1) % n]
        s += x1 * y2 - x2 * y1
    return abs(s) / 2.0


def polygon_edges(vertices: Sequence[Tuple[float, float]]) -> List[float]:
    n = len(vertices)
    return [
        math.hypot(vertices[(i + 1) % n][0] - vertices[i][0],
                   vertices[(i + 1) % n][1] - vertices[i][1])
        for i in range(n)
    ]


def bounding_box(dims: PoolDimensions) -> Tuple[float, float]:
    """(longer side, shorter side) of the area the bottom foil must span."""
    if dims.shape is PoolShape.CUSTOM and dims.vertices:
        xs = [v[0] for v in dims.vertices]
        ys = [v[1] for v in dims.vertices]
        a, b = max(xs) - min(xs), max(ys) - min(ys)
    else:
        a, b = dims.length, dims.width
    return max(a, b), min(a, b)


def ellipse_perimeter(length: float, width: float) -> float:
    # Ramanujan's approximation
    a, b = length / 2.0, width / 2.0
    return math.pi * (3 * (a + b) - math.sqrt((3 * a + b) * (a + 3 * b)))


def perimeter(dims: PoolDimensions) -> float:
    if dims.shape is PoolShape.OVAL:
        return ellipse_perimeter(dims.length, dims.width)
    if dims.shape is PoolShape.CUSTOM:
        return sum(polygon_edges(dims.vertices))
    return 2 * (dims.length + dims.width)


def wall_segments(dims: PoolDimensions) -> List[WallSegment]:
    """
    Walls in clockwise order from corner A.
    Rectangle: A-B long, B-C short, C-D long, D-A short.
    Oval: four equal quarter arcs.
    Custom: one segment per polygon edge.
    """
    if dims.shape is PoolShape.CUSTOM:
        lengths = polygon_edges(dims.vertices)
    elif dims.shape is PoolShape.OVAL:
        lengths = [perimeter(dims) / 4.0] * 4
    else:
        longer, shorter = max(dims.length, dims.width), min(dims.length, dims.width)
        lengths = [longer, shorter, longer, shorter]

    n = len(lengths)
    return [
        WallSegment(start=corner_label(i), end=corner_label((i + 1) % n), length=length)
        for i, length in enumerate(lengths)
    ]

"""
Dividing Lines Module
=====================

Randomized dividing curves between tile anchors.

A curve is built in three steps:
1. midpoint displacement between consecutive anchors
2. clamping into the tile
3. rasterization of every segment into a dense 8-connected pixel path
"""

import numpy as np
import tcod.los
from typing import List, Sequence, Tuple

from ..terrain import Displacement

Point = Tuple[int, int]


def midpoint_displacement(p0: Point, p1: Point, rng: np.random.Generator,
                          iterations: int, initial: float, reduction: float) -> List[Point]:
    """
    Jagged polyline from p0 to p1.

    At each level the middle of every sub-segment is moved perpendicular
    to (p0, p1) by ``uniform(-1, 1) * factor * length``. The factor starts
    at ``initial`` and is multiplied by ``reduction`` at each level.

    Returns:
        2^iterations + 1 points, p0 and p1 included
    """
    start = np.array(p0, dtype=np.float64)
    end = np.array(p1, dtype=np.float64)
    delta = end - start
    length = float(np.hypot(delta[0], delta[1]))

    if iterations <= 0 or length == 0.0:
        return [tuple(p0), tuple(p1)]

    normal = np.array([-delta[1], delta[0]]) / length

    count = 1 << iterations
    points = np.zeros((count + 1, 2))
    points[0] = start
    points[count] = end

    factor = initial
    step = count

    while step > 1:
        half = step // 2
        for i in range(half, count, step):
            middle = (points[i - half] + points[i + half]) / 2
            points[i] = middle + rng.uniform(-1.0, 1.0) * factor * length * normal
        factor *= reduction
        step = half

    return [(int(round(x)), int(round(y))) for x, y in points]


def generate_line(p0: Point, p1: Point) -> List[Point]:
    """8-connected Bresenham line from p0 (included) to p1 (excluded)"""
    points = tcod.los.bresenham(tuple(p0), tuple(p1))[:-1]
    return [(int(x), int(y)) for x, y in points]


def clamp_point(point: Point, size: int) -> Point:
    x, y = point
    return (min(max(x, 0), size - 1), min(max(y, 0), size - 1))


def make_line(size: int, anchors: Sequence[Point], rng: np.random.Generator,
              displacement: Displacement) -> List[Point]:
    """
    Dense pixel path through the anchors.

    Args:
        size: Tile size in pixels
        anchors: At least two anchor points
        rng: Random generator
        displacement: Roughness of the curve

    Returns:
        Pixel path clamped into the tile, last anchor included
    """
    rough: List[Point] = []

    for a, b in zip(anchors[:-1], anchors[1:]):
        segment = midpoint_displacement(a, b, rng, displacement.iterations,
                                        displacement.initial, displacement.reduction)
        rough.extend(segment[:-1])

    rough.append(tuple(anchors[-1]))
    rough = [clamp_point(point, size) for point in rough]

    path: List[Point] = []

    for a, b in zip(rough[:-1], rough[1:]):
        path.extend(generate_line(a, b))

    path.append(rough[-1])
    return path

"""
Geometry Module
===============

Randomized dividing curves and single-tile atom-id grids.
"""

from .lines import Point, midpoint_displacement, generate_line, clamp_point, make_line
from .tiles import (
    TERRAIN_TOP_LEFT,
    TERRAIN_TOP_RIGHT,
    TERRAIN_BOTTOM_LEFT,
    TERRAIN_BOTTOM_RIGHT,
    Split,
    Corner,
    HSplit,
    VSplit,
    Oblique,
    Fence,
    Tile,
    fill_from,
    check_holes,
    check_edges,
    generate_full,
    generate_split,
    generate_corner,
    generate_cross,
    generate_horizontal_split,
    generate_vertical_split,
    generate_oblique,
)

__all__ = [
    'Point',
    'midpoint_displacement',
    'generate_line',
    'clamp_point',
    'make_line',
    'TERRAIN_TOP_LEFT',
    'TERRAIN_TOP_RIGHT',
    'TERRAIN_BOTTOM_LEFT',
    'TERRAIN_BOTTOM_RIGHT',
    'Split',
    'Corner',
    'HSplit',
    'VSplit',
    'Oblique',
    'Fence',
    'Tile',
    'fill_from',
    'check_holes',
    'check_edges',
    'generate_full',
    'generate_split',
    'generate_corner',
    'generate_cross',
    'generate_horizontal_split',
    'generate_vertical_split',
    'generate_oblique',
]

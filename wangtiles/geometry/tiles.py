"""
Tile Geometry Module
====================

Builds the atom-id pixel grid of a single tile for one to three atoms.

Every generator follows the same steps:
1. anchors on the tile boundary from half size +/- the edge offset
2. randomized dividing curves between anchors, stamped with one atom
3. 4-connected flood fill of each remaining region
4. hole check so that no pixel keeps the invalid id
5. fixed corner terrain mapping and straight fence segments

Pixel grids are ``numpy.uint64`` arrays indexed ``[y, x]``. Points are
``(x, y)`` tuples.
"""

import logging
import numpy as np
from enum import Enum
from dataclasses import dataclass, field
from typing import List, Sequence, Tuple

from scipy.ndimage import label

from ..terrain import INVALID_ID, Edge, TileSettings
from .lines import Point, make_line

logger = logging.getLogger(__name__)

TERRAIN_TOP_LEFT = 0
TERRAIN_TOP_RIGHT = 1
TERRAIN_BOTTOM_LEFT = 2
TERRAIN_BOTTOM_RIGHT = 3

_FOUR_CONNECTED = np.array([[0, 1, 0],
                            [1, 1, 1],
                            [0, 1, 0]])


class Split(Enum):
    """Direction of the dividing line, b0 is top|left and b1 bottom|right"""
    HORIZONTAL = 'horizontal'
    VERTICAL = 'vertical'


class Corner(Enum):
    """Corner occupied by b0"""
    TOP_LEFT = 'top_left'
    TOP_RIGHT = 'top_right'
    BOTTOM_LEFT = 'bottom_left'
    BOTTOM_RIGHT = 'bottom_right'


class HSplit(Enum):
    """Side occupied by b0 in a horizontal three-way split"""
    TOP = 'top'
    BOTTOM = 'bottom'


class VSplit(Enum):
    """Side occupied by b0 in a vertical three-way split"""
    LEFT = 'left'
    RIGHT = 'right'


class Oblique(Enum):
    """Direction of the diagonal band occupied by b0"""
    UP = 'up'
    DOWN = 'down'


@dataclass
class Fence:
    """Straight physical boundary in tile-local coordinates"""
    p0: Point
    p1: Point

    def to_tuple(self) -> Tuple[int, int, int, int]:
        return (self.p0[0], self.p0[1], self.p1[0], self.p1[1])


@dataclass
class Tile:
    """Atom-id grid of one tile with its terrain corners and fences"""
    pixels: np.ndarray
    origin: Tuple[int, ...] = ()
    terrain: List[int] = field(default_factory=lambda: [INVALID_ID] * 4)
    fences: List[Fence] = field(default_factory=list)

    @classmethod
    def blank(cls, settings: TileSettings, biome: int = INVALID_ID) -> 'Tile':
        pixels = np.full((settings.size, settings.size), np.uint64(biome), dtype=np.uint64)
        return cls(pixels=pixels)

    @property
    def size(self) -> int:
        return self.pixels.shape[0]

    def stamp(self, path: Sequence[Point], biome: int):
        """Set every pixel of the path to the biome"""
        points = np.asarray(path, dtype=np.intp)
        self.pixels[points[:, 1], points[:, 0]] = np.uint64(biome)

    def fill_from(self, start: Point, biome: int):
        fill_from(self.pixels, start, biome)

    def check_holes(self):
        check_holes(self.pixels)


# ==================== Pixel operations ====================

def fill_from(pixels: np.ndarray, start: Point, biome: int):
    """
    Flood fill from a seed into unassigned pixels, 4-connected.

    The seed itself is always set. The fill then covers every unassigned
    region touching the seed.
    """
    x, y = start
    height, width = pixels.shape
    pixels[y, x] = np.uint64(biome)

    labels, _ = label(pixels == INVALID_ID, structure=_FOUR_CONNECTED)

    reached = set()
    for nx, ny in ((x - 1, y), (x + 1, y), (x, y - 1), (x, y + 1)):
        if 0 <= nx < width and 0 <= ny < height and labels[ny, nx] != 0:
            reached.add(int(labels[ny, nx]))

    if reached:
        pixels[np.isin(labels, list(reached))] = np.uint64(biome)


def check_holes(pixels: np.ndarray):
    """Give every unassigned pixel the id of an assigned 8-neighbor"""
    holes = np.argwhere(pixels == INVALID_ID)

    while len(holes) > 0:
        for y, x in holes:
            window = pixels[max(0, y - 1):y + 2, max(0, x - 1):x + 2]
            assigned = window[window != INVALID_ID]

            if assigned.size > 0:
                pixels[y, x] = assigned[-1]

        remaining = np.argwhere(pixels == INVALID_ID)

        if len(remaining) == len(holes):
            logger.warning("Could not fill %d unassigned pixels", len(remaining))
            break

        holes = remaining


# ==================== Anchors ====================

def _top(s: int, i: int) -> Point:
    return (i, 0)


def _bottom(s: int, i: int) -> Point:
    return (i, s - 1)


def _left(s: int, i: int) -> Point:
    return (0, i)


def _right(s: int, i: int) -> Point:
    return (s - 1, i)


# Fences run on pixel boundaries, so the far side is at s and not s - 1

def _fence_top(s: int, i: int) -> Point:
    return (i, 0)


def _fence_bottom(s: int, i: int) -> Point:
    return (i, s)


def _fence_left(s: int, i: int) -> Point:
    return (0, i)


def _fence_right(s: int, i: int) -> Point:
    return (s, i)


def _corner_top_left(s: int) -> Point:
    return (0, 0)


def _corner_top_right(s: int) -> Point:
    return (s - 1, 0)


def _corner_bottom_left(s: int) -> Point:
    return (0, s - 1)


def _corner_bottom_right(s: int) -> Point:
    return (s - 1, s - 1)


def _half_diff(a: int, b: int) -> int:
    # truncated toward zero
    return int((a - b) / 2)


# ==================== Two corners ====================

def generate_full(settings: TileSettings, b0: int) -> Tile:
    """Tile made of a single atom"""
    tile = Tile.blank(settings, b0)
    tile.origin = (b0,)
    tile.terrain = [b0, b0, b0, b0]
    return tile


def generate_split(settings: TileSettings, b0: int, b1: int, split: Split,
                   rng: np.random.Generator, edge: Edge) -> Tile:
    """b0 is in the top|left, b1 is in the bottom|right"""
    s = settings.size
    half = s // 2
    tile = Tile.blank(settings)
    tile.origin = (b0, b1)

    if split == Split.HORIZONTAL:
        anchors = [_left(s, half + edge.offset), _right(s, half + edge.offset)]
    else:
        anchors = [_top(s, half + edge.offset), _bottom(s, half + edge.offset)]

    tile.stamp(make_line(s, anchors, rng, edge.displacement), b1)

    tile.fill_from(_corner_top_left(s), b0)
    tile.fill_from(_corner_bottom_right(s), b1)

    if split == Split.HORIZONTAL:
        tile.terrain = [b0, b0, b1, b1]
    else:
        tile.terrain = [b0, b1, b0, b1]

    if edge.limit:
        if split == Split.HORIZONTAL:
            tile.fences.append(Fence(_fence_left(s, half + edge.offset), _fence_right(s, half + edge.offset)))
        else:
            tile.fences.append(Fence(_fence_top(s, half + edge.offset), _fence_bottom(s, half + edge.offset)))

    tile.check_holes()
    return tile


def generate_corner(settings: TileSettings, b0: int, b1: int, corner: Corner,
                    rng: np.random.Generator, edge: Edge) -> Tile:
    """b0 is in the corner, b1 is in the rest"""
    s = settings.size
    half = s // 2
    o = edge.offset
    tile = Tile.blank(settings)
    tile.origin = (b0, b1)

    if corner == Corner.TOP_LEFT:
        anchors = [_top(s, half - 1 + o), _left(s, half - 1 + o)]
        seeds = (_corner_top_left(s), _corner_bottom_right(s))
        fence = Fence(_fence_top(s, half + o), _fence_left(s, half + o))
    elif corner == Corner.TOP_RIGHT:
        anchors = [_top(s, half - o), _right(s, half - 1 + o)]
        seeds = (_corner_top_right(s), _corner_bottom_left(s))
        fence = Fence(_fence_top(s, half - o), _fence_right(s, half + o))
    elif corner == Corner.BOTTOM_LEFT:
        anchors = [_bottom(s, half - 1 + o), _left(s, half - o)]
        seeds = (_corner_bottom_left(s), _corner_top_right(s))
        fence = Fence(_fence_bottom(s, half + o), _fence_left(s, half - o))
    else:
        anchors = [_bottom(s, half - o), _right(s, half - o)]
        seeds = (_corner_bottom_right(s), _corner_top_left(s))
        fence = Fence(_fence_bottom(s, half - o), _fence_right(s, half - o))

    tile.stamp(make_line(s, anchors, rng, edge.displacement), b0)

    tile.fill_from(seeds[0], b0)
    tile.fill_from(seeds[1], b1)

    tile.terrain = [b1, b1, b1, b1]
    slot = {
        Corner.TOP_LEFT: TERRAIN_TOP_LEFT,
        Corner.TOP_RIGHT: TERRAIN_TOP_RIGHT,
        Corner.BOTTOM_LEFT: TERRAIN_BOTTOM_LEFT,
        Corner.BOTTOM_RIGHT: TERRAIN_BOTTOM_RIGHT,
    }[corner]
    tile.terrain[slot] = b0

    if edge.limit:
        tile.fences.append(fence)

    tile.check_holes()
    return tile


def generate_cross(settings: TileSettings, b0: int, b1: int,
                   rng: np.random.Generator, edge: Edge) -> Tile:
    """b0 is in top-left and bottom-right, b1 is in top-right and bottom-left"""
    s = settings.size
    half = s // 2
    o = edge.offset
    tile = Tile.blank(settings)
    tile.origin = (b0, b1)

    limit_top_right = [_top(s, half + o), (half, half - 1), _right(s, half - 1 - o)]
    tile.stamp(make_line(s, limit_top_right, rng, edge.displacement), b1)

    limit_bottom_left = [_bottom(s, half - 1 - o), (half - 1, half), _left(s, half + o)]
    tile.stamp(make_line(s, limit_bottom_left, rng, edge.displacement), b1)

    tile.fill_from(_corner_top_left(s), b0)
    tile.fill_from(_corner_bottom_right(s), b0)
    tile.fill_from(_corner_top_right(s), b1)
    tile.fill_from(_corner_bottom_left(s), b1)

    tile.terrain = [b0, b1, b1, b0]

    if edge.limit:
        tile.fences.append(Fence(_fence_top(s, half + o), _fence_right(s, half - o)))
        tile.fences.append(Fence(_fence_bottom(s, half - o), _fence_left(s, half + o)))

    tile.check_holes()
    return tile


# ==================== Three corners ====================

def check_edges(e01: Edge, e12: Edge, e20: Edge) -> bool:
    """A three-way junction needs exactly 0 or 2 limited edges"""
    count = sum(1 for edge in (e01, e12, e20) if edge.limit)
    return count in (0, 2)


def _warn_inconsistent_fences(kind: str):
    logger.warning("Inconsistent fences in %s: one or three limited edges, no fence generated", kind)


def generate_horizontal_split(settings: TileSettings, b0: int, b1: int, b2: int, split: HSplit,
                              rng: np.random.Generator, e01: Edge, e12: Edge, e20: Edge) -> Tile:
    """b0 is given by split, b1 is at the left, b2 is at the right"""
    s = settings.size
    half = s // 2
    tile = Tile.blank(settings)
    tile.origin = (b0, b1, b2)

    if split == HSplit.TOP:
        p0 = _left(s, half - 1 + e01.offset)
        p1 = _right(s, half - 1 - e20.offset)
        p2 = (half, half - 1 + _half_diff(e01.offset, e20.offset))
        p3 = _bottom(s, half + e12.offset)
    else:
        p0 = _left(s, half - e01.offset)
        p1 = _right(s, half + e20.offset)
        p2 = (half, half + _half_diff(e20.offset, e01.offset))
        p3 = _top(s, half + e12.offset)

    tile.stamp(make_line(s, [p2, p3], rng, e12.displacement), b2)
    tile.stamp(make_line(s, [p0, p2], rng, e01.displacement), b0)
    tile.stamp(make_line(s, [p1, p2], rng, e20.displacement), b0)

    if split == HSplit.TOP:
        tile.fill_from(_top(s, half), b0)
        tile.fill_from(_corner_bottom_left(s), b1)
        tile.fill_from(_corner_bottom_right(s), b2)
        tile.terrain = [b0, b0, b1, b2]
    else:
        tile.fill_from(_bottom(s, half), b0)
        tile.fill_from(_corner_top_left(s), b1)
        tile.fill_from(_corner_top_right(s), b2)
        tile.terrain = [b1, b2, b0, b0]

    if check_edges(e01, e12, e20):
        top = split == HSplit.TOP

        if e01.limit and e12.limit:
            if top:
                tile.fences.append(Fence(_fence_left(s, half + e01.offset), _fence_bottom(s, half + e12.offset)))
            else:
                tile.fences.append(Fence(_fence_left(s, half - e01.offset), _fence_top(s, half + e12.offset)))

        if e12.limit and e20.limit:
            if top:
                tile.fences.append(Fence(_fence_right(s, half - e20.offset), _fence_bottom(s, half + e12.offset)))
            else:
                tile.fences.append(Fence(_fence_right(s, half + e20.offset), _fence_top(s, half + e12.offset)))

        if e20.limit and e01.limit:
            if top:
                tile.fences.append(Fence(_fence_left(s, half + e01.offset), _fence_right(s, half - e20.offset)))
            else:
                tile.fences.append(Fence(_fence_left(s, half - e01.offset), _fence_right(s, half + e20.offset)))
    else:
        _warn_inconsistent_fences('horizontal split')

    tile.check_holes()
    return tile


def generate_vertical_split(settings: TileSettings, b0: int, b1: int, b2: int, split: VSplit,
                            rng: np.random.Generator, e01: Edge, e12: Edge, e20: Edge) -> Tile:
    """b0 is given by split, b1 is at the top, b2 is at the bottom"""
    s = settings.size
    half = s // 2
    tile = Tile.blank(settings)
    tile.origin = (b0, b1, b2)

    if split == VSplit.LEFT:
        p0 = _top(s, half - 1 + e01.offset)
        p1 = _bottom(s, half - 1 - e20.offset)
        p2 = (half - 1 + _half_diff(e01.offset, e20.offset), half)
        p3 = _right(s, half + e12.offset)
    else:
        p0 = _top(s, half - e01.offset)
        p1 = _bottom(s, half + e20.offset)
        p2 = (half + _half_diff(e20.offset, e01.offset), half)
        p3 = _left(s, half + e12.offset)

    tile.stamp(make_line(s, [p2, p3], rng, e12.displacement), b2)
    tile.stamp(make_line(s, [p0, p2], rng, e01.displacement), b0)
    tile.stamp(make_line(s, [p1, p2], rng, e20.displacement), b0)

    if split == VSplit.LEFT:
        tile.fill_from(_left(s, half), b0)
        tile.fill_from(_corner_top_right(s), b1)
        tile.fill_from(_corner_bottom_right(s), b2)
        tile.terrain = [b0, b1, b0, b2]
    else:
        tile.fill_from(_right(s, half), b0)
        tile.fill_from(_corner_top_left(s), b1)
        tile.fill_from(_corner_bottom_left(s), b2)
        tile.terrain = [b1, b0, b2, b0]

    if check_edges(e01, e12, e20):
        left = split == VSplit.LEFT

        if e01.limit and e12.limit:
            if left:
                tile.fences.append(Fence(_fence_top(s, half + e01.offset), _fence_right(s, half + e12.offset)))
            else:
                tile.fences.append(Fence(_fence_top(s, half - e01.offset), _fence_left(s, half + e12.offset)))

        if e12.limit and e20.limit:
            if left:
                tile.fences.append(Fence(_fence_bottom(s, half - e20.offset), _fence_right(s, half + e12.offset)))
            else:
                tile.fences.append(Fence(_fence_bottom(s, half + e20.offset), _fence_left(s, half + e12.offset)))

        if e20.limit and e01.limit:
            if left:
                tile.fences.append(Fence(_fence_top(s, half + e01.offset), _fence_bottom(s, half - e20.offset)))
            else:
                tile.fences.append(Fence(_fence_top(s, half - e01.offset), _fence_bottom(s, half + e20.offset)))
    else:
        _warn_inconsistent_fences('vertical split')

    tile.check_holes()
    return tile


def generate_oblique(settings: TileSettings, b0: int, b1: int, b2: int, oblique: Oblique,
                     rng: np.random.Generator, e01: Edge, e20: Edge) -> Tile:
    """
    b0 is a diagonal band, b1 is at the left and b2 is at the right.

    Up: the band goes from bottom-left to top-right, b1 is top-left.
    Down: the band goes from top-left to bottom-right, b1 is bottom-left.
    """
    s = settings.size
    half = s // 2
    tile = Tile.blank(settings)
    tile.origin = (b0, b1, b2)

    if oblique == Oblique.UP:
        p0 = _left(s, half - e01.offset)
        p1 = _top(s, half - e01.offset)
        p2 = _right(s, half - 1 - e20.offset)
        p3 = _bottom(s, half - 1 - e20.offset)
    else:
        # curve anchors sit on the same boundaries as the fences below
        p0 = _left(s, half - 1 + e01.offset)
        p1 = _bottom(s, half - e01.offset)
        p2 = _right(s, half + e20.offset)
        p3 = _top(s, half - 1 - e20.offset)

    tile.stamp(make_line(s, [p0, p1], rng, e01.displacement), b0)
    tile.stamp(make_line(s, [p2, p3], rng, e20.displacement), b0)

    if oblique == Oblique.UP:
        tile.fill_from(_corner_bottom_left(s), b0)
        tile.fill_from(_corner_top_left(s), b1)
        tile.fill_from(_corner_bottom_right(s), b2)
        tile.terrain = [b1, b0, b0, b2]
    else:
        tile.fill_from(_corner_top_left(s), b0)
        tile.fill_from(_corner_bottom_left(s), b1)
        tile.fill_from(_corner_top_right(s), b2)
        tile.terrain = [b0, b2, b1, b0]

    if e01.limit:
        if oblique == Oblique.UP:
            tile.fences.append(Fence(_fence_left(s, half - e01.offset), _fence_top(s, half - e01.offset)))
        else:
            tile.fences.append(Fence(_fence_left(s, half + e01.offset), _fence_bottom(s, half - e01.offset)))

    if e20.limit:
        if oblique == Oblique.UP:
            tile.fences.append(Fence(_fence_right(s, half - e20.offset), _fence_bottom(s, half - e20.offset)))
        else:
            tile.fences.append(Fence(_fence_right(s, half + e20.offset), _fence_top(s, half - e20.offset)))

    tile.check_holes()
    return tile

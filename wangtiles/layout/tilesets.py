"""
Canonical Tileset Layout Module
===============================

Arranges geometry variants into fixed grids so that every pair of adjacent
tiles, wraparound included, shares its corner terrains and its border
pixels.

Layouts are static tables indexed by ``(x, y)`` (column, row). A cell lists
the variant, the order in which the rule atoms are given to the generator,
and the variant parameter. The edges of a cell follow from the atom order:
the edge between generator atoms ``(i, j)`` is the rule edge seen from
``i``, inverted when the rule is declared the other way round.

Two-atom layout (b0 = ' ', b1 = '#')::

       0    1    2    3
    0 +----+----+----+----+
      |    |  ##|##  |    |
      |##  |  ##|####|####|
    1 +----+----+----+----+
      |##  |  ##|####|####|
      |  ##|####|####|##  |
    2 +----+----+----+----+
      |  ##|####|####|##  |
      |    |    |  ##|##  |
    3 +----+----+----+----+
      |    |    |  ##|##  |
      |    |  ##|##  |    |
      +----+----+----+----+

Three-atom layout (b0 = ' ', b1 = ':', b2 = '#')::

       0    1    2    3    4    5
    0 +----+----+----+----+----+----+
      |####|####|##::|::::|::  |  ##|
      |::  |  ::|::  |  ##|##  |  ::|
    1 +----+----+----+----+----+----+
      |::  |  ::|::  |  ##|##  |  ::|
      |::##|##  |  ##|##::|::##|##::|
    2 +----+----+----+----+----+----+
      |::##|##  |  ##|##::|::##|##::|
      |  ::|::::|::##|##  |    |    |
    3 +----+----+----+----+----+----+
      |  ::|::::|::##|##  |    |    |
      |::##|##  |  ##|##::|::##|##::|
    4 +----+----+----+----+----+----+
      |::##|##  |  ##|##::|::##|##::|
      |::  |  ::|::  |  ##|##  |  ::|
    5 +----+----+----+----+----+----+
      |::  |  ::|::  |  ##|##  |  ::|
      |####|####|##::|::::|::  |  ##|
      +----+----+----+----+----+----+
"""

import numpy as np
from typing import Dict, Iterator, List, Optional, Tuple

from ..terrain import (
    ATOMS_TILESET_SIZE,
    WANG2_TILESET_SIZE,
    WANG3_TILESET_SIZE,
    Edge,
    TileSettings,
    TilesetData,
    PreviewOverride,
    Wang2,
    Wang3,
)
from ..geometry import (
    Corner,
    HSplit,
    Oblique,
    Split,
    Tile,
    VSplit,
    generate_corner,
    generate_cross,
    generate_full,
    generate_horizontal_split,
    generate_oblique,
    generate_split,
    generate_vertical_split,
)

Position = Tuple[int, int]

FULL = 'full'
SPLIT = 'split'
CORNER = 'corner'
CROSS = 'cross'
HORIZONTAL_SPLIT = 'horizontal_split'
VERTICAL_SPLIT = 'vertical_split'
OBLIQUE = 'oblique'


# (x, y) -> (variant, atom order, parameter)
TWO_CORNERS_LAYOUT: Dict[Position, tuple] = {
    (0, 0): (CORNER, (1, 0), Corner.BOTTOM_LEFT),
    (0, 1): (CROSS, (1, 0), None),
    (0, 2): (CORNER, (1, 0), Corner.TOP_RIGHT),
    (0, 3): (FULL, (0,), None),

    (1, 0): (SPLIT, (0, 1), Split.VERTICAL),
    (1, 1): (CORNER, (0, 1), Corner.TOP_LEFT),
    (1, 2): (SPLIT, (1, 0), Split.HORIZONTAL),
    (1, 3): (CORNER, (1, 0), Corner.BOTTOM_RIGHT),

    (2, 0): (CORNER, (0, 1), Corner.TOP_RIGHT),
    (2, 1): (FULL, (1,), None),
    (2, 2): (CORNER, (0, 1), Corner.BOTTOM_LEFT),
    (2, 3): (CROSS, (0, 1), None),

    (3, 0): (SPLIT, (0, 1), Split.HORIZONTAL),
    (3, 1): (CORNER, (0, 1), Corner.BOTTOM_RIGHT),
    (3, 2): (SPLIT, (1, 0), Split.VERTICAL),
    (3, 3): (CORNER, (1, 0), Corner.TOP_LEFT),
}

THREE_CORNERS_LAYOUT: Dict[Position, tuple] = {
    (0, 0): (HORIZONTAL_SPLIT, (2, 1, 0), HSplit.TOP),
    (0, 1): (VERTICAL_SPLIT, (1, 0, 2), VSplit.LEFT),
    (0, 2): (OBLIQUE, (1, 0, 2), Oblique.DOWN),
    (0, 3): (OBLIQUE, (1, 0, 2), Oblique.UP),
    (0, 4): (VERTICAL_SPLIT, (1, 2, 0), VSplit.LEFT),
    (0, 5): (HORIZONTAL_SPLIT, (2, 1, 0), HSplit.BOTTOM),

    (1, 0): (HORIZONTAL_SPLIT, (2, 0, 1), HSplit.TOP),
    (1, 1): (OBLIQUE, (0, 2, 1), Oblique.DOWN),
    (1, 2): (HORIZONTAL_SPLIT, (1, 2, 0), HSplit.BOTTOM),
    (1, 3): (HORIZONTAL_SPLIT, (1, 2, 0), HSplit.TOP),
    (1, 4): (OBLIQUE, (0, 2, 1), Oblique.UP),
    (1, 5): (HORIZONTAL_SPLIT, (2, 0, 1), HSplit.BOTTOM),

    (2, 0): (OBLIQUE, (1, 2, 0), Oblique.UP),
    (2, 1): (OBLIQUE, (0, 1, 2), Oblique.UP),
    (2, 2): (VERTICAL_SPLIT, (2, 0, 1), VSplit.RIGHT),
    (2, 3): (VERTICAL_SPLIT, (2, 1, 0), VSplit.RIGHT),
    (2, 4): (OBLIQUE, (0, 1, 2), Oblique.DOWN),
    (2, 5): (OBLIQUE, (1, 2, 0), Oblique.DOWN),

    (3, 0): (HORIZONTAL_SPLIT, (1, 0, 2), HSplit.TOP),
    (3, 1): (OBLIQUE, (2, 0, 1), Oblique.UP),
    (3, 2): (VERTICAL_SPLIT, (2, 1, 0), VSplit.LEFT),
    (3, 3): (VERTICAL_SPLIT, (2, 0, 1), VSplit.LEFT),
    (3, 4): (OBLIQUE, (2, 0, 1), Oblique.DOWN),
    (3, 5): (HORIZONTAL_SPLIT, (1, 0, 2), HSplit.BOTTOM),

    (4, 0): (VERTICAL_SPLIT, (0, 1, 2), VSplit.RIGHT),
    (4, 1): (OBLIQUE, (2, 1, 0), Oblique.DOWN),
    (4, 2): (HORIZONTAL_SPLIT, (0, 1, 2), HSplit.BOTTOM),
    (4, 3): (HORIZONTAL_SPLIT, (0, 1, 2), HSplit.TOP),
    (4, 4): (OBLIQUE, (2, 1, 0), Oblique.UP),
    (4, 5): (VERTICAL_SPLIT, (0, 2, 1), VSplit.RIGHT),

    (5, 0): (VERTICAL_SPLIT, (0, 2, 1), VSplit.LEFT),
    (5, 1): (VERTICAL_SPLIT, (1, 0, 2), VSplit.RIGHT),
    (5, 2): (HORIZONTAL_SPLIT, (0, 2, 1), HSplit.BOTTOM),
    (5, 3): (HORIZONTAL_SPLIT, (0, 2, 1), HSplit.TOP),
    (5, 4): (VERTICAL_SPLIT, (1, 2, 0), VSplit.RIGHT),
    (5, 5): (VERTICAL_SPLIT, (0, 1, 2), VSplit.LEFT),
}


class Tileset:
    """
    Grid of tiles generated for one atom or one rule.

    Attributes:
        tiles: Rows of tiles, ``tiles[y][x]``
        position: Top-left cell in the atlas, in tile units
    """

    def __init__(self, width: int, height: int):
        self.tiles: List[List[Optional[Tile]]] = [[None] * width for _ in range(height)]
        self.position: Position = (0, 0)

    @property
    def size(self) -> Position:
        return (len(self.tiles[0]) if self.tiles else 0, len(self.tiles))

    def __getitem__(self, position: Position) -> Tile:
        x, y = position
        return self.tiles[y][x]

    def __setitem__(self, position: Position, tile: Tile):
        x, y = position
        self.tiles[y][x] = tile

    def positions(self) -> Iterator[Position]:
        """Cells in row-major order"""
        width, height = self.size
        for y in range(height):
            for x in range(width):
                yield (x, y)

    def items(self) -> Iterator[Tuple[Position, Tile]]:
        for position in self.positions():
            yield position, self[position]


def _generate_cell(settings: TileSettings, variant: str, atoms: Tuple[int, ...], parameter,
                   rng: np.random.Generator, edges: Dict[Tuple[int, int], Edge],
                   order: Tuple[int, ...]) -> Tile:
    """Generate one layout cell, ``order`` maps generator slots to rule atoms"""
    if variant == FULL:
        return generate_full(settings, atoms[0])

    if variant == SPLIT:
        return generate_split(settings, atoms[0], atoms[1], parameter, rng, edges[order[0], order[1]])

    if variant == CORNER:
        return generate_corner(settings, atoms[0], atoms[1], parameter, rng, edges[order[0], order[1]])

    if variant == CROSS:
        return generate_cross(settings, atoms[0], atoms[1], rng, edges[order[0], order[1]])

    e01 = edges[order[0], order[1]]
    e12 = edges[order[1], order[2]]
    e20 = edges[order[2], order[0]]

    if variant == HORIZONTAL_SPLIT:
        return generate_horizontal_split(settings, *atoms, parameter, rng, e01, e12, e20)

    if variant == VERTICAL_SPLIT:
        return generate_vertical_split(settings, *atoms, parameter, rng, e01, e12, e20)

    if variant == OBLIQUE:
        return generate_oblique(settings, *atoms, parameter, rng, e01, e20)

    raise ValueError(f"Unknown tile variant: {variant}")


def _generate_from_layout(size: int, layout: Dict[Position, tuple], ids: Tuple[int, ...],
                          edges: Dict[Tuple[int, int], Edge], settings: TileSettings,
                          rng: np.random.Generator) -> Tileset:
    tileset = Tileset(size, size)

    # row-major so that the random sequence does not depend on dict order
    for position in tileset.positions():
        variant, order, parameter = layout[position]
        atoms = tuple(ids[i] for i in order)
        tileset[position] = _generate_cell(settings, variant, atoms, parameter, rng, edges, order)

    return tileset


def generate_plain_tileset(atom_id: int, db: TilesetData) -> Tileset:
    """4x4 tileset of full tiles of a single atom"""
    tileset = Tileset(ATOMS_TILESET_SIZE, ATOMS_TILESET_SIZE)

    for position in tileset.positions():
        tileset[position] = generate_full(db.settings.tile, atom_id)

    return tileset


def generate_two_corners_wang_tileset(wang: Wang2, rng: np.random.Generator,
                                      db: TilesetData) -> Tileset:
    """4x4 Wang tileset of a pairwise rule"""
    ids = wang.ids
    edges = {
        (0, 1): wang.edge,
        (1, 0): wang.edge.invert(),
    }

    return _generate_from_layout(WANG2_TILESET_SIZE, TWO_CORNERS_LAYOUT, ids, edges,
                                 db.settings.tile, rng)


def generate_three_corners_wang_tileset(wang: Wang3, rng: np.random.Generator, db: TilesetData,
                                        override: Optional[PreviewOverride] = None) -> Tileset:
    """6x6 Wang tileset of a triple rule, edges come from the pairwise rules"""
    ids = wang.hashes
    edges = {
        (i, j): db.get_edge(ids[i], ids[j], override)
        for i in range(3)
        for j in range(3)
        if i != j
    }

    return _generate_from_layout(WANG3_TILESET_SIZE, THREE_CORNERS_LAYOUT, ids, edges,
                                 db.settings.tile, rng)

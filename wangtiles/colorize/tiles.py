"""
Tile Colorization Module
========================

Turns the atom-id grid of a tile into an RGBA buffer: pigments first,
then border effects of every pair of origin atoms.
"""

import numpy as np
from typing import Optional

from ..terrain import INVALID_ID, VOID, PreviewOverride, TilesetData
from ..geometry import Tile
from .colors import new_colors, extend
from .pigments import colorize_atom
from .borders import colorize_border


def colorize_raw_tile(tile: Tile, rng: np.random.Generator, db: TilesetData,
                      override: Optional[PreviewOverride] = None) -> np.ndarray:
    """Colors of a tile without the spacing extension"""
    height, width = tile.pixels.shape
    colors = new_colors(width, height)
    origin = tile.origin

    for biome in origin:
        if biome == VOID or biome == INVALID_ID:
            continue

        atom = db.get_atom(biome, override)
        colorize_atom(colors, atom, tile, rng)

    original = colors.copy()

    if len(origin) == 2:
        pairs = [(origin[0], origin[1])]
    elif len(origin) == 3:
        pairs = [(origin[0], origin[1]), (origin[1], origin[2]), (origin[2], origin[0])]
    else:
        pairs = []

    for id0, id1 in pairs:
        wang = db.get_wang2(id0, id1, override)
        colorize_border(colors, original, wang, tile, rng, db, override)

    return colors


def colorize_tile(tile: Tile, rng: np.random.Generator, db: TilesetData) -> np.ndarray:
    """Colors of a tile extended by the spacing, ready for the atlas"""
    raw = colorize_raw_tile(tile, rng, db)
    return extend(raw, db.settings.tile.spacing)

"""
Preview Module
==============

Single-item renders for live editing. Tiles are separated by transparent
gutters and the item under edition is given through a PreviewOverride, so
the project lists are never touched.
"""

import numpy as np
from typing import Optional

from ..terrain import Atom, PreviewOverride, TileSettings, TilesetData, Wang2, Wang3
from ..geometry import generate_full
from ..layout import Tileset, generate_two_corners_wang_tileset, generate_three_corners_wang_tileset
from .colors import new_colors, blit
from .pigments import colorize_atom
from .tiles import colorize_raw_tile


def generate_atom_preview(atom: Atom, rng: np.random.Generator, settings: TileSettings) -> np.ndarray:
    """One full tile painted with the atom pigment"""
    tile = generate_full(settings, atom.id.hash)
    colors = new_colors(settings.size, settings.size)
    colorize_atom(colors, atom, tile, rng)
    return colors


def _render_tileset(tileset: Tileset, rng: np.random.Generator, db: TilesetData,
                    override: Optional[PreviewOverride], gutter: int) -> np.ndarray:
    size = db.settings.tile.size
    step = size + gutter
    columns, rows = tileset.size
    colors = new_colors(columns * step - gutter, rows * step - gutter)

    for (x, y), tile in tileset.items():
        tile_colors = colorize_raw_tile(tile, rng, db, override)
        blit(colors, tile_colors, (x * step, y * step))

    return colors


def generate_wang2_preview(wang: Wang2, rng: np.random.Generator, db: TilesetData,
                           override: Optional[PreviewOverride] = None, gutter: int = 1) -> np.ndarray:
    """
    4x4 Wang tileset of a pairwise rule.

    The rule itself takes precedence over any stored rule of the same pair.
    """
    atom = override.atom if override is not None else None
    override = PreviewOverride(atom=atom, wang2=wang)

    tileset = generate_two_corners_wang_tileset(wang, rng, db)
    return _render_tileset(tileset, rng, db, override, gutter)


def generate_wang3_preview(wang: Wang3, rng: np.random.Generator, db: TilesetData,
                           override: Optional[PreviewOverride] = None, gutter: int = 1) -> np.ndarray:
    """6x6 Wang tileset of a triple rule"""
    tileset = generate_three_corners_wang_tileset(wang, rng, db, override)
    return _render_tileset(tileset, rng, db, override, gutter)

"""
Atlas Packing Module
====================

Packs every generated tileset into one image.

The atlas is made of three bands stacked vertically: plain atom tilesets,
then Wang2 tilesets, then Wang3 tilesets. Band heights are sized for the
maximum counts of the project settings, so the layout of an atlas does not
change when rules are added, until a maximum is reached.
"""

import logging
import math
import numpy as np
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Tuple, Union

import matplotlib.image as mpimg

from ..terrain import (
    ATOMS_TILESET_SIZE,
    WANG2_TILESET_SIZE,
    WANG3_TILESET_SIZE,
    Settings,
    TilesetData,
)
from ..layout import (
    Tileset,
    generate_plain_tileset,
    generate_two_corners_wang_tileset,
    generate_three_corners_wang_tileset,
)
from ..colorize import new_colors, blit, colorize_tile, to_rgba8

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE = 8192

# Candidate widths are multiples of 12 tiles, divisible by both band sizes
WIDTH_STEP_TILES = 12


class AtlasCapacityError(ValueError):
    """The project does not fit into an atlas"""


@dataclass
class ImageFeatures:
    """Atlas size in pixels and tilesets per line and line count of each band"""
    size: Tuple[int, int]
    atoms_per_line: int
    atoms_line_count: int
    wang2_per_line: int
    wang2_line_count: int
    wang3_per_line: int
    wang3_line_count: int

    @property
    def width(self) -> int:
        return self.size[0]

    @property
    def height(self) -> int:
        return self.size[1]


def compute_image_features(settings: Settings) -> ImageFeatures:
    """
    Find the smallest square-bounded atlas able to hold the maximum counts.

    Raises:
        AtlasCapacityError: If no width up to MAX_IMAGE_SIZE fits
    """
    ext = settings.tile.extended_size
    step = WIDTH_STEP_TILES * ext

    bands = (
        (ATOMS_TILESET_SIZE, settings.max_atom_count),
        (WANG2_TILESET_SIZE, settings.max_wang2_count),
        (WANG3_TILESET_SIZE, settings.max_wang3_count),
    )

    for width in range(step, MAX_IMAGE_SIZE + 1, step):
        height = 0
        layout = []

        for band_size, max_count in bands:
            per_line = width // (band_size * ext)

            if per_line == 0:
                break

            line_count = math.ceil(max_count / per_line)
            height += line_count * band_size * ext

            if height > width:
                break

            layout.append((per_line, line_count))
        else:
            (atoms, atoms_lines), (wang2, wang2_lines), (wang3, wang3_lines) = layout
            return ImageFeatures(
                size=(width, height),
                atoms_per_line=atoms,
                atoms_line_count=atoms_lines,
                wang2_per_line=wang2,
                wang2_line_count=wang2_lines,
                wang3_per_line=wang3,
                wang3_line_count=wang3_lines,
            )

    raise AtlasCapacityError(
        f"No atlas up to {MAX_IMAGE_SIZE}px can hold {settings.max_atom_count} atoms, "
        f"{settings.max_wang2_count} wang2 and {settings.max_wang3_count} wang3 "
        f"with {settings.tile.size}px tiles"
    )


@dataclass
class DecoratedTileset:
    """All tilesets of a project, placed in the atlas"""
    features: ImageFeatures
    atoms: List[Tileset] = field(default_factory=list)
    wang2: List[Tileset] = field(default_factory=list)
    wang3: List[Tileset] = field(default_factory=list)

    def all_tilesets(self) -> Iterator[Tileset]:
        yield from self.atoms
        yield from self.wang2
        yield from self.wang3

    @property
    def tile_count(self) -> int:
        return sum(len(tileset.tiles) * len(tileset.tiles[0]) for tileset in self.all_tilesets())

    def find_terrain_position(self, hash: int) -> Tuple[int, int]:
        """Atlas position of the first plain tile of an atom, (-1, -1) if missing"""
        for tileset in self.atoms:
            for (x, y), tile in tileset.items():
                if len(tile.origin) == 1 and tile.origin[0] == hash:
                    return (tileset.position[0] + x, tileset.position[1] + y)

        logger.error("Could not find a terrain for %016X", hash)
        return (-1, -1)


def _place(tilesets: List[Tileset], tileset: Tileset, origin_y: int, per_line: int, band_size: int):
    index = len(tilesets)
    column = index % per_line
    line = index // per_line
    tileset.position = (column * band_size, origin_y + line * band_size)
    tilesets.append(tileset)


def generate_tilesets(rng: np.random.Generator, db: TilesetData,
                      features: Optional[ImageFeatures] = None) -> DecoratedTileset:
    """
    Generate and place the tilesets of every atom and rule.

    Raises:
        AtlasCapacityError: If a list is longer than its maximum count
    """
    settings = db.settings

    if features is None:
        features = compute_image_features(settings)

    for kind, count, max_count in (
        ('atoms', len(db.atoms), settings.max_atom_count),
        ('wang2', len(db.wang2), settings.max_wang2_count),
        ('wang3', len(db.wang3), settings.max_wang3_count),
    ):
        if count > max_count:
            raise AtlasCapacityError(f"Too many {kind}: {count} (maximum: {max_count})")

    tilesets = DecoratedTileset(features=features)
    origin_y = 0

    for atom in db.atoms:
        tileset = generate_plain_tileset(atom.id.hash, db)
        _place(tilesets.atoms, tileset, origin_y, features.atoms_per_line, ATOMS_TILESET_SIZE)

    origin_y += features.atoms_line_count * ATOMS_TILESET_SIZE

    for wang in db.wang2:
        tileset = generate_two_corners_wang_tileset(wang, rng, db)
        _place(tilesets.wang2, tileset, origin_y, features.wang2_per_line, WANG2_TILESET_SIZE)

    origin_y += features.wang2_line_count * WANG2_TILESET_SIZE

    for wang in db.wang3:
        tileset = generate_three_corners_wang_tileset(wang, rng, db)
        _place(tilesets.wang3, tileset, origin_y, features.wang3_per_line, WANG3_TILESET_SIZE)

    logger.info("Generated %d atom, %d wang2 and %d wang3 tilesets",
                len(tilesets.atoms), len(tilesets.wang2), len(tilesets.wang3))

    return tilesets


def generate_tileset_image(rng: np.random.Generator, db: TilesetData,
                           tilesets: DecoratedTileset) -> np.ndarray:
    """Colorize every tile and blit it at its atlas position"""
    ext = db.settings.tile.extended_size
    width, height = tilesets.features.size
    colors = new_colors(width, height)

    for tileset in tilesets.all_tilesets():
        tx, ty = tileset.position

        for (x, y), tile in tileset.items():
            blit(colors, colorize_tile(tile, rng, db), ((tx + x) * ext, (ty + y) * ext))

    return colors


def save_atlas(path: Union[str, Path], colors: np.ndarray):
    """Write an atlas or a preview as an 8-bit RGBA PNG"""
    mpimg.imsave(str(path), to_rgba8(colors), format='png')
    logger.info("Image saved in '%s'", path)

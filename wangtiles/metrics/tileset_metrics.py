"""
Tileset Metrics Module
======================

Runtime checks of generated tilesets and simple statistics.

Checks return lists of human-readable problems instead of raising, so that
a whole atlas can be inspected in one go.
"""

import numpy as np
from typing import Dict, List, Optional
from dataclasses import dataclass, field

from ..terrain import INVALID_ID, TilesetData
from ..geometry import (
    Tile,
    TERRAIN_TOP_LEFT,
    TERRAIN_TOP_RIGHT,
    TERRAIN_BOTTOM_LEFT,
    TERRAIN_BOTTOM_RIGHT,
)
from ..layout import Tileset


def check_coverage(tile: Tile) -> bool:
    """True if no pixel of the tile holds the invalid id"""
    return not np.any(tile.pixels == INVALID_ID)


def _neighbors(tileset: Tileset):
    """Every cell with its right and bottom neighbors, wrapping around"""
    width, height = tileset.size

    for (x, y), tile in tileset.items():
        right = tileset[(x + 1) % width, y]
        below = tileset[x, (y + 1) % height]
        yield (x, y), tile, right, below


def check_wang_corners(tileset: Tileset) -> List[str]:
    """
    Check that adjacent tiles share their corner terrains.

    Returns:
        Problems found, empty if the tileset is consistent
    """
    problems = []

    for (x, y), tile, right, below in _neighbors(tileset):
        t = tile.terrain

        if t[TERRAIN_TOP_RIGHT] != right.terrain[TERRAIN_TOP_LEFT] or \
                t[TERRAIN_BOTTOM_RIGHT] != right.terrain[TERRAIN_BOTTOM_LEFT]:
            problems.append(f"Corner mismatch between ({x}, {y}) and its right neighbor")

        if t[TERRAIN_BOTTOM_LEFT] != below.terrain[TERRAIN_TOP_LEFT] or \
                t[TERRAIN_BOTTOM_RIGHT] != below.terrain[TERRAIN_TOP_RIGHT]:
            problems.append(f"Corner mismatch between ({x}, {y}) and its bottom neighbor")

    return problems


def check_wang_borders(tileset: Tileset) -> List[str]:
    """
    Check that adjacent tiles have identical border pixels.

    Only guaranteed for straight edges (no offset, no displacement).
    """
    problems = []

    for (x, y), tile, right, below in _neighbors(tileset):
        if not np.array_equal(tile.pixels[:, -1], right.pixels[:, 0]):
            count = int(np.count_nonzero(tile.pixels[:, -1] != right.pixels[:, 0]))
            problems.append(f"{count} border pixels differ between ({x}, {y}) and its right neighbor")

        if not np.array_equal(tile.pixels[-1, :], below.pixels[0, :]):
            count = int(np.count_nonzero(tile.pixels[-1, :] != below.pixels[0, :]))
            problems.append(f"{count} border pixels differ between ({x}, {y}) and its bottom neighbor")

    return problems


@dataclass
class TilesetStats:
    """Pixel share of every atom and fence count of a tileset"""
    tile_count: int = 0
    pixel_count: int = 0
    fence_count: int = 0
    atom_pixels: Dict[int, int] = field(default_factory=dict)

    @property
    def atom_share(self) -> Dict[int, float]:
        if self.pixel_count == 0:
            return {}
        return {atom: count / self.pixel_count for atom, count in self.atom_pixels.items()}

    def to_dict(self, db: Optional[TilesetData] = None) -> Dict:
        """Convert to dictionary, atoms are named when db is given"""
        def name(hash: int) -> str:
            return db.get_atom(hash).id.name if db is not None else f'{hash:016X}'

        return {
            'tile_count': self.tile_count,
            'pixel_count': self.pixel_count,
            'fence_count': self.fence_count,
            'atom_share': {name(atom): share for atom, share in self.atom_share.items()},
        }


def compute_tileset_stats(tileset: Tileset) -> TilesetStats:
    stats = TilesetStats()

    for _, tile in tileset.items():
        stats.tile_count += 1
        stats.pixel_count += tile.pixels.size
        stats.fence_count += len(tile.fences)

        ids, counts = np.unique(tile.pixels, return_counts=True)
        for atom, count in zip(ids, counts):
            stats.atom_pixels[int(atom)] = stats.atom_pixels.get(int(atom), 0) + int(count)

    return stats


@dataclass
class ValidationReport:
    """Result of the checks over a set of tilesets"""
    tileset_count: int = 0
    tile_count: int = 0
    coverage_errors: List[str] = field(default_factory=list)
    corner_errors: List[str] = field(default_factory=list)
    border_errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not (self.coverage_errors or self.corner_errors or self.border_errors)

    def to_dict(self) -> Dict:
        return {
            'valid': self.is_valid,
            'tileset_count': self.tileset_count,
            'tile_count': self.tile_count,
            'coverage_errors': self.coverage_errors,
            'corner_errors': self.corner_errors,
            'border_errors': self.border_errors,
        }


def validate_tilesets(tilesets: Dict[str, List[Tileset]], check_borders: bool = False) -> ValidationReport:
    """
    Run coverage and adjacency checks.

    Args:
        tilesets: Tilesets by kind ('atoms', 'wang2', 'wang3'), plain atom
            tilesets only get the coverage check
        check_borders: Also compare border pixels, meaningful for straight
            edges only

    Returns:
        ValidationReport
    """
    report = ValidationReport()

    for kind, group in tilesets.items():
        for index, tileset in enumerate(group):
            report.tileset_count += 1
            label = f"{kind} #{index}"

            for (x, y), tile in tileset.items():
                report.tile_count += 1

                if not check_coverage(tile):
                    report.coverage_errors.append(f"{label}: unassigned pixels in tile ({x}, {y})")

            if kind == 'atoms':
                continue

            report.corner_errors.extend(f"{label}: {p}" for p in check_wang_corners(tileset))

            if check_borders:
                report.border_errors.extend(f"{label}: {p}" for p in check_wang_borders(tileset))

    return report

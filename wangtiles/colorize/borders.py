"""
Border Effect Module
====================

Second colorization pass: post-processes the pixels of an atom that lie
close to the other atom of a pairwise rule.

Every effect reads the snapshot taken after the pigment pass and writes
the live buffer, so effects never see each other's output.
"""

import numpy as np
from typing import Optional

from scipy.ndimage import convolve, distance_transform_cdt

from ..terrain import VOID, BorderEffect, PreviewOverride, TilesetData, Wang2
from ..geometry import Tile
from .colors import darker, lighter

BLUR_RADIUS = 5
BLEND_NOISE = 0.05

_BINOMIAL = np.array([1.0, 4.0, 6.0, 4.0, 1.0])
BLUR_KERNEL = np.outer(_BINOMIAL, _BINOMIAL)


def _blurred(original: np.ndarray) -> np.ndarray:
    """5x5 binomial blur normalized by the in-bounds weight"""
    weight = convolve(np.ones(original.shape[:2]), BLUR_KERNEL, mode='constant', cval=0.0)
    result = np.empty_like(original)

    for channel in range(original.shape[2]):
        result[..., channel] = convolve(original[..., channel], BLUR_KERNEL, mode='constant', cval=0.0)

    return result / weight[..., np.newaxis]


def colorize_border(colors: np.ndarray, original: np.ndarray, wang: Wang2, tile: Tile,
                    rng: np.random.Generator, db: TilesetData,
                    override: Optional[PreviewOverride] = None):
    """
    Apply the border effects of a pairwise rule to a tile.

    Args:
        colors: Live buffer, modified in place
        original: Snapshot of the pigment pass
        wang: Rule giving the two borders
        tile: Tile giving the atom-id grid
        rng: Random generator, used by blend
        db: Project data, for the outline color
        override: Item under edition
    """
    pixels = tile.pixels

    for i in range(2):
        border = wang.borders[i]
        atom_hash = border.id.hash

        if atom_hash == VOID or border.effect == BorderEffect.NONE:
            continue

        other = wang.borders[1 - i]
        other_mask = pixels == np.uint64(other.id.hash)

        if not other_mask.any():
            continue

        # Manhattan distance and position of the nearest pixel of the other atom
        distance, indices = distance_transform_cdt(~other_mask, metric='taxicab', return_indices=True)
        own = pixels == np.uint64(atom_hash)
        limit = border.distance

        if border.effect == BorderEffect.BLUR:
            selected = own & (distance < BLUR_RADIUS)
            colors[selected] = _blurred(original)[selected]
            continue

        selected = own & (distance <= limit)

        if not selected.any():
            continue

        ratio = (limit - distance[selected]) / float(limit)

        if border.effect == BorderEffect.FADE:
            faded = original[selected]
            faded[:, 3] *= 1.0 - ratio
            colors[selected] = faded

        elif border.effect == BorderEffect.OUTLINE:
            atom = db.get_atom(atom_hash, override)
            colors[selected] = darker(atom.color, border.factor)

        elif border.effect == BorderEffect.SHARPEN:
            colors[selected] = darker(original[selected], ratio * 0.5)

        elif border.effect == BorderEffect.LIGHTEN:
            colors[selected] = lighter(original[selected], ratio * 0.5)

        elif border.effect == BorderEffect.BLEND:
            stop = 0.5 if other.effect == BorderEffect.BLEND else 1.0
            ys, xs = np.nonzero(selected)
            nearest = original[indices[0][ys, xs], indices[1][ys, xs]]

            amount = stop * ratio + rng.uniform(0.0, BLEND_NOISE, size=len(ys))
            source = original[ys, xs]
            colors[ys, xs] = source + (nearest - source) * amount[:, np.newaxis]

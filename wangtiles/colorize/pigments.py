"""
Pigment Module
==============

First colorization pass: fills the pixels of one atom according to its
pigment style.
"""

import logging
import numpy as np

from ..terrain import VOID, Atom, PigmentStyle
from ..geometry import Tile
from .colors import darker, lighter

logger = logging.getLogger(__name__)


def _is_degenerate(atom: Atom, width: int, height: int) -> bool:
    pigment = atom.pigment

    if pigment.style == PigmentStyle.RANDOMIZE:
        return pigment.size < 1 or pigment.size > min(width, height)
    if pigment.style == PigmentStyle.STRIPED:
        return pigment.stride < 1 or pigment.width < 0
    if pigment.style == PigmentStyle.PAVED:
        return pigment.width < 1 or pigment.length < 1

    return False


def _modulated(atom: Atom) -> np.ndarray:
    modulation = atom.pigment.modulation

    if modulation < 0.0:
        return lighter(atom.color, -modulation)

    return darker(atom.color, modulation)


def colorize_atom(colors: np.ndarray, atom: Atom, tile: Tile, rng: np.random.Generator):
    """
    Color every pixel of the tile that belongs to the atom.

    Args:
        colors: Buffer of the tile size, modified in place
        atom: Atom to paint, Void is ignored
        tile: Tile giving the atom-id grid
        rng: Random generator, used by the randomize style
    """
    if atom.id.hash == VOID:
        return

    pixels = tile.pixels
    height, width = pixels.shape
    mask = pixels == np.uint64(atom.id.hash)
    pigment = atom.pigment
    style = pigment.style

    if _is_degenerate(atom, width, height):
        logger.warning("Invalid %s pigment parameters for atom '%s', using plain color",
                       style.value, atom.id.name)
        style = PigmentStyle.PLAIN

    colors[mask] = atom.color

    if style == PigmentStyle.RANDOMIZE:
        size = pigment.size
        anomalies = int(pigment.ratio * width * height / (size * size)) + 1

        for _ in range(anomalies):
            x = int(rng.integers(0, width - size + 1))
            y = int(rng.integers(0, height - size + 1))

            if not mask[y, x]:
                continue

            change = float(np.clip(rng.normal(0.0, pigment.deviation), -0.5, 0.5))
            modified = darker(atom.color, change) if change > 0 else lighter(atom.color, -change)

            patch = mask[y:y + size, x:x + size]
            colors[y:y + size, x:x + size][patch] = modified

    elif style == PigmentStyle.STRIPED:
        ys, xs = np.indices(pixels.shape)
        clear = ((xs + ys) % pigment.stride >= pigment.width) & mask
        colors[clear, 3] = 0.0

    elif style == PigmentStyle.PAVED:
        ys, xs = np.indices(pixels.shape)
        yy = ys + pigment.width // 2
        xx = xs + pigment.length // 4

        even_row = (yy // pigment.width) % 2 == 0
        joint = np.where(even_row, xx % pigment.length == 0, xx % pigment.length == pigment.length // 2)
        mortar = ((yy % pigment.width == 0) | joint) & mask

        colors[mortar] = _modulated(atom)

"""
Colorize Module
===============

Raster colorization of tiles: pigments, border effects and previews.
"""

from .colors import new_colors, darker, lighter, extend, blit, to_rgba8
from .pigments import colorize_atom
from .borders import colorize_border, BLUR_KERNEL
from .tiles import colorize_raw_tile, colorize_tile
from .preview import generate_atom_preview, generate_wang2_preview, generate_wang3_preview

__all__ = [
    'new_colors',
    'darker',
    'lighter',
    'extend',
    'blit',
    'to_rgba8',
    'colorize_atom',
    'colorize_border',
    'BLUR_KERNEL',
    'colorize_raw_tile',
    'colorize_tile',
    'generate_atom_preview',
    'generate_wang2_preview',
    'generate_wang3_preview',
]

"""
Layout Module
=============

Canonical tilesets of an atom, a pairwise rule or a triple rule.
"""

from .tilesets import (
    Tileset,
    TWO_CORNERS_LAYOUT,
    THREE_CORNERS_LAYOUT,
    generate_plain_tileset,
    generate_two_corners_wang_tileset,
    generate_three_corners_wang_tileset,
)

__all__ = [
    'Tileset',
    'TWO_CORNERS_LAYOUT',
    'THREE_CORNERS_LAYOUT',
    'generate_plain_tileset',
    'generate_two_corners_wang_tileset',
    'generate_three_corners_wang_tileset',
]

"""
Visualization Module
====================

Matplotlib display of atlases and previews.
"""

from .viewer import TilesetVisualizer

__all__ = [
    'TilesetVisualizer',
]

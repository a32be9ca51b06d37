"""
Pipeline Module
===============

Generation runner of a tileset project.
"""

from .runner import TilesetRunner, GenerationResult

__all__ = [
    'TilesetRunner',
    'GenerationResult',
]

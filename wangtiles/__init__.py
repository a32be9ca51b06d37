"""
Wang Tileset Generator
======================

Procedural synthesis of seamlessly tileable terrain tilesets.

Given named terrain atoms and pairwise/triple adjacency rules, the package
rasterizes every tile of the corresponding Wang tilesets, colorizes them
and packs them into one atlas image with a Tiled TSX description.

Key Features:
- Randomized but boundary-consistent dividing curves
- Canonical 4x4 and 6x6 layouts honoring the Wang corner invariant
- Pigments and border effects applied in two ordered passes
- Deterministic atlas packing and Tiled export

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import Config
from .terrain import (
    INVALID_ID,
    VOID,
    hash_name,
    AtomId,
    Atom,
    Pigment,
    PigmentStyle,
    Border,
    BorderEffect,
    Displacement,
    Edge,
    Wang2,
    Wang3,
    TileSettings,
    Settings,
    TilesetData,
    PreviewOverride,
    load_project,
    save_project,
)
from .geometry import Tile, Fence
from .layout import Tileset
from .export import AtlasCapacityError
from .metrics import ValidationReport
from .visualization import TilesetVisualizer
from .pipeline import TilesetRunner, GenerationResult

__all__ = [
    'Config',
    'INVALID_ID', 'VOID', 'hash_name',
    'AtomId', 'Atom', 'Pigment', 'PigmentStyle',
    'Border', 'BorderEffect', 'Displacement', 'Edge',
    'Wang2', 'Wang3', 'TileSettings', 'Settings',
    'TilesetData', 'PreviewOverride',
    'load_project', 'save_project',
    'Tile', 'Fence',
    'Tileset',
    'AtlasCapacityError',
    'ValidationReport',
    'TilesetVisualizer',
    'TilesetRunner', 'GenerationResult',
]

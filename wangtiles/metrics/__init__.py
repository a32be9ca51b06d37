"""
Metrics Module
==============

Coverage and Wang adjacency checks, tileset statistics.
"""

from .tileset_metrics import (
    check_coverage,
    check_wang_corners,
    check_wang_borders,
    TilesetStats,
    compute_tileset_stats,
    ValidationReport,
    validate_tilesets,
)

__all__ = [
    'check_coverage',
    'check_wang_corners',
    'check_wang_borders',
    'TilesetStats',
    'compute_tileset_stats',
    'ValidationReport',
    'validate_tilesets',
]

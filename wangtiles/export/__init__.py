"""
Export Module
=============

Atlas packing, PNG output and Tiled TSX metadata.
"""

from .atlas import (
    MAX_IMAGE_SIZE,
    AtlasCapacityError,
    ImageFeatures,
    DecoratedTileset,
    compute_image_features,
    generate_tilesets,
    generate_tileset_image,
    save_atlas,
)
from .tsx import generate_tileset_xml, save_tileset_xml

__all__ = [
    'MAX_IMAGE_SIZE',
    'AtlasCapacityError',
    'ImageFeatures',
    'DecoratedTileset',
    'compute_image_features',
    'generate_tilesets',
    'generate_tileset_image',
    'save_atlas',
    'generate_tileset_xml',
    'save_tileset_xml',
]

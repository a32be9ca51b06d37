"""
Tiled TSX Export Module
=======================

Terrain metadata of an atlas in the Tiled tileset format: one terrain per
atom, the four corner terrains of every tile and its fence segments as
custom properties.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Union

from ..terrain import TilesetData
from .atlas import DecoratedTileset

logger = logging.getLogger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


def generate_tileset_xml(image: Union[str, Path], db: TilesetData, tilesets: DecoratedTileset) -> str:
    """
    Build the TSX document of an atlas.

    Args:
        image: Path of the atlas image, as referenced by the document
        db: Project data
        tilesets: Placed tilesets of the atlas

    Returns:
        XML text
    """
    image = Path(image)
    settings = db.settings.tile
    ext = settings.extended_size
    width, height = tilesets.features.size

    columns = width // ext
    rows = height // ext

    mapping: Dict[int, int] = {}
    for index, atom in enumerate(db.atoms):
        mapping.setdefault(atom.id.hash, index)

    def terrain_index(hash: int) -> str:
        return str(mapping[hash]) if hash in mapping else ''

    def position_to_index(position) -> int:
        x, y = position
        return y * columns + x

    root = ET.Element('tileset', {
        'name': image.stem,
        'tilewidth': str(settings.size),
        'tileheight': str(settings.size),
        'tilecount': str(columns * rows),
        'columns': str(columns),
        'spacing': str(settings.spacing * 2),
        'margin': str(settings.spacing),
    })

    ET.SubElement(root, 'image', {
        'source': str(image),
        'width': str(width),
        'height': str(height),
    })

    terrain_types = ET.SubElement(root, 'terraintypes')

    for atom in db.atoms:
        position = tilesets.find_terrain_position(atom.id.hash)
        tile_index = position_to_index(position) if position != (-1, -1) else -1
        ET.SubElement(terrain_types, 'terrain', {'name': atom.id.name, 'tile': str(tile_index)})

    for tileset in tilesets.all_tilesets():
        tx, ty = tileset.position

        for (x, y), tile in tileset.items():
            element = ET.SubElement(root, 'tile', {
                'id': str(position_to_index((tx + x, ty + y))),
                'terrain': ','.join(terrain_index(corner) for corner in tile.terrain),
            })

            if tile.fences:
                properties = ET.SubElement(element, 'properties')
                ET.SubElement(properties, 'property', {
                    'name': 'fence_count',
                    'value': str(len(tile.fences)),
                    'type': 'int',
                })

                for i, fence in enumerate(tile.fences):
                    ET.SubElement(properties, 'property', {
                        'name': f'fence{i}',
                        'value': ','.join(str(v) for v in fence.to_tuple()),
                    })

    ET.indent(root, space='\t')
    return XML_HEADER + ET.tostring(root, encoding='unicode') + '\n'


def save_tileset_xml(path: Union[str, Path], xml: str):
    with open(path, 'w', encoding='utf-8') as f:
        f.write(xml)

    logger.info("Tileset description saved in '%s'", path)

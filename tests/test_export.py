"""
Tests for atlas packing, PNG output and the TSX description.
"""

import xml.etree.ElementTree as ET

import matplotlib.image as mpimg
import numpy as np
import pytest

from wangtiles.terrain import Atom, AtomId, Settings, TileSettings, hash_name
from wangtiles.export import (
    AtlasCapacityError,
    compute_image_features,
    generate_tilesets,
    generate_tileset_image,
    generate_tileset_xml,
    save_atlas,
    save_tileset_xml,
)

from conftest import RED


def test_features_smallest_atlas(overlay_db):
    features = compute_image_features(overlay_db.settings)

    assert features.size == (216, 144)
    assert features.atoms_per_line == 3
    assert features.atoms_line_count == 1
    assert features.wang2_line_count == 1
    assert features.wang3_per_line == 2
    assert features.wang3_line_count == 0


def test_features_grows_with_counts():
    small = compute_image_features(Settings(max_atom_count=4, max_wang2_count=4, max_wang3_count=4,
                                            tile=TileSettings(size=16)))
    large = compute_image_features(Settings(max_atom_count=40, max_wang2_count=40, max_wang3_count=40,
                                            tile=TileSettings(size=16)))

    assert large.width > small.width
    assert large.height <= large.width
    assert large.width % (12 * 18) == 0


def test_features_capacity_error():
    settings = Settings(max_atom_count=10000, max_wang2_count=10000, max_wang3_count=10000,
                        tile=TileSettings(size=64))

    with pytest.raises(AtlasCapacityError):
        compute_image_features(settings)


def test_too_many_atoms(overlay_db, rng):
    overlay_db.atoms.append(Atom(id=AtomId.from_name('B')))

    with pytest.raises(AtlasCapacityError, match='Too many atoms'):
        generate_tilesets(rng, overlay_db)


def test_tileset_positions(db, rng):
    tilesets = generate_tilesets(rng, db)
    features = tilesets.features

    assert [t.position for t in tilesets.atoms][:2] == [(0, 0), (4, 0)]

    wang2_top = features.atoms_line_count * 4
    assert tilesets.wang2[0].position == (0, wang2_top)

    wang3_top = wang2_top + features.wang2_line_count * 4
    assert tilesets.wang3[0].position == (0, wang3_top)

    assert tilesets.tile_count == 3 * 16 + 3 * 16 + 36


def test_find_terrain_position(db, rng, blue_atom, caplog):
    tilesets = generate_tilesets(rng, db)

    assert tilesets.find_terrain_position(blue_atom.id.hash) == (4, 0)
    assert tilesets.find_terrain_position(hash_name('Lava')) == (-1, -1)
    assert 'Could not find a terrain' in caplog.text


def test_tileset_image(overlay_db, rng):
    tilesets = generate_tilesets(rng, overlay_db)
    colors = generate_tileset_image(rng, overlay_db, tilesets)

    assert colors.shape == (144, 216, 4)

    # first plain tile with its replicated spacing
    assert np.allclose(colors[0:18, 0:18], RED)

    # unused atom slots stay transparent
    assert np.all(colors[0:72, 72:, 3] == 0.0)


def test_save_atlas(tmp_path, overlay_db, rng):
    tilesets = generate_tilesets(rng, overlay_db)
    colors = generate_tileset_image(rng, overlay_db, tilesets)

    path = tmp_path / 'atlas.png'
    save_atlas(path, colors)
    image = mpimg.imread(str(path))

    assert image.shape == (144, 216, 4)
    assert np.allclose(image[5, 5], RED)


def test_tileset_xml(overlay_db, rng, red_atom):
    tilesets = generate_tilesets(rng, overlay_db)
    xml = generate_tileset_xml('build/terrain.png', overlay_db, tilesets)

    assert xml.startswith('<?xml version="1.0" encoding="UTF-8"?>')

    root = ET.fromstring(xml.encode('utf-8'))

    assert root.tag == 'tileset'
    assert root.get('name') == 'terrain'
    assert root.get('tilewidth') == '16'
    assert root.get('columns') == '12'
    assert root.get('tilecount') == '96'
    assert root.get('spacing') == '2'
    assert root.get('margin') == '1'

    image = root.find('image')
    assert image.get('width') == '216'
    assert image.get('height') == '144'

    terrains = root.findall('terraintypes/terrain')
    assert [(t.get('name'), t.get('tile')) for t in terrains] == [('A', '0')]

    tiles = root.findall('tile')
    assert len(tiles) == 32
    assert tiles[0].get('terrain') == '0,0,0,0'

    # overlay tiles leave Void corners empty
    assert any(',,' in t.get('terrain') or t.get('terrain').endswith(',') for t in tiles)


def test_tileset_xml_fences(overlay_db, rng):
    tilesets = generate_tilesets(rng, overlay_db)
    root = ET.fromstring(generate_tileset_xml('terrain.png', overlay_db, tilesets).encode('utf-8'))

    with_fences = [t for t in root.findall('tile') if t.find('properties') is not None]
    assert len(with_fences) > 0

    for tile in with_fences:
        properties = {p.get('name'): p.get('value') for p in tile.find('properties')}
        count = int(properties['fence_count'])

        assert count >= 1
        for i in range(count):
            assert len(properties[f'fence{i}'].split(',')) == 4


def test_wang2_tile_ids(overlay_db, rng):
    tilesets = generate_tilesets(rng, overlay_db)
    root = ET.fromstring(generate_tileset_xml('terrain.png', overlay_db, tilesets).encode('utf-8'))

    ids = [int(t.get('id')) for t in root.findall('tile')]

    # wang2 band starts on the fifth row of 12 columns
    assert ids[16] == 4 * 12
    assert len(set(ids)) == len(ids)


def test_save_tileset_xml(tmp_path, overlay_db, rng):
    tilesets = generate_tilesets(rng, overlay_db)
    xml = generate_tileset_xml('terrain.png', overlay_db, tilesets)

    path = tmp_path / 'terrain.tsx'
    save_tileset_xml(path, xml)

    assert path.read_text(encoding='utf-8') == xml

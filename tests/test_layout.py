"""
Tests for the canonical layouts and the tileset checks.
"""

import numpy as np
import pytest

from wangtiles.terrain import Displacement, Edge, Wang3
from wangtiles.layout import (
    THREE_CORNERS_LAYOUT,
    TWO_CORNERS_LAYOUT,
    Tileset,
    generate_plain_tileset,
    generate_three_corners_wang_tileset,
    generate_two_corners_wang_tileset,
)
from wangtiles.metrics import (
    check_coverage,
    check_wang_borders,
    check_wang_corners,
    compute_tileset_stats,
    validate_tilesets,
)

from conftest import make_wang2


def test_layout_tables_are_complete():
    assert sorted(TWO_CORNERS_LAYOUT) == [(x, y) for x in range(4) for y in range(4)]
    assert sorted(THREE_CORNERS_LAYOUT) == [(x, y) for x in range(6) for y in range(6)]


def test_tileset_indexing():
    tileset = Tileset(3, 2)
    assert tileset.size == (3, 2)
    assert list(tileset.positions())[:4] == [(0, 0), (1, 0), (2, 0), (0, 1)]

    tileset[2, 1] = 'tile'
    assert tileset.tiles[1][2] == 'tile'


def test_plain_tileset(db, red_atom):
    tileset = generate_plain_tileset(red_atom.id.hash, db)

    assert tileset.size == (4, 4)
    for _, tile in tileset.items():
        assert np.all(tile.pixels == red_atom.id.hash)
        assert tile.origin == (red_atom.id.hash,)


def test_two_corners_every_combination(db, rng):
    tileset = generate_two_corners_wang_tileset(db.wang2[0], rng, db)
    corners = {tuple(tile.terrain) for _, tile in tileset.items()}

    # all 2^4 corner assignments appear exactly once
    assert len(corners) == 16


def test_three_corners_distinct_tiles(db, rng):
    tileset = generate_three_corners_wang_tileset(db.wang3[0], rng, db)
    corners = [tuple(tile.terrain) for _, tile in tileset.items()]

    assert len(corners) == 36
    assert len(set(corners)) == 36
    assert all(len(set(c)) == 3 for c in corners)


def test_two_corners_corner_invariant(db, rng):
    for wang in db.wang2:
        tileset = generate_two_corners_wang_tileset(wang, rng, db)
        assert check_wang_corners(tileset) == []


def test_three_corners_corner_invariant(db, rng):
    tileset = generate_three_corners_wang_tileset(db.wang3[0], rng, db)
    assert check_wang_corners(tileset) == []


@pytest.mark.parametrize('order', [(0, 1, 2), (2, 0, 1), (1, 0, 2)])
def test_three_corners_corner_invariant_any_order(db, rng, order):
    ids = db.wang3[0].ids
    wang = Wang3(ids=tuple(ids[i] for i in order))

    assert check_wang_corners(generate_three_corners_wang_tileset(wang, rng, db)) == []


def test_two_corners_border_invariant(db, rng):
    tileset = generate_two_corners_wang_tileset(db.wang2[0], rng, db)
    assert check_wang_borders(tileset) == []


def test_three_corners_border_invariant(db, rng):
    tileset = generate_three_corners_wang_tileset(db.wang3[0], rng, db)
    assert check_wang_borders(tileset) == []


def test_coverage_with_rough_edges(db, rng, red_atom, blue_atom, green_atom):
    rough = Edge(offset=1, displacement=Displacement(iterations=3, initial=0.6, reduction=0.6))
    db.wang2 = [
        make_wang2(red_atom, blue_atom, rough),
        make_wang2(blue_atom, green_atom, rough),
        make_wang2(green_atom, red_atom, rough),
    ]

    tilesets = [generate_two_corners_wang_tileset(wang, rng, db) for wang in db.wang2]
    tilesets.append(generate_three_corners_wang_tileset(db.wang3[0], rng, db))

    for tileset in tilesets:
        assert all(check_coverage(tile) for _, tile in tileset.items())
        assert check_wang_corners(tileset) == []


def test_broken_tileset_is_reported(db, rng):
    tileset = generate_two_corners_wang_tileset(db.wang2[0], rng, db)
    tileset[0, 0], tileset[1, 0] = tileset[1, 0], tileset[0, 0]

    assert check_wang_corners(tileset) != []
    assert check_wang_borders(tileset) != []


def test_same_seed_same_tileset(db):
    a = generate_three_corners_wang_tileset(db.wang3[0], np.random.default_rng(3), db)
    b = generate_three_corners_wang_tileset(db.wang3[0], np.random.default_rng(3), db)

    for (position, tile_a) in a.items():
        assert np.array_equal(tile_a.pixels, b[position].pixels)


def test_stats(db, rng, red_atom, blue_atom):
    tileset = generate_two_corners_wang_tileset(db.wang2[0], rng, db)
    stats = compute_tileset_stats(tileset)

    assert stats.tile_count == 16
    assert stats.pixel_count == 16 * 16 * 16
    assert set(stats.atom_pixels) == {red_atom.id.hash, blue_atom.id.hash}
    assert sum(stats.atom_share.values()) == pytest.approx(1.0)
    assert set(stats.to_dict(db)['atom_share']) == {'A', 'B'}


def test_validate_tilesets(db, rng):
    groups = {
        'atoms': [generate_plain_tileset(atom.id.hash, db) for atom in db.atoms],
        'wang2': [generate_two_corners_wang_tileset(wang, rng, db) for wang in db.wang2],
        'wang3': [generate_three_corners_wang_tileset(db.wang3[0], rng, db)],
    }
    report = validate_tilesets(groups, check_borders=True)

    assert report.is_valid
    assert report.tileset_count == 7
    assert report.tile_count == 3 * 16 + 3 * 16 + 36
    assert report.to_dict()['valid']

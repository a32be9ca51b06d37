"""
Tests for atom ids, database lookups and maintenance operations.
"""

import logging

from wangtiles.terrain import (
    INVALID_ID,
    VOID,
    Atom,
    AtomId,
    Border,
    Displacement,
    Edge,
    PreviewOverride,
    TilesetData,
    Wang2,
    Wang3,
    hash_name,
)

from conftest import make_wang2


def test_hash_name_is_fnv1a():
    # reference values of 64-bit FNV-1a
    assert hash_name('') == 0xCBF29CE484222325
    assert hash_name('a') == 0xAF63DC4C8601EC8C
    assert hash_name('Void') == VOID
    assert hash_name('Grass') != INVALID_ID


def test_atom_id_from_name():
    atom_id = AtomId.from_name('Grass')
    assert atom_id.name == 'Grass'
    assert atom_id.hash == hash_name('Grass')
    assert AtomId.void().is_void


def test_get_atom(db, red_atom):
    assert db.get_atom(red_atom.id.hash) is red_atom


def test_get_atom_unknown_is_void(db, caplog):
    with caplog.at_level(logging.WARNING):
        atom = db.get_atom(hash_name('Lava'))

    assert atom.id.hash == VOID
    assert atom.id.name == '-'
    assert atom.color == (0.0, 0.0, 0.0, 0.0)
    assert 'Unknown atom' in caplog.text


def test_get_atom_void_does_not_warn(db, caplog):
    with caplog.at_level(logging.WARNING):
        db.get_atom(VOID)

    assert caplog.text == ''


def test_get_atom_override(db, red_atom):
    edited = Atom(id=red_atom.id, color=(0.5, 0.5, 0.5, 1.0))
    override = PreviewOverride(atom=edited)

    assert db.get_atom(red_atom.id.hash, override) is edited
    assert db.get_atom(red_atom.id.hash) is red_atom


def test_get_wang2_any_order(db, red_atom, blue_atom):
    rule = db.get_wang2(red_atom.id.hash, blue_atom.id.hash)
    assert db.get_wang2(blue_atom.id.hash, red_atom.id.hash) is rule


def test_get_wang2_missing_puts_void_last(red_atom, caplog):
    data = TilesetData(atoms=[red_atom])

    with caplog.at_level(logging.WARNING):
        rule = data.get_wang2(VOID, red_atom.id.hash)

    assert rule.ids == (red_atom.id.hash, VOID)
    assert rule.is_overlay()
    assert 'No wang2' in caplog.text


def test_get_edge_inverted(red_atom, blue_atom):
    edge = Edge(offset=3, limit=True)
    data = TilesetData(atoms=[red_atom, blue_atom], wang2=[make_wang2(red_atom, blue_atom, edge)])

    assert data.get_edge(red_atom.id.hash, blue_atom.id.hash).offset == 3
    inverted = data.get_edge(blue_atom.id.hash, red_atom.id.hash)
    assert inverted.offset == -3
    assert inverted.limit


def test_edge_invert_copies_displacement():
    edge = Edge(offset=1, displacement=Displacement(iterations=3), limit=True)
    inverted = edge.invert()

    assert inverted.displacement == edge.displacement
    assert inverted.displacement is not edge.displacement

    inverted.displacement.iterations = 0
    assert edge.displacement.iterations == 3


def test_get_edge_missing_is_default(db, red_atom):
    edge = db.get_edge(red_atom.id.hash, hash_name('Lava'))
    assert edge == Edge()


def test_get_edge_override_first(db, red_atom, blue_atom):
    edited = make_wang2(red_atom, blue_atom, Edge(offset=2))
    override = PreviewOverride(wang2=edited)

    assert db.get_edge(red_atom.id.hash, blue_atom.id.hash, override).offset == 2
    assert db.get_edge(red_atom.id.hash, blue_atom.id.hash).offset == 0


def test_update_atom_renames_references(db, red_atom):
    renamed = Atom(id=AtomId.from_name('Sand'), color=red_atom.color)
    db.update_atom(red_atom, renamed)

    assert db.atoms[0] is renamed
    assert any(renamed.id.hash in wang.ids for wang in db.wang2)
    assert all(red_atom.id.hash not in wang.ids for wang in db.wang2)
    assert db.wang3[0].ids[0] == renamed.id


def test_delete_atom_removes_rules(db, green_atom):
    db.delete_atom(green_atom.id.hash)

    assert len(db.atoms) == 2
    assert len(db.wang2) == 1
    assert db.wang3 == []


def test_generate_all_wang3_triangle(db):
    db.wang3 = []
    db.generate_all_wang3()

    assert len(db.wang3) == 1
    assert sorted(db.wang3[0].hashes) == sorted(atom.id.hash for atom in db.atoms)


def test_generate_all_wang3_void_last(red_atom, blue_atom):
    void = Atom.void()
    data = TilesetData(
        atoms=[red_atom, blue_atom],
        wang2=[
            make_wang2(red_atom, blue_atom),
            make_wang2(red_atom, void),
            make_wang2(blue_atom, void),
        ],
    )
    data.generate_all_wang3()

    assert len(data.wang3) == 1
    assert data.wang3[0].is_overlay()


def test_generate_all_wang3_open_chain(red_atom, blue_atom, green_atom):
    other = Atom(id=AtomId.from_name('D'))
    data = TilesetData(
        atoms=[red_atom, blue_atom, green_atom, other],
        wang2=[
            make_wang2(red_atom, blue_atom),
            make_wang2(blue_atom, green_atom),
            make_wang2(green_atom, other),
        ],
    )
    data.generate_all_wang3()

    assert data.wang3 == []


def test_validate_clean(db):
    assert db.validate() == []


def test_validate_problems(red_atom, blue_atom):
    data = TilesetData(
        atoms=[red_atom, red_atom],
        wang2=[Wang2(borders=(Border(id=AtomId.void()), Border(id=red_atom.id)))],
        wang3=[Wang3(ids=(red_atom.id, blue_atom.id, AtomId.void()))],
    )
    problems = data.validate()

    assert any('Duplicate' in p for p in problems)
    assert any('Void must be the second' in p for p in problems)
    assert any("Unknown atom 'B'" in p for p in problems)
    assert any('Missing wang2' in p for p in problems)

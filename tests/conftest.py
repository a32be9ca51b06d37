"""
Shared fixtures: three plain atoms, straight edges between them and a
seeded generator.
"""

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

from wangtiles import (
    Atom,
    AtomId,
    Border,
    Displacement,
    Edge,
    Pigment,
    Settings,
    TileSettings,
    TilesetData,
    Wang2,
    Wang3,
)

RED = (1.0, 0.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)
GREEN = (0.0, 1.0, 0.0, 1.0)


def straight_edge(limit: bool = False) -> Edge:
    """No offset and no displacement"""
    return Edge(offset=0, displacement=Displacement(iterations=0), limit=limit)


def make_wang2(a: Atom, b: Atom, edge: Edge = None) -> Wang2:
    return Wang2(borders=(Border(id=a.id), Border(id=b.id)), edge=edge or straight_edge())


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def tile_settings():
    return TileSettings(size=16, spacing=1)


@pytest.fixture
def red_atom():
    return Atom(id=AtomId.from_name('A'), color=RED, pigment=Pigment.plain())


@pytest.fixture
def blue_atom():
    return Atom(id=AtomId.from_name('B'), color=BLUE, pigment=Pigment.plain())


@pytest.fixture
def green_atom():
    return Atom(id=AtomId.from_name('C'), color=GREEN, pigment=Pigment.plain())


@pytest.fixture
def db(tile_settings, red_atom, blue_atom, green_atom):
    """Triangle of atoms with straight edges and its triple rule"""
    settings = Settings(max_atom_count=4, max_wang2_count=4, max_wang3_count=2, tile=tile_settings)

    return TilesetData(
        settings=settings,
        atoms=[red_atom, blue_atom, green_atom],
        wang2=[
            make_wang2(red_atom, blue_atom),
            make_wang2(blue_atom, green_atom),
            make_wang2(green_atom, red_atom),
        ],
        wang3=[Wang3(ids=(red_atom.id, blue_atom.id, green_atom.id))],
    )


@pytest.fixture
def overlay_db(tile_settings, red_atom):
    """One atom over Void, the smallest complete project"""
    settings = Settings(max_atom_count=1, max_wang2_count=1, max_wang3_count=0, tile=tile_settings)
    rule = Wang2(borders=(Border(id=red_atom.id), Border(id=AtomId.void())), edge=straight_edge(limit=True))

    return TilesetData(settings=settings, atoms=[red_atom], wang2=[rule], wang3=[])

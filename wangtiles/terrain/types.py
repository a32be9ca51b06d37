"""
Terrain Types Module
====================

Atoms, borders, edges and adjacency rules of a tileset project.

Atom ids are 64-bit FNV-1a hashes of the atom name, stored as plain ints
so they fit directly into ``numpy.uint64`` pixel grids.
"""

from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Tuple

Color = Tuple[float, float, float, float]

INVALID_ID = 0

_FNV_OFFSET = 0xCBF29CE484222325
_FNV_PRIME = 0x100000001B3
_MASK_64 = 0xFFFFFFFFFFFFFFFF


def hash_name(name: str) -> int:
    """Stable 64-bit FNV-1a hash of an atom name"""
    value = _FNV_OFFSET
    for byte in name.encode('utf-8'):
        value ^= byte
        value = (value * _FNV_PRIME) & _MASK_64
    return value


VOID = hash_name('Void')

TRANSPARENT: Color = (0.0, 0.0, 0.0, 0.0)

# Tiles per side of each generated tileset
ATOMS_TILESET_SIZE = 4
WANG2_TILESET_SIZE = 4
WANG3_TILESET_SIZE = 6


class PigmentStyle(Enum):
    """Interior fill algorithm of an atom"""
    PLAIN = 'plain'
    RANDOMIZE = 'randomize'
    STRIPED = 'striped'
    PAVED = 'paved'


class BorderEffect(Enum):
    """Post-process applied near the boundary with another atom"""
    NONE = 'none'
    FADE = 'fade'
    OUTLINE = 'outline'
    SHARPEN = 'sharpen'
    LIGHTEN = 'lighten'
    BLUR = 'blur'
    BLEND = 'blend'


@dataclass(frozen=True)
class AtomId:
    """Display name plus the hash used as key everywhere"""
    name: str = ''
    hash: int = INVALID_ID

    @classmethod
    def from_name(cls, name: str) -> 'AtomId':
        return cls(name=name, hash=hash_name(name))

    @classmethod
    def void(cls) -> 'AtomId':
        return cls(name='-', hash=VOID)

    @property
    def is_void(self) -> bool:
        return self.hash == VOID


@dataclass
class Pigment:
    """
    Pigment of an atom.

    Only the parameters of the selected style are meaningful:
    - randomize: ratio, deviation, size
    - striped: width, stride
    - paved: width, length, modulation
    """
    style: PigmentStyle = PigmentStyle.PLAIN
    ratio: float = 0.0
    deviation: float = 0.0
    size: int = 1
    width: int = 1
    stride: int = 2
    length: int = 2
    modulation: float = 0.0

    @classmethod
    def plain(cls) -> 'Pigment':
        return cls()

    @classmethod
    def randomize(cls, ratio: float, deviation: float, size: int) -> 'Pigment':
        return cls(style=PigmentStyle.RANDOMIZE, ratio=ratio, deviation=deviation, size=size)

    @classmethod
    def striped(cls, width: int, stride: int) -> 'Pigment':
        return cls(style=PigmentStyle.STRIPED, width=width, stride=stride)

    @classmethod
    def paved(cls, width: int, length: int, modulation: float) -> 'Pigment':
        return cls(style=PigmentStyle.PAVED, width=width, length=length, modulation=modulation)


@dataclass
class Atom:
    """Named terrain type"""
    id: AtomId = field(default_factory=AtomId)
    color: Color = TRANSPARENT
    pigment: Pigment = field(default_factory=Pigment)

    @classmethod
    def void(cls) -> 'Atom':
        return cls(id=AtomId.void(), color=TRANSPARENT, pigment=Pigment.plain())


@dataclass
class Border:
    """
    One side of a Wang2 rule.

    ``distance`` is used by every effect except none and blur,
    ``factor`` only by outline.
    """
    id: AtomId = field(default_factory=AtomId)
    effect: BorderEffect = BorderEffect.NONE
    distance: int = 0
    factor: float = 0.0


@dataclass
class Displacement:
    """Midpoint displacement parameters of a dividing curve"""
    iterations: int = 2
    initial: float = 0.5
    reduction: float = 0.5


@dataclass
class Edge:
    """Geometry of the boundary between two atoms"""
    offset: int = 0
    displacement: Displacement = field(default_factory=Displacement)
    limit: bool = False

    def invert(self) -> 'Edge':
        """Same edge seen from the other atom"""
        return Edge(offset=-self.offset, displacement=replace(self.displacement), limit=self.limit)


@dataclass
class Wang2:
    """Pairwise adjacency rule"""
    borders: Tuple[Border, Border] = field(default_factory=lambda: (Border(), Border()))
    edge: Edge = field(default_factory=Edge)

    @property
    def ids(self) -> Tuple[int, int]:
        return self.borders[0].id.hash, self.borders[1].id.hash

    def is_overlay(self) -> bool:
        return self.borders[1].id.hash == VOID

    def matches(self, id0: int, id1: int) -> bool:
        """Check if the rule links the two atoms, in any order"""
        a, b = self.ids
        return (a == id0 and b == id1) or (a == id1 and b == id0)


@dataclass
class Wang3:
    """Triple adjacency rule, edges are derived from the Wang2 rules"""
    ids: Tuple[AtomId, AtomId, AtomId] = field(default_factory=lambda: (AtomId(), AtomId(), AtomId()))

    @property
    def hashes(self) -> Tuple[int, int, int]:
        return tuple(atom_id.hash for atom_id in self.ids)

    def is_overlay(self) -> bool:
        return self.ids[2].hash == VOID


@dataclass
class TileSettings:
    """Pixel geometry of a single tile"""
    size: int = 32
    spacing: int = 1

    @property
    def extended_size(self) -> int:
        """Tile size including the replicated border on both sides"""
        return self.size + 2 * self.spacing


@dataclass
class Settings:
    """Project settings, max counts bound the atlas layout search"""
    locked: bool = False
    max_atom_count: int = 64
    max_wang2_count: int = 48
    max_wang3_count: int = 32
    tile: TileSettings = field(default_factory=TileSettings)

"""
Terrain Module
==============

Data model of a tileset project: atoms, adjacency rules and settings.
"""

from .types import (
    INVALID_ID,
    VOID,
    ATOMS_TILESET_SIZE,
    WANG2_TILESET_SIZE,
    WANG3_TILESET_SIZE,
    hash_name,
    PigmentStyle,
    BorderEffect,
    AtomId,
    Pigment,
    Atom,
    Border,
    Displacement,
    Edge,
    Wang2,
    Wang3,
    TileSettings,
    Settings,
)
from .database import TilesetData, PreviewOverride
from .project import load_project, save_project, project_to_dict, project_from_dict

__all__ = [
    'INVALID_ID',
    'VOID',
    'ATOMS_TILESET_SIZE',
    'WANG2_TILESET_SIZE',
    'WANG3_TILESET_SIZE',
    'hash_name',
    'PigmentStyle',
    'BorderEffect',
    'AtomId',
    'Pigment',
    'Atom',
    'Border',
    'Displacement',
    'Edge',
    'Wang2',
    'Wang3',
    'TileSettings',
    'Settings',
    'TilesetData',
    'PreviewOverride',
    'load_project',
    'save_project',
    'project_to_dict',
    'project_from_dict',
]

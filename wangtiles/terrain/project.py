"""
Project Document Module
=======================

JSON load/save of a tileset project.

Colors are stored as four 0-255 integers, atom references by name.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from .types import (
    Atom,
    AtomId,
    Border,
    BorderEffect,
    Color,
    Displacement,
    Edge,
    Pigment,
    PigmentStyle,
    Settings,
    TileSettings,
    Wang2,
    Wang3,
)
from .database import TilesetData

logger = logging.getLogger(__name__)


# ==================== Encoding ====================

# Names under which the Void atom may be referenced
VOID_NAMES = ('-', 'Void')


def atom_id_from_name(name: str) -> AtomId:
    if name in VOID_NAMES:
        return AtomId.void()
    return AtomId.from_name(name)


def color_to_json(color: Color) -> list:
    return [int(round(min(1.0, max(0.0, c)) * 255)) for c in color]


def color_from_json(values: list) -> Color:
    r, g, b, a = (int(v) for v in values[:4])
    return (r / 255.0, g / 255.0, b / 255.0, a / 255.0)


def pigment_to_dict(pigment: Pigment) -> Dict[str, Any]:
    d: Dict[str, Any] = {'style': pigment.style.value}

    if pigment.style == PigmentStyle.RANDOMIZE:
        d.update(ratio=pigment.ratio, deviation=pigment.deviation, size=pigment.size)
    elif pigment.style == PigmentStyle.STRIPED:
        d.update(width=pigment.width, stride=pigment.stride)
    elif pigment.style == PigmentStyle.PAVED:
        d.update(width=pigment.width, length=pigment.length, modulation=pigment.modulation)

    return d


def pigment_from_dict(d: Dict[str, Any]) -> Pigment:
    style = PigmentStyle(d['style'])

    if style == PigmentStyle.RANDOMIZE:
        return Pigment.randomize(float(d['ratio']), float(d['deviation']), int(d['size']))
    if style == PigmentStyle.STRIPED:
        return Pigment.striped(int(d['width']), int(d['stride']))
    if style == PigmentStyle.PAVED:
        return Pigment.paved(int(d['width']), int(d['length']), float(d['modulation']))

    return Pigment.plain()


def border_to_dict(border: Border) -> Dict[str, Any]:
    d: Dict[str, Any] = {'id': border.id.name, 'effect': border.effect.value}

    if border.effect == BorderEffect.OUTLINE:
        d.update(distance=border.distance, factor=border.factor)
    elif border.effect not in (BorderEffect.NONE, BorderEffect.BLUR):
        d['distance'] = border.distance

    return d


def border_from_dict(d: Dict[str, Any]) -> Border:
    effect = BorderEffect(d['effect'])
    border = Border(id=atom_id_from_name(d['id']), effect=effect)

    if effect == BorderEffect.OUTLINE:
        border.distance = int(d['distance'])
        border.factor = float(d['factor'])
    elif effect not in (BorderEffect.NONE, BorderEffect.BLUR):
        border.distance = int(d['distance'])

    return border


def project_to_dict(data: TilesetData) -> Dict[str, Any]:
    """Convert a project to its JSON document"""
    settings = data.settings

    return {
        'settings': {
            'locked': settings.locked,
            'max_atom_count': settings.max_atom_count,
            'max_wang2_count': settings.max_wang2_count,
            'max_wang3_count': settings.max_wang3_count,
            'tile': {
                'size': settings.tile.size,
                'spacing': settings.tile.spacing,
            },
        },
        'atoms': [
            {
                'id': atom.id.name,
                'color': color_to_json(atom.color),
                'pigment': pigment_to_dict(atom.pigment),
            }
            for atom in data.atoms
        ],
        'wang2': [
            {
                'borders': [border_to_dict(border) for border in wang.borders],
                'offset': wang.edge.offset,
                'displacement': {
                    'iterations': wang.edge.displacement.iterations,
                    'initialFactor': wang.edge.displacement.initial,
                    'reductionFactor': wang.edge.displacement.reduction,
                },
                'limit': wang.edge.limit,
            }
            for wang in data.wang2
        ],
        'wang3': [[atom_id.name for atom_id in wang.ids] for wang in data.wang3],
    }


def project_from_dict(d: Dict[str, Any]) -> TilesetData:
    """Build a project from its JSON document"""
    s = d['settings']
    settings = Settings(
        locked=bool(s['locked']),
        max_atom_count=int(s['max_atom_count']),
        max_wang2_count=int(s['max_wang2_count']),
        max_wang3_count=int(s['max_wang3_count']),
        tile=TileSettings(size=int(s['tile']['size']), spacing=int(s['tile']['spacing'])),
    )

    atoms = [
        Atom(
            id=AtomId.from_name(a['id']),
            color=color_from_json(a['color']),
            pigment=pigment_from_dict(a['pigment']),
        )
        for a in d['atoms']
    ]

    wang2 = []
    for w in d['wang2']:
        b0, b1 = (border_from_dict(b) for b in w['borders'])
        displacement = Displacement(
            iterations=int(w['displacement']['iterations']),
            initial=float(w['displacement']['initialFactor']),
            reduction=float(w['displacement']['reductionFactor']),
        )
        edge = Edge(offset=int(w['offset']), displacement=displacement, limit=bool(w['limit']))
        wang2.append(Wang2(borders=(b0, b1), edge=edge))

    wang3 = [Wang3(ids=tuple(atom_id_from_name(name) for name in names)) for names in d['wang3']]

    return TilesetData(settings=settings, atoms=atoms, wang2=wang2, wang3=wang3)


# ==================== Files ====================

def load_project(path: Union[str, Path]) -> TilesetData:
    """
    Load a project file.

    Parse errors are logged and give an empty project.
    """
    path = Path(path)

    try:
        with open(path) as f:
            return project_from_dict(json.load(f))
    except (OSError, ValueError, KeyError, TypeError, IndexError) as e:
        logger.error("An error occurred while parsing file '%s': %s", path, e)

    return TilesetData()


def save_project(path: Union[str, Path], data: TilesetData):
    """Save a project file, tab-indented"""
    path = Path(path)

    with open(path, 'w') as f:
        json.dump(project_to_dict(data), f, indent='\t')
        f.write('\n')

    logger.info("Project successfully saved in '%s'", path)

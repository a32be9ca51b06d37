"""
Tileset Database Module
=======================

Container for the atoms and adjacency rules of a project, with total
lookup functions used by the synthesis pipeline.

Lookups never raise: an unknown atom resolves to the Void atom and an
unknown pair resolves to an effect-less rule, both with a logged warning.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .types import (
    VOID,
    Atom,
    AtomId,
    Border,
    Edge,
    Settings,
    Wang2,
    Wang3,
)

logger = logging.getLogger(__name__)


@dataclass
class PreviewOverride:
    """
    Item under edition, looked up before the database.

    Passed explicitly to the lookups so a live preview never has to
    mutate the persisted lists.
    """
    atom: Optional[Atom] = None
    wang2: Optional[Wang2] = None


@dataclass
class TilesetData:
    """Atoms, Wang2 and Wang3 rules of a project"""
    settings: Settings = field(default_factory=Settings)
    atoms: List[Atom] = field(default_factory=list)
    wang2: List[Wang2] = field(default_factory=list)
    wang3: List[Wang3] = field(default_factory=list)

    # ==================== Lookups ====================

    def get_atom(self, hash: int, override: Optional[PreviewOverride] = None) -> Atom:
        """Get the atom with the given hash, or the Void atom"""
        if override is not None and override.atom is not None:
            if override.atom.id.hash == hash:
                return override.atom

        for atom in self.atoms:
            if atom.id.hash == hash:
                return atom

        if hash != VOID:
            logger.warning("Unknown atom hash: %016X", hash)

        return Atom.void()

    def get_wang2(self, id0: int, id1: int, override: Optional[PreviewOverride] = None) -> Wang2:
        """Get the rule linking two atoms, in any order"""
        if override is not None and override.wang2 is not None:
            if override.wang2.matches(id0, id1):
                return override.wang2

        for wang in self.wang2:
            if wang.matches(id0, id1):
                return wang

        a0 = self.get_atom(id0, override)
        a1 = self.get_atom(id1, override)

        logger.warning("No wang2 for this pair of atoms: (%s, %s)", a0.id.name, a1.id.name)

        borders = (Border(id=a0.id), Border(id=a1.id))

        if id0 == VOID:
            borders = (borders[1], borders[0])

        return Wang2(borders=borders, edge=Edge())

    def get_edge(self, id0: int, id1: int, override: Optional[PreviewOverride] = None) -> Edge:
        """
        Get the edge between two atoms.

        The edge is inverted when the rule is declared in the other order.
        A missing rule gives a default edge.
        """
        candidates = []

        if override is not None and override.wang2 is not None:
            candidates.append(override.wang2)

        candidates.extend(self.wang2)

        for wang in candidates:
            a, b = wang.ids

            if a == id0 and b == id1:
                return wang.edge

            if a == id1 and b == id0:
                return wang.edge.invert()

        return Edge()

    # ==================== Maintenance ====================

    def update_atom(self, old_atom: Atom, new_atom: Atom):
        """Replace an atom and every reference to it"""
        old_hash = old_atom.id.hash

        self.atoms = [new_atom if atom.id.hash == old_hash else atom for atom in self.atoms]

        for wang in self.wang2:
            wang.borders = tuple(
                Border(id=new_atom.id, effect=border.effect, distance=border.distance, factor=border.factor)
                if border.id.hash == old_hash else border
                for border in wang.borders
            )

        for wang in self.wang3:
            wang.ids = tuple(new_atom.id if atom_id.hash == old_hash else atom_id for atom_id in wang.ids)

    def delete_atom(self, hash: int):
        """Remove an atom and every rule that references it"""
        self.atoms = [atom for atom in self.atoms if atom.id.hash != hash]
        self.wang2 = [wang for wang in self.wang2 if hash not in wang.ids]
        self.wang3 = [wang for wang in self.wang3 if hash not in wang.hashes]

    def generate_all_wang3(self):
        """
        Rebuild the Wang3 list from the Wang2 rules.

        Every triple of rules whose six ids form three distinct pairs is a
        closed triangle of atoms and gives one Wang3 rule. Ids are ordered
        by hash, Void always ends up last.
        """
        self.wang3 = []
        count = len(self.wang2)

        for i in range(count):
            for j in range(i + 1, count):
                for k in range(j + 1, count):
                    ids: List[AtomId] = []
                    for wang in (self.wang2[i], self.wang2[j], self.wang2[k]):
                        ids.extend(border.id for border in wang.borders)

                    ids.sort(key=lambda atom_id: atom_id.hash)

                    if ids[0].hash == ids[1].hash and ids[2].hash == ids[3].hash and ids[4].hash == ids[5].hash:
                        triple = [ids[0], ids[2], ids[4]]

                        if triple[0].hash == VOID:
                            triple[0], triple[2] = triple[2], triple[0]

                        if triple[1].hash == VOID:
                            triple[1], triple[2] = triple[2], triple[1]

                        self.wang3.append(Wang3(ids=tuple(triple)))

        logger.info("Generated %d wang3 rules from %d wang2 rules", len(self.wang3), count)

    def validate(self) -> List[str]:
        """
        Collect consistency problems of the database.

        Problems are logged as warnings and returned, never raised.
        """
        problems = []
        known = set()

        for atom in self.atoms:
            if atom.id.hash == VOID:
                problems.append(f"Atom '{atom.id.name}' uses the reserved Void id")
            elif atom.id.hash in known:
                problems.append(f"Duplicate atom id: '{atom.id.name}'")
            known.add(atom.id.hash)

        def check_reference(atom_id: AtomId, where: str):
            if atom_id.hash != VOID and atom_id.hash not in known:
                problems.append(f"Unknown atom '{atom_id.name}' in {where}")

        for index, wang in enumerate(self.wang2):
            for border in wang.borders:
                check_reference(border.id, f"wang2 #{index}")

            if wang.borders[0].id.hash == VOID:
                problems.append(f"Void must be the second atom of wang2 #{index}")

        for index, wang in enumerate(self.wang3):
            for atom_id in wang.ids:
                check_reference(atom_id, f"wang3 #{index}")

            a, b, c = wang.hashes
            for id0, id1 in ((a, b), (b, c), (c, a)):
                if not any(rule.matches(id0, id1) for rule in self.wang2):
                    problems.append(f"Missing wang2 for a pair of wang3 #{index}")

        for problem in problems:
            logger.warning(problem)

        return problems


"""
Mock Structure.

A fake chemistry payload for development and testing. Attributes are
computed from a plain list of atoms and bonds, following the same counting
rules as the RDKit adapter, and any attribute can be made to fail.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from structure_curation.domain.entities import (
    BondOrder,
    ErrorCode,
    MassComputationFlavour,
    Record,
)
from structure_curation.domain.exceptions import AttributeComputationError

# Atomic number used for pseudo atoms
PSEUDO_ATOM = 0

# Average masses used to derive a default mass
_AVERAGE_MASS = {0: 0.0, 1: 1.008, 6: 12.011, 7: 14.007, 8: 15.999, 16: 32.06, 17: 35.45}


@dataclass
class MockStructure:
    """
    Fake structure built from atomic numbers and bonds.

    Attributes:
        atomic_numbers: One entry per explicit atom, 0 marks a pseudo atom
        implicit_hydrogens: Implicit hydrogen count per atom (zeros if omitted)
        bonds: (atom index, atom index, bond order) triples
        masses: Mass per computation flavour (derived from atoms if omitted)
        failures: Attribute name -> error code raised when it is queried
        invalid_valence_atoms: Indices of atoms whose valence is invalid
    """

    atomic_numbers: List[int] = field(default_factory=list)
    implicit_hydrogens: Optional[List[int]] = None
    bonds: List[Tuple[int, int, BondOrder]] = field(default_factory=list)
    masses: Dict[MassComputationFlavour, float] = field(default_factory=dict)
    failures: Dict[str, ErrorCode] = field(default_factory=dict)
    invalid_valence_atoms: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.implicit_hydrogens is None:
            self.implicit_hydrogens = [0] * len(self.atomic_numbers)
        if len(self.implicit_hydrogens) != len(self.atomic_numbers):
            raise ValueError("implicit_hydrogens must have one entry per atom")

    @classmethod
    def chain(cls, carbons: int, hydrogens_per_atom: int = 0) -> "MockStructure":
        """Linear carbon chain with single bonds."""
        return cls(
            atomic_numbers=[6] * carbons,
            implicit_hydrogens=[hydrogens_per_atom] * carbons,
            bonds=[(i, i + 1, BondOrder.SINGLE) for i in range(carbons - 1)],
        )

    def _fail_if_requested(self, attribute: str) -> None:
        if attribute in self.failures:
            raise AttributeComputationError(
                f"{attribute} could not be computed", self.failures[attribute]
            )

    def _is_pseudo(self, index: int) -> bool:
        return self.atomic_numbers[index] == PSEUDO_ATOM

    def _implicit_hydrogen_count(self, include_pseudo_atoms: bool) -> int:
        return sum(
            count
            for index, count in enumerate(self.implicit_hydrogens)
            if include_pseudo_atoms or not self._is_pseudo(index)
        )

    def _counted_bonds(self, include_pseudo_atoms: bool) -> List[Tuple[int, int, BondOrder]]:
        if include_pseudo_atoms:
            return list(self.bonds)
        return [
            bond
            for bond in self.bonds
            if not (self._is_pseudo(bond[0]) or self._is_pseudo(bond[1]))
        ]

    def atom_count(
        self,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        self._fail_if_requested("atom_count")
        count = len(self.atomic_numbers)
        if include_implicit_hydrogens:
            count += self._implicit_hydrogen_count(include_pseudo_atoms)
        if not include_pseudo_atoms:
            count -= self.atomic_numbers.count(PSEUDO_ATOM)
        return count

    def heavy_atom_count(self, include_pseudo_atoms: bool = True) -> int:
        self._fail_if_requested("heavy_atom_count")
        return sum(
            1
            for number in self.atomic_numbers
            if number != 1 and (include_pseudo_atoms or number != PSEUDO_ATOM)
        )

    def bond_count(
        self,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        self._fail_if_requested("bond_count")
        count = len(self._counted_bonds(include_pseudo_atoms))
        if include_implicit_hydrogens:
            count += self._implicit_hydrogen_count(include_pseudo_atoms)
        return count

    def bond_order_count(
        self,
        bond_order: BondOrder,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        self._fail_if_requested("bond_order_count")
        count = sum(
            1 for bond in self._counted_bonds(include_pseudo_atoms) if bond[2] == bond_order
        )
        if bond_order == BondOrder.SINGLE and include_implicit_hydrogens:
            count += self._implicit_hydrogen_count(include_pseudo_atoms)
        return count

    def molecular_mass(self, flavour: MassComputationFlavour) -> float:
        self._fail_if_requested("molecular_mass")
        if flavour in self.masses:
            return self.masses[flavour]
        hydrogens = sum(self.implicit_hydrogens)
        return hydrogens * _AVERAGE_MASS[1] + sum(
            _AVERAGE_MASS.get(number, 12.011) for number in self.atomic_numbers
        )

    def has_all_valid_atomic_numbers(self, wildcard_is_valid: bool = False) -> bool:
        self._fail_if_requested("has_all_valid_atomic_numbers")
        for number in self.atomic_numbers:
            if number == PSEUDO_ATOM and wildcard_is_valid:
                continue
            if not 1 <= number <= 118:
                return False
        return True

    def has_all_valid_valences(self, wildcard_is_valid: bool = False) -> bool:
        self._fail_if_requested("has_all_valid_valences")
        if not wildcard_is_valid and PSEUDO_ATOM in self.atomic_numbers:
            return False
        return not self.invalid_valence_atoms

    def contains_pseudo_atoms(self) -> bool:
        self._fail_if_requested("contains_pseudo_atoms")
        return PSEUDO_ATOM in self.atomic_numbers


def generate_mock_records(
    count: int,
    seed: int = 42,
    id_property: Optional[str] = "CATALOG_ID",
) -> List[Record]:
    """
    Generate deterministic mock records.

    Args:
        count: Number of records
        seed: Random seed for reproducibility
        id_property: Property holding a catalog id (None to omit)

    Returns:
        Records with random carbon chains, some with pseudo atoms
    """
    rng = random.Random(seed)
    records = []
    for index in range(count):
        structure = MockStructure.chain(rng.randint(1, 20), rng.randint(0, 3))
        if rng.random() < 0.1:
            structure.atomic_numbers.append(PSEUDO_ATOM)
            structure.implicit_hydrogens.append(0)
        properties = {}
        if id_property is not None and rng.random() < 0.9:
            properties[id_property] = f"MOCK-{seed}-{index:05d}"
        records.append(Record(payload=structure, properties=properties))
    return records

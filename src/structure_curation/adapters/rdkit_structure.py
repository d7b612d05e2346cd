"""
RDKit Structure Adapter.

Wraps an rdkit.Chem.Mol so that it can be used as Record payload.

Conventions:
    - Implicit hydrogens are the per-atom total hydrogen counts
      (hydrogens that are not explicit atoms of the graph)
    - Pseudo atoms are atoms with atomic number 0 (e.g. "*" in SMILES)
    - Valences are judged by the RDKit valence model
    - RDKit failures become AttributeComputationError
"""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from rdkit import Chem
from rdkit.Chem import Descriptors

from structure_curation.domain.entities import BondOrder, ErrorCode, MassComputationFlavour
from structure_curation.domain.exceptions import AttributeComputationError, NullInputError

logger = logging.getLogger(__name__)

T = TypeVar("T")

_BOND_TYPES = {
    BondOrder.SINGLE: Chem.BondType.SINGLE,
    BondOrder.DOUBLE: Chem.BondType.DOUBLE,
    BondOrder.TRIPLE: Chem.BondType.TRIPLE,
    BondOrder.QUADRUPLE: Chem.BondType.QUADRUPLE,
    BondOrder.AROMATIC: Chem.BondType.AROMATIC,
}

_MAX_ATOMIC_NUMBER = 118


class RDKitStructure:
    """Structure attributes computed with RDKit."""

    def __init__(self, mol: Chem.Mol) -> None:
        if mol is None:
            raise NullInputError("mol must not be None", argument="mol")
        self.mol = mol

    @classmethod
    def from_smiles(cls, smiles: str, sanitize: bool = True) -> "RDKitStructure":
        """
        Parse a SMILES string.

        Without sanitization RDKit accepts structures with impossible
        valences, which the valence check can then detect.

        Raises:
            ValueError: If RDKit cannot parse the SMILES
        """
        mol = Chem.MolFromSmiles(smiles, sanitize=sanitize)
        if mol is None:
            raise ValueError(f"Could not parse SMILES: {smiles}")
        return cls(mol)

    def _compute(self, error_code: ErrorCode, func: Callable[[], T]) -> T:
        try:
            return func()
        except (RuntimeError, ValueError) as e:
            raise AttributeComputationError(str(e), error_code) from e

    def _implicit_hydrogens(self, include_pseudo_atoms: bool) -> int:
        return sum(
            atom.GetTotalNumHs()
            for atom in self.mol.GetAtoms()
            if include_pseudo_atoms or atom.GetAtomicNum() != 0
        )

    def _counted_bonds(self, include_pseudo_atoms: bool) -> List[Chem.Bond]:
        return [
            bond
            for bond in self.mol.GetBonds()
            if include_pseudo_atoms
            or (bond.GetBeginAtom().GetAtomicNum() != 0 and bond.GetEndAtom().GetAtomicNum() != 0)
        ]

    def atom_count(
        self,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        def count() -> int:
            total = self.mol.GetNumAtoms()
            if include_implicit_hydrogens:
                total += self._implicit_hydrogens(include_pseudo_atoms)
            if not include_pseudo_atoms:
                total -= sum(1 for atom in self.mol.GetAtoms() if atom.GetAtomicNum() == 0)
            return total

        return self._compute(ErrorCode.IMPLICIT_HYDROGEN_COUNT_ERROR, count)

    def heavy_atom_count(self, include_pseudo_atoms: bool = True) -> int:
        return sum(
            1
            for atom in self.mol.GetAtoms()
            if atom.GetAtomicNum() != 1 and (include_pseudo_atoms or atom.GetAtomicNum() != 0)
        )

    def bond_count(
        self,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        def count() -> int:
            total = len(self._counted_bonds(include_pseudo_atoms))
            if include_implicit_hydrogens:
                total += self._implicit_hydrogens(include_pseudo_atoms)
            return total

        return self._compute(ErrorCode.IMPLICIT_HYDROGEN_COUNT_ERROR, count)

    def bond_order_count(
        self,
        bond_order: BondOrder,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        bond_type = _BOND_TYPES.get(BondOrder(bond_order))
        if bond_type is None:
            raise AttributeComputationError(
                f"unknown bond order {bond_order!r}", ErrorCode.BOND_ORDER_UNKNOWN_ERROR
            )

        def count() -> int:
            total = sum(
                1
                for bond in self._counted_bonds(include_pseudo_atoms)
                if bond.GetBondType() == bond_type
            )
            if bond_type == Chem.BondType.SINGLE and include_implicit_hydrogens:
                total += self._implicit_hydrogens(include_pseudo_atoms)
            return total

        return self._compute(ErrorCode.IMPLICIT_HYDROGEN_COUNT_ERROR, count)

    def molecular_mass(self, flavour: MassComputationFlavour) -> float:
        if flavour is None:
            raise NullInputError("flavour must not be None", argument="flavour")
        flavour = MassComputationFlavour(flavour)
        if flavour == MassComputationFlavour.MOL_WEIGHT:
            return self._compute(ErrorCode.MASS_COMPUTATION_ERROR, lambda: Descriptors.MolWt(self.mol))
        if flavour == MassComputationFlavour.MONO_ISOTOPIC:
            return self._compute(
                ErrorCode.MASS_COMPUTATION_ERROR, lambda: Descriptors.ExactMolWt(self.mol)
            )

        table = Chem.GetPeriodicTable()
        if flavour == MassComputationFlavour.MOL_WEIGHT_IGNORE_SPECIFIED:
            element_mass = table.GetAtomicWeight
        else:
            element_mass = table.GetMostCommonIsotopeMass

        def mass() -> float:
            total = 0.0
            for atom in self.mol.GetAtoms():
                total += element_mass(atom.GetAtomicNum())
                total += atom.GetTotalNumHs() * element_mass(1)
            return total

        return self._compute(ErrorCode.MASS_COMPUTATION_ERROR, mass)

    def has_all_valid_atomic_numbers(self, wildcard_is_valid: bool = False) -> bool:
        for atom in self.mol.GetAtoms():
            number = atom.GetAtomicNum()
            if number == 0 and wildcard_is_valid:
                continue
            if not 1 <= number <= _MAX_ATOMIC_NUMBER:
                return False
        return True

    def has_all_valid_valences(self, wildcard_is_valid: bool = False) -> bool:
        if not wildcard_is_valid and self.contains_pseudo_atoms():
            return False

        def check() -> bool:
            # Only the property step of sanitization validates valences
            problems = Chem.DetectChemistryProblems(
                self.mol, sanitizeOps=Chem.SanitizeFlags.SANITIZE_PROPERTIES
            )
            for problem in problems:
                logger.debug(f"Valence problem: {problem.Message()}")
            return not problems

        return self._compute(ErrorCode.VALENCE_CHECK_ERROR, check)

    def contains_pseudo_atoms(self) -> bool:
        return any(atom.GetAtomicNum() == 0 for atom in self.mol.GetAtoms())

    def __repr__(self) -> str:
        return f"RDKitStructure({Chem.MolToSmiles(self.mol)!r})"

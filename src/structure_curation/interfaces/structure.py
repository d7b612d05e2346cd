"""
Structure Attributes Protocol.

Defines the chemistry-side interface the filters consume. A payload of a
Record must implement it; the RDKit adapter does so in production and the
mock structure in tests.

Every method may raise AttributeComputationError when the attribute cannot
be computed for this particular structure. Such errors are recoverable and
only affect the record being evaluated.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from structure_curation.domain.entities import BondOrder, MassComputationFlavour


@runtime_checkable
class StructureAttributes(Protocol):
    """Attributes of a chemical structure used for curation decisions."""

    def atom_count(
        self,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        """
        Count atoms of the structure.

        Args:
            include_implicit_hydrogens: Add implicit hydrogens to the count
            include_pseudo_atoms: Count pseudo atoms (atomic number 0)

        Returns:
            Number of atoms
        """
        ...

    def heavy_atom_count(self, include_pseudo_atoms: bool = True) -> int:
        """Count non-hydrogen atoms."""
        ...

    def bond_count(
        self,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        """
        Count bonds.

        Every implicit hydrogen adds one bond when included. Bonds to
        pseudo atoms are skipped unless include_pseudo_atoms is set.
        """
        ...

    def bond_order_count(
        self,
        bond_order: "BondOrder",
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> int:
        """
        Count bonds of the given order.

        Implicit hydrogens count as single bonds when included.
        """
        ...

    def molecular_mass(self, flavour: "MassComputationFlavour") -> float:
        """Compute the mass of the structure using the given convention."""
        ...

    def has_all_valid_atomic_numbers(self, wildcard_is_valid: bool = False) -> bool:
        """
        Check atomic numbers of all atoms.

        Valid atomic numbers are 1..118. Atomic number 0 (wildcard) is valid
        only if wildcard_is_valid is set.
        """
        ...

    def has_all_valid_valences(self, wildcard_is_valid: bool = False) -> bool:
        """
        Check the valence of every atom against the valence model of the
        chemistry toolkit.

        Pseudo atoms have no valence model; they count as valid only if
        wildcard_is_valid is set.
        """
        ...

    def contains_pseudo_atoms(self) -> bool:
        """True if any atom is a pseudo atom."""
        ...

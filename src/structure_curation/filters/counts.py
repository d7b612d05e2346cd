"""
Count Filter Implementations.

Filters records on counts of structural elements:
    - Atoms (optionally with implicit hydrogens and pseudo atoms)
    - Heavy atoms (optionally with pseudo atoms)
    - Bonds (optionally with implicit hydrogen bonds and bonds to pseudo atoms)
    - Bonds of a specific bond order
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from structure_curation.domain.entities import BondOrder, Record
from structure_curation.domain.exceptions import InvalidConfigurationError, NullInputError
from structure_curation.filters.base import ThresholdFilter

if TYPE_CHECKING:
    from structure_curation.interfaces.reporter import Reporter


class _AtomCountFilter(ThresholdFilter):
    attribute = "atom_count"

    def __init__(
        self,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(threshold, report_on_error=report_on_error, reporter=reporter)
        self.include_implicit_hydrogens = include_implicit_hydrogens
        self.include_pseudo_atoms = include_pseudo_atoms

    def _compute_value(self, record: Record) -> int:
        return record.payload.atom_count(
            include_implicit_hydrogens=self.include_implicit_hydrogens,
            include_pseudo_atoms=self.include_pseudo_atoms,
        )


class MaxAtomCountFilter(_AtomCountFilter):
    """Exclude records with more atoms than the threshold."""

    is_maximum = True


class MinAtomCountFilter(_AtomCountFilter):
    """Exclude records with fewer atoms than the threshold."""

    is_maximum = False


class _HeavyAtomCountFilter(ThresholdFilter):
    attribute = "heavy_atom_count"

    def __init__(
        self,
        threshold: int,
        include_pseudo_atoms: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(threshold, report_on_error=report_on_error, reporter=reporter)
        self.include_pseudo_atoms = include_pseudo_atoms

    def _compute_value(self, record: Record) -> int:
        return record.payload.heavy_atom_count(include_pseudo_atoms=self.include_pseudo_atoms)


class MaxHeavyAtomCountFilter(_HeavyAtomCountFilter):
    """Exclude records with more heavy atoms than the threshold."""

    is_maximum = True


class MinHeavyAtomCountFilter(_HeavyAtomCountFilter):
    """Exclude records with fewer heavy atoms than the threshold."""

    is_maximum = False


class _BondCountFilter(ThresholdFilter):
    attribute = "bond_count"

    def __init__(
        self,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(threshold, report_on_error=report_on_error, reporter=reporter)
        self.include_implicit_hydrogens = include_implicit_hydrogens
        self.include_pseudo_atoms = include_pseudo_atoms

    def _compute_value(self, record: Record) -> int:
        return record.payload.bond_count(
            include_implicit_hydrogens=self.include_implicit_hydrogens,
            include_pseudo_atoms=self.include_pseudo_atoms,
        )


class MaxBondCountFilter(_BondCountFilter):
    """Exclude records with more bonds than the threshold."""

    is_maximum = True


class MinBondCountFilter(_BondCountFilter):
    """Exclude records with fewer bonds than the threshold."""

    is_maximum = False


class _BondsOfOrderFilter(ThresholdFilter):
    def __init__(
        self,
        bond_order: BondOrder,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        """
        Initialize with bond order and threshold.

        Args:
            bond_order: Bond order to count
            threshold: Inclusive bound on the number of such bonds
            include_implicit_hydrogens: Count implicit hydrogens as single bonds
            include_pseudo_atoms: Count bonds to pseudo atoms
        """
        if bond_order is None:
            raise NullInputError("bond_order must not be None", argument="bond_order")
        try:
            self.bond_order = BondOrder(bond_order)
        except ValueError as e:
            raise InvalidConfigurationError(
                f"unknown bond order {bond_order!r}", field="bond_order"
            ) from e
        super().__init__(threshold, report_on_error=report_on_error, reporter=reporter)
        self.include_implicit_hydrogens = include_implicit_hydrogens
        self.include_pseudo_atoms = include_pseudo_atoms

    @property
    def attribute(self) -> str:
        return f"{self.bond_order.value.lower()}_bond_count"

    def _compute_value(self, record: Record) -> int:
        return record.payload.bond_order_count(
            self.bond_order,
            include_implicit_hydrogens=self.include_implicit_hydrogens,
            include_pseudo_atoms=self.include_pseudo_atoms,
        )


class MaxBondsOfOrderFilter(_BondsOfOrderFilter):
    """Exclude records with more bonds of the given order than the threshold."""

    is_maximum = True


class MinBondsOfOrderFilter(_BondsOfOrderFilter):
    """Exclude records with fewer bonds of the given order than the threshold."""

    is_maximum = False

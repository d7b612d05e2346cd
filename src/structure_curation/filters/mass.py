"""
Molecular Mass Filter Implementation.

Filters records on their mass, computed under one of the conventions of
MassComputationFlavour (average molecular weight by default).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from structure_curation.domain.entities import MassComputationFlavour, Record
from structure_curation.domain.exceptions import InvalidConfigurationError, NullInputError
from structure_curation.filters.base import ThresholdFilter

if TYPE_CHECKING:
    from structure_curation.interfaces.reporter import Reporter


class _MolecularMassFilter(ThresholdFilter):
    attribute = "molecular_mass"
    integral_threshold = False

    def __init__(
        self,
        threshold: float,
        flavour: MassComputationFlavour = MassComputationFlavour.MOL_WEIGHT,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        if flavour is None:
            raise NullInputError("flavour must not be None", argument="flavour")
        try:
            self.flavour = MassComputationFlavour(flavour)
        except ValueError as e:
            raise InvalidConfigurationError(
                f"unknown mass computation flavour {flavour!r}", field="flavour"
            ) from e
        super().__init__(threshold, report_on_error=report_on_error, reporter=reporter)

    def _compute_value(self, record: Record) -> float:
        return record.payload.molecular_mass(self.flavour)


class MaxMolecularMassFilter(_MolecularMassFilter):
    """Exclude records heavier than the threshold."""

    is_maximum = True


class MinMolecularMassFilter(_MolecularMassFilter):
    """Exclude records lighter than the threshold."""

    is_maximum = False

"""
Validity Filter Implementations.

Filters records on the validity of their atoms:
    - Atomic numbers (1..118, 0 only if wildcards are accepted)
    - Valences, judged by the valence model of the chemistry toolkit
    - Presence of pseudo atoms
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

from structure_curation.domain.entities import Record
from structure_curation.filters.base import BaseFilter

if TYPE_CHECKING:
    from structure_curation.interfaces.reporter import Reporter


class AtomicNumberValidityFilter(BaseFilter):
    """
    Filter records by the validity of their atomic numbers.

    With keep_valid=True records containing an invalid atomic number are
    excluded; with keep_valid=False only those records are kept.
    """

    def __init__(
        self,
        wildcard_is_valid: bool = False,
        keep_valid: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(report_on_error=report_on_error, reporter=reporter)
        self.wildcard_is_valid = wildcard_is_valid
        self.keep_valid = keep_valid

    @property
    def name(self) -> str:
        if self.keep_valid:
            return "has_all_valid_atomic_numbers_filter"
        return "has_invalid_atomic_numbers_filter"

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        all_valid = record.payload.has_all_valid_atomic_numbers(
            wildcard_is_valid=self.wildcard_is_valid
        )
        if self.keep_valid and not all_valid:
            return False, "contains invalid atomic numbers"
        if not self.keep_valid and all_valid:
            return False, "all atomic numbers are valid"
        return True, ""


class PseudoAtomFilter(BaseFilter):
    """
    Filter records by the presence of pseudo atoms.

    With exclude_if_present=True records containing pseudo atoms are
    excluded; with exclude_if_present=False records without any are.
    """

    def __init__(
        self,
        exclude_if_present: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(report_on_error=report_on_error, reporter=reporter)
        self.exclude_if_present = exclude_if_present

    @property
    def name(self) -> str:
        if self.exclude_if_present:
            return "contains_no_pseudo_atoms_filter"
        return "contains_pseudo_atoms_filter"

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        has_pseudo_atoms = record.payload.contains_pseudo_atoms()
        if self.exclude_if_present and has_pseudo_atoms:
            return False, "contains pseudo atoms"
        if not self.exclude_if_present and not has_pseudo_atoms:
            return False, "contains no pseudo atoms"
        return True, ""


class ValenceValidityFilter(BaseFilter):
    """
    Filter records by the validity of their atom valences.

    With keep_valid=True records containing an atom with an invalid valence
    are excluded; with keep_valid=False only those records are kept.
    """

    def __init__(
        self,
        wildcard_is_valid: bool = False,
        keep_valid: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(report_on_error=report_on_error, reporter=reporter)
        self.wildcard_is_valid = wildcard_is_valid
        self.keep_valid = keep_valid

    @property
    def name(self) -> str:
        if self.keep_valid:
            return "has_all_valid_valences_filter"
        return "has_invalid_valences_filter"

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        all_valid = record.payload.has_all_valid_valences(
            wildcard_is_valid=self.wildcard_is_valid
        )
        if self.keep_valid and not all_valid:
            return False, "contains atoms with invalid valences"
        if not self.keep_valid and all_valid:
            return False, "all valences are valid"
        return True, ""

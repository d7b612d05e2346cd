"""
Core Domain Entities.

This module defines the fundamental entities of the curation domain:
the records flowing through a pipeline, the enumerations filters are
parametrized with, and the results a curation run produces.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

# Value of ``Record.removed_by_step`` for records no step has excluded
NOT_FILTERED = None

# Used in reports for records lacking the external id property
EXTERNAL_ID_PLACEHOLDER = "[no external ID]"


class ErrorCode(str, Enum):
    """Classification of issues reported during a curation run."""

    RECORD_NULL_ERROR = "RECORD_NULL_ERROR"
    NO_ATOMS_ERROR = "NO_ATOMS_ERROR"
    IMPLICIT_HYDROGEN_COUNT_ERROR = "IMPLICIT_HYDROGEN_COUNT_ERROR"
    BOND_ORDER_UNKNOWN_ERROR = "BOND_ORDER_UNKNOWN_ERROR"
    MASS_COMPUTATION_ERROR = "MASS_COMPUTATION_ERROR"
    INVALID_ATOMIC_NUMBER_ERROR = "INVALID_ATOMIC_NUMBER_ERROR"
    VALENCE_CHECK_ERROR = "VALENCE_CHECK_ERROR"
    MISSING_PROPERTY_ERROR = "MISSING_PROPERTY_ERROR"
    UNSET_EXTERNAL_ID_PROPERTY = "UNSET_EXTERNAL_ID_PROPERTY"
    IMPORT_FAILED_ERROR = "IMPORT_FAILED_ERROR"
    UNEXPECTED_EXCEPTION_ERROR = "UNEXPECTED_EXCEPTION_ERROR"


class MassComputationFlavour(str, Enum):
    """Convention used to compute the mass of a structure."""

    # Average mass, specified isotopes are honoured
    MOL_WEIGHT = "MOL_WEIGHT"
    # Average mass, specified isotopes are ignored
    MOL_WEIGHT_IGNORE_SPECIFIED = "MOL_WEIGHT_IGNORE_SPECIFIED"
    # Exact mass of the major isotopes, specified isotopes are honoured
    MONO_ISOTOPIC = "MONO_ISOTOPIC"
    # Exact mass of the most abundant isotope of every element
    MOST_ABUNDANT = "MOST_ABUNDANT"


class BondOrder(str, Enum):
    """Bond kinds a bond-order filter can count."""

    SINGLE = "SINGLE"
    DOUBLE = "DOUBLE"
    TRIPLE = "TRIPLE"
    QUADRUPLE = "QUADRUPLE"
    AROMATIC = "AROMATIC"


@dataclass
class Record:
    """
    One chemical structure entry flowing through a pipeline.

    The payload is never touched by the pipeline; identity and removal
    provenance live in their own slots next to it.

    Attributes:
        payload: Structure implementing the StructureAttributes protocol
        properties: Caller metadata (e.g. SD file tags)
        record_id: Run-scoped positional identifier, None until assigned
        removed_by_step: Index of the step that excluded the record
        external_id: Value of the pipeline's external id property
    """

    payload: Any
    properties: Dict[str, Any] = field(default_factory=dict)
    record_id: Optional[Any] = None
    removed_by_step: Optional[int] = NOT_FILTERED
    external_id: Optional[str] = None

    @property
    def is_filtered(self) -> bool:
        """True if a step excluded this record in the last run."""
        return self.removed_by_step is not NOT_FILTERED

    def clone(self) -> "Record":
        """Deep copy of payload and properties, identity slots included."""
        return Record(
            payload=copy.deepcopy(self.payload),
            properties=copy.deepcopy(self.properties),
            record_id=self.record_id,
            removed_by_step=self.removed_by_step,
            external_id=self.external_id,
        )


class StepResult(BaseModel):
    """Result of a single processing step for the audit trail."""

    step_index: int
    step_name: str
    input_count: int
    output_count: int
    duration_seconds: float
    removed_record_ids: List[int] = Field(
        default_factory=list, description="Ids of records removed by the step"
    )
    removal_reasons: Dict[int, str] = Field(
        default_factory=dict, description="Record id -> exclusion reason"
    )

    model_config = {"frozen": True}

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = no reduction, 1.0 = all removed)."""
        if self.input_count == 0:
            return 0.0
        return 1.0 - (self.output_count / self.input_count)


@dataclass
class CurationResult:
    """Complete result of a curation run."""

    records: List[Record]
    processed_records: List[Record]
    audit_trail: List[StepResult] = field(default_factory=list)
    ended_with_fatal_exception: bool = False
    correlation_id: Optional[str] = None

    @property
    def record_ids(self) -> List[Any]:
        """Ids of the surviving records, in output order."""
        return [record.record_id for record in self.records]

    @property
    def removed_records(self) -> List[Record]:
        """Records a step excluded, in input order."""
        return [record for record in self.processed_records if record.is_filtered]

    @property
    def total_reduction_ratio(self) -> float:
        """Calculate total reduction ratio."""
        if len(self.processed_records) == 0:
            return 0.0
        return 1.0 - (len(self.records) / len(self.processed_records))

"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe outcomes and
diagnostics but have no conceptual identity.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from pydantic import BaseModel

from structure_curation.domain.entities import ErrorCode, Record

if TYPE_CHECKING:
    from structure_curation.domain.exceptions import AttributeComputationError


# Exclusion reasons: record id -> reason string
RemovalReasonsDict = Dict[int, str]


class ReportEntry(BaseModel):
    """One diagnostic handed to a reporter."""

    error_code: ErrorCode
    step_index: Optional[int] = None
    step_name: Optional[str] = None
    record_id: Optional[Any] = None
    external_id: Optional[str] = None
    message: str = ""

    model_config = {"frozen": True}


@dataclass(frozen=True)
class Evaluation:
    """Outcome of evaluating one record against one filter."""

    excluded: bool
    reason: str = ""
    error: Optional["AttributeComputationError"] = None

    @property
    def failed(self) -> bool:
        return self.error is not None

    @classmethod
    def passed(cls) -> "Evaluation":
        return cls(excluded=False)

    @classmethod
    def rejected(cls, reason: str) -> "Evaluation":
        return cls(excluded=True, reason=reason)

    @classmethod
    def from_error(cls, error: "AttributeComputationError") -> "Evaluation":
        return cls(excluded=True, reason=str(error), error=error)


@dataclass
class FilterResult:
    """Result of applying a single processing step to a working set."""

    passed_records: List[Record] = field(default_factory=list)
    rejected_records: List[Record] = field(default_factory=list)
    rejection_reasons: RemovalReasonsDict = field(default_factory=dict)

    @property
    def passed_count(self) -> int:
        return len(self.passed_records)

    @property
    def rejected_count(self) -> int:
        return len(self.rejected_records)

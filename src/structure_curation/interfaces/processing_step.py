"""
Processing Step Protocol.

Defines the abstract interface for pipeline steps. Each step decides, for
every record of the working set, whether it survives.

The processing step is responsible for:
    - Evaluating every record of the working set exactly once
    - Returning passed and rejected records with reasons
    - Routing recoverable per-record errors through the step context

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - Steps are stateless (run state lives in StepContext)
    - Configuration injected via constructor
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol, runtime_checkable

if TYPE_CHECKING:
    from structure_curation.domain.entities import Record
    from structure_curation.domain.value_objects import FilterResult
    from structure_curation.pipeline.step_context import StepContext


@runtime_checkable
class ProcessingStep(Protocol):
    """Abstract interface for processing steps."""

    @property
    def name(self) -> str:
        """Stable name used in reports and the audit trail."""
        ...

    def apply(self, records: List["Record"], context: "StepContext") -> "FilterResult":
        """
        Apply the step to a working set.

        Args:
            records: Working set, in pipeline order
            context: Run state of the current step

        Returns:
            FilterResult with passed/rejected records and reasons
        """
        ...

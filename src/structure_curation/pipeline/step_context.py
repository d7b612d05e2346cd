"""
Step Context - Run State Handed to Processing Steps.

The StepContext carries everything a step needs besides the working set:
its position in the pipeline, the run's reporter and the external id
property used to label diagnostics.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from structure_curation.domain.entities import EXTERNAL_ID_PLACEHOLDER, ErrorCode, Record
from structure_curation.domain.value_objects import ReportEntry

if TYPE_CHECKING:
    from structure_curation.interfaces.reporter import Reporter

logger = logging.getLogger(__name__)


class StepContext:
    """Run state of a single processing step."""

    def __init__(
        self,
        step_index: Optional[int],
        step_name: str,
        reporter: Optional["Reporter"] = None,
        external_id_property: Optional[str] = None,
        correlation_id: Optional[str] = None,
    ) -> None:
        """
        Initialize step context.

        Args:
            step_index: Position of the step in the pipeline (None outside steps)
            step_name: Name of the step
            reporter: Reporter of the run (None disables reporting)
            external_id_property: Property used to label records in reports
            correlation_id: Id of the curation run
        """
        self.step_index = step_index
        self.step_name = step_name
        self.reporter = reporter
        self.external_id_property = external_id_property
        self.correlation_id = correlation_id

    def external_id_of(self, record: Record) -> Optional[str]:
        """External id used in diagnostics for a record."""
        if record.external_id is not None:
            return record.external_id
        if self.external_id_property is None:
            return None
        value = record.properties.get(self.external_id_property)
        return EXTERNAL_ID_PLACEHOLDER if value is None else str(value)

    def report(self, error_code: ErrorCode, record: Optional[Record], message: str) -> None:
        """
        Build a ReportEntry and hand it to the reporter.

        FatalRunError raised by the reporter propagates to the pipeline.
        """
        entry = ReportEntry(
            error_code=error_code,
            step_index=self.step_index,
            step_name=self.step_name,
            record_id=record.record_id if record is not None else None,
            external_id=self.external_id_of(record) if record is not None else None,
            message=message,
        )
        if self.reporter is None:
            logger.debug(f"No reporter, dropping {error_code.value}: {message}")
            return
        self.reporter.accept(entry)

    def __repr__(self) -> str:
        return f"StepContext(step_index={self.step_index}, step_name={self.step_name!r})"

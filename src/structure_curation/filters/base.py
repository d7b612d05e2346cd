"""
Filter Base Classes.

A filter is a processing step that keeps or excludes every record on its
own. Subclasses implement _check_record() returning (passes, reason); the
base classes take care of evaluation, error routing and the
processing-step contract.

Threshold semantics:
    - Max filters exclude records whose value is above the threshold
    - Min filters exclude records whose value is below the threshold
    - A value equal to the threshold always passes
"""

from __future__ import annotations

import logging
import math
from numbers import Real
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from structure_curation.domain.entities import Record
from structure_curation.domain.exceptions import (
    AttributeComputationError,
    InvalidConfigurationError,
    NullInputError,
)
from structure_curation.domain.value_objects import Evaluation, FilterResult
from structure_curation.pipeline.step_context import StepContext

if TYPE_CHECKING:
    from structure_curation.interfaces.reporter import Reporter

logger = logging.getLogger(__name__)


class BaseFilter:
    """Base class for all filters."""

    def __init__(
        self,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        """
        Initialize filter.

        Args:
            report_on_error: Inside a pipeline, report records whose attributes
                cannot be computed and exclude them instead of raising
            reporter: Reporter used by standalone is_excluded() calls
        """
        self.report_on_error = report_on_error
        self._reporter = reporter

    @property
    def name(self) -> str:
        """Unique name of this filter."""
        raise NotImplementedError

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        """Check if a single record passes. May raise AttributeComputationError."""
        raise NotImplementedError

    def evaluate(self, record: Record) -> Evaluation:
        """
        Evaluate one record.

        Recoverable errors are captured in the returned Evaluation, which
        then counts as an exclusion.

        Raises:
            NullInputError: If record is None
        """
        if record is None:
            raise NullInputError("record must not be None", argument="record")
        try:
            passes, reason = self._check_record(record)
        except AttributeComputationError as e:
            return Evaluation.from_error(e)
        if passes:
            return Evaluation.passed()
        return Evaluation.rejected(reason)

    def is_excluded(self, record: Record, report_on_error: bool = False) -> bool:
        """
        Decide whether a single record is excluded.

        Args:
            record: Record to evaluate
            report_on_error: Report a failed attribute computation and treat
                the record as excluded instead of raising

        Returns:
            True if the record is excluded

        Raises:
            NullInputError: If record is None
            AttributeComputationError: If an attribute cannot be computed and
                report_on_error is False
        """
        evaluation = self.evaluate(record)
        if evaluation.failed:
            if not report_on_error:
                raise evaluation.error
            context = StepContext(
                step_index=None,
                step_name=self.name,
                reporter=self._standalone_reporter(),
            )
            self._report_failure(record, evaluation, context)
        return evaluation.excluded

    def apply(self, records: List[Record], context: StepContext) -> FilterResult:
        """
        Apply the filter to a working set.

        Args:
            records: Working set
            context: Run state of this step

        Returns:
            FilterResult with passed/rejected records
        """
        passed: List[Record] = []
        rejected: List[Record] = []
        reasons: Dict[Any, str] = {}

        for record in records:
            evaluation = self.evaluate(record)
            if evaluation.failed:
                if not self.report_on_error:
                    raise evaluation.error
                self._report_failure(record, evaluation, context)
            if evaluation.excluded:
                rejected.append(record)
                reasons[record.record_id] = evaluation.reason
            else:
                passed.append(record)

        return FilterResult(
            passed_records=passed,
            rejected_records=rejected,
            rejection_reasons=reasons,
        )

    def _report_failure(
        self, record: Record, evaluation: Evaluation, context: StepContext
    ) -> None:
        error = evaluation.error
        logger.debug(f"{self.name}: record {record.record_id} failed: {error}")
        context.report(error.error_code, record, f"{self.name}: {error.message}")

    def _standalone_reporter(self) -> "Reporter":
        if self._reporter is None:
            from structure_curation.adapters.reporters import LoggingReporter

            self._reporter = LoggingReporter()
            self._reporter.initialize()
        return self._reporter

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def validate_threshold(threshold: Any, integral: bool = True, field: str = "threshold") -> Any:
    """
    Validate a filter threshold.

    Raises:
        NullInputError: If threshold is None
        InvalidConfigurationError: If threshold is not a non-negative number
    """
    if threshold is None:
        raise NullInputError(f"{field} must not be None", argument=field)
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        raise InvalidConfigurationError(f"{field}={threshold!r} is not a number", field=field)
    if integral and not isinstance(threshold, int):
        raise InvalidConfigurationError(f"{field}={threshold!r} is not an integer", field=field)
    if isinstance(threshold, float) and math.isnan(threshold):
        raise InvalidConfigurationError(f"{field} is NaN", field=field)
    if threshold < 0:
        raise InvalidConfigurationError(f"{field}={threshold!r} is below zero", field=field)
    return threshold


class ThresholdFilter(BaseFilter):
    """
    Base class for filters comparing one scalar attribute against a threshold.

    Subclasses set ``attribute`` (used in the filter name and reasons),
    ``is_maximum`` and implement _compute_value().
    """

    attribute = "value"
    is_maximum = True
    integral_threshold = True

    def __init__(
        self,
        threshold: Any,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(report_on_error=report_on_error, reporter=reporter)
        self.threshold = validate_threshold(threshold, integral=self.integral_threshold)

    @property
    def name(self) -> str:
        prefix = "max" if self.is_maximum else "min"
        return f"{prefix}_{self.attribute}_filter"

    def _compute_value(self, record: Record) -> Any:
        raise NotImplementedError

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        value = self._compute_value(record)
        if self.is_maximum and value > self.threshold:
            return False, f"{self.attribute}={value} > max={self.threshold}"
        if not self.is_maximum and value < self.threshold:
            return False, f"{self.attribute}={value} < min={self.threshold}"
        return True, ""

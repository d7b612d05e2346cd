"""
Property Filter Implementations.

Filters records on the presence of caller metadata:
    - An arbitrary property (e.g. an SD file tag)
    - The external id property of the pipeline
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Tuple

from structure_curation.domain.entities import ErrorCode, Record
from structure_curation.domain.exceptions import InvalidConfigurationError, NullInputError
from structure_curation.domain.value_objects import FilterResult
from structure_curation.filters.base import BaseFilter
from structure_curation.pipeline.step_context import StepContext

if TYPE_CHECKING:
    from structure_curation.interfaces.reporter import Reporter

logger = logging.getLogger(__name__)


def _validate_property_name(property_name: Optional[str], field: str) -> str:
    if property_name is None:
        raise NullInputError(f"{field} must not be None", argument=field)
    if not isinstance(property_name, str) or not property_name.strip():
        raise InvalidConfigurationError(f"{field} must be a non-blank string", field=field)
    return property_name


class PropertyPresenceFilter(BaseFilter):
    """
    Filter records by the presence of a property.

    With require_present=True records lacking the property are excluded;
    with require_present=False records having it are.
    """

    def __init__(
        self,
        property_name: str,
        require_present: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        super().__init__(report_on_error=report_on_error, reporter=reporter)
        self.property_name = _validate_property_name(property_name, "property_name")
        self.require_present = require_present

    @property
    def name(self) -> str:
        if self.require_present:
            return f"has_property_filter[{self.property_name}]"
        return f"has_no_property_filter[{self.property_name}]"

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        present = record.properties.get(self.property_name) is not None
        if self.require_present and not present:
            return False, f"property {self.property_name!r} missing"
        if not self.require_present and present:
            return False, f"property {self.property_name!r} present"
        return True, ""


class ExternalIdPresenceFilter(PropertyPresenceFilter):
    """
    Filter records by the presence of the pipeline's external id property.

    Without an explicit property name the filter binds to the external id
    property of the running pipeline. If neither is set, an
    UNSET_EXTERNAL_ID_PROPERTY entry is reported and the step passes every
    record.
    """

    def __init__(
        self,
        property_name: Optional[str] = None,
        require_present: bool = True,
        report_on_error: bool = True,
        reporter: Optional["Reporter"] = None,
    ) -> None:
        BaseFilter.__init__(self, report_on_error=report_on_error, reporter=reporter)
        self.property_name = (
            None
            if property_name is None
            else _validate_property_name(property_name, "property_name")
        )
        self.require_present = require_present

    @property
    def name(self) -> str:
        if self.require_present:
            return "has_external_id_filter"
        return "has_no_external_id_filter"

    def _check_record(self, record: Record) -> Tuple[bool, str]:
        if self.property_name is None:
            raise InvalidConfigurationError(
                "no external id property set", field="property_name"
            )
        return super()._check_record(record)

    def apply(self, records: List[Record], context: StepContext) -> FilterResult:
        if self.property_name is not None or not records:
            return super().apply(records, context)

        if context.external_id_property is None:
            logger.warning(f"{self.name}: no external id property set, step skipped")
            context.report(
                ErrorCode.UNSET_EXTERNAL_ID_PROPERTY,
                None,
                f"{self.name}: no external id property set",
            )
            return FilterResult(passed_records=list(records))

        bound = ExternalIdPresenceFilter(
            context.external_id_property,
            require_present=self.require_present,
            report_on_error=self.report_on_error,
            reporter=self._reporter,
        )
        return bound.apply(records, context)

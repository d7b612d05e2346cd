"""
Domain Layer - Core Entities, Value Objects and Exceptions.

This package contains the core domain model of the curation pipeline.
All entities here are pure Python with no chemistry dependencies
(except Pydantic for validation).

Entities:
    - Record: One structure entry with its identity slots
    - CurationResult: Complete result of a curation run
    - StepResult: Audit trail entry of a single step

Value Objects:
    - ReportEntry: Diagnostic handed to a reporter
    - Evaluation: Outcome of evaluating one record against one filter
    - FilterResult: Passed/rejected records of a single step
"""

from structure_curation.domain.entities import (
    EXTERNAL_ID_PLACEHOLDER,
    NOT_FILTERED,
    BondOrder,
    CurationResult,
    ErrorCode,
    MassComputationFlavour,
    Record,
    StepResult,
)
from structure_curation.domain.exceptions import (
    AttributeComputationError,
    CurationError,
    FatalRunError,
    InvalidConfigurationError,
    MalformedIdentityError,
    MissingIdentityError,
    NotInitializedError,
    NullInputError,
    ReportValidationError,
)
from structure_curation.domain.value_objects import Evaluation, FilterResult, ReportEntry

__all__ = [
    "EXTERNAL_ID_PLACEHOLDER",
    "NOT_FILTERED",
    "BondOrder",
    "CurationResult",
    "ErrorCode",
    "MassComputationFlavour",
    "Record",
    "StepResult",
    "AttributeComputationError",
    "CurationError",
    "FatalRunError",
    "InvalidConfigurationError",
    "MalformedIdentityError",
    "MissingIdentityError",
    "NotInitializedError",
    "NullInputError",
    "ReportValidationError",
    "Evaluation",
    "FilterResult",
    "ReportEntry",
]

"""
Pipeline Package - Orchestration and Record Bookkeeping.

This package contains the orchestration logic of curation runs and the
bookkeeping of record identity and removal provenance.

Components:
    - CurationPipeline: Main orchestrator (pipeline.curation_pipeline)
    - StepContext: Run state handed to every processing step
    - identity: Positional ids, removal provenance, external ids

The pipeline is responsible for:
    - Assigning record ids in input order
    - Executing processing steps in sequence
    - Recording the first step that excluded each record
    - Collecting the audit trail of a run

CurationPipeline is not imported here because the filters depend on
StepContext; import it from structure_curation or its own module.
"""

from structure_curation.pipeline.identity import (
    adopt_existing_ids,
    assign_ids,
    mark_removed,
    propagate_external_ids,
    read_record_id,
    read_removal_step,
    reset_removal,
)
from structure_curation.pipeline.step_context import StepContext

__all__ = [
    "adopt_existing_ids",
    "assign_ids",
    "mark_removed",
    "propagate_external_ids",
    "read_record_id",
    "read_removal_step",
    "reset_removal",
    "StepContext",
]

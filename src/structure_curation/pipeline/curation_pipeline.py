"""
Curation Pipeline - Main Orchestrator.

The CurationPipeline folds an ordered list of processing steps over a
collection of records. Every record gets a positional id, every excluded
record remembers the first step that excluded it, and survivors keep their
input order.
"""

from __future__ import annotations

import logging
import time
import uuid
from pathlib import Path
from threading import RLock
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from structure_curation.adapters.reporters import LoggingReporter
from structure_curation.adapters.sdf_importer import ImportFailure, SDFImporter
from structure_curation.domain.entities import (
    BondOrder,
    CurationResult,
    ErrorCode,
    MassComputationFlavour,
    Record,
    StepResult,
)
from structure_curation.domain.exceptions import (
    FatalRunError,
    InvalidConfigurationError,
    NullInputError,
)
from structure_curation.filters.counts import (
    MaxAtomCountFilter,
    MaxBondCountFilter,
    MaxBondsOfOrderFilter,
    MaxHeavyAtomCountFilter,
    MinAtomCountFilter,
    MinBondCountFilter,
    MinBondsOfOrderFilter,
    MinHeavyAtomCountFilter,
)
from structure_curation.filters.mass import MaxMolecularMassFilter, MinMolecularMassFilter
from structure_curation.filters.properties import ExternalIdPresenceFilter, PropertyPresenceFilter
from structure_curation.filters.validity import (
    AtomicNumberValidityFilter,
    PseudoAtomFilter,
    ValenceValidityFilter,
)
from structure_curation.interfaces.processing_step import ProcessingStep
from structure_curation.interfaces.reporter import Reporter
from structure_curation.pipeline.identity import (
    adopt_existing_ids,
    assign_ids,
    mark_removed,
    propagate_external_ids,
    reset_removal,
)
from structure_curation.pipeline.step_context import StepContext

logger = logging.getLogger(__name__)

IMPORT_STEP_NAME = "sdf_import"


class CurationPipeline:
    """Main orchestrator for curation runs."""

    def __init__(
        self,
        reporter: Optional[Reporter] = None,
        external_id_property: Optional[str] = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            reporter: Collects diagnostics of every run (LoggingReporter if None)
            external_id_property: Record property propagated as external id

        Raises:
            InvalidConfigurationError: If external_id_property is blank
        """
        if external_id_property is not None and (
            not isinstance(external_id_property, str) or not external_id_property.strip()
        ):
            raise InvalidConfigurationError(
                "external_id_property must be a non-blank string",
                field="external_id_property",
            )
        self.reporter: Reporter = reporter if reporter is not None else LoggingReporter()
        self.external_id_property = external_id_property
        self._steps: List[ProcessingStep] = []
        self._lock = RLock()

    @property
    def steps(self) -> Tuple[ProcessingStep, ...]:
        """Processing steps in execution order."""
        with self._lock:
            return tuple(self._steps)

    def append_step(self, step: ProcessingStep) -> "CurationPipeline":
        """
        Append a processing step.

        Raises:
            NullInputError: If step is None
            InvalidConfigurationError: If step does not implement ProcessingStep
        """
        if step is None:
            raise NullInputError("step must not be None", argument="step")
        if not isinstance(step, ProcessingStep):
            raise InvalidConfigurationError(
                f"{type(step).__name__} is not a processing step", field="step"
            )
        with self._lock:
            self._steps.append(step)
        logger.debug(f"Appended step {len(self._steps) - 1}: {step.name}")
        return self

    def clear(self) -> "CurationPipeline":
        """Remove all processing steps."""
        with self._lock:
            self._steps.clear()
        return self

    # Builders

    def with_max_atom_count_filter(
        self,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> "CurationPipeline":
        return self.append_step(
            MaxAtomCountFilter(threshold, include_implicit_hydrogens, include_pseudo_atoms)
        )

    def with_min_atom_count_filter(
        self,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> "CurationPipeline":
        return self.append_step(
            MinAtomCountFilter(threshold, include_implicit_hydrogens, include_pseudo_atoms)
        )

    def with_max_heavy_atom_count_filter(
        self, threshold: int, include_pseudo_atoms: bool = True
    ) -> "CurationPipeline":
        return self.append_step(MaxHeavyAtomCountFilter(threshold, include_pseudo_atoms))

    def with_min_heavy_atom_count_filter(
        self, threshold: int, include_pseudo_atoms: bool = True
    ) -> "CurationPipeline":
        return self.append_step(MinHeavyAtomCountFilter(threshold, include_pseudo_atoms))

    def with_max_bond_count_filter(
        self,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> "CurationPipeline":
        return self.append_step(
            MaxBondCountFilter(threshold, include_implicit_hydrogens, include_pseudo_atoms)
        )

    def with_min_bond_count_filter(
        self,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> "CurationPipeline":
        return self.append_step(
            MinBondCountFilter(threshold, include_implicit_hydrogens, include_pseudo_atoms)
        )

    def with_max_bonds_of_order_filter(
        self,
        bond_order: BondOrder,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> "CurationPipeline":
        return self.append_step(
            MaxBondsOfOrderFilter(
                bond_order, threshold, include_implicit_hydrogens, include_pseudo_atoms
            )
        )

    def with_min_bonds_of_order_filter(
        self,
        bond_order: BondOrder,
        threshold: int,
        include_implicit_hydrogens: bool = True,
        include_pseudo_atoms: bool = True,
    ) -> "CurationPipeline":
        return self.append_step(
            MinBondsOfOrderFilter(
                bond_order, threshold, include_implicit_hydrogens, include_pseudo_atoms
            )
        )

    def with_max_molecular_mass_filter(
        self,
        threshold: float,
        flavour: MassComputationFlavour = MassComputationFlavour.MOL_WEIGHT,
    ) -> "CurationPipeline":
        return self.append_step(MaxMolecularMassFilter(threshold, flavour))

    def with_min_molecular_mass_filter(
        self,
        threshold: float,
        flavour: MassComputationFlavour = MassComputationFlavour.MOL_WEIGHT,
    ) -> "CurationPipeline":
        return self.append_step(MinMolecularMassFilter(threshold, flavour))

    def with_atomic_number_validity_filter(
        self, wildcard_is_valid: bool = False, keep_valid: bool = True
    ) -> "CurationPipeline":
        return self.append_step(AtomicNumberValidityFilter(wildcard_is_valid, keep_valid))

    def with_valence_validity_filter(
        self, wildcard_is_valid: bool = False, keep_valid: bool = True
    ) -> "CurationPipeline":
        return self.append_step(ValenceValidityFilter(wildcard_is_valid, keep_valid))

    def with_pseudo_atom_filter(self, exclude_if_present: bool = True) -> "CurationPipeline":
        return self.append_step(PseudoAtomFilter(exclude_if_present))

    def with_property_presence_filter(
        self, property_name: str, require_present: bool = True
    ) -> "CurationPipeline":
        return self.append_step(PropertyPresenceFilter(property_name, require_present))

    def with_external_id_presence_filter(self, require_present: bool = True) -> "CurationPipeline":
        return self.append_step(ExternalIdPresenceFilter(require_present=require_present))

    # Execution

    def process(
        self,
        records: Optional[Iterable[Record]],
        clone_before_processing: bool = False,
        assign_identifiers: bool = True,
    ) -> CurationResult:
        """
        Run all processing steps over a collection of records.

        Args:
            records: Records to curate, in input order
            clone_before_processing: Work on deep copies, leaving the input untouched
            assign_identifiers: Assign positional ids; if False, the existing
                ids of all records are validated and used

        Returns:
            CurationResult with survivors, provenance and audit trail

        Raises:
            NullInputError: If records is None or contains None
            MissingIdentityError: If assign_identifiers is False and a record has no id
            MalformedIdentityError: If assign_identifiers is False and an id is
                malformed or not unique
        """
        return self._run(records, clone_before_processing, assign_identifiers)

    def import_and_process(
        self,
        path: Union[str, Path],
        importer: Optional[SDFImporter] = None,
        clone_before_processing: bool = False,
    ) -> CurationResult:
        """
        Import an SD file and process its records.

        Entries that cannot be read are reported as IMPORT_FAILED_ERROR.

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        if path is None:
            raise NullInputError("path must not be None", argument="path")
        importer = importer or SDFImporter()
        imported = importer.read(path)
        return self._run(
            imported.records,
            clone_before_processing,
            assign_identifiers=True,
            import_failures=imported.failures,
        )

    def _run(
        self,
        records: Optional[Iterable[Record]],
        clone_before_processing: bool,
        assign_identifiers: bool,
        import_failures: Sequence[ImportFailure] = (),
    ) -> CurationResult:
        if records is None:
            raise NullInputError("records must not be None", argument="records")
        records = list(records)
        if any(record is None for record in records):
            raise NullInputError("records must not contain None", argument="records")

        working = [record.clone() for record in records] if clone_before_processing else records
        steps = self.steps
        correlation_id = str(uuid.uuid4())
        start_time = time.perf_counter()

        if assign_identifiers:
            assign_ids(working)
        else:
            adopt_existing_ids(working)
        reset_removal(working)
        if self.external_id_property is not None:
            propagate_external_ids(working, self.external_id_property)

        logger.info(
            f"Curation run {correlation_id[:8]} started: "
            f"{len(working)} records, {len(steps)} steps"
        )
        self.reporter.initialize()

        current = list(working)
        audit_trail: List[StepResult] = []
        fatal = False
        try:
            self._report_import_failures(import_failures, correlation_id)
            for index, step in enumerate(steps):
                if not current:
                    logger.debug(f"No records left, skipping steps from {index}")
                    break
                step_result, current = self._execute_step(index, step, current, correlation_id)
                audit_trail.append(step_result)
        except FatalRunError as e:
            self.reporter.ended_with_fatal_exception = True
            fatal = True
            logger.error(
                f"Curation run {correlation_id[:8]} ended with a fatal exception "
                f"after {len(audit_trail)} steps: {e}"
            )
        except Exception:
            self.reporter.ended_with_fatal_exception = True
            logger.exception(f"Curation run {correlation_id[:8]} failed")
            raise

        if not fatal:
            self.reporter.finalize()

        total_duration = time.perf_counter() - start_time
        logger.info(
            f"Curation run {correlation_id[:8]} finished: "
            f"{len(current)}/{len(working)} records kept ({total_duration:.3f}s)"
        )
        return CurationResult(
            records=current,
            processed_records=working,
            audit_trail=audit_trail,
            ended_with_fatal_exception=fatal,
            correlation_id=correlation_id,
        )

    def _report_import_failures(
        self, failures: Sequence[ImportFailure], correlation_id: str
    ) -> None:
        if not failures:
            return
        context = StepContext(
            step_index=None,
            step_name=IMPORT_STEP_NAME,
            reporter=self.reporter,
            external_id_property=self.external_id_property,
            correlation_id=correlation_id,
        )
        for failure in failures:
            context.report(ErrorCode.IMPORT_FAILED_ERROR, None, failure.message)

    def _execute_step(
        self,
        index: int,
        step: ProcessingStep,
        records: List[Record],
        correlation_id: str,
    ) -> Tuple[StepResult, List[Record]]:
        """Execute a single processing step."""
        step_start = time.perf_counter()
        logger.debug(f"Starting {step.name} with {len(records)} records")

        context = StepContext(
            step_index=index,
            step_name=step.name,
            reporter=self.reporter,
            external_id_property=self.external_id_property,
            correlation_id=correlation_id,
        )
        filter_result = step.apply(records, context)

        passed = {id(record) for record in filter_result.passed_records}
        survivors = [record for record in records if id(record) in passed]
        removed = [record for record in records if id(record) not in passed]
        for record in removed:
            mark_removed(record, index)

        step_duration = time.perf_counter() - step_start
        logger.info(
            f"Completed {step.name}: {len(survivors)}/{len(records)} records passed "
            f"({step_duration:.3f}s)"
        )

        step_result = StepResult(
            step_index=index,
            step_name=step.name,
            input_count=len(records),
            output_count=len(survivors),
            duration_seconds=step_duration,
            removed_record_ids=[record.record_id for record in removed],
            removal_reasons={
                record.record_id: filter_result.rejection_reasons.get(record.record_id, "")
                for record in removed
            },
        )
        return step_result, survivors

    def __len__(self) -> int:
        return len(self.steps)

    def __repr__(self) -> str:
        names = ", ".join(step.name for step in self.steps)
        return f"CurationPipeline(steps=[{names}])"

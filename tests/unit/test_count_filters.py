"""
Unit Tests for Count Filters.

Test Aspects Covered:
    ✅ Business Logic: Max/min thresholds on atom, heavy atom and bond counts
    ✅ Edge Cases: Boundary values pass, implicit hydrogens, pseudo atoms
    ✅ Error Handling: Illegal thresholds, failing attribute computation
"""

from __future__ import annotations

from typing import Callable, List

import pytest

from structure_curation.adapters.mock_structure import PSEUDO_ATOM, MockStructure
from structure_curation.adapters.reporters import NullReporter
from structure_curation.domain.entities import BondOrder, ErrorCode, Record
from structure_curation.domain.exceptions import (
    AttributeComputationError,
    InvalidConfigurationError,
    NotInitializedError,
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
from structure_curation.pipeline.identity import assign_ids
from structure_curation.pipeline.step_context import StepContext


def _pseudo_record() -> Record:
    # C-C-* with 5 implicit hydrogens on the carbons
    structure = MockStructure(
        atomic_numbers=[6, 6, PSEUDO_ATOM],
        implicit_hydrogens=[3, 2, 0],
        bonds=[(0, 1, BondOrder.SINGLE), (1, 2, BondOrder.SINGLE)],
    )
    return Record(payload=structure)


class TestAtomCountFilters:
    """Test cases for Max/MinAtomCountFilter."""

    def test_max_filter_keeps_boundary(
        self, make_records: Callable[..., List[Record]], step_context: StepContext
    ) -> None:
        """
        SCENARIO: Atom counts [12, 9, 10], max threshold 10
        EXPECTED: Ids 1 and 2 pass in that order, id 0 is rejected
        """
        # Arrange
        records = assign_ids(make_records([12, 9, 10]))
        filter_ = MaxAtomCountFilter(10)

        # Act
        result = filter_.apply(records, step_context)

        # Assert
        assert [r.record_id for r in result.passed_records] == [1, 2]
        assert [r.record_id for r in result.rejected_records] == [0]
        assert "atom_count=12 > max=10" in result.rejection_reasons[0]

    def test_min_filter_keeps_boundary(
        self, make_records: Callable[..., List[Record]], step_context: StepContext
    ) -> None:
        """
        SCENARIO: Atom counts [12, 9, 10], min threshold 9
        EXPECTED: All records pass
        """
        records = assign_ids(make_records([12, 9, 10]))

        result = MinAtomCountFilter(9).apply(records, step_context)

        assert result.passed_count == 3
        assert result.rejected_count == 0

    def test_min_filter_rejects_below(
        self, make_records: Callable[..., List[Record]], step_context: StepContext
    ) -> None:
        """
        SCENARIO: Atom counts [12, 9, 10], min threshold 10
        EXPECTED: Id 1 is rejected
        """
        records = assign_ids(make_records([12, 9, 10]))

        result = MinAtomCountFilter(10).apply(records, step_context)

        assert [r.record_id for r in result.rejected_records] == [1]

    def test_implicit_hydrogens_toggle(self) -> None:
        """
        SCENARIO: Ethane as two carbons with 3 implicit hydrogens each
        EXPECTED: 8 atoms with hydrogens, 2 without
        """
        record = Record(payload=MockStructure.chain(2, hydrogens_per_atom=3))

        assert MaxAtomCountFilter(7).is_excluded(record) is True
        assert MaxAtomCountFilter(8).is_excluded(record) is False
        assert MaxAtomCountFilter(2, include_implicit_hydrogens=False).is_excluded(record) is False

    def test_pseudo_atoms_toggle(self) -> None:
        """
        SCENARIO: Structure C-C-* with 5 implicit hydrogens
        EXPECTED: 8 atoms with pseudo atoms, 7 without
        """
        record = _pseudo_record()

        assert MaxAtomCountFilter(7).is_excluded(record) is True
        assert MaxAtomCountFilter(7, include_pseudo_atoms=False).is_excluded(record) is False

    def test_names(self) -> None:
        """
        SCENARIO: Max and min variants
        EXPECTED: Stable, distinct names
        """
        assert MaxAtomCountFilter(1).name == "max_atom_count_filter"
        assert MinAtomCountFilter(1).name == "min_atom_count_filter"


class TestThresholdValidation:
    """Construction errors shared by all count filters."""

    @pytest.mark.parametrize(
        "filter_class",
        [MaxAtomCountFilter, MinAtomCountFilter, MaxHeavyAtomCountFilter, MinBondCountFilter],
    )
    def test_negative_threshold_raises(self, filter_class) -> None:
        """
        SCENARIO: Negative threshold
        EXPECTED: InvalidConfigurationError (also a ValueError)
        """
        with pytest.raises(ValueError):
            filter_class(-1)

    @pytest.mark.parametrize("threshold", ["10", 2.5, True])
    def test_non_integer_threshold_raises(self, threshold) -> None:
        """
        SCENARIO: Threshold is not an integer
        EXPECTED: InvalidConfigurationError
        """
        with pytest.raises(InvalidConfigurationError):
            MaxAtomCountFilter(threshold)

    def test_none_threshold_raises(self) -> None:
        """
        SCENARIO: Threshold is None
        EXPECTED: NullInputError
        """
        with pytest.raises(NullInputError):
            MaxAtomCountFilter(None)

    def test_zero_threshold_is_legal(self) -> None:
        """
        SCENARIO: Threshold 0
        EXPECTED: Filter is created, empty structures pass
        """
        filter_ = MaxAtomCountFilter(0)

        assert filter_.is_excluded(Record(payload=MockStructure())) is False


class TestHeavyAtomAndBondFilters:
    """Test cases for heavy atom and bond count filters."""

    def test_heavy_atoms_ignore_hydrogens(self) -> None:
        """
        SCENARIO: Structure with one explicit hydrogen atom and 2 carbons
        EXPECTED: 2 heavy atoms
        """
        record = Record(payload=MockStructure(atomic_numbers=[6, 6, 1]))

        assert MaxHeavyAtomCountFilter(2).is_excluded(record) is False
        assert MinHeavyAtomCountFilter(3).is_excluded(record) is True

    def test_heavy_atoms_pseudo_toggle(self) -> None:
        """
        SCENARIO: C-C-* structure
        EXPECTED: 3 heavy atoms with pseudo atoms, 2 without
        """
        record = _pseudo_record()

        assert MaxHeavyAtomCountFilter(2).is_excluded(record) is True
        assert MaxHeavyAtomCountFilter(2, include_pseudo_atoms=False).is_excluded(record) is False

    def test_bond_count_with_implicit_hydrogens(self) -> None:
        """
        SCENARIO: Ethane, 1 explicit bond and 6 implicit hydrogens
        EXPECTED: 7 bonds with hydrogens, 1 without
        """
        record = Record(payload=MockStructure.chain(2, hydrogens_per_atom=3))

        assert MaxBondCountFilter(7).is_excluded(record) is False
        assert MaxBondCountFilter(6).is_excluded(record) is True
        assert MinBondCountFilter(2, include_implicit_hydrogens=False).is_excluded(record) is True

    def test_bond_count_skips_pseudo_bonds(self) -> None:
        """
        SCENARIO: C-C-* without implicit hydrogens
        EXPECTED: Bond to the pseudo atom only counted when requested
        """
        record = _pseudo_record()

        assert MaxBondCountFilter(1, include_implicit_hydrogens=False).is_excluded(record) is True
        assert (
            MaxBondCountFilter(
                1, include_implicit_hydrogens=False, include_pseudo_atoms=False
            ).is_excluded(record)
            is False
        )


class TestBondsOfOrderFilters:
    """Test cases for Max/MinBondsOfOrderFilter."""

    @pytest.fixture
    def propene(self) -> Record:
        return Record(
            payload=MockStructure(
                atomic_numbers=[6, 6, 6],
                implicit_hydrogens=[2, 1, 3],
                bonds=[(0, 1, BondOrder.DOUBLE), (1, 2, BondOrder.SINGLE)],
            )
        )

    def test_double_bonds(self, propene: Record) -> None:
        """
        SCENARIO: Propene has one double bond
        EXPECTED: Max 0 excludes, max 1 keeps, min 2 excludes
        """
        assert MaxBondsOfOrderFilter(BondOrder.DOUBLE, 0).is_excluded(propene) is True
        assert MaxBondsOfOrderFilter(BondOrder.DOUBLE, 1).is_excluded(propene) is False
        assert MinBondsOfOrderFilter(BondOrder.DOUBLE, 2).is_excluded(propene) is True

    def test_implicit_hydrogens_count_as_single_bonds(self, propene: Record) -> None:
        """
        SCENARIO: Propene has 1 explicit single bond and 6 implicit hydrogens
        EXPECTED: 7 single bonds with hydrogens, 1 without
        """
        assert MinBondsOfOrderFilter(BondOrder.SINGLE, 7).is_excluded(propene) is False
        assert (
            MaxBondsOfOrderFilter(
                BondOrder.SINGLE, 1, include_implicit_hydrogens=False
            ).is_excluded(propene)
            is False
        )

    def test_accepts_bond_order_name(self) -> None:
        """
        SCENARIO: Bond order given by name, as in configuration files
        EXPECTED: Converted to BondOrder, name derived from it
        """
        filter_ = MaxBondsOfOrderFilter("TRIPLE", 0)

        assert filter_.bond_order is BondOrder.TRIPLE
        assert filter_.name == "max_triple_bond_count_filter"

    def test_none_bond_order_raises(self) -> None:
        """
        SCENARIO: Bond order is None
        EXPECTED: NullInputError
        """
        with pytest.raises(NullInputError):
            MaxBondsOfOrderFilter(None, 1)

    def test_unknown_bond_order_raises(self) -> None:
        """
        SCENARIO: Unknown bond order name
        EXPECTED: InvalidConfigurationError
        """
        with pytest.raises(InvalidConfigurationError):
            MinBondsOfOrderFilter("SEXTUPLE", 1)


class TestAttributeErrors:
    """Recoverable errors during evaluation."""

    @pytest.fixture
    def failing_record(self) -> Record:
        record = Record(
            payload=MockStructure(
                atomic_numbers=[6],
                failures={"atom_count": ErrorCode.IMPLICIT_HYDROGEN_COUNT_ERROR},
            )
        )
        record.record_id = 0
        return record

    def test_raises_without_reporting(self, failing_record: Record) -> None:
        """
        SCENARIO: Attribute fails, standalone call without reporting
        EXPECTED: AttributeComputationError with its error code
        """
        with pytest.raises(AttributeComputationError) as exc_info:
            MaxAtomCountFilter(5).is_excluded(failing_record)

        assert exc_info.value.error_code == ErrorCode.IMPLICIT_HYDROGEN_COUNT_ERROR

    def test_reports_and_excludes(self, failing_record: Record) -> None:
        """
        SCENARIO: Attribute fails, standalone call with reporting
        EXPECTED: Record excluded, one entry with the error code reported
        """
        reporter = NullReporter()
        reporter.initialize()
        filter_ = MaxAtomCountFilter(5, reporter=reporter)

        excluded = filter_.is_excluded(failing_record, report_on_error=True)

        assert excluded is True
        assert reporter.entry_count == 1
        entry = reporter.entries[0]
        assert entry.error_code == ErrorCode.IMPLICIT_HYDROGEN_COUNT_ERROR
        assert entry.step_name == "max_atom_count_filter"
        assert entry.record_id == 0

    def test_apply_reports_and_rejects(
        self, failing_record: Record, step_context: StepContext
    ) -> None:
        """
        SCENARIO: Attribute fails inside a step
        EXPECTED: Record rejected, entry reported through the context
        """
        result = MaxAtomCountFilter(5).apply([failing_record], step_context)

        assert result.rejected_records == [failing_record]
        assert step_context.reporter.entry_count == 1

    def test_apply_raises_when_reporting_disabled(
        self, failing_record: Record, step_context: StepContext
    ) -> None:
        """
        SCENARIO: Attribute fails inside a step with report_on_error=False
        EXPECTED: AttributeComputationError propagates
        """
        filter_ = MaxAtomCountFilter(5, report_on_error=False)

        with pytest.raises(AttributeComputationError):
            filter_.apply([failing_record], step_context)

    def test_uninitialized_reporter_raises(self, failing_record: Record) -> None:
        """
        SCENARIO: Standalone reporting into a reporter that was never initialized
        EXPECTED: NotInitializedError
        """
        filter_ = MaxAtomCountFilter(5, reporter=NullReporter())

        with pytest.raises(NotInitializedError):
            filter_.is_excluded(failing_record, report_on_error=True)

    def test_none_record_raises(self) -> None:
        """
        SCENARIO: None instead of a record
        EXPECTED: NullInputError, never reported
        """
        with pytest.raises(NullInputError):
            MaxAtomCountFilter(5).is_excluded(None, report_on_error=True)

"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from pathlib import Path
from typing import Callable, List

import pytest
from rdkit import Chem

from structure_curation.adapters.mock_structure import MockStructure, generate_mock_records
from structure_curation.adapters.reporters import AllowedErrorsReporter, NullReporter
from structure_curation.domain.entities import Record
from structure_curation.pipeline.step_context import StepContext


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def fixtures_path() -> Path:
    """Directory with test fixture files."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_config_path(fixtures_path: Path) -> Path:
    """Path to sample configuration file."""
    return fixtures_path / "sample_config.yaml"


def _sd_entry(smiles: str, name: str, **tags: str) -> str:
    mol = Chem.MolFromSmiles(smiles)
    mol.SetProp("_Name", name)
    block = Chem.MolToMolBlock(mol)
    return block + "".join(f"> <{key}>\n{value}\n\n" for key, value in tags.items()) + "$$$$\n"


def _pentavalent_carbon_entry() -> str:
    atom = "    0.0000    0.0000    0.0000 C   0  0  0  0  0  0  0  0  0  0  0  0\n"
    bonds = "".join(f"  1{index:>3}  1  0\n" for index in range(2, 7))
    return (
        "broken\n  test\n\n"
        "  6  5  0  0  0  0  0  0  0  0999 V2000\n"
        + atom * 6
        + bonds
        + "M  END\n$$$$\n"
    )


@pytest.fixture
def sample_sdf_path(tmp_path: Path) -> Path:
    """SD file with ethanol, an unreadable entry and benzene."""
    path = tmp_path / "sample.sdf"
    path.write_text(
        _sd_entry("CCO", "ethanol", CAS="64-17-5")
        + _pentavalent_carbon_entry()
        + _sd_entry("c1ccccc1", "benzene"),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def make_records() -> Callable[..., List[Record]]:
    """Factory creating carbon chain records with the given atom counts."""

    def _make(atom_counts: List[int], **properties) -> List[Record]:
        return [
            Record(payload=MockStructure.chain(count), properties=dict(properties))
            for count in atom_counts
        ]

    return _make


@pytest.fixture
def mock_records() -> List[Record]:
    """Deterministic collection of 50 mock records."""
    return generate_mock_records(50, seed=42)


@pytest.fixture
def null_reporter() -> NullReporter:
    """Initialized reporter accepting everything."""
    reporter = NullReporter()
    reporter.initialize()
    return reporter


@pytest.fixture
def strict_reporter() -> AllowedErrorsReporter:
    """Reporter that allows no error code at all."""
    return AllowedErrorsReporter()


@pytest.fixture
def step_context(null_reporter: NullReporter) -> StepContext:
    """Context of a first pipeline step with an initialized reporter."""
    return StepContext(step_index=0, step_name="test_step", reporter=null_reporter)

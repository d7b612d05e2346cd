"""
Unit Tests for the RDKit Structure Adapter and SD Importer.

Test Aspects Covered:
    ✅ Business Logic: Counts, bond orders, masses, validity checks
    ✅ Edge Cases: Pseudo atoms, isotopes, aromatic bonds
    ✅ Error Handling: Unparsable SMILES, unreadable SD entries
"""

from __future__ import annotations

from pathlib import Path

import pytest

from structure_curation.adapters.rdkit_structure import RDKitStructure
from structure_curation.adapters.sdf_importer import SDFImporter
from structure_curation.domain.entities import BondOrder, MassComputationFlavour, Record
from structure_curation.domain.exceptions import NullInputError
from structure_curation.interfaces.structure import StructureAttributes


class TestRDKitCounts:
    """Count attributes computed with RDKit."""

    def test_implements_protocol(self) -> None:
        """
        SCENARIO: Adapter instance
        EXPECTED: Satisfies StructureAttributes
        """
        assert isinstance(RDKitStructure.from_smiles("C"), StructureAttributes)

    def test_ethanol_atom_counts(self) -> None:
        """
        SCENARIO: Ethanol (CCO)
        EXPECTED: 9 atoms with implicit hydrogens, 3 without, 3 heavy atoms
        """
        ethanol = RDKitStructure.from_smiles("CCO")

        assert ethanol.atom_count() == 9
        assert ethanol.atom_count(include_implicit_hydrogens=False) == 3
        assert ethanol.heavy_atom_count() == 3

    def test_ethanol_bond_counts(self) -> None:
        """
        SCENARIO: Ethanol (CCO)
        EXPECTED: 2 explicit bonds, 8 with implicit hydrogens, all single
        """
        ethanol = RDKitStructure.from_smiles("CCO")

        assert ethanol.bond_count(include_implicit_hydrogens=False) == 2
        assert ethanol.bond_count() == 8
        assert ethanol.bond_order_count(BondOrder.SINGLE) == 8
        assert ethanol.bond_order_count(BondOrder.DOUBLE) == 0

    def test_aromatic_bonds(self) -> None:
        """
        SCENARIO: Benzene
        EXPECTED: 6 aromatic bonds, implicit hydrogens only add single bonds
        """
        benzene = RDKitStructure.from_smiles("c1ccccc1")

        assert benzene.bond_order_count(BondOrder.AROMATIC) == 6
        assert benzene.bond_order_count(BondOrder.SINGLE) == 6
        assert benzene.bond_order_count(BondOrder.SINGLE, include_implicit_hydrogens=False) == 0

    def test_pseudo_atoms(self) -> None:
        """
        SCENARIO: *CC with a dummy atom
        EXPECTED: Pseudo atom detected and excluded from counts on request
        """
        structure = RDKitStructure.from_smiles("*CC")

        assert structure.contains_pseudo_atoms() is True
        assert structure.atom_count() == 8
        assert structure.atom_count(include_pseudo_atoms=False) == 7
        assert structure.heavy_atom_count(include_pseudo_atoms=False) == 2
        assert structure.bond_count(include_implicit_hydrogens=False, include_pseudo_atoms=False) == 1

    def test_atomic_number_validity(self) -> None:
        """
        SCENARIO: Regular and wildcard structures
        EXPECTED: Wildcard only valid on request
        """
        assert RDKitStructure.from_smiles("CCO").has_all_valid_atomic_numbers() is True
        wildcard = RDKitStructure.from_smiles("*CC")
        assert wildcard.has_all_valid_atomic_numbers() is False
        assert wildcard.has_all_valid_atomic_numbers(wildcard_is_valid=True) is True


class TestRDKitValences:
    """Valence checks with the RDKit valence model."""

    def test_regular_structures_are_valid(self) -> None:
        """
        SCENARIO: Ethanol and ammonium
        EXPECTED: All valences valid
        """
        assert RDKitStructure.from_smiles("CCO").has_all_valid_valences() is True
        assert RDKitStructure.from_smiles("[NH4+]").has_all_valid_valences() is True

    def test_pentavalent_carbon_is_invalid(self) -> None:
        """
        SCENARIO: Unsanitized carbon with five carbon neighbours
        EXPECTED: Invalid valence detected, molecule left unchanged
        """
        structure = RDKitStructure.from_smiles("C(C)(C)(C)(C)C", sanitize=False)

        assert structure.has_all_valid_valences() is False
        assert structure.heavy_atom_count() == 6

    def test_wildcard_depends_on_flag(self) -> None:
        """
        SCENARIO: *CC with a dummy atom
        EXPECTED: Invalid unless wildcards are valid
        """
        structure = RDKitStructure.from_smiles("*CC")

        assert structure.has_all_valid_valences() is False
        assert structure.has_all_valid_valences(wildcard_is_valid=True) is True


class TestRDKitMass:
    """Mass flavours computed with RDKit."""

    def test_mol_weight(self) -> None:
        """
        SCENARIO: Ethanol average mass
        EXPECTED: About 46.07
        """
        mass = RDKitStructure.from_smiles("CCO").molecular_mass(MassComputationFlavour.MOL_WEIGHT)

        assert mass == pytest.approx(46.069, abs=0.01)

    def test_mono_isotopic_and_most_abundant(self) -> None:
        """
        SCENARIO: Ethanol exact masses
        EXPECTED: Both about 46.042
        """
        ethanol = RDKitStructure.from_smiles("CCO")

        assert ethanol.molecular_mass(MassComputationFlavour.MONO_ISOTOPIC) == pytest.approx(
            46.042, abs=0.001
        )
        assert ethanol.molecular_mass(MassComputationFlavour.MOST_ABUNDANT) == pytest.approx(
            46.042, abs=0.001
        )

    def test_specified_isotopes(self) -> None:
        """
        SCENARIO: 13C-methane
        EXPECTED: MOL_WEIGHT honours the isotope, the ignoring flavour does not
        """
        methane = RDKitStructure.from_smiles("[13CH4]")

        honoured = methane.molecular_mass(MassComputationFlavour.MOL_WEIGHT)
        ignored = methane.molecular_mass(MassComputationFlavour.MOL_WEIGHT_IGNORE_SPECIFIED)

        assert ignored == pytest.approx(16.043, abs=0.01)
        assert honoured - ignored == pytest.approx(0.99, abs=0.02)

    def test_none_flavour_raises(self) -> None:
        """
        SCENARIO: Flavour is None
        EXPECTED: NullInputError
        """
        with pytest.raises(NullInputError):
            RDKitStructure.from_smiles("C").molecular_mass(None)


class TestRDKitConstruction:
    """Construction and copying."""

    def test_invalid_smiles_raises(self) -> None:
        """
        SCENARIO: Unparsable SMILES
        EXPECTED: ValueError
        """
        with pytest.raises(ValueError, match="Could not parse SMILES"):
            RDKitStructure.from_smiles("C1CC")

    def test_none_mol_raises(self) -> None:
        """
        SCENARIO: None instead of a molecule
        EXPECTED: NullInputError
        """
        with pytest.raises(NullInputError):
            RDKitStructure(None)

    def test_record_clone_copies_molecule(self) -> None:
        """
        SCENARIO: Clone a record with an RDKit payload
        EXPECTED: Independent molecule with equal attributes
        """
        record = Record(payload=RDKitStructure.from_smiles("CCO"))

        clone = record.clone()

        assert clone.payload.mol is not record.payload.mol
        assert clone.payload.atom_count() == 9


class TestSDFImporter:
    """Test cases for SDFImporter."""

    def test_reads_records_and_failures(self, sample_sdf_path: Path) -> None:
        """
        SCENARIO: SD file with two readable entries and one broken entry
        EXPECTED: Two records in file order, one failure at position 1
        """
        # Act
        result = SDFImporter().read(sample_sdf_path)

        # Assert
        assert len(result.records) == 2
        assert result.total_count == 3
        assert [f.position for f in result.failures] == [1]
        assert result.records[0].properties["CAS"] == "64-17-5"
        assert result.records[0].properties["_Name"] == "ethanol"
        assert result.records[1].payload.heavy_atom_count() == 6

    def test_unsanitized_import_keeps_invalid_entry(self, sample_sdf_path: Path) -> None:
        """
        SCENARIO: Import without sanitization
        EXPECTED: Pentavalent carbon entry is read, and only it has invalid valences
        """
        result = SDFImporter(sanitize=False).read(sample_sdf_path)

        assert result.failures == []
        assert [r.payload.has_all_valid_valences() for r in result.records] == [
            True,
            False,
            True,
        ]

    def test_records_have_no_identity_yet(self, sample_sdf_path: Path) -> None:
        """
        SCENARIO: Freshly imported records
        EXPECTED: No record id assigned
        """
        result = SDFImporter().read(sample_sdf_path)

        assert all(r.record_id is None for r in result.records)

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """
        SCENARIO: File does not exist
        EXPECTED: FileNotFoundError
        """
        with pytest.raises(FileNotFoundError):
            SDFImporter().read(tmp_path / "missing.sdf")

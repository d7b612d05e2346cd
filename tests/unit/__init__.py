"""
Unit Tests - Testing Individual Components in Isolation.

Filters are tested against MockStructure payloads, the RDKit adapter
against real molecules.

Test Files:
    - test_identity.py: Record ids and removal provenance
    - test_count_filters.py: Atom, heavy atom and bond count filters
    - test_mass_filter.py: Molecular mass filters
    - test_validity_filters.py: Validity and property filters
    - test_reporters.py: Reporter lifecycle and validation
    - test_config_loader.py: Configuration loading/validation
    - test_step_registry.py: Step registry and pipeline building
    - test_rdkit_structure.py: RDKit adapter and SD import
"""

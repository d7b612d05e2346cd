"""
Adapters Package - Infrastructure Implementations.

Components:
    - RDKitStructure: Structure attributes computed with RDKit
    - MockStructure: Fake structure for development and testing
    - SDFImporter: Reads SD files into Records
    - LoggingReporter, AllowedErrorsReporter, NullReporter: Run diagnostics
"""

from structure_curation.adapters.mock_structure import MockStructure, generate_mock_records
from structure_curation.adapters.rdkit_structure import RDKitStructure
from structure_curation.adapters.reporters import (
    AllowedErrorsReporter,
    BaseReporter,
    LoggingReporter,
    NullReporter,
)
from structure_curation.adapters.sdf_importer import ImportFailure, ImportResult, SDFImporter

__all__ = [
    "MockStructure",
    "generate_mock_records",
    "RDKitStructure",
    "AllowedErrorsReporter",
    "BaseReporter",
    "LoggingReporter",
    "NullReporter",
    "ImportFailure",
    "ImportResult",
    "SDFImporter",
]

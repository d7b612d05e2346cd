"""
SD File Importer.

Reads SD files with RDKit into Records. SD tags become record properties;
entries RDKit cannot read are returned as failures instead of aborting the
import.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Union

from rdkit import Chem

from structure_curation.adapters.rdkit_structure import RDKitStructure
from structure_curation.domain.entities import Record

logger = logging.getLogger(__name__)

# Property holding the title line of an SD entry
TITLE_PROPERTY = "_Name"


@dataclass(frozen=True)
class ImportFailure:
    """One SD entry that could not be read."""

    position: int
    message: str


@dataclass
class ImportResult:
    """Records and failures of one import."""

    records: List[Record] = field(default_factory=list)
    failures: List[ImportFailure] = field(default_factory=list)

    @property
    def total_count(self) -> int:
        return len(self.records) + len(self.failures)


class SDFImporter:
    """Reads SD files into Records."""

    def __init__(self, sanitize: bool = True, remove_hs: bool = False) -> None:
        """
        Initialize importer.

        Args:
            sanitize: Let RDKit sanitize every entry
            remove_hs: Strip explicit hydrogen atoms while reading
        """
        self.sanitize = sanitize
        self.remove_hs = remove_hs

    def read(self, path: Union[str, Path]) -> ImportResult:
        """
        Read all entries of an SD file.

        Args:
            path: Path to the SD file

        Returns:
            ImportResult with one Record per readable entry

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"SD file not found: {path}")

        supplier = Chem.SDMolSupplier(str(path), sanitize=self.sanitize, removeHs=self.remove_hs)
        result = ImportResult()
        for position, mol in enumerate(supplier):
            if mol is None:
                result.failures.append(
                    ImportFailure(position, f"entry {position} of {path.name} could not be read")
                )
                continue
            result.records.append(Record(payload=RDKitStructure(mol), properties=self._properties(mol)))

        logger.info(
            f"Imported {len(result.records)} records from {path.name} "
            f"({len(result.failures)} failures)"
        )
        return result

    def _properties(self, mol: Chem.Mol) -> dict:
        properties = dict(mol.GetPropsAsDict())
        if mol.HasProp(TITLE_PROPERTY) and mol.GetProp(TITLE_PROPERTY):
            properties[TITLE_PROPERTY] = mol.GetProp(TITLE_PROPERTY)
        return properties

"""
Structure Curation - Filtering Pipeline for Chemical Structure Collections.

Curates collections of chemical structures by running them through an
ordered list of processing steps (atom and bond counts, molecular mass,
atomic number and valence validity, pseudo atoms, property presence).
Every record is tracked by a positional id, and every excluded record
remembers the first step that excluded it.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for testability
    - Configuration-driven pipelines via YAML

Main Components:
    - domain: Core entities (Record, CurationResult, etc.)
    - interfaces: Abstract protocols (StructureAttributes, Reporter, ...)
    - filters: Concrete processing steps
    - pipeline: Orchestration and identity bookkeeping
    - adapters: RDKit structures, SD import, reporters
    - config / registry: Configuration models and pipeline building

Example:
    >>> from structure_curation import CurationPipeline
    >>> pipeline = CurationPipeline().with_max_heavy_atom_count_filter(30)
    >>> result = pipeline.import_and_process("library.sdf")
    >>> print(f"Kept {len(result.records)} records")

"""

import logging

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Structure Curation.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import structure_curation
        >>> structure_curation.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("structure_curation").setLevel(level)


from structure_curation.domain import (  # noqa: E402
    BondOrder,
    CurationError,
    CurationResult,
    ErrorCode,
    MassComputationFlavour,
    Record,
)
from structure_curation.pipeline.curation_pipeline import CurationPipeline  # noqa: E402
from structure_curation.config import load_config  # noqa: E402
from structure_curation.registry import build_pipeline, curate  # noqa: E402

__all__ = [
    "configure_logging",
    "BondOrder",
    "CurationError",
    "CurationResult",
    "CurationPipeline",
    "ErrorCode",
    "MassComputationFlavour",
    "Record",
    "build_pipeline",
    "curate",
    "load_config",
]

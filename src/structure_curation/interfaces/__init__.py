"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) for all
collaborators of the pipeline. High-level modules depend on these
abstractions, not on concrete implementations.

Protocols:
    - StructureAttributes: Chemistry attributes of a record payload
    - ProcessingStep: Base protocol for pipeline steps
    - Reporter: Diagnostics sink with a run lifecycle

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Interface Segregation: Small, focused interfaces
    - All methods have clear contracts in docstrings
"""

from structure_curation.interfaces.processing_step import ProcessingStep
from structure_curation.interfaces.reporter import Reporter
from structure_curation.interfaces.structure import StructureAttributes

__all__ = [
    "ProcessingStep",
    "Reporter",
    "StructureAttributes",
]

"""
Filters Package - Concrete Filter Implementations.

This package contains the concrete processing steps of the curation
pipeline. Each filter implements the ProcessingStep protocol and can also
be used standalone through is_excluded().

Filters:
    - Max/MinAtomCountFilter, Max/MinHeavyAtomCountFilter
    - Max/MinBondCountFilter, Max/MinBondsOfOrderFilter
    - Max/MinMolecularMassFilter
    - AtomicNumberValidityFilter, ValenceValidityFilter, PseudoAtomFilter
    - PropertyPresenceFilter, ExternalIdPresenceFilter

Design Principles:
    - Each filter is independently testable
    - Configuration injected via constructor
    - Boundary values always pass
    - Clear rejection reasons for the audit trail
"""

from structure_curation.filters.base import BaseFilter, ThresholdFilter, validate_threshold
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

__all__ = [
    "BaseFilter",
    "ThresholdFilter",
    "validate_threshold",
    "MaxAtomCountFilter",
    "MinAtomCountFilter",
    "MaxHeavyAtomCountFilter",
    "MinHeavyAtomCountFilter",
    "MaxBondCountFilter",
    "MinBondCountFilter",
    "MaxBondsOfOrderFilter",
    "MinBondsOfOrderFilter",
    "MaxMolecularMassFilter",
    "MinMolecularMassFilter",
    "AtomicNumberValidityFilter",
    "PseudoAtomFilter",
    "ValenceValidityFilter",
    "PropertyPresenceFilter",
    "ExternalIdPresenceFilter",
]

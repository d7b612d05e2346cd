"""
Step Registry - Config-Driven Processing Step Creation.

This module provides a thread-safe registry mapping step kinds to
factories, and builds pipelines from a CurationConfig.

Usage:
    registry = create_default_registry()
    registry.register("my_filter", MyFilter, version="1.0.0")

    config = load_config("curation.yaml")
    pipeline = build_pipeline(config, registry=registry)
    result = pipeline.process(records)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, Callable, Dict, Iterable, List, Optional

from structure_curation.adapters.reporters import LoggingReporter
from structure_curation.config.models import CurationConfig
from structure_curation.domain.entities import CurationResult, Record
from structure_curation.domain.exceptions import InvalidConfigurationError
from structure_curation.filters import (
    AtomicNumberValidityFilter,
    ExternalIdPresenceFilter,
    MaxAtomCountFilter,
    MaxBondCountFilter,
    MaxBondsOfOrderFilter,
    MaxHeavyAtomCountFilter,
    MaxMolecularMassFilter,
    MinAtomCountFilter,
    MinBondCountFilter,
    MinBondsOfOrderFilter,
    MinHeavyAtomCountFilter,
    MinMolecularMassFilter,
    PropertyPresenceFilter,
    PseudoAtomFilter,
    ValenceValidityFilter,
)
from structure_curation.interfaces.processing_step import ProcessingStep
from structure_curation.interfaces.reporter import Reporter
from structure_curation.pipeline.curation_pipeline import CurationPipeline

logger = logging.getLogger(__name__)

StepFactory = Callable[..., ProcessingStep]


@dataclass
class StepInfo:
    """Metadata about a registered step kind."""

    kind: str
    factory: StepFactory
    version: str = "1.0.0"
    description: str = ""
    tags: List[str] = field(default_factory=list)


class StepRegistry:
    """
    Thread-safe registry of processing step factories.

    A factory is called with the params of a StepConfig as keyword
    arguments plus report_on_error.
    """

    def __init__(self) -> None:
        """Initialize empty registry."""
        self._steps: Dict[str, StepInfo] = {}
        self._lock = RLock()

    def register(
        self,
        kind: str,
        factory: StepFactory,
        version: str = "1.0.0",
        description: str = "",
        tags: Optional[List[str]] = None,
    ) -> None:
        """
        Register a step factory.

        Args:
            kind: Unique kind used in configuration
            factory: Callable (usually a filter class) creating the step
            version: Version string for the step
            description: Optional description
            tags: Optional tags for categorization

        Raises:
            ValueError: If the kind is already registered
        """
        with self._lock:
            if kind in self._steps:
                raise ValueError(
                    f"Step kind '{kind}' is already registered. Use unregister() first."
                )
            self._steps[kind] = StepInfo(
                kind=kind,
                factory=factory,
                version=version,
                description=description,
                tags=tags or [],
            )
            logger.debug(f"Registered step kind: {kind} v{version}")

    def unregister(self, kind: str) -> bool:
        """
        Unregister a step kind.

        Returns:
            True if the kind was removed, False if not found
        """
        with self._lock:
            if kind not in self._steps:
                logger.warning(f"Cannot unregister: step kind '{kind}' not found")
                return False
            del self._steps[kind]
            logger.debug(f"Unregistered step kind: {kind}")
            return True

    def create(self, kind: str, **params: Any) -> ProcessingStep:
        """
        Instantiate a step of the given kind.

        Raises:
            InvalidConfigurationError: If the kind is unknown or the params
                are not accepted by its factory
        """
        with self._lock:
            info = self._steps.get(kind)
            known = ", ".join(sorted(self._steps))
        if info is None:
            raise InvalidConfigurationError(
                f"Unknown step kind: {kind} (known: {known})", field="kind"
            )
        try:
            return info.factory(**params)
        except TypeError as e:
            raise InvalidConfigurationError(
                f"Invalid parameters for step kind '{kind}': {e}", field="params"
            ) from e

    def get_info(self, kind: str) -> Optional[StepInfo]:
        """Metadata of a registered kind, None if unknown."""
        with self._lock:
            return self._steps.get(kind)

    def get_versions(self) -> Dict[str, str]:
        with self._lock:
            return {kind: info.version for kind, info in self._steps.items()}

    @property
    def registered_count(self) -> int:
        with self._lock:
            return len(self._steps)

    def __contains__(self, kind: str) -> bool:
        with self._lock:
            return kind in self._steps


def create_default_registry() -> StepRegistry:
    """Registry knowing every built-in filter."""
    registry = StepRegistry()
    builtins = [
        ("max_atom_count", MaxAtomCountFilter, "Maximum atom count", ["count"]),
        ("min_atom_count", MinAtomCountFilter, "Minimum atom count", ["count"]),
        ("max_heavy_atom_count", MaxHeavyAtomCountFilter, "Maximum heavy atom count", ["count"]),
        ("min_heavy_atom_count", MinHeavyAtomCountFilter, "Minimum heavy atom count", ["count"]),
        ("max_bond_count", MaxBondCountFilter, "Maximum bond count", ["count"]),
        ("min_bond_count", MinBondCountFilter, "Minimum bond count", ["count"]),
        ("max_bonds_of_order", MaxBondsOfOrderFilter, "Maximum bonds of an order", ["count"]),
        ("min_bonds_of_order", MinBondsOfOrderFilter, "Minimum bonds of an order", ["count"]),
        ("max_molecular_mass", MaxMolecularMassFilter, "Maximum molecular mass", ["mass"]),
        ("min_molecular_mass", MinMolecularMassFilter, "Minimum molecular mass", ["mass"]),
        ("atomic_number_validity", AtomicNumberValidityFilter, "Atomic number check", ["validity"]),
        ("valence_validity", ValenceValidityFilter, "Valence check", ["validity"]),
        ("pseudo_atoms", PseudoAtomFilter, "Pseudo atom check", ["validity"]),
        ("property_presence", PropertyPresenceFilter, "Property presence", ["property"]),
        ("external_id_presence", ExternalIdPresenceFilter, "External id presence", ["property"]),
    ]
    for kind, factory, description, tags in builtins:
        registry.register(kind, factory, description=description, tags=tags)
    return registry


def build_pipeline(
    config: CurationConfig,
    reporter: Optional[Reporter] = None,
    registry: Optional[StepRegistry] = None,
) -> CurationPipeline:
    """
    Build a pipeline from configuration.

    Args:
        config: Validated configuration
        reporter: Reporter of the pipeline (LoggingReporter if None)
        registry: Step registry (default registry if None)

    Returns:
        Pipeline with all enabled steps in configuration order

    Raises:
        InvalidConfigurationError: If a step kind or its params are invalid
    """
    registry = registry or create_default_registry()
    settings = config.pipeline
    if reporter is None:
        reporter = LoggingReporter(max_entries=settings.max_report_entries)

    pipeline = CurationPipeline(
        reporter=reporter,
        external_id_property=settings.external_id_property,
    )
    for step_config in config.enabled_steps:
        params = dict(step_config.params)
        params.setdefault("report_on_error", settings.report_on_error)
        pipeline.append_step(registry.create(step_config.kind, **params))

    logger.info(f"Built pipeline with {len(pipeline)} steps (config v{config.version})")
    return pipeline


def curate(
    records: Iterable[Record],
    config: CurationConfig,
    reporter: Optional[Reporter] = None,
    registry: Optional[StepRegistry] = None,
) -> CurationResult:
    """Build a pipeline from configuration and process records with its run settings."""
    pipeline = build_pipeline(config, reporter=reporter, registry=registry)
    return pipeline.process(
        records,
        clone_before_processing=config.pipeline.clone_before_processing,
        assign_identifiers=config.pipeline.assign_identifiers,
    )

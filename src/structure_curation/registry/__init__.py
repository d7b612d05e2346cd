"""
Registry Module - Config-Driven Step Management.

This module provides a registry mapping step kinds to factories, enabling
pipelines to be built from configuration and custom steps to be plugged in.

Components:
    - StepRegistry: Central registry of step factories
    - StepInfo: Metadata about registered step kinds
    - build_pipeline / curate: Configuration to pipeline / result
"""

from structure_curation.registry.step_registry import (
    StepInfo,
    StepRegistry,
    build_pipeline,
    create_default_registry,
    curate,
)

__all__ = [
    "StepInfo",
    "StepRegistry",
    "build_pipeline",
    "create_default_registry",
    "curate",
]

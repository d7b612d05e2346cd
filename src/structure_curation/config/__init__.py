"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of structure curation:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - CurationConfig: Root configuration object
    - PipelineSettings: Reporter, identity and cloning settings
    - StepConfig: One processing step (kind + params)
"""

from structure_curation.config.loader import ConfigLoader, load_config
from structure_curation.config.models import CurationConfig, PipelineSettings, StepConfig

__all__ = [
    "ConfigLoader",
    "load_config",
    "CurationConfig",
    "PipelineSettings",
    "StepConfig",
]

"""
Configuration Loader - YAML Loading with Validation.

Reads a curation configuration file and validates it with the pydantic
models. Profiles live in a ``profiles/`` directory next to the file and are
laid over it: the ``pipeline`` section is merged key by key, while a
profile's ``steps`` list replaces the base list as a whole.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from structure_curation.config.models import CurationConfig
from structure_curation.domain.exceptions import InvalidConfigurationError

logger = logging.getLogger(__name__)

PROFILE_DIRECTORY = "profiles"


def _read_mapping(path: Path) -> Dict[str, Any]:
    if not path.is_file():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, encoding="utf-8") as f:
        content = yaml.safe_load(f)
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise InvalidConfigurationError(
            f"{path.name} must contain a mapping, got {type(content).__name__}"
        )
    return content


def _overlay(base: Dict[str, Any], profile: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in profile.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _overlay(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Loads curation configurations, optionally with a profile."""

    def __init__(self, base_path: Optional[Path] = None) -> None:
        """
        Args:
            base_path: Directory relative config paths are resolved against
        """
        self._base_path = Path(base_path) if base_path else Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> CurationConfig:
        """
        Load and validate a configuration file.

        Args:
            config_path: YAML file, relative to base_path unless absolute
            profile: Name of a file in the ``profiles/`` directory beside it

        Raises:
            FileNotFoundError: If the file or the profile doesn't exist
            InvalidConfigurationError: If a file holds no mapping
            pydantic.ValidationError: If the merged configuration is invalid
        """
        path = Path(config_path)
        if not path.is_absolute():
            path = self._base_path / path
        raw = _read_mapping(path)

        if profile:
            profile_path = path.parent / PROFILE_DIRECTORY / f"{profile}.yaml"
            if not profile_path.is_file():
                raise FileNotFoundError(f"Profile not found: {profile} ({profile_path})")
            raw = _overlay(raw, _read_mapping(profile_path))

        config = CurationConfig.model_validate(raw)
        logger.debug(f"Loaded {path.name} (profile={profile}, steps={len(config.steps)})")
        return config


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
) -> CurationConfig:
    """Load a configuration file with an optional profile."""
    return ConfigLoader().load(config_path, profile)

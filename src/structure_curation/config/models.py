"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic. Step
parameters are validated by the filter constructors when the pipeline is
built.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class PipelineSettings(BaseModel):
    """Settings of the pipeline and of every run."""

    external_id_property: Optional[str] = None
    clone_before_processing: bool = False
    assign_identifiers: bool = True
    report_on_error: bool = True
    max_report_entries: Optional[int] = Field(default=None, ge=0)

    @field_validator("external_id_property")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("external_id_property must not be blank")
        return value


class StepConfig(BaseModel):
    """One processing step: registered kind plus constructor parameters."""

    kind: str = Field(min_length=1)
    enabled: bool = True
    params: Dict[str, Any] = Field(default_factory=dict)


class CurationConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    steps: List[StepConfig] = Field(default_factory=list)

    @property
    def enabled_steps(self) -> List[StepConfig]:
        return [step for step in self.steps if step.enabled]

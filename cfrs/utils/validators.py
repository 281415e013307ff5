"""Render job schema validation and config loading.

Provides centralized validation for render jobs using pydantic:
    - Job schema (render_job.v1): canvas size, background, frame interval,
      output path, and the command program

Jobs come from two places that share this schema: YAML job files
(``configs/jobs/*.yaml``) and CLI arguments.  Both are validated here so
bad input fails before any drawing starts, with the offending key named.

Units:
    - Canvas size: pixels
    - Frame interval: milliseconds of virtual (pause) time

Usage:
    from cfrs.utils import validators

    job = validators.load_job_config("configs/jobs/spiral.yaml")
    job = validators.build_job({"output": "out.png", "commands": "[[CF]]"})
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from cfrs.canvas.enums import Color

MAX_CANVAS_PX = 16384

ANIMATION_SUFFIXES = frozenset({".gif"})


class ConfigError(ValueError):
    """Raised when a render job fails validation."""

    pass


# ============================================================================
# RENDER JOB SCHEMA V1
# ============================================================================

class RenderJobV1(BaseModel):
    """One render: program, canvas and output (render_job.v1 schema)."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    schema_version: str = Field("render_job.v1", alias="schema", description="Schema version")
    width: int = Field(256, ge=1, le=MAX_CANVAS_PX, description="Canvas width (px)")
    height: int = Field(256, ge=1, le=MAX_CANVAS_PX, description="Canvas height (px)")
    background: Color = Field(Color.BLACK, description="Initial colour of every cell")
    interval_ms: int = Field(100, ge=1, description="Virtual ms between animation frames")
    output: Path = Field(..., description="Output image path (.gif selects animation)")
    commands: str = Field(..., description="CFRS program text")
    summary: Optional[Path] = Field(None, description="Optional YAML run summary path")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "render_job.v1":
            raise ValueError(f"Expected schema 'render_job.v1', got '{v}'")
        return v

    @field_validator('background', mode='before')
    @classmethod
    def parse_background(cls, v: Any) -> Color:
        if isinstance(v, Color):
            return v
        # InvalidColorName is a ValueError, so pydantic reports it per-field
        return Color.parse(v)

    @field_validator('output')
    @classmethod
    def validate_output(cls, v: Path) -> Path:
        if not v.suffix:
            raise ValueError(f"Output path needs a file extension to pick a format: {v}")
        return v

    @property
    def animated(self) -> bool:
        """True when the output extension selects animation export."""
        return self.output.suffix.lower() in ANIMATION_SUFFIXES


# ============================================================================
# PUBLIC API
# ============================================================================

def build_job(data: Dict[str, Any]) -> RenderJobV1:
    """Validate a mapping into a render job.

    Raises
    ------
    ConfigError
        If validation fails (message lists each offending field).
    """
    try:
        return RenderJobV1(**data)
    except ValidationError as e:
        raise ConfigError(f"Render job validation failed: {e}") from e


def load_job_data(path: Union[str, Path]) -> Dict[str, Any]:
    """Read a YAML job file into a plain mapping (no validation).

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If the document is not a mapping
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Job config not found: {path}")

    data = fs.load_yaml(path)
    if data is None:
        raise ConfigError(f"Empty job config: {path}")
    if not isinstance(data, dict):
        raise ConfigError(f"Job config must be a mapping, got {type(data).__name__}: {path}")
    return data


def load_job_config(path: Union[str, Path]) -> RenderJobV1:
    """Load and validate a render job from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to a render_job.v1 YAML file

    Returns
    -------
    RenderJobV1
        Validated job

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If validation fails (with actionable error message)
    """
    data = load_job_data(path)
    try:
        return RenderJobV1(**data)
    except ValidationError as e:
        raise ConfigError(f"Job config validation failed at {path}: {e}") from e


def job_to_dict(job: RenderJobV1) -> Dict[str, Any]:
    """Plain, YAML-safe mapping of a job (schema key restored)."""
    return job.model_dump(by_alias=True, mode="json")

"""YAML schema validation and config loading.

Provides centralized validation for the approximation config using pydantic:
    - Approximation schema (approximation.v1.yaml): fractal order, path
      source, optional stages, sampling granularity, stroke style, colors

All modules must load configs through these validators for fail-fast error
detection with actionable messages (offending keys, expected ranges).

Units:
    - Geometry: pixels of the target image
    - Angular frequency (omega): radians per pixel of arc length
    - Colors: 8-bit gray levels [0, 255]

Usage:
    from hilbert_ink.utils import validators

    cfg = validators.load_approximation_config("configs/approximation_v1.yaml")
    cfg = cfg.model_copy(update={"order": 6})
"""

from pathlib import Path
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


# Orders above this emit 4**order segments and are impractical.
MAX_ORDER = 12


# ============================================================================
# APPROXIMATION SCHEMA V1
# ============================================================================

class ApproximationConfigV1(BaseModel):
    """Parameters of one approximation run (approximation.v1.yaml schema)."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    schema_version: str = Field("approximation.v1", alias="schema", description="Schema version")

    # Path source
    order: int = Field(8, ge=0, le=MAX_ORDER, description="Hilbert curve order (2**order cells per axis)")
    path_source: Literal["hilbert", "scanlines"] = Field("hilbert", description="Zero-width path to modulate")
    scanline_spacing: float = Field(4.0, gt=0.0, description="Row spacing for the scanline source (px)")

    # Optional stages
    stretch_contrast: bool = Field(True, description="Remap [min, max] brightness to [0, 255] first")
    smooth_corners: bool = Field(True, description="Replace lattice corners with quadratic Bézier arcs")

    # Sampling and rendering
    partition_max_length: float = Field(1.0, gt=0.0, description="Max sub-segment length (px)")
    style: Literal["zigzag", "sine", "continuous_sine"] = Field(
        "continuous_sine", description="Stroke renderer"
    )
    omega: float = Field(1.0, gt=0.0, description="Angular frequency of continuous_sine (rad/px)")
    sine_periods: Union[int, None] = Field(
        None, ge=1, description="Periods per segment for the sine style (default: ceil(length))"
    )

    # Output canvas
    background: int = Field(255, ge=0, le=255, description="Canvas gray level")
    foreground: int = Field(0, ge=0, le=255, description="Stroke gray level")

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "approximation.v1":
            raise ValueError(f"Expected schema 'approximation.v1', got '{v}'")
        return v

    @model_validator(mode='after')
    def validate_contrast(self) -> 'ApproximationConfigV1':
        """Strokes must be distinguishable from the canvas."""
        if self.background == self.foreground:
            raise ValueError(
                f"background and foreground are both {self.background}; strokes would be invisible"
            )
        return self


# ============================================================================
# PUBLIC API
# ============================================================================

def load_approximation_config(path: Union[str, Path]) -> ApproximationConfigV1:
    """Load and validate an approximation config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to an approximation.v1 YAML file

    Returns
    -------
    ApproximationConfigV1
        Validated configuration

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If validation fails (message names the file and offending keys)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Approximation config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return ApproximationConfigV1(**data)
    except Exception as e:
        raise ValueError(f"Approximation config validation failed at {path}: {e}") from e


def config_with_overrides(cfg: ApproximationConfigV1, overrides: Dict[str, Any]) -> ApproximationConfigV1:
    """Apply non-None overrides (e.g. CLI flags) and re-validate.

    Raises
    ------
    ValueError
        If the merged configuration is invalid
    """
    merged = cfg.model_dump(by_alias=True)
    merged.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return ApproximationConfigV1(**merged)
    except Exception as e:
        raise ValueError(f"Invalid approximation parameters: {e}") from e


def flatten_config(cfg: Union[Dict, BaseModel], prefix: str = "") -> Dict[str, Any]:
    """Flatten a (nested) config into dotted keys for manifests and logs."""
    if isinstance(cfg, BaseModel):
        cfg = cfg.model_dump(by_alias=True)

    flat = {}
    for key, value in cfg.items():
        name = f"{prefix}.{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten_config(value, name))
        else:
            flat[name] = value
    return flat

"""Approximation pipeline: brightness grid → hairline segments.

Runs an explicit list of stages selected by configuration:

    contrast? → path source → crop (Hilbert only) → smoothing? →
    max thickness → partition → thickness → render

Each stage is a named function PipelineState → PipelineState; optional
stages are simply left out of the list. Stage wall times are collected with
profiler.timer and logged.

Public API:
    build_stages(cfg) → list[Stage]
    approximate_image(grid, cfg) → ApproximationResult
    render_segments(segments, width, height) → uint8 canvas
    run_approximation(input_path, output_path, cfg) → dict of artifacts

Coordinates are pixels in the image frame (top-left origin, +Y down).
"""

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import cv2
import numpy as np

from ..utils import fs, geometry, profiler, validators
from ..utils.geometry import DegenerateGeometryError
from ..utils.logging_config import pop_context, push_context
from . import brightness, frame, hilbert, partition, smoothing, strokes, thickness

logger = logging.getLogger(__name__)


@dataclass
class PipelineState:
    """Data flowing between stages; stages return updated copies."""

    grid: np.ndarray
    path: Optional[np.ndarray] = None
    profile: Optional[np.ndarray] = None
    max_thickness: Optional[float] = None
    total_length: Optional[float] = None
    segments: Optional[np.ndarray] = None
    stats: Dict[str, Union[int, float]] = field(default_factory=dict)

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def with_stats(self, **changes) -> 'PipelineState':
        """Copy with field changes; int/float keyword args prefixed 'n_' go to stats."""
        stats = dict(self.stats)
        for key in [k for k in changes if k.startswith('n_')]:
            stats[key] = changes.pop(key)
        return replace(self, stats=stats, **changes)


@dataclass(frozen=True)
class Stage:
    """A named pipeline step."""

    name: str
    run: Callable[[PipelineState], PipelineState]


@dataclass
class ApproximationResult:
    """Output of approximate_image()."""

    segments: np.ndarray
    path: np.ndarray
    profile: np.ndarray
    max_thickness: float
    total_length: float
    width: int
    height: int
    stats: Dict[str, Union[int, float]]
    timings: Dict[str, float]


# ============================================================================
# STAGES
# ============================================================================

def contrast_stage() -> Stage:
    def run(state: PipelineState) -> PipelineState:
        return replace(state, grid=brightness.stretch_contrast(state.grid))
    return Stage("contrast", run)


def hilbert_source_stage(order: int) -> Stage:
    def run(state: PipelineState) -> PipelineState:
        path = hilbert.hilbert_path(order)
        logger.info(f"Hilbert curve order {order}: {len(path)} segments")
        return state.with_stats(path=path, n_source=len(path))
    return Stage("hilbert", run)


def scanline_source_stage(spacing: float) -> Stage:
    def run(state: PipelineState) -> PipelineState:
        path = hilbert.scanline_path(state.width, state.height, spacing)
        logger.info(f"Scanlines every {spacing} px: {len(path)} segments")
        return state.with_stats(path=path, n_source=len(path))
    return Stage("scanlines", run)


def crop_stage() -> Stage:
    def run(state: PipelineState) -> PipelineState:
        path = frame.crop_to_scale(state.path, state.width, state.height)
        if len(path) == 0:
            raise DegenerateGeometryError(
                f"No segments left after cropping to {state.width}x{state.height}"
            )
        logger.info(f"Cropped to {state.width}x{state.height}: kept {len(path)} segments")
        return state.with_stats(path=path, n_cropped=len(path))
    return Stage("crop", run)


def smoothing_stage() -> Stage:
    def run(state: PipelineState) -> PipelineState:
        path = smoothing.smooth_corners(state.path)
        logger.info(f"Smoothed corners: {len(state.path)} → {len(path)} segments")
        return state.with_stats(path=path, n_smoothed=len(path))
    return Stage("smooth", run)


def max_thickness_stage() -> Stage:
    def run(state: PipelineState) -> PipelineState:
        total = geometry.total_length(state.path)
        value = thickness.max_thickness(state.width, state.height, state.path)
        logger.info(f"Total path length {total:.1f} px, max thickness {value:.4f} px")
        return replace(state, max_thickness=value, total_length=total)
    return Stage("max_thickness", run)


def partition_stage(max_length: float) -> Stage:
    def run(state: PipelineState) -> PipelineState:
        path = partition.partition_path(state.path, max_length)
        logger.info(f"Partitioned (max {max_length} px): {len(state.path)} → {len(path)} segments")
        return state.with_stats(path=path, n_partitioned=len(path))
    return Stage("partition", run)


def thickness_stage() -> Stage:
    def run(state: PipelineState) -> PipelineState:
        profile = thickness.estimate_profile(state.grid, state.path, state.max_thickness)
        return replace(state, profile=profile)
    return Stage("thickness", run)


def render_stage(style: strokes.StrokeStyle, omega: float, periods: Optional[int]) -> Stage:
    def run(state: PipelineState) -> PipelineState:
        segments = strokes.render_strokes(state.path, state.profile, style, omega=omega, periods=periods)
        logger.info(f"Rendered {style.value}: {len(segments)} output segments")
        return state.with_stats(segments=segments, n_output=len(segments))
    return Stage(f"render_{style.value}", run)


def build_stages(cfg: validators.ApproximationConfigV1) -> List[Stage]:
    """Assemble the stage list for a configuration."""
    stages = []
    if cfg.stretch_contrast:
        stages.append(contrast_stage())

    if cfg.path_source == "scanlines":
        stages.append(scanline_source_stage(cfg.scanline_spacing))
    else:
        stages.append(hilbert_source_stage(cfg.order))
        stages.append(crop_stage())

    if cfg.smooth_corners:
        stages.append(smoothing_stage())

    stages.extend([
        max_thickness_stage(),
        partition_stage(cfg.partition_max_length),
        thickness_stage(),
        render_stage(strokes.StrokeStyle(cfg.style), cfg.omega, cfg.sine_periods),
    ])
    return stages


# ============================================================================
# PUBLIC API
# ============================================================================

def run_stages(state: PipelineState, stages: List[Stage], timings: Optional[Dict[str, float]] = None) -> PipelineState:
    """Run stages in order, recording wall time per stage into `timings`."""
    timings = {} if timings is None else timings

    def record(name: str, elapsed: float) -> None:
        timings[name] = elapsed
        logger.debug(f"Stage {name}: {elapsed:.3f} s")

    for stage in stages:
        with profiler.timer(stage.name, sink=record):
            state = stage.run(state)
    return state


def approximate_image(
    grid: np.ndarray,
    cfg: Optional[validators.ApproximationConfigV1] = None,
    stages: Optional[List[Stage]] = None,
) -> ApproximationResult:
    """Approximate a brightness grid by a modulated space-filling path.

    Parameters
    ----------
    grid : np.ndarray
        Brightness grid, shape (H, W), uint8, at least two pixels
    cfg : ApproximationConfigV1, optional
        Parameters; defaults to ApproximationConfigV1()
    stages : list[Stage], optional
        Explicit stage list (overrides build_stages(cfg))

    Returns
    -------
    ApproximationResult
        Output segments plus the partitioned path, thickness profile,
        max thickness, total length, counts and stage timings

    Raises
    ------
    DegenerateGeometryError
        Undersized grid, order 0, nothing left after cropping
    """
    cfg = cfg or validators.ApproximationConfigV1()
    grid = brightness.validate_grid(grid)
    stages = stages if stages is not None else build_stages(cfg)

    timings = {}
    state = run_stages(PipelineState(grid=grid), stages, timings)

    return ApproximationResult(
        segments=state.segments if state.segments is not None else geometry.empty_path(),
        path=state.path if state.path is not None else geometry.empty_path(),
        profile=state.profile if state.profile is not None else np.zeros(0),
        max_thickness=state.max_thickness,
        total_length=state.total_length,
        width=state.width,
        height=state.height,
        stats=state.stats,
        timings=timings,
    )


def render_segments(
    segments,
    width: int,
    height: int,
    background: int = 255,
    foreground: int = 0,
) -> np.ndarray:
    """Rasterize hairline segments onto a grayscale canvas.

    Uses 8-connected, non-antialiased OpenCV lines, endpoints rounded to the
    nearest pixel.

    Returns
    -------
    np.ndarray
        Canvas, shape (height, width), uint8
    """
    canvas = np.full((height, width), background, dtype=np.uint8)
    pts = np.rint(geometry.as_path(segments)).astype(np.int64)
    for (x0, y0), (x1, y1) in pts:
        cv2.line(canvas, (int(x0), int(y0)), (int(x1), int(y1)), int(foreground), 1, cv2.LINE_8)
    return canvas


def run_approximation(
    input_path: Union[str, Path],
    output_path: Union[str, Path],
    cfg: Optional[validators.ApproximationConfigV1] = None,
    manifest_path: Optional[Union[str, Path]] = None,
) -> Dict[str, object]:
    """Load an image, approximate it and save the rendered drawing.

    Parameters
    ----------
    input_path : str or Path
        Image to approximate (any format PIL reads; converted to grayscale)
    output_path : str or Path
        Rendered PNG/JPEG output
    cfg : ApproximationConfigV1, optional
        Parameters; defaults to ApproximationConfigV1()
    manifest_path : str or Path, optional
        If given, a YAML manifest (config, counts, timings) is written there

    Returns
    -------
    dict
        {"output": str, "manifest": Optional[str], "max_thickness": float,
         "total_length": float, "stats": dict, "timings": dict}
    """
    cfg = cfg or validators.ApproximationConfigV1()
    input_path = Path(input_path)
    output_path = Path(output_path)

    push_context(image=input_path.name)
    try:
        logger.info(f"Starting approximation: {input_path} → {output_path}")
        grid = brightness.load_grayscale(input_path)
        result = approximate_image(grid, cfg)

        canvas = render_segments(result.segments, result.width, result.height, cfg.background, cfg.foreground)
        fs.atomic_save_image(canvas, output_path)
        logger.info(f"Saved drawing ({len(result.segments)} segments) to {output_path}")

        summary = {
            'output': str(output_path),
            'manifest': str(manifest_path) if manifest_path else None,
            'max_thickness': float(result.max_thickness),
            'total_length': float(result.total_length),
            'stats': {k: int(v) for k, v in result.stats.items()},
            'timings': {k: round(float(v), 6) for k, v in result.timings.items()},
        }
        if manifest_path:
            fs.atomic_yaml_dump(
                {
                    'schema': 'approximation_manifest.v1',
                    'input': str(input_path),
                    'size_px': [result.width, result.height],
                    'config': validators.flatten_config(cfg),
                    **summary,
                },
                manifest_path,
            )
            logger.info(f"Manifest written to {manifest_path}")
        return summary
    finally:
        pop_context(keys=["image"])

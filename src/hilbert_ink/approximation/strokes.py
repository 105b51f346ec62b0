"""Stroke renderers: (path, thickness profile) → zero-width segments.

Three interchangeable strategies approximate a variable-width stroke with
hairline segments:

    - ZIGZAG: alternate ±thickness/2 perpendicular offsets at every unit step
    - SINE: self-contained sinusoidal ribbon per segment
    - CONTINUOUS_SINE: one sinusoid along the whole path whose phase follows
      cumulative arc length, so there is no seam at segment boundaries;
      segments thinner than MIN_CONTINUOUS_THICKNESS are left blank

Offsets are taken along d⊥ = (d.y, −d.x) where d is the unit direction of
the segment. Zero-length segments render as nothing.
"""

import logging
import math
from enum import Enum
from typing import Optional, Tuple, Union

import numpy as np

from ..utils import geometry

logger = logging.getLogger(__name__)

# Continuous sine leaves segments below this thickness blank (px)
MIN_CONTINUOUS_THICKNESS = 1.0

# Samples per period for the single-segment sine ribbon
SINE_SAMPLES_PER_PERIOD = 10


class StrokeStyle(str, Enum):
    """Available stroke renderers."""

    ZIGZAG = "zigzag"
    SINE = "sine"
    CONTINUOUS_SINE = "continuous_sine"


def zigzag(segment, thickness: float) -> np.ndarray:
    """Zigzag between ±thickness/2 at each unit step along the segment.

    The polyline runs start → q_0 → q_1 → … → q_n → stop with
    q_k = start + k·d + s_k·(thickness/2)·d⊥, s_k = −1 for even k and +1 for
    odd k, n = floor(L). Segments shorter than one pixel get a single cross
    stroke through their midpoint instead.

    Returns
    -------
    np.ndarray
        Path, shape (M, 2, 2); empty for zero-length segments
    """
    seg = geometry.as_segment(segment)
    direction, length = geometry.unit_direction(seg)
    if direction is None:
        return geometry.empty_path()

    half = 0.5 * thickness * geometry.perpendicular(direction)
    if length < 1.0:
        mid = 0.5 * (seg[0] + seg[1])
        points = np.stack([seg[0], mid - half, mid + half, seg[1]])
        return geometry.polyline_to_path(points)

    k = np.arange(int(math.floor(length)) + 1, dtype=np.float64)
    signs = np.where(k % 2 == 0, -1.0, 1.0)
    zig = seg[0] + k[:, None] * direction + signs[:, None] * half
    points = np.concatenate([seg[0][None], zig, seg[1][None]])
    return geometry.polyline_to_path(points)


def sine_ribbon(segment, thickness: float, periods: Optional[int] = None) -> np.ndarray:
    """Sinusoid of amplitude thickness/2 over a single segment.

    Offsets (thickness/2)·sin(2π·periods·t) for t in [0, 1], sampled at
    10·periods steps. periods defaults to ceil(L).

    Raises
    ------
    ValueError
        If periods is given and not positive
    """
    seg = geometry.as_segment(segment)
    direction, length = geometry.unit_direction(seg)
    if direction is None:
        return geometry.empty_path()
    if periods is None:
        periods = int(math.ceil(length))
    elif periods <= 0:
        raise ValueError(f"periods must be positive, got {periods}")

    steps = SINE_SAMPLES_PER_PERIOD * periods
    t = np.linspace(0.0, 1.0, steps + 1)
    offsets = 0.5 * thickness * np.sin(2.0 * np.pi * periods * t)
    points = (
        seg[0]
        + t[:, None] * (seg[1] - seg[0])
        + offsets[:, None] * geometry.perpendicular(direction)
    )
    return geometry.polyline_to_path(points)


def sine_offsets(length: float, thickness: float, phase_offset: float, omega: float) -> Tuple[np.ndarray, np.ndarray]:
    """Sample positions and perpendicular offsets of the continuous sinusoid.

    Parameters
    ----------
    length : float
        Segment length (> 0)
    thickness : float
        Segment thickness; amplitude is thickness/2
    phase_offset : float
        Cumulative arc length T of the path before this segment
    omega : float
        Angular frequency (rad per px of arc length)

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        (s in [0, 1], offsets), each of shape (max(2, round(L)),)
    """
    num = max(2, int(round(length)))
    s = np.linspace(0.0, 1.0, num)
    offsets = 0.5 * thickness * np.sin((phase_offset + s * length) * omega)
    return s, offsets


def render_sine_segment(segment, thickness: float, phase_offset: float, omega: float) -> np.ndarray:
    """Stateless per-segment piece of the continuous sinusoid."""
    seg = geometry.as_segment(segment)
    direction, length = geometry.unit_direction(seg)
    if direction is None:
        return geometry.empty_path()
    s, offsets = sine_offsets(length, thickness, phase_offset, omega)
    points = (
        seg[0]
        + s[:, None] * (seg[1] - seg[0])
        + offsets[:, None] * geometry.perpendicular(direction)
    )
    return geometry.polyline_to_path(points)


def phase_offsets(path) -> np.ndarray:
    """Prefix sum of segment lengths: arc length before each segment."""
    lengths = geometry.segment_lengths(path)
    offsets = np.zeros(len(lengths), dtype=np.float64)
    if len(lengths) > 1:
        offsets[1:] = np.cumsum(lengths)[:-1]
    return offsets


def continuous_sine(path, profile, omega: float) -> np.ndarray:
    """Phase-continuous sinusoid along a whole path.

    Phase offsets include every segment (also suppressed ones), so the wave
    keeps its phase across blank stretches.
    """
    path = geometry.as_path(path)
    profile = _check_profile(path, profile)
    offsets = phase_offsets(path)

    keep = profile >= MIN_CONTINUOUS_THICKNESS
    logger.debug(f"continuous_sine: drawing {int(keep.sum())}/{len(path)} segments")
    return geometry.concat_paths(
        render_sine_segment(path[i], profile[i], offsets[i], omega)
        for i in np.flatnonzero(keep)
    )


def render_strokes(
    path,
    profile,
    style: Union[StrokeStyle, str] = StrokeStyle.CONTINUOUS_SINE,
    omega: float = 1.0,
    periods: Optional[int] = None,
) -> np.ndarray:
    """Render a path with the selected stroke style.

    Parameters
    ----------
    path : array-like
        Path, shape (N, 2, 2)
    profile : array-like
        Thickness per segment, shape (N,)
    style : StrokeStyle or str
        "zigzag", "sine" or "continuous_sine"
    omega : float
        Angular frequency for continuous_sine
    periods : int, optional
        Periods per segment for sine

    Returns
    -------
    np.ndarray
        Output segments, shape (M, 2, 2)

    Raises
    ------
    ValueError
        Unknown style or profile length mismatch
    """
    style = StrokeStyle(style)
    path = geometry.as_path(path)
    profile = _check_profile(path, profile)

    if style is StrokeStyle.CONTINUOUS_SINE:
        return continuous_sine(path, profile, omega)
    if style is StrokeStyle.ZIGZAG:
        return geometry.concat_paths(zigzag(seg, t) for seg, t in zip(path, profile))
    return geometry.concat_paths(sine_ribbon(seg, t, periods) for seg, t in zip(path, profile))


def _check_profile(path: np.ndarray, profile) -> np.ndarray:
    profile = np.asarray(profile, dtype=np.float64)
    if profile.shape != (len(path),):
        raise ValueError(
            f"Thickness profile shape {profile.shape} does not match {len(path)} segments"
        )
    return profile

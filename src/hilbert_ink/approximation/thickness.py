"""Brightness-driven ink thickness per segment.

Max thickness is the average ink width that would exactly cover the image
if every segment were drawn at that width:

    max_thickness = (W · H) / total_path_length

Each segment's thickness inverts the mean brightness under its footprint, a
corridor of width max_thickness centred on the segment:

    thickness = (255 − mean_brightness) / 255 · max_thickness

so a white footprint yields 0 and a black footprint yields max_thickness.
"""

import logging
import math

import numpy as np

from ..utils import geometry
from ..utils.geometry import DegenerateGeometryError
from .brightness import sample_brightness_many

logger = logging.getLogger(__name__)


def max_thickness(width: float, height: float, path) -> float:
    """Normalization ceiling W·H / total length.

    Raises
    ------
    DegenerateGeometryError
        If the path's total length is zero
    """
    total = geometry.total_length(path)
    if total <= 0.0:
        raise DegenerateGeometryError(
            f"Total path length is zero; max thickness for {width}x{height} is undefined"
        )
    return float(width) * float(height) / total


def _check_max_thickness(value: float) -> None:
    if not (math.isfinite(value) and value > 0.0):
        raise DegenerateGeometryError(f"max_thickness must be finite and positive, got {value}")


def estimate_thickness(grid: np.ndarray, segment, max_thickness: float) -> float:
    """Thickness that best reproduces the brightness under a segment.

    Samples a num × num_perp lattice: num = max(1, round(L)) steps along the
    segment, num_perp = max(1, round(max_thickness)) steps across the
    corridor:

        P(i, j) = start + (i / num)·L·d + (j − num_perp / 2)·(max_thickness / num_perp)·d⊥

    Parameters
    ----------
    grid : np.ndarray
        Brightness grid, shape (H, W), uint8
    segment : array-like
        Segment, shape (2, 2), pixel coordinates
    max_thickness : float
        Corridor width and output ceiling (> 0)

    Returns
    -------
    float
        Thickness in [0, max_thickness]

    Raises
    ------
    DegenerateGeometryError
        If max_thickness is not finite and positive
    """
    _check_max_thickness(max_thickness)
    seg = geometry.as_segment(segment)
    direction, length = geometry.unit_direction(seg)

    if direction is None:
        # Zero-length segment: its footprint is the start point
        mean_brightness = float(sample_brightness_many(grid, seg[0, 0], seg[0, 1]))
    else:
        num = max(1, int(round(length)))
        num_perp = max(1, int(round(max_thickness)))
        normal = geometry.perpendicular(direction)

        along = (np.arange(num, dtype=np.float64) / num) * length
        across = (np.arange(num_perp, dtype=np.float64) - num_perp / 2.0) * (max_thickness / num_perp)

        pts = (
            seg[0][None, None, :]
            + along[:, None, None] * direction[None, None, :]
            + across[None, :, None] * normal[None, None, :]
        )
        mean_brightness = float(sample_brightness_many(grid, pts[..., 0], pts[..., 1]).mean())

    thickness = (255.0 - mean_brightness) / 255.0 * max_thickness
    return float(min(max(thickness, 0.0), max_thickness))


def estimate_profile(grid: np.ndarray, path, max_thickness: float) -> np.ndarray:
    """Thickness profile parallel to a path, shape (N,)."""
    _check_max_thickness(max_thickness)
    path = geometry.as_path(path)
    grid = np.asarray(grid)
    profile = np.fromiter(
        (estimate_thickness(grid, seg, max_thickness) for seg in path),
        dtype=np.float64,
        count=len(path),
    )
    if len(profile):
        logger.debug(
            f"Thickness profile: n={len(profile)} mean={profile.mean():.3f} "
            f"max={profile.max():.3f} (ceiling {max_thickness:.3f})"
        )
    return profile

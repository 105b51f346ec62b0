"""Geometric operations on segment arrays.

Provides:
    - Path coercion: any iterable of ((x0, y0), (x1, y1)) → (N, 2, 2) float64
    - Segment lengths, total path length, bounding box
    - Unit direction and perpendicular vectors for offset computations
    - Polyline ↔ segment conversion for renderers

Used by:
    - Frame mapper: bounding box for rescale
    - Thickness estimator: directions, max-thickness normalization
    - Stroke renderers: perpendicular offsets, polyline → segments
    - Tests: synthetic path construction

All coordinates in pixels, image frame (top-left origin, +Y down).
A Path is an ndarray of shape (N, 2, 2): path[i, 0] is the start point
and path[i, 1] the stop point of segment i. Direction matters.
"""

from typing import Iterable, Tuple

import numpy as np


class DegenerateGeometryError(ValueError):
    """Geometry with zero extent where a finite extent is required.

    Raised for zero-extent bounding boxes, zero total path length,
    non-positive max thickness and undersized brightness grids. Callers
    should treat it as a configuration error (e.g. order 0, 1-pixel image).
    """


def empty_path() -> np.ndarray:
    """Return a path with no segments, shape (0, 2, 2)."""
    return np.zeros((0, 2, 2), dtype=np.float64)


def as_path(segments: Iterable) -> np.ndarray:
    """Coerce segments to a float64 path array.

    Parameters
    ----------
    segments : array-like or iterable
        (N, 2, 2) array, or iterable of ((x0, y0), (x1, y1)) pairs

    Returns
    -------
    np.ndarray
        Path, shape (N, 2, 2), dtype float64 (copy if conversion was needed)

    Raises
    ------
    ValueError
        If the input cannot be shaped as (N, 2, 2)
    """
    if not isinstance(segments, np.ndarray):
        segments = list(segments)
        if len(segments) == 0:
            return empty_path()
    path = np.asarray(segments, dtype=np.float64)
    if path.size == 0:
        return empty_path()
    if path.ndim == 2 and path.shape == (2, 2):
        path = path[None]
    if path.ndim != 3 or path.shape[1:] != (2, 2):
        raise ValueError(f"Path must have shape (N, 2, 2), got {path.shape}")
    return path


def as_segment(segment) -> np.ndarray:
    """Coerce a single segment to a (2, 2) float64 array."""
    seg = np.asarray(segment, dtype=np.float64)
    if seg.shape != (2, 2):
        raise ValueError(f"Segment must have shape (2, 2), got {seg.shape}")
    return seg


def segment_lengths(path: np.ndarray) -> np.ndarray:
    """Euclidean length of every segment.

    Parameters
    ----------
    path : np.ndarray
        Path, shape (N, 2, 2)

    Returns
    -------
    np.ndarray
        Lengths, shape (N,)
    """
    path = as_path(path)
    delta = path[:, 1] - path[:, 0]
    return np.hypot(delta[:, 0], delta[:, 1])


def segment_length(segment) -> float:
    """Length of a single segment."""
    seg = as_segment(segment)
    return float(np.hypot(seg[1, 0] - seg[0, 0], seg[1, 1] - seg[0, 1]))


def total_length(path: np.ndarray) -> float:
    """Sum of all segment lengths."""
    return float(segment_lengths(path).sum())


def path_bbox(path: np.ndarray) -> Tuple[float, float, float, float]:
    """Axis-aligned bounding box over all segment endpoints.

    Returns
    -------
    Tuple[float, float, float, float]
        (x_min, y_min, x_max, y_max)

    Raises
    ------
    DegenerateGeometryError
        If the path has no segments
    """
    path = as_path(path)
    if len(path) == 0:
        raise DegenerateGeometryError("Bounding box of an empty path is undefined")
    pts = path.reshape(-1, 2)
    x_min, y_min = pts.min(axis=0)
    x_max, y_max = pts.max(axis=0)
    return float(x_min), float(y_min), float(x_max), float(y_max)


def unit_direction(segment) -> Tuple[np.ndarray, float]:
    """Unit direction vector and length of a segment.

    Returns
    -------
    Tuple[np.ndarray, float]
        (direction (2,), length). Direction is None for zero-length segments;
        callers must special-case that instead of dividing.
    """
    seg = as_segment(segment)
    delta = seg[1] - seg[0]
    length = float(np.hypot(delta[0], delta[1]))
    if length == 0.0:
        return None, 0.0
    return delta / length, length


def perpendicular(direction: np.ndarray) -> np.ndarray:
    """Perpendicular of a direction vector: (dx, dy) → (dy, -dx)."""
    return np.array([direction[1], -direction[0]], dtype=np.float64)


def polyline_to_path(points: np.ndarray) -> np.ndarray:
    """Join consecutive polyline vertices into segments.

    Parameters
    ----------
    points : np.ndarray
        Vertices, shape (M, 2)

    Returns
    -------
    np.ndarray
        Path, shape (M - 1, 2, 2); empty for M < 2
    """
    points = np.asarray(points, dtype=np.float64)
    if len(points) < 2:
        return empty_path()
    return np.stack([points[:-1], points[1:]], axis=1)


def concat_paths(paths: Iterable[np.ndarray]) -> np.ndarray:
    """Concatenate paths in order, tolerating empty parts."""
    parts = [p for p in paths if len(p)]
    if not parts:
        return empty_path()
    return np.concatenate(parts, axis=0)


def is_contiguous(first, second, atol: float = 1e-9) -> bool:
    """True if first.stop coincides with second.start."""
    return bool(np.allclose(first[1], second[0], rtol=0.0, atol=atol))

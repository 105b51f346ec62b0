"""Brightness grids: loading, contrast stretch and bilinear sampling.

A brightness grid is an (H, W) uint8 array, row-major, origin top-left, so
pixel (x, y) is grid[y, x]. Sampling at real coordinates interpolates the
four neighbouring pixels with edge replication; nothing outside the grid is
ever an error.
"""

import logging
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image

from ..utils.geometry import DegenerateGeometryError

logger = logging.getLogger(__name__)


def load_grayscale(path: Union[str, Path]) -> np.ndarray:
    """Decode an image file into an (H, W) uint8 brightness grid.

    Raises
    ------
    FileNotFoundError
        If the file doesn't exist
    ValueError
        If PIL cannot decode it
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Image not found: {path}")
    try:
        with Image.open(path) as img:
            grid = np.array(img.convert("L"), dtype=np.uint8)
    except (OSError, Image.DecompressionBombError) as e:
        raise ValueError(f"Failed to load image {path}: {e}") from e
    logger.info(f"Loaded {path.name}: {grid.shape[1]}x{grid.shape[0]} px")
    return grid


def validate_grid(grid) -> np.ndarray:
    """Check that a grid is a 2-D array with at least two pixels.

    Single-row and single-column grids are accepted: clamped sampling and
    cropping work on them. A single pixel has no extent to map a path onto.

    Returns
    -------
    np.ndarray
        The grid as uint8 (no copy when already uint8)

    Raises
    ------
    ValueError
        If the array is not 2-D
    DegenerateGeometryError
        If the grid has fewer than two pixels
    """
    grid = np.asarray(grid)
    if grid.ndim != 2:
        raise ValueError(f"Brightness grid must be 2-D (H, W), got shape {grid.shape}")
    height, width = grid.shape
    if width * height < 2:
        raise DegenerateGeometryError(
            f"Brightness grid of {width}x{height} px is too small to approximate (need >= 2 pixels)"
        )
    if grid.dtype != np.uint8:
        grid = np.clip(grid, 0, 255).astype(np.uint8)
    return grid


def stretch_contrast(grid) -> np.ndarray:
    """Linearly remap [min, max] of the grid onto [0, 255].

    Uniform grids (min == max) are returned unchanged.
    """
    grid = np.asarray(grid, dtype=np.uint8)
    lo = int(grid.min())
    hi = int(grid.max())
    if hi == lo:
        logger.debug(f"Uniform grid (value {lo}); contrast stretch skipped")
        return grid.copy()
    stretched = (grid.astype(np.float64) - lo) / (hi - lo) * 255.0
    return np.rint(stretched).astype(np.uint8)


def sample_brightness_many(grid: np.ndarray, xs, ys) -> np.ndarray:
    """Bilinear brightness at many real coordinates.

    Parameters
    ----------
    grid : np.ndarray
        Brightness grid, shape (H, W)
    xs, ys : array-like
        Coordinates in pixels, same shape

    Returns
    -------
    np.ndarray
        Interpolated brightness (float64, range of the grid), shape of xs
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    height, width = grid.shape

    x0 = np.floor(xs)
    y0 = np.floor(ys)
    fx = xs - x0
    fy = ys - y0

    xa = np.clip(x0, 0, width - 1).astype(np.intp)
    xb = np.clip(x0 + 1, 0, width - 1).astype(np.intp)
    ya = np.clip(y0, 0, height - 1).astype(np.intp)
    yb = np.clip(y0 + 1, 0, height - 1).astype(np.intp)

    # Same weights as (1−fx)(1−fy), fx(1−fy), (1−fx)fy, fx·fy; exact at integer
    # coordinates and on uniform neighbourhoods.
    g = grid.astype(np.float64, copy=False)
    top = g[ya, xa] + fx * (g[ya, xb] - g[ya, xa])
    bottom = g[yb, xa] + fx * (g[yb, xb] - g[yb, xa])
    return top + fy * (bottom - top)


def sample_brightness(grid: np.ndarray, x: float, y: float) -> float:
    """Bilinear brightness at a single point (see sample_brightness_many)."""
    return float(sample_brightness_many(grid, x, y))

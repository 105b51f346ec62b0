"""Frame mapping: unit-square curve → image pixel coordinates.

Two operations:
    - rescale(): affine map so the path's bounding box spans [0, W] × [0, H]
    - crop_to_scale(): rescale to a square of side max(W, H), then keep only
      segments fully inside [0, W] × [0, H]

Cropping drops whole segments (no clipping), so its output may be
non-contiguous. Both functions return new arrays.
"""

import logging

import numpy as np

from ..utils import geometry
from ..utils.geometry import DegenerateGeometryError

logger = logging.getLogger(__name__)

# Relative tolerance for the crop bounds test (rounding in the affine map)
FRAME_TOL = 1e-9


def rescale(path, target_w: float, target_h: float) -> np.ndarray:
    """Map the path's bounding box onto [0, target_w] × [0, target_h].

    Parameters
    ----------
    path : array-like
        Path, shape (N, 2, 2)
    target_w, target_h : float
        Target extent in pixels

    Returns
    -------
    np.ndarray
        Rescaled path, shape (N, 2, 2)

    Raises
    ------
    DegenerateGeometryError
        If the path is empty or its bounding box has zero width or height
    """
    path = geometry.as_path(path)
    x_min, y_min, x_max, y_max = geometry.path_bbox(path)
    width = x_max - x_min
    height = y_max - y_min
    if width <= 0.0 or height <= 0.0:
        raise DegenerateGeometryError(
            f"Cannot rescale path with zero-extent bounding box "
            f"(width={width}, height={height})"
        )

    out = np.empty_like(path)
    out[..., 0] = (path[..., 0] - x_min) * (float(target_w) / width)
    out[..., 1] = (path[..., 1] - y_min) * (float(target_h) / height)
    return out


def crop_to_scale(path, width: float, height: float) -> np.ndarray:
    """Rescale to a max(width, height) square and drop out-of-frame segments.

    Both axes share one scale factor. A path inside the positive quadrant is
    scaled about the origin so its largest coordinate becomes
    max(width, height); any other path is first shifted so its bounding box
    starts at the origin. For the Hilbert curve (which starts at (0, 0)) this
    equals rescale(path, side, side); on an already cropped path the factor
    is 1 and the offset 0, so cropping twice changes nothing.

    Returns
    -------
    np.ndarray
        Segments whose endpoints all lie in [0, width] × [0, height]

    Raises
    ------
    DegenerateGeometryError
        For empty paths or a bounding box collapsed to a point
    """
    path = geometry.as_path(path)
    side = float(max(width, height))
    x_min, y_min, x_max, y_max = geometry.path_bbox(path)
    extent = max(x_max - x_min, y_max - y_min)
    if extent <= 0.0:
        raise DegenerateGeometryError("Cannot crop a path whose bounding box is a single point")

    # Uniform scale: the longer side spans max(width, height). Paths already in
    # the positive quadrant scale about the origin, so a cropped path that lost
    # its origin segment is not shifted a second time.
    if x_min >= 0.0 and y_min >= 0.0:
        x_min = y_min = 0.0
        extent = max(x_max, y_max)
    scaled = np.empty_like(path)
    scaled[..., 0] = (path[..., 0] - x_min) / extent * side
    scaled[..., 1] = (path[..., 1] - y_min) / extent * side

    tol = FRAME_TOL * side
    xs = scaled[..., 0]
    ys = scaled[..., 1]
    inside = ((xs >= -tol) & (xs <= width + tol) & (ys >= -tol) & (ys <= height + tol)).all(axis=1)
    cropped = scaled[inside]
    np.clip(cropped[..., 0], 0.0, width, out=cropped[..., 0])
    np.clip(cropped[..., 1], 0.0, height, out=cropped[..., 1])

    logger.debug(f"crop_to_scale: kept {len(cropped)}/{len(scaled)} segments in {width}x{height}")
    return cropped

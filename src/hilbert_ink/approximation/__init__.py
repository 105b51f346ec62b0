"""Approximation pipeline: Hilbert path → brightness-modulated strokes.

Modules, leaf-first:
    - hilbert: coordinate primitive, Hilbert path generator, scanline source
    - frame: rescale / crop_to_scale into the image pixel frame
    - smoothing: quadratic Bézier corner rounding
    - partition: bounded-length subdivision
    - brightness: grid loading, contrast stretch, bilinear sampling
    - thickness: max thickness and per-segment thickness estimation
    - strokes: zigzag, sine and continuous-sine renderers
    - pipeline: configurable stage list and end-to-end run
"""

from .pipeline import ApproximationResult, approximate_image, build_stages, render_segments, run_approximation
from .strokes import StrokeStyle

__all__ = [
    'ApproximationResult',
    'StrokeStyle',
    'approximate_image',
    'build_stages',
    'render_segments',
    'run_approximation',
]

"""Hilbert Ink: continuous line drawings from grayscale images.

This package traces a Hilbert space-filling curve across an image and
modulates the apparent ink of the path (thickness and waveform) so that
darker regions read as denser line work.

Architecture layers (strict one-way dependency):
    scripts/ → src/hilbert_ink/approximation/ → src/hilbert_ink/utils/

Key invariants:
    - Working precision is float64 end-to-end
    - Paths are (N, 2, 2) arrays of directed segments in pixel space
    - Brightness grids are (H, W) uint8, origin top-left, +Y down
    - YAML-only configs
"""

__version__ = "1.2.0"

"""Lightweight wall-clock profiling for pipeline stages.

Provides:
    - timer(): context manager reporting elapsed seconds to a sink

Used to measure each approximation stage (path generation, cropping,
smoothing, partitioning, thickness estimation, rendering). Timings are
collected into the run manifest.
"""

import time
from contextlib import contextmanager
from typing import Callable, Optional


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, float], None]] = None):
    """Context manager for wall-clock timing.

    Parameters
    ----------
    name : str
        Timer name (for logging/display)
    sink : Optional[Callable[[str, float], None]]
        Optional callback(name, elapsed_seconds); prints to stdout if None

    Examples
    --------
    >>> with timer("partition"):
    ...     path = partition_path(path, 1.0)
    partition: 0.042 s

    >>> timings = {}
    >>> with timer("render", sink=timings.__setitem__):
    ...     segments = render_strokes(path, profile, "zigzag")
    """
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        if sink is not None:
            sink(name, elapsed)
        else:
            print(f"{name}: {elapsed:.3f} s")


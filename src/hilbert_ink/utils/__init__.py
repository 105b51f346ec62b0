"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Segment array geometry (geometry)
    - Config validation (validators)
    - Atomic I/O (fs)
    - Profiling (profiler)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (approximation, scripts).

Convenience imports:
    from hilbert_ink.utils import fs, geometry, validators
    from hilbert_ink.utils.logging_config import setup_logging, get_logger
"""

from . import fs
from . import geometry
from . import logging_config
from . import profiler
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'fs',
    'geometry',
    'logging_config',
    'profiler',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]

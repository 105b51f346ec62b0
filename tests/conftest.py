"""Shared fixtures for the hilbert_ink test suite."""

import logging
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from hilbert_ink.utils import logging_config


@pytest.fixture(scope="session")
def project_root():
    """Project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def gray_grid():
    """Uniform mid-gray 4x4 grid."""
    return np.full((4, 4), 128, dtype=np.uint8)


@pytest.fixture
def gradient_image(tmp_path):
    """Horizontal black→white gradient saved as a 32x24 RGB PNG."""
    ramp = np.linspace(0, 255, 32).astype(np.uint8)
    rgb = np.repeat(np.tile(ramp, (24, 1))[..., None], 3, axis=2)
    path = tmp_path / "gradient.png"
    Image.fromarray(rgb).save(path)
    return path


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo handlers, context, warning capture and excepthook set by a test."""
    saved_hook = sys.excepthook
    yield
    root = logging.getLogger()
    for handler in list(logging_config._installed_handlers):
        root.removeHandler(handler)
        handler.close()
    logging_config._installed_handlers.clear()
    logging_config.pop_context()
    logging.captureWarnings(False)
    sys.excepthook = saved_hook

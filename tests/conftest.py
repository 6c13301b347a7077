"""Pytest configuration and fixtures for elevation profile tests."""

import sys
from io import BytesIO
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add src directory to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))


def make_png(color=(10, 0, 0), size=256) -> bytes:
    """Encode a uniform RGB tile as PNG bytes."""
    buf = BytesIO()
    Image.new('RGB', (size, size), color).save(buf, format='PNG')
    return buf.getvalue()


def uniform_tile(color=(10, 0, 0), size=256) -> np.ndarray:
    """Uniform tile pixel grid indexed [row, col, channel]."""
    return np.full((size, size, 3), color, dtype=np.uint8)


@pytest.fixture
def short_line():
    """~220 m east-west LineString well inside tile (16384, 16384) at z15."""
    return {
        'type': 'LineString',
        'coordinates': [[0.001, -0.001], [0.003, -0.001]],
    }


@pytest.fixture
def crossing_line():
    """LineString crossing the x tile boundary at longitude 0."""
    return {
        'type': 'LineString',
        'coordinates': [[-0.001, -0.001], [0.001, -0.001]],
    }

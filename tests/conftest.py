import sys
from pathlib import Path

import numpy as np
import pytest

ROOT = Path(__file__).resolve().parents[1]

if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from instafilter.core import PixelBuffer  # noqa: E402


def solid(width: int, height: int, rgba) -> PixelBuffer:
    """Buffer filled with a single RGBA colour."""
    data = np.empty((height, width, 4), dtype=np.uint8)
    data[...] = rgba
    return PixelBuffer(width=width, height=height, data=data)


@pytest.fixture
def white() -> PixelBuffer:
    return solid(2, 2, (255, 255, 255, 255))


@pytest.fixture
def random_buffer() -> PixelBuffer:
    rng = np.random.default_rng(1234)
    data = rng.integers(0, 256, size=(5, 7, 4), dtype=np.uint8)
    return PixelBuffer.from_array(data)


@pytest.fixture(autouse=True)
def _no_settings_env(monkeypatch):
    monkeypatch.delenv("INSTAFILTER_SETTINGS", raising=False)


@pytest.fixture
def make_solid():
    return solid

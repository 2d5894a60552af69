import numpy as np
import pytest

from ppm_parallel import PixelBuffer


def _random_image(width, height, max_val=255, seed=1234):
    rng = np.random.default_rng(seed)
    data = rng.integers(0, max_val + 1, size=(width * height, 3))
    return PixelBuffer(width, height, max_val, data)


@pytest.fixture
def make_image():
    """Factory for seeded random images."""
    return _random_image


@pytest.fixture
def image():
    """A 37x23 image: odd sizes so splits land mid-row."""
    return _random_image(37, 23)


@pytest.fixture
def even_image():
    return _random_image(16, 9, seed=42)


@pytest.fixture
def small_image():
    return PixelBuffer.from_pixels(2, 2, [(0, 0, 0), (255, 255, 255), (255, 0, 0), (0, 255, 0)])

# PixelStash test configuration
# Shared fixtures for codec, service, CLI and API tests

import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng():
    """Deterministic random generator."""
    return np.random.default_rng(1234)


@pytest.fixture
def noisy_pixels(rng):
    """A 10x10 RGBA buffer with random content in every bit."""
    return rng.integers(0, 256, size=(10, 10, 4), dtype=np.uint8)


@pytest.fixture
def blank_pixels():
    """A 10x10 RGBA buffer of zeros."""
    return np.zeros((10, 10, 4), dtype=np.uint8)


@pytest.fixture
def cover_image(rng):
    """A 32x24 RGB image with random content."""
    arr = rng.integers(0, 256, size=(24, 32, 3), dtype=np.uint8)
    return Image.fromarray(arr)


@pytest.fixture
def cover_path(cover_image, tmp_path):
    """The cover image saved as PNG."""
    path = tmp_path / "cover.png"
    cover_image.save(path)
    return path

"""Shared fixtures for the pixelpde test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from pixelpde.utils import gaussian_image, uniform_image

WIDTH = 12
HEIGHT = 10


def gray_rgba(levels: np.ndarray) -> np.ndarray:
    """Pack (H, W) uint8 levels into an opaque grayscale RGBA image."""
    image = np.empty(levels.shape + (4,), dtype=np.uint8)
    image[:, :, :3] = levels[:, :, None]
    image[:, :, 3] = 255
    return image


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


@pytest.fixture
def noise_image(rng):
    """Random grayscale image, every level independent."""
    return gray_rgba(rng.integers(0, 256, size=(HEIGHT, WIDTH), dtype=np.uint8))


@pytest.fixture
def pulse_image():
    """Smooth Gaussian bump on a dark background."""
    return gaussian_image(WIDTH, HEIGHT, sigma=2.0, peak=200, background=20)


@pytest.fixture
def flat_image():
    return uniform_image(WIDTH, HEIGHT, level=128)


@pytest.fixture
def random_field(rng):
    """Normalized field with values in [0, 1]."""
    return rng.random((HEIGHT, WIDTH))

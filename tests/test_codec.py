"""Tests for pixelpde.core.codec."""

import numpy as np
import pytest

from pixelpde.core.codec import normalize, denormalize, to_grayscale
from conftest import gray_rgba


class TestNormalize:

    def test_reads_first_channel_only(self):
        image = np.zeros((3, 4, 4), dtype=np.uint8)
        image[:, :, 0] = 255
        image[:, :, 1] = 17
        image[:, :, 3] = 255

        field = normalize(image)

        assert field.shape == (3, 4)
        assert field.dtype == np.float64
        assert np.all(field == 1.0)

    def test_accepts_plain_2d_samples(self):
        samples = np.array([[0, 51], [102, 255]], dtype=np.uint8)
        np.testing.assert_allclose(normalize(samples), [[0.0, 0.2], [0.4, 1.0]])

    def test_accepts_rgb_without_alpha(self):
        image = np.full((2, 2, 3), 51, dtype=np.uint8)
        np.testing.assert_allclose(normalize(image), 0.2)

    def test_rejects_wrong_rank(self):
        with pytest.raises(ValueError):
            normalize(np.zeros(10, dtype=np.uint8))


class TestDenormalize:

    def test_round_trip_is_exact_for_every_level(self):
        levels = np.arange(256, dtype=np.uint8).reshape(16, 16)
        image = gray_rgba(levels)

        restored = denormalize(normalize(image))

        np.testing.assert_array_equal(restored, image)

    def test_output_is_opaque_and_achromatic(self, random_field):
        image = denormalize(random_field)

        assert image.shape == random_field.shape + (4,)
        assert image.dtype == np.uint8
        assert np.all(image[:, :, 3] == 255)
        np.testing.assert_array_equal(image[:, :, 0], image[:, :, 1])
        np.testing.assert_array_equal(image[:, :, 0], image[:, :, 2])

    def test_rounds_half_up_and_clamps(self):
        field = np.array([[-0.5, 0.5, 1.7]])
        image = denormalize(field)
        np.testing.assert_array_equal(image[0, :, 0], [0, 128, 255])

    def test_returns_fresh_opaque_image(self, random_field):
        first = denormalize(random_field)
        second = denormalize(random_field)
        assert first is not second
        assert np.all(first[:, :, 3] == 255)


class TestGrayscale:

    def test_rec601_weights(self):
        image = np.zeros((1, 4, 4), dtype=np.uint8)
        image[0, 0, :3] = (255, 0, 0)
        image[0, 1, :3] = (0, 255, 0)
        image[0, 2, :3] = (0, 0, 255)
        image[0, 3, :3] = (255, 255, 255)

        gray = to_grayscale(image)

        np.testing.assert_array_equal(gray[0, :, 0], [76, 150, 29, 255])
        np.testing.assert_array_equal(gray[:, :, 0], gray[:, :, 1])
        np.testing.assert_array_equal(gray[:, :, 0], gray[:, :, 2])
        assert np.all(gray[:, :, 3] == 255)

    def test_gray_input_is_unchanged(self, noise_image):
        np.testing.assert_array_equal(to_grayscale(noise_image), noise_image)

    def test_rejects_single_channel(self):
        with pytest.raises(ValueError):
            to_grayscale(np.zeros((4, 4), dtype=np.uint8))

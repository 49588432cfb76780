"""
Tests for the Haar wavelet compressor.
"""

import math

import numpy as np
import pytest

from pixelworks.exceptions import InvalidParameterError
from pixelworks.models.image import Image
from pixelworks.services.compression_service import CompressionService


@pytest.fixture
def service():
    return CompressionService()


class TestPadding:

    @pytest.mark.parametrize("n, expected", [(1, 1), (2, 2), (3, 4), (5, 8), (16, 16), (17, 32)])
    def test_next_power_of_two(self, service, n, expected) -> None:
        assert service.next_power_of_two(n) == expected

    def test_pad_adds_zeros_bottom_right(self, service) -> None:
        padded = service.pad(np.array([[1.0, 2.0, 3.0]]), 4)

        assert padded.shape == (4, 4)
        np.testing.assert_array_equal(padded[0], [1, 2, 3, 0])
        assert not padded[1:].any()

    def test_unpad_crops(self, service) -> None:
        matrix = np.arange(16, dtype=np.float64).reshape(4, 4)

        np.testing.assert_array_equal(service.unpad(matrix, 2, 3), [[0, 1, 2], [4, 5, 6]])


class TestHaarTransform:

    def test_forward_2x2(self, service) -> None:
        result = service.haar_forward(np.array([[1.0, 2.0], [3.0, 4.0]]))

        np.testing.assert_allclose(result, [[5.0, -1.0], [-2.0, 0.0]], atol=1e-12)

    def test_forward_constant_row_has_no_detail(self, service) -> None:
        result = service.haar_forward(np.full((4, 4), 8.0))

        assert result[0, 0] == pytest.approx(32.0)
        np.testing.assert_allclose(result.ravel()[1:], 0.0, atol=1e-12)

    def test_forward_1d_pairing_order(self, service) -> None:
        matrix = np.zeros((4, 4))
        matrix[0] = [1.0, 3.0, 5.0, 9.0]

        step = service._forward_step(matrix[:1], axis=1)

        np.testing.assert_allclose(
            step[0], [4 / math.sqrt(2), 14 / math.sqrt(2), -2 / math.sqrt(2), -4 / math.sqrt(2)]
        )

    @pytest.mark.parametrize("size", [1, 2, 4, 8, 16])
    def test_round_trip_is_identity(self, service, size) -> None:
        rng = np.random.default_rng(size)
        matrix = rng.uniform(0, 255, size=(size, size))

        restored = service.haar_inverse(service.haar_forward(matrix))

        np.testing.assert_allclose(restored, matrix, atol=1e-6)

    def test_forward_does_not_mutate_input(self, service) -> None:
        matrix = np.array([[1.0, 2.0], [3.0, 4.0]])

        service.haar_forward(matrix)

        np.testing.assert_array_equal(matrix, [[1.0, 2.0], [3.0, 4.0]])


class TestThreshold:

    def test_pooled_magnitudes_keep_duplicates(self, service) -> None:
        coefficients = [np.array([1.0, -1.0]), np.array([2.0]), np.array([-4.0])]

        # sorted magnitudes [1, 1, 2, 4], index floor(4 * 0.75) - 1 = 2
        assert service.threshold_value(coefficients, 75) == 2.0

    def test_zero_percent_picks_smallest(self, service) -> None:
        assert service.threshold_value([np.array([3.0, -0.5, 7.0])], 0) == 0.5

    def test_hundred_percent_picks_largest(self, service) -> None:
        assert service.threshold_value([np.array([3.0, -0.5]), np.array([-7.0])], 100) == 7.0

    def test_apply_threshold_zeroes_across_channels(self, service) -> None:
        coefficients = [np.array([1.0, -5.0]), np.array([-2.0, 6.0]), np.array([3.0, 0.5])]

        thresholded, threshold = service.apply_threshold(coefficients, 50)

        assert threshold == 2.0
        np.testing.assert_array_equal(thresholded[0], [0.0, -5.0])
        np.testing.assert_array_equal(thresholded[1], [0.0, 6.0])
        np.testing.assert_array_equal(thresholded[2], [3.0, 0.0])


class TestCompress:

    def test_zero_percent_keeps_pixels(self, service, random_image) -> None:
        result = service.compress(random_image, 0)

        assert result.shape == random_image.shape
        assert np.abs(result.pixels - random_image.pixels).max() <= 1

    def test_hundred_percent_flattens(self, service, random_image) -> None:
        result = service.compress(random_image, 100)

        assert np.all(result.pixels == 0)

    def test_higher_percent_loses_more(self, service) -> None:
        rng = np.random.default_rng(7)
        image = Image(rng.integers(0, 256, size=(8, 8, 3)))

        low = np.abs(service.compress(image, 10).pixels - image.pixels).sum()
        high = np.abs(service.compress(image, 90).pixels - image.pixels).sum()

        assert high > low

    def test_non_square_image_keeps_shape(self, service) -> None:
        image = Image(np.full((3, 5, 3), 77))

        result = service.compress(image, 50)

        assert result.shape == (3, 5)
        assert np.all((result.pixels >= 0) & (result.pixels <= 255))

    def test_single_pixel_zero_percent_drops_smallest_coefficient(self, service) -> None:
        image = Image.from_rows([[(12, 34, 56)]])

        # three coefficients; index 0 of the sorted magnitudes is 12
        assert service.compress(image, 0).get_pixel(0, 0) == (0, 34, 56)

    @pytest.mark.parametrize("percent", [-0.1, 100.5])
    def test_percent_out_of_range(self, service, random_image, percent) -> None:
        with pytest.raises(InvalidParameterError):
            service.compress(random_image, percent)

    def test_source_untouched(self, service, random_image) -> None:
        before = random_image.pixels.copy()

        service.compress(random_image, 60)

        np.testing.assert_array_equal(random_image.pixels, before)

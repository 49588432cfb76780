"""
Tests for histograms, peak search, colour correction and histogram plots.
"""

import numpy as np
import pytest

from pixelworks.config import Settings
from pixelworks.exceptions import InvalidParameterError
from pixelworks.models.image import Image
from pixelworks.services.histogram_plot_service import HistogramPlotService
from pixelworks.services.histogram_service import HistogramService


@pytest.fixture
def service(settings):
    return HistogramService(settings)


class TestComputeHistogram:

    def test_counts_every_pixel(self, service, random_image) -> None:
        for channel in range(3):
            histogram = service.compute_histogram(random_image, channel)

            assert histogram.shape == (256,)
            assert histogram.sum() == random_image.height * random_image.width

    def test_small_image_partially_populated(self, service) -> None:
        image = Image.from_rows([[(5, 6, 7), (5, 9, 7)]])

        histogram = service.compute_histogram(image, 1)

        assert histogram[6] == 1
        assert histogram[9] == 1
        assert histogram.sum() == 2

    def test_out_of_range_values_land_in_edge_bins(self, service) -> None:
        image = Image.from_grey_rows([[-20, 300, 600]])

        histogram = service.compute_histogram(image, 0)

        assert histogram[0] == 1
        assert histogram[255] == 2

    def test_rejects_bad_channel(self, service, random_image) -> None:
        with pytest.raises(InvalidParameterError):
            service.compute_histogram(random_image, 4)


class TestFindPeak:

    def test_single_count(self, service) -> None:
        histogram = np.zeros(256, dtype=np.int64)
        histogram[200] = 1

        assert service.find_peak(histogram, 10, 245) == 200

    def test_ties_go_to_lowest_index(self, service) -> None:
        histogram = np.zeros(256, dtype=np.int64)
        histogram[[60, 50, 70]] = 3

        assert service.find_peak(histogram, 10, 245) == 50

    def test_ignores_counts_outside_range(self, service) -> None:
        histogram = np.zeros(256, dtype=np.int64)
        histogram[0] = 100
        histogram[250] = 100
        histogram[30] = 1

        assert service.find_peak(histogram, 10, 245) == 30

    def test_end_is_exclusive(self, service) -> None:
        histogram = np.zeros(256, dtype=np.int64)
        histogram[245] = 5
        histogram[100] = 1

        assert service.find_peak(histogram, 10, 245) == 100

    def test_empty_range_returns_zero(self, service) -> None:
        assert service.find_peak(np.zeros(256, dtype=np.int64), 10, 245) == 0

    def test_counts_outside_empty_range_still_give_zero(self, service) -> None:
        histogram = np.zeros(256, dtype=np.int64)
        histogram[[0, 5, 250]] = 9

        assert service.find_peak(histogram, 10, 245) == 0

    def test_invalid_range(self, service) -> None:
        with pytest.raises(InvalidParameterError):
            service.find_peak(np.zeros(256), 100, 50)


class TestColorCorrect:

    def test_peaks_align_on_average(self, service) -> None:
        image = Image(np.tile(np.array([100, 120, 140]), (2, 2, 1)))

        result = service.color_correct(image)

        assert np.all(result.pixels == 120)

    def test_average_peak_truncates(self, service) -> None:
        image = Image(np.tile(np.array([100, 120, 141]), (1, 1, 1)))

        # (100 + 120 + 141) // 3 == 120
        assert service.color_correct(image).get_pixel(0, 0) == (120, 120, 120)

    def test_remap_applies_to_every_value(self, service) -> None:
        pixels = np.tile(np.array([30, 200, 50]), (3, 3, 1))
        pixels[0, 0] = (5, 250, 0)
        image = Image(pixels)

        result = service.color_correct(image)

        # peaks 30 / 200 / 50, average 93: offsets +63, -107, +43
        assert result.get_pixel(1, 1) == (93, 93, 93)
        assert result.get_pixel(0, 0) == (68, 143, 43)

    def test_offsets_clamp_to_valid_range(self, service) -> None:
        pixels = np.tile(np.array([20, 20, 230]), (2, 2, 1))
        pixels[0, 0] = (200, 0, 100)
        image = Image(pixels)

        result = service.color_correct(image)

        # average 90: red and green shift +70, blue shifts -140
        assert result.get_pixel(0, 0) == (255, 70, 0)
        assert result.get_pixel(1, 1) == (90, 90, 90)

    def test_channel_without_midtones_has_peak_zero(self, service) -> None:
        image = Image(np.tile(np.array([0, 100, 100]), (2, 2, 1)))

        # peaks 0 / 100 / 100, average 66
        assert service.channel_peaks(image) == (0, 100, 100)
        assert service.color_correct(image).get_pixel(1, 1) == (66, 66, 66)

    def test_saturated_image_unchanged(self, service) -> None:
        image = Image.from_rows([[(255, 0, 0), (0, 255, 0), (0, 0, 255), (255, 255, 255), (0, 0, 0)]])

        result = service.color_correct(image)

        np.testing.assert_array_equal(result.pixels, image.pixels)

    def test_split_keeps_right_half(self, service) -> None:
        image = Image(np.tile(np.array([100, 120, 140]), (1, 4, 1)))

        result = service.color_correct(image, split_percent=50)

        assert result.get_pixel(0, 1) == (120, 120, 120)
        assert result.get_pixel(0, 2) == (100, 120, 140)
        assert result.get_pixel(0, 3) == (100, 120, 140)

    def test_configured_peak_range(self) -> None:
        service = HistogramService(Settings(peak_low=0, peak_high=256))
        image = Image(np.tile(np.array([0, 30, 60]), (2, 2, 1)))

        assert service.color_correct(image).get_pixel(0, 0) == (30, 30, 30)

    def test_negative_split_rejected(self, service, random_image) -> None:
        with pytest.raises(InvalidParameterError):
            service.color_correct(random_image, split_percent=-5)


class TestHistogramPlot:

    def test_canvas_is_at_least_256_square(self, service) -> None:
        result = HistogramPlotService(service).render(Image.blank(2, 2))

        assert result.shape == (256, 256)

    def test_canvas_grows_with_image(self, service) -> None:
        result = HistogramPlotService(service).render(Image.blank(10, 300))

        assert result.shape == (256, 300)

    def test_white_background(self, service) -> None:
        result = HistogramPlotService(service).render(Image.blank(2, 2))

        assert result.get_pixel(128, 200) == (255, 255, 255)
        assert result.get_pixel(10, 299) is None

    def test_tallest_bin_touches_top(self, service) -> None:
        # every channel peaks at bin 0; blue is drawn last
        result = HistogramPlotService(service).render(Image.blank(2, 2))

        assert result.get_pixel(0, 0) == (0, 0, 255)

    def test_curves_are_drawn(self, service, random_image) -> None:
        result = HistogramPlotService(service).render(random_image)

        assert not np.all(result.pixels == 255)
        assert np.all((result.pixels >= 0) & (result.pixels <= 255))

from __future__ import annotations
from typing import Optional, Tuple
import logging

import numpy as np

from ..config import Settings, get_settings
from ..exceptions import InvalidParameterError
from ..models.image import Image
from .split_preview import merge_preview, split_column

logger = logging.getLogger(__name__)

BINS = 256


class HistogramService:
    """
    Per-channel histograms, peak search and peak-alignment colour correction.
    """

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.peak_low = settings.peak_low
        self.peak_high = settings.peak_high

    @staticmethod
    def compute_histogram(source: Image, channel: int) -> np.ndarray:
        """
        Count the values of *channel* into 256 bins.

        Values outside [0, 255] land in the edge bins.
        """
        if channel not in (0, 1, 2):
            raise InvalidParameterError(f"Channel index must be 0, 1 or 2, got {channel}")
        values = np.clip(source.pixels[:, :, channel], 0, BINS - 1).ravel()
        return np.bincount(values, minlength=BINS).astype(np.int64)

    @staticmethod
    def find_peak(histogram: np.ndarray, start: int, end: int) -> int:
        """
        Index of the largest count in [start, end); ties go to the lowest index.

        Returns 0 when no bin in range has a positive count.
        """
        if not 0 <= start < end <= len(histogram):
            raise InvalidParameterError(f"Invalid peak range [{start}, {end})")
        window = np.asarray(histogram[start:end])
        if window.max() <= 0:
            return 0
        return start + int(np.argmax(window))

    def channel_peaks(self, source: Image) -> Tuple[int, int, int]:
        red, green, blue = (
            self.find_peak(self.compute_histogram(source, c), self.peak_low, self.peak_high)
            for c in range(3)
        )
        return red, green, blue

    def color_correct(self, source: Image, split_percent: Optional[int] = None) -> Image:
        """
        Shift each channel so its histogram peak lands on the average of the three peaks.
        """
        column = split_column(source.width, split_percent)

        peaks = self.channel_peaks(source)
        average_peak = sum(peaks) // 3
        logger.debug("Channel peaks %s, average %d", peaks, average_peak)

        values = np.arange(BINS, dtype=np.int64)
        left = source.pixels[:, :column]
        corrected = np.empty_like(left)
        for c, peak in enumerate(peaks):
            # remap table: separate from the counts it was derived from
            table = np.clip(values + (average_peak - peak), 0, 255)
            corrected[:, :, c] = table[np.clip(left[:, :, c], 0, 255)]

        return merge_preview(source, corrected, column)

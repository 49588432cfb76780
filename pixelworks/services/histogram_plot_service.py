from __future__ import annotations
from typing import Sequence, Tuple
import logging

import cv2
import numpy as np

from ..models.image import Image
from .histogram_service import BINS, HistogramService

logger = logging.getLogger(__name__)

# RGB order, the canvas is an RGB array
LINE_COLORS: Tuple[Tuple[int, int, int], ...] = ((255, 0, 0), (0, 255, 0), (0, 0, 255))
BACKGROUND = (255, 255, 255)


class HistogramPlotService:
    """
    Rasterises the red / green / blue histograms of an image as three line graphs
    on a white canvas of at least 256 x 256 pixels.
    """

    def __init__(self, histogram_service: HistogramService | None = None):
        self.histogram_service = histogram_service or HistogramService()

    @staticmethod
    def _draw_curve(canvas: np.ndarray, histogram: np.ndarray, color: Sequence[int], max_count: int) -> None:
        height = canvas.shape[0]
        # tallest bin across all channels touches the top row
        heights = ((histogram / float(max_count)) * height).astype(np.int64)
        for i in range(1, BINS):
            cv2.line(
                canvas,
                (i - 1, int(height - heights[i - 1])),
                (i, int(height - heights[i])),
                tuple(int(v) for v in color),
                1,
            )

    def render(self, source: Image) -> Image:
        width = max(BINS, source.width)
        height = max(BINS, source.height)
        canvas = np.full((height, width, 3), BACKGROUND, dtype=np.uint8)

        histograms = [self.histogram_service.compute_histogram(source, c) for c in range(3)]
        max_count = max(int(h.max()) for h in histograms) or 1

        for histogram, color in zip(histograms, LINE_COLORS):
            self._draw_curve(canvas, histogram, color, max_count)

        logger.debug("Rendered %dx%d histogram, tallest bin %d", width, height, max_count)
        return Image(canvas.astype(np.int64))

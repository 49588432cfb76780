from typing import Optional
import logging

import numpy as np

from ..models.image import Image
from ..models.image_adjustments import Kernel
from .split_preview import merge_preview, split_column

logger = logging.getLogger(__name__)


class ConvolutionService:
    """
    N x N kernel filtering with zero-padded borders.

    The running sum for each channel is truncated toward zero after every
    kernel term, in kernel order (top row first, left to right), and the
    final sum is clamped to [0, 255].  Terms that fall outside the grid add
    nothing.
    """

    @staticmethod
    def _filter(pixels: np.ndarray, kernel: Kernel) -> np.ndarray:
        height, width = pixels.shape[:2]
        r = kernel.radius
        padded = np.pad(pixels.astype(np.float64), ((r, r), (r, r), (0, 0)))

        acc = np.zeros(pixels.shape, dtype=np.float64)
        for ky in range(kernel.size):
            for kx in range(kernel.size):
                weight = kernel.weights[ky, kx]
                acc = np.trunc(acc + weight * padded[ky:ky + height, kx:kx + width])

        return np.clip(acc, 0, 255).astype(np.int64)

    def apply_kernel(self, source: Image, kernel: Kernel, split_percent: Optional[int] = None) -> Image:
        """
        Filter *source* with *kernel* left of the split column; copy the rest unmodified.
        """
        column = split_column(source.width, split_percent)
        logger.debug("Applying %dx%d kernel up to column %d", kernel.size, kernel.size, column)
        if column == 0:
            return Image(source.pixels.copy())

        # output column j reads input columns up to j + radius
        support = min(source.width, column + kernel.radius)
        filtered = self._filter(source.pixels[:, :support], kernel)
        return merge_preview(source, filtered, column)

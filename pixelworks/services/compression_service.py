from __future__ import annotations
from typing import List, Sequence, Tuple
import logging
import math

import numpy as np

from ..exceptions import InvalidParameterError
from ..models.image import Image

logger = logging.getLogger(__name__)

SQRT2 = math.sqrt(2)


class CompressionService:
    """
    Lossy compression through a 2D Haar wavelet transform.

    Each channel is zero-padded to a power-of-two square, transformed,
    thresholded against a percentile of the coefficient magnitudes pooled
    over all three channels, inverted, cropped and rounded back to pixels.
    All wavelet arithmetic stays in float64.
    """

    # ─── Padding ───────────────────────────────────────────────────
    @staticmethod
    def next_power_of_two(n: int) -> int:
        size = 1
        while size < n:
            size *= 2
        return size

    @staticmethod
    def pad(matrix: np.ndarray, size: int) -> np.ndarray:
        """Zero-pad *matrix* on the bottom / right to size x size."""
        rows, cols = matrix.shape
        padded = np.zeros((size, size), dtype=np.float64)
        padded[:rows, :cols] = matrix
        return padded

    @staticmethod
    def unpad(matrix: np.ndarray, rows: int, cols: int) -> np.ndarray:
        return matrix[:rows, :cols].copy()

    # ─── 1D steps ──────────────────────────────────────────────────
    @staticmethod
    def _forward_step(block: np.ndarray, axis: int) -> np.ndarray:
        # pairs (x0, x1), (x2, x3) ... -> all averages, then all differences
        even = np.take(block, np.arange(0, block.shape[axis], 2), axis=axis)
        odd = np.take(block, np.arange(1, block.shape[axis], 2), axis=axis)
        return np.concatenate(((even + odd) / SQRT2, (even - odd) / SQRT2), axis=axis)

    @staticmethod
    def _inverse_step(block: np.ndarray, axis: int) -> np.ndarray:
        half = block.shape[axis] // 2
        avg = np.take(block, np.arange(half), axis=axis)
        diff = np.take(block, np.arange(half, 2 * half), axis=axis)

        out = np.empty_like(block)
        first = [slice(None)] * block.ndim
        second = [slice(None)] * block.ndim
        first[axis] = slice(0, None, 2)
        second[axis] = slice(1, None, 2)
        out[tuple(first)] = (avg + diff) / SQRT2
        out[tuple(second)] = (avg - diff) / SQRT2
        return out

    # ─── 2D transform ──────────────────────────────────────────────
    def haar_forward(self, matrix: np.ndarray) -> np.ndarray:
        """
        Forward 2D Haar transform of a square power-of-two matrix.

        For c = N, N/2, ..., 2: transform the first c entries of each of the
        first c rows, then the first c entries of each of the first c columns.
        """
        result = np.array(matrix, dtype=np.float64)
        c = result.shape[0]
        while c > 1:
            result[:c, :c] = self._forward_step(result[:c, :c], axis=1)
            result[:c, :c] = self._forward_step(result[:c, :c], axis=0)
            c //= 2
        return result

    def haar_inverse(self, matrix: np.ndarray) -> np.ndarray:
        """Inverse of ``haar_forward``: c = 2, 4, ..., N, columns then rows."""
        result = np.array(matrix, dtype=np.float64)
        size = result.shape[0]
        c = 2
        while c <= size:
            result[:c, :c] = self._inverse_step(result[:c, :c], axis=0)
            result[:c, :c] = self._inverse_step(result[:c, :c], axis=1)
            c *= 2
        return result

    # ─── Thresholding ──────────────────────────────────────────────
    @staticmethod
    def threshold_value(coefficients: Sequence[np.ndarray], percent: float) -> float:
        """
        Magnitude at sorted index max(0, floor(n * percent / 100) - 1) of the
        pooled absolute coefficients (duplicates kept).
        """
        magnitudes = np.sort(np.concatenate([np.abs(c).ravel() for c in coefficients]))
        index = max(0, int(len(magnitudes) * percent / 100.0) - 1)
        return float(magnitudes[index])

    def apply_threshold(self, coefficients: Sequence[np.ndarray], percent: float) -> Tuple[List[np.ndarray], float]:
        threshold = self.threshold_value(coefficients, percent)
        thresholded = [np.where(np.abs(c) <= threshold, 0.0, c) for c in coefficients]
        return thresholded, threshold

    # ─── Public API ────────────────────────────────────────────────
    def compress(self, source: Image, percent: float) -> Image:
        """
        Zero the smallest *percent* of wavelet coefficients and rebuild the image.

        Raises:
            InvalidParameterError: if *percent* is outside [0, 100].
        """
        if not 0 <= percent <= 100:
            raise InvalidParameterError(f"The compression percentage should be between 0 and 100, got {percent}")

        rows, cols = source.shape
        size = self.next_power_of_two(max(rows, cols))

        channels = [source.pixels[:, :, c].astype(np.float64) for c in range(3)]
        transformed = [self.haar_forward(self.pad(ch, size)) for ch in channels]

        thresholded, threshold = self.apply_threshold(transformed, percent)
        zeroed = sum(int(np.count_nonzero(t == 0)) for t in thresholded)
        logger.debug("Compression %.2f%%: threshold %.6f, %d of %d coefficients zero",
                     percent, threshold, zeroed, 3 * size * size)

        restored = [self.unpad(self.haar_inverse(t), rows, cols) for t in thresholded]
        pixels = np.clip(np.floor(np.stack(restored, axis=2) + 0.5), 0, 255)
        return Image(pixels.astype(np.int64))

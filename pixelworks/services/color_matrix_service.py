from typing import Optional

import numpy as np

from ..models.image import Image
from ..models.image_adjustments import ColorMatrix
from .split_preview import merge_preview, split_column


class ColorMatrixService:
    """3x3 linear colour transforms (greyscale, sepia, ...)."""

    @staticmethod
    def apply_matrix(source: Image, matrix: ColorMatrix, split_percent: Optional[int] = None) -> Image:
        """out_i = clamp(round(sum_k M[i][k] * in_k), 0, 255) left of the split column."""
        column = split_column(source.width, split_percent)

        m = matrix.weights
        px = source.pixels[:, :column].astype(np.float64)
        r, g, b = px[:, :, 0], px[:, :, 1], px[:, :, 2]
        channels = [m[i, 0] * r + m[i, 1] * g + m[i, 2] * b for i in range(3)]

        transformed = np.clip(np.floor(np.stack(channels, axis=2) + 0.5), 0, 255)
        return merge_preview(source, transformed.astype(np.int64), column)

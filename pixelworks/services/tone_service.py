from typing import Optional
import logging

import numpy as np

from ..models.image import Image
from ..models.image_adjustments import LevelsAdjustment
from .split_preview import merge_preview, split_column

logger = logging.getLogger(__name__)


class ToneService:
    """Brightness shift and three-point levels adjustment."""

    @staticmethod
    def brighten(source: Image, delta: int) -> Image:
        """Add *delta* to every channel, clamping to [0, 255]."""
        return Image(np.clip(source.pixels + int(delta), 0, 255))

    @staticmethod
    def adjust_levels(
        source: Image,
        black: int,
        mid: int,
        white: int,
        split_percent: Optional[int] = None,
    ) -> Image:
        """
        Remap each channel through the curve anchored at (black, 0), (mid, 128), (white, 255).

        Args:
            source: Image to adjust.
            black, mid, white: Control points, 0 <= black < mid < white <= 255.
            split_percent: Only columns left of ``width * split_percent // 100``
                are adjusted; None adjusts the whole image.

        Raises:
            InvalidRangeError: if the control points are out of order or range.
            InvalidParameterError: if *split_percent* is negative.
        """
        levels = LevelsAdjustment(black, mid, white)
        column = split_column(source.width, split_percent)

        table = levels.lookup_table()
        adjusted = table[np.clip(source.pixels[:, :column], 0, 255)]
        logger.debug("Levels (%d, %d, %d) up to column %d", black, mid, white, column)
        return merge_preview(source, adjusted, column)

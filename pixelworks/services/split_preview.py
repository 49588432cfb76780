"""
Before/after preview support.

An effect with a split percentage is applied only to the columns left of
``width * percent // 100``; everything from that column on is the source,
copied unmodified.
"""
from typing import Optional

import numpy as np

from ..exceptions import InvalidParameterError
from ..models.image import Image


def split_column(width: int, split_percent: Optional[int]) -> int:
    """First column that keeps the source pixels; ``width`` when there is no split."""
    if split_percent is None:
        return width
    if split_percent < 0:
        raise InvalidParameterError(f"Split value cannot be negative: {split_percent}")
    return min(width, width * int(split_percent) // 100)


def merge_preview(source: Image, effect: np.ndarray, column: int) -> Image:
    """
    Combine the first *column* columns of *effect* with the untouched *source*.

    *effect* may be narrower than *source* as long as it covers those columns.
    """
    pixels = source.pixels.copy()
    pixels[:, :column] = effect[:, :column]
    return Image(pixels)

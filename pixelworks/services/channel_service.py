from typing import Sequence, Tuple
import logging

import numpy as np

from ..exceptions import DimensionMismatchError, InvalidParameterError
from ..models.image import Image
from ..models.image_adjustments import component_coefficients

logger = logging.getLogger(__name__)


class ChannelService:
    """
    Component extraction / recombination and mirroring.
    Every method returns a freshly allocated Image; the source is never touched.
    """

    @staticmethod
    def extract_single_channel(source: Image, index: int) -> Image:
        """Keep channel *index* (0 red, 1 green, 2 blue) and zero the other two."""
        if index not in (0, 1, 2):
            raise InvalidParameterError(f"Channel index must be 0, 1 or 2, got {index}")
        pixels = np.zeros_like(source.pixels)
        pixels[:, :, index] = source.pixels[:, :, index]
        return Image(pixels)

    @staticmethod
    def compute_weighted_component(
        source: Image,
        coefficients: Sequence[float],
        clamp: bool = False,
    ) -> Image:
        """
        Set every channel to trunc(c0*r + c1*g + c2*b).

        With ``clamp=False`` the result is passed through as computed, so the
        value component ({1, 1, 1}) can exceed 255.
        """
        c0, c1, c2 = component_coefficients(coefficients)
        px = source.pixels.astype(np.float64)
        component = np.trunc(c0 * px[:, :, 0] + c1 * px[:, :, 1] + c2 * px[:, :, 2])
        if clamp:
            component = np.clip(component, 0, 255)

        component = component.astype(np.int64)
        return Image(np.repeat(component[:, :, None], 3, axis=2))

    def split_channels(self, source: Image) -> Tuple[Image, Image, Image]:
        red, green, blue = (self.extract_single_channel(source, i) for i in range(3))
        return red, green, blue

    @staticmethod
    def combine_channels(red: Image, green: Image, blue: Image) -> Image:
        """Take red from *red*, green from *green* and blue from *blue*."""
        if not red.shape == green.shape == blue.shape:
            raise DimensionMismatchError(
                f"Cannot combine channels of different sizes: red {red.shape}, "
                f"green {green.shape}, blue {blue.shape}"
            )
        pixels = np.stack(
            [red.pixels[:, :, 0], green.pixels[:, :, 1], blue.pixels[:, :, 2]], axis=2
        )
        return Image(pixels)

    @staticmethod
    def flip(source: Image, horizontal: bool) -> Image:
        # horizontal mirrors columns, vertical mirrors rows
        if horizontal:
            return Image(source.pixels[:, ::-1].copy())
        return Image(source.pixels[::-1, :].copy())

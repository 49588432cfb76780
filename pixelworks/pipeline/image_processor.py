"""
Image Processor
Session object for the pixel engine: resolves source images by name, runs one
operation and stores the freshly allocated result under the destination name.
"""
from __future__ import annotations
from functools import singledispatchmethod
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union
import logging

from ..config import Settings, get_settings
from ..models.image import Image
from ..models.image_adjustments import (
    GAUSSIAN_BLUR, GREYSCALE, INTENSITY, LUMA, SEPIA, SHARPEN, VALUE,
    ColorMatrix, Kernel,
)
from ..models.requests import (
    AdjustLevels, ApplyColorMatrix, ApplyKernel, Brighten, ColorCorrect, CombineChannels,
    Compress, ExtractChannel, Flip, LoadImage, PlotHistogram, SaveImage, SplitChannels,
    WeightedComponent,
)
from ..repositories.image_repository import ImageRepository
from ..services.channel_service import ChannelService
from ..services.color_matrix_service import ColorMatrixService
from ..services.compression_service import CompressionService
from ..services.convolution_service import ConvolutionService
from ..services.histogram_plot_service import HistogramPlotService
from ..services.histogram_service import HistogramService
from ..services.image_service import ImageService
from ..services.tone_service import ToneService

logger = logging.getLogger(__name__)


class ImageProcessor:
    """
    Owns one image store; every operation reads named sources and writes a named result.

    Nothing is stored when an operation raises, so the session stays usable.
    """

    def __init__(
        self,
        image_repository: ImageRepository | None = None,
        settings: Settings | None = None,
    ):
        settings = settings or get_settings()
        self.image_service = ImageService(image_repository or ImageRepository(settings))
        self.channel_service = ChannelService()
        self.tone_service = ToneService()
        self.color_matrix_service = ColorMatrixService()
        self.convolution_service = ConvolutionService()
        self.histogram_service = HistogramService(settings)
        self.histogram_plot_service = HistogramPlotService(self.histogram_service)
        self.compression_service = CompressionService()

    # ─── Store access ──────────────────────────────────────────────
    def add_image(self, name: str, image: Image) -> None:
        self.image_service.put(name, image)

    def get_image(self, name: str) -> Image:
        return self.image_service.get(name)

    def find_image(self, name: str) -> Optional[Image]:
        return self.image_service.find(name)

    def image_names(self) -> List[str]:
        return self.image_service.names()

    def _store(self, dest: str, image: Image, action: str) -> Image:
        self.image_service.put(dest, image)
        logger.info("%s -> '%s' (%dx%d)", action, dest, image.width, image.height)
        return image

    # ─── I/O ───────────────────────────────────────────────────────
    def load(self, path: Union[str, Path], dest: str) -> Image:
        return self.image_service.load(path, dest)

    def save(self, path: Union[str, Path], source: str) -> Path:
        return self.image_service.save(source, path)

    # ─── Channel operations ────────────────────────────────────────
    def extract_channel(self, source: str, dest: str, channel: int) -> Image:
        result = self.channel_service.extract_single_channel(self.get_image(source), channel)
        return self._store(dest, result, f"channel {channel} of '{source}'")

    def red_component(self, source: str, dest: str) -> Image:
        return self.extract_channel(source, dest, 0)

    def green_component(self, source: str, dest: str) -> Image:
        return self.extract_channel(source, dest, 1)

    def blue_component(self, source: str, dest: str) -> Image:
        return self.extract_channel(source, dest, 2)

    def weighted_component(self, source: str, dest: str, coefficients: Sequence[float],
                           clamp: bool = False) -> Image:
        result = self.channel_service.compute_weighted_component(self.get_image(source), coefficients, clamp)
        return self._store(dest, result, f"weighted component {tuple(coefficients)} of '{source}'")

    def value_component(self, source: str, dest: str, clamp: bool = False) -> Image:
        return self.weighted_component(source, dest, VALUE, clamp)

    def intensity_component(self, source: str, dest: str) -> Image:
        return self.weighted_component(source, dest, INTENSITY)

    def luma_component(self, source: str, dest: str) -> Image:
        return self.weighted_component(source, dest, LUMA)

    def rgb_split(self, source: str, red_dest: str, green_dest: str, blue_dest: str) -> Tuple[Image, Image, Image]:
        red, green, blue = self.channel_service.split_channels(self.get_image(source))
        self._store(red_dest, red, f"red split of '{source}'")
        self._store(green_dest, green, f"green split of '{source}'")
        self._store(blue_dest, blue, f"blue split of '{source}'")
        return red, green, blue

    def rgb_combine(self, dest: str, red_source: str, green_source: str, blue_source: str) -> Image:
        result = self.channel_service.combine_channels(
            self.get_image(red_source), self.get_image(green_source), self.get_image(blue_source)
        )
        return self._store(dest, result, "rgb combine")

    def flip(self, source: str, dest: str, horizontal: bool) -> Image:
        result = self.channel_service.flip(self.get_image(source), horizontal)
        return self._store(dest, result, f"{'horizontal' if horizontal else 'vertical'} flip of '{source}'")

    # ─── Tone ──────────────────────────────────────────────────────
    def brighten(self, source: str, dest: str, delta: int) -> Image:
        result = self.tone_service.brighten(self.get_image(source), delta)
        return self._store(dest, result, f"brighten '{source}' by {delta}")

    def adjust_levels(self, source: str, dest: str, black: int, mid: int, white: int,
                      split_percent: Optional[int] = None) -> Image:
        result = self.tone_service.adjust_levels(self.get_image(source), black, mid, white, split_percent)
        return self._store(dest, result, f"levels ({black}, {mid}, {white}) of '{source}'")

    # ─── Colour matrices ───────────────────────────────────────────
    def apply_color_matrix(self, source: str, dest: str, matrix: ColorMatrix,
                           split_percent: Optional[int] = None) -> Image:
        result = self.color_matrix_service.apply_matrix(self.get_image(source), matrix, split_percent)
        return self._store(dest, result, f"colour matrix on '{source}'")

    def greyscale(self, source: str, dest: str, split_percent: Optional[int] = None) -> Image:
        return self.apply_color_matrix(source, dest, GREYSCALE, split_percent)

    def sepia(self, source: str, dest: str, split_percent: Optional[int] = None) -> Image:
        return self.apply_color_matrix(source, dest, SEPIA, split_percent)

    # ─── Convolution ───────────────────────────────────────────────
    def apply_kernel(self, source: str, dest: str, kernel: Kernel,
                     split_percent: Optional[int] = None) -> Image:
        result = self.convolution_service.apply_kernel(self.get_image(source), kernel, split_percent)
        return self._store(dest, result, f"{kernel.size}x{kernel.size} kernel on '{source}'")

    def blur(self, source: str, dest: str, split_percent: Optional[int] = None) -> Image:
        return self.apply_kernel(source, dest, GAUSSIAN_BLUR, split_percent)

    def sharpen(self, source: str, dest: str, split_percent: Optional[int] = None) -> Image:
        return self.apply_kernel(source, dest, SHARPEN, split_percent)

    # ─── Histograms ────────────────────────────────────────────────
    def color_correct(self, source: str, dest: str, split_percent: Optional[int] = None) -> Image:
        result = self.histogram_service.color_correct(self.get_image(source), split_percent)
        return self._store(dest, result, f"colour correct '{source}'")

    def plot_histogram(self, source: str, dest: str) -> Image:
        result = self.histogram_plot_service.render(self.get_image(source))
        return self._store(dest, result, f"histogram of '{source}'")

    # ─── Compression ───────────────────────────────────────────────
    def compress(self, source: str, dest: str, percent: float) -> Image:
        result = self.compression_service.compress(self.get_image(source), percent)
        return self._store(dest, result, f"compress '{source}' at {percent}%")

    # ─── Request dispatch ──────────────────────────────────────────
    @singledispatchmethod
    def execute(self, request):
        raise TypeError(f"Unsupported request type: {type(request).__name__}")

    @execute.register(LoadImage)
    def _(self, request):
        return self.load(request.path, request.dest)

    @execute.register(SaveImage)
    def _(self, request):
        return self.save(request.path, request.source)

    @execute.register(ExtractChannel)
    def _(self, request):
        return self.extract_channel(request.source, request.dest, request.channel)

    @execute.register(WeightedComponent)
    def _(self, request):
        return self.weighted_component(request.source, request.dest, request.coefficients, request.clamp)

    @execute.register(SplitChannels)
    def _(self, request):
        return self.rgb_split(request.source, request.red_dest, request.green_dest, request.blue_dest)

    @execute.register(CombineChannels)
    def _(self, request):
        return self.rgb_combine(request.dest, request.red_source, request.green_source, request.blue_source)

    @execute.register(Flip)
    def _(self, request):
        return self.flip(request.source, request.dest, request.horizontal)

    @execute.register(Brighten)
    def _(self, request):
        return self.brighten(request.source, request.dest, request.delta)

    @execute.register(AdjustLevels)
    def _(self, request):
        return self.adjust_levels(request.source, request.dest, request.black, request.mid,
                                  request.white, request.split_percent)

    @execute.register(ApplyColorMatrix)
    def _(self, request):
        return self.apply_color_matrix(request.source, request.dest, request.matrix, request.split_percent)

    @execute.register(ApplyKernel)
    def _(self, request):
        return self.apply_kernel(request.source, request.dest, request.kernel, request.split_percent)

    @execute.register(ColorCorrect)
    def _(self, request):
        return self.color_correct(request.source, request.dest, request.split_percent)

    @execute.register(PlotHistogram)
    def _(self, request):
        return self.plot_histogram(request.source, request.dest)

    @execute.register(Compress)
    def _(self, request):
        return self.compress(request.source, request.dest, request.percent)

"""
pixelworks - pixel-transform engine for a raster image editor.

Quick Start:
------------
    from pixelworks import ImageProcessor, Image

    processor = ImageProcessor()
    processor.add_image("koala", Image.from_grey_rows([[100, 150], [50, 75]]))
    processor.brighten("koala", "koala-bright", 10)
    processor.compress("koala", "koala-small", 50)
"""

from .exceptions import (
    DimensionMismatchError,
    ImageLoadError,
    ImageNotFoundError,
    InvalidParameterError,
    InvalidRangeError,
    NumericParseError,
    PixelWorksError,
    UnsupportedFormatError,
)
from .models.image import Image
from .pipeline.image_processor import ImageProcessor
from .pipeline.script_runner import ScriptRunner

__version__ = "1.0.0"

__all__ = [
    "Image",
    "ImageProcessor",
    "ScriptRunner",
    "PixelWorksError",
    "InvalidParameterError",
    "InvalidRangeError",
    "ImageNotFoundError",
    "NumericParseError",
    "DimensionMismatchError",
    "UnsupportedFormatError",
    "ImageLoadError",
]

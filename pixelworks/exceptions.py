"""
Exception hierarchy for the pixel engine.

Every failure is local to one call: nothing is written to the image store
when one of these is raised, and the store stays usable afterwards.
"""


class PixelWorksError(Exception):
    """Base class for every error raised by pixelworks."""


class InvalidParameterError(PixelWorksError):
    """A numeric parameter is outside the range an operation accepts."""


class InvalidRangeError(InvalidParameterError):
    """Levels control points violate 0 <= black < mid < white <= 255."""

    def __init__(self, black: int, mid: int, white: int):
        super().__init__(
            f"Invalid levels ({black}, {mid}, {white}): ensure 0 <= b < m < w <= 255"
        )
        self.black = black
        self.mid = mid
        self.white = white


class ImageNotFoundError(PixelWorksError):
    """No image is stored under the requested name."""

    def __init__(self, name: str):
        super().__init__(f"No image named '{name}'")
        self.name = name


class NumericParseError(PixelWorksError):
    """A command argument that must be numeric could not be parsed."""

    def __init__(self, argument: str, value: str):
        super().__init__(f"Invalid {argument}: '{value}' is not a valid number")
        self.argument = argument
        self.value = value


class DimensionMismatchError(PixelWorksError):
    """Images that must share dimensions do not."""


class UnsupportedFormatError(PixelWorksError):
    """The file extension is not one the codecs are configured for."""


class ImageLoadError(PixelWorksError):
    """A file could not be decoded into pixels."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence, Tuple
import numpy as np

from ..exceptions import InvalidParameterError, InvalidRangeError


def _frozen(values, shape: Tuple[int, ...] | None = None) -> np.ndarray:
    arr = np.array(values, dtype=np.float64)
    if shape is not None and arr.shape != shape:
        raise InvalidParameterError(f"Expected shape {shape}, got {arr.shape}")
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Kernel:
    """
    Value-object holding an odd-sized square convolution kernel.
    """
    weights: np.ndarray

    def __post_init__(self):
        weights = _frozen(self.weights)
        if weights.ndim != 2 or weights.shape[0] != weights.shape[1]:
            raise InvalidParameterError(f"Kernel must be square, got shape {weights.shape}")
        if weights.shape[0] % 2 == 0:
            raise InvalidParameterError(f"Kernel size must be odd, got {weights.shape[0]}")
        object.__setattr__(self, "weights", weights)

    @property
    def size(self) -> int:
        return self.weights.shape[0]

    @property
    def radius(self) -> int:
        return self.size // 2


@dataclass(frozen=True, eq=False)
class ColorMatrix:
    """
    Value-object holding a 3x3 linear colour transform: out_i = sum_k M[i][k] * in_k.
    """
    weights: np.ndarray

    def __post_init__(self):
        object.__setattr__(self, "weights", _frozen(self.weights, (3, 3)))


@dataclass(frozen=True)
class LevelsAdjustment:
    """
    Shadow / mid / highlight control points of a levels curve,
    anchored at (black, 0), (mid, 128), (white, 255).
    """
    black: int
    mid: int
    white: int

    def __post_init__(self):
        if not 0 <= self.black < self.mid < self.white <= 255:
            raise InvalidRangeError(self.black, self.mid, self.white)

    def lookup_table(self) -> np.ndarray:
        """Map every input value 0..255 through the piecewise-linear curve."""
        values = np.arange(256, dtype=np.float64)
        low = np.floor(128.0 / (self.mid - self.black) * (values - self.black) + 0.5)
        high = 128 + np.floor(127.0 / (self.white - self.mid) * (values - self.mid) + 0.5)

        table = np.where(values <= self.mid, low, high)
        table[values <= self.black] = 0
        table[values >= self.white] = 255
        return table.astype(np.int64)


ComponentCoefficients = Tuple[float, float, float]


def component_coefficients(values: Sequence[float]) -> ComponentCoefficients:
    if len(values) != 3:
        raise InvalidParameterError(f"Expected three coefficients, got {len(values)}")
    return float(values[0]), float(values[1]), float(values[2])


# ── Presets ─────────────────────────────────────────────────────────
GAUSSIAN_BLUR = Kernel([
    [1.0 / 16.0, 2.0 / 16.0, 1.0 / 16.0],
    [2.0 / 16.0, 4.0 / 16.0, 2.0 / 16.0],
    [1.0 / 16.0, 2.0 / 16.0, 1.0 / 16.0],
])

SHARPEN = Kernel([
    [-1.0 / 8, -1.0 / 8, -1.0 / 8, -1.0 / 8, -1.0 / 8],
    [-1.0 / 8, 1.0 / 4, 1.0 / 4, 1.0 / 4, -1.0 / 8],
    [-1.0 / 8, 1.0 / 4, 1.0, 1.0 / 4, -1.0 / 8],
    [-1.0 / 8, 1.0 / 4, 1.0 / 4, 1.0 / 4, -1.0 / 8],
    [-1.0 / 8, -1.0 / 8, -1.0 / 8, -1.0 / 8, -1.0 / 8],
])

# BT.601 luma weights on every output channel
GREYSCALE = ColorMatrix([
    [0.299, 0.587, 0.114],
    [0.299, 0.587, 0.114],
    [0.299, 0.587, 0.114],
])

SEPIA = ColorMatrix([
    [0.393, 0.769, 0.189],
    [0.349, 0.686, 0.168],
    [0.272, 0.534, 0.131],
])

VALUE: ComponentCoefficients = (1.0, 1.0, 1.0)
INTENSITY: ComponentCoefficients = (1.0 / 3, 1.0 / 3, 1.0 / 3)
LUMA: ComponentCoefficients = (0.2126, 0.7152, 0.0722)

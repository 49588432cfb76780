"""
Typed operation requests.

One frozen dataclass per engine operation. Callers (the script runner, tests,
an embedding application) build a request and hand it to
``ImageProcessor.execute``; no string parsing happens past this point.
"""
from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .image_adjustments import ColorMatrix, ComponentCoefficients, Kernel


@dataclass(frozen=True)
class LoadImage:
    path: Path
    dest: str


@dataclass(frozen=True)
class SaveImage:
    path: Path
    source: str


@dataclass(frozen=True)
class ExtractChannel:
    source: str
    dest: str
    channel: int  # 0 red, 1 green, 2 blue


@dataclass(frozen=True)
class WeightedComponent:
    source: str
    dest: str
    coefficients: ComponentCoefficients
    clamp: bool = False


@dataclass(frozen=True)
class SplitChannels:
    source: str
    red_dest: str
    green_dest: str
    blue_dest: str


@dataclass(frozen=True)
class CombineChannels:
    dest: str
    red_source: str
    green_source: str
    blue_source: str


@dataclass(frozen=True)
class Flip:
    source: str
    dest: str
    horizontal: bool


@dataclass(frozen=True)
class Brighten:
    source: str
    dest: str
    delta: int


@dataclass(frozen=True)
class AdjustLevels:
    source: str
    dest: str
    black: int
    mid: int
    white: int
    split_percent: Optional[int] = None


@dataclass(frozen=True)
class ApplyColorMatrix:
    source: str
    dest: str
    matrix: ColorMatrix
    split_percent: Optional[int] = None


@dataclass(frozen=True)
class ApplyKernel:
    source: str
    dest: str
    kernel: Kernel
    split_percent: Optional[int] = None


@dataclass(frozen=True)
class ColorCorrect:
    source: str
    dest: str
    split_percent: Optional[int] = None


@dataclass(frozen=True)
class PlotHistogram:
    source: str
    dest: str


@dataclass(frozen=True)
class Compress:
    source: str
    dest: str
    percent: float

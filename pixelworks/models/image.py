from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Sequence, Tuple
import numpy as np


@dataclass
class Image:
    """
    Simple data object: a 3-channel pixel grid (+ optional source path for bookkeeping).
    Values are plain integers; producers clamp, the grid itself does not.
    """
    pixels: np.ndarray # Shape (H, W, 3), dtype int64, RGB order.
    path: Path | None = None # Source of the image.

    def __post_init__(self):
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 3:
            raise ValueError(f"Expected an (H, W, 3) pixel array, got shape {self.pixels.shape}")
        if self.pixels.dtype != np.int64:
            self.pixels = self.pixels.astype(np.int64)

    # ── Constructors ────────────────────────────────────────────────
    @classmethod
    def blank(cls, height: int, width: int) -> "Image":
        return cls(np.zeros((height, width, 3), dtype=np.int64))

    @classmethod
    def from_rows(cls, rows: Iterable[Sequence[Sequence[int]]]) -> "Image":
        """Build an image from nested rows of (r, g, b) triples."""
        return cls(np.array(list(rows), dtype=np.int64))

    @classmethod
    def from_grey_rows(cls, rows: Iterable[Sequence[int]]) -> "Image":
        """Build an image whose three channels all carry the given grey levels."""
        grey = np.array(list(rows), dtype=np.int64)
        return cls(np.repeat(grey[:, :, None], 3, axis=2))

    # ── Geometry ────────────────────────────────────────────────────
    @property
    def height(self) -> int:
        return self.pixels.shape[0]

    @property
    def width(self) -> int:
        return self.pixels.shape[1]

    @property
    def shape(self) -> Tuple[int, int]:
        return self.pixels.shape[:2]

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    # ── Pixel access ────────────────────────────────────────────────
    def get_pixel(self, row: int, col: int) -> Tuple[int, int, int] | None:
        """Return (r, g, b) at (row, col), or None when outside the grid."""
        if not self.contains(row, col):
            return None
        r, g, b = self.pixels[row, col]
        return int(r), int(g), int(b)

    def set_pixel(self, row: int, col: int, r: int, g: int, b: int) -> None:
        """Write (r, g, b) at (row, col); writes outside the grid are ignored."""
        if self.contains(row, col):
            self.pixels[row, col] = (r, g, b)

    def copy(self) -> "Image":
        return Image(self.pixels.copy(), self.path)

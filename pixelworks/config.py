from __future__ import annotations
import os
from dataclasses import dataclass, field
from typing import FrozenSet

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _extensions(raw: str) -> FrozenSet[str]:
    exts = set()
    for ext in raw.split(","):
        ext = ext.strip().lower()
        if not ext:
            continue
        exts.add(ext if ext.startswith(".") else f".{ext}")
    return frozenset(exts)


@dataclass(frozen=True)
class Settings:
    """
    Runtime configuration, read from the environment (and a .env file if present).
    """
    valid_extensions: FrozenSet[str] = field(default_factory=lambda: _extensions(
        os.getenv("PIXELWORKS_VALID_EXTENSIONS", ".ppm,.png,.jpg,.jpeg,.bmp")))
    peak_low: int = field(default_factory=lambda: int(os.getenv("PIXELWORKS_PEAK_LOW", "10")))
    peak_high: int = field(default_factory=lambda: int(os.getenv("PIXELWORKS_PEAK_HIGH", "245")))
    log_level: str = field(default_factory=lambda: os.getenv("PIXELWORKS_LOG_LEVEL", "INFO").upper())
    jpeg_quality: int = field(default_factory=lambda: int(os.getenv("PIXELWORKS_JPEG_QUALITY", "95")))


def get_settings() -> Settings:
    return Settings()

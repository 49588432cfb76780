from __future__ import annotations
from io import BytesIO
from pathlib import Path
from typing import Dict, List, Optional, Union
import logging
import threading

import cv2
import numpy as np
from PIL import Image as PILImage

from ..config import Settings, get_settings
from ..exceptions import ImageLoadError, InvalidParameterError, UnsupportedFormatError
from ..models.image import Image

logger = logging.getLogger(__name__)

# Pillow format names for the extensions it cannot infer on its own
_PIL_FORMATS = {".jpg": "JPEG", ".jpeg": "JPEG", ".png": "PNG", ".bmp": "BMP", ".ppm": "PPM"}


class ImageRepository:
    """
    Handles the named in-memory image store and file I/O for Image entities.
    """
    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.VALID_EXTS = self.settings.valid_extensions
        self._images: Dict[str, Image] = {}
        self._lock = threading.RLock()

    # ─── Store ──────────────────────────────────────────────────────
    def put(self, name: str, image: Image) -> None:
        """Store *image* under *name*; the last write wins."""
        with self._lock:
            self._images[name] = image

    def find(self, name: str) -> Optional[Image]:
        with self._lock:
            return self._images.get(name)

    def contains(self, name: str) -> bool:
        with self._lock:
            return name in self._images

    def names(self) -> List[str]:
        with self._lock:
            return sorted(self._images)

    # ─── Codecs ─────────────────────────────────────────────────────
    def _check_extension(self, path: Path) -> str:
        ext = path.suffix.lower()
        if ext not in self.VALID_EXTS:
            raise UnsupportedFormatError(
                f"Unsupported image format '{ext or path.name}'; expected one of {sorted(self.VALID_EXTS)}"
            )
        return ext

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        self._check_extension(path)

        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise ImageLoadError(f"Image not found or unreadable: {path}")

        return Image(pixels=arr_bgr[:, :, ::-1].astype(np.int64), path=path)

    @staticmethod
    def decode(data: bytes) -> Image:
        """Decode encoded file bytes (any format OpenCV reads) into an Image."""
        arr_bgr = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
        if arr_bgr is None:
            raise ImageLoadError("Could not decode image bytes")
        return Image(pixels=arr_bgr[:, :, ::-1].astype(np.int64))

    @staticmethod
    def to_uint8(image: Image) -> np.ndarray:
        return np.ascontiguousarray(np.clip(image.pixels, 0, 255).astype(np.uint8))

    def encode(self, image: Image, ext: str) -> bytes:
        ext = ext.lower() if ext.startswith(".") else f".{ext.lower()}"
        if ext not in _PIL_FORMATS or ext not in self.VALID_EXTS:
            raise UnsupportedFormatError(f"Cannot encode to '{ext}'")

        fmt = _PIL_FORMATS[ext]
        buffer = BytesIO()
        pil_image = PILImage.fromarray(self.to_uint8(image))
        if fmt == "JPEG":
            pil_image.save(buffer, format=fmt, quality=self.settings.jpeg_quality)
        else:
            pil_image.save(buffer, format=fmt)
        return buffer.getvalue()

    def save(self, image: Image, path: Union[str, Path, None] = None) -> Path:
        path = Path(path) if path is not None else image.path
        if path is None:
            raise InvalidParameterError("No destination path given and the image has no source path")
        ext = self._check_extension(path)

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(self.encode(image, ext))
        logger.debug("Wrote %dx%d image to %s", image.width, image.height, path)
        return path

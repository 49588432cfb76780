from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..config import Settings
from ..exceptions import ImageNotFoundError
from ..models.image import Image
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """Store and I/O helpers.  No pixel arithmetic here."""
    def __init__(self, image_repository: ImageRepository | None = None, settings: Settings | None = None):
        self.image_repository = image_repository or ImageRepository(settings)

    def get(self, name: str) -> Image:
        """
        Checked lookup.

        Raises:
            ImageNotFoundError: if nothing is stored under *name*.
        """
        image = self.image_repository.find(name)
        if image is None:
            raise ImageNotFoundError(name)
        return image

    def find(self, name: str) -> Optional[Image]:
        return self.image_repository.find(name)

    def put(self, name: str, image: Image) -> None:
        self.image_repository.put(name, image)
        logger.debug("Stored %dx%d image as '%s'", image.width, image.height, name)

    def names(self) -> List[str]:
        return self.image_repository.names()

    def load(self, path: Union[str, Path], name: str) -> Image:
        """Load a single image from disk and store it under *name*."""
        image = self.image_repository.load(path)
        self.put(name, image)
        logger.info("Loaded %s as '%s' (%dx%d)", path, name, image.width, image.height)
        return image

    def save(self, name: str, path: Union[str, Path]) -> Path:
        """
        Business-level method to write the image stored under *name* to *path*.
        """
        written = self.image_repository.save(self.get(name), path)
        logger.info("Saved '%s' to %s", name, written)
        return written

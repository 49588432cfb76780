"""
Shared fixtures for the pixelworks test suite.
"""

import numpy as np
import pytest

from pixelworks.config import Settings
from pixelworks.models.image import Image
from pixelworks.pipeline.image_processor import ImageProcessor
from pixelworks.repositories.image_repository import ImageRepository

GREY_3X3 = [[100, 150, 200], [50, 75, 100], [25, 50, 75]]


@pytest.fixture
def settings():
    return Settings()


@pytest.fixture
def grey_image():
    """3x3 image whose channels all carry GREY_3X3."""
    return Image.from_grey_rows(GREY_3X3)


@pytest.fixture
def random_image():
    """Seeded 5x7 colour image."""
    rng = np.random.default_rng(42)
    return Image(rng.integers(0, 256, size=(5, 7, 3)))


@pytest.fixture
def repository(settings):
    return ImageRepository(settings)


@pytest.fixture
def processor(repository, settings):
    """A fresh session with its own image store."""
    return ImageProcessor(repository, settings)

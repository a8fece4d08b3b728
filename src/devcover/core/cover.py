"""Lazy access to the development cover image."""
from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image

from .errors import CoverImageError

logger = logging.getLogger(__name__)


class CoverImage:
    """The cover image, loaded on first use and cached until invalidated."""

    def __init__(self, path: Path) -> None:
        self._path = path
        self._image: Image.Image | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def is_loaded(self) -> bool:
        return self._image is not None

    @property
    def image(self) -> Image.Image:
        if self._image is None:
            self._image = self._load()
        return self._image

    def invalidate(self) -> None:
        self._image = None

    def _load(self) -> Image.Image:
        try:
            with Image.open(self._path) as source:
                image = source.convert("RGBA")
        except FileNotFoundError as exc:
            raise CoverImageError(self._path, "file not found") from exc
        except OSError as exc:
            raise CoverImageError(self._path, str(exc)) from exc
        logger.debug("Loaded cover image %s (%dx%d)", self._path, *image.size)
        return image

"""Exceptions raised by devcover."""
from __future__ import annotations

from pathlib import Path


class DevCoverError(Exception):
    """Base class for all devcover errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ProjectError(DevCoverError):
    """The project file or one of its icon references is unusable."""


class CoverImageError(DevCoverError):
    """The development cover image could not be loaded."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to load cover image '{path}': {reason}")
        self.path = path


class AssetConfigurationError(DevCoverError):
    """A freshly saved asset has no importer that could be configured."""

    def __init__(self, asset_path: Path) -> None:
        super().__init__(f"Failed to get texture importer for '{asset_path.as_posix()}'")
        self.asset_path = asset_path

"""Filesystem asset database for generated icon images.

Every imported asset gets a ``<file>.meta`` YAML sidecar holding its import
settings. An asset without a sidecar has no importer and cannot be
configured.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from pathlib import Path

import yaml
from PIL import Image

from .errors import AssetConfigurationError
from .models import ImportSettings
from .utils import ensure_directory, resolve_reference, to_reference

logger = logging.getLogger(__name__)

_META_SUFFIX = ".meta"
_IMPORTABLE_SUFFIXES = {".png"}


@dataclass(slots=True)
class TextureImporter:
    """Editable import settings of one asset."""

    asset_path: Path
    meta_path: Path
    settings: ImportSettings

    def save_and_reimport(self) -> None:
        payload = {"importer": "texture", **asdict(self.settings)}
        self.meta_path.write_text(yaml.safe_dump(payload, sort_keys=False))


class AssetDatabase:
    """Stores generated images under ``root / assets_dir``.

    Asset paths handed out and accepted by this class are relative to ``root``.
    """

    def __init__(self, root: Path, assets_dir: Path) -> None:
        self.root = root
        self.assets_dir = assets_dir

    def save_named_image(self, name: str, image: Image.Image) -> Path:
        """Write ``image`` as ``Combined.<name>.png`` and import it."""
        asset_path = self.assets_dir / f"Combined.{name}.png"
        target = self._absolute(asset_path)
        ensure_directory(target.parent)
        image.save(target, format="PNG")
        self.import_asset(asset_path)
        logger.info("Saved %s", asset_path.as_posix())
        return asset_path

    def import_asset(self, asset_path: Path) -> None:
        target = self._absolute(asset_path)
        if target.suffix.lower() not in _IMPORTABLE_SUFFIXES:
            logger.debug("No importer available for %s", asset_path.as_posix())
            return
        meta_path = self._meta_path(target)
        if not meta_path.exists():
            TextureImporter(asset_path, meta_path, ImportSettings()).save_and_reimport()

    def get_importer(self, asset_path: Path) -> TextureImporter | None:
        meta_path = self._meta_path(self._absolute(asset_path))
        if not meta_path.exists():
            return None
        data = yaml.safe_load(meta_path.read_text()) or {}
        defaults = ImportSettings()
        settings = ImportSettings(
            texture_type=str(data.get("texture_type", defaults.texture_type)),
            alpha_is_transparency=bool(data.get("alpha_is_transparency", defaults.alpha_is_transparency)),
            compression=str(data.get("compression", defaults.compression)),
        )
        return TextureImporter(asset_path, meta_path, settings)

    def configure_imported_asset(self, asset_path: Path, settings: ImportSettings) -> TextureImporter:
        importer = self.get_importer(asset_path)
        if importer is None:
            raise AssetConfigurationError(asset_path)
        importer.settings = ImportSettings(
            texture_type=settings.texture_type,
            alpha_is_transparency=settings.alpha_is_transparency,
            compression=settings.compression,
        )
        importer.save_and_reimport()
        return importer

    def load_image(self, asset_path: Path) -> Image.Image:
        image = Image.open(self._absolute(asset_path))
        image.load()
        return image

    def asset_path(self, image: Image.Image) -> Path | None:
        """Return the asset path ``image`` was loaded from, if it came from disk."""
        filename = getattr(image, "filename", "")
        if not filename:
            return None
        return Path(to_reference(Path(filename), self.root))

    def delete_asset(self, asset_path: Path) -> bool:
        target = self._absolute(asset_path)
        if not target.exists():
            logger.debug("Asset %s already removed", asset_path.as_posix())
            return False
        target.unlink()
        self._meta_path(target).unlink(missing_ok=True)
        logger.info("Deleted %s", asset_path.as_posix())
        return True

    def _absolute(self, asset_path: Path) -> Path:
        return resolve_reference(asset_path, self.root)

    @staticmethod
    def _meta_path(target: Path) -> Path:
        return target.with_name(target.name + _META_SUFFIX)

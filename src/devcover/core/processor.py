"""Overwrite icon slots with covered copies and restore them afterwards."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Sequence

from PIL import Image

from .assets import AssetDatabase
from .compositor import combine_with_cover
from .cover import CoverImage
from .icon_store import IconStore, ProjectIconStore
from .models import DEFAULT_SCOPE, UI_ICON_IMPORT_SETTINGS, IconSequence, IconSlotKey
from .utils import has_any_image, resolve_reference

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class IconTracking:
    """What one overwrite pass changed, kept until the matching revert."""

    original_default: IconSequence | None = None
    combined_default: IconSequence | None = None
    # kind -> per-slot image sequences, in slot order
    original_platform: Dict[str, List[IconSequence]] | None = None
    combined_platform: Dict[str, List[IconSequence]] | None = None

    @property
    def is_empty(self) -> bool:
        return self.combined_default is None and not self.combined_platform


class IconSetManager:
    """Covers every icon slot of a project and reverts exactly what it changed.

    Overwriting twice without reverting in between records the first pass's
    output as the "original"; a single revert then points the slots back at
    the first pass's files (rewritten in place by the second pass) and keeps
    them on disk. The true originals are not recovered.
    """

    def __init__(
        self,
        store: IconStore,
        assets: AssetDatabase,
        cover: CoverImage,
        build_target: str,
    ) -> None:
        self._store = store
        self._assets = assets
        self._cover = cover
        self._build_target = build_target
        self.tracking = IconTracking()

    @classmethod
    def for_project(cls, project_path: Path) -> "IconSetManager":
        """Build a manager over a project file and its asset directory."""
        store = ProjectIconStore.open(project_path)
        settings = store.document.settings
        return cls(
            store,
            AssetDatabase(store.root, settings.assets_dir),
            CoverImage(resolve_reference(settings.cover_path, store.root)),
            settings.build_target,
        )

    @property
    def store(self) -> IconStore:
        return self._store

    @property
    def build_target(self) -> str:
        return self._build_target

    @property
    def is_overwritten(self) -> bool:
        return not self.tracking.is_empty

    def run_overwrite(self) -> None:
        self.tracking = IconTracking()
        self.overwrite_default_icons()
        self.overwrite_platform_icons()

    def run_revert(self) -> None:
        self.revert_platform_icons()
        self.revert_default_icons()

    def overwrite_default_icons(self) -> None:
        icons = self._store.get_default_icons()
        self.tracking.original_default = None
        self.tracking.combined_default = None
        if not has_any_image(icons):
            logger.debug("No default icons to cover")
            return

        combined: IconSequence = [None] * len(icons)
        self.tracking.combined_default = combined
        self._combine_and_save(icons, IconSlotKey(DEFAULT_SCOPE), combined)
        self._store.set_default_icons(combined)
        self.tracking.original_default = icons
        logger.info("Covered %d default icon(s)", _count(combined))

    def overwrite_platform_icons(self) -> None:
        self.tracking.original_platform = {}
        self.tracking.combined_platform = {}
        for kind in self._store.get_supported_icon_kinds():
            slots = self._store.get_platform_icon_slots(kind)
            originals = [slot.get_images() for slot in slots]
            if not any(has_any_image(images) for images in originals):
                logger.debug("No %s icons to cover", kind)
                continue

            combined_slots: List[IconSequence] = []
            self.tracking.combined_platform[kind] = combined_slots
            many_slots = len(slots) > 1
            for index, (slot, images) in enumerate(zip(slots, originals)):
                key = IconSlotKey(self._build_target, kind, index if many_slots else None)
                combined: IconSequence = [None] * len(images)
                combined_slots.append(combined)
                self._combine_and_save(images, key, combined)
                slot.set_images(combined)

            self._store.set_platform_icon_slots(kind, slots)
            self.tracking.original_platform[kind] = originals
            logger.info(
                "Covered %d %s icon(s) for %s",
                sum(_count(images) for images in combined_slots),
                kind,
                self._build_target,
            )

    def revert_default_icons(self) -> None:
        tracking = self.tracking
        if tracking.combined_default is None:
            logger.debug("No default icons to revert")
            return

        originals = tracking.original_default
        self._delete_assets(tracking.combined_default, keep=originals or [])
        if originals is None:
            logger.warning("No original default icons were recorded; leaving them as they are")
        else:
            self._store.set_default_icons(originals)
            logger.info("Restored default icons")
        tracking.original_default = None
        tracking.combined_default = None

    def revert_platform_icons(self) -> None:
        tracking = self.tracking
        if tracking.original_platform is None or tracking.combined_platform is None:
            logger.debug("No platform icons to revert")
            return

        for kind, combined_slots in tracking.combined_platform.items():
            originals = tracking.original_platform.get(kind)
            slots = self._store.get_platform_icon_slots(kind) if originals is not None else []
            kept = [image for images in originals or [] for image in images]
            for images in combined_slots:
                self._delete_assets(images, keep=kept)

            if originals is None:
                logger.warning("No original %s icons were recorded; leaving the slots as they are", kind)
                continue

            for slot, images in zip(slots, originals):
                slot.set_images(images)
            self._store.set_platform_icon_slots(kind, slots)
            logger.info("Restored %s icons for %s", kind, self._build_target)

        tracking.original_platform = None
        tracking.combined_platform = None

    def _combine_and_save(
        self,
        icons: Sequence[Image.Image | None],
        key: IconSlotKey,
        combined: IconSequence,
    ) -> None:
        """Fill ``combined`` position by position as each covered asset is written.

        The caller registers ``combined`` in the tracking state first, so an
        asset that fails to configure is still known to the revert pass.
        """
        many_icons = len(icons) > 1
        for index, icon in enumerate(icons):
            if icon is None:
                continue
            name = key.icon_name(index if many_icons else None)
            covered = combine_with_cover(icon, self._cover.image)
            asset_path = self._assets.save_named_image(name, covered)
            combined[index] = self._assets.load_image(asset_path)
            self._assets.configure_imported_asset(asset_path, UI_ICON_IMPORT_SETTINGS)

    def _delete_assets(
        self,
        images: Sequence[Image.Image | None],
        keep: Sequence[Image.Image | None] = (),
    ) -> None:
        # An asset that is also one of the restored originals must stay on disk.
        kept_paths = {self._assets.asset_path(image) for image in keep if image is not None}
        for image in images:
            if image is None:
                continue
            asset_path = self._assets.asset_path(image)
            if asset_path is None:
                logger.warning("Generated icon has no asset path; nothing to delete")
                continue
            if asset_path in kept_paths:
                logger.info("Keeping %s; it is also a restored icon", asset_path.as_posix())
                continue
            self._assets.delete_asset(asset_path)


def _count(images: Sequence[Image.Image | None]) -> int:
    return sum(1 for image in images if image is not None)

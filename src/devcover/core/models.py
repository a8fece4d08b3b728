"""Data models shared by the devcover core modules."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple

from PIL import Image

# ``None`` marks an empty position in an icon sequence.
IconSequence = List[Optional[Image.Image]]

DEFAULT_SCOPE = ""
DEFAULT_BUILD_TARGET = "Standalone"
DEFAULT_COVER_PATH = Path("Assets/Editor/Images/Icons/CoverForDevelopment.png")
DEFAULT_ASSETS_DIR = Path("Assets/Editor/Images/Icons")

SUPPORTED_ICON_KINDS: Dict[str, Tuple[str, ...]] = {
    "standalone": (),
    "android": ("adaptive", "round", "legacy"),
    "ios": ("application", "spotlight", "settings", "notification", "marketing"),
    "tvos": ("app_icon_small", "app_icon_large", "top_shelf_image_wide", "top_shelf_image"),
}


@dataclass(slots=True, frozen=True)
class IconSlotKey:
    """Identifies one icon slot: default or platform scope, kind and slot position."""

    scope: str = DEFAULT_SCOPE
    variant_kind: str | None = None
    sub_index: int | None = None

    def icon_name(self, index: int | None = None) -> str:
        parts = ["Icon"]
        if self.scope:
            parts.append(self.scope)
        if self.variant_kind:
            parts.append(self.variant_kind)
        if self.sub_index is not None:
            parts.append(str(self.sub_index))
        if index is not None:
            parts.append(str(index))
        return ".".join(parts)


@dataclass(slots=True)
class ImportSettings:
    """Import configuration stored next to a generated asset."""

    texture_type: str = "default"
    alpha_is_transparency: bool = False
    compression: str = "compressed"


UI_ICON_IMPORT_SETTINGS = ImportSettings(
    texture_type="ui-icon",
    alpha_is_transparency=True,
    compression="none",
)


class PlatformIconSlot:
    """One size entry of a platform icon kind, holding one image per layer."""

    def __init__(
        self,
        kind: str,
        images: Sequence[Image.Image | None] = (),
        size: int | None = None,
    ) -> None:
        self.kind = kind
        self.size = size
        self._images: IconSequence = list(images)

    def get_images(self) -> IconSequence:
        return list(self._images)

    def set_images(self, images: Sequence[Image.Image | None]) -> None:
        self._images = list(images)

    def __repr__(self) -> str:
        return f"PlatformIconSlot(kind={self.kind!r}, size={self.size!r}, layers={len(self._images)})"


@dataclass(slots=True)
class ProjectSettings:
    """Meta information for a devcover project."""

    name: str
    build_target: str = DEFAULT_BUILD_TARGET
    cover_path: Path = DEFAULT_COVER_PATH
    assets_dir: Path = DEFAULT_ASSETS_DIR

    def supported_icon_kinds(self, configured: Sequence[str] = ()) -> List[str]:
        """Return icon kinds for the build target, falling back to configured ones."""
        known = SUPPORTED_ICON_KINDS.get(self.build_target.lower())
        if known is None:
            return list(configured)
        return list(known)


@dataclass(slots=True)
class SlotEntry:
    """File references of a single platform icon slot as written in the project file."""

    images: List[str | None] = field(default_factory=list)
    size: int | None = None


@dataclass(slots=True)
class ProjectDocument:
    """In-memory form of a project file."""

    settings: ProjectSettings
    default_icons: List[str | None] = field(default_factory=list)
    platforms: Dict[str, Dict[str, List[SlotEntry]]] = field(default_factory=dict)

    def platform_kinds(self, target: str) -> Dict[str, List[SlotEntry]]:
        return self.platforms.setdefault(target, {})

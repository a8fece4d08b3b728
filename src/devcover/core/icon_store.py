"""Icon slots of a project: the default icons and per-platform icon kinds."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Protocol, Sequence

from PIL import Image

from .errors import ProjectError
from .models import IconSequence, PlatformIconSlot, ProjectDocument, SlotEntry
from .project_io import load_project, save_project
from .utils import resolve_reference, to_reference

logger = logging.getLogger(__name__)


class SlotHandle(Protocol):
    """One platform icon slot; a sequence of images, one per layer."""

    def get_images(self) -> IconSequence: ...

    def set_images(self, images: Sequence[Image.Image | None]) -> None: ...


class IconStore(Protocol):
    """Where icon images are read from and written back to."""

    def get_default_icons(self) -> IconSequence: ...

    def set_default_icons(self, icons: Sequence[Image.Image | None]) -> None: ...

    def get_supported_icon_kinds(self) -> List[str]: ...

    def get_platform_icon_slots(self, kind: str) -> Sequence[SlotHandle]: ...

    def set_platform_icon_slots(self, kind: str, slots: Sequence[SlotHandle]) -> None: ...


class ProjectIconStore:
    """Icon store backed by a project file.

    Icons are referenced by file path; every ``set_*`` call rewrites the
    project file so the change survives the process.
    """

    def __init__(self, project_path: Path, document: ProjectDocument) -> None:
        self.project_path = project_path
        self.document = document

    @classmethod
    def open(cls, project_path: Path) -> "ProjectIconStore":
        return cls(project_path, load_project(project_path))

    @property
    def root(self) -> Path:
        return self.project_path.parent

    @property
    def build_target(self) -> str:
        return self.document.settings.build_target

    def get_default_icons(self) -> IconSequence:
        return [self._load_icon(reference) for reference in self.document.default_icons]

    def set_default_icons(self, icons: Sequence[Image.Image | None]) -> None:
        self.document.default_icons = [self._icon_reference(icon) for icon in icons]
        self._save()

    def get_supported_icon_kinds(self) -> List[str]:
        configured = self.document.platforms.get(self.build_target, {})
        return self.document.settings.supported_icon_kinds(list(configured))

    def get_platform_icon_slots(self, kind: str) -> List[PlatformIconSlot]:
        entries = self.document.platforms.get(self.build_target, {}).get(kind, [])
        return [
            PlatformIconSlot(
                kind,
                [self._load_icon(reference) for reference in entry.images],
                size=entry.size,
            )
            for entry in entries
        ]

    def set_platform_icon_slots(self, kind: str, slots: Sequence[SlotHandle]) -> None:
        kinds = self.document.platform_kinds(self.build_target)
        kinds[kind] = [
            SlotEntry(
                images=[self._icon_reference(image) for image in slot.get_images()],
                size=getattr(slot, "size", None),
            )
            for slot in slots
        ]
        self._save()

    def _load_icon(self, reference: str | None) -> Image.Image | None:
        if reference is None:
            return None
        path = resolve_reference(reference, self.root)
        if not path.exists():
            logger.warning("Icon file %s is missing; treating the slot as empty", reference)
            return None
        try:
            image = Image.open(path)
            image.load()
        except OSError as exc:
            raise ProjectError(f"Unable to read icon '{reference}': {exc}") from exc
        return image

    def _icon_reference(self, image: Image.Image | None) -> str | None:
        if image is None:
            return None
        filename = getattr(image, "filename", "")
        if not filename:
            raise ProjectError("Icon images must be saved to a file before they can be assigned")
        return to_reference(Path(filename), self.root)

    def _save(self) -> None:
        save_project(self.project_path, self.document)

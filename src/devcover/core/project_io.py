"""Helpers for reading and writing devcover project files."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import yaml

from .errors import ProjectError
from .models import (
    DEFAULT_ASSETS_DIR,
    DEFAULT_BUILD_TARGET,
    DEFAULT_COVER_PATH,
    ProjectDocument,
    ProjectSettings,
    SlotEntry,
)

_PROJECT_HEADER = "# Icon project managed by devcover\n"


def load_project(path: Path) -> ProjectDocument:
    """Load a project file from disk."""
    try:
        data = yaml.safe_load(path.read_text()) or {}
    except OSError as exc:
        raise ProjectError(f"Unable to read project file '{path}': {exc}") from exc
    except yaml.YAMLError as exc:
        raise ProjectError(f"Invalid project file '{path}': {exc}") from exc
    if not isinstance(data, dict):
        raise ProjectError(f"Project file '{path}' must contain a mapping")

    settings = ProjectSettings(
        name=str(data.get("name", path.stem)),
        build_target=str(data.get("build_target", DEFAULT_BUILD_TARGET)),
        cover_path=Path(data.get("cover", DEFAULT_COVER_PATH)),
        assets_dir=Path(data.get("assets_dir", DEFAULT_ASSETS_DIR)),
    )

    default_icons = [_reference(value) for value in data.get("default_icons") or []]

    platforms: Dict[str, Dict[str, List[SlotEntry]]] = {}
    for target, kinds in (data.get("platforms") or {}).items():
        if not isinstance(kinds, dict):
            raise ProjectError(f"Platform '{target}' in '{path}' must map icon kinds to slots")
        platforms[str(target)] = {
            str(kind): [_load_slot(payload) for payload in slots or []]
            for kind, slots in kinds.items()
        }

    return ProjectDocument(settings=settings, default_icons=default_icons, platforms=platforms)


def save_project(path: Path, document: ProjectDocument) -> None:
    """Persist the project as a YAML document."""
    settings = document.settings
    payload: Dict[str, Any] = {
        "name": settings.name,
        "build_target": settings.build_target,
        "cover": settings.cover_path.as_posix(),
        "assets_dir": settings.assets_dir.as_posix(),
        "default_icons": list(document.default_icons),
        "platforms": {
            target: {
                kind: [
                    {
                        **({"size": slot.size} if slot.size is not None else {}),
                        "images": list(slot.images),
                    }
                    for slot in slots
                ]
                for kind, slots in kinds.items()
            }
            for target, kinds in document.platforms.items()
        },
    }
    path.parent.mkdir(parents=True, exist_ok=True)
    yaml_text = yaml.safe_dump(payload, sort_keys=False)
    path.write_text(f"{_PROJECT_HEADER}{yaml_text}")


def _load_slot(payload: Any) -> SlotEntry:
    # A bare list is shorthand for a slot without a declared size.
    if isinstance(payload, list):
        return SlotEntry(images=[_reference(value) for value in payload])
    if isinstance(payload, dict):
        size = payload.get("size")
        return SlotEntry(
            images=[_reference(value) for value in payload.get("images") or []],
            size=int(size) if size is not None else None,
        )
    raise ProjectError(f"Invalid icon slot entry: {payload!r}")


def _reference(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)

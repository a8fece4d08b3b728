"""Utility helpers used across the devcover core modules."""
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from PIL import Image


def ensure_directory(path: Path) -> None:
    """Create the directory (and parents) if it does not already exist."""
    path.mkdir(parents=True, exist_ok=True)


def to_channel_byte(value: float) -> int:
    """Quantize a normalized channel value to 0..255, clamping out-of-range input."""
    return int(round(min(1.0, max(0.0, value)) * 255.0))


def has_any_image(images: Iterable[Optional[Image.Image]]) -> bool:
    return any(image is not None for image in images)


def to_reference(path: Path, root: Path) -> str:
    """Return ``path`` relative to ``root`` when possible, as a POSIX string."""
    try:
        return path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return path.resolve().as_posix()


def resolve_reference(reference: str | Path, root: Path) -> Path:
    path = Path(reference).expanduser()
    return path if path.is_absolute() else root / path

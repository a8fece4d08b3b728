"""Shared fixtures: a small project with default and Android icons on disk."""
from pathlib import Path

import pytest

from helpers import PROJECT_YAML, write_cover, write_image


@pytest.fixture
def project(tmp_path: Path) -> Path:
    icons = tmp_path / "Assets" / "Icons"
    write_image(icons / "app.png", 64, (20, 120, 220, 255))
    write_image(icons / "app_small.png", 32, (200, 200, 40, 180))
    write_image(icons / "background.png", 48, (255, 255, 255, 255))
    write_image(icons / "foreground.png", 48, (0, 200, 0, 90))
    write_cover(tmp_path / "Assets" / "Editor" / "Images" / "Icons" / "CoverForDevelopment.png")

    path = tmp_path / "devcover.yaml"
    path.write_text(PROJECT_YAML)
    return path

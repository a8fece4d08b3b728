"""Image and project helpers shared by the tests."""
from pathlib import Path

from PIL import Image

PROJECT_YAML = """\
name: Demo
build_target: Android
cover: Assets/Editor/Images/Icons/CoverForDevelopment.png
assets_dir: Assets/Editor/Images/Icons
default_icons:
  - Assets/Icons/app.png
  - null
  - Assets/Icons/app_small.png
platforms:
  Android:
    adaptive:
      - size: 432
        images: [Assets/Icons/background.png, Assets/Icons/foreground.png]
      - size: 324
        images: [Assets/Icons/background.png, null]
    round:
      - [Assets/Icons/app.png]
    legacy: []
  iOS:
    application:
      - [Assets/Icons/app.png]
"""


def write_image(path: Path, size: int, color: tuple) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.new("RGBA", (size, size), color).save(path)


def write_cover(path: Path, size: int = 128) -> None:
    """Write a cover that is opaque red in its center half and transparent elsewhere."""
    cover = Image.new("RGBA", (size, size), (0, 0, 0, 0))
    quarter = size // 4
    cover.paste((255, 0, 0, 255), (quarter, quarter, size - quarter, size - quarter))
    path.parent.mkdir(parents=True, exist_ok=True)
    cover.save(path)


def pixels(image: Image.Image | None) -> tuple | None:
    if image is None:
        return None
    return image.size, image.convert("RGBA").tobytes()

"""Tests for the command-line interface."""
import sys
from pathlib import Path

from PIL import Image

from devcover.cli import main
from devcover.core.project_io import load_project
from helpers import write_cover, write_image


def test_combine_command_writes_covered_image(tmp_path: Path) -> None:
    source = tmp_path / "icon.png"
    cover = tmp_path / "cover.png"
    output = tmp_path / "out" / "covered.png"
    write_image(source, 32, (10, 20, 30, 255))
    write_cover(cover, 64)

    exit_code = main(["combine", str(source), "--cover", str(cover), "-o", str(output)])

    assert exit_code == 0
    with Image.open(output) as result:
        assert result.size == (32, 32)
        assert result.getpixel((16, 16)) == (255, 0, 0, 255)
        assert result.getpixel((1, 1)) == (10, 20, 30, 255)


def test_combine_command_reports_missing_cover(tmp_path: Path, capsys) -> None:
    source = tmp_path / "icon.png"
    write_image(source, 8, (0, 0, 0, 255))

    exit_code = main(["combine", str(source), "--cover", str(tmp_path / "nope.png"), "-o", str(tmp_path / "x.png")])

    assert exit_code == 1
    assert "nope.png" in capsys.readouterr().err


def test_build_command_restores_icons(project: Path) -> None:
    marker = project.parent / "built.txt"
    script = (
        "import pathlib, sys; "
        f"pathlib.Path({str(marker)!r}).write_text(pathlib.Path({str(project)!r}).read_text())"
    )

    exit_code = main(["build", str(project), "--", sys.executable, "-c", script])

    assert exit_code == 0
    assert "Combined.Icon.0.png" in marker.read_text()
    assert load_project(project).default_icons[0] == "Assets/Icons/app.png"


def test_build_command_propagates_failure_and_still_reverts(project: Path) -> None:
    exit_code = main(["build", str(project), "--", sys.executable, "-c", "raise SystemExit(3)"])

    assert exit_code == 3
    assert load_project(project).default_icons[0] == "Assets/Icons/app.png"

"""Tests for project I/O helpers."""
from pathlib import Path

import pytest
import yaml

from devcover.core.errors import ProjectError
from devcover.core.models import ProjectDocument, ProjectSettings, SlotEntry
from devcover.core.project_io import load_project, save_project


def test_load_project_reads_settings_and_slots(project: Path) -> None:
    document = load_project(project)

    assert document.settings.name == "Demo"
    assert document.settings.build_target == "Android"
    assert document.settings.cover_path == Path("Assets/Editor/Images/Icons/CoverForDevelopment.png")
    assert document.default_icons == ["Assets/Icons/app.png", None, "Assets/Icons/app_small.png"]
    adaptive = document.platforms["Android"]["adaptive"]
    assert [slot.size for slot in adaptive] == [432, 324]
    assert adaptive[1].images == ["Assets/Icons/background.png", None]
    assert document.platforms["Android"]["round"][0].size is None
    assert document.platforms["Android"]["legacy"] == []


def test_load_project_applies_defaults(tmp_path: Path) -> None:
    path = tmp_path / "minimal.yaml"
    path.write_text("default_icons: [icon.png]\n")

    document = load_project(path)

    assert document.settings.name == "minimal"
    assert document.settings.build_target == "Standalone"
    assert document.settings.assets_dir == Path("Assets/Editor/Images/Icons")
    assert document.platforms == {}


def test_save_and_load_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "project.yaml"
    document = ProjectDocument(
        settings=ProjectSettings(name="Round Trip", build_target="iOS", assets_dir=Path("Generated")),
        default_icons=["a.png", None],
        platforms={"iOS": {"application": [SlotEntry(images=["b.png"], size=180), SlotEntry(images=[None])]}},
    )

    save_project(path, document)
    loaded = load_project(path)

    assert path.read_text().startswith("# Icon project managed by devcover")
    assert loaded.settings == document.settings
    assert loaded.default_icons == ["a.png", None]
    slots = loaded.platforms["iOS"]["application"]
    assert slots[0].images == ["b.png"]
    assert slots[0].size == 180
    assert slots[1].images == [None]
    assert "size" not in yaml.safe_load(path.read_text())["platforms"]["iOS"]["application"][1]


def test_load_project_rejects_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("- just\n- a list\n")

    with pytest.raises(ProjectError):
        load_project(path)


def test_load_project_reports_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ProjectError):
        load_project(tmp_path / "missing.yaml")
